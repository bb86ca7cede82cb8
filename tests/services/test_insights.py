import dataclasses
from typing import Any

import httpx
import pytest

from theshow_insights.domain.enums import GameMode, Platform, Subset
from theshow_insights.domain.items import ItemsIndex, PitcherAttributes
from theshow_insights.exceptions import GameLogFetchError, UnknownGameError
from theshow_insights.services.insights import aggregate_insights, build_insights, fetch_game_log


def _history_record(
    game_id: str, date: str, *, home: str = "jsmith99", away: str = "rival", mode: str = "ARENA"
) -> dict[str, Any]:
    return {
        "id": game_id,
        "game_mode": mode,
        "display_date": date,
        "home_name": home,
        "away_name": away,
        "home_full_name": "Yankees",
        "away_full_name": "Red Sox",
        "home_runs": "4",
        "away_runs": "2",
    }


def _game_payload(home_runs_line: str = "0,0,4,0,0,0,0,0,X") -> dict[str, Any]:
    text = (
        "Yankee Stadium^n^Inning 1^n^"
        "Red Sox batting. Gerrit Cole pitching. Rafael Devers struck out swinging on a slider.^n^"
        "Yankees batting. Chris Sale pitching. Aaron Judge homered to left."
    )
    home = {
        "r": home_runs_line,
        "147": {
            "batting_stats": [{"player_name": "Aaron Judge", "ab": "4", "h": "1", "hr": "1", "r": "4"}],
            "pitching_stats": [{"player_name": "Gerrit Cole", "ip": "9.0", "h": "2", "r": "2", "er": "2"}],
            "pitching_totals": {"ip": "9.0", "h": "2", "r": "2", "er": "2"},
        },
    }
    away = {
        "r": "0,2,0,0,0,0,0,0,0",
        "111": {
            "batting_stats": [{"player_name": "Rafael Devers", "ab": "4", "h": "2", "r": "2", "so": "1"}],
            "pitching_stats": [{"player_name": "Chris Sale", "ip": "8.0", "h": "1", "r": "4", "er": "4"}],
            "pitching_totals": {"ip": "8.0", "h": "1", "r": "4", "er": "4"},
        },
    }
    return {"game": [["game_log", text], ["box_score", [home, away]]]}


class FakeTheShow:
    def __init__(self, records: list[dict[str, Any]], failing_games: set[str] | None = None) -> None:
        self._records = records
        self._failing = failing_games or set()
        self.game_requests: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/apis/game_history.json":
            return httpx.Response(200, json={"page": 1, "total_pages": 1, "game_history": self._records})
        if request.url.path == "/apis/game_log.json":
            game_id = request.url.params["id"]
            self.game_requests.append(game_id)
            if game_id in self._failing:
                return httpx.Response(502)
            return httpx.Response(200, json=_game_payload())
        return httpx.Response(404)


def _records() -> list[dict[str, Any]]:
    return [
        _history_record("old", "01/01/2024 12:00:00"),
        _history_record("new", "02/01/2024 12:00:00"),
        _history_record("cpu", "03/01/2024 12:00:00", home="CPU", away="CPU"),
        _history_record("exh", "garbage", mode="EXHIBITION"),
    ]


class TestBuildInsights:
    async def test_rows_sorted_and_grouped(self, make_client: Any) -> None:
        client = make_client(FakeTheShow(_records()))
        response = await build_insights(client, "jsmith99", Platform.PSN, GameMode.ARENA)

        assert [r.id for r in response.game_log] == ["cpu", "new", "old", "exh"]
        assert response.groups.online == ("new", "old", "exh")
        assert response.groups.vs_cpu == ("cpu",)
        assert response.summary.total_games == 4
        assert response.summary.wins == 3
        assert response.user.platform == Platform.PSN
        assert (response.next.has_more, response.next.page, response.next.total_pages) == (False, 1, 1)


class TestFetchGameLog:
    async def test_single_game(self, make_client: Any) -> None:
        client = make_client(FakeTheShow([]))
        detail = await fetch_game_log(client, "jsmith99", "g1", "home", "Yankees", "Red Sox")
        assert [pa.result for pa in detail.parsed.plate_appearances.you] == ["HR"]
        assert detail.parsed.hr_allowed_by_opp_pitcher_ln == {"sale": 1}


class TestAggregateInsights:
    async def test_subset_and_limit(self, make_client: Any) -> None:
        fake = FakeTheShow(_records())
        client = make_client(fake)
        base = await build_insights(client, "jsmith99", Platform.PSN, GameMode.ARENA)

        result = await aggregate_insights(base, client, "jsmith99", Subset.ONLINE, limit=2)

        assert sorted(fake.game_requests) == ["new", "old"]
        assert result.scope.counted_games == 2
        assert result.scope.subset == Subset.ONLINE
        assert result.your_stats.batting.hr == 2
        assert result.your_insights.comeback_wins == 0
        assert result.vs_pitcher["Chris Sale"].hr == 2
        assert result.split_bundle is None

    async def test_split_bundle_with_items(self, make_client: Any) -> None:
        client = make_client(FakeTheShow(_records()))
        base = await build_insights(client, "jsmith99", Platform.PSN, GameMode.ARENA)
        items = ItemsIndex(pitchers_by_last={"sale": PitcherAttributes("Chris Sale", "L", 78, 97.0, False, 95)})

        result = await aggregate_insights(
            base, client, "jsmith99", Subset.VS_CPU, items=items, include_pas=True
        )

        assert result.split_bundle is not None
        [game] = result.split_bundle.games
        assert game.id == "cpu"
        assert game.you[0].p_throw == "L"

    async def test_single_failure_aborts(self, make_client: Any) -> None:
        client = make_client(FakeTheShow(_records(), failing_games={"old"}))
        base = await build_insights(client, "jsmith99", Platform.PSN, GameMode.ARENA)
        with pytest.raises(GameLogFetchError, match="old"):
            await aggregate_insights(base, client, "jsmith99", Subset.ALL)

    async def test_unknown_id(self, make_client: Any) -> None:
        client = make_client(FakeTheShow(_records()))
        base = await build_insights(client, "jsmith99", Platform.PSN, GameMode.ARENA)
        broken = dataclasses.replace(base, groups=dataclasses.replace(base.groups, all=("ghost",)))
        with pytest.raises(UnknownGameError):
            await aggregate_insights(broken, client, "jsmith99", Subset.ALL)
