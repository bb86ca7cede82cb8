import dataclasses
import json
from typing import Any

from rich.console import Console
from rich.table import Table

from theshow_insights.domain.aggregate import AggregateResponse
from theshow_insights.domain.game_log import GameLogDetail
from theshow_insights.domain.insights import InsightsResponse
from theshow_insights.domain.stat_lines import BattingLine, PitcherLine, PitchingLine

console = Console(highlight=False)
err_console = Console(stderr=True, highlight=False)


def print_error(message: str) -> None:
    err_console.print(f"[red bold]Error:[/red bold] {message}")


def print_json(value: Any) -> None:
    """Dump a result dataclass as JSON on stdout, unstyled."""
    payload = dataclasses.asdict(value) if dataclasses.is_dataclass(value) and not isinstance(value, type) else value
    console.print_json(json.dumps(payload, default=str))


def _rate(value: float) -> str:
    return f"{value:.3f}".removeprefix("0") if 0 <= value < 1 else f"{value:.3f}"


def print_history(response: InsightsResponse, top: int = 25) -> None:
    s = response.summary
    console.print(
        f"[bold]{response.user.username}[/bold] [dim]({response.user.platform}, {response.user.mode})[/dim]: "
        f"{s.total_games} games, [green]{s.wins}W[/green]-[red]{s.losses}L[/red], run diff {s.run_diff:+d}"
    )
    console.print(
        f"  online {s.online_count}  vs CPU {s.cpu_count}  arena {s.arena_count}  exhibition {s.exhibition_count}"
    )
    if not response.game_log:
        console.print("No games found.")
        return
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Date")
    table.add_column("Id")
    table.add_column("Mode")
    table.add_column("Away")
    table.add_column("Home")
    table.add_column("Score", justify="right")
    table.add_column("You")
    for row in response.game_log[:top]:
        you = row.you_are or "?"
        table.add_row(
            row.display_date or "-",
            row.id,
            row.mode,
            row.away.name,
            row.home.name,
            f"{row.away.runs}-{row.home.runs}",
            you if row.is_online else f"{you} [dim](cpu)[/dim]",
        )
    console.print(table)


def print_game(detail: GameLogDetail) -> None:
    p = detail.parsed
    console.print(f"Game [bold]{p.id}[/bold]: {p.you_team} vs {p.opp_team} at {p.ballpark}")
    if p.hitting_difficulty or p.pitching_difficulty:
        console.print(f"  Difficulty: hitting {p.hitting_difficulty or '-'}, pitching {p.pitching_difficulty or '-'}")

    innings = max(len(p.runs_by_inning_you), len(p.runs_by_inning_opp))
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Team")
    for i in range(innings):
        table.add_column(str(i + 1), justify="right")
    table.add_column("R", justify="right")
    for name, runs in ((p.you_team, p.runs_by_inning_you), (p.opp_team, p.runs_by_inning_opp)):
        cells = [str(runs[i]) if i < len(runs) else "" for i in range(innings)]
        table.add_row(name, *cells, str(sum(runs)))
    console.print(table)

    console.print(
        f"  Plate appearances: {len(p.plate_appearances.you)} you / {len(p.plate_appearances.opp)} opp; "
        f"go-ahead plays: {p.go_ahead_events}; "
        f"perfect contact: {p.perfect_contact_hits_you}-{p.perfect_contact_hits_opp}"
    )
    console.print(
        f"  Strikeouts: you {p.strikeouts_you.total} ({p.strikeouts_you.looking} looking), "
        f"opp {p.strikeouts_opp.total} ({p.strikeouts_opp.looking} looking)"
    )


def _batting_row(label: str, b: BattingLine) -> list[str]:
    return [label, str(b.pa), str(b.ab), str(b.h), str(b.hr), str(b.bb), str(b.so)] + [
        _rate(v) for v in (b.avg, b.obp, b.slg, b.ops)
    ]


def _pitching_row(label: str, p: PitchingLine | PitcherLine) -> list[str]:
    return [label, f"{p.ip:.1f}", str(p.h), str(p.er), str(p.bb), str(p.so), str(p.hr)] + [
        f"{v:.2f}" for v in (p.era, p.whip, p.k9)
    ]


def _batting_table() -> Table:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column("Batting")
    for col in ("PA", "AB", "H", "HR", "BB", "SO", "AVG", "OBP", "SLG", "OPS"):
        table.add_column(col, justify="right")
    return table


def _pitching_table(title: str) -> Table:
    table = Table(show_edge=False, pad_edge=False)
    table.add_column(title)
    for col in ("IP", "H", "ER", "BB", "SO", "HR", "ERA", "WHIP", "K/9"):
        table.add_column(col, justify="right")
    return table


def print_aggregate(result: AggregateResponse, top: int = 10) -> None:
    scope = result.scope
    console.print(
        f"Aggregate: [bold]{scope.subset}[/bold] games, {scope.counted_games} counted [dim](limit {scope.limit})[/dim]"
    )

    batting = _batting_table()
    batting.add_row(*_batting_row("You", result.your_stats.batting))
    batting.add_row(*_batting_row("Opponents", result.opp_stats.batting))
    console.print(batting)

    pitching = _pitching_table("Pitching")
    pitching.add_row(*_pitching_row("You", result.your_stats.pitching))
    pitching.add_row(*_pitching_row("Opponents", result.opp_stats.pitching))
    console.print(pitching)
    console.print(f"  Opponent OPS allowed: {_rate(result.your_stats.pitching.opp_ops)}")

    ins = result.your_insights
    console.print(
        f"  Comeback wins: {ins.comeback_wins}  go-ahead plays: {ins.go_ahead_events}  "
        f"perfect contact: {ins.perfect_contact_you}-{ins.perfect_contact_opp}"
    )

    if ins.by_ballpark:
        parks = Table(show_edge=False, pad_edge=False)
        parks.add_column("Ballpark")
        for col in ("G", "W", "L", "RF", "RA", "HR", "HRA", "OPS"):
            parks.add_column(col, justify="right")
        for name, rec in ins.by_ballpark.items():
            parks.add_row(
                name,
                str(rec.g),
                str(rec.w),
                str(rec.l),
                str(rec.runs_for),
                str(rec.runs_against),
                str(rec.hr_for),
                str(rec.hr_against),
                _rate(rec.ops),
            )
        console.print(parks)

    hitters = sorted(result.by_players.hitters.items(), key=lambda kv: (-kv[1].ops, kv[0]))[:top]
    if hitters:
        table = Table(show_edge=False, pad_edge=False)
        table.add_column("Hitter")
        for col in ("G", "AB", "H", "HR", "AVG", "OPS"):
            table.add_column(col, justify="right")
        for name, h in hitters:
            table.add_row(name, str(h.g), str(h.ab), str(h.h), str(h.hr), _rate(h.avg), _rate(h.ops))
        console.print(table)

    pitchers = sorted(result.by_players.pitchers.items(), key=lambda kv: (-kv[1].outs, kv[0]))[:top]
    if pitchers:
        table = _pitching_table("Pitcher")
        for name, p in pitchers:
            table.add_row(*_pitching_row(name, p))
        console.print(table)
