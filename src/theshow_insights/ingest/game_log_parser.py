"""Best-effort parser for The Show's free-text game logs.

Every heuristic below is a small pure function with a fixed fallback value
(``""``, ``0``, ``"unknown"``, ``None``). The upstream text format is not
stable, so a sentence that does not match is skipped rather than failing
the game.
"""

from __future__ import annotations

import logging
import re
from collections import Counter
from typing import TYPE_CHECKING, Any

import httpx

from theshow_insights.domain.game_log import (
    BattingSummary,
    GameLogDetail,
    GameMeta,
    HalfInning,
    Offense,
    PAResult,
    ParsedGameLog,
    PitchingSummary,
    PlateAppearance,
    PlateAppearances,
    StrikeoutBreakdown,
)
from theshow_insights.exceptions import GameLogFetchError
from theshow_insights.ingest.box_score import build_box_side, parse_runs_by_inning, team_block
from theshow_insights.ingest.text_utils import (
    clean_batter_name,
    clean_pitcher_name,
    last_name,
    normalize_name,
    strip_codes,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Sequence

    from theshow_insights.domain.game_row import Side
    from theshow_insights.ingest.theshow_client import TheShowClient

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"
UNKNOWN_BALLPARK = "Unknown"
MAX_TRACKED_OUTS = 2

_BALLPARK_KEYWORD_RE = re.compile(r"\b(Field|Park|Stadium|Arena)\b", re.IGNORECASE)
_WEATHER_RE = re.compile(r"^Weather:", re.IGNORECASE)
_TRAILING_PAREN_RE = re.compile(r"\s*\(.*?\)\s*$")
_DIFFICULTY_RE = re.compile(
    r"Hitting Difficulty is ([A-Za-z\s-]+)\.\s*Pitching Difficulty is ([A-Za-z\s-]+)\.", re.IGNORECASE
)
_HALF_INNING_RE = re.compile(
    r"(?:^|\n)([^\n.]+?) batting\.\s*(.*?)(?=\n[^.\n]+ batting\.|\nInning |\nGame Log Legend|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_SENTENCE_SPLIT_RE = re.compile(r"\.\s+")
_PITCHER_CHANGE_RE = re.compile(r"([A-Za-z.'\-\s]+?) pitching\.?$", re.IGNORECASE)
_BATTER_RE = re.compile(
    r"^\s*(.+?)\s+(?:was|grounded|struck|flied|popped|lined|walked|singled|doubled|tripled|homered|"
    r"hit|reached|called|sacrificed|bunted|fouled|out)\b",
    re.IGNORECASE,
)
_GO_AHEAD_RE = re.compile(r"\* Go-Ahead Play")
_PERFECT_CONTACT_RE = re.compile(r"Perfect Contact Hits", re.IGNORECASE)
_PERFECT_CONTACT_STOP_RE = re.compile(r"^(Weather:|Hitting Difficulty|Pitching Difficulty|20\d{2})", re.IGNORECASE)

_STRIKEOUT_RE = re.compile(r"struck out|called out on strikes", re.IGNORECASE)
_LOOKING_RE = re.compile(r"called out on strikes|struck out looking", re.IGNORECASE)
_CHASE_RE = re.compile(r"chasing", re.IGNORECASE)
_PITCH_TYPE_RE = re.compile(
    r"\b(fastball|sinker|slider|splitter|curveball|curve|cutter|changeup|knuckle|sweeper|slurve)\b", re.IGNORECASE
)
_LOCATION_RE = re.compile(
    r"\b(high and away|low and away|high and inside|low and inside|high and outside|low and outside|"
    r"high and in|low and in|high|low|inside|outside)\b",
    re.IGNORECASE,
)
_GENERIC_OUT = r"lined to|lined out|flied out|popped out|grounded out|batted out|reached on error"
_GENERIC_OUT_RE = re.compile(_GENERIC_OUT, re.IGNORECASE)
# generic outs and strikeouts both advance the outs counter
_OUT_RE = re.compile(rf"{_GENERIC_OUT}|{_STRIKEOUT_RE.pattern}", re.IGNORECASE)
_DOUBLE_PLAY_RE = re.compile(r"double play", re.IGNORECASE)

# First match wins.
_RESULT_PATTERNS: tuple[tuple[PAResult, re.Pattern[str]], ...] = (
    ("HR", re.compile(r"homered\b", re.IGNORECASE)),
    ("3B", re.compile(r"tripled\b", re.IGNORECASE)),
    ("2B", re.compile(r"doubled\b", re.IGNORECASE)),
    ("DP", re.compile(r"grounded into a double play", re.IGNORECASE)),
    ("BB", re.compile(r"walked\b", re.IGNORECASE)),
    ("HBP", re.compile(r"hit by pitch", re.IGNORECASE)),
    ("SF", re.compile(r"sacrifice fly|sf\)", re.IGNORECASE)),
    ("SH", re.compile(r"sacrifice bunt|sh\)", re.IGNORECASE)),
    ("1B", re.compile(r"singled\b|grounded to .* for a single", re.IGNORECASE)),
    ("SO", _STRIKEOUT_RE),
    ("OUT", _GENERIC_OUT_RE),
)


def pick_ballpark(text: str) -> str:
    """Prefer a line naming a stadium; else the line right above ``Weather:``."""
    lines = [line.strip() for line in text.split("\n") if line.strip()]
    for line in lines:
        if _BALLPARK_KEYWORD_RE.search(line):
            return _TRAILING_PAREN_RE.sub("", line)
    for idx, line in enumerate(lines):
        if idx > 0 and _WEATHER_RE.match(line):
            return _TRAILING_PAREN_RE.sub("", lines[idx - 1])
    return UNKNOWN_BALLPARK


def parse_difficulty(text: str) -> tuple[str | None, str | None]:
    """Return ``(hitting, pitching)`` difficulty labels, or ``(None, None)``."""
    match = _DIFFICULTY_RE.search(text)
    if not match:
        return None, None
    return match.group(1).strip(), match.group(2).strip()


def split_half_innings(text: str, you_team: str, opp_team: str) -> tuple[list[str], list[str]]:
    """Cut the log into ``"<Team> batting."`` segments, grouped by offense."""
    you_key = normalize_name(you_team)
    opp_key = normalize_name(opp_team)
    you_segments: list[str] = []
    opp_segments: list[str] = []
    for match in _HALF_INNING_RE.finditer(text):
        team = normalize_name(match.group(1).strip())
        segment = match.group(2).strip()
        if team == you_key:
            you_segments.append(segment)
        elif team == opp_key:
            opp_segments.append(segment)
    return you_segments, opp_segments


def parse_pitcher_change(line: str) -> str | None:
    match = _PITCHER_CHANGE_RE.search(line.strip())
    if not match:
        return None
    return clean_pitcher_name(match.group(1)) or None


def extract_batter(line: str) -> str:
    """Leading name before the narrative verb, ``""`` if none is found."""
    head, sep, _ = line.partition(":")
    match = _BATTER_RE.match(head)
    if match:
        return clean_batter_name(match.group(1))
    if sep:
        return clean_batter_name(head)
    return ""


def classify_result(line: str) -> PAResult | None:
    for result, pattern in _RESULT_PATTERNS:
        if pattern.search(line):
            return result
    return None


def strikeout_pitch(line: str) -> str:
    match = _PITCH_TYPE_RE.search(line)
    return match.group(0).lower() if match else UNKNOWN


def strikeout_location(line: str) -> str:
    match = _LOCATION_RE.search(line)
    return match.group(0).lower() if match else UNKNOWN


def is_strikeout(line: str) -> bool:
    return bool(_STRIKEOUT_RE.search(line))


class _StrikeoutTally:
    def __init__(self) -> None:
        self.by_pitch: Counter[str] = Counter()
        self.by_location: Counter[str] = Counter()
        self.swinging = 0
        self.looking = 0
        self.chase = 0

    def record(self, line: str) -> None:
        self.by_pitch[strikeout_pitch(line)] += 1
        self.by_location[strikeout_location(line)] += 1
        if _LOOKING_RE.search(line):
            self.looking += 1
        else:
            self.swinging += 1
        if _CHASE_RE.search(line):
            self.chase += 1

    def freeze(self) -> StrikeoutBreakdown:
        return StrikeoutBreakdown(dict(self.by_pitch), dict(self.by_location), self.swinging, self.looking, self.chase)


def parse_half_inning(segment: str) -> HalfInning:
    """Parse one half-inning's narrative into plate appearances.

    Outs are only tracked on lines where both a batter and the current
    pitcher are known, and never exceed two.
    """
    pas: list[PlateAppearance] = []
    outs = 0
    pitcher = ""
    strikeouts = _StrikeoutTally()
    hr_by_pitcher: Counter[str] = Counter()

    for line in _SENTENCE_SPLIT_RE.split(segment):
        new_pitcher = parse_pitcher_change(line)
        if new_pitcher is not None:
            pitcher = new_pitcher
            continue

        batter = extract_batter(line)
        if not batter or not pitcher:
            if is_strikeout(line):
                strikeouts.record(line)
            continue

        result = classify_result(line)
        if result is not None:
            pas.append(PlateAppearance(inning=0, outs_before=outs, batter=batter, pitcher=pitcher, result=result))
            if result == "HR":
                hr_by_pitcher[last_name(pitcher)] += 1

        if _OUT_RE.search(line):
            outs = min(MAX_TRACKED_OUTS, outs + 1)
        if _DOUBLE_PLAY_RE.search(line):
            outs = MAX_TRACKED_OUTS

        if is_strikeout(line):
            strikeouts.record(line)

    return HalfInning(
        plate_appearances=tuple(pas),
        strikeouts=strikeouts.freeze(),
        hr_by_pitcher_last_name=dict(hr_by_pitcher),
        outs=outs,
    )


def count_go_ahead_events(text: str) -> int:
    return len(_GO_AHEAD_RE.findall(text))


def count_perfect_contact(text: str, you_batters: set[str], opp_batters: set[str]) -> tuple[int, int]:
    """Count names in the "Perfect Contact Hits" section by roster membership."""
    lines = text.split("\n")
    start = next((i for i, line in enumerate(lines) if _PERFECT_CONTACT_RE.search(line)), None)
    if start is None:
        return 0, 0

    you = opp = 0
    for line in lines[start + 1 :]:
        if not line.strip() or _PERFECT_CONTACT_STOP_RE.match(line):
            break
        name = clean_batter_name(line.split(":")[0].strip())
        if not name:
            continue
        if name in you_batters:
            you += 1
        elif name in opp_batters:
            opp += 1
    return you, opp


def _with_offense(halves: Sequence[HalfInning], offense: Offense) -> tuple[PlateAppearance, ...]:
    out: list[PlateAppearance] = []
    for inning, half in enumerate(halves, start=1):
        for pa in half.plate_appearances:
            out.append(
                PlateAppearance(
                    inning=inning,
                    outs_before=pa.outs_before,
                    batter=pa.batter,
                    pitcher=pa.pitcher,
                    result=pa.result,
                    offense=offense,
                )
            )
    return tuple(out)


def _merge_counts(maps: Iterable[dict[str, int]]) -> dict[str, int]:
    total: Counter[str] = Counter()
    for m in maps:
        total.update(m)
    return dict(total)


def _section(payload: object, name: str) -> Any:
    game = payload.get("game") if isinstance(payload, dict) else None
    if not isinstance(game, list):
        return None
    for entry in game:
        if isinstance(entry, list | tuple) and len(entry) > 1 and entry[0] == name:
            return entry[1]
    return None


def parse_game_log(
    payload: object,
    game_id: str,
    you_are: Side | None,
    home_team: str,
    away_team: str,
) -> GameLogDetail:
    """Turn a decoded ``game_log.json`` payload into structured game data.

    When the user's side is unknown the home team is treated as the user's.
    """
    you_home = you_are != "away"
    you_team, opp_team = (home_team, away_team) if you_home else (away_team, home_team)

    raw_log = _section(payload, "game_log")
    text = strip_codes(raw_log if isinstance(raw_log, str) else "")
    box = _section(payload, "box_score")
    home_raw = box[0] if isinstance(box, list) and len(box) > 0 else None
    away_raw = box[1] if isinstance(box, list) and len(box) > 1 else None

    home_side = build_box_side(team_block(home_raw))
    away_side = build_box_side(team_block(away_raw))
    you_side, opp_side = (home_side, away_side) if you_home else (away_side, home_side)

    home_runs = parse_runs_by_inning(home_raw.get("r") if isinstance(home_raw, dict) else None)
    away_runs = parse_runs_by_inning(away_raw.get("r") if isinstance(away_raw, dict) else None)
    runs_you, runs_opp = (home_runs, away_runs) if you_home else (away_runs, home_runs)

    ballpark = pick_ballpark(text)
    hitting_difficulty, pitching_difficulty = parse_difficulty(text)

    you_segments, opp_segments = split_half_innings(text, you_team, opp_team)
    you_halves = [parse_half_inning(s) for s in you_segments]
    opp_halves = [parse_half_inning(s) for s in opp_segments]

    perfect_you, perfect_opp = count_perfect_contact(
        text,
        {b.player_name for b in you_side.batting_stats},
        {b.player_name for b in opp_side.batting_stats},
    )

    strikeouts_you = StrikeoutBreakdown.merged(h.strikeouts for h in you_halves)
    strikeouts_opp = StrikeoutBreakdown.merged(h.strikeouts for h in opp_halves)

    parsed = ParsedGameLog(
        id=game_id,
        you_team=you_team,
        opp_team=opp_team,
        ballpark=ballpark,
        hitting_difficulty=hitting_difficulty,
        pitching_difficulty=pitching_difficulty,
        runs_by_inning_you=runs_you,
        runs_by_inning_opp=runs_opp,
        go_ahead_events=count_go_ahead_events(text),
        perfect_contact_hits_you=perfect_you,
        perfect_contact_hits_opp=perfect_opp,
        strikeouts_you=strikeouts_you,
        strikeouts_opp=strikeouts_opp,
        batting=BattingSummary(
            strikeouts_by_pitch=strikeouts_you.by_pitch,
            strikeouts_by_location=strikeouts_you.by_location,
            homers=you_side.home_runs,
            double_plays=you_side.gidp,
        ),
        pitching=PitchingSummary(
            strikeouts_by_pitch=strikeouts_opp.by_pitch,
            strikeouts_by_location=strikeouts_opp.by_location,
            homers_allowed=opp_side.home_runs,
        ),
        plate_appearances=PlateAppearances(
            you=_with_offense(you_halves, "you"),
            opp=_with_offense(opp_halves, "opp"),
        ),
        # opponents hit against your pitchers, and vice versa
        hr_allowed_by_your_pitcher_ln=_merge_counts(h.hr_by_pitcher_last_name for h in opp_halves),
        hr_allowed_by_opp_pitcher_ln=_merge_counts(h.hr_by_pitcher_last_name for h in you_halves),
    )
    meta = GameMeta(
        id=game_id,
        ballpark=ballpark,
        hitting_difficulty=hitting_difficulty,
        pitching_difficulty=pitching_difficulty,
    )
    return GameLogDetail(meta=meta, you=you_side, opp=opp_side, parsed=parsed)


async def fetch_game_log_detail(
    client: TheShowClient,
    username: str,
    game_id: str,
    you_are: Side | None,
    home_team: str,
    away_team: str,
) -> GameLogDetail:
    """Fetch and parse one game; HTTP and decode failures raise ``GameLogFetchError``."""
    try:
        payload = await client.get_game_log(username, game_id)
    except (httpx.TransportError, httpx.HTTPStatusError, ValueError) as e:
        raise GameLogFetchError(game_id, str(e)) from e
    detail = parse_game_log(payload, game_id, you_are, home_team, away_team)
    logger.debug(
        "Parsed game %s: %d/%d plate appearances",
        game_id,
        len(detail.parsed.plate_appearances.you),
        len(detail.parsed.plate_appearances.opp),
    )
    return detail
