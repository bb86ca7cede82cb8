from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal, TypeAlias

if TYPE_CHECKING:
    from collections.abc import Iterable

PAResult: TypeAlias = Literal["1B", "2B", "3B", "HR", "BB", "SO", "HBP", "SF", "SH", "OUT", "DP", "ROE"]
Offense: TypeAlias = Literal["you", "opp"]


@dataclass(frozen=True)
class PlateAppearance:
    inning: int
    outs_before: int
    batter: str
    pitcher: str
    result: PAResult
    offense: Offense = "you"


@dataclass(frozen=True)
class StrikeoutBreakdown:
    """Strikeouts split by pitch type, location and manner."""

    by_pitch: dict[str, int] = field(default_factory=dict)
    by_location: dict[str, int] = field(default_factory=dict)
    swinging: int = 0
    looking: int = 0
    chase: int = 0

    @classmethod
    def merged(cls, parts: Iterable[StrikeoutBreakdown]) -> StrikeoutBreakdown:
        by_pitch: Counter[str] = Counter()
        by_location: Counter[str] = Counter()
        swinging = looking = chase = 0
        for part in parts:
            by_pitch.update(part.by_pitch)
            by_location.update(part.by_location)
            swinging += part.swinging
            looking += part.looking
            chase += part.chase
        return cls(dict(by_pitch), dict(by_location), swinging, looking, chase)

    @property
    def total(self) -> int:
        return self.swinging + self.looking


@dataclass(frozen=True)
class HalfInning:
    plate_appearances: tuple[PlateAppearance, ...]
    strikeouts: StrikeoutBreakdown
    hr_by_pitcher_last_name: dict[str, int]
    outs: int


@dataclass(frozen=True)
class BattingSummary:
    strikeouts_by_pitch: dict[str, int]
    strikeouts_by_location: dict[str, int]
    homers: int
    double_plays: int


@dataclass(frozen=True)
class PitchingSummary:
    strikeouts_by_pitch: dict[str, int]
    strikeouts_by_location: dict[str, int]
    homers_allowed: int


@dataclass(frozen=True)
class PlateAppearances:
    you: tuple[PlateAppearance, ...] = ()
    opp: tuple[PlateAppearance, ...] = ()


@dataclass(frozen=True)
class ParsedGameLog:
    id: str
    you_team: str
    opp_team: str
    ballpark: str
    hitting_difficulty: str | None
    pitching_difficulty: str | None
    runs_by_inning_you: tuple[int, ...]
    runs_by_inning_opp: tuple[int, ...]
    go_ahead_events: int
    perfect_contact_hits_you: int
    perfect_contact_hits_opp: int
    strikeouts_you: StrikeoutBreakdown
    strikeouts_opp: StrikeoutBreakdown
    batting: BattingSummary
    pitching: PitchingSummary
    plate_appearances: PlateAppearances
    hr_allowed_by_your_pitcher_ln: dict[str, int]
    hr_allowed_by_opp_pitcher_ln: dict[str, int]


@dataclass(frozen=True)
class BattingTotals:
    ab: int = 0
    r: int = 0
    h: int = 0
    rbi: int = 0
    bb: int = 0
    so: int = 0
    hbp: int = 0
    sf: int = 0
    sh: int = 0
    sb: int = 0
    cs: int = 0
    e: int = 0
    pb: int = 0


@dataclass(frozen=True)
class BoxBatter:
    player_name: str
    ab: int = 0
    r: int = 0
    h: int = 0
    rbi: int = 0
    bb: int = 0
    so: int = 0
    doubles: int = 0
    triples: int = 0
    hr: int = 0
    hbp: int = 0
    sf: int = 0
    sh: int = 0
    gidp: int = 0
    sb: int = 0
    cs: int = 0
    e: int = 0
    pb: int = 0


@dataclass(frozen=True)
class PitchingTotals:
    outs: int = 0
    h: int = 0
    r: int = 0
    er: int = 0
    bb: int = 0
    so: int = 0

    @property
    def ip(self) -> float:
        return self.outs / 3


@dataclass(frozen=True)
class BoxPitcher:
    player_name: str
    outs: int = 0
    h: int = 0
    r: int = 0
    er: int = 0
    bb: int = 0
    so: int = 0
    hr: int = 0

    @property
    def ip(self) -> float:
        return self.outs / 3


@dataclass(frozen=True)
class BoxSide:
    batting_totals: BattingTotals = field(default_factory=BattingTotals)
    batting_stats: tuple[BoxBatter, ...] = ()
    pitching_totals: PitchingTotals = field(default_factory=PitchingTotals)
    pitching_stats: tuple[BoxPitcher, ...] = ()

    @property
    def doubles(self) -> int:
        return sum(b.doubles for b in self.batting_stats)

    @property
    def triples(self) -> int:
        return sum(b.triples for b in self.batting_stats)

    @property
    def home_runs(self) -> int:
        return sum(b.hr for b in self.batting_stats)

    @property
    def gidp(self) -> int:
        return sum(b.gidp for b in self.batting_stats)

    @property
    def singles(self) -> int:
        # box totals only carry hits, so singles are whatever is left over
        return max(0, self.batting_totals.h - self.doubles - self.triples - self.home_runs)

    @property
    def total_bases(self) -> int:
        return self.singles + 2 * self.doubles + 3 * self.triples + 4 * self.home_runs


@dataclass(frozen=True)
class GameMeta:
    id: str
    ballpark: str
    hitting_difficulty: str | None
    pitching_difficulty: str | None


@dataclass(frozen=True)
class GameLogDetail:
    meta: GameMeta
    you: BoxSide
    opp: BoxSide
    parsed: ParsedGameLog
