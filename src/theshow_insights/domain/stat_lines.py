"""Counting records and finalized stat lines.

Counting records only hold additive integer fields so folding games in any
order yields identical totals. Rate stats live on the frozen ``*Line``
types, produced once by the finalizers in ``services.derived_stats``.
"""

from dataclasses import dataclass, field


@dataclass(slots=True)
class BattingCounts:
    ab: int = 0
    r: int = 0
    h: int = 0
    singles: int = 0
    doubles: int = 0
    triples: int = 0
    hr: int = 0
    rbi: int = 0
    bb: int = 0
    so: int = 0
    hbp: int = 0
    sf: int = 0
    sh: int = 0
    sb: int = 0
    cs: int = 0
    gidp: int = 0


@dataclass(slots=True)
class PitchingCounts:
    outs: int = 0
    h: int = 0
    r: int = 0
    er: int = 0
    bb: int = 0
    so: int = 0
    hr: int = 0
    opp_ab: int = 0


@dataclass(slots=True)
class HitterCounts:
    g: int = 0
    ab: int = 0
    h: int = 0
    doubles: int = 0
    triples: int = 0
    hr: int = 0
    bb: int = 0
    so: int = 0
    hbp: int = 0
    sf: int = 0
    sh: int = 0
    gidp: int = 0
    sb: int = 0
    cs: int = 0
    e: int = 0
    pb: int = 0


@dataclass(slots=True)
class PitcherCounts:
    g: int = 0
    outs: int = 0
    h: int = 0
    r: int = 0
    er: int = 0
    bb: int = 0
    so: int = 0
    hr: int = 0


@dataclass(slots=True)
class BallparkCounts:
    g: int = 0
    w: int = 0
    l: int = 0  # noqa: E741
    runs_for: int = 0
    runs_against: int = 0
    hr_for: int = 0
    hr_against: int = 0
    ab: int = 0
    h: int = 0
    bb: int = 0
    hbp: int = 0
    sf: int = 0
    tb: int = 0


@dataclass(frozen=True)
class BattingLine:
    ab: int
    r: int
    h: int
    singles: int
    doubles: int
    triples: int
    hr: int
    rbi: int
    bb: int
    so: int
    hbp: int
    sf: int
    sh: int
    sb: int
    cs: int
    gidp: int
    tb: int
    pa: int
    avg: float
    obp: float
    slg: float
    ops: float
    iso: float
    babip: float
    sb_pct: float
    k_pct: float
    bb_pct: float
    xbh_pct: float


@dataclass(frozen=True)
class PitchingLine:
    outs: int
    ip: float
    h: int
    r: int
    er: int
    bb: int
    so: int
    hr: int
    opp_ab: int
    whip: float
    era: float
    k9: float
    bb9: float
    hr9: float
    fip_raw: float
    opp_obp: float = 0.0
    opp_slg: float = 0.0
    opp_ops: float = 0.0


@dataclass(frozen=True)
class HitterLine:
    g: int
    ab: int
    h: int
    doubles: int
    triples: int
    hr: int
    bb: int
    so: int
    hbp: int
    sf: int
    sh: int
    gidp: int
    sb: int
    cs: int
    e: int
    pb: int
    tb: int
    avg: float
    obp: float
    slg: float
    ops: float
    sb_pct: float


@dataclass(frozen=True)
class PitcherLine:
    g: int
    outs: int
    ip: float
    h: int
    r: int
    er: int
    bb: int
    so: int
    hr: int
    era: float
    whip: float
    k9: float
    bb9: float
    hr9: float


@dataclass(frozen=True)
class BallparkRecord:
    g: int
    w: int
    l: int  # noqa: E741
    runs_for: int
    runs_against: int
    hr_for: int
    hr_against: int
    ops: float


@dataclass(frozen=True)
class TeamStats:
    games: int
    batting: BattingLine
    pitching: PitchingLine


@dataclass(frozen=True)
class AggInsights:
    games: int
    go_ahead_events: int
    comeback_wins: int
    perfect_contact_you: int
    perfect_contact_opp: int
    runs_by_inning_you: tuple[int, ...]
    runs_by_inning_opp: tuple[int, ...]
    k_pitch_you: dict[str, int]
    k_loc_you: dict[str, int]
    k_pitch_opp: dict[str, int]
    k_loc_opp: dict[str, int]
    swinging_k_you: int
    looking_k_you: int
    chase_k_you: int
    swinging_k_opp: int
    looking_k_opp: int
    chase_k_opp: int
    by_ballpark: dict[str, BallparkRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class PlayerBoards:
    hitters: dict[str, HitterLine] = field(default_factory=dict)
    pitchers: dict[str, PitcherLine] = field(default_factory=dict)
