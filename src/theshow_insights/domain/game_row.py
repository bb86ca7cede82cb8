from dataclasses import dataclass
from typing import Literal, TypeAlias

Side: TypeAlias = Literal["home", "away"]


@dataclass(frozen=True)
class TeamLine:
    name: str
    runs: int
    hits: int
    errors: int
    result: str


@dataclass(frozen=True)
class GameRow:
    id: str
    date_iso: str | None
    mode: str
    home: TeamLine
    away: TeamLine
    you_are: Side | None
    is_cpu: bool
    is_online: bool
    you_runs: int | None
    opp_runs: int | None
    pitcher_info: str = ""
    display_date: str = ""
