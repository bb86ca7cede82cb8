from dataclasses import dataclass, field
from typing import Literal, TypeAlias

BatHand: TypeAlias = Literal["L", "R", "S"]
ThrowHand: TypeAlias = Literal["L", "R"]


@dataclass(frozen=True)
class HitterAttributes:
    name: str
    bat: BatHand
    height_in: int
    ovr: int


@dataclass(frozen=True)
class PitcherAttributes:
    name: str
    throw: ThrowHand
    height_in: int
    max_velo: float
    outlier: bool
    ovr: int


@dataclass(frozen=True)
class ItemsIndex:
    """Player attributes keyed by lowercase last name."""

    hitters_by_last: dict[str, HitterAttributes] = field(default_factory=dict)
    pitchers_by_last: dict[str, PitcherAttributes] = field(default_factory=dict)
