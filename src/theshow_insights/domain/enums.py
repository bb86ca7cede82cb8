from enum import StrEnum


class Platform(StrEnum):
    PSN = "psn"
    XBL = "xbl"
    MLBTS = "mlbts"
    NSW = "nsw"


class GameMode(StrEnum):
    ALL = "all"
    ARENA = "arena"
    EXHIBITION = "exhibition"


class Subset(StrEnum):
    ALL = "all"
    ONLINE = "online"
    VS_CPU = "vsCPU"
    ARENA = "arena"
    EXHIBITION = "exhibition"
