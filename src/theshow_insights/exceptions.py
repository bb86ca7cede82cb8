class InsightsError(Exception):
    """Base class for errors raised by the insights engine."""


class HistoryFetchError(InsightsError):
    """Raised when a game-history page cannot be fetched."""

    def __init__(self, page: int, detail: str = "") -> None:
        self.page = page
        message = f"game_history page {page} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class GameLogFetchError(InsightsError):
    """Raised when a single game's log cannot be fetched or decoded."""

    def __init__(self, game_id: str, detail: str = "") -> None:
        self.game_id = game_id
        message = f"game_log {game_id} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ItemsFetchError(InsightsError):
    """Raised when a player-attribute catalog page cannot be fetched."""

    def __init__(self, page: int, detail: str = "") -> None:
        self.page = page
        message = f"items page {page} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class UnknownGameError(InsightsError):
    """Raised when an aggregation references a game id missing from the history."""

    def __init__(self, game_id: str) -> None:
        self.game_id = game_id
        super().__init__(f"game {game_id} is not in the fetched history")
