import asyncio
from pathlib import Path
from typing import Annotated

import typer

from theshow_insights.cache.items_cache import ItemsIndexCache
from theshow_insights.cli._logging import configure_logging
from theshow_insights.cli._output import print_aggregate, print_error, print_game, print_history, print_json
from theshow_insights.config import InsightsSettings, create_config, load_settings
from theshow_insights.domain.aggregate import AggregateResponse
from theshow_insights.domain.enums import GameMode, Platform, Subset
from theshow_insights.domain.game_log import GameLogDetail
from theshow_insights.domain.game_row import Side
from theshow_insights.domain.insights import InsightsResponse
from theshow_insights.domain.splits import SplitFilters
from theshow_insights.exceptions import InsightsError
from theshow_insights.ingest.items_source import ItemsSource
from theshow_insights.ingest.theshow_client import TheShowClient
from theshow_insights.services.insights import aggregate_insights, build_insights, fetch_game_log
from theshow_insights.services.splits import apply_split_filters

app = typer.Typer(name="theshow-insights", help="MLB The Show gameplay insights")

MAX_LIMIT = 1000
MAX_CONCURRENCY = 24


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable DEBUG logging")] = False,
    config: Annotated[Path, typer.Option("--config", help="YAML settings file")] = Path("insights.yaml"),
    base_url: Annotated[str | None, typer.Option("--base-url", help="Override the API base URL")] = None,
) -> None:
    """MLB The Show gameplay insights."""
    configure_logging(verbose=verbose)
    ctx.obj = load_settings(create_config(yaml_path=str(config), base_url=base_url))
    if ctx.invoked_subcommand is None:
        raise typer.Exit()


_UsernameArg = Annotated[str, typer.Argument(help="The Show username")]
_PlatformOpt = Annotated[Platform, typer.Option("--platform", help="Account platform")]
_ModeOpt = Annotated[GameMode, typer.Option("--mode", help="Game mode filter for the history")]
_JsonOpt = Annotated[bool, typer.Option("--json", help="Emit JSON instead of tables")]


def _settings(ctx: typer.Context) -> InsightsSettings:
    return ctx.obj if isinstance(ctx.obj, InsightsSettings) else load_settings()


async def _history(settings: InsightsSettings, username: str, platform: Platform, mode: GameMode) -> InsightsResponse:
    async with TheShowClient(settings=settings) as client:
        return await build_insights(client, username, platform, mode)


async def _game(
    settings: InsightsSettings,
    username: str,
    game_id: str,
    you_are: str | None,
    home: str,
    away: str,
) -> GameLogDetail:
    side: Side | None = "home" if you_are == "home" else "away" if you_are == "away" else None
    async with TheShowClient(settings=settings) as client:
        return await fetch_game_log(client, username, game_id, side, home, away)


async def _aggregate(
    settings: InsightsSettings,
    username: str,
    platform: Platform,
    mode: GameMode,
    subset: Subset,
    limit: int,
    concurrency: int,
    include_pas: bool,
) -> AggregateResponse:
    async with TheShowClient(settings=settings) as client:
        base = await build_insights(client, username, platform, mode)
        items = None
        if include_pas:
            cache = ItemsIndexCache(ItemsSource(client).load_index, settings.items_ttl_seconds)
            items = await cache.get()
        return await aggregate_insights(
            base, client, username, subset, limit, concurrency, items=items, include_pas=include_pas
        )


@app.command()
def history(
    ctx: typer.Context,
    username: _UsernameArg,
    platform: _PlatformOpt = Platform.PSN,
    mode: _ModeOpt = GameMode.ARENA,
    as_json: _JsonOpt = False,
) -> None:
    """Fetch and summarize a user's full game history."""
    try:
        response = asyncio.run(_history(_settings(ctx), username, platform, mode))
    except InsightsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    if as_json:
        print_json(response)
    else:
        print_history(response)


@app.command()
def game(
    ctx: typer.Context,
    username: _UsernameArg,
    game_id: Annotated[str, typer.Argument(help="Game id from the history")],
    you_are: Annotated[str | None, typer.Option("--you-are", help="Side you played: home or away")] = None,
    home: Annotated[str, typer.Option("--home", help="Home team name")] = "",
    away: Annotated[str, typer.Option("--away", help="Away team name")] = "",
    as_json: _JsonOpt = False,
) -> None:
    """Fetch and parse a single game log."""
    if you_are not in (None, "home", "away"):
        print_error(f"--you-are must be 'home' or 'away', got {you_are!r}")
        raise typer.Exit(code=1)
    try:
        detail = asyncio.run(_game(_settings(ctx), username, game_id, you_are, home, away))
    except InsightsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    if as_json:
        print_json(detail)
    else:
        print_game(detail)


@app.command()
def aggregate(
    ctx: typer.Context,
    username: _UsernameArg,
    platform: _PlatformOpt = Platform.PSN,
    mode: _ModeOpt = GameMode.ARENA,
    subset: Annotated[Subset, typer.Option("--subset", help="Which games to fold")] = Subset.ONLINE,
    limit: Annotated[
        int | None, typer.Option("--limit", min=1, max=MAX_LIMIT, clamp=True, help="Most recent games to fold")
    ] = None,
    concurrency: Annotated[
        int | None, typer.Option("--concurrency", min=1, max=MAX_CONCURRENCY, clamp=True, help="Parallel game fetches")
    ] = None,
    include_pas: Annotated[
        bool, typer.Option("--include-pas/--no-include-pas", help="Annotate plate appearances for splits")
    ] = False,
    p_throw: Annotated[str, typer.Option("--p-throw", help="Pitcher hand: all, L or R")] = "all",
    b_bat: Annotated[str, typer.Option("--b-bat", help="Batter side: all, L or R")] = "all",
    inning: Annotated[str, typer.Option("--inning", help="Inning number or 10+")] = "all",
    outs: Annotated[str, typer.Option("--outs", help="Outs before the plate appearance")] = "all",
    difficulty: Annotated[str, typer.Option("--difficulty", help="Hitting difficulty label")] = "all",
    pitcher_profile: Annotated[str, typer.Option("--pitcher-profile", help="all, outlier or lowvelo")] = "all",
    hitter_height: Annotated[str, typer.Option("--hitter-height", help="all, tall or small")] = "all",
    as_json: _JsonOpt = False,
) -> None:
    """Fold a subset of games into team, player and situational stats."""
    settings = _settings(ctx)
    limit = limit if limit is not None else min(settings.aggregate_limit, MAX_LIMIT)
    concurrency = concurrency if concurrency is not None else min(settings.aggregate_concurrency, MAX_CONCURRENCY)
    filters = SplitFilters(
        p_throw=p_throw,  # type: ignore[arg-type]
        b_bat=b_bat,  # type: ignore[arg-type]
        inning=inning,
        outs=outs,
        difficulty=difficulty,
        pitcher_profile=pitcher_profile,  # type: ignore[arg-type]
        hitter_height=hitter_height,  # type: ignore[arg-type]
    )
    filtered = filters != SplitFilters()
    try:
        result = asyncio.run(
            _aggregate(settings, username, platform, mode, subset, limit, concurrency, include_pas or filtered)
        )
    except InsightsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    if filtered:
        result = apply_split_filters(result, filters)
    if as_json:
        print_json(result)
    else:
        print_aggregate(result)
