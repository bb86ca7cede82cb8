from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml


class AppConfig(Protocol):
    def __getitem__(self, key: str) -> object: ...


_DEFAULTS: dict[str, object] = {
    "api": {
        "base_url": "https://mlb25.theshow.com",
        "timeout_seconds": 15.0,
        "connect_timeout_seconds": 5.0,
    },
    "history": {
        "concurrency": 14,
        "retry_waits": [0.12, 0.32],
    },
    "aggregate": {
        "concurrency": 12,
        "limit": 200,
    },
    "items": {
        "ttl_seconds": 3 * 60 * 60,
        "concurrency": 12,
    },
}


def create_config(
    yaml_path: str = "insights.yaml",
    env_prefix: str = "INSIGHTS",
    defaults: dict[str, object] | None = None,
    *,
    base_url: str | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.

    Args:
        yaml_path: Path to the YAML config file.
        env_prefix: Prefix for environment variables.
        defaults: Default configuration values.
        base_url: Override the API base URL.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if base_url is not None:
        layers.insert(0, config_from_dict({"api": {"base_url": base_url}}))

    return ConfigurationSet(*layers)


@dataclass(frozen=True)
class InsightsSettings:
    base_url: str
    timeout_seconds: float
    connect_timeout_seconds: float
    history_concurrency: int
    history_retry_waits: tuple[float, ...]
    aggregate_concurrency: int
    aggregate_limit: int
    items_ttl_seconds: float
    items_concurrency: int


def _as_waits(value: object) -> tuple[float, ...]:
    # env vars arrive as "0.12,0.32"
    if isinstance(value, str):
        return tuple(float(part) for part in value.split(",") if part.strip())
    if isinstance(value, list | tuple):
        return tuple(float(part) for part in value)
    return (float(str(value)),)


def load_settings(config: AppConfig | None = None) -> InsightsSettings:
    """Read typed settings out of a layered config (env values arrive as strings)."""
    if config is None:
        config = create_config()
    return InsightsSettings(
        base_url=str(config["api.base_url"]).rstrip("/"),
        timeout_seconds=float(str(config["api.timeout_seconds"])),
        connect_timeout_seconds=float(str(config["api.connect_timeout_seconds"])),
        history_concurrency=int(str(config["history.concurrency"])),
        history_retry_waits=_as_waits(config["history.retry_waits"]),
        aggregate_concurrency=int(str(config["aggregate.concurrency"])),
        aggregate_limit=int(str(config["aggregate.limit"])),
        items_ttl_seconds=float(str(config["items.ttl_seconds"])),
        items_concurrency=int(str(config["items.concurrency"])),
    )
