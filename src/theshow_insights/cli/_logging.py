import logging
import sys

_THIRD_PARTY_LOGGERS = ("httpx", "httpcore", "asyncio")
_PACKAGE_LOGGER = "theshow_insights"

_DATE_FORMAT = "%H:%M:%S"
_FORMAT = "%(asctime)s %(levelname)-8s %(message)s"
# verbose output names the emitting module so fetch, parse and fold lines can be told apart
_VERBOSE_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(*, verbose: bool = False) -> None:
    """Configure root logger for CLI output on stderr.

    Verbose mode turns on DEBUG for this package (per-game parse counts,
    cache hits) and lets third-party HTTP chatter through.
    """
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _FORMAT, datefmt=_DATE_FORMAT))
    root.addHandler(handler)

    logging.getLogger(_PACKAGE_LOGGER).setLevel(logging.DEBUG if verbose else logging.INFO)
    for name in _THIRD_PARTY_LOGGERS:
        logging.getLogger(name).setLevel(logging.NOTSET if verbose else logging.WARNING)
