"""Small normalizers shared by the history and game-log parsers."""

import re
from datetime import UTC, datetime

_COLOR_CODE_RE = re.compile(r"\^c\d+\^")
_BOLD_CODE_RE = re.compile(r"\^b\d+\^")
_NEWLINE_CODE_RE = re.compile(r"\^n\^")
_END_CODE_RE = re.compile(r"\^e\^")
_WORD_CODE_RE = re.compile(r"\^\w+\^")
_ANY_CODE_RE = re.compile(r"\^[^^]*\^")
_NON_NUMERIC_RE = re.compile(r"[^\d.-]")
_DISPLAY_DATE_RE = re.compile(r"^(\d{2})/(\d{2})/(\d{4})\s+(\d{2}):(\d{2}):(\d{2})")
_ROSTER_PREFIX_RE = re.compile(r"^(?:[ab]-|\d-)\s*", re.IGNORECASE)
_DECISION_TAG_RE = re.compile(r"\s*\((W|L|S).*?\)\s*$", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


def strip_codes(text: str) -> str:
    """Remove caret-delimited color/style codes; ``^n^`` becomes a newline."""
    text = _COLOR_CODE_RE.sub("", text)
    text = _BOLD_CODE_RE.sub("", text)
    text = _NEWLINE_CODE_RE.sub("\n", text)
    text = _END_CODE_RE.sub("", text)
    text = _WORD_CODE_RE.sub("", text)
    return text.strip()


def normalize_name(value: object) -> str:
    text = strip_codes(str(value or ""))
    return _ANY_CODE_RE.sub("", text).strip().lower()


def parse_int_safe(value: object) -> int:
    """Parse a loosely formatted number, returning 0 when nothing usable remains."""
    cleaned = _NON_NUMERIC_RE.sub("", "" if value is None else str(value))
    if not cleaned:
        return 0
    try:
        return int(float(cleaned))
    except ValueError:
        return 0


def to_iso(display_date: str | None) -> str | None:
    """Convert ``MM/DD/YYYY HH:MM:SS`` (UTC) into an ISO-8601 string with milliseconds."""
    if not display_date:
        return None
    match = _DISPLAY_DATE_RE.match(display_date)
    if not match:
        return None
    month, day, year, hour, minute, second = (int(g) for g in match.groups())
    try:
        parsed = datetime(year, month, day, hour, minute, second, tzinfo=UTC)
    except ValueError:
        return None
    return parsed.strftime("%Y-%m-%dT%H:%M:%S.000Z")


def ip_to_outs(ip: object) -> int:
    """Convert baseball innings notation (``"6.2"`` = 6 and 2/3) into outs."""
    text = str(ip if ip is not None else "").strip()
    if not text:
        return 0
    whole, _, frac = text.partition(".")
    innings = parse_int_safe(whole)
    thirds = {"1": 1, "2": 2}.get(frac, 0)
    return innings * 3 + thirds


def clean_batter_name(raw: object) -> str:
    name = _ROSTER_PREFIX_RE.sub("", str(raw or "")).strip()
    name = name.split(",")[0].strip()
    return _WHITESPACE_RE.sub(" ", name)


def clean_pitcher_name(raw: object) -> str:
    return _DECISION_TAG_RE.sub("", str(raw or "")).strip()


def last_name(name: str) -> str:
    parts = name.strip().split()
    return parts[-1].lower() if parts else ""
