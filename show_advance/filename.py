"""Base names for exported advance sheets."""
import re
from datetime import date
from typing import Optional

FILE_PREFIX = "Show-Advance"
DEFAULT_NAME = "Event"

_WHITESPACE_RE = re.compile(r"\s+")
_UNSAFE_RE = re.compile(r"[^A-Za-z0-9_.-]")
_PATH_SEP_RE = re.compile(r"[\\/]")


def _safe_name(event_name) -> str:
    raw = (event_name or "").strip() or DEFAULT_NAME
    name = _WHITESPACE_RE.sub("_", raw)
    name = _UNSAFE_RE.sub("", name)
    return name or DEFAULT_NAME


def derive_file_name(event_name, event_date, today: Optional[date] = None) -> str:
    """
    Build "Show-Advance_{name}_{date}".

    The name is trimmed, whitespace runs become underscores, and anything
    outside [A-Za-z0-9_.-] is dropped. The date is only trimmed; a blank
    date falls back to today.
    """
    date_part = (event_date or "").strip()
    if not date_part:
        date_part = (today or date.today()).strftime("%Y-%m-%d")
    return f"{FILE_PREFIX}_{_safe_name(event_name)}_{date_part}"


def pdf_file_name(event_name, event_date, today: Optional[date] = None) -> str:
    return f"{derive_file_name(event_name, event_date, today=today)}.pdf"


def path_component(base: str) -> str:
    """Single on-disk file name for a derived base ("05/01/2024" -> "05-01-2024")."""
    return _PATH_SEP_RE.sub("-", base)
