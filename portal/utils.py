"""Utility helper functions for the Portal."""

import math
import re
from typing import List, Optional, Sequence, Tuple, TypeVar

from portal.exceptions import InvalidNameError

T = TypeVar("T")

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")
_SCRIPT_NAME = re.compile(r"[A-Za-z0-9_][A-Za-z0-9._-]{0,127}")


def create_slug(title: str) -> str:
    """
    Build a URL slug from a title.

    Args:
        title: Movie title (e.g., "The Matrix (1999)")

    Returns:
        Lower-case slug with runs of other characters collapsed to '-'
        (e.g., "the-matrix-1999")
    """
    return _SLUG_INVALID.sub("-", (title or "").lower()).strip("-")


def parse_lines(text: Optional[str]) -> List[str]:
    """
    Split newline-separated form text into a list, dropping blank lines.
    """
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_page(raw: Optional[str]) -> int:
    """
    Parse a 1-based page number; anything unparsable or below 1 becomes 1.
    """
    try:
        page = int(raw) if raw is not None else 1
    except (TypeError, ValueError):
        return 1
    return page if page >= 1 else 1


def paginate(items: Sequence[T], page: int, per_page: int) -> Tuple[List[T], int]:
    """
    Slice one page out of a sequence.

    Returns:
        Tuple of (items_for_page, total_pages)
    """
    total_pages = math.ceil(len(items) / per_page) if per_page > 0 else 0
    start = (page - 1) * per_page
    return list(items[start:start + per_page]), total_pages


def validate_script_name(name: str) -> str:
    """
    Raises:
        InvalidNameError: If name is not 1-128 chars of [A-Za-z0-9._-] starting with a letter, digit or underscore
    """
    if not name or not _SCRIPT_NAME.fullmatch(name):
        raise InvalidNameError(f"Invalid script name: {name!r}")
    return name
