"""Pagination — pure offset/limit window arithmetic for list queries.

Invariants:
    - Raw page/limit values never raise: unparsable input degrades to the default
    - page >= 1 after clamping; offset = (page - 1) * limit is therefore >= 0
    - 1 <= limit <= max_limit after clamping
    - offset <= MAX_OFFSET: page is capped so the window fits a signed 64-bit
      OFFSET; any page past that bound is empty anyway

Design Decisions:
    - Non-positive limit falls back to the default (not to 1): a zero-size page
      is never what a caller asked for
    - bool rejected explicitly: True is an int in Python but not a page number
"""

from dataclasses import dataclass


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_OFFSET = 2**63 - 1


@dataclass(frozen=True)
class PageWindow:
    """Resolved pagination window."""
    page: int
    limit: int

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


def parse_int(raw: str | int | None, default: int) -> int:
    """Parse an integer query value, falling back to default on any bad input."""
    if raw is None or isinstance(raw, bool):
        return default
    if isinstance(raw, int):
        return raw
    try:
        return int(str(raw).strip())
    except ValueError:
        return default


def resolve_window(
    page: str | int | None,
    limit: str | int | None,
    default_page: int = DEFAULT_PAGE,
    default_limit: int = DEFAULT_LIMIT,
    max_limit: int = MAX_LIMIT,
) -> PageWindow:
    """Resolve raw page/limit into a bounded window. Pure, never raises."""
    page_num = max(parse_int(page, default_page), 1)
    size = parse_int(limit, default_limit)
    if size < 1:
        size = default_limit
    size = min(size, max_limit)
    page_num = min(page_num, MAX_OFFSET // size + 1)
    return PageWindow(page=page_num, limit=size)
