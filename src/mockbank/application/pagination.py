"""Page/limit derivation for paginated transaction lists.

The navigation state (the query string of the page) is the source of
truth. The controller writes it only through explicit page and page-size
changes; clamping to the available page count is a read for display.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, MutableMapping

from mockbank.application.cache.keys import ResourceKey, transactions_key

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20
MAX_LIMIT = 100
PAGE_SIZE_OPTIONS = (10, 20, 50, 100)

PAGE_PARAM = "page"
LIMIT_PARAM = "limit"


@dataclass(frozen=True)
class PageParams:
    """Validated page request."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    def as_query(self) -> dict[str, int]:
        return {PAGE_PARAM: self.page, LIMIT_PARAM: self.limit}


def _parse_int(value: object) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(str(value).strip())
    except ValueError:
        return None


def derive(params: Mapping[str, object]) -> PageParams:
    """Read page and limit from raw navigation parameters.

    A missing or unreadable page becomes 1 and pages below 1 are raised
    to 1. A limit outside ``[1, MAX_LIMIT]`` falls back to the default.
    """
    page = _parse_int(params.get(PAGE_PARAM))
    page = DEFAULT_PAGE if page is None else max(DEFAULT_PAGE, page)

    limit = _parse_int(params.get(LIMIT_PARAM))
    if limit is None or not 1 <= limit <= MAX_LIMIT:
        limit = DEFAULT_LIMIT

    return PageParams(page=page, limit=limit)


class PaginationController:
    """Page navigation over a mutable string mapping."""

    def __init__(self, navigation_state: MutableMapping[str, str] | None = None):
        self._state = navigation_state if navigation_state is not None else {}

    @property
    def navigation_state(self) -> MutableMapping[str, str]:
        return self._state

    @property
    def params(self) -> PageParams:
        return derive(self._state)

    @property
    def page(self) -> int:
        return self.params.page

    @property
    def limit(self) -> int:
        return self.params.limit

    def set_page(self, page: int) -> PageParams:
        if page < DEFAULT_PAGE:
            msg = f"Page must be at least {DEFAULT_PAGE}, got {page}"
            raise ValueError(msg)
        self._state[PAGE_PARAM] = str(page)
        return self.params

    def set_limit(self, limit: int) -> PageParams:
        """Change the page size and go back to the first page."""
        if not 1 <= limit <= MAX_LIMIT:
            msg = f"Limit must be between 1 and {MAX_LIMIT}, got {limit}"
            raise ValueError(msg)
        self._state[LIMIT_PARAM] = str(limit)
        self._state[PAGE_PARAM] = str(DEFAULT_PAGE)
        return self.params

    def next_page(self) -> PageParams:
        return self.set_page(self.page + 1)

    def previous_page(self) -> PageParams:
        return self.set_page(max(DEFAULT_PAGE, self.page - 1))

    def display_page(self, page_count: int) -> int:
        """Requested page clamped to ``[1, page_count]``; state is untouched."""
        return max(DEFAULT_PAGE, min(self.page, page_count))

    def has_previous(self) -> bool:
        return self.page > DEFAULT_PAGE

    def has_next(self, page_count: int) -> bool:
        return self.page < page_count

    def key(self, account_id: str | None) -> ResourceKey:
        params = self.params
        return transactions_key(account_id, page=params.page, limit=params.limit)
