from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from core.config import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS, STATUS_ALL
from core.data import COLUMN_ATTRS, OrderStatus

ASCENDING = "ascending"
DESCENDING = "descending"


@dataclass(frozen=True)
class ViewState:
    search_term: str = ""
    status_filter: str = STATUS_ALL
    sort_key: Optional[str] = None
    sort_direction: str = ASCENDING
    page_size: int = DEFAULT_PAGE_SIZE
    current_page: int = 1

    @property
    def descending(self) -> bool:
        return self.sort_direction == DESCENDING


def _as_int(value: object, default: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except Exception:
        return default


def normalize_view_state(
    raw: dict,
    *,
    sort_keys: Optional[Iterable[str]] = None,
    page_size_options: Iterable[int] = PAGE_SIZE_OPTIONS,
) -> ViewState:
    """Build a ViewState from loose input; unknown values fall back to defaults."""
    sort_keys = set(sort_keys if sort_keys is not None else COLUMN_ATTRS)
    page_size_options = tuple(page_size_options)

    search_term = str(raw.get("search_term") or "")

    status_filter = str(raw.get("status_filter") or STATUS_ALL)
    if status_filter != STATUS_ALL and status_filter not in OrderStatus.values():
        status_filter = STATUS_ALL

    sort_key = raw.get("sort_key") or None
    if sort_key is not None and sort_key not in sort_keys:
        sort_key = None

    sort_direction = raw.get("sort_direction") or ASCENDING
    if sort_direction not in (ASCENDING, DESCENDING):
        sort_direction = ASCENDING

    page_size = _as_int(raw.get("page_size"), DEFAULT_PAGE_SIZE)
    if page_size not in page_size_options:
        page_size = DEFAULT_PAGE_SIZE if DEFAULT_PAGE_SIZE in page_size_options else page_size_options[0]

    current_page = max(1, _as_int(raw.get("current_page"), 1))

    return ViewState(
        search_term=search_term,
        status_filter=status_filter,
        sort_key=sort_key,
        sort_direction=sort_direction,
        page_size=page_size,
        current_page=current_page,
    )
