"""Order table engine.

Derives the visible page of the order list from the record set and the current
view state: status filter -> search filter -> stable sort -> page window.

Mutations validate their input at the boundary. A rejected call is logged,
leaves the engine untouched and returns False, so the presentation layer can
treat it as a no-op. Every mutation runs under `lock` (re-entrant), so callers
can also hold it to validate and mutate as one step.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from core.config import DEFAULT_PAGE_SIZE, PAGE_SIZE_OPTIONS, STATUS_ALL
from core.data import COLUMN_ATTRS, SEARCHABLE_FIELDS, OrderRecord, OrderStatus
from core.filters import ASCENDING, DESCENDING, ViewState, normalize_view_state

logger = logging.getLogger(__name__)

SELECT_SCOPE_ALL = "all"
SELECT_SCOPE_FILTERED = "filtered"

_RECORD_FIELDS = {f.name for f in fields(OrderRecord)}


class TableEngineError(ValueError):
    """Base class for rejected table operations."""


class InvalidEnumValue(TableEngineError):
    pass


class InvalidFieldKey(TableEngineError):
    pass


class InvalidPageSize(TableEngineError):
    pass


class RecordNotFound(TableEngineError):
    pass


@dataclass(frozen=True)
class VisiblePage:
    items: List[OrderRecord] = field(default_factory=list)
    current_page: int = 1
    total_pages: int = 1
    total_matching: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    def to_dict(self) -> Dict[str, Any]:
        return {
            "items": [r.to_dict() for r in self.items],
            "current_page": self.current_page,
            "total_pages": self.total_pages,
            "total_matching": self.total_matching,
            "page_size": self.page_size,
        }


def as_text(value: Any) -> str:
    """Text form used for searching: true/false for booleans, 82 rather than 82.0."""
    if isinstance(value, OrderStatus):
        return value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def matches_status(record: OrderRecord, status_filter: str) -> bool:
    return status_filter == STATUS_ALL or record.status.value == status_filter


def matches_search(record: OrderRecord, term: str, searchable_fields: Sequence[str]) -> bool:
    if not term:
        return True
    needle = term.lower()
    return any(needle in as_text(getattr(record, name)).lower() for name in searchable_fields)


def _sort_value(value: Any) -> Tuple[int, Any]:
    # numbers before text so mixed columns still compare
    if isinstance(value, (int, float)):
        return (0, value)
    return (1, as_text(value))


def total_pages_for(total_matching: int, page_size: int) -> int:
    return max(1, math.ceil(total_matching / page_size))


class OrderTableEngine:
    def __init__(
        self,
        records: Iterable[OrderRecord],
        *,
        searchable_fields: Sequence[str] = SEARCHABLE_FIELDS,
        columns: Optional[Dict[str, str]] = None,
        page_size_options: Sequence[int] = PAGE_SIZE_OPTIONS,
    ):
        self._records: Tuple[OrderRecord, ...] = tuple(records)
        self._index: Dict[str, int] = {}
        for i, record in enumerate(self._records):
            if record.key in self._index:
                raise ValueError(f"Duplicate record key: {record.key!r}")
            self._index[record.key] = i

        unknown = [name for name in searchable_fields if name not in _RECORD_FIELDS]
        if unknown:
            raise ValueError(f"Unknown searchable fields: {unknown}")
        self.searchable_fields: Tuple[str, ...] = tuple(searchable_fields)

        self.columns: Dict[str, str] = dict(columns if columns is not None else COLUMN_ATTRS)
        bad_columns = [attr for attr in self.columns.values() if attr not in _RECORD_FIELDS]
        if bad_columns:
            raise ValueError(f"Unknown column attributes: {bad_columns}")

        self.page_size_options: Tuple[int, ...] = tuple(page_size_options)
        if not self.page_size_options or any(int(n) < 1 for n in self.page_size_options):
            raise ValueError("page_size_options must contain positive integers")

        self._view = self._default_view()
        # serializes read-modify-write of _view and _records across API worker threads
        self.lock = threading.RLock()

    # ---------- state ----------
    @property
    def view(self) -> ViewState:
        return self._view

    @property
    def records(self) -> Tuple[OrderRecord, ...]:
        return self._records

    def _default_view(self) -> ViewState:
        page_size = DEFAULT_PAGE_SIZE if DEFAULT_PAGE_SIZE in self.page_size_options else self.page_size_options[0]
        return ViewState(page_size=page_size)

    def _reject(self, operation: str, exc: TableEngineError) -> bool:
        logger.warning("%s rejected: %s", operation, exc)
        return False

    # ---------- validation ----------
    def validate_status(self, status: Any) -> str:
        value = status.value if isinstance(status, OrderStatus) else status
        if value == STATUS_ALL or value in OrderStatus.values():
            return value
        raise InvalidEnumValue(f"Unknown status filter: {status!r}")

    def validate_sort_key(self, key: Any) -> str:
        if key in self.columns:
            return key
        raise InvalidFieldKey(f"Unknown sort key: {key!r}")

    def validate_page_size(self, page_size: Any) -> int:
        if isinstance(page_size, bool):
            raise InvalidPageSize(f"Invalid page size: {page_size!r}")
        try:
            n = int(page_size)
        except (TypeError, ValueError):
            raise InvalidPageSize(f"Invalid page size: {page_size!r}") from None
        if n not in self.page_size_options:
            raise InvalidPageSize(f"Page size {n} not in {list(self.page_size_options)}")
        return n

    def index_of(self, key: Any) -> int:
        try:
            return self._index[str(key)]
        except KeyError:
            raise RecordNotFound(f"No record with key {key!r}") from None

    # ---------- pipeline ----------
    def filtered_records(self, view: Optional[ViewState] = None) -> List[OrderRecord]:
        """Status filter, search filter and sort; the full sequence before paging."""
        view = view or self._view
        rows = [
            r
            for r in self._records
            if matches_status(r, view.status_filter) and matches_search(r, view.search_term, self.searchable_fields)
        ]
        if view.sort_key is not None:
            attr = self.columns[view.sort_key]
            # sorted() is stable for reverse=True as well
            rows = sorted(rows, key=lambda r: _sort_value(r.value(attr)), reverse=view.descending)
        return rows

    def total_pages(self, view: Optional[ViewState] = None) -> int:
        view = view or self._view
        return total_pages_for(len(self.filtered_records(view)), view.page_size)

    def get_visible_page(self) -> VisiblePage:
        view = self._view
        rows = self.filtered_records(view)
        total_pages = total_pages_for(len(rows), view.page_size)
        page = min(max(1, view.current_page), total_pages)
        start = (page - 1) * view.page_size
        return VisiblePage(
            items=rows[start : start + view.page_size],
            current_page=page,
            total_pages=total_pages,
            total_matching=len(rows),
            page_size=view.page_size,
        )

    # ---------- view mutations ----------
    def set_search_term(self, term: Optional[str]) -> bool:
        with self.lock:
            self._view = replace(self._view, search_term=str(term or ""), current_page=1)
        return True

    def set_status_filter(self, status: Any) -> bool:
        try:
            value = self.validate_status(status)
        except TableEngineError as exc:
            return self._reject("set_status_filter", exc)
        with self.lock:
            self._view = replace(self._view, status_filter=value, current_page=1)
        return True

    def set_sort(self, key: Any) -> bool:
        try:
            key = self.validate_sort_key(key)
        except TableEngineError as exc:
            return self._reject("set_sort", exc)
        with self.lock:
            view = self._view
            if key == view.sort_key:
                direction = ASCENDING if view.descending else DESCENDING
            else:
                direction = ASCENDING
            self._view = replace(view, sort_key=key, sort_direction=direction)
        return True

    def set_page_size(self, page_size: Any) -> bool:
        try:
            n = self.validate_page_size(page_size)
        except TableEngineError as exc:
            return self._reject("set_page_size", exc)
        with self.lock:
            view = replace(self._view, page_size=n)
            current_page = min(view.current_page, self.total_pages(view))
            self._view = replace(view, current_page=current_page)
        return True

    def set_page(self, page: Any) -> bool:
        if isinstance(page, bool):
            return self._reject("set_page", TableEngineError(f"Invalid page: {page!r}"))
        try:
            p = int(page)
        except (TypeError, ValueError):
            return self._reject("set_page", TableEngineError(f"Invalid page: {page!r}"))
        with self.lock:
            p = min(max(1, p), self.total_pages())
            self._view = replace(self._view, current_page=p)
        return True

    def next_page(self) -> bool:
        with self.lock:
            return self.set_page(self._view.current_page + 1)

    def previous_page(self) -> bool:
        with self.lock:
            return self.set_page(self._view.current_page - 1)

    def reset_view(self) -> None:
        with self.lock:
            self._view = self._default_view()

    def validate_view(self, raw: dict) -> None:
        """Raise on the first value in `raw` the engine would not accept; missing keys are fine."""
        if raw.get("status_filter") is not None:
            self.validate_status(raw["status_filter"])
        if raw.get("sort_key") is not None:
            self.validate_sort_key(raw["sort_key"])
        direction = raw.get("sort_direction")
        if direction is not None and direction not in (ASCENDING, DESCENDING):
            raise InvalidEnumValue(f"Unknown sort direction: {direction!r}")
        if raw.get("page_size") is not None:
            self.validate_page_size(raw["page_size"])
        page = raw.get("current_page")
        if page is not None:
            if isinstance(page, bool):
                raise TableEngineError(f"Invalid page: {page!r}")
            try:
                int(page)
            except (TypeError, ValueError):
                raise TableEngineError(f"Invalid page: {page!r}") from None

    def apply_view(self, raw: dict) -> bool:
        """Replace the whole view state at once, or leave it untouched if any value is invalid."""
        try:
            self.validate_view(raw)
        except TableEngineError as exc:
            return self._reject("apply_view", exc)
        view = normalize_view_state(raw, sort_keys=self.columns, page_size_options=self.page_size_options)
        with self.lock:
            self._view = replace(view, current_page=min(view.current_page, self.total_pages(view)))
        return True

    # ---------- selection ----------
    def toggle_select(self, key: Any) -> bool:
        try:
            idx = self.index_of(key)
        except TableEngineError as exc:
            return self._reject("toggle_select", exc)
        with self.lock:
            records = list(self._records)
            records[idx] = replace(records[idx], selected=not records[idx].selected)
            self._records = tuple(records)
        return True

    def toggle_select_all(self, scope: str = SELECT_SCOPE_ALL) -> bool:
        """
        Select every record in scope unless all of them already are, in which
        case clear them. scope="all" covers the whole record set regardless of
        the active filters; scope="filtered" only the filtered records.
        """
        if scope not in (SELECT_SCOPE_ALL, SELECT_SCOPE_FILTERED):
            return self._reject("toggle_select_all", InvalidEnumValue(f"Unknown select scope: {scope!r}"))
        with self.lock:
            if scope == SELECT_SCOPE_ALL:
                target = set(self._index)
            else:
                target = {r.key for r in self.filtered_records()}
            if not target:
                return True
            value = not all(r.selected for r in self._records if r.key in target)
            self._records = tuple(
                replace(r, selected=value) if r.key in target and r.selected != value else r for r in self._records
            )
        return True

    @property
    def all_selected(self) -> bool:
        return bool(self._records) and all(r.selected for r in self._records)

    @property
    def all_filtered_selected(self) -> bool:
        rows = self.filtered_records()
        return bool(rows) and all(r.selected for r in rows)

    def selected_keys(self) -> List[str]:
        return [r.key for r in self._records if r.selected]
