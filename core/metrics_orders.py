from __future__ import annotations

from dataclasses import asdict
from typing import Any, Dict, List

import pandas as pd

from core.config import STATUS_ALL
from core.data import ORDER_COLUMNS, OrderStatus
from core.table import OrderTableEngine
from core.theme import status_color

EXPORT_COLUMNS = ["order_id", "user", "project", "address", "date", "status", "selected"]


def sort_indicator(engine: OrderTableEngine, key: str) -> str:
    view = engine.view
    if view.sort_key != key:
        return ""
    return " ▼" if view.descending else " ▲"


def build_headers(engine: OrderTableEngine) -> List[Dict[str, Any]]:
    return [
        {
            "key": key,
            "label": label,
            "sorted": engine.view.sort_key == key,
            "indicator": sort_indicator(engine, key),
        }
        for key, label, _ in ORDER_COLUMNS
        if key in engine.columns
    ]


def build_pager(current_page: int, total_pages: int) -> Dict[str, Any]:
    return {
        "pages": list(range(1, total_pages + 1)),
        "current_page": current_page,
        "total_pages": total_pages,
        "has_previous": current_page > 1,
        "has_next": current_page < total_pages,
    }


def compute_orders(engine: OrderTableEngine, theme: str = "light") -> Dict[str, Any]:
    page = engine.get_visible_page()
    rows = []
    for record in page.items:
        row = record.to_dict()
        row["status_color"] = status_color(record.status.value, theme)
        rows.append(row)

    return {
        "view": asdict(engine.view),
        "headers": build_headers(engine),
        "rows": rows,
        "total_matching": page.total_matching,
        "page_size": page.page_size,
        "pager": build_pager(page.current_page, page.total_pages),
        "select_all": engine.all_selected,
        "all_filtered_selected": engine.all_filtered_selected,
        "selected_keys": engine.selected_keys(),
        "status_options": [STATUS_ALL] + OrderStatus.values(),
        "page_size_options": list(engine.page_size_options),
    }


def orders_frame(engine: OrderTableEngine) -> pd.DataFrame:
    """Filtered and sorted order list (all pages) for export."""
    records = engine.filtered_records()
    if not records:
        return pd.DataFrame(columns=EXPORT_COLUMNS)
    return pd.DataFrame([r.to_dict() for r in records])[EXPORT_COLUMNS]


def export_orders_csv(engine: OrderTableEngine) -> bytes:
    return orders_frame(engine).to_csv(index=False).encode("utf-8")
