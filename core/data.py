from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from typing import Any, Dict, Iterable, List, Tuple

import pandas as pd


class OrderStatus(str, Enum):
    IN_PROGRESS = "In Progress"
    COMPLETE = "Complete"
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"

    @classmethod
    def values(cls) -> List[str]:
        return [s.value for s in cls]


def column_key(label: str) -> str:
    """Header label -> sort key, e.g. "Order ID" -> "orderid"."""
    return label.lower().replace(" ", "", 1)


# (sort key, header label, record attribute) in display order.
ORDER_COLUMNS: Tuple[Tuple[str, str, str], ...] = tuple(
    (column_key(label), label, attr)
    for label, attr in [
        ("Order ID", "order_id"),
        ("User", "user"),
        ("Project", "project"),
        ("Address", "address"),
        ("Date", "date"),
        ("Status", "status"),
    ]
)
COLUMN_ATTRS: Dict[str, str] = {key: attr for key, _, attr in ORDER_COLUMNS}
SEARCHABLE_FIELDS: Tuple[str, ...] = tuple(attr for _, _, attr in ORDER_COLUMNS)


@dataclass(frozen=True)
class OrderRecord:
    key: str
    order_id: str
    user: str
    avatar: str
    project: str
    address: str
    date: str
    status: OrderStatus
    selected: bool = False

    def value(self, attr: str) -> Any:
        out = getattr(self, attr)
        return out.value if isinstance(out, OrderStatus) else out

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key,
            "order_id": self.order_id,
            "user": self.user,
            "avatar": self.avatar,
            "project": self.project,
            "address": self.address,
            "date": self.date,
            "status": self.status.value,
            "selected": self.selected,
        }


_CUSTOMERS = {
    "#CM9801": ("Natali Craig", "/Images/NataliCraig.png", "Landing Page", "Meadow Lane Oakland", "Just now", "In Progress"),
    "#CM9802": ("Kate Morrison", "/Images/KateMorrison.png", "CRM Admin pages", "Larry San Francisco", "A minute ago", "Complete"),
    "#CM9803": ("Drew Cano", "/Images/DrewCano.png", "Client Project", "Bagwell Avenue Ocala", "1 hour ago", "Pending"),
    "#CM9804": ("Orlando Diggs", "/Images/OrlandoDiggs.png", "Admin Dashboard", "Washburn Baton Rouge", "Yesterday", "Approved"),
    "#CM9805": ("Andi Lane", "/Images/AndiLane.png", "App Landing Page", "Nest Lane Olivette", "Feb 2, 2023", "Rejected"),
}

# Seed order ids in record-set order; key "4" starts selected.
_SEED_ORDER_IDS = [
    "#CM9801", "#CM9802", "#CM9803", "#CM9804", "#CM9805",
    "#CM9801", "#CM9802", "#CM9803", "#CM9804", "#CM9805",
    "#CM9805", "#CM9805", "#CM9805",
]
_SEED_SELECTED = {"4"}


def seed_order_rows() -> List[Dict[str, Any]]:
    rows = []
    for i, order_id in enumerate(_SEED_ORDER_IDS, start=1):
        user, avatar, project, address, date, status = _CUSTOMERS[order_id]
        key = str(i)
        rows.append(
            {
                "key": key,
                "selected": key in _SEED_SELECTED,
                "order_id": order_id,
                "user": user,
                "avatar": avatar,
                "project": project,
                "address": address,
                "date": date,
                "status": status,
            }
        )
    return rows


def records_from_rows(rows: Iterable[Dict[str, Any]]) -> List[OrderRecord]:
    out: List[OrderRecord] = []
    for row in rows:
        out.append(
            OrderRecord(
                key=str(row["key"]),
                order_id=str(row.get("order_id", "")),
                user=str(row.get("user", "")),
                avatar=str(row.get("avatar", "")),
                project=str(row.get("project", "")),
                address=str(row.get("address", "")),
                date=str(row.get("date", "")),
                status=OrderStatus(row["status"]),
                selected=bool(row.get("selected", False)),
            )
        )
    return out


def load_orders() -> List[OrderRecord]:
    return records_from_rows(seed_order_rows())


@lru_cache(maxsize=1)
def load_dashboard_data() -> Dict[str, Any]:
    """Static dashboard data set. Frames are shared: callers copy before mutating."""
    stat_cards = pd.DataFrame(
        [
            {"title": "Customers", "value": "3,781", "change_pct": 11.01, "accent": True},
            {"title": "Orders", "value": "1,219", "change_pct": -0.03, "accent": False},
            {"title": "Revenue", "value": "$695", "change_pct": 15.03, "accent": False},
            {"title": "Growth", "value": "30.1%", "change_pct": 6.08, "accent": True},
        ]
    )
    projections = pd.DataFrame(
        {
            "month": ["Jan", "Feb", "Mar", "Apr", "May", "Jun"],
            "actual": [15, 18, 16, 22, 10, 15],
            "projected": [3, 3, 4, 5, 4, 3],
        }
    )
    revenue = pd.DataFrame(
        {
            "month": ["Jan", "Feb", "Mar", "Apr", "May", "Jun"],
            "current": [12000, 8000, 7000, 15000, 19000, 20000],
            "previous": [7000, 17000, 18000, 10000, 11000, 23000],
        }
    )
    locations = pd.DataFrame(
        {
            "location": ["New York", "San Francisco", "Sydney", "Singapore"],
            "revenue": [72000, 39000, 25000, 61000],
        }
    )
    products = pd.DataFrame(
        [
            {"name": "ASOS Ridley High Waist", "price": 79.49, "quantity": 82, "amount": 6518.18},
            {"name": "Marco Lightweight Shirt", "price": 128.5, "quantity": 37, "amount": 4754.5},
            {"name": "Half Sleeve Shirt", "price": 39.99, "quantity": 64, "amount": 2559.36},
            {"name": "Lightweight Jacket", "price": 20.0, "quantity": 184, "amount": 3680.0},
            {"name": "Marco Shoes", "price": 79.49, "quantity": 64, "amount": 1965.81},
            {"name": "ASOS Ridley High Waist", "price": 79.49, "quantity": 82, "amount": 6518.18},
            {"name": "Marco Lightweight Shirt", "price": 128.5, "quantity": 37, "amount": 4754.5},
            {"name": "Half Sleeve Shirt", "price": 39.99, "quantity": 64, "amount": 2559.36},
            {"name": "Lightweight Jacket", "price": 20.0, "quantity": 184, "amount": 3680.0},
        ]
    )
    sales_channels = pd.DataFrame(
        {
            "channel": ["Direct", "Affiliate", "Sponsored", "E-mail"],
            "value": [300.56, 135.18, 154.02, 48.96],
        }
    )
    notifications = pd.DataFrame(
        [
            {"kind": "bug", "message": "You have a bug that needs...", "time": "Just now"},
            {"kind": "user", "message": "New user registered", "time": "59 minutes ago"},
            {"kind": "bug", "message": "You have a bug that needs...", "time": "12 hours ago"},
            {"kind": "subscription", "message": "Andi Lane subscribed to you", "time": "Today, 11:59 AM"},
        ]
    )
    activities = pd.DataFrame(
        [
            {"message": "You have a bug that needs...", "time": "Just now", "avatar": "/Images/Activity1.png"},
            {"message": "Released a new version", "time": "59 minutes ago", "avatar": "/Images/Activity2.png"},
            {"message": "Submitted a bug", "time": "12 hours ago", "avatar": "/Images/Activity3.png"},
            {"message": "Modified A data in Page X", "time": "Today, 11:59 AM", "avatar": "/Images/Activity4.png"},
            {"message": "Deleted a page in Project X", "time": "Feb 2, 2023", "avatar": "/Images/Activity5.png"},
        ]
    )
    contacts = pd.DataFrame(
        {
            "name": ["Natali Craig", "Drew Cano", "Orlando Diggs", "Andi Lane", "Kate Morrison", "Koray Okumus"],
            "avatar": [
                "/Images/NataliCraig.png",
                "/Images/DrewCano.png",
                "/Images/OrlandoDiggs.png",
                "/Images/AndiLane.png",
                "/Images/KateMorrison.png",
                "/Images/KorayOkumus.png",
            ],
        }
    )
    return {
        "stat_cards": stat_cards,
        "projections": projections,
        "revenue": revenue,
        "week_revenue": {"current": 58211, "previous": 68768},
        "locations": locations,
        "products": products,
        "sales_channels": sales_channels,
        "notifications": notifications,
        "activities": activities,
        "contacts": contacts,
    }
