from __future__ import annotations

from typing import Any, Dict, Optional

import altair as alt
import pandas as pd

from core.charts import to_vega_spec
from core.data import load_dashboard_data
from core.theme import palette, sales_channel_colors


def _change_label(change_pct: float) -> str:
    return f"{change_pct:+.2f}%"


def revenue_projection_chart(projections: pd.DataFrame, theme: str) -> alt.Chart:
    colors = palette(theme)
    long_df = projections.melt(id_vars="month", value_vars=["actual", "projected"], var_name="series", value_name="value")
    month_order = projections["month"].tolist()
    return (
        alt.Chart(long_df)
        .mark_bar(size=25)
        .encode(
            x=alt.X("month:N", title=None, sort=month_order),
            y=alt.Y("sum(value):Q", title=None, axis=alt.Axis(labelExpr="datum.value + 'M'", gridDash=[4, 4])),
            color=alt.Color(
                "series:N",
                scale=alt.Scale(domain=["actual", "projected"], range=[colors["bar_actual"], colors["bar_projected"]]),
                legend=None,
            ),
            order=alt.Order("series:N", sort="ascending"),
            tooltip=["month", "series", alt.Tooltip("value:Q", title="Value (M)")],
        )
        .properties(height=200, title="Projections vs Actual")
    )


def revenue_trend_chart(revenue: pd.DataFrame, theme: str) -> alt.LayerChart:
    colors = palette(theme)
    month_order = revenue["month"].tolist()
    base = alt.Chart(revenue).encode(x=alt.X("month:N", title=None, sort=month_order, axis=alt.Axis(grid=False)))
    current = base.mark_line(strokeWidth=3, color=colors["line_current"]).encode(
        y=alt.Y("current:Q", title=None, axis=alt.Axis(format="~s", gridDash=[4, 4])),
        tooltip=["month", alt.Tooltip("current:Q", title="Current Week", format="$,.0f")],
    )
    previous = base.mark_line(strokeWidth=3, strokeDash=[6, 4], color=colors["line_previous"]).encode(
        y="previous:Q",
        tooltip=["month", alt.Tooltip("previous:Q", title="Previous Week", format="$,.0f")],
    )
    return alt.layer(current, previous).properties(height=260, title="Revenue")


def location_chart(locations: pd.DataFrame, theme: str) -> alt.Chart:
    colors = palette(theme)
    return (
        alt.Chart(locations)
        .mark_bar(color=colors["location_bar"], cornerRadius=3)
        .encode(
            y=alt.Y("location:N", title=None, sort=None),
            x=alt.X("revenue:Q", title=None, axis=alt.Axis(format="~s")),
            tooltip=["location", alt.Tooltip("revenue:Q", format="$,.0f")],
        )
        .properties(height=160, title="Revenue by Location")
    )


def sales_channel_chart(channels: pd.DataFrame, theme: str) -> alt.Chart:
    return (
        alt.Chart(channels)
        .mark_arc(innerRadius=50)
        .encode(
            theta=alt.Theta("value:Q"),
            color=alt.Color(
                "channel:N",
                scale=alt.Scale(domain=channels["channel"].tolist(), range=sales_channel_colors(theme)),
                legend=alt.Legend(title=None, orient="bottom"),
            ),
            tooltip=["channel", alt.Tooltip("value:Q", format="$,.2f")],
        )
        .properties(height=220, title="Total Sales")
    )


def compute_overview(theme: str = "light", ctx: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    ctx = ctx if ctx is not None else load_dashboard_data()
    stat_cards: pd.DataFrame = ctx.get("stat_cards", pd.DataFrame()).copy()
    projections: pd.DataFrame = ctx.get("projections", pd.DataFrame()).copy()
    revenue: pd.DataFrame = ctx.get("revenue", pd.DataFrame()).copy()
    locations: pd.DataFrame = ctx.get("locations", pd.DataFrame()).copy()
    products: pd.DataFrame = ctx.get("products", pd.DataFrame()).copy()
    channels: pd.DataFrame = ctx.get("sales_channels", pd.DataFrame()).copy()
    notifications: pd.DataFrame = ctx.get("notifications", pd.DataFrame()).copy()
    activities: pd.DataFrame = ctx.get("activities", pd.DataFrame()).copy()
    contacts: pd.DataFrame = ctx.get("contacts", pd.DataFrame()).copy()
    week_revenue = ctx.get("week_revenue", {}) or {}

    cards = []
    for row in stat_cards.to_dict(orient="records"):
        change = float(row["change_pct"])
        cards.append(
            {
                "title": row["title"],
                "value": row["value"],
                "change": _change_label(change),
                "is_negative": change < 0,
                "accent": bool(row.get("accent", False)),
            }
        )

    charts: Dict[str, Any] = {}
    if not projections.empty:
        charts["projections_vs_actual"] = to_vega_spec(revenue_projection_chart(projections, theme), theme)
    if not revenue.empty:
        charts["revenue"] = to_vega_spec(revenue_trend_chart(revenue, theme), theme)
    if not locations.empty:
        charts["revenue_by_location"] = to_vega_spec(location_chart(locations, theme), theme)
    if not channels.empty:
        charts["total_sales"] = to_vega_spec(sales_channel_chart(channels, theme), theme)

    locations_out = []
    if not locations.empty:
        max_rev = float(locations["revenue"].max())
        locations = locations.assign(share_of_max=locations["revenue"] / max_rev if max_rev else 0.0)
        locations_out = locations.to_dict(orient="records")

    return {
        "theme": theme,
        "stat_cards": cards,
        "week_revenue": {
            "current": week_revenue.get("current"),
            "previous": week_revenue.get("previous"),
        },
        "locations": locations_out,
        "top_products": products.to_dict(orient="records"),
        "sales_channels": channels.to_dict(orient="records"),
        "notifications": notifications.to_dict(orient="records"),
        "activities": activities.to_dict(orient="records"),
        "contacts": contacts.to_dict(orient="records"),
        "charts": charts,
    }
