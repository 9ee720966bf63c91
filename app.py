import logging
from contextlib import contextmanager
from typing import Optional

import altair as alt
import pandas as pd
import streamlit as st

from core.charts import themed
from core.data import load_dashboard_data, load_orders
from core.logging_config import setup_logging
from core.metrics_orders import compute_orders, export_orders_csv
from core.metrics_overview import (
    compute_overview,
    location_chart,
    revenue_projection_chart,
    revenue_trend_chart,
    sales_channel_chart,
)
from core.table import OrderTableEngine
from core.theme import ThemePreference, palette

alt.data_transformers.disable_max_rows()
logger = logging.getLogger(__name__)


# ---------- UI / layout helpers ----------
def inject_base_styles(theme: str):
    colors = palette(theme)
    st.markdown(
        f"""
        <style>
        .stApp {{background: {colors["background"]}; color: {colors["text"]};}}
        .app-top-bar {{padding: 6px 0 4px;margin-bottom: 10px;}}
        .app-top-bar .breadcrumb {{color: #6b7280;font-size: 0.9rem;margin-bottom: 2px;}}
        .app-top-bar .page-title {{font-size: 1.2rem;font-weight: 600;color: {colors["text"]};}}
        .card {{border-radius: 16px;padding: 16px;background: {colors["card"]};margin-bottom: 12px;}}
        .card-title {{font-weight: 600;font-size: 0.95rem;color: {colors["text"]};margin-bottom: 8px;}}
        .status-dot {{display: inline-block;height: 8px;width: 8px;border-radius: 50%;margin-right: 6px;}}
        </style>
        """,
        unsafe_allow_html=True,
    )


@contextmanager
def card(title: str):
    container = st.container()
    container.markdown(f"<div class='card'><div class='card-title'>{title}</div>", unsafe_allow_html=True)
    body = container.container()
    with body:
        yield body
    container.markdown("</div>", unsafe_allow_html=True)


def render_page_header(title: str, breadcrumb: str, export_data: Optional[bytes] = None, export_name: str = "export.csv"):
    c1, c2 = st.columns([8, 2])
    with c1:
        st.markdown(
            f"<div class='app-top-bar'><div class='breadcrumb'>{breadcrumb}</div><div class='page-title'>{title}</div></div>",
            unsafe_allow_html=True,
        )
    with c2:
        if export_data is not None:
            st.download_button("Download CSV", data=export_data, file_name=export_name, mime="text/csv")


# ---------- session state ----------
def get_theme_store() -> ThemePreference:
    if "theme_store" not in st.session_state:
        st.session_state["theme_store"] = ThemePreference()
    return st.session_state["theme_store"]


def get_engine() -> OrderTableEngine:
    if "order_engine" not in st.session_state:
        st.session_state["order_engine"] = OrderTableEngine(load_orders())
    return st.session_state["order_engine"]


# ---------- Page renderers ----------
def render_dashboard_page(theme: str):
    render_page_header("eCommerce", "Dashboards / Default")
    payload = compute_overview(theme)
    data_ctx = load_dashboard_data()

    top = st.columns([1, 1])
    with top[0]:
        card_cols = st.columns(2)
        for i, stat in enumerate(payload["stat_cards"]):
            card_cols[i % 2].metric(stat["title"], stat["value"], delta=stat["change"])
    with top[1]:
        with card("Projections vs Actual"):
            st.altair_chart(themed(revenue_projection_chart(data_ctx["projections"], theme), theme), use_container_width=True)

    mid = st.columns([3, 1])
    with mid[0]:
        with card("Revenue"):
            week = payload["week_revenue"]
            st.caption(f"Current Week ${week['current']:,}  |  Previous Week ${week['previous']:,}")
            st.altair_chart(themed(revenue_trend_chart(data_ctx["revenue"], theme), theme), use_container_width=True)
    with mid[1]:
        with card("Revenue by Location"):
            st.altair_chart(themed(location_chart(data_ctx["locations"], theme), theme), use_container_width=True)

    bottom = st.columns([3, 1])
    with bottom[0]:
        with card("Top Selling Products"):
            products = pd.DataFrame(payload["top_products"]).rename(
                columns={"name": "Name", "price": "Price", "quantity": "Quantity", "amount": "Amount"}
            )
            st.dataframe(
                products,
                hide_index=True,
                use_container_width=True,
                column_config={
                    "Price": st.column_config.NumberColumn(format="$%.2f"),
                    "Amount": st.column_config.NumberColumn(format="$%.2f"),
                },
            )
    with bottom[1]:
        with card("Total Sales"):
            st.altair_chart(themed(sales_channel_chart(data_ctx["sales_channels"], theme), theme), use_container_width=True)

    render_activity_panel(payload)


def render_activity_panel(payload: dict):
    cols = st.columns(3)
    with cols[0]:
        with card("Notifications"):
            for item in payload["notifications"]:
                st.markdown(f"**{item['message']}**  \n<small>{item['time']}</small>", unsafe_allow_html=True)
    with cols[1]:
        with card("Activities"):
            for item in payload["activities"]:
                st.markdown(f"**{item['message']}**  \n<small>{item['time']}</small>", unsafe_allow_html=True)
    with cols[2]:
        with card("Contacts"):
            for contact in payload["contacts"]:
                st.write(contact["name"])


def render_orders_page(theme: str):
    engine = get_engine()
    render_page_header("Order List", "Dashboards / Orders", export_data=export_orders_csv(engine), export_name="Orders_List.csv")
    payload = compute_orders(engine, theme)
    view = payload["view"]

    with card("Controls"):
        ctrl = st.columns([2, 2, 1])
        term = ctrl[0].text_input("Search", value=view["search_term"], placeholder="Search")
        if term != view["search_term"]:
            engine.set_search_term(term)
            st.rerun()
        options = payload["status_options"]
        status = ctrl[1].selectbox("Status", options, index=options.index(view["status_filter"]))
        if status != view["status_filter"]:
            engine.set_status_filter(status)
            st.rerun()
        if ctrl[2].button("Reset view"):
            engine.reset_view()
            st.rerun()

    widths = [0.5] + [2] * len(payload["headers"])
    head = st.columns(widths)
    if head[0].checkbox("all", value=payload["select_all"], key=f"select_all_{payload['select_all']}", label_visibility="collapsed") != payload["select_all"]:
        engine.toggle_select_all()
        st.rerun()
    for col, header in zip(head[1:], payload["headers"]):
        if col.button(header["label"] + header["indicator"], key=f"sort_{header['key']}"):
            engine.set_sort(header["key"])
            st.rerun()

    for row in payload["rows"]:
        cols = st.columns(widths)
        if cols[0].checkbox("sel", value=row["selected"], key=f"sel_{row['key']}_{row['selected']}", label_visibility="collapsed") != row["selected"]:
            engine.toggle_select(row["key"])
            st.rerun()
        cols[1].write(row["order_id"])
        cols[2].write(row["user"])
        cols[3].write(row["project"])
        cols[4].write(row["address"])
        cols[5].write(row["date"])
        color = row["status_color"]
        cols[6].markdown(
            f"<span class='status-dot' style='background:{color['dot']}'></span>"
            f"<span style='color:{color['text']}'>{row['status']}</span>",
            unsafe_allow_html=True,
        )
    if not payload["rows"]:
        st.info("No orders match the current filters.")

    pager = payload["pager"]
    foot = st.columns([2, 1] + [1] * len(pager["pages"]) + [1])
    sizes = payload["page_size_options"]
    size = foot[0].selectbox("Show", sizes, index=sizes.index(payload["page_size"]), format_func=lambda n: f"Show {n}")
    if size != payload["page_size"]:
        engine.set_page_size(size)
        st.rerun()
    if foot[1].button("<", disabled=not pager["has_previous"]):
        engine.previous_page()
        st.rerun()
    for col, number in zip(foot[2:-1], pager["pages"]):
        if col.button(str(number), key=f"page_{number}", type="primary" if number == pager["current_page"] else "secondary"):
            engine.set_page(number)
            st.rerun()
    if foot[-1].button(">", disabled=not pager["has_next"]):
        engine.next_page()
        st.rerun()
    st.caption(f"{payload['total_matching']} orders · page {pager['current_page']} of {pager['total_pages']}")


# ---------- UI setup ----------
st.set_page_config(page_title="Admin Dashboard", layout="wide")
if "_logging_ready" not in st.session_state:
    setup_logging()
    st.session_state["_logging_ready"] = True

theme_store = get_theme_store()
inject_base_styles(theme_store.theme)

with st.sidebar:
    st.markdown("### Navigate")
    nav_choice = st.radio("Navigate", ["Dashboard", "Order List"], index=0, label_visibility="collapsed")
    st.markdown("---")
    dark = st.toggle("Dark mode", value=theme_store.is_dark)
    if dark != theme_store.is_dark:
        theme_store.toggle()
        st.rerun()

if nav_choice == "Dashboard":
    render_dashboard_page(theme_store.theme)
else:
    render_orders_page(theme_store.theme)
