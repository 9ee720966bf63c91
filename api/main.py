from __future__ import annotations

import logging
import math
from functools import lru_cache

import numpy as np
import pandas as pd
from fastapi import FastAPI
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from api.schemas import (
    PageRequest,
    PageSizeRequest,
    SearchRequest,
    SelectAllRequest,
    SortRequest,
    StatusFilterRequest,
    ThemeRequest,
    ViewStateModel,
)
from core.config import CORS_ORIGINS
from core.data import load_orders
from core.logging_config import setup_logging
from core.metrics_orders import compute_orders, export_orders_csv
from core.metrics_overview import compute_overview
from core.table import OrderTableEngine, RecordNotFound, TableEngineError
from core.theme import ThemePreference

setup_logging()

app = FastAPI(title="Admin Dashboard API", version="0.1.0")
logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache(maxsize=1)
def get_engine() -> OrderTableEngine:
    return OrderTableEngine(load_orders())


@lru_cache(maxsize=1)
def get_theme_store() -> ThemePreference:
    return ThemePreference()


def _json(data: object, status_code: int = 200) -> JSONResponse:
    """Return JSON with safe encoding for pandas/numpy objects."""

    def _safe_float(value: object) -> float | None:
        try:
            out = float(value)  # type: ignore[arg-type]
        except Exception:
            return None
        if math.isnan(out) or math.isinf(out):
            return None
        return out

    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(
            data,
            custom_encoder={
                type(pd.NA): lambda _: None,
                np.integer: int,
                float: _safe_float,
                np.floating: _safe_float,
                np.bool_: bool,
            },
        ),
    )


def _error(exc: Exception, status_code: int) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": str(exc), "type": type(exc).__name__})


def _rejected(exc: TableEngineError) -> JSONResponse:
    return _error(exc, 404 if isinstance(exc, RecordNotFound) else 422)


def _orders_payload() -> JSONResponse:
    return _json(compute_orders(get_engine(), get_theme_store().theme))


# ---------- order list ----------
@app.get("/orders")
def orders():
    try:
        return _orders_payload()
    except Exception as exc:
        logger.exception("orders failed")
        return _error(exc, 500)


@app.post("/orders/search")
def orders_search(body: SearchRequest):
    get_engine().set_search_term(body.term)
    return _orders_payload()


@app.post("/orders/status")
def orders_status(body: StatusFilterRequest):
    engine = get_engine()
    with engine.lock:
        try:
            engine.validate_status(body.status)
        except TableEngineError as exc:
            return _rejected(exc)
        engine.set_status_filter(body.status)
    return _orders_payload()


@app.post("/orders/sort")
def orders_sort(body: SortRequest):
    engine = get_engine()
    with engine.lock:
        try:
            engine.validate_sort_key(body.key)
        except TableEngineError as exc:
            return _rejected(exc)
        engine.set_sort(body.key)
    return _orders_payload()


@app.post("/orders/page-size")
def orders_page_size(body: PageSizeRequest):
    engine = get_engine()
    with engine.lock:
        try:
            engine.validate_page_size(body.page_size)
        except TableEngineError as exc:
            return _rejected(exc)
        engine.set_page_size(body.page_size)
    return _orders_payload()


@app.post("/orders/page")
def orders_page(body: PageRequest):
    get_engine().set_page(body.page)
    return _orders_payload()


@app.post("/orders/view")
def orders_view(body: ViewStateModel):
    engine = get_engine()
    raw = body.model_dump()
    with engine.lock:
        try:
            engine.validate_view(raw)
        except TableEngineError as exc:
            return _rejected(exc)
        engine.apply_view(raw)
    return _orders_payload()


@app.post("/orders/reset")
def orders_reset():
    get_engine().reset_view()
    return _orders_payload()


@app.post("/orders/select-all")
def orders_select_all(body: SelectAllRequest):
    get_engine().toggle_select_all(body.scope)
    return _orders_payload()


@app.post("/orders/{key}/toggle")
def orders_toggle(key: str):
    engine = get_engine()
    with engine.lock:
        try:
            engine.index_of(key)
        except TableEngineError as exc:
            return _rejected(exc)
        engine.toggle_select(key)
    return _orders_payload()


@app.get("/orders/export")
def orders_export():
    csv_bytes = export_orders_csv(get_engine())
    return Response(
        content=csv_bytes,
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=Orders_List.csv"},
    )


# ---------- dashboard ----------
@app.get("/dashboard")
def dashboard():
    try:
        return _json(compute_overview(get_theme_store().theme))
    except Exception as exc:
        logger.exception("dashboard failed")
        return _error(exc, 500)


# ---------- theme ----------
@app.get("/theme")
def theme_get():
    return _json({"theme": get_theme_store().theme})


@app.put("/theme")
def theme_put(body: ThemeRequest):
    try:
        return _json({"theme": get_theme_store().set(body.theme)})
    except Exception as exc:
        logger.exception("theme_put failed")
        return _error(exc, 500)


@app.post("/theme/toggle")
def theme_toggle():
    try:
        return _json({"theme": get_theme_store().toggle()})
    except Exception as exc:
        logger.exception("theme_toggle failed")
        return _error(exc, 500)
