"""Core (UI-agnostic) admin dashboard logic.

This package contains:
- the static data set (orders, dashboard series as pandas frames)
- the order table engine (filter -> sort -> paginate, selection)
- the theme preference store and palettes
- page compute functions (JSON-serializable payloads)
- chart helpers (Altair -> Vega-Lite spec dict)
"""
