from __future__ import annotations

from typing import Any, Dict

import altair as alt

from core.theme import palette

alt.data_transformers.disable_max_rows()


def themed(chart: alt.TopLevelMixin, theme: str) -> alt.TopLevelMixin:
    """Apply the theme's background, text and grid colors to a chart."""
    colors = palette(theme)
    return (
        chart.configure(background=colors["background"])
        .configure_axis(labelColor=colors["text"], titleColor=colors["text"], gridColor=colors["grid"], domain=False, ticks=False)
        .configure_legend(labelColor=colors["text"], titleColor=colors["text"])
        .configure_title(color=colors["text"])
        .configure_view(strokeWidth=0)
    )


def to_vega_spec(chart: alt.TopLevelMixin, theme: str = "light") -> Dict[str, Any]:
    """Convert an Altair chart into a themed Vega-Lite spec dict (JSON-serializable)."""
    return themed(chart, theme).to_dict()
