"""Series style-hint contracts shared by the catalog and the chart.

This module centralizes the discoverable style keyword metadata and the
validation rules used by :class:`~facet_legend.chart_catalog.Series` and
:class:`~facet_legend.FacetChart.FacetChart`. Keeping these contracts outside
``FacetChart.py`` gives a single place for tests to lock style semantics.
"""

from __future__ import annotations

from plotly.colors import qualitative

SERIES_STYLE_OPTIONS: dict[str, str] = {
    "color": "Line and marker color. Accepts CSS-like names (e.g., red), hex (#RRGGBB), or rgb()/rgba() strings.",
    "dash": "Line pattern. Supported values: solid, dot, dash, longdash, dashdot, longdashdot.",
    "symbol": "Marker symbol. Supported values: circle, square, diamond, cross, x, triangle-up, triangle-down, star.",
}

DASH_STYLES: tuple[str, ...] = ("solid", "dot", "dash", "longdash", "dashdot", "longdashdot")
MARKER_SYMBOLS: tuple[str, ...] = (
    "circle",
    "square",
    "diamond",
    "cross",
    "x",
    "triangle-up",
    "triangle-down",
    "star",
)

# Legend glyph opacity for toggled-off and active facet values.
DIMMED_OPACITY = 0.5
ACTIVE_OPACITY = 1.0

DEFAULT_PALETTE: tuple[str, ...] = tuple(qualitative.Plotly)

# Per-facet legend glyph colors, alternating by row within a facet block.
DEFAULT_LEGEND_COLORS: tuple[tuple[str, str], ...] = (
    ("navy", "blue"),
    ("red", "green"),
)


def validate_style_hints(*, dash: str | None, symbol: str | None) -> None:
    """Validate optional dash/symbol hints.

    Raises
    ------
    ValueError
        If ``dash`` or ``symbol`` is not one of the supported names.
    """
    if dash is not None and dash not in DASH_STYLES:
        raise ValueError(
            f"dash={dash!r} is not supported; use one of: {', '.join(DASH_STYLES)}."
        )
    if symbol is not None and symbol not in MARKER_SYMBOLS:
        raise ValueError(
            f"symbol={symbol!r} is not supported; use one of: {', '.join(MARKER_SYMBOLS)}."
        )


def resolve_series_style(
    *,
    color: str | None,
    dash: str | None,
    symbol: str | None,
    index: int,
) -> dict[str, str]:
    """Resolve display hints into concrete trace styling.

    Missing colors cycle through :data:`DEFAULT_PALETTE` by catalog position so
    color assignment is deterministic across toggles.
    """
    validate_style_hints(dash=dash, symbol=symbol)
    return {
        "color": color if color is not None else DEFAULT_PALETTE[index % len(DEFAULT_PALETTE)],
        "dash": dash if dash is not None else "solid",
        "symbol": symbol if symbol is not None else "circle",
    }


def legend_glyph_color(facet_index: int, row_index: int, legend_colors=None) -> str:
    """Return the swatch color for one legend row."""
    table = tuple(legend_colors) if legend_colors else DEFAULT_LEGEND_COLORS
    pair = table[facet_index % len(table)]
    return pair[row_index % len(pair)]


def glyph_opacity(dimmed: bool) -> float:
    """Map a legend entry's dimming flag to glyph opacity."""
    return DIMMED_OPACITY if dimmed else ACTIVE_OPACITY


__all__ = [
    "SERIES_STYLE_OPTIONS",
    "DASH_STYLES",
    "MARKER_SYMBOLS",
    "DIMMED_OPACITY",
    "ACTIVE_OPACITY",
    "DEFAULT_PALETTE",
    "DEFAULT_LEGEND_COLORS",
    "validate_style_hints",
    "resolve_series_style",
    "legend_glyph_color",
    "glyph_opacity",
]
