"""Top-level public API for the ``facet_legend`` package.

This module re-exports the notebook-facing surface so users can import from a
single namespace, for example:

>>> from facet_legend import FacetChart, demo_catalog  # doctest: +SKIP

It exposes both the interactive chart and the pure filter building blocks
(state, toggle engine, projection, event adapter) for use without widgets.
"""

from .ChartSnapshot import ChartSnapshot
from .FacetChart import FacetChart
from .FilterState import VisibilityFilterState
from .LegendEvent import LegendEvent
from .chart_catalog import (
    PERCENTILE_FACET,
    SEQUENCE_FACET,
    Facet,
    Series,
    SeriesCatalog,
    catalog_from_records,
    demo_catalog,
)
from .chart_errors import FacetFilterError, UnknownFacet, UnknownFacetValue
from .chart_events import LegendEventAdapter, LegendTable
from .chart_projection import LegendEntry, Projection, hidden_series_names, project
from .chart_style import SERIES_STYLE_OPTIONS
from .chart_toggle import toggle, toggle_many

__all__ = [
    "ChartSnapshot",
    "FacetChart",
    "VisibilityFilterState",
    "LegendEvent",
    "Facet",
    "Series",
    "SeriesCatalog",
    "catalog_from_records",
    "demo_catalog",
    "SEQUENCE_FACET",
    "PERCENTILE_FACET",
    "FacetFilterError",
    "UnknownFacet",
    "UnknownFacetValue",
    "LegendEventAdapter",
    "LegendTable",
    "LegendEntry",
    "Projection",
    "hidden_series_names",
    "project",
    "SERIES_STYLE_OPTIONS",
    "toggle",
    "toggle_many",
]
