"""Interactive facet-filtered line chart for notebooks.

Purpose
-------
This module provides the public ``FacetChart`` class. It draws every series of
a :class:`~facet_legend.chart_catalog.SeriesCatalog` as a Plotly trace and
lets viewers hide or show whole groups of lines by clicking facet legend
entries (for example every ``q99`` line, or every line of ``seq-a``).

Concepts and structure
----------------------
The implementation is composition-based:

- ``FacetChart`` coordinates rendering and exposes the public API.
- ``ChartLayout`` owns widget/layout construction.
- ``LegendEventAdapter`` owns the filter state and resolves legend clicks.
- ``FacetLegendPanel`` owns the legend rows.

Architecture notes
------------------
Every state change flows through the adapter, whether it starts as a legend
click or a programmatic call such as :meth:`FacetChart.hide`. The chart
subscribes to adapter events and applies each new
:class:`~facet_legend.chart_projection.Projection` to its traces. Traces are
created once, in catalog order, and only their ``visible`` flag changes, so
z-order and colors stay stable across toggles.

Important gotchas
-----------------
- Plotly ``FigureWidget`` requires a real container height; the layout sets
  one for the plot area.
- Hiding is OR-composed across facets: showing a value again does not reveal
  lines still hidden by the other facet.

Examples
--------
>>> from facet_legend import FacetChart, demo_catalog
>>> chart = FacetChart(demo_catalog(), title="Latency")  # doctest: +SKIP
>>> chart.hide("percentile", "q99")  # doctest: +SKIP
>>> chart.projection.visible_names  # doctest: +SKIP
('seq-a-q50', 'seq-b-q50')
>>> chart  # doctest: +SKIP

Discoverability
---------------
If you are extending behavior, inspect next:

- ``chart_events.py`` for click resolution and listener dispatch.
- ``chart_toggle.py`` and ``chart_projection.py`` for the filter semantics.
- ``chart_legend.py`` for the legend widget rows.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Hashable, Optional, Sequence, Tuple, Union

import plotly.graph_objects as go
from IPython.display import display

from .ChartSnapshot import ChartSnapshot
from .FilterState import VisibilityFilterState
from .LegendEvent import LegendEvent
from .chart_catalog import SeriesCatalog
from .chart_events import LegendEventAdapter
from .chart_layout import ChartLayout
from .chart_legend import FacetLegendPanel
from .chart_projection import Projection
from .chart_style import resolve_series_style

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

NumberLike = Union[int, float]
RangeLike = Tuple[NumberLike, NumberLike]

HOVER_TEMPLATE = "%{fullData.name} (%{x}, %{y})<extra></extra>"


def _coerce_range(value: Optional[RangeLike], *, role: str) -> Optional[Tuple[float, float]]:
    if value is None:
        return None
    lo, hi = value
    lo, hi = float(lo), float(hi)
    if not lo < hi:
        raise ValueError(f"{role} must be increasing, got ({lo}, {hi})")
    return lo, hi


class FacetChart:
    """
    An interactive Plotly line chart whose series are filtered by facet legends.

    Key features
    ------------
    - Uses Plotly ``FigureWidget`` so it is interactive inside notebooks.
    - Draws each series as lines with markers and a ``name (x, y)`` tooltip.
    - Uses a right-side legend panel with one block per facet; unchecking a
      value hides every series carrying it.
    - Box-zoom is the default drag mode.

    Examples
    --------
    >>> from facet_legend import demo_catalog
    >>> chart = FacetChart(demo_catalog(), x_range=(0, 2), y_range=(0, 9))  # doctest: +SKIP
    >>> chart.on_legend_activate("sequence", 0)  # doctest: +SKIP
    >>> chart
    """

    __slots__ = [
        "_catalog", "_layout", "_adapter", "_legend", "_figure", "_traces",
        "_x_range", "_y_range", "_debug", "_render_info_last_log_t", "_render_debug_last_log_t",
    ]

    def __init__(
        self,
        catalog: SeriesCatalog,
        *,
        title: str = "",
        x_range: Optional[RangeLike] = None,
        y_range: Optional[RangeLike] = None,
        strict: bool = False,
        legend_colors: Optional[Sequence[Sequence[str]]] = None,
        hover_labels: bool = True,
        debug: bool = False,
    ) -> None:
        """Initialize a chart over ``catalog``.

        Parameters
        ----------
        catalog : SeriesCatalog
            Series to draw; never mutated.
        title : str, optional
            Title text shown above the plot.
        x_range, y_range : tuple[float, float] or None, optional
            Fixed axis ranges; ``None`` lets Plotly autorange.
        strict : bool, optional
            Reject toggles of values not declared on their facet.
        legend_colors : sequence of color pairs, optional
            Swatch colors per facet block, alternating by row.
        hover_labels : bool, optional
            Show ``name (x, y)`` hover labels on sample points.
        debug : bool, optional
            Emit per-redraw DEBUG records for this chart when the module
            logger is enabled for DEBUG.
        """
        self._debug = debug
        self._catalog = catalog
        self._x_range = _coerce_range(x_range, role="x_range")
        self._y_range = _coerce_range(y_range, role="y_range")
        self._render_info_last_log_t = 0.0
        self._render_debug_last_log_t = 0.0

        # 1. Layout
        self._layout = ChartLayout(title=title)

        # 2. Filter state owner
        self._adapter = LegendEventAdapter(catalog, strict=strict)

        # 3. Plotly runtime
        self._figure = go.FigureWidget()
        self._figure.update_layout(**self._default_figure_layout())
        self._traces: Dict[str, go.Scatter] = {}
        for index, series in enumerate(catalog):
            self._add_trace(series, index=index, hover_labels=hover_labels)
        self._layout.set_plot_widget(self._figure)

        # 4. Legend panel
        self._legend = FacetLegendPanel(self._layout.legend_box, self._adapter, legend_colors=legend_colors)
        self._layout.update_sidebar_visibility(self._legend.has_legend)

        # 5. Bind events
        self._adapter.add_listener(self._on_legend_event, listener_id="chart")
        self.apply(self._adapter.projection, reason="init")

    # --- Properties ---

    @property
    def catalog(self) -> SeriesCatalog:
        return self._catalog

    @property
    def state(self) -> VisibilityFilterState:
        """Return the current filter state."""
        return self._adapter.state

    @property
    def projection(self) -> Projection:
        """Return the projection currently drawn."""
        return self._adapter.projection

    @property
    def figure_widget(self) -> go.FigureWidget:
        """Access the underlying Plotly FigureWidget."""
        return self._figure

    @property
    def legend(self) -> FacetLegendPanel:
        return self._legend

    @property
    def adapter(self) -> LegendEventAdapter:
        return self._adapter

    @property
    def title(self) -> str:
        return self._layout.get_title()

    @title.setter
    def title(self, value: str) -> None:
        self._layout.set_title(value)

    def trace_for(self, name: str) -> go.Scatter:
        """Return the Plotly trace drawing series ``name``."""
        return self._traces[name]

    # --- Filter API ---

    def on_legend_activate(self, facet: str, value_index: int) -> Projection:
        """Handle a legend click on entry ``value_index`` of ``facet``."""
        return self._adapter.on_legend_activate(facet, value_index)

    def toggle(self, facet: str, value: str) -> Projection:
        """Toggle ``value`` on ``facet``."""
        return self._adapter.activate_value(facet, value)

    def hide(self, facet: str, *values: str) -> Projection:
        """Hide every series carrying any of ``values`` on ``facet``."""
        hidden = self.state.hidden_values(facet)
        for value in values:
            if value not in hidden:
                self._adapter.activate_value(facet, value)
                hidden = self.state.hidden_values(facet)
        return self.projection

    def show(self, facet: str, *values: str) -> Projection:
        """Stop hiding ``values`` on ``facet``; other facets may still hide lines."""
        hidden = self.state.hidden_values(facet)
        for value in values:
            if value in hidden:
                self._adapter.activate_value(facet, value)
                hidden = self.state.hidden_values(facet)
        return self.projection

    def reset(self) -> Projection:
        """Show every series again."""
        return self._adapter.reset()

    def add_hook(self, callback: Callable[[LegendEvent], Any], hook_id: Optional[Hashable] = None) -> Hashable:
        """Register ``callback`` to run after every filter change.

        Hooks run after the chart has redrawn. A failing hook is reported with
        ``warnings.warn`` and does not block other hooks.
        """
        return self._adapter.add_listener(callback, hook_id)

    def remove_hook(self, hook_id: Hashable) -> None:
        self._adapter.remove_listener(hook_id)

    def snapshot(self) -> ChartSnapshot:
        """Return an immutable snapshot of the current filter state."""
        projection = self.projection
        return ChartSnapshot(
            title=self.title,
            hidden_values={name: tuple(sorted(values)) for name, values in self.state.items()},
            visible_series=projection.visible_names,
            dimmed_labels=tuple(sorted(projection.dimmed_labels)),
        )

    # --- Rendering ---

    def apply(self, projection: Projection, reason: str = "manual") -> None:
        """Push ``projection`` into the trace visibility flags.

        Parameters
        ----------
        projection : Projection
            Projection to draw.
        reason : str, optional
            Render reason for logging (e.g. ``"init"``, ``"legend"``).
        """
        self._log_render(reason, projection)
        with self._figure.batch_update():
            for name, trace in self._traces.items():
                visible = projection.is_visible(name)
                if trace.visible != visible:
                    trace.visible = visible

    def _default_figure_layout(self) -> Dict[str, Any]:
        """Return Plotly layout defaults for the chart widget."""
        axis_style = dict(
            showline=True,
            linecolor="#94a3b8",
            linewidth=1,
            mirror=True,
            ticks="outside",
            tickcolor="#94a3b8",
            ticklen=6,
            showgrid=True,
            gridcolor="rgba(148,163,184,0.35)",
            gridwidth=1,
        )
        xaxis = dict(axis_style)
        yaxis = dict(axis_style)
        if self._x_range is not None:
            xaxis["range"] = list(self._x_range)
        if self._y_range is not None:
            yaxis["range"] = list(self._y_range)
        return dict(
            autosize=True,
            template="plotly_white",
            showlegend=False,
            dragmode="zoom",
            hovermode="closest",
            margin=dict(l=48, r=28, t=48, b=44),
            font=dict(
                family="Inter, -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif",
                size=14,
                color="#1f2933",
            ),
            paper_bgcolor="#ffffff",
            plot_bgcolor="#f8fafc",
            xaxis=xaxis,
            yaxis=yaxis,
        )

    def _add_trace(self, series: Any, *, index: int, hover_labels: bool) -> None:
        """Create the Plotly trace for one catalog series."""
        style = resolve_series_style(
            color=series.color, dash=series.dash, symbol=series.symbol, index=index
        )
        self._figure.add_scatter(
            x=series.x,
            y=series.y,
            mode="lines+markers",
            name=series.name,
            line=dict(color=style["color"], dash=style["dash"], width=2),
            marker=dict(color=style["color"], symbol=style["symbol"]),
            hovertemplate=HOVER_TEMPLATE if hover_labels else None,
            hoverinfo=None if hover_labels else "skip",
            visible=True,
        )
        self._traces[series.name] = self._figure.data[-1]

    def _on_legend_event(self, event: LegendEvent) -> None:
        self.apply(event.projection, reason="reset" if event.is_reset else "legend")

    def _log_render(self, reason: str, projection: Projection) -> None:
        """Log redraw information with rate-limiting."""
        now = time.monotonic()
        if logger.isEnabledFor(logging.INFO) and (now - self._render_info_last_log_t) > 1.0:
            self._render_info_last_log_t = now
            logger.info(f"render(reason={reason}) visible={len(projection.visible_series)}/{len(self._catalog)}")

        if self._debug and logger.isEnabledFor(logging.DEBUG) and (now - self._render_debug_last_log_t) > 0.5:
            self._render_debug_last_log_t = now
            logger.debug(f"hidden={self.state.as_dict()} dimmed={sorted(projection.dimmed_labels)}")

    def _ipython_display_(self, **kwargs: Any) -> None:
        """Display the chart layout through IPython."""
        display(self._layout.output_widget)

    def __repr__(self) -> str:
        return f"FacetChart(series={len(self._catalog)}, hidden={self.state.as_dict()!r})"


__all__ = ["FacetChart", "HOVER_TEMPLATE"]
