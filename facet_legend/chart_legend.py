"""Facet legend side-panel for toggling groups of series.

Purpose
-------
This module defines :class:`FacetLegendPanel`, a widget controller that renders
one legend block per facet into ``ChartLayout.legend_box``. Each block lists
the facet's declared values; every row exposes:

- a checkbox, checked unless this facet hides the value,
- a color swatch whose opacity drops while the label is hidden on any facet,
- the value label.

Concepts and structure
----------------------
Rows are created once, from the adapter's :class:`LegendTable`, and keyed by
``(facet, index)``. ``apply(projection)`` restyles rows in place and never
rebuilds or reorders them, so a row's index always matches the declared
position the adapter resolves clicks against.

Architecture notes
------------------
- User checkbox changes are forwarded to
  ``LegendEventAdapter.on_legend_activate(facet, index)``; the panel never
  edits filter state itself.
- Programmatic checkbox writes made while mirroring a projection are
  suspended so they do not re-enter the adapter.

Examples
--------
>>> import ipywidgets as widgets
>>> from facet_legend.chart_catalog import demo_catalog
>>> from facet_legend.chart_events import LegendEventAdapter
>>> box = widgets.VBox()  # doctest: +SKIP
>>> panel = FacetLegendPanel(box, LegendEventAdapter(demo_catalog()))  # doctest: +SKIP
>>> panel.rows_for("percentile")[0].label  # doctest: +SKIP
'q99'
"""

from __future__ import annotations

import html
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

import ipywidgets as widgets

from .chart_events import LegendEventAdapter
from .chart_projection import Projection
from .chart_style import glyph_opacity, legend_glyph_color


@dataclass
class LegendRowModel:
    """Widget and state bundle for one legend row bound to a facet value."""

    facet: str
    index: int
    label: str
    color: str
    container: widgets.HBox
    toggle: widgets.Checkbox
    swatch: widgets.HTML
    label_widget: widgets.HTML
    dimmed: bool = False


def _swatch_html(color: str, opacity: float) -> str:
    return (
        f'<span style="display:inline-block;width:12px;height:12px;border-radius:6px;'
        f'background:{html.escape(color)};opacity:{opacity}"></span>'
    )


def _label_html(label: str, opacity: float) -> str:
    return f'<span style="opacity:{opacity}">{html.escape(label)}</span>'


class FacetLegendPanel:
    """Manage facet legend rows and keep them in sync with the filter projection."""

    def __init__(
        self,
        layout_box: widgets.Box,
        adapter: LegendEventAdapter,
        *,
        legend_colors: Optional[Sequence[Sequence[str]]] = None,
    ) -> None:
        """Build rows for every declared facet value and bind them to ``adapter``."""
        self._layout_box = layout_box
        self._adapter = adapter
        self._rows: Dict[tuple[str, int], LegendRowModel] = {}
        self._headers: Dict[str, widgets.HTML] = {}
        self._suspended: set[tuple[str, int]] = set()

        children: list[widgets.Widget] = []
        for facet_index, facet in enumerate(adapter.table.facet_names):
            header = widgets.HTML(
                f"<b>{html.escape(facet)}</b>", layout=widgets.Layout(margin="6px 0 2px 0")
            )
            self._headers[facet] = header
            children.append(header)
            for index, value in enumerate(adapter.table.values_for(facet)):
                color = legend_glyph_color(facet_index, index, legend_colors)
                row = self._create_row(facet, index, value, color)
                self._rows[(facet, index)] = row
                children.append(row.container)
        self._layout_box.children = tuple(children)

        adapter.add_listener(lambda event: self.apply(event.projection), listener_id="legend-panel")
        self.apply(adapter.projection)

    @property
    def has_legend(self) -> bool:
        """Return ``True`` when at least one row exists."""
        return bool(self._rows)

    def rows_for(self, facet: str) -> tuple[LegendRowModel, ...]:
        """Return rows of ``facet``'s block in declared order."""
        count = len(self._adapter.table.values_for(facet))
        return tuple(self._rows[(facet, i)] for i in range(count))

    def row(self, facet: str, index: int) -> LegendRowModel:
        return self._rows[(facet, index)]

    def apply(self, projection: Projection) -> None:
        """Restyle rows to mirror ``projection`` without reordering them."""
        for facet, entries in projection.legend_entries.items():
            for index, entry in enumerate(entries):
                row = self._rows.get((facet, index))
                if row is None:
                    continue
                self._sync_row(row, dimmed=entry.dimmed, hidden=entry.hidden)

    def _create_row(self, facet: str, index: int, label: str, color: str) -> LegendRowModel:
        """Create a legend row widget bundle with toggle, swatch and label."""
        toggle = widgets.Checkbox(
            value=True,
            description="",
            indent=False,
            layout=widgets.Layout(width="28px", min_width="28px", margin="0"),
        )
        swatch = widgets.HTML(
            value=_swatch_html(color, glyph_opacity(False)),
            layout=widgets.Layout(width="16px", margin="0"),
        )
        label_widget = widgets.HTML(
            value=_label_html(label, glyph_opacity(False)),
            layout=widgets.Layout(margin="0", width="100%"),
        )
        container = widgets.HBox(
            [toggle, swatch, label_widget],
            layout=widgets.Layout(width="100%", align_items="center", margin="0", gap="6px"),
        )
        toggle.observe(
            lambda change, key=(facet, index): self._on_toggle_changed(key, change),
            names="value",
        )
        return LegendRowModel(
            facet=facet,
            index=index,
            label=label,
            color=color,
            container=container,
            toggle=toggle,
            swatch=swatch,
            label_widget=label_widget,
        )

    def _sync_row(self, row: LegendRowModel, *, dimmed: bool, hidden: bool) -> None:
        """Incrementally update swatch opacity and checkbox value.

        Opacity follows label dimming; the checkbox follows whether this row's
        own facet hides the value.
        """
        if row.dimmed != dimmed:
            opacity = glyph_opacity(dimmed)
            row.swatch.value = _swatch_html(row.color, opacity)
            row.label_widget.value = _label_html(row.label, opacity)
            row.dimmed = dimmed

        target_value = not hidden
        if row.toggle.value != target_value:
            key = (row.facet, row.index)
            self._suspended.add(key)
            try:
                row.toggle.value = target_value
            finally:
                self._suspended.discard(key)

    def _on_toggle_changed(self, key: tuple[str, int], change: Dict[str, Any]) -> None:
        """Forward a user checkbox click to the adapter as a legend activation."""
        if change.get("name") != "value":
            return
        if key in self._suspended:
            return
        facet, index = key
        self._adapter.on_legend_activate(facet, index)


__all__ = ["FacetLegendPanel", "LegendRowModel"]
