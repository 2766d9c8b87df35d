"""Legend event adapter: resolves legend clicks and owns the filter state.

Purpose
-------
The rendering collaborator only reports "entry *i* of facet *f*'s legend
block was activated". This module turns that report into a filter
transition:

1. :class:`LegendTable` resolves ``(facet, index)`` to ``(facet, value)``
   against a table declared once from the catalog's facets.
2. :func:`~facet_legend.chart_toggle.toggle` computes the next state.
3. :func:`~facet_legend.chart_projection.project` describes the redraw.
4. Registered listeners receive a :class:`~facet_legend.LegendEvent.LegendEvent`.

Architecture notes
------------------
- The adapter is owned by one chart instance. There is no module-level
  filter state and nothing is shared between charts.
- Index resolution never consults rendered widgets; dimming restyles legend
  rows but never reorders them, so the declared table stays authoritative.
- Calls are synchronous. The hosting event loop delivers one click at a time.
"""

from __future__ import annotations

import logging
import numbers
import warnings
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Hashable, Optional

from .FilterState import VisibilityFilterState
from .LegendEvent import LegendEvent
from .chart_catalog import Facet, SeriesCatalog
from .chart_errors import UnknownFacet, UnknownFacetValue
from .chart_projection import Projection, project
from .chart_toggle import toggle

logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())

LegendListener = Callable[[LegendEvent], Any]


@dataclass(frozen=True)
class LegendTable:
    """Immutable ``facet name -> ordered values`` table for index resolution.

    Parameters
    ----------
    blocks : mapping[str, tuple[str, ...]]
        Legend block contents keyed by facet name, in declared order.
    """

    blocks: Mapping[str, tuple[str, ...]]

    @classmethod
    def from_facets(cls, facets: Iterable[Facet]) -> "LegendTable":
        """Build the table from facet declarations."""
        return cls(blocks=MappingProxyType({f.name: tuple(f.values) for f in facets}))

    @property
    def facet_names(self) -> tuple[str, ...]:
        return tuple(self.blocks)

    def values_for(self, facet: str) -> tuple[str, ...]:
        """Return the legend block for ``facet``."""
        try:
            return self.blocks[facet]
        except KeyError:
            raise UnknownFacet(facet, self.facet_names) from None

    def resolve(self, facet: str, index: int) -> tuple[str, str]:
        """Map a click on entry ``index`` of ``facet``'s block to ``(facet, value)``.

        Raises
        ------
        UnknownFacet
            If ``facet`` has no legend block.
        UnknownFacetValue
            If ``index`` is not an integer or is outside the block (negative
            indices included).
        """
        values = self.values_for(facet)
        if isinstance(index, bool) or not isinstance(index, numbers.Integral):
            raise UnknownFacetValue(facet, f"<legend index {index!r}>", values)
        position = int(index)
        if position < 0 or position >= len(values):
            raise UnknownFacetValue(facet, f"<legend index {position}>", values)
        return facet, values[position]

    def index_of(self, facet: str, value: str) -> int:
        """Return the block position of ``value`` within ``facet``."""
        values = self.values_for(facet)
        try:
            return values.index(value)
        except ValueError:
            raise UnknownFacetValue(facet, value, values) from None


class LegendEventAdapter:
    """Translate legend activations into filter transitions for one chart.

    Parameters
    ----------
    catalog : SeriesCatalog
        Read-only series catalog the filter operates over.
    strict : bool, optional
        Forward to :func:`toggle`; reject undeclared values when ``True``.

    Examples
    --------
    >>> from facet_legend.chart_catalog import demo_catalog  # doctest: +SKIP
    >>> adapter = LegendEventAdapter(demo_catalog())  # doctest: +SKIP
    >>> adapter.on_legend_activate("percentile", 0).visible_names  # doctest: +SKIP
    ('seq-a-q50', 'seq-b-q50')
    """

    def __init__(self, catalog: SeriesCatalog, *, strict: bool = False) -> None:
        self._catalog = catalog
        self._strict = bool(strict)
        self._table = LegendTable.from_facets(catalog.facets)
        self._initial = VisibilityFilterState.initial(catalog.facets)
        self._state = self._initial
        self._projection = project(catalog, self._state)
        self._listeners: Dict[Hashable, LegendListener] = {}
        self._listener_counter = 0

    @property
    def catalog(self) -> SeriesCatalog:
        return self._catalog

    @property
    def table(self) -> LegendTable:
        """Return the declared legend table clicks are resolved against."""
        return self._table

    @property
    def state(self) -> VisibilityFilterState:
        """Return the current filter state."""
        return self._state

    @property
    def projection(self) -> Projection:
        """Return the projection of the current state."""
        return self._projection

    def add_listener(self, callback: LegendListener, listener_id: Optional[Hashable] = None) -> Hashable:
        """Register ``callback`` to receive every :class:`LegendEvent`.

        Returns
        -------
        hashable
            The listener id, usable with :meth:`remove_listener`.
        """
        if listener_id is None:
            self._listener_counter += 1
            listener_id = f"listener:{self._listener_counter}"
        self._listeners[listener_id] = callback
        return listener_id

    def remove_listener(self, listener_id: Hashable) -> None:
        """Unregister a listener; unknown ids are ignored."""
        self._listeners.pop(listener_id, None)

    def on_legend_activate(self, facet: str, value_index: int) -> Projection:
        """Handle a click on entry ``value_index`` of ``facet``'s legend block."""
        facet, value = self._table.resolve(facet, value_index)
        return self._transition(facet=facet, index=int(value_index), value=value)

    def activate_value(self, facet: str, value: str) -> Projection:
        """Toggle ``value`` on ``facet`` directly, bypassing index resolution."""
        self._table.values_for(facet)
        index: Optional[int]
        try:
            index = self._table.index_of(facet, value)
        except UnknownFacetValue:
            index = None
        return self._transition(facet=facet, index=index, value=value)

    def reset(self) -> Projection:
        """Return to the initial state with nothing hidden."""
        old = self._state
        self._state = self._initial
        self._projection = project(self._catalog, self._state)
        logger.debug("reset filter state")
        self._emit(
            LegendEvent(
                facet=None,
                index=None,
                value=None,
                old=old,
                new=self._state,
                projection=self._projection,
            )
        )
        return self._projection

    def _transition(self, *, facet: str, index: Optional[int], value: str) -> Projection:
        old = self._state
        self._state = toggle(old, facet, value, strict=self._strict)
        self._projection = project(self._catalog, self._state)
        logger.debug(
            f"legend activate facet={facet} index={index} value={value} "
            f"visible={list(self._projection.visible_names)}"
        )
        self._emit(
            LegendEvent(
                facet=facet,
                index=index,
                value=value,
                old=old,
                new=self._state,
                projection=self._projection,
            )
        )
        return self._projection

    def _emit(self, event: LegendEvent) -> None:
        for listener_id, callback in list(self._listeners.items()):
            try:
                callback(event)
            except Exception as e:
                warnings.warn(f"Legend listener {listener_id} failed: {e}")


__all__ = ["LegendTable", "LegendEventAdapter", "LegendListener"]
