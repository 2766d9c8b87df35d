"""Render projection: what the chart should draw for a filter state.

Purpose
-------
Maps ``(catalog, state)`` to a declarative :class:`Projection` that the
rendering collaborator consumes: which series are visible, and how each
legend entry is styled.

Concepts and structure
----------------------
- Hiding is OR-composed across facets: a series is hidden when its value on
  *any* facet is in that facet's hidden set.
- Legend entries come from facet declarations, never from scanning the
  catalog, so values with no series still get a (toggleable) row.
- Dimming is label keyed: an entry is dimmed when its label is in the state's
  flat dimmed-label set. Whether the entry's own facet hides the value is
  reported separately as ``hidden``; the two differ only when facets share
  a label.

Architecture notes
------------------
Every function here is pure. Calling :func:`project` repeatedly with the same
inputs returns equal results, so the chart may re-project freely.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .FilterState import VisibilityFilterState
from .chart_catalog import Series, SeriesCatalog


@dataclass(frozen=True)
class LegendEntry:
    """Styling for one legend row.

    Parameters
    ----------
    label : str
        Facet value shown on the row.
    dimmed : bool
        Whether the label is hidden on any facet and its glyph should be faded.
    hidden : bool
        Whether this facet hides the value; drives the row's checkbox.
    """

    label: str
    dimmed: bool
    hidden: bool = False


@dataclass(frozen=True)
class Projection:
    """Declarative description of what to draw.

    Parameters
    ----------
    visible_series : tuple[Series, ...]
        Catalog series that are not hidden, in catalog order.
    legend_entries : mapping[str, tuple[LegendEntry, ...]]
        Facet name to its legend rows, in declared facet and value order.
    hidden_names : frozenset[str]
        Names of series hidden by at least one facet.
    dimmed_labels : frozenset[str]
        Labels rendered dimmed in the legend.
    """

    visible_series: tuple[Series, ...]
    legend_entries: Mapping[str, tuple[LegendEntry, ...]]
    hidden_names: frozenset[str]
    dimmed_labels: frozenset[str]

    @property
    def visible_names(self) -> tuple[str, ...]:
        """Return visible series names in catalog order."""
        return tuple(s.name for s in self.visible_series)

    def is_visible(self, name: str) -> bool:
        return name not in self.hidden_names

    def entries_for(self, facet: str) -> tuple[LegendEntry, ...]:
        """Return the legend rows for ``facet``."""
        return self.legend_entries[facet]

    def __repr__(self) -> str:
        return (
            f"Projection(visible={list(self.visible_names)!r}, "
            f"dimmed={sorted(self.dimmed_labels)!r})"
        )


def series_is_hidden(series: Series, state: VisibilityFilterState) -> bool:
    """Return ``True`` when any facet value of ``series`` is hidden."""
    for facet, hidden in state.items():
        if hidden and series.facet_values.get(facet) in hidden:
            return True
    return False


def hidden_series_names(catalog: SeriesCatalog, state: VisibilityFilterState) -> frozenset[str]:
    """Return the derived hidden-series set for ``state``."""
    return frozenset(s.name for s in catalog if series_is_hidden(s, state))


def legend_entries(state: VisibilityFilterState) -> dict[str, tuple[LegendEntry, ...]]:
    """Return legend rows per facet, generated from facet declarations."""
    dimmed = state.dimmed_labels
    entries: dict[str, tuple[LegendEntry, ...]] = {}
    for facet, hidden in zip(state.facets, state.hidden):
        entries[facet.name] = tuple(
            LegendEntry(label=value, dimmed=value in dimmed, hidden=value in hidden)
            for value in facet.values
        )
    return entries


def project(catalog: SeriesCatalog, state: VisibilityFilterState) -> Projection:
    """Project ``state`` over ``catalog`` into what the chart should draw.

    Examples
    --------
    >>> from facet_legend import demo_catalog, VisibilityFilterState, toggle  # doctest: +SKIP
    >>> catalog = demo_catalog()  # doctest: +SKIP
    >>> state = toggle(VisibilityFilterState.initial(catalog.facets), "percentile", "q99")  # doctest: +SKIP
    >>> project(catalog, state).visible_names  # doctest: +SKIP
    ('seq-a-q50', 'seq-b-q50')
    """
    hidden = hidden_series_names(catalog, state)
    return Projection(
        visible_series=tuple(s for s in catalog if s.name not in hidden),
        legend_entries=legend_entries(state),
        hidden_names=hidden,
        dimmed_labels=state.dimmed_labels,
    )


__all__ = [
    "LegendEntry",
    "Projection",
    "series_is_hidden",
    "hidden_series_names",
    "legend_entries",
    "project",
]
