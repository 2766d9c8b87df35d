"""Immutable per-facet visibility filter state.

A ``VisibilityFilterState`` records, for every declared facet, the set of
values currently toggled off. It is the single source of truth for the
filter: the hidden-series set and the legend dimming set are projections of
it and are never stored alongside it.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .chart_catalog import Facet
from .chart_errors import UnknownFacet


@dataclass(frozen=True)
class VisibilityFilterState:
    """Immutable record of hidden facet values.

    Parameters
    ----------
    facets : tuple[Facet, ...]
        Facet declarations the state is defined over, in declared order.
    hidden : tuple[frozenset[str], ...]
        Hidden-value set per facet, aligned with ``facets``.

    Notes
    -----
    Instances are hashable and compare by value, so two states reached by
    different click sequences are equal whenever they hide the same values.
    Use :meth:`initial` rather than the constructor.

    Examples
    --------
    >>> from facet_legend.chart_catalog import Facet  # doctest: +SKIP
    >>> state = VisibilityFilterState.initial([Facet("percentile", ("q99", "q50"))])  # doctest: +SKIP
    >>> state.is_pristine  # doctest: +SKIP
    True
    """

    facets: tuple[Facet, ...]
    hidden: tuple[frozenset[str], ...]

    def __post_init__(self) -> None:
        if len(self.facets) != len(self.hidden):
            raise ValueError(
                f"State declares {len(self.facets)} facets but {len(self.hidden)} hidden sets"
            )

    @classmethod
    def initial(cls, facets: Iterable[Facet]) -> "VisibilityFilterState":
        """Return the state with nothing hidden."""
        facets = tuple(facets)
        return cls(facets=facets, hidden=tuple(frozenset() for _ in facets))

    @property
    def facet_names(self) -> tuple[str, ...]:
        return tuple(f.name for f in self.facets)

    def _position(self, facet: str) -> int:
        for i, declared in enumerate(self.facets):
            if declared.name == facet:
                return i
        raise UnknownFacet(facet, self.facet_names)

    def facet(self, facet: str) -> Facet:
        """Return the declaration for ``facet``."""
        return self.facets[self._position(facet)]

    def hidden_values(self, facet: str) -> frozenset[str]:
        """Return the values of ``facet`` currently toggled off."""
        return self.hidden[self._position(facet)]

    def with_hidden_values(self, facet: str, values: Iterable[str]) -> "VisibilityFilterState":
        """Return a copy where ``facet`` hides exactly ``values``."""
        pos = self._position(facet)
        hidden = list(self.hidden)
        hidden[pos] = frozenset(values)
        return VisibilityFilterState(facets=self.facets, hidden=tuple(hidden))

    def items(self) -> Iterator[tuple[str, frozenset[str]]]:
        """Iterate ``(facet name, hidden values)`` in declared facet order."""
        for facet, values in zip(self.facets, self.hidden):
            yield facet.name, values

    @property
    def dimmed_labels(self) -> frozenset[str]:
        """Return the flat union of every facet's hidden values.

        Legend rendering is keyed by label, not by facet, so a label hidden on
        any facet is dimmed wherever it appears.
        """
        labels: set[str] = set()
        for values in self.hidden:
            labels |= values
        return frozenset(labels)

    @property
    def is_pristine(self) -> bool:
        """Return ``True`` when no facet hides anything."""
        return not any(self.hidden)

    def as_dict(self) -> dict[str, list[str]]:
        """Return a plain ``{facet: sorted hidden values}`` mapping."""
        return {name: sorted(values) for name, values in self.items()}

    def __repr__(self) -> str:
        return f"VisibilityFilterState(hidden={self.as_dict()!r})"


__all__ = ["VisibilityFilterState"]
