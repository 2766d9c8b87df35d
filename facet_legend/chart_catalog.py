"""Static series catalog and facet declarations.

Purpose
-------
Defines the read-only inputs the visibility filter operates over:

- :class:`Facet`: a named classification dimension with an ordered tuple of
  legal values,
- :class:`Series`: one plotted line tagged with one value per facet,
- :class:`SeriesCatalog`: the immutable, ordered collection of both.

Architecture notes
------------------
The catalog is built once when a chart is mounted and never mutated. Catalog
order is the drawing order, so projections preserve it verbatim. Validation
happens here, at configuration time, so the toggle engine and the projection
can stay total functions.

Examples
--------
>>> from facet_legend.chart_catalog import Facet, Series, SeriesCatalog
>>> seq = Facet("sequence", ("A", "B"))
>>> pct = Facet("percentile", ("q99", "q50"))
>>> s = Series("A-q50", {"sequence": "A", "percentile": "q50"}, [0, 1], [5, 8])
>>> catalog = SeriesCatalog((seq, pct), (s,))
>>> catalog.names
('A-q50',)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Optional

import numpy as np

from .chart_errors import UnknownFacet, UnknownFacetValue
from .chart_style import validate_style_hints


@dataclass(frozen=True)
class Facet:
    """A named classification dimension with a fixed, ordered value list.

    Parameters
    ----------
    name : str
        Facet identifier (e.g. ``"sequence"``).
    values : tuple[str, ...]
        Legal values in legend order.
    """

    name: str
    values: tuple[str, ...]

    def __post_init__(self) -> None:
        name = str(self.name)
        if not name:
            raise ValueError("Facet name must be a non-empty string")
        values = tuple(str(v) for v in self.values)
        seen: set[str] = set()
        for value in values:
            if value in seen:
                raise ValueError(f"Facet {name!r} declares value {value!r} more than once")
            seen.add(value)
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "values", values)

    def __contains__(self, value: object) -> bool:
        return value in self.values

    def index(self, value: str) -> int:
        """Return the legend position of ``value``."""
        try:
            return self.values.index(value)
        except ValueError:
            raise UnknownFacetValue(self.name, value, self.values) from None


def _readonly_array(values: Any) -> np.ndarray:
    arr = np.array(values, dtype=float).reshape(-1)
    arr.flags.writeable = False
    return arr


@dataclass(frozen=True, eq=False)
class Series:
    """One plotted line, tagged with exactly one value per facet.

    Parameters
    ----------
    name : str
        Unique series identifier within a catalog.
    facet_values : mapping[str, str]
        Facet name to facet value.
    x, y : array-like
        Sample positions and values; stored as read-only float arrays.
    color, dash, symbol : str or None
        Optional display hints (see :data:`~facet_legend.chart_style.SERIES_STYLE_OPTIONS`).

    Notes
    -----
    Series compare by identity. Sample arrays make value equality ambiguous and
    the catalog already guarantees unique names.
    """

    name: str
    facet_values: Mapping[str, str]
    x: np.ndarray = field(default_factory=lambda: _readonly_array(()))
    y: np.ndarray = field(default_factory=lambda: _readonly_array(()))
    color: Optional[str] = None
    dash: Optional[str] = None
    symbol: Optional[str] = None

    def __post_init__(self) -> None:
        name = str(self.name)
        if not name:
            raise ValueError("Series name must be a non-empty string")
        x = _readonly_array(self.x)
        y = _readonly_array(self.y)
        if x.shape != y.shape:
            raise ValueError(
                f"Series {name!r} has {x.size} x samples but {y.size} y samples"
            )
        validate_style_hints(dash=self.dash, symbol=self.symbol)
        facet_values = MappingProxyType({str(k): str(v) for k, v in dict(self.facet_values).items()})
        object.__setattr__(self, "name", name)
        object.__setattr__(self, "x", x)
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "facet_values", facet_values)

    def value_for(self, facet: str) -> str:
        """Return this series' value on ``facet``."""
        try:
            return self.facet_values[facet]
        except KeyError:
            raise UnknownFacet(facet, tuple(self.facet_values)) from None

    @property
    def points(self) -> tuple[tuple[float, float], ...]:
        """Return ``(position, value)`` sample pairs."""
        return tuple(zip(self.x.tolist(), self.y.tolist()))

    def __repr__(self) -> str:
        tags = ", ".join(f"{k}={v}" for k, v in self.facet_values.items())
        return f"Series(name={self.name!r}, {tags}, points={self.x.size})"


class SeriesCatalog:
    """Immutable, ordered collection of facets and the series they classify."""

    __slots__ = ("_facets", "_series", "_by_name")

    def __init__(self, facets: Sequence[Facet], series: Iterable[Series]) -> None:
        facets = tuple(facets)
        facet_names = tuple(f.name for f in facets)
        if len(set(facet_names)) != len(facet_names):
            raise ValueError(f"Duplicate facet names: {facet_names}")

        ordered = tuple(series)
        by_name: dict[str, Series] = {}
        for s in ordered:
            if s.name in by_name:
                raise ValueError(f"Duplicate series name: {s.name!r}")
            self._validate_series(s, facets)
            by_name[s.name] = s

        self._facets = facets
        self._series = ordered
        self._by_name = MappingProxyType(by_name)

    @staticmethod
    def _validate_series(s: Series, facets: tuple[Facet, ...]) -> None:
        declared = tuple(f.name for f in facets)
        for key in s.facet_values:
            if key not in declared:
                raise UnknownFacet(key, declared)
        for facet in facets:
            if facet.name not in s.facet_values:
                raise UnknownFacet(facet.name, tuple(s.facet_values))
            value = s.facet_values[facet.name]
            if value not in facet.values:
                raise UnknownFacetValue(facet.name, value, facet.values)

    @property
    def facets(self) -> tuple[Facet, ...]:
        """Return facet declarations in declared order."""
        return self._facets

    @property
    def series(self) -> tuple[Series, ...]:
        """Return series in catalog (drawing) order."""
        return self._series

    @property
    def names(self) -> tuple[str, ...]:
        """Return series names in catalog order."""
        return tuple(s.name for s in self._series)

    def facet(self, name: str) -> Facet:
        """Return the facet declared as ``name`` or raise :class:`UnknownFacet`."""
        for facet in self._facets:
            if facet.name == name:
                return facet
        raise UnknownFacet(name, tuple(f.name for f in self._facets))

    def facet_values_in_use(self, name: str) -> tuple[str, ...]:
        """Return declared values of ``name`` that at least one series carries."""
        facet = self.facet(name)
        used = {s.facet_values[name] for s in self._series}
        return tuple(v for v in facet.values if v in used)

    def __getitem__(self, name: str) -> Series:
        return self._by_name[name]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __iter__(self) -> Iterator[Series]:
        return iter(self._series)

    def __len__(self) -> int:
        return len(self._series)

    def __repr__(self) -> str:
        facets = ", ".join(f"{f.name}[{len(f.values)}]" for f in self._facets)
        return f"SeriesCatalog(facets=({facets}), series={len(self._series)})"


def catalog_from_records(
    records: Iterable[Mapping[str, Any]],
    facets: Sequence[Facet],
) -> SeriesCatalog:
    """Build a catalog from plain dict records.

    Each record carries a ``name``, one key per facet name, optional
    ``color``/``dash``/``symbol`` hints, and samples either as
    ``datapoints=[{"x": ..., "y": ...}, ...]`` or as parallel ``x``/``y``
    sequences.

    Examples
    --------
    >>> facets = (Facet("sequence", ("seq-a",)), Facet("percentile", ("q50",)))
    >>> records = [{
    ...     "name": "seq-a-q50", "sequence": "seq-a", "percentile": "q50",
    ...     "datapoints": [{"x": 0, "y": 5}, {"x": 1, "y": 8}],
    ... }]
    >>> catalog_from_records(records, facets)["seq-a-q50"].points
    ((0.0, 5.0), (1.0, 8.0))
    """
    facets = tuple(facets)
    built: list[Series] = []
    for record in records:
        if "name" not in record:
            raise ValueError(f"Series record is missing 'name': {dict(record)!r}")
        name = record["name"]
        facet_values: dict[str, str] = {}
        for facet in facets:
            if facet.name not in record:
                raise UnknownFacet(facet.name, tuple(k for k in record if k != "name"))
            facet_values[facet.name] = record[facet.name]

        if "datapoints" in record:
            points = list(record["datapoints"])
            x = [p["x"] for p in points]
            y = [p["y"] for p in points]
        else:
            x = record.get("x", ())
            y = record.get("y", ())

        built.append(
            Series(
                name=name,
                facet_values=facet_values,
                x=x,
                y=y,
                color=record.get("color"),
                dash=record.get("dash"),
                symbol=record.get("symbol"),
            )
        )
    return SeriesCatalog(facets, built)


SEQUENCE_FACET = Facet("sequence", ("seq-a", "seq-b"))
PERCENTILE_FACET = Facet("percentile", ("q99", "q50"))


def demo_catalog() -> SeriesCatalog:
    """Return the two-sequence, two-percentile catalog used in examples and tests."""
    records = [
        {"name": "seq-a-q50", "sequence": "seq-a", "percentile": "q50", "color": "pink",
         "x": (0, 1, 2), "y": (5, 8, 5)},
        {"name": "seq-a-q99", "sequence": "seq-a", "percentile": "q99", "color": "red",
         "x": (0, 1, 2), "y": (6, 9, 6)},
        {"name": "seq-b-q50", "sequence": "seq-b", "percentile": "q50", "color": "teal",
         "x": (0, 1, 2), "y": (1, 4, 1)},
        {"name": "seq-b-q99", "sequence": "seq-b", "percentile": "q99", "color": "blue",
         "x": (0, 1, 2), "y": (2, 5, 2)},
    ]
    return catalog_from_records(records, (PERCENTILE_FACET, SEQUENCE_FACET))


__all__ = [
    "Facet",
    "Series",
    "SeriesCatalog",
    "catalog_from_records",
    "SEQUENCE_FACET",
    "PERCENTILE_FACET",
    "demo_catalog",
]
