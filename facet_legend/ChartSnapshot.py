"""Immutable snapshot of a chart's filter and visibility state.

A ``ChartSnapshot`` captures what a viewer currently sees: which facet values
are toggled off, which series remain drawn, and which legend labels are
dimmed. It is meant for inspection and test assertions; nothing persists it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class ChartSnapshot:
    """Immutable record of one chart's filter state.

    Parameters
    ----------
    title : str
        Chart title text.
    hidden_values : dict[str, tuple[str, ...]]
        Facet name to its hidden values, sorted, in declared facet order.
    visible_series : tuple[str, ...]
        Names of drawn series, in catalog order.
    dimmed_labels : tuple[str, ...]
        Dimmed legend labels, sorted.
    """

    title: str
    hidden_values: Dict[str, tuple[str, ...]]
    visible_series: tuple[str, ...]
    dimmed_labels: tuple[str, ...]

    def __repr__(self) -> str:
        return (
            f"ChartSnapshot(title={self.title!r}, "
            f"visible={len(self.visible_series)}, "
            f"dimmed={list(self.dimmed_labels)!r})"
        )
