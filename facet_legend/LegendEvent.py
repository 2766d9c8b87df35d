"""Standardized legend-activation event payloads.

This module defines ``LegendEvent``, the immutable structure emitted by
``LegendEventAdapter`` after each filter transition and consumed by chart
hooks.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .FilterState import VisibilityFilterState
    from .chart_projection import Projection


@dataclass(frozen=True)
class LegendEvent:
    """Normalized filter transition emitted by the legend event adapter.

    Parameters
    ----------
    facet : str or None
        Facet whose legend entry was activated (``None`` for a reset).
    index : int or None
        Position of the entry within the facet's legend block, when the
        transition came from a legend click.
    value : str or None
        Facet value that was toggled (``None`` for a reset).
    old : VisibilityFilterState
        State before the transition.
    new : VisibilityFilterState
        State after the transition.
    projection : Projection
        Projection of ``new`` over the chart's catalog.

    Notes
    -----
    Consumers should prefer ``projection`` for redraws and ``old``/``new`` for
    diagnostics.
    """

    facet: Optional[str]
    index: Optional[int]
    value: Optional[str]
    old: "VisibilityFilterState"
    new: "VisibilityFilterState"
    projection: "Projection"

    @property
    def is_reset(self) -> bool:
        return self.facet is None

    @property
    def hid(self) -> bool:
        """Return ``True`` when the toggled value became hidden."""
        if self.facet is None:
            return False
        return self.value in self.new.hidden_values(self.facet)
