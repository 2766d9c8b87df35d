"""Toggle engine for the facet visibility filter.

``toggle`` is the only transition of :class:`VisibilityFilterState`: it flips
one value in one facet's hidden set (a symmetric difference with
``{value}``). Consequences:

- toggling the same ``(facet, value)`` twice restores the original state,
- toggles on different facets commute, since facets own disjoint hidden sets,
- the input state is never mutated; a new state is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .FilterState import VisibilityFilterState
from .chart_errors import UnknownFacetValue

# Module logger
# - Uses a NullHandler so importing this module never configures global logging.
# - Callers can enable logs via standard logging configuration.
logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())


def toggle(
    state: VisibilityFilterState,
    facet: str,
    value: str,
    *,
    strict: bool = False,
) -> VisibilityFilterState:
    """Flip ``value`` in ``facet``'s hidden set.

    Parameters
    ----------
    state : VisibilityFilterState
        Current filter state.
    facet : str
        Facet the activated legend entry belongs to.
    value : str
        Facet value the entry represents.
    strict : bool, optional
        If ``True``, reject values that are not declared on ``facet``.

    Returns
    -------
    VisibilityFilterState
        The next state.

    Raises
    ------
    UnknownFacet
        If ``facet`` is not declared on ``state``.
    UnknownFacetValue
        If ``strict`` is set and ``value`` is not declared on ``facet``.

    Notes
    -----
    Outside strict mode an undeclared value is still toggled: it matches no
    series, so nothing visible changes, but the next identical click restores
    the previous state.
    """
    declared = state.facet(facet)
    if value not in declared.values:
        if strict:
            raise UnknownFacetValue(facet, value, declared.values)
        logger.warning("toggle(%s, %r): value is not declared on this facet", facet, value)

    hidden = state.hidden_values(facet) ^ {value}
    nxt = state.with_hidden_values(facet, hidden)
    if logger.isEnabledFor(logging.DEBUG):
        action = "hide" if value in hidden else "show"
        logger.debug(f"toggle {facet}={value} -> {action}; hidden={nxt.as_dict()}")
    return nxt


def toggle_many(
    state: VisibilityFilterState,
    pairs: Iterable[tuple[str, str]],
    *,
    strict: bool = False,
) -> VisibilityFilterState:
    """Apply :func:`toggle` for each ``(facet, value)`` pair in order."""
    for facet, value in pairs:
        state = toggle(state, facet, value, strict=strict)
    return state


__all__ = ["toggle", "toggle_many"]
