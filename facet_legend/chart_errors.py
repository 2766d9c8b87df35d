"""Exception types raised by the facet visibility filter.

Both concrete errors double as the builtin exception a caller would naturally
catch (``KeyError`` for a missing facet, ``ValueError`` for an undeclared
value), so code that already guards lookups keeps working.
"""

from __future__ import annotations


class FacetFilterError(Exception):
    """Base class for facet filter configuration and lookup errors."""


class UnknownFacet(FacetFilterError, KeyError):
    """Raised when a facet name is not declared on the catalog or state."""

    def __init__(self, facet: str, known: tuple[str, ...] = ()) -> None:
        self.facet = facet
        self.known = tuple(known)
        super().__init__(facet)

    def __str__(self) -> str:
        if self.known:
            return f"Unknown facet {self.facet!r}; declared facets: {', '.join(self.known)}"
        return f"Unknown facet {self.facet!r}"


class UnknownFacetValue(FacetFilterError, ValueError):
    """Raised when a value (or legend index) does not belong to a facet."""

    def __init__(self, facet: str, value: object, known: tuple[str, ...] = ()) -> None:
        self.facet = facet
        self.value = value
        self.known = tuple(known)
        message = f"Value {value!r} is not declared on facet {facet!r}"
        if self.known:
            message += f" (declared: {', '.join(self.known)})"
        super().__init__(message)


__all__ = ["FacetFilterError", "UnknownFacet", "UnknownFacetValue"]
