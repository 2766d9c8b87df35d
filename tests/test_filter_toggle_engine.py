"""Toggle-engine semantics: symmetric difference, idempotence and facet independence."""

from __future__ import annotations

import logging

import pytest

from facet_legend import (
    Facet,
    Series,
    SeriesCatalog,
    UnknownFacet,
    UnknownFacetValue,
    VisibilityFilterState,
    project,
    toggle,
    toggle_many,
)


def _scenario_catalog() -> SeriesCatalog:
    sequence = Facet("sequence", ("A", "B"))
    percentile = Facet("percentile", ("q50", "q99"))
    series = [
        Series(f"{seq}-{pct}", {"sequence": seq, "percentile": pct}, [0, 1], [1, 2])
        for seq in ("A", "B")
        for pct in ("q50", "q99")
    ]
    return SeriesCatalog((sequence, percentile), series)


def test_scenario_toggle_sequence_of_clicks() -> None:
    catalog = _scenario_catalog()
    state0 = VisibilityFilterState.initial(catalog.facets)

    state1 = toggle(state0, "percentile", "q99")
    result = project(catalog, state1)
    assert result.visible_names == ("A-q50", "B-q50")
    assert result.dimmed_labels == {"q99"}

    state2 = toggle(state1, "sequence", "A")
    result = project(catalog, state2)
    assert result.visible_names == ("B-q50",)
    assert result.dimmed_labels == {"q99", "A"}

    state3 = toggle(state2, "percentile", "q99")
    result = project(catalog, state3)
    # Sequence A is still hidden, so only B's lines come back.
    assert result.visible_names == ("B-q50", "B-q99")
    assert result.dimmed_labels == {"A"}


def test_initial_state_hides_nothing() -> None:
    catalog = _scenario_catalog()
    state = VisibilityFilterState.initial(catalog.facets)

    assert state.is_pristine is True
    assert state.dimmed_labels == frozenset()
    assert state.as_dict() == {"sequence": [], "percentile": []}
    assert project(catalog, state).visible_names == catalog.names


def test_double_toggle_restores_state_and_equal_hash() -> None:
    catalog = _scenario_catalog()
    state = toggle(VisibilityFilterState.initial(catalog.facets), "sequence", "B")

    again = toggle(toggle(state, "percentile", "q50"), "percentile", "q50")

    assert again == state
    assert hash(again) == hash(state)


def test_toggle_returns_new_state_without_mutating_input() -> None:
    catalog = _scenario_catalog()
    state = VisibilityFilterState.initial(catalog.facets)

    nxt = toggle(state, "sequence", "A")

    assert nxt is not state
    assert state.hidden_values("sequence") == frozenset()
    assert nxt.hidden_values("sequence") == {"A"}


def test_toggles_on_different_facets_commute() -> None:
    catalog = _scenario_catalog()
    state = VisibilityFilterState.initial(catalog.facets)

    left = toggle(toggle(state, "sequence", "A"), "percentile", "q99")
    right = toggle(toggle(state, "percentile", "q99"), "sequence", "A")

    assert left == right


def test_unknown_facet_is_rejected() -> None:
    state = VisibilityFilterState.initial(_scenario_catalog().facets)

    with pytest.raises(UnknownFacet, match="colour"):
        toggle(state, "colour", "red")

    # UnknownFacet is also a KeyError for callers guarding lookups.
    with pytest.raises(KeyError):
        toggle(state, "colour", "red")


def test_undeclared_value_is_toggled_and_logged(caplog) -> None:
    catalog = _scenario_catalog()
    state = VisibilityFilterState.initial(catalog.facets)

    with caplog.at_level(logging.WARNING, logger="facet_legend.chart_toggle"):
        nxt = toggle(state, "percentile", "q75")

    assert nxt.hidden_values("percentile") == {"q75"}
    assert project(catalog, nxt).visible_names == catalog.names
    assert "not declared" in caplog.text
    assert toggle(nxt, "percentile", "q75") == state


def test_strict_mode_rejects_undeclared_value() -> None:
    state = VisibilityFilterState.initial(_scenario_catalog().facets)

    with pytest.raises(UnknownFacetValue, match="q75"):
        toggle(state, "percentile", "q75", strict=True)

    assert toggle(state, "percentile", "q99", strict=True).hidden_values("percentile") == {"q99"}


def test_toggle_many_folds_pairs_in_order() -> None:
    catalog = _scenario_catalog()
    state = VisibilityFilterState.initial(catalog.facets)

    result = toggle_many(state, [("sequence", "A"), ("percentile", "q50"), ("sequence", "A")])

    assert result.as_dict() == {"sequence": [], "percentile": ["q50"]}
