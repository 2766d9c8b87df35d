"""Property-based checks for the visibility filter invariants.

Random click sequences over the demo catalog exercise the algebraic contract
of the toggle engine and the projection beyond example-based tests.
"""

from __future__ import annotations

from importlib import import_module

import pytest

facet_legend = import_module("facet_legend")
VisibilityFilterState = facet_legend.VisibilityFilterState
demo_catalog = facet_legend.demo_catalog
project = facet_legend.project
toggle = facet_legend.toggle
toggle_many = facet_legend.toggle_many

try:
    from hypothesis import assume, given
    from hypothesis import strategies as st
except ModuleNotFoundError:  # pragma: no cover - environment-specific fallback
    pytest.skip("hypothesis is required for property-based tests", allow_module_level=True)


CATALOG = demo_catalog()
INITIAL = VisibilityFilterState.initial(CATALOG.facets)
CLICKS = st.sampled_from(
    [(facet.name, value) for facet in CATALOG.facets for value in facet.values]
)
CLICK_SEQUENCES = st.lists(CLICKS, max_size=12)
STATES = CLICK_SEQUENCES.map(lambda clicks: toggle_many(INITIAL, clicks))


@given(state=STATES, click=CLICKS)
def test_double_toggle_is_identity(state, click) -> None:
    facet, value = click
    assert toggle(toggle(state, facet, value), facet, value) == state


@given(state=STATES, first=CLICKS, second=CLICKS)
def test_toggles_on_distinct_facets_commute(state, first, second) -> None:
    assume(first[0] != second[0])
    left = toggle(toggle(state, *first), *second)
    right = toggle(toggle(state, *second), *first)
    assert left == right


@given(clicks=CLICK_SEQUENCES)
def test_hidden_series_match_any_hidden_facet_value(clicks) -> None:
    state = toggle_many(INITIAL, clicks)
    result = project(CATALOG, state)

    for series in CATALOG:
        expected_hidden = any(
            series.value_for(facet) in hidden for facet, hidden in state.items()
        )
        assert (series.name in result.hidden_names) is expected_hidden


@given(clicks=CLICK_SEQUENCES)
def test_dimmed_labels_always_match_hidden_values(clicks) -> None:
    state = toggle_many(INITIAL, clicks)
    result = project(CATALOG, state)

    union = frozenset().union(*(hidden for _, hidden in state.items()))
    assert result.dimmed_labels == union
    for entries in result.legend_entries.values():
        for entry in entries:
            assert entry.dimmed is (entry.label in union)
    for facet, entries in result.legend_entries.items():
        hidden = state.hidden_values(facet)
        for entry in entries:
            assert entry.hidden is (entry.label in hidden)


@given(clicks=CLICK_SEQUENCES)
def test_projection_never_reorders_series(clicks) -> None:
    result = project(CATALOG, toggle_many(INITIAL, clicks))

    expected = tuple(name for name in CATALOG.names if name not in result.hidden_names)
    assert result.visible_names == expected


@given(clicks=CLICK_SEQUENCES)
def test_each_value_hidden_iff_clicked_odd_number_of_times(clicks) -> None:
    state = toggle_many(INITIAL, clicks)

    for facet in CATALOG.facets:
        for value in facet.values:
            count = clicks.count((facet.name, value))
            assert (value in state.hidden_values(facet.name)) is (count % 2 == 1)
