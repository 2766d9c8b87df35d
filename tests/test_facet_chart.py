from __future__ import annotations

import logging

import pytest

from facet_legend import ChartSnapshot, FacetChart


def _visible_traces(chart: FacetChart) -> list[str]:
    return [trace.name for trace in chart.figure_widget.data if trace.visible is True]


def test_chart_draws_one_trace_per_series_in_catalog_order(catalog) -> None:
    chart = FacetChart(catalog, title="Latency", x_range=(0, 2), y_range=(0, 9))

    names = [trace.name for trace in chart.figure_widget.data]
    assert names == list(catalog.names)
    assert _visible_traces(chart) == list(catalog.names)
    assert chart.figure_widget.layout.showlegend is False
    assert tuple(chart.figure_widget.layout.xaxis.range) == (0.0, 2.0)
    assert chart.trace_for("seq-b-q99").line.color == "blue"
    assert chart.trace_for("seq-a-q50").mode == "lines+markers"


def test_legend_click_hides_traces_and_keeps_order(catalog) -> None:
    chart = FacetChart(catalog)

    chart.on_legend_activate("percentile", 0)
    assert _visible_traces(chart) == ["seq-a-q50", "seq-b-q50"]

    chart.on_legend_activate("sequence", 0)
    assert _visible_traces(chart) == ["seq-b-q50"]
    assert [trace.name for trace in chart.figure_widget.data] == list(catalog.names)


def test_panel_checkbox_drives_chart(catalog) -> None:
    chart = FacetChart(catalog)

    chart.legend.row("sequence", 1).toggle.value = False

    assert _visible_traces(chart) == ["seq-a-q50", "seq-a-q99"]
    assert chart.trace_for("seq-b-q50").visible is False


def test_hide_and_show_are_idempotent(catalog) -> None:
    chart = FacetChart(catalog)

    chart.hide("percentile", "q99")
    chart.hide("percentile", "q99")
    assert chart.state.hidden_values("percentile") == {"q99"}

    chart.show("percentile", "q99", "q50")
    assert chart.state.is_pristine
    assert _visible_traces(chart) == list(catalog.names)


def test_show_does_not_reveal_lines_hidden_by_other_facet(catalog) -> None:
    chart = FacetChart(catalog)
    chart.hide("sequence", "seq-a")
    chart.hide("percentile", "q50")

    chart.show("percentile", "q50")

    assert _visible_traces(chart) == ["seq-b-q50", "seq-b-q99"]


def test_reset_and_snapshot(catalog) -> None:
    chart = FacetChart(catalog, title="Latency")
    chart.toggle("sequence", "seq-a")
    chart.toggle("percentile", "q99")

    snap = chart.snapshot()
    assert isinstance(snap, ChartSnapshot)
    assert snap.title == "Latency"
    assert snap.hidden_values == {"percentile": ("q99",), "sequence": ("seq-a",)}
    assert snap.visible_series == ("seq-b-q50",)
    assert snap.dimmed_labels == ("q99", "seq-a")

    chart.reset()
    assert _visible_traces(chart) == list(catalog.names)
    assert all(not row.dimmed for row in chart.legend.rows_for("sequence"))


def test_hooks_run_after_redraw(catalog) -> None:
    chart = FacetChart(catalog)
    seen = []

    def _hook(event):
        seen.append((event.value, chart.trace_for("seq-a-q50").visible))

    hook_id = chart.add_hook(_hook)
    chart.toggle("sequence", "seq-a")
    chart.remove_hook(hook_id)
    chart.toggle("sequence", "seq-a")

    assert seen == [("seq-a", False)]


def test_sidebar_is_visible_when_legend_has_rows(catalog) -> None:
    chart = FacetChart(catalog)

    assert chart._layout.sidebar_container.layout.display == "flex"
    assert chart._layout.legend_box.layout.display == "flex"


def test_render_logging_reports_visible_count(catalog, caplog) -> None:
    chart = FacetChart(catalog)

    with caplog.at_level(logging.INFO, logger="facet_legend.FacetChart"):
        chart._render_info_last_log_t = float("-inf")
        chart.hide("percentile", "q50")

    assert "render(reason=legend) visible=2/4" in caplog.text


def test_invalid_axis_range_is_rejected(catalog) -> None:
    with pytest.raises(ValueError, match="x_range must be increasing"):
        FacetChart(catalog, x_range=(2, 0))


def test_charts_over_one_catalog_are_independent(catalog) -> None:
    first = FacetChart(catalog)
    second = FacetChart(catalog)

    first.hide("sequence", "seq-b")

    assert second.state.is_pristine
    assert _visible_traces(second) == list(catalog.names)


def _chart_debug_messages(caplog) -> list[str]:
    return [
        record.getMessage()
        for record in caplog.records
        if record.name == "facet_legend.FacetChart" and record.levelno == logging.DEBUG
    ]


def test_debug_flag_is_scoped_to_its_chart(catalog, caplog) -> None:
    chart_logger = logging.getLogger("facet_legend.FacetChart")
    level_before = chart_logger.level

    loud = FacetChart(catalog, debug=True)
    quiet = FacetChart(catalog, debug=False)
    assert chart_logger.level == level_before

    with caplog.at_level(logging.DEBUG, logger="facet_legend.FacetChart"):
        quiet.hide("sequence", "seq-a")
        assert _chart_debug_messages(caplog) == []
        loud._render_debug_last_log_t = float("-inf")
        loud.hide("sequence", "seq-b")

    assert _chart_debug_messages(caplog) == [
        "hidden={'percentile': [], 'sequence': ['seq-b']} dimmed=['seq-b']"
    ]


def test_chart_output_is_built_once_and_refuses_second_display(catalog) -> None:
    chart = FacetChart(catalog)
    out = chart._layout.output_widget

    assert chart._layout.output_widget is out
    assert out.has_been_displayed is False

    out._repr_mimebundle_()
    assert out.has_been_displayed is True
    with pytest.raises(RuntimeError, match="already been displayed"):
        out._repr_mimebundle_()

    out.reset_display_state()
    out._repr_mimebundle_()
