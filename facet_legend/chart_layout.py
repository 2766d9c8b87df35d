"""Chart layout primitives.

This module builds the notebook widget tree used by :class:`FacetChart`: a
title bar, the plot area, and a legend sidebar holding one block per facet.
"""

from __future__ import annotations

from typing import Any, Optional

import ipywidgets as widgets
from IPython.display import display

_PANEL_BORDER = "1px solid rgba(15,23,42,0.08)"


class OneShotOutput(widgets.Output):
    """An ``Output`` widget that refuses to be displayed twice.

    Widgets are live objects bound to one frontend view; displaying the same
    chart twice leaves two legends driving one filter state. The second
    display attempt raises ``RuntimeError`` instead.
    """

    __slots__ = ("_displayed",)

    def __init__(self) -> None:
        super().__init__()
        self._displayed = False

    def _repr_mimebundle_(self, include: Any = None, exclude: Any = None, **kwargs: Any) -> Any:
        if self._displayed:
            raise RuntimeError(
                "This chart output has already been displayed. Create a new chart "
                "or call reset_display_state() to display it again."
            )
        self._displayed = True
        return super()._repr_mimebundle_(include=include, exclude=exclude, **kwargs)

    @property
    def has_been_displayed(self) -> bool:
        return self._displayed

    def reset_display_state(self) -> None:
        """Allow the output to be displayed again."""
        self._displayed = False


class ChartLayout:
    """
    Manages the widget hierarchy of a :class:`FacetChart`.

    Responsibilities:
    - Building the HBox/VBox structure.
    - Providing the plot container.
    - Exposing the legend sidebar container.
    - Hiding the sidebar while it has nothing to show.
    """

    def __init__(self, title: str = "") -> None:
        """Build the widget tree.

        Parameters
        ----------
        title : str, optional
            Initial title text (rendered as HTML in the header).
        """
        # 1. Title Bar
        self.title_html = widgets.HTMLMath(value=title, layout=widgets.Layout(margin="0px"))
        self._titlebar = widgets.HBox(
            [self.title_html],
            layout=widgets.Layout(width="100%", align_items="center", margin="0 0 6px 0"),
        )

        # 2. Plot Area
        #    Ensure a real pixel height for Plotly sizing.
        self.plot_container = widgets.Box(
            children=(),
            layout=widgets.Layout(
                width="100%",
                height="60vh",
                min_width="320px",
                min_height="260px",
                margin="0px",
                padding="0px",
                flex="1 1 560px",
            ),
        )

        # 3. Legend Sidebar
        #    Hidden until the legend panel has rows.
        self.legend_header = widgets.HTML(
            "<b>Legend</b>", layout=widgets.Layout(display="none", margin="0")
        )
        self.legend_box = widgets.VBox(
            layout=widgets.Layout(
                width="100%",
                display="none",
                padding="8px",
                border=_PANEL_BORDER,
                border_radius="10px",
            )
        )
        self.sidebar_container = widgets.VBox(
            [self.legend_header, self.legend_box],
            layout=widgets.Layout(
                margin="0px",
                padding="0px 0px 0px 10px",
                flex="0 1 280px",
                min_width="200px",
                max_width="320px",
                display="none",
            ),
        )

        # 4. Main Content Wrapper
        #    flex-wrap drops the sidebar below the plot on narrow screens.
        self.content_wrapper = widgets.Box(
            [self.plot_container, self.sidebar_container],
            layout=widgets.Layout(
                display="flex",
                flex_flow="row wrap",
                align_items="flex-start",
                width="100%",
                gap="8px",
            ),
        )

        self.root_widget = widgets.VBox(
            [self._titlebar, self.content_wrapper],
            layout=widgets.Layout(width="100%", position="relative"),
        )
        self._output: Optional[OneShotOutput] = None

    @property
    def output_widget(self) -> OneShotOutput:
        """Return the layout's :class:`OneShotOutput`, built on first access."""
        if self._output is None:
            self._output = OneShotOutput()
            with self._output:
                display(self.root_widget)
        return self._output

    def set_title(self, text: str) -> None:
        self.title_html.value = text

    def get_title(self) -> str:
        return self.title_html.value

    def set_plot_widget(self, widget: widgets.Widget) -> None:
        """Attach the plot widget to the plot area."""
        self.plot_container.children = (widget,)

    def update_sidebar_visibility(self, has_legend: bool) -> None:
        """Show the legend header, box and sidebar only when rows exist."""
        self.legend_header.layout.display = "block" if has_legend else "none"
        self.legend_box.layout.display = "flex" if has_legend else "none"
        self.sidebar_container.layout.display = "flex" if has_legend else "none"


__all__ = ["ChartLayout", "OneShotOutput"]
