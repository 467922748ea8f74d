"""
Map view: every volcano as a circle on a pixel canvas, with a legend in the
sidebar that filters by type and by recency of the last eruption. Clicking a
circle opens the detail view for that row.
"""
import logging
import streamlit as st
from typing import Any, Dict, List, Optional, Tuple

from utils.config import CONFIG
from utils.volcano_types import ScreenBox, MapMarker
from utils.view_state import ViewState, FilterState, build_markers
from utils.visual_encoding import hit_test
from utils.map_utils import (
    create_volcano_map,
    legend_dot_html,
    eruption_legend_entries,
    size_note_html,
)

logger = logging.getLogger(__name__)


def render_legend(state: ViewState) -> FilterState:
    """
    Draw the interactive legend and read the checkbox values.

    Returns:
        FilterState: One entry per category and per eruption code
    """
    filters = FilterState.all_visible(state)

    st.sidebar.markdown("**Volcano type**")
    for category in state.categories:
        dot_col, box_col = st.sidebar.columns([1, 8])
        dot_col.markdown(legend_dot_html(state.color_table[category]), unsafe_allow_html=True)
        visible = box_col.checkbox(category, value=True, key=f"category_{category}")
        filters.set_category(category, visible)

    st.sidebar.markdown("**Opacity = recency of last eruption**")
    for entry in eruption_legend_entries():
        dot_col, box_col = st.sidebar.columns([1, 8])
        dot_col.markdown(legend_dot_html(entry["swatch"]), unsafe_allow_html=True)
        visible = box_col.checkbox(entry["label"], value=True, key=f"eruption_{entry['code']}")
        filters.set_eruption(entry["code"], visible)

    st.sidebar.markdown(size_note_html(), unsafe_allow_html=True)
    return filters


def render_canvas_controls() -> Tuple[int, int]:
    """Sidebar sliders standing in for window resizing."""
    st.sidebar.markdown("---")
    st.sidebar.subheader("Display")
    width = st.sidebar.slider(
        "Canvas width", CONFIG["canvas_min_size"], CONFIG["canvas_max_size"],
        CONFIG["canvas_width"], step=50, key="canvas_width",
    )
    height = st.sidebar.slider(
        "Canvas height", CONFIG["canvas_min_size"], CONFIG["canvas_max_size"],
        CONFIG["canvas_height"], step=50, key="canvas_height",
    )
    return width, height


def screen_box(width: int, height: int) -> ScreenBox:
    return ScreenBox.for_canvas(
        width, height,
        outer_margin=CONFIG["outer_margin"],
        legend_offset=CONFIG["legend_offset"],
        title_offset=CONFIG["title_offset"],
    )


def selected_row(points: List[Dict[str, Any]], markers: List[MapMarker]) -> Optional[int]:
    """
    Resolve a chart click against the visible markers.

    The chart only reports a point while the cursor is inside that point's
    marker (hoverdistance=1), so the picked point is the hit. Its row comes
    from `customdata`, or from `point_index` when customdata is missing. The
    reported x/y is the marker center, never the cursor, and is only used to
    drop a selection left over from a different canvas.

    Args:
        points: Selection points reported by the chart; only the first is used
        markers: Markers visible in this run

    Returns:
        Optional[int]: Row index of the clicked marker, or None on a miss
    """
    if not points:
        return None
    point = points[0]

    row = point.get("customdata")
    if isinstance(row, (list, tuple)):
        row = row[0] if row else None
    if row is None:
        position = point.get("point_index", point.get("point_number"))
        if position is None or not 0 <= int(position) < len(markers):
            return None
        row = markers[int(position)].row_index

    by_row = {marker.row_index: marker for marker in markers}
    marker = by_row.get(int(row))
    if marker is None:
        return None

    x, y = point.get("x"), point.get("y")
    if x is not None and y is not None:
        return hit_test((float(x), float(y)), [marker])
    return marker.row_index


def navigate_to_detail(row_index: int):
    logger.info(f"Opening detail view for row {row_index}")
    # A fresh chart key drops the old selection so returning to the map
    # does not immediately navigate again
    st.session_state.map_nonce += 1
    st.query_params["id"] = str(row_index)
    st.rerun()


def render_map_view(state: ViewState):
    """
    Render the map view.

    Args:
        state (ViewState): Derived dataset state
    """
    st.sidebar.title("Legend")
    filters = render_legend(state)
    width, height = render_canvas_controls()

    markers = build_markers(state, filters, screen_box(width, height), CONFIG["map_size_range"])
    st.markdown(f"Showing {len(markers)} of {state.row_count} volcanoes")

    if state.bounds is None:
        st.info("No volcano in the dataset has valid coordinates; the map is empty.")

    fig = create_volcano_map(markers, state, width, height)
    event = st.plotly_chart(
        fig,
        key=f"volcano_map_{st.session_state.map_nonce}",
        # Keep the figure's own pixel width; stretching would move the markers
        width="content",
        on_select="rerun",
        selection_mode="points",
        config={"displayModeBar": False, "scrollZoom": False},
    )

    points = event.selection.points if event and event.selection else []
    row_index = selected_row(points, markers)
    if row_index is not None:
        navigate_to_detail(row_index)
