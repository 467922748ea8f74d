"""
Detail view: one volcano, selected by the `id` query parameter.
"""
import re
import html
import logging
import streamlit as st
from typing import Optional

from utils.config import CONFIG
from utils.view_state import ViewState
from utils.map_utils import (
    create_detail_figure,
    create_static_legend_html,
    create_details_html,
)

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Volcano not found!"


def parse_row_id(raw: Optional[str], row_count: int) -> Optional[int]:
    """
    Validate the `id` query parameter.

    Args:
        raw (str, optional): Raw parameter value
        row_count (int): Number of rows in the dataset

    Returns:
        Optional[int]: The row index if it is a non-negative integer below
        row_count, otherwise None
    """
    if raw is None:
        return None
    text = str(raw).strip()
    if not re.fullmatch(r"[0-9]+", text):
        return None
    row = int(text)
    if row >= row_count:
        return None
    return row


def back_to_map():
    st.query_params.clear()
    st.rerun()


def render_detail_view(state: ViewState, raw_id: Optional[str]):
    """
    Render the detail view, or an inline error when the id is invalid.

    Args:
        state (ViewState): Derived dataset state
        raw_id (str, optional): Value of the `id` query parameter
    """
    row = parse_row_id(raw_id, state.row_count)
    if row is None:
        logger.warning(f"Invalid volcano id {raw_id!r} for {state.row_count} rows")
        st.error(NOT_FOUND_MESSAGE)
        st.stop()

    record = state.dataset[row]
    name = record.name or "Volcano"
    st.markdown(
        f"<h1 class='detail-title' style='color:{CONFIG['accent_color']};'>{html.escape(name)}</h1>",
        unsafe_allow_html=True,
    )

    legend_col, circle_col, info_col = st.columns([1, 2, 1])

    with legend_col:
        st.markdown(create_static_legend_html(state), unsafe_allow_html=True)

    with circle_col:
        width = max(CONFIG["detail_size_range"][1] + 40, CONFIG["canvas_width"] // 2)
        fig = create_detail_figure(record, state, width, CONFIG["canvas_height"])
        if fig is None:
            st.info("Elevation not available for this volcano; no circle to draw.")
        else:
            st.plotly_chart(fig, key="detail_circle", width="content", config={"displayModeBar": False, "staticPlot": True})

    with info_col:
        st.markdown(create_details_html(record, state.columns), unsafe_allow_html=True)
        if st.button("← Back to map", key="back_to_map"):
            back_to_map()
