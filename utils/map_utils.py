"""
Map utilities for the volcano visualization.

This module builds the Plotly figures for the map and detail views and the
HTML snippets for legends, tooltips and the field listing. Figures use axes
pinned to screen pixels (y grows downwards) so marker positions match the
coordinates produced by project_point.
"""

import html
import plotly.graph_objects as go
from typing import Dict, List, Optional

from utils.config import CONFIG
from utils.volcano_types import VolcanoRecord, MapMarker
from utils.view_state import ViewState
from utils.visual_encoding import ERUPTION_OPACITY, ERUPTION_PERIODS, eruption_opacity

HOVER_LABEL = dict(
    bgcolor="rgba(0,0,0,0.7)",
    bordercolor="#ffffff",
    font=dict(color="#ffffff", size=14, family="Helvetica, Arial, sans-serif"),
    align="left",
)


def tooltip_lines(record: VolcanoRecord, columns: List[str]) -> List[str]:
    """
    One "column: value" line per field of the record, in column order.

    Args:
        record (VolcanoRecord): The hovered volcano
        columns (List[str]): Dataset columns

    Returns:
        List[str]: Tooltip lines
    """
    return [f"{col}: {record.get(col)}" for col in columns]


def tooltip_text(record: VolcanoRecord, columns: List[str]) -> str:
    return "<br>".join(html.escape(line) for line in tooltip_lines(record, columns))


def _screen_layout(fig: go.Figure, width: int, height: int):
    background = CONFIG["background_color"]
    fig.update_layout(
        width=width,
        height=height,
        margin=dict(l=0, r=0, t=0, b=0),
        paper_bgcolor=background,
        plot_bgcolor=background,
        showlegend=False,
        dragmode=False,
        hovermode="closest",
        # Only report a point while the cursor is inside its marker
        hoverdistance=1,
        hoverlabel=HOVER_LABEL,
        xaxis=dict(range=[0, width], visible=False, fixedrange=True),
        # Reversed so that y = 0 is the top edge, as on a canvas
        yaxis=dict(range=[height, 0], visible=False, fixedrange=True),
    )


def _add_title_block(fig: go.Figure, width: int):
    center = width / 2
    fig.add_annotation(
        x=center, y=40, xref="x", yref="y", yanchor="top", showarrow=False,
        text=f"<b>{html.escape(CONFIG['title'])}</b>",
        font=dict(size=48, color="#ffffff"),
    )
    fig.add_annotation(
        x=center, y=95, xref="x", yref="y", yanchor="top", showarrow=False,
        text=html.escape(CONFIG["subtitle"]),
        font=dict(size=18, color="#ffffff"),
    )
    fig.add_annotation(
        x=center, y=120, xref="x", yref="y", yanchor="top", showarrow=False,
        text=html.escape(CONFIG["hint"]),
        font=dict(size=15, color=CONFIG["accent_color"]),
    )


def create_volcano_map(markers: List[MapMarker], state: ViewState,
                       width: int, height: int) -> go.Figure:
    """
    Create the map figure with one circle per visible volcano.

    Args:
        markers (List[MapMarker]): Visible markers in dataset order; later
            markers are drawn on top of earlier ones
        state (ViewState): Derived dataset state, used for tooltip text
        width (int): Canvas width in pixels
        height (int): Canvas height in pixels

    Returns:
        go.Figure: Plotly figure ready for st.plotly_chart
    """
    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[m.x for m in markers],
        y=[m.y for m in markers],
        mode="markers",
        marker=dict(
            size=[m.diameter for m in markers],
            sizemode="diameter",
            color=[m.fill for m in markers],
            line=dict(width=0),
        ),
        # Keep every circle at its own alpha when a point is clicked
        selected=dict(marker=dict(opacity=1)),
        unselected=dict(marker=dict(opacity=1)),
        customdata=[m.row_index for m in markers],
        hovertext=[tooltip_text(state.dataset[m.row_index], state.columns) for m in markers],
        hoverinfo="text",
        name="Volcanoes",
    ))
    _screen_layout(fig, width, height)
    fig.update_layout(clickmode="event+select")
    _add_title_block(fig, width)
    return fig


def create_detail_figure(record: VolcanoRecord, state: ViewState,
                         width: int, height: int) -> Optional[go.Figure]:
    """
    Create the single-circle figure of the detail view.

    Returns:
        Optional[go.Figure]: None when the record has no valid elevation
    """
    diameter = state.diameter_for(record, CONFIG["detail_size_range"])
    if diameter is None:
        return None

    fig = go.Figure()
    fig.add_trace(go.Scatter(
        x=[width / 2],
        y=[height / 2 + CONFIG["detail_center_offset"]],
        mode="markers",
        marker=dict(size=[diameter], sizemode="diameter",
                    color=[state.fill_for(record)], line=dict(width=0)),
        hoverinfo="skip",
        name=record.name,
    ))
    _screen_layout(fig, width, height)
    return fig


def legend_dot_html(background: str, size: int = 15) -> str:
    return (
        f'<span style="display:inline-block; width:{size}px; height:{size}px; '
        f'background-color:{background}; border-radius:50%; margin-right:6px; '
        f'vertical-align:middle;"></span>'
    )


def eruption_legend_entries() -> List[Dict[str, object]]:
    """Code, period label and legend swatch color for each eruption code."""
    entries = []
    for code in ERUPTION_OPACITY:
        alpha = eruption_opacity(code, ERUPTION_OPACITY)
        entries.append({
            "code": code,
            "label": f"{code}: {ERUPTION_PERIODS[code]}",
            "swatch": f"rgba(200,200,200,{alpha / 255:.3f})",
        })
    return entries


def size_note_html(single: bool = False) -> str:
    subject = "the circle" if single else "the circles"
    volcano = "the volcano" if single else "each volcano"
    return f"""
    <div class="info-box">
        🔍 <strong>Note:</strong> the diameter of {subject} is proportional to the
        elevation of {volcano} (higher elevation → larger circle).
    </div>
    """


def create_static_legend_html(state: ViewState) -> str:
    """
    Legend of the detail view: same content as the map legend, no checkboxes.
    """
    rows = ["<div class='volcano-legend'><strong>Volcano type</strong><br>"]
    for category in state.categories:
        rows.append(
            f"<div class='legend-row'>{legend_dot_html(state.color_table[category], 14)}"
            f"<span>{html.escape(category)}</span></div>"
        )
    rows.append("<br><strong>Opacity = recency of last eruption</strong><br>")
    for entry in eruption_legend_entries():
        rows.append(
            f"<div class='legend-row'>{legend_dot_html(entry['swatch'], 14)}"
            f"<span>{html.escape(entry['label'])}</span></div>"
        )
    rows.append(size_note_html(single=True))
    rows.append("</div>")
    return "\n".join(rows)


def create_details_html(record: VolcanoRecord, columns: List[str]) -> str:
    """
    Field-by-field listing of a volcano for the detail view.

    Args:
        record (VolcanoRecord): Selected volcano
        columns (List[str]): Dataset columns, in header order

    Returns:
        str: HTML content
    """
    lines = ["<div class='volcano-details'><strong>Volcano details</strong><br><br>"]
    for col in columns:
        lines.append(
            f"<strong>{html.escape(col)}:</strong> {html.escape(record.get(col))}<br>"
        )
    lines.append("</div>")
    return "\n".join(lines)
