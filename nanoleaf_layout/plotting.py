"""
Plotting and Visualization Module.
Renders a computed layout either as an SVG document (viewBox plus nested
transforms) or as an interactive Plotly figure with hover data per panel.
"""
import plotly.graph_objects as go
import numpy as np
from html import escape
from typing import List, Dict, Any, Optional

from nanoleaf_layout.config import (
    DEFAULT_PANEL_COLOR, DEFAULT_STROKE_COLOR, DEFAULT_STROKE_WIDTH, LABEL_COLOR,
    PANEL_ROTATION_OFFSET, BACKGROUND_COLOR, PLOT_AREA_COLOR, TEXT_COLOR, HOVER_MARKER_COLOR
)
from nanoleaf_layout.geometry import rotate_point
from nanoleaf_layout.models import Layout, PanelPath, format_number

# ==============================================================================
# --- Private Helper Functions ---
# ==============================================================================

def _points_to_path(points: np.ndarray) -> str:
    """Closed path through the given points, in the same grammar as the panel paths."""
    head, *rest = [f"{format_number(px)} {format_number(py)}" for px, py in points]
    segments = " ".join(f"L{p}" for p in rest + [head])
    return f"M{head} {segments} Z"

def _panel_svg(panel: PanelPath, index: int, global_rotation: float, stroke_width: float,
               color: str, stroke_color: str, show_id: bool) -> str:
    fill = escape(panel.color or color, quote=True)
    stroke = escape(panel.stroke_color or stroke_color, quote=True)
    parts = [
        f'<g id="panel-{index}" transform="{panel.svg_transform}">',
        f'<path d="{panel.path}" stroke-width="{format_number(stroke_width)}" fill="{fill}" stroke="{stroke}"/>',
    ]
    if show_id:
        label = escape(str(panel.panel_id if panel.panel_id is not None else index))
        parts.append(
            f'<text fill="{LABEL_COLOR}" text-anchor="middle" '
            f'transform="{panel.label_transform(global_rotation)}">{label}</text>'
        )
    parts.append('</g>')
    return "".join(parts)

# ==============================================================================
# --- Public API Functions ---
# ==============================================================================

def panel_world_vertices(panel: PanelPath, layout: Layout) -> np.ndarray:
    """
    Vertices of a panel after its own placement (translate + rotate) and the
    global view transform, as a (3, 2) array in viewBox coordinates.
    """
    local = rotate_point(panel.geometry.vertices, panel.rotation + PANEL_ROTATION_OFFSET)
    placed = local + np.array([panel.x, panel.y], dtype=float)
    return layout.transform.apply(placed)

def create_layout_svg(
    layout: Layout,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
    color: str = DEFAULT_PANEL_COLOR,
    stroke_color: str = DEFAULT_STROKE_COLOR,
    show_id: bool = False
) -> str:
    """
    Creates the SVG markup for a layout. The viewBox is the padded bounding box
    and the whole panel group carries the single global transform.
    """
    panels_svg = "".join(
        _panel_svg(panel, index, layout.rotation, stroke_width, color, stroke_color, show_id)
        for index, panel in enumerate(layout.panels)
    )
    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" viewBox="{layout.bounds.view_box}" '
        f'preserveAspectRatio="xMidYMid meet">'
        f'<g transform="{layout.transform.svg_transform}">{panels_svg}</g>'
        f'</svg>'
    )

def create_panel_shapes(
    layout: Layout,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
    color: str = DEFAULT_PANEL_COLOR,
    stroke_color: str = DEFAULT_STROKE_COLOR
) -> List[Dict[str, Any]]:
    """One filled path shape per panel, in drawing order."""
    shapes = []
    for panel in layout.panels:
        shapes.append(dict(
            type="path",
            path=_points_to_path(panel_world_vertices(panel, layout)),
            fillcolor=panel.color or color,
            line=dict(color=panel.stroke_color or stroke_color, width=stroke_width),
            layer='below'
        ))
    return shapes

def create_hover_trace(layout: Layout, show_id: bool = False) -> go.Scatter:
    """
    Creates an invisible marker at every panel centre that carries the hover
    data (and the id label when requested).
    """
    if not layout.panels:
        return go.Scatter(x=[], y=[], mode='markers', name='Panels')

    centres = layout.transform.apply([[p.x, p.y] for p in layout.panels])
    customdata = [[p.panel_id, p.x, p.y, p.rotation, p.color or '', p.stroke_color or ''] for p in layout.panels]
    hovertemplate = (
        "<b>Panel %{customdata[0]}</b><br>"
        "Position (x, y): (%{customdata[1]}, %{customdata[2]})<br>"
        "Orientation: %{customdata[3]}°<br>"
        "Color: %{customdata[4]}"
        "<extra></extra>"
    )
    return go.Scatter(
        x=centres[:, 0],
        y=centres[:, 1],
        mode='markers+text' if show_id else 'markers',
        text=[str(p.panel_id) for p in layout.panels] if show_id else None,
        textfont=dict(color=LABEL_COLOR),
        marker=dict(size=18, color=HOVER_MARKER_COLOR),
        name='Panels',
        customdata=customdata,
        hovertemplate=hovertemplate,
        showlegend=False
    )

def create_layout_figure(
    layout: Layout,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
    color: str = DEFAULT_PANEL_COLOR,
    stroke_color: str = DEFAULT_STROKE_COLOR,
    show_id: bool = False,
    title: Optional[str] = None
) -> go.Figure:
    """
    Creates the interactive layout figure. Axes follow the SVG viewBox with Y
    pointing down, and are locked to equal scale so triangles stay equilateral.
    """
    bounds = layout.bounds
    fig = go.Figure()
    fig.add_trace(create_hover_trace(layout, show_id=show_id))
    fig.update_layout(
        title=dict(text=title or "Panel Layout", font=dict(color=TEXT_COLOR)),
        shapes=create_panel_shapes(layout, stroke_width, color, stroke_color),
        xaxis=dict(range=[bounds.min_x, bounds.max_x], visible=False, constrain='domain'),
        yaxis=dict(range=[bounds.max_y, bounds.min_y], visible=False, scaleanchor='x', scaleratio=1),
        plot_bgcolor=PLOT_AREA_COLOR,
        paper_bgcolor=BACKGROUND_COLOR,
        margin=dict(l=20, r=20, t=60, b=20),
        hoverlabel=dict(bgcolor="#4A4A4A", font_size=14, font_family="sans-serif"),
        height=700
    )
    return fig
