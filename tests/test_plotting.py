import pytest
import numpy as np
import plotly.graph_objects as go
from nanoleaf_layout.layout import compute_layout
from nanoleaf_layout.plotting import (
    create_layout_svg, create_layout_figure, create_panel_shapes, create_hover_trace, panel_world_vertices
)

@pytest.fixture
def sample_layout():
    panels = [
        {'panelId': 1, 'x': 0, 'y': 0, 'o': 0, 'color': '#ff0000'},
        {'panelId': 2, 'x': 75, 'y': 43, 'o': 60},
        {'panelId': 3, 'x': 150, 'y': 0, 'o': 0, 'strokeColor': '#000000'},
    ]
    return compute_layout(panels, 150, rotation=0)

def test_create_layout_svg_structure(sample_layout):
    svg = create_layout_svg(sample_layout)
    assert svg.startswith("<svg")
    assert f'viewBox="{sample_layout.bounds.view_box}"' in svg
    assert 'preserveAspectRatio="xMidYMid meet"' in svg
    assert f'<g transform="{sample_layout.transform.svg_transform}">' in svg
    assert svg.count("<path") == 3
    assert "<text" not in svg

def test_create_layout_svg_defaults_and_overrides(sample_layout):
    svg = create_layout_svg(sample_layout, color='#333333', stroke_color='#ffffff')
    assert 'fill="#ff0000"' in svg
    assert 'fill="#333333"' in svg
    assert 'stroke="#000000"' in svg
    assert 'stroke="#ffffff"' in svg

def test_create_layout_svg_with_ids(sample_layout):
    svg = create_layout_svg(sample_layout, show_id=True)
    assert svg.count("<text") == 3
    assert ">2</text>" in svg

def test_panel_world_vertices_upright_at_origin():
    """An unrotated panel ends up pointing up on screen after the view transform."""
    layout = compute_layout([{'x': 0, 'y': 0, 'o': 0}], 150)
    vertices = panel_world_vertices(layout.panels[0], layout)

    assert vertices.shape == (3, 2)
    assert vertices.mean(axis=0) == pytest.approx([0, 0], abs=1e-9)
    apex = vertices[np.argmin(vertices[:, 1])]
    assert apex == pytest.approx([0, -75 / np.cos(np.radians(30))])
    for a, b in [(0, 1), (1, 2), (0, 2)]:
        assert np.linalg.norm(vertices[a] - vertices[b]) == pytest.approx(150)

def test_create_panel_shapes(sample_layout):
    shapes = create_panel_shapes(sample_layout)
    assert len(shapes) == 3
    assert all(s['type'] == 'path' and s['path'].endswith(' Z') for s in shapes)

def test_create_hover_trace(sample_layout):
    trace = create_hover_trace(sample_layout, show_id=True)
    assert isinstance(trace, go.Scatter)
    assert len(trace.x) == 3
    assert trace.mode == 'markers+text'

def test_create_layout_figure_smoke(sample_layout):
    fig = create_layout_figure(sample_layout, title="Test")
    assert isinstance(fig, go.Figure)
    assert len(fig.layout.shapes) == 3
    assert isinstance(fig.data[0], go.Scatter)
    # Y points down like the SVG viewBox.
    assert fig.layout.yaxis.range[0] > fig.layout.yaxis.range[1]

def test_create_layout_figure_empty_layout():
    fig = create_layout_figure(compute_layout([], 150))
    assert len(fig.layout.shapes) == 0
