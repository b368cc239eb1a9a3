import math
import pytest
from itertools import combinations
from nanoleaf_layout.layout import (
    compute_equilateral_triangle, build_panel_paths, color_as_int, order_for_stroke,
    compute_bounds, compute_view_transform, compute_layout, coerce_descriptors
)
from nanoleaf_layout.models import InputError, Layout, PanelDescriptor

INNER_HYPOTENUSE = 75 / math.cos(math.radians(30))

@pytest.fixture
def stroke_panels() -> list:
    return [
        {'panelId': 1, 'x': 0, 'y': 0, 'o': 0, 'strokeColor': '#000000'},
        {'panelId': 2, 'x': 75, 'y': 43, 'o': 60, 'strokeColor': '#ffffff'},
        {'panelId': 3, 'x': 150, 'y': 0, 'o': 0},
        {'panelId': 4, 'x': 225, 'y': 43, 'o': 60, 'strokeColor': '#ff0000'},
        {'panelId': 5, 'x': 300, 'y': 0, 'o': 0, 'strokeColor': '#000000'},
    ]

@pytest.mark.parametrize("side_length", [1, 10, 150, 333.3])
def test_equilateral_triangle_sides_are_equal(side_length):
    tri = compute_equilateral_triangle(side_length)
    lengths = [math.dist(a, b) for a, b in combinations([tri.top, tri.left, tri.right], 2)]
    for length in lengths:
        assert length == pytest.approx(side_length)

def test_equilateral_triangle_is_centred_on_centroid():
    tri = compute_equilateral_triangle(150, (10, 20))
    centre = tri.vertices.mean(axis=0)
    assert centre == pytest.approx([10, 20])
    assert tri.top[0] == 10

def test_equilateral_triangle_vertex_positions():
    tri = compute_equilateral_triangle(150)
    assert tri.top == pytest.approx((0, -INNER_HYPOTENUSE))
    assert tri.left == pytest.approx((-75, 75 / math.tan(math.radians(60))))
    assert tri.right == pytest.approx((75, 75 / math.tan(math.radians(60))))

def test_build_panel_paths_single_panel():
    """End-to-end: one panel at the origin yields the local-space triangle path."""
    triangles = build_panel_paths([{'x': 0, 'y': 0, 'o': 0}], 150)

    assert len(triangles) == 1
    panel = triangles[0]
    assert panel.geometry.top == pytest.approx((0, -INNER_HYPOTENUSE))
    assert panel.path.startswith("M0 -86.6")
    assert panel.path.endswith(" Z")
    assert panel.path.count("L") == 3
    assert "L-75 " in panel.path
    assert "L75 " in panel.path

def test_build_panel_paths_passes_through_attributes():
    triangles = build_panel_paths(
        [{'panelId': 'abc', 'x': 10, 'y': -20, 'o': 120, 'color': '#123456', 'strokeColor': '#abcdef'}], 150
    )
    record = triangles[0].to_record()
    assert record == {
        'x': 10, 'y': -20, 'rotation': 120, 'color': '#123456',
        'strokeColor': '#abcdef', 'path': triangles[0].path, 'panelId': 'abc'
    }

def test_build_panel_paths_calls_on_draw():
    drawn = []
    build_panel_paths([{'x': 0, 'y': 0}, {'x': 75, 'y': 43, 'o': 60}], 150, on_draw=drawn.append)
    assert [p.x for p in drawn] == [0, 75]

def test_build_panel_paths_accepts_descriptors():
    triangles = build_panel_paths([PanelDescriptor(x=1, y=2, orientation=60, panel_id=7)], 150)
    assert triangles[0].panel_id == 7
    assert triangles[0].rotation == 60

@pytest.mark.parametrize("position_data", [None, "panels", {'x': 0, 'y': 0}, 42])
def test_build_panel_paths_rejects_missing_or_malformed_collection(position_data):
    with pytest.raises(InputError):
        build_panel_paths(position_data, 150)

def test_missing_position_data_message():
    with pytest.raises(InputError, match="positionData"):
        compute_layout(None, 150)

@pytest.mark.parametrize("entry", [
    {'x': 'a', 'y': 0},
    {'x': float('nan'), 'y': 0},
    {'x': 0, 'y': float('inf')},
    {'x': 0},
    {'x': 0, 'y': 0, 'o': None},
    [0, 0],
])
def test_build_panel_paths_rejects_malformed_panel(entry):
    with pytest.raises(InputError, match="index 0"):
        build_panel_paths([entry], 150)

def test_coerce_descriptors_accepts_generators():
    descriptors = coerce_descriptors({'x': i, 'y': 0} for i in range(3))
    assert [d.x for d in descriptors] == [0, 1, 2]

def test_color_as_int():
    assert color_as_int(None) == 0
    assert color_as_int('') == 0
    assert color_as_int('#ffffff') == 0xFFFFFF
    assert color_as_int('#FF0000') == 0xFF0000
    assert color_as_int('00ff00') == 0x00FF00

def test_color_as_int_rejects_invalid_hex():
    with pytest.raises(InputError):
        color_as_int('#zzzzzz')

def test_order_for_stroke_is_descending_and_stable(stroke_panels):
    ordered = order_for_stroke(build_panel_paths(stroke_panels, 150))
    # White first, then red; the three zero-valued strokes keep their input order.
    assert [p.panel_id for p in ordered] == [2, 4, 1, 3, 5]

def test_compute_bounds():
    bounds = compute_bounds([{'x': 100, 'y': 200}, {'x': 300, 'y': 50}], 150)
    assert (bounds.min_x, bounds.max_x, bounds.min_y, bounds.max_y) == (-150, 450, -150, 350)
    assert bounds.width == 600
    assert bounds.height == 500
    assert bounds.midpoint == (150, 100)

def test_compute_bounds_always_includes_origin():
    bounds = compute_bounds([{'x': -400, 'y': -300}, {'x': -200, 'y': -500}], 100)
    assert bounds.min_x <= 0 <= bounds.max_x
    assert bounds.min_y <= 0 <= bounds.max_y
    assert bounds.max_x == 100
    assert bounds.max_y == 100

def test_compute_bounds_empty_layout():
    bounds = compute_bounds([], 150)
    assert bounds.view_box == "-150 -150 300 300"

def test_compute_view_transform():
    bounds = compute_bounds([{'x': 100, 'y': 200}, {'x': 300, 'y': 50}], 150)
    transform = compute_view_transform(bounds, 30)
    assert transform.translate_x == 150
    assert transform.translate_y == 100
    assert transform.mirror is True
    assert transform.rotation_degrees == 210

def test_compute_layout(stroke_panels):
    layout = compute_layout(stroke_panels, 150, rotation=90)

    assert isinstance(layout, Layout)
    assert len(layout) == 5
    assert layout.panels[0].panel_id == 2
    assert layout.transform.rotation_degrees == 270
    assert layout.bounds.max_x == 450
    assert layout.to_dict()['viewBox'] == layout.bounds.view_box

def test_compute_layout_is_recomputed_from_inputs(stroke_panels):
    first = compute_layout(stroke_panels, 150)
    second = compute_layout(stroke_panels, 100)
    assert first.bounds != second.bounds
    assert compute_layout(stroke_panels, 150) == first
