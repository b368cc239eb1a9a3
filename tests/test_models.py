import pytest
import numpy as np
from nanoleaf_layout.models import (
    BoundingBox, InputError, PanelDescriptor, ViewTransform, format_number
)
from nanoleaf_layout.layout import build_panel_paths, compute_view_transform

@pytest.fixture
def bounds() -> BoundingBox:
    return BoundingBox(min_x=-150, max_x=450, min_y=-150, max_y=350)

def test_format_number():
    assert format_number(75.0) == "75"
    assert format_number(-75) == "-75"
    assert format_number(0.0) == "0"
    assert format_number(-0.0) == "0"
    assert format_number(43.5) == "43.5"

def test_panel_descriptor_from_mapping():
    panel = PanelDescriptor.from_mapping({'panelId': 9, 'x': 1, 'y': 2, 'o': 60, 'strokeColor': '#fff'})
    assert panel == PanelDescriptor(x=1, y=2, orientation=60, stroke_color='#fff', panel_id=9)
    assert panel.to_mapping()['o'] == 60

def test_panel_descriptor_rejects_bool():
    with pytest.raises(InputError):
        PanelDescriptor(x=True, y=0)

def test_bounding_box_derived_values(bounds):
    assert bounds.width == 600
    assert bounds.height == 500
    assert bounds.midpoint == (150, 100)
    assert bounds.view_box == "-150 -150 600 500"

def test_view_transform_svg_string(bounds):
    transform = compute_view_transform(bounds, 0)
    assert transform.svg_transform == "translate(150,100) scale(-1,1) rotate(180) translate(-150,-100)"

def test_view_transform_keeps_midpoint_fixed(bounds):
    transform = compute_view_transform(bounds, 37)
    assert transform.apply(bounds.midpoint) == pytest.approx(np.array(bounds.midpoint))

def test_view_transform_round_trip(bounds):
    transform = compute_view_transform(bounds, 37)
    points = np.array([[0, 0], [10, -20], [bounds.max_x, bounds.max_y]], dtype=float)
    assert transform.inverse(transform.apply(points)) == pytest.approx(points)
    assert transform.inverse(transform.apply(bounds.midpoint)) == pytest.approx(np.array(bounds.midpoint))

def test_view_transform_zero_rotation_flips_vertically(bounds):
    """Mirror on X plus a half turn leaves X alone and flips Y around the midpoint."""
    transform = compute_view_transform(bounds, 0)
    assert transform.apply((160, 105)) == pytest.approx(np.array([160, 95]))

def test_view_transform_without_mirror():
    transform = ViewTransform(translate_x=0, translate_y=0, rotation_degrees=90, mirror=False)
    assert transform.svg_transform == "translate(0,0) rotate(90) translate(0,0)"
    assert transform.apply((1, 0)) == pytest.approx(np.array([0, 1]))

def test_view_transform_to_dict(bounds):
    assert compute_view_transform(bounds, 10).to_dict() == {
        'translateX': 150, 'translateY': 100, 'mirror': True, 'rotationDegrees': 190
    }

def test_panel_path_transforms():
    panel = build_panel_paths([{'x': 10, 'y': 20, 'o': 60}], 150)[0]
    assert panel.svg_transform == "translate(10,20) rotate(120)"
    assert panel.label_transform(0) == "scale(-1, 1) rotate(-60)"
    assert panel.label_transform(30) == "scale(-1, 1) rotate(-90)"
