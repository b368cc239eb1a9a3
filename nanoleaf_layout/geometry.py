"""
Coordinate and Trigonometry Utilities.

Stateless helpers converting between the cartesian layout plane (origin at the
canvas centre, Y up) and screen space (origin top-left, Y down), plus the
marker points of upright and inverted triangles around a centroid.
"""
import math
from typing import Dict, Tuple

import numpy as np

from nanoleaf_layout.config import (
    DEFAULT_SIDE_LENGTH, INVERTED_ORIENTATIONS, INVERSION_ANGLE, INVERSION_PIVOT_DROP
)
from nanoleaf_layout.enums import Vertex

ScreenPoint = Tuple[int, int]

# After inversion the on-screen left marker is the image of the upright right marker.
_INVERTED_SOURCE = {'top': 'top', 'left': 'right', 'right': 'left'}


def cartesian_to_screen(x: float, y: float, width: float, height: float) -> Tuple[float, float]:
    """Converts a cartesian point on a width x height canvas to screen coordinates. No rounding."""
    return width / 2 + x, height / 2 - y


def get_centroid_height(side_length: float = DEFAULT_SIDE_LENGTH) -> float:
    """Perpendicular distance from an equilateral triangle's centroid to one edge."""
    return math.sqrt(3) / 6 * side_length


def rotate_point(point, degrees: float, origin=(0.0, 0.0)) -> np.ndarray:
    """Rotates a 2-D point (or an (N, 2) array) counter-clockwise around origin."""
    theta = np.radians(degrees)
    rotation = np.array([[np.cos(theta), -np.sin(theta)],
                         [np.sin(theta), np.cos(theta)]])
    origin = np.asarray(origin, dtype=float)
    offset = np.asarray(point, dtype=float) - origin
    return origin + offset @ rotation.T


def do_rotate(orientation: float) -> bool:
    """
    Returns True when a panel at this orientation sits inverted in the tessellation.
    The orientation is normalised into [0, 360) before the membership test.
    """
    return (float(orientation) % 360) in INVERTED_ORIENTATIONS


def _to_pixel(value: float) -> int:
    # Half-up rounding, matching browser Math.round.
    return int(math.floor(value + 0.5))


def _upright_offsets(side_length: float) -> Dict[str, Tuple[float, float]]:
    h = get_centroid_height(side_length)
    return {
        'top': (0.0, h),
        'left': (-h, -h),
        'right': (h, -h),
    }


def _marker(name: str, x: float, y: float, width: float, height: float,
            side_length: float, inverted: bool) -> ScreenPoint:
    offsets = _upright_offsets(side_length)
    if inverted:
        pivot = (0.0, -side_length * INVERSION_PIVOT_DROP)
        dx, dy = rotate_point(offsets[_INVERTED_SOURCE[name]], INVERSION_ANGLE, pivot)
    else:
        dx, dy = offsets[name]
    screen_x, screen_y = cartesian_to_screen(x + dx, y + dy, width, height)
    return _to_pixel(screen_x), _to_pixel(screen_y)


def get_top_from_centroid(x, y, width, height, side_length=DEFAULT_SIDE_LENGTH) -> ScreenPoint:
    """Screen position of the top marker of an upright triangle centred at cartesian (x, y)."""
    return _marker('top', x, y, width, height, side_length, inverted=False)


def get_left_from_centroid(x, y, width, height, side_length=DEFAULT_SIDE_LENGTH) -> ScreenPoint:
    return _marker('left', x, y, width, height, side_length, inverted=False)


def get_right_from_centroid(x, y, width, height, side_length=DEFAULT_SIDE_LENGTH) -> ScreenPoint:
    return _marker('right', x, y, width, height, side_length, inverted=False)


def rotate_top_from_centroid(x, y, width, height, side_length=DEFAULT_SIDE_LENGTH) -> ScreenPoint:
    """Screen position of the top marker once the triangle is inverted."""
    return _marker('top', x, y, width, height, side_length, inverted=True)


def rotate_left_from_centroid(x, y, width, height, side_length=DEFAULT_SIDE_LENGTH) -> ScreenPoint:
    return _marker('left', x, y, width, height, side_length, inverted=True)


def rotate_right_from_centroid(x, y, width, height, side_length=DEFAULT_SIDE_LENGTH) -> ScreenPoint:
    return _marker('right', x, y, width, height, side_length, inverted=True)


def get_panel_markers(x, y, orientation, width, height, side_length=DEFAULT_SIDE_LENGTH) -> Dict[str, ScreenPoint]:
    """All three markers of a panel, picking the inverted set when the orientation calls for it."""
    inverted = do_rotate(orientation)
    return {
        name: _marker(name, x, y, width, height, side_length, inverted)
        for name in Vertex.values()
    }
