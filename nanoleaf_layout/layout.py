"""
Layout Logic Module.
Turns a set of panel descriptors into drawable triangle paths, orders them for
stroke rendering and derives the bounding box and global view transform that
fit the whole array into the display area.
"""
import logging
import math
from collections.abc import Iterable, Mapping
from typing import Callable, List, Optional, Sequence, Tuple

from nanoleaf_layout.config import DEFAULT_SIDE_LENGTH, DEFAULT_ROTATION, VIEW_ROTATION_OFFSET
from nanoleaf_layout.models import (
    BoundingBox, InputError, Layout, PanelDescriptor, PanelPath, TriangleGeometry, ViewTransform
)

logger = logging.getLogger(__name__)

MISSING_POSITION_DATA = (
    "Could not find property: positionData in given data. "
    "Ensure that your data includes a positionData key with an array value"
)


def compute_equilateral_triangle(side_length: float, centroid: Tuple[float, float] = (0, 0)) -> TriangleGeometry:
    """
    Calculates an equilateral triangle around a centroid, in y-down local space.

    The top vertex sits one inner hypotenuse above the centroid and the base
    one inner opposite below it.
    """
    half_side = side_length / 2
    cx, cy = centroid

    inner_hypotenuse = half_side * (1 / math.cos(math.radians(30)))
    inner_opposite = half_side * (1 / math.tan(math.radians(60)))

    return TriangleGeometry(
        top=(cx, cy - inner_hypotenuse),
        left=(cx - half_side, cy + inner_opposite),
        right=(cx + half_side, cy + inner_opposite),
    )


def coerce_descriptors(position_data) -> List[PanelDescriptor]:
    """
    Validates the descriptor collection and normalises every entry to a PanelDescriptor.
    Raises InputError when the collection is missing or any entry is malformed.
    """
    if position_data is None:
        raise InputError(MISSING_POSITION_DATA)
    if isinstance(position_data, (str, bytes, Mapping)) or not isinstance(position_data, Iterable):
        raise InputError(f"positionData must be a collection of panels, got {type(position_data).__name__}.")

    descriptors = []
    for index, entry in enumerate(position_data):
        if isinstance(entry, PanelDescriptor):
            descriptors.append(entry)
            continue
        try:
            descriptors.append(PanelDescriptor.from_mapping(entry))
        except InputError as e:
            raise InputError(f"Invalid panel at index {index}: {e}") from e
    return descriptors


def build_panel_paths(
    position_data,
    side_length: float,
    on_draw: Optional[Callable[[PanelPath], None]] = None
) -> List[PanelPath]:
    """
    Builds one drawable triangle per descriptor. Every path shares the same
    local-space triangle; x, y and rotation place it when rendered.
    """
    descriptors = coerce_descriptors(position_data)

    triangles = []
    for panel in descriptors:
        geometry = compute_equilateral_triangle(side_length)
        triangle = PanelPath(
            x=panel.x,
            y=panel.y,
            rotation=panel.orientation,
            color=panel.color,
            stroke_color=panel.stroke_color,
            path=geometry.path,
            panel_id=panel.panel_id,
            geometry=geometry,
        )
        if on_draw is not None:
            on_draw(triangle)
        triangles.append(triangle)
    return triangles


def color_as_int(hex_string: Optional[str]) -> int:
    """Returns the integer value of a hexadecimal color code, 0 for None or empty."""
    if not hex_string:
        return 0
    if not isinstance(hex_string, str):
        raise InputError(f"Color must be a hexadecimal string, got {hex_string!r}")
    digits = hex_string[1:] if hex_string.startswith('#') else hex_string
    try:
        return int(digits, 16)
    except ValueError:
        raise InputError(f"Invalid hexadecimal color: {hex_string!r}")


def order_for_stroke(triangles: Sequence[PanelPath]) -> List[PanelPath]:
    """
    Sorts panels so strokes further from white come later and are drawn on top.
    The sort is stable: equal stroke colors keep their original order.
    """
    return sorted(triangles, key=lambda t: color_as_int(t.stroke_color), reverse=True)


def compute_bounds(position_data, side_length: float) -> BoundingBox:
    """
    Bounding box of all panel centroids, grown by one side length so it covers
    the triangles. The extremes start at 0, so the origin is always inside.
    """
    min_x = max_x = min_y = max_y = 0
    for panel in coerce_descriptors(position_data):
        if panel.x > max_x:
            max_x = panel.x
        if panel.x < min_x:
            min_x = panel.x
        if panel.y > max_y:
            max_y = panel.y
        if panel.y < min_y:
            min_y = panel.y

    return BoundingBox(
        min_x=min_x - side_length,
        max_x=max_x + side_length,
        min_y=min_y - side_length,
        max_y=max_y + side_length,
    )


def compute_view_transform(bounds: BoundingBox, rotation: float = DEFAULT_ROTATION) -> ViewTransform:
    """Translate out, mirror and rotate, translate back: the group pivots around its centre."""
    return ViewTransform(
        translate_x=bounds.mid_x,
        translate_y=bounds.mid_y,
        rotation_degrees=rotation + VIEW_ROTATION_OFFSET,
        mirror=True,
    )


def compute_layout(
    position_data,
    side_length: float = DEFAULT_SIDE_LENGTH,
    rotation: float = DEFAULT_ROTATION,
    on_draw: Optional[Callable[[PanelPath], None]] = None
) -> Layout:
    """
    Recomputes the complete layout from its inputs. Call again whenever the
    descriptors, the side length or the rotation change.
    """
    descriptors = coerce_descriptors(position_data)

    panels = order_for_stroke(build_panel_paths(descriptors, side_length, on_draw=on_draw))
    # Aggregate view only once every panel is known.
    bounds = compute_bounds(descriptors, side_length)
    transform = compute_view_transform(bounds, rotation)

    logger.debug(
        "Computed layout: %d panels, viewBox=%s, rotation=%s",
        len(panels), bounds.view_box, transform.rotation_degrees
    )
    return Layout(
        panels=tuple(panels),
        bounds=bounds,
        transform=transform,
        side_length=side_length,
        rotation=rotation,
    )
