"""
Domain Models for Triangle Panel Layouts.
Encapsulates panel descriptors, triangle geometry, the drawable panel records
and the aggregate bounding box / view transform of a layout pass.
"""
import math
from dataclasses import dataclass, field, asdict
from numbers import Real
from typing import Any, Dict, List, Mapping, Optional, Tuple

import numpy as np

from nanoleaf_layout.config import (
    PANEL_ROTATION_OFFSET, LABEL_ROTATION_OFFSET
)

Point = Tuple[float, float]


class InputError(ValueError):
    """Raised when the panel descriptor collection is missing or malformed."""


def format_number(value: float) -> str:
    """
    Formats a coordinate the way it appears in path data: whole numbers
    without a fractional part, everything else in shortest round-trip form.
    """
    value = float(value)
    if value == 0:
        return "0"
    if value.is_integer() and abs(value) < 1e16:
        return str(int(value))
    return repr(value)


def _require_finite(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise InputError(f"Panel property '{name}' must be a number, got {value!r}.")
    if not math.isfinite(value):
        raise InputError(f"Panel property '{name}' must be finite, got {value!r}.")
    return value


@dataclass(frozen=True)
class PanelDescriptor:
    """
    One physical panel: centroid position, orientation and display hints.
    Color, stroke color and id are opaque to the geometry and passed through.
    """
    x: float
    y: float
    orientation: float = 0
    color: Optional[str] = None
    stroke_color: Optional[str] = None
    panel_id: Any = None

    def __post_init__(self):
        _require_finite('x', self.x)
        _require_finite('y', self.y)
        _require_finite('o', self.orientation)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "PanelDescriptor":
        """Builds a descriptor from a layout document entry (x, y, o, color, strokeColor, panelId)."""
        if not isinstance(data, Mapping):
            raise InputError(f"Panel entries must be objects, got {type(data).__name__}.")
        for key in ('x', 'y'):
            if key not in data:
                raise InputError(f"Panel entry is missing required key '{key}': {dict(data)}")
        orientation = data.get('o', data.get('orientation', 0))
        return cls(
            x=data['x'],
            y=data['y'],
            orientation=orientation,
            color=data.get('color'),
            stroke_color=data.get('strokeColor'),
            panel_id=data.get('panelId'),
        )

    def to_mapping(self) -> Dict[str, Any]:
        return {
            'panelId': self.panel_id,
            'x': self.x,
            'y': self.y,
            'o': self.orientation,
            'color': self.color,
            'strokeColor': self.stroke_color,
        }


@dataclass(frozen=True)
class TriangleGeometry:
    """Vertices of one triangle. Recreated per layout pass, never mutated."""
    top: Point
    left: Point
    right: Point

    @property
    def vertices(self) -> np.ndarray:
        """Vertices as a (3, 2) array in path order: top, left, right."""
        return np.array([self.top, self.left, self.right], dtype=float)

    @property
    def path(self) -> str:
        """Closed path visiting top -> left -> right -> top."""
        top, left, right = self.top, self.left, self.right
        return (
            f"M{format_number(top[0])} {format_number(top[1])} "
            f"L{format_number(left[0])} {format_number(left[1])} "
            f"L{format_number(right[0])} {format_number(right[1])} "
            f"L{format_number(top[0])} {format_number(top[1])} Z"
        )


@dataclass(frozen=True)
class PanelPath:
    """
    A drawable triangle handed to the rendering layer.
    The path lives in local triangle space; x, y and rotation place it.
    """
    x: float
    y: float
    rotation: float
    color: Optional[str]
    stroke_color: Optional[str]
    path: str
    panel_id: Any
    geometry: TriangleGeometry = field(repr=False, compare=False)

    @property
    def svg_transform(self) -> str:
        return f"translate({format_number(self.x)},{format_number(self.y)}) rotate({format_number(self.rotation + PANEL_ROTATION_OFFSET)})"

    def label_transform(self, global_rotation: float) -> str:
        """Counter-rotation keeping the id label readable inside the mirrored view."""
        angle = self.rotation + LABEL_ROTATION_OFFSET - global_rotation
        return f"scale(-1, 1) rotate({format_number(angle)})"

    def to_record(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'rotation': self.rotation,
            'color': self.color,
            'strokeColor': self.stroke_color,
            'path': self.path,
            'panelId': self.panel_id,
        }


@dataclass(frozen=True)
class BoundingBox:
    """Extent of all panel centroids, already grown by one side length on every side."""
    min_x: float
    max_x: float
    min_y: float
    max_y: float

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def mid_x(self) -> float:
        return self.min_x + self.width / 2

    @property
    def mid_y(self) -> float:
        return self.min_y + self.height / 2

    @property
    def midpoint(self) -> Point:
        return self.mid_x, self.mid_y

    @property
    def view_box(self) -> str:
        return f"{format_number(self.min_x)} {format_number(self.min_y)} {format_number(self.width)} {format_number(self.height)}"


@dataclass(frozen=True)
class ViewTransform:
    """
    Global transform for the whole panel group:
    translate(mid) scale(-1, 1) rotate(rotation + 180) translate(-mid).
    Scaling and rotation therefore pivot around the array's centre.
    """
    translate_x: float
    translate_y: float
    rotation_degrees: float
    mirror: bool = True

    @property
    def svg_transform(self) -> str:
        tx, ty = format_number(self.translate_x), format_number(self.translate_y)
        neg_x, neg_y = format_number(-self.translate_x), format_number(-self.translate_y)
        scale = "scale(-1,1) " if self.mirror else ""
        return f"translate({tx},{ty}) {scale}rotate({format_number(self.rotation_degrees)}) translate({neg_x},{neg_y})"

    @property
    def matrix(self) -> np.ndarray:
        """3x3 homogeneous matrix equivalent to the SVG transform list."""
        theta = np.radians(self.rotation_degrees)
        cos_t, sin_t = np.cos(theta), np.sin(theta)

        to_mid = np.array([[1, 0, self.translate_x], [0, 1, self.translate_y], [0, 0, 1]], dtype=float)
        mirror = np.diag([-1.0 if self.mirror else 1.0, 1.0, 1.0])
        rotate = np.array([[cos_t, -sin_t, 0], [sin_t, cos_t, 0], [0, 0, 1]], dtype=float)
        from_mid = np.array([[1, 0, -self.translate_x], [0, 1, -self.translate_y], [0, 0, 1]], dtype=float)
        return to_mid @ mirror @ rotate @ from_mid

    def apply(self, points) -> np.ndarray:
        """Maps one point or an (N, 2) array of points through the transform."""
        return _apply_homogeneous(self.matrix, points)

    def inverse(self, points) -> np.ndarray:
        """Maps transformed points back to layout space."""
        return _apply_homogeneous(np.linalg.inv(self.matrix), points)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'translateX': self.translate_x,
            'translateY': self.translate_y,
            'mirror': self.mirror,
            'rotationDegrees': self.rotation_degrees,
        }


def _apply_homogeneous(matrix: np.ndarray, points) -> np.ndarray:
    pts = np.asarray(points, dtype=float)
    single = pts.ndim == 1
    pts = np.atleast_2d(pts)
    homogeneous = np.hstack([pts, np.ones((pts.shape[0], 1))])
    result = (matrix @ homogeneous.T).T[:, :2]
    return result[0] if single else result


@dataclass(frozen=True)
class Layout:
    """Result of one layout pass. Recomputed whenever any input changes."""
    panels: Tuple[PanelPath, ...]
    bounds: BoundingBox
    transform: ViewTransform
    side_length: float
    rotation: float

    def __len__(self):
        return len(self.panels)

    def records(self) -> List[Dict[str, Any]]:
        return [panel.to_record() for panel in self.panels]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'sideLength': self.side_length,
            'rotation': self.rotation,
            'viewBox': self.bounds.view_box,
            'bounds': asdict(self.bounds),
            'transform': self.transform.to_dict(),
            'panels': self.records(),
        }
