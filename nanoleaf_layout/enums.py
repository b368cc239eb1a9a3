"""
Enum Definitions Module.

This module contains Enumeration classes for defining constant sets of values,
such as the UI view modes and the panel vertex names.
"""
from enum import Enum

class ViewMode(Enum):
    """Enumeration for the different views in the UI."""
    LAYOUT = "Layout View"
    SVG = "SVG Preview"
    PANELS = "Panel Table"
    EXPORT = "Export"

    @classmethod
    def values(cls) -> list[str]:
        """Returns the string values of all enum members."""
        return [item.value for item in cls]

class Vertex(Enum):
    """Enumeration for the three vertices of a panel."""
    TOP = "top"
    LEFT = "left"
    RIGHT = "right"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]
