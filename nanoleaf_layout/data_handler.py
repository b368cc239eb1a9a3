"""
Data Handling Module.
Reads panel layouts from Nanoleaf-style JSON documents or CSV tables and
generates a sample tessellation when nothing has been uploaded.
"""
import json
import logging
import math
import streamlit as st
import pandas as pd
import matplotlib.colors as mcolors
from dataclasses import dataclass
from io import BytesIO
from numbers import Real
from typing import Any, Mapping, Optional, Tuple

from nanoleaf_layout.config import (
    DEFAULT_SIDE_LENGTH, DEFAULT_ROTATION, SAMPLE_ROWS, SAMPLE_COLS, SAMPLE_PALETTE,
    MARKER_CANVAS_WIDTH, MARKER_CANVAS_HEIGHT
)
from nanoleaf_layout.enums import Vertex
from nanoleaf_layout.geometry import get_centroid_height, get_panel_markers
from nanoleaf_layout.layout import MISSING_POSITION_DATA, coerce_descriptors
from nanoleaf_layout.models import InputError, Layout, PanelDescriptor

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ['x', 'y']


@dataclass(frozen=True)
class LayoutSource:
    """Panels plus the layout-wide settings read from one document."""
    panels: Tuple[PanelDescriptor, ...]
    side_length: float = DEFAULT_SIDE_LENGTH
    rotation: float = DEFAULT_ROTATION
    name: str = "Sample Layout"


def normalize_color(value: Any) -> Optional[str]:
    """
    Normalises any matplotlib color spec ('red', '#f0a', (1, 0, 0)) to '#rrggbb'.
    Translucent colors keep their alpha as '#rrggbbaa'. Empty values stay None.
    """
    if value is None or (isinstance(value, float) and pd.isna(value)) or value == "":
        return None
    if not mcolors.is_color_like(value):
        raise InputError(f"Invalid color: {value!r}")
    rgba = mcolors.to_rgba(value)
    return mcolors.to_hex(rgba, keep_alpha=rgba[3] < 1)


def _require_number(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise InputError(f"{name} must be a finite number, got {value!r}.")
    return value


def _normalize_panel(panel: PanelDescriptor) -> PanelDescriptor:
    return PanelDescriptor(
        x=panel.x,
        y=panel.y,
        orientation=panel.orientation,
        color=normalize_color(panel.color),
        stroke_color=normalize_color(panel.stroke_color),
        panel_id=panel.panel_id,
    )


def parse_layout_document(document: Any, name: str = "Uploaded Layout") -> LayoutSource:
    """
    Accepts a Nanoleaf panelLayout response ({"layout": {...}, "globalOrientation": {...}}),
    a bare {"sideLength", "positionData"} object, or a bare list of panels.
    """
    rotation = DEFAULT_ROTATION
    side_length = DEFAULT_SIDE_LENGTH

    if isinstance(document, Mapping):
        if 'layout' in document and isinstance(document['layout'], Mapping):
            orientation = document.get('globalOrientation', {})
            if isinstance(orientation, Mapping):
                rotation = orientation.get('value', DEFAULT_ROTATION)
            document = document['layout']
        if 'positionData' not in document:
            raise InputError(MISSING_POSITION_DATA)
        side_length = document.get('sideLength', DEFAULT_SIDE_LENGTH)
        position_data = document['positionData']
    else:
        position_data = document

    _require_number('sideLength', side_length)
    _require_number('globalOrientation', rotation)

    panels = tuple(_normalize_panel(p) for p in coerce_descriptors(position_data))
    logger.info("Parsed layout '%s': %d panels, sideLength=%s", name, len(panels), side_length)
    return LayoutSource(panels=panels, side_length=side_length, rotation=rotation, name=name)


def parse_layout_table(df: pd.DataFrame, name: str = "Uploaded Layout",
                       side_length: float = DEFAULT_SIDE_LENGTH) -> LayoutSource:
    """Builds a layout from a table with x, y and optional o, color, strokeColor, panelId columns."""
    if not all(col in df.columns for col in REQUIRED_COLUMNS):
        raise InputError(f"Layout table '{name}' is missing required columns: {REQUIRED_COLUMNS}.")

    df = df.dropna(subset=REQUIRED_COLUMNS)
    records = []
    for index, row in enumerate(df.to_dict(orient='records')):
        try:
            entry = {
                'x': float(row['x']),
                'y': float(row['y']),
                'o': float(row['o']) if pd.notna(row.get('o')) else 0,
            }
        except (TypeError, ValueError) as e:
            raise InputError(f"Invalid number in row {index} of '{name}': {e}") from e
        for key in ('color', 'strokeColor', 'panelId'):
            if key in row and pd.notna(row[key]):
                entry[key] = row[key]
        records.append(entry)
    return parse_layout_document({'sideLength': side_length, 'positionData': records}, name=name)


def generate_sample_layout(rows: int = SAMPLE_ROWS, cols: int = SAMPLE_COLS,
                           side_length: float = DEFAULT_SIDE_LENGTH) -> LayoutSource:
    """
    Generates a strip tessellation of alternating upright and inverted panels.
    Neighbouring centroids sit half a side apart horizontally; inverted panels
    are lifted by one centroid height so their edges meet.
    """
    centroid_height = get_centroid_height(side_length)
    row_height = 3 * centroid_height

    panels = []
    panel_id = 1
    for row in range(rows):
        for col in range(cols):
            inverted = (row + col) % 2 == 1
            panels.append(PanelDescriptor(
                x=round(col * side_length / 2),
                y=round(row * row_height + (centroid_height if inverted else 0)),
                orientation=60 if inverted else 0,
                color=SAMPLE_PALETTE[(row * cols + col) % len(SAMPLE_PALETTE)],
                stroke_color=None,
                panel_id=panel_id,
            ))
            panel_id += 1
    return LayoutSource(panels=tuple(panels), side_length=side_length, rotation=DEFAULT_ROTATION)


@st.cache_data
def load_layout(uploaded_file: Optional[BytesIO], side_length: float = DEFAULT_SIDE_LENGTH) -> Optional[LayoutSource]:
    """
    Loads a layout from an uploaded .json or .csv file. Without a file the
    sample tessellation is returned. Invalid files are reported and yield None.
    """
    if uploaded_file is None:
        st.sidebar.info("No file uploaded. Displaying a sample layout.")
        return generate_sample_layout(side_length=side_length)

    file_name = getattr(uploaded_file, 'name', 'Uploaded Layout')
    try:
        if file_name.lower().endswith('.csv'):
            df = pd.read_csv(uploaded_file)
            source = parse_layout_table(df, name=file_name, side_length=side_length)
        else:
            document = json.load(uploaded_file)
            source = parse_layout_document(document, name=file_name)
    except json.JSONDecodeError as e:
        st.error(f"Error in '{file_name}': the file is not valid JSON ({e}).")
        return None
    except InputError as e:
        st.error(f"Error in '{file_name}': {e}")
        return None
    except (UnicodeDecodeError, pd.errors.EmptyDataError, pd.errors.ParserError) as e:
        st.error(f"Error reading '{file_name}': {e}")
        return None
    except Exception as e:
        st.error(f"An unexpected error occurred while reading '{file_name}': {e}")
        return None

    st.sidebar.success(f"{len(source.panels)} panel(s) loaded from '{file_name}'.")
    return source


def panels_to_dataframe(layout: Layout, include_markers: bool = False,
                        canvas_width: float = MARKER_CANVAS_WIDTH,
                        canvas_height: float = MARKER_CANVAS_HEIGHT) -> pd.DataFrame:
    """
    Tabulates the output records of a layout in drawing order.
    With include_markers, adds the screen-space top/left/right markers of each
    panel on a canvas_width x canvas_height reference canvas.
    """
    columns = ['panelId', 'x', 'y', 'rotation', 'color', 'strokeColor', 'path']
    df = pd.DataFrame(layout.records(), columns=columns)

    if include_markers and not df.empty:
        markers = [
            get_panel_markers(p.x, p.y, p.rotation, canvas_width, canvas_height, layout.side_length)
            for p in layout.panels
        ]
        for name in Vertex.values():
            df[f'{name}_marker'] = [m[name] for m in markers]
    return df
