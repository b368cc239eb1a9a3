"""
Export Module.

This module bundles a computed layout into a downloadable ZIP package: the
SVG drawing, an interactive HTML figure, the panel table as CSV, the full
layout as JSON and a debug log of the export itself.
"""
import io
import json
import logging
import zipfile
from datetime import datetime
from typing import Optional

from nanoleaf_layout.config import DEFAULT_PANEL_COLOR, DEFAULT_STROKE_COLOR, DEFAULT_STROKE_WIDTH
from nanoleaf_layout.data_handler import panels_to_dataframe
from nanoleaf_layout.models import Layout
from nanoleaf_layout.plotting import create_layout_figure, create_layout_svg


def generate_panel_csv(layout: Layout) -> bytes:
    """Panel records in drawing order as CSV."""
    return panels_to_dataframe(layout).to_csv(index=False).encode('utf-8')


def generate_layout_json(layout: Layout) -> bytes:
    return json.dumps(layout.to_dict(), indent=2, default=str).encode('utf-8')


def generate_layout_package(
    layout: Layout,
    stroke_width: float = DEFAULT_STROKE_WIDTH,
    color: str = DEFAULT_PANEL_COLOR,
    stroke_color: str = DEFAULT_STROKE_COLOR,
    show_id: bool = False,
    include_svg: bool = True,
    include_html: bool = True,
    include_csv: bool = True,
    include_json: bool = True,
    name_suffix: Optional[str] = None
) -> bytes:
    zip_buffer = io.BytesIO()
    log_capture_string = io.StringIO()
    ch = logging.StreamHandler(log_capture_string)
    ch.setLevel(logging.INFO)
    logger = logging.getLogger('layout_exporter')
    logger.addHandler(ch)
    logger.setLevel(logging.INFO)

    def log(msg): logger.info(f"[{datetime.now().strftime('%H:%M:%S')}] {msg}")
    log(f"Starting generate_layout_package ({len(layout)} panels, viewBox {layout.bounds.view_box})")

    suffix = f"_{name_suffix}" if name_suffix else ""
    try:
        with zipfile.ZipFile(zip_buffer, 'w', zipfile.ZIP_DEFLATED) as zip_file:
            if include_svg:
                svg = create_layout_svg(layout, stroke_width, color, stroke_color, show_id)
                zip_file.writestr(f"Layout{suffix}.svg", svg)
                log("Wrote SVG drawing")

            if include_html:
                fig = create_layout_figure(layout, stroke_width, color, stroke_color, show_id)
                zip_file.writestr(f"Layout{suffix}.html", fig.to_html(full_html=True, include_plotlyjs='cdn'))
                log("Wrote interactive figure")

            if include_csv:
                zip_file.writestr(f"Panels{suffix}.csv", generate_panel_csv(layout))
                log("Wrote panel table")

            if include_json:
                zip_file.writestr(f"Layout{suffix}.json", generate_layout_json(layout))
                log("Wrote layout JSON")

            log("Finished generate_layout_package")
            zip_file.writestr("Debug_Log.txt", log_capture_string.getvalue())
    finally:
        logger.removeHandler(ch)

    return zip_buffer.getvalue()
