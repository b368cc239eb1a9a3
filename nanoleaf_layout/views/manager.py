import logging
import streamlit as st
from typing import Any, Optional
from nanoleaf_layout.state import SessionStore
from nanoleaf_layout.enums import ViewMode
from nanoleaf_layout.data_handler import load_layout
from nanoleaf_layout.models import InputError
from nanoleaf_layout.views.layout_view import render_layout_view
from nanoleaf_layout.views.export_view import render_export_view

logger = logging.getLogger(__name__)

class ViewManager:
    """
    Manages view routing and the load action.
    Decouples UI layout from application logic.
    """
    def __init__(self, store: SessionStore):
        self.store = store

    def run_load(self, uploaded_file: Optional[Any]):
        """Loads the uploaded layout (or the sample) and stores it for rendering."""
        source = load_layout(uploaded_file)
        if source is None:
            return

        dataset_id = "sample_data" if uploaded_file is None else uploaded_file.name
        self.store.load_source(source, dataset_id)
        logger.info("Loaded layout '%s' (%d panels)", source.name, len(source.panels))

    def render_main_view(self):
        if self.store.layout_source is None:
            st.info("Upload a layout or load the sample from the sidebar to begin.")
            return

        try:
            layout = self.store.current_layout()
        except InputError as e:
            st.error(f"Could not compute layout: {e}")
            return

        if self.store.view_mode == ViewMode.EXPORT.value:
            render_export_view(self.store, layout)
        else:
            render_layout_view(self.store, layout, self.store.view_mode)
