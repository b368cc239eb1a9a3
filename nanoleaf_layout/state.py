"""
State Management Module.
Implements the 'Store' pattern to unify access to Streamlit's session state.
"""
import streamlit as st
from dataclasses import dataclass
from typing import Optional, TypedDict, TYPE_CHECKING
from nanoleaf_layout.config import (
    DEFAULT_SIDE_LENGTH, DEFAULT_ROTATION, DEFAULT_STROKE_WIDTH, DEFAULT_PANEL_COLOR, DEFAULT_STROKE_COLOR
)
from nanoleaf_layout.enums import ViewMode
from nanoleaf_layout.layout import compute_layout

if TYPE_CHECKING:
    from nanoleaf_layout.data_handler import LayoutSource
    from nanoleaf_layout.models import Layout

# --- TypedDict Definitions ---

class RenderParams(TypedDict, total=False):
    """
    Type definition for the layout and styling parameters stored in session state.
    """
    side_length: float
    rotation: float
    stroke_width: float
    color: str
    stroke_color: str
    show_id: bool

class AppState(TypedDict, total=False):
    """
    Type definition for the entire application session state.
    """
    report_bytes: Optional[bytes]
    dataset_id: Optional[str]
    layout_source: Optional["LayoutSource"]
    render_params: RenderParams
    view_mode: str
    selected_panel: Optional[str]
    uploader_key: int

DEFAULT_RENDER_PARAMS: RenderParams = {
    'side_length': DEFAULT_SIDE_LENGTH,
    'rotation': DEFAULT_ROTATION,
    'stroke_width': DEFAULT_STROKE_WIDTH,
    'color': DEFAULT_PANEL_COLOR,
    'stroke_color': DEFAULT_STROKE_COLOR,
    'show_id': False,
}

@dataclass
class SessionStore:
    """
    Centralized store for application state.
    Wraps st.session_state to provide typed access and centralized modification logic.
    """

    def __post_init__(self):
        """Initialize default state values if they don't exist."""
        defaults: AppState = {
            'report_bytes': None,
            'dataset_id': None,
            'layout_source': None,
            'render_params': dict(DEFAULT_RENDER_PARAMS),
            'view_mode': ViewMode.LAYOUT.value,
            'selected_panel': None,
            'uploader_key': 0,
        }

        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    # --- Properties for Typed Access ---

    @property
    def dataset_id(self) -> Optional[str]:
        return st.session_state.get('dataset_id')

    @dataset_id.setter
    def dataset_id(self, val: Optional[str]):
        st.session_state['dataset_id'] = val

    @property
    def layout_source(self) -> Optional["LayoutSource"]:
        return st.session_state.get('layout_source')

    @layout_source.setter
    def layout_source(self, source: Optional["LayoutSource"]):
        st.session_state['layout_source'] = source

    @property
    def render_params(self) -> RenderParams:
        return st.session_state.get('render_params', dict(DEFAULT_RENDER_PARAMS))

    @render_params.setter
    def render_params(self, params: RenderParams):
        merged = dict(DEFAULT_RENDER_PARAMS)
        merged.update(params)
        st.session_state['render_params'] = merged

    @property
    def view_mode(self) -> str:
        return st.session_state.get('view_mode', ViewMode.LAYOUT.value)

    @view_mode.setter
    def view_mode(self, val: str):
        st.session_state['view_mode'] = val

    @property
    def selected_panel(self) -> Optional[str]:
        return st.session_state.get('selected_panel')

    @selected_panel.setter
    def selected_panel(self, panel_id: Optional[str]):
        st.session_state['selected_panel'] = panel_id

    @property
    def report_bytes(self) -> Optional[bytes]:
        return st.session_state.get('report_bytes')

    @report_bytes.setter
    def report_bytes(self, data: Optional[bytes]):
        st.session_state['report_bytes'] = data

    @property
    def uploader_key(self) -> int:
        return st.session_state.get('uploader_key', 0)

    # --- Actions ---

    def load_source(self, source: "LayoutSource", dataset_id: str):
        """Stores a freshly loaded layout and adopts its side length and rotation."""
        if dataset_id != self.dataset_id:
            self.selected_panel = None
        self.layout_source = source
        self.dataset_id = dataset_id
        self.report_bytes = None
        params = dict(self.render_params)
        params['side_length'] = source.side_length
        params['rotation'] = source.rotation
        self.render_params = params

    def current_layout(self) -> Optional["Layout"]:
        """
        Recomputes the layout from the stored panels and parameters.
        Called on every rerun; the computation is pure and cheap.
        """
        source = self.layout_source
        if source is None:
            return None
        params = self.render_params
        return compute_layout(source.panels, params['side_length'], params['rotation'])

    def clear_all(self):
        """Resets the entire session state."""
        st.session_state.clear()

    def reset(self):
        """Clears the session and bumps the uploader key so the file widget starts empty."""
        next_key = self.uploader_key + 1
        self.clear_all()
        st.session_state['uploader_key'] = next_key
