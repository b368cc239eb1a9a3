"""
Main Application File for the Triangle Panel Layout Streamlit Dashboard.
Loads a panel layout, recomputes the geometry from the sidebar parameters on
every rerun and renders it as an interactive figure, SVG or table.
"""
import logging
import streamlit as st

from nanoleaf_layout.config import BACKGROUND_COLOR, TEXT_COLOR
from nanoleaf_layout.enums import ViewMode
from nanoleaf_layout.state import SessionStore
from nanoleaf_layout.views.manager import ViewManager

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")

def apply_theme() -> None:
    """Injects the dark theme colors into the Streamlit app."""
    st.markdown(f"""
    <style>
        .stApp {{
            background-color: {BACKGROUND_COLOR};
            color: {TEXT_COLOR};
        }}
    </style>
    """, unsafe_allow_html=True)

def rotation_slider(rotation: float) -> float:
    """Whole-degree slider; an untouched slider keeps the loaded rotation exactly."""
    shown = int(round(rotation)) % 360
    picked = st.slider("Rotation", min_value=0, max_value=359, value=shown, step=1)
    return rotation if picked == shown else picked

# ==============================================================================
# --- STREAMLIT APP MAIN LOGIC ---
# ==============================================================================

def main() -> None:
    """
    Main function to configure and run the Streamlit application.
    """
    st.set_page_config(layout="wide", page_title="Panel Layout")
    apply_theme()

    store = SessionStore()
    manager = ViewManager(store)

    # --- Sidebar Control Panel ---
    with st.sidebar:
        st.title("Control Panel")
        with st.form(key="load_form"):
            with st.expander("Data Source", expanded=True):
                uploaded_file = st.file_uploader(
                    "Upload Layout (Nanoleaf JSON or CSV)",
                    type=["json", "csv"],
                    key=f"uploaded_file_{store.uploader_key}"
                )
            submitted = st.form_submit_button("Load Layout")

        if submitted:
            manager.run_load(uploaded_file)

        st.divider()

        if store.layout_source is not None:
            params = dict(store.render_params)
            with st.expander("Layout Controls", expanded=True):
                params['side_length'] = st.number_input("Side Length", min_value=1.0, value=float(params['side_length']))
                params['rotation'] = rotation_slider(params['rotation'])
                params['stroke_width'] = st.number_input("Stroke Width", min_value=0.0, value=float(params['stroke_width']))
                params['color'] = st.color_picker("Default Panel Color", value=params['color'])
                params['stroke_color'] = st.color_picker("Default Stroke Color", value=params['stroke_color'])
                params['show_id'] = st.checkbox("Show Panel IDs", value=params['show_id'])
            store.render_params = params

            store.view_mode = st.radio("Select View", ViewMode.values(), index=ViewMode.values().index(store.view_mode))

            if st.button("Reset"):
                store.reset()
                st.rerun()

    manager.render_main_view()

if __name__ == "__main__":
    main()
