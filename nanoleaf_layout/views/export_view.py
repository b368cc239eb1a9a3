import streamlit as st
from nanoleaf_layout.state import SessionStore
from nanoleaf_layout.models import Layout
from nanoleaf_layout.reporting import generate_layout_package

def render_export_view(store: SessionStore, layout: Layout):
    """Export controls: choose the package contents, build it, offer the download."""
    params = store.render_params

    st.subheader("Export Package")
    include_svg = st.checkbox("SVG Drawing", value=True)
    include_html = st.checkbox("Interactive Figure (HTML)", value=True)
    include_csv = st.checkbox("Panel Table (CSV)", value=True)
    include_json = st.checkbox("Layout (JSON)", value=True)
    name_suffix = st.text_input("File Name Suffix (Optional)")

    if st.button("Generate Package"):
        with st.spinner("Generating export package..."):
            store.report_bytes = generate_layout_package(
                layout,
                stroke_width=params['stroke_width'],
                color=params['color'],
                stroke_color=params['stroke_color'],
                show_id=params['show_id'],
                include_svg=include_svg,
                include_html=include_html,
                include_csv=include_csv,
                include_json=include_json,
                name_suffix=name_suffix or None
            )

    if store.report_bytes:
        st.download_button(
            "Download Package (ZIP)",
            data=store.report_bytes,
            file_name="Panel_Layout_Package.zip",
            mime="application/zip"
        )
