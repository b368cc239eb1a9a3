import streamlit as st
import streamlit.components.v1 as components
from nanoleaf_layout.state import SessionStore
from nanoleaf_layout.enums import ViewMode
from nanoleaf_layout.models import Layout
from nanoleaf_layout.plotting import create_layout_figure, create_layout_svg
from nanoleaf_layout.data_handler import panels_to_dataframe

def render_layout_view(store: SessionStore, layout: Layout, view_mode: str):
    params = store.render_params
    style = dict(
        stroke_width=params['stroke_width'],
        color=params['color'],
        stroke_color=params['stroke_color'],
        show_id=params['show_id'],
    )
    source_name = store.layout_source.name if store.layout_source else "Layout"

    if view_mode == ViewMode.LAYOUT.value:
        fig = create_layout_figure(layout, title=f"{source_name} - {len(layout)} panels", **style)
        st.plotly_chart(fig, use_container_width=True)

        col1, col2, col3 = st.columns(3)
        col1.metric("Panels", len(layout))
        col2.metric("View Box", layout.bounds.view_box)
        col3.metric("Rotation", f"{layout.rotation:g}°")

    elif view_mode == ViewMode.SVG.value:
        svg = create_layout_svg(layout, **style)
        components.html(svg, height=600)
        st.download_button(
            "Download SVG",
            data=svg,
            file_name="layout.svg",
            mime="image/svg+xml"
        )
        with st.expander("SVG Markup"):
            st.code(svg, language="xml")

    elif view_mode == ViewMode.PANELS.value:
        render_panel_table(store, layout)

def render_panel_table(store: SessionStore, layout: Layout):
    """Panel records in drawing order, with screen markers and a panel picker."""
    df = panels_to_dataframe(layout, include_markers=True)
    if df.empty:
        st.info("The layout contains no panels.")
        return

    st.dataframe(df, use_container_width=True, hide_index=True)

    panel_ids = [str(pid) for pid in df['panelId'].tolist()]
    previous = store.selected_panel
    index = panel_ids.index(previous) if previous in panel_ids else None
    selected = st.selectbox("Inspect Panel", panel_ids, index=index, placeholder="Select a panel...")
    store.selected_panel = selected
    if selected is not None:
        record = df[df['panelId'].astype(str) == selected].iloc[0]
        st.json({
            'panelId': selected,
            'x': float(record['x']),
            'y': float(record['y']),
            'rotation': float(record['rotation']),
            'path': record['path'],
        })
