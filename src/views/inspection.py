import streamlit as st
from src.state import SessionStore
from src.schematic import build_schematic
from src.plotting import create_wafer_figure
from src.config import AI_INFERENCE_MS

def render_inspection_panel(store: SessionStore):
    """Renders the main scanning interface: controls, wafer schematic, progress and stats."""
    controller = store.controller
    cycle = store.cycle
    theme = store.theme

    title_col, start_col, next_col = st.columns([2, 1, 1], gap="small")
    title_col.subheader("📷 Wafer Inspection")
    start_col.button(
        "Scanning..." if controller.is_active else "▶ Start Scan",
        key="start_scan_btn",
        type="primary",
        disabled=controller.is_active,
        use_container_width=True,
        on_click=store.start_scan
    )
    next_col.button(
        "↻ Next Wafer",
        key="next_wafer_btn",
        type="secondary",
        use_container_width=True,
        on_click=store.next_wafer
    )

    commands = build_schematic(cycle, theme=theme)
    fig = create_wafer_figure(commands, theme=theme)
    st.plotly_chart(fig, use_container_width=True, config={'displayModeBar': False})

    # --- Scan Progress ---
    label_col, pct_col = st.columns([4, 1])
    label_col.markdown("**Scan Progress**")
    pct_col.markdown(f"<div style='text-align: right'>{cycle.progress}%</div>", unsafe_allow_html=True)
    st.progress(min(100, max(0, cycle.progress)))

    # --- Processing Stats ---
    col1, col2, col3 = st.columns(3)
    col1.metric("Processing Time", f"{cycle.elapsed_ms}ms")
    col2.metric("Defects Found", f"{cycle.defect_count:,}")
    col3.metric("AI Inference", f"{AI_INFERENCE_MS}ms")
