import streamlit as st
import plotly.graph_objects as go
from src.state import SessionStore
from src.models import defects_to_dataframe
from src.metrics import severity_breakdown
from src.plotting import create_severity_pareto_trace, to_rgba
from src.config import SYSTEM_STATUS, AVG_PROCESSING_MS, UPTIME_PERCENT, SEVERITY_BADGE_ALPHA

def render_system_status():
    """Static status read-outs for the inspection station."""
    st.subheader("⚡ System Status")
    for component, status in SYSTEM_STATUS.items():
        name_col, status_col = st.columns([3, 2])
        name_col.write(component)
        status_col.markdown(f":green[✔ {status}]")

def render_production_metrics(store: SessionStore):
    cycle = store.cycle
    st.subheader("📊 Production Metrics")
    col1, col2 = st.columns(2)
    col1.metric("Yield Rate", f"{cycle.cumulative_yield_rate}%")
    col2.metric("Wafers Processed", f"{cycle.cumulative_wafers_processed:,}")
    col3, col4 = st.columns(2)
    col3.metric("Avg Processing", f"{AVG_PROCESSING_MS}ms")
    col4.metric("Uptime", f"{UPTIME_PERCENT}%")

def _severity_badge(severity: str, color: str) -> str:
    return (
        f"<span style='background-color: {to_rgba(color, SEVERITY_BADGE_ALPHA)}; color: {color}; "
        f"padding: 2px 8px; border-radius: 4px; font-size: 0.75em; font-weight: bold'>"
        f"{str(severity).upper()}</span>"
    )

def render_defect_analysis(store: SessionStore):
    """Per-defect cards for the revealed defects, or a placeholder while nothing is revealed."""
    cycle = store.cycle
    st.subheader("⚠️ Defect Analysis")

    if not cycle.revealed_defects:
        st.info("Analyzing wafer..." if cycle.running else "No defects detected")
        return

    for index, defect in enumerate(cycle.revealed_defects):
        with st.container(border=True):
            id_col, badge_col = st.columns([1, 1])
            id_col.markdown(f"**D{index + 1}**")
            badge_col.markdown(f"<div style='text-align: right'>{_severity_badge(defect.severity, defect.color)}</div>", unsafe_allow_html=True)
            st.caption(
                f"Type: {defect.category_label}  \n"
                f"Size: {defect.size}μm  \n"
                f"Position: ({defect.x}, {defect.y})"
            )

    fig = go.Figure(create_severity_pareto_trace(severity_breakdown(cycle.revealed_defects)))
    fig.update_layout(
        xaxis=dict(title="Severity", tickfont=dict(color=store.theme.text_color)),
        yaxis=dict(title="Count", dtick=1, tickfont=dict(color=store.theme.text_color)),
        plot_bgcolor=store.theme.canvas_color, paper_bgcolor=store.theme.background_color,
        font=dict(color=store.theme.text_color),
        margin=dict(l=10, r=10, t=10, b=10),
        height=220
    )
    st.plotly_chart(fig, use_container_width=True, config={'displayModeBar': False})

    defect_df = defects_to_dataframe(cycle.revealed_defects)
    st.download_button(
        "📥 Download Defect List",
        data=defect_df.to_csv(index=False).encode('utf-8'),
        file_name=f"{cycle.wafer_label}_defects.csv",
        mime="text/csv",
        help="CSV list of the defects revealed by the last scan."
    )
