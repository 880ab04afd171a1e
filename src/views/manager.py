import streamlit as st
from src.state import SessionStore
from src.views.inspection import render_inspection_panel
from src.views.side_panel import render_system_status, render_production_metrics, render_defect_analysis
from src.config import THEMES, APP_TITLE, APP_SUBTITLE, APP_FOOTER

class ViewManager:
    """
    Manages page layout, the sidebar control panel and the settings actions.
    Decouples UI layout from the scan-cycle logic held by the store.
    """
    def __init__(self, store: SessionStore):
        self.store = store

    def render_sidebar(self):
        controller = self.store.controller
        timing = self.store.timing

        with st.sidebar:
            st.title("🎛️ Control Panel")
            with st.form(key="simulation_settings_form"):
                with st.expander("⏱️ Simulation Settings", expanded=True):
                    tick_interval = st.number_input(
                        "Tick Interval (ms)", min_value=1, value=timing.tick_interval_ms,
                        help="Time between progress updates while scanning."
                    )
                    progress_step = st.number_input(
                        "Progress Step (%)", min_value=1, max_value=100, value=timing.progress_step,
                        help="Progress (and processing time) added on every tick."
                    )
                    reveal_delay = st.number_input(
                        "Reveal Delay (ms)", min_value=0, value=timing.reveal_delay_ms,
                        help="Simulated AI processing time between 100% and the defect reveal."
                    )
                submitted = st.form_submit_button("Apply Settings", disabled=controller.is_active)

            if submitted:
                self.store.apply_timing(tick_interval, progress_step, reveal_delay)

            if self.store.settings_error:
                st.error(f"Settings not applied: {self.store.settings_error}")

            st.button("Restore Defaults", disabled=controller.is_active, on_click=self.store.restore_default_timing)
            st.caption(f"Next scan: ~{self.store.timing.scan_duration_ms:,}ms")

            st.divider()
            st.radio("Theme", list(THEMES.keys()), key="theme_name", horizontal=True)
            st.caption(f"Phase: {controller.phase.value} | {self.store.cycle.wafer_label}")

    def render_header(self):
        st.markdown(
            f"<h1 style='text-align: center'>🔬 {APP_TITLE}</h1>"
            f"<p style='text-align: center; color: #9CA3AF'>{APP_SUBTITLE}</p>",
            unsafe_allow_html=True
        )

    def render_main(self):
        main_col, side_col = st.columns([2, 1], gap="large")
        with main_col:
            with st.container(border=True):
                render_inspection_panel(self.store)
        with side_col:
            with st.container(border=True):
                render_system_status()
            with st.container(border=True):
                render_production_metrics(self.store)
            with st.container(border=True):
                render_defect_analysis(self.store)

    def render_footer(self):
        st.markdown(
            f"<p style='text-align: center; color: #6B7280; margin-top: 2rem'>{APP_FOOTER}</p>",
            unsafe_allow_html=True
        )
