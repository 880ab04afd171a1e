"""
Main Application File for the Wafer Inspection Streamlit Dashboard.
Simulates a wafer scan cycle: progress sweeps across a schematic wafer, the
wafer's defects are revealed when the scan completes, and the production
metrics are recomputed.
"""
import time
import streamlit as st

from src.config import UI_REFRESH_MS
from src.state import SessionStore
from src.utils import configure_logging, load_css
from src.views.manager import ViewManager

# ==============================================================================
# --- STREAMLIT APP MAIN LOGIC ---
# ==============================================================================

def main() -> None:
    """
    Main function to configure and run the Streamlit application.
    """
    # --- App Configuration ---
    st.set_page_config(layout="wide", page_title="ChipTrace Wafer Inspection")

    # --- Initialize Session State ---
    store = SessionStore()
    load_css("assets/styles.css", store.theme)

    # Fire any tick/reveal that fell due since the previous rerun.
    store.sync_clock()

    manager = ViewManager(store)
    manager.render_sidebar()
    manager.render_header()
    manager.render_main()
    manager.render_footer()

    # Keep the page refreshing while a scan owns the timers.
    if store.controller.is_active:
        time.sleep(UI_REFRESH_MS / 1000)
        st.rerun()

if __name__ == '__main__':
    configure_logging()
    main()
