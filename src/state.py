"""
State Management Module.
Implements the 'Store' pattern to unify access to Streamlit's session state.
Each browser session owns exactly one ScanCycleController and its scheduler.
"""
import logging
import streamlit as st
from dataclasses import dataclass
from typing import Optional, TypedDict

from src.config import ScanTiming, DEFAULT_TIMING, THEMES, DEFAULT_THEME, PlotTheme
from src.controller import ScanCycleController
from src.models import CycleState
from src.scheduler import WallClockScheduler

logger = logging.getLogger(__name__)

# --- TypedDict Definitions ---

class AppState(TypedDict, total=False):
    """
    Type definition for the entire application session state.
    """
    controller: ScanCycleController
    theme_name: str
    settings_error: Optional[str]

@dataclass
class SessionStore:
    """
    Centralized store for application state.
    Wraps st.session_state to provide typed access and centralized modification logic.
    """

    def __post_init__(self):
        """Initialize default state values if they don't exist."""
        if 'controller' not in st.session_state:
            st.session_state['controller'] = ScanCycleController(WallClockScheduler())

        defaults: AppState = {
            'theme_name': 'Dark',
            'settings_error': None,
        }
        for key, value in defaults.items():
            if key not in st.session_state:
                st.session_state[key] = value

    # --- Properties for Typed Access ---

    @property
    def controller(self) -> ScanCycleController:
        return st.session_state['controller']

    @property
    def cycle(self) -> CycleState:
        return self.controller.state

    @property
    def timing(self) -> ScanTiming:
        return self.controller.timing

    @property
    def theme_name(self) -> str:
        return st.session_state.get('theme_name', 'Dark')

    @theme_name.setter
    def theme_name(self, name: str):
        st.session_state['theme_name'] = name if name in THEMES else 'Dark'

    @property
    def theme(self) -> PlotTheme:
        return THEMES.get(self.theme_name, DEFAULT_THEME)

    @property
    def settings_error(self) -> Optional[str]:
        return st.session_state.get('settings_error')

    @settings_error.setter
    def settings_error(self, message: Optional[str]):
        st.session_state['settings_error'] = message

    # --- Actions ---

    def sync_clock(self) -> int:
        """Catches the scan up with real time; call once at the top of every rerun."""
        scheduler = self.controller.scheduler
        if isinstance(scheduler, WallClockScheduler):
            return scheduler.sync()
        return 0

    def start_scan(self):
        self.controller.start()

    def next_wafer(self):
        self.controller.reset()

    def apply_timing(self, tick_interval_ms: int, progress_step: int, reveal_delay_ms: int) -> bool:
        """
        Validates and applies new scan timing for the next scan.
        Invalid values leave the current timing untouched and record an error for the UI.
        """
        try:
            timing = ScanTiming(int(tick_interval_ms), int(progress_step), int(reveal_delay_ms))
        except ValueError as e:
            self.settings_error = str(e)
            return False

        self.settings_error = None
        if timing == self.timing:
            return True
        applied = self.controller.configure(timing)
        if applied:
            logger.info(f"Scan timing updated: {timing}")
        return applied

    def restore_default_timing(self):
        self.settings_error = None
        self.controller.configure(DEFAULT_TIMING)
