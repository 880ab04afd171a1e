"""
Configuration and Styling Module.

This module contains all configuration and styling variables for the application,
including the drawing-surface geometry, scan timing defaults, color themes and
the severity color palette used for defect markers.
"""
from dataclasses import dataclass

# --- Drawing Surface Geometry (canvas units) ---
# The schematic is drawn on a fixed 500x400 surface with the wafer centered.
CANVAS_WIDTH = 500
CANVAS_HEIGHT = 400
WAFER_RADIUS = 180
# Spacing between the grid lines drawn over the wafer's bounding box.
GRID_SPACING = 20
# Vertical distance from the wafer edge to the baseline of the wafer label.
WAFER_LABEL_OFFSET = 30
# Extra radius of the emphasis ring drawn around critical defects.
CRITICAL_RING_PADDING = 5
# Offset of the "D<n>" marker labels from the edge of the marker.
MARKER_LABEL_OFFSET = 2


# --- Scan Timing Defaults (milliseconds / percent) ---
TICK_INTERVAL_MS = 25
PROGRESS_STEP = 2
REVEAL_DELAY_MS = 500
# How often the dashboard reruns while a scan is active.
UI_REFRESH_MS = 50


@dataclass(frozen=True)
class ScanTiming:
    """Timing parameters for a single scan cycle."""
    tick_interval_ms: int = TICK_INTERVAL_MS
    progress_step: int = PROGRESS_STEP
    reveal_delay_ms: int = REVEAL_DELAY_MS

    def __post_init__(self):
        if self.tick_interval_ms <= 0:
            raise ValueError(f"Invalid tick interval '{self.tick_interval_ms}'. Must be positive.")
        if self.progress_step <= 0:
            raise ValueError(f"Invalid progress step '{self.progress_step}'. Must be positive.")
        if self.reveal_delay_ms < 0:
            raise ValueError(f"Invalid reveal delay '{self.reveal_delay_ms}'. Must not be negative.")

    @property
    def ticks_per_scan(self) -> int:
        """Number of ticks needed to take progress from 0 to 100."""
        return -(-100 // self.progress_step)

    @property
    def scan_duration_ms(self) -> int:
        """Wall time from start() to the reveal firing."""
        return self.ticks_per_scan * self.tick_interval_ms + self.reveal_delay_ms


DEFAULT_TIMING = ScanTiming()


# --- Metrics Constants ---
# Yield rate = BASE - critical * CRITICAL_PENALTY - defects * DEFECT_PENALTY, floored.
YIELD_BASE_RATE = 98.0
YIELD_CRITICAL_PENALTY = 2.0
YIELD_DEFECT_PENALTY = 0.5
YIELD_FLOOR = 85.0

# Production counters shown before the first scan of a session.
INITIAL_YIELD_RATE = 94.2
INITIAL_WAFERS_PROCESSED = 1247


# --- Theme Configuration ---
@dataclass
class PlotTheme:
    background_color: str
    canvas_color: str
    wafer_fill_color: str
    wafer_edge_color: str
    grid_color: str
    text_color: str

    scan_line_color: str = '#00FF41'  # Neon green sweep
    scan_fill_opacity: float = 0.1

# Default Theme (Dark Inspection Station)
DEFAULT_THEME = PlotTheme(
    background_color='#111827',  # Near-black blue
    canvas_color='#000000',      # Black canvas well
    wafer_fill_color='#1A1A2E',  # Deep indigo wafer body
    wafer_edge_color='#4A5568',  # Slate border
    grid_color='#2D3748',        # Dim slate grid
    text_color='#FFFFFF'         # White labels
)

# Light Theme (For screenshots/printing)
LIGHT_THEME = PlotTheme(
    background_color='#FFFFFF',
    canvas_color='#F0F2F6',      # Streamlit Light Grey
    wafer_fill_color='#CBD5E0',
    wafer_edge_color='#4A5568',
    grid_color='#A0AEC0',
    text_color='#000000',
    scan_line_color='#00A32A',
    scan_fill_opacity=0.15
)

THEMES = {
    "Dark": DEFAULT_THEME,
    "Light": LIGHT_THEME,
}


# --- Defect Severity Colors ---
CRITICAL_COLOR = '#FF0000'  # Red
HIGH_COLOR = '#FF6600'      # Orange
MEDIUM_COLOR = '#FFAA00'    # Amber
LOW_COLOR = '#FFFF00'       # Yellow
# Used for any severity outside the known set.
DEFAULT_DEFECT_COLOR = '#808080'
DEFAULT_DEFECT_LABEL = 'Unknown Defect'
# Alpha applied to severity colors for the badge backgrounds in the defect list.
SEVERITY_BADGE_ALPHA = 0.125


# --- Display Constants (static read-outs on the dashboard) ---
APP_TITLE = "ChipTrace"
APP_SUBTITLE = "Real-time Semiconductor Defect Detection System"
APP_FOOTER = "ChipTrace v2.1 - Real-time AI-powered semiconductor inspection"
AI_INFERENCE_MS = 47
AVG_PROCESSING_MS = 42
UPTIME_PERCENT = 99.7
SYSTEM_STATUS = {
    "AI Engine": "Online",
    "Camera System": "Ready",
    "Processing Unit": "Active",
}
