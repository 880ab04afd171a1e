"""
Schematic Renderer Module.

Pure projection from the scan-cycle state to a list of draw commands on a fixed
y-down canvas. Nothing here touches a real drawing backend; the executor in
src.plotting turns the commands into a figure.
"""
from dataclasses import dataclass
from typing import List, Optional, Union
import numpy as np

from src.config import (
    CANVAS_WIDTH, CANVAS_HEIGHT, WAFER_RADIUS, GRID_SPACING, WAFER_LABEL_OFFSET,
    CRITICAL_RING_PADDING, MARKER_LABEL_OFFSET, PlotTheme, DEFAULT_THEME
)
from src.models import CycleState, DefectRecord

# ==============================================================================
# --- Draw Commands ---
# ==============================================================================

@dataclass(frozen=True)
class Clear:
    width: float
    height: float
    color: str

@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    radius: float
    fill: Optional[str] = None
    stroke: Optional[str] = None
    line_width: float = 1.0
    hover_text: Optional[str] = None

@dataclass(frozen=True)
class Line:
    x0: float
    y0: float
    x1: float
    y1: float
    color: str
    width: float = 1.0

@dataclass(frozen=True)
class Rect:
    x0: float
    y0: float
    x1: float
    y1: float
    fill: str
    opacity: float = 1.0

@dataclass(frozen=True)
class Text:
    x: float
    y: float
    text: str
    color: str
    size: int = 10
    bold: bool = False
    align: str = 'left'  # 'left' starts at x, 'center' centers on x

DrawCommand = Union[Clear, Circle, Line, Rect, Text]

# ==============================================================================
# --- Private Helper Functions ---
# ==============================================================================

def _draw_wafer_base(cx: float, cy: float, radius: float, theme: PlotTheme) -> List[DrawCommand]:
    return [Circle(cx, cy, radius, fill=theme.wafer_fill_color, stroke=theme.wafer_edge_color, line_width=2)]

def _draw_grid(cx: float, cy: float, radius: float, spacing: float, theme: PlotTheme) -> List[DrawCommand]:
    """
    Square grid over the wafer's bounding box. Lines are not clipped to the disk.
    """
    commands: List[DrawCommand] = []
    for offset in np.arange(-radius, radius + 1e-9, spacing):
        offset = float(offset)
        commands.append(Line(cx + offset, cy - radius, cx + offset, cy + radius, theme.grid_color, 0.5))
        commands.append(Line(cx - radius, cy + offset, cx + radius, cy + offset, theme.grid_color, 0.5))
    return commands

def _draw_scan_sweep(cx: float, cy: float, radius: float, progress: int, theme: PlotTheme) -> List[DrawCommand]:
    """Sweep line plus a translucent fill over the area already scanned."""
    top = cy - radius
    scan_line = (progress / 100) * (radius * 2)
    return [
        Line(cx - radius, top + scan_line, cx + radius, top + scan_line, theme.scan_line_color, 3),
        Rect(cx - radius, top, cx + radius, top + scan_line, theme.scan_line_color, theme.scan_fill_opacity),
    ]

def _draw_defect_markers(cx: float, cy: float, radius: float, defects: List[DefectRecord], theme: PlotTheme) -> List[DrawCommand]:
    commands: List[DrawCommand] = []
    for index, defect in enumerate(defects):
        x = cx + defect.x - radius
        y = cy + defect.y - radius
        color = defect.color
        marker_id = f"D{index + 1}"

        hover_text = (
            f"<b>{marker_id}: {defect.category_label}</b><br>"
            f"Severity: {str(defect.severity).upper()}<br>"
            f"Size: {defect.size}μm<br>"
            f"Position: ({defect.x}, {defect.y})"
        )
        commands.append(Circle(x, y, defect.size, fill=color, hover_text=hover_text))

        if defect.is_critical:
            commands.append(Circle(x, y, defect.size + CRITICAL_RING_PADDING, stroke=color, line_width=2))

        commands.append(Text(
            x + defect.size + MARKER_LABEL_OFFSET,
            y - defect.size - MARKER_LABEL_OFFSET,
            marker_id, theme.text_color, size=10
        ))
    return commands

# ==============================================================================
# --- Public API Functions ---
# ==============================================================================

def build_schematic(
    state: CycleState,
    width: float = CANVAS_WIDTH,
    height: float = CANVAS_HEIGHT,
    radius: float = WAFER_RADIUS,
    grid_spacing: float = GRID_SPACING,
    theme: PlotTheme = DEFAULT_THEME
) -> List[DrawCommand]:
    """
    Computes the full frame for the current state, in paint order.
    Only the wafer id, progress, revealed defects and running flag are read.
    """
    cx, cy = width / 2, height / 2

    commands: List[DrawCommand] = [Clear(width, height, theme.canvas_color)]
    commands.extend(_draw_wafer_base(cx, cy, radius, theme))
    commands.extend(_draw_grid(cx, cy, radius, grid_spacing, theme))

    if state.running:
        commands.extend(_draw_scan_sweep(cx, cy, radius, state.progress, theme))

    commands.extend(_draw_defect_markers(cx, cy, radius, list(state.revealed_defects), theme))

    commands.append(Text(cx, cy + radius + WAFER_LABEL_OFFSET, state.wafer_label, theme.text_color, size=16, bold=True, align='center'))
    return commands
