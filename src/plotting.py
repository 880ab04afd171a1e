"""
Plotting and Visualization Module.
Executes schematic draw commands on a fixed 500x400 y-down canvas using Plotly
layout shapes and annotations, plus the severity Pareto used by the side panel.
"""
import plotly.graph_objects as go
import matplotlib.colors as mcolors
from typing import List, Dict, Any, Sequence

from src.config import CANVAS_WIDTH, CANVAS_HEIGHT, PlotTheme, DEFAULT_THEME
from src.enums import Severity
from src.schematic import Clear, Circle, Line, Rect, Text, DrawCommand

TRANSPARENT = 'rgba(0,0,0,0)'

# ==============================================================================
# --- Private Helper Functions ---
# ==============================================================================

def to_rgba(color: str, alpha: float = 1.0) -> str:
    """Converts any matplotlib color spec to a Plotly 'rgba(r,g,b,a)' string."""
    r, g, b, _ = mcolors.to_rgba(color)
    return f"rgba({int(round(r * 255))},{int(round(g * 255))},{int(round(b * 255))},{alpha})"

def _circle_shape(cmd: Circle) -> Dict[str, Any]:
    return dict(
        type="circle", xref="x", yref="y",
        x0=cmd.cx - cmd.radius, y0=cmd.cy - cmd.radius,
        x1=cmd.cx + cmd.radius, y1=cmd.cy + cmd.radius,
        fillcolor=cmd.fill if cmd.fill else TRANSPARENT,
        line=dict(color=cmd.stroke if cmd.stroke else TRANSPARENT, width=cmd.line_width if cmd.stroke else 0),
        layer='above'
    )

def _line_shape(cmd: Line) -> Dict[str, Any]:
    return dict(
        type="line", xref="x", yref="y",
        x0=cmd.x0, y0=cmd.y0, x1=cmd.x1, y1=cmd.y1,
        line=dict(color=cmd.color, width=cmd.width),
        layer='above'
    )

def _rect_shape(cmd: Rect) -> Dict[str, Any]:
    return dict(
        type="rect", xref="x", yref="y",
        x0=cmd.x0, y0=cmd.y0, x1=cmd.x1, y1=cmd.y1,
        fillcolor=to_rgba(cmd.fill, cmd.opacity),
        line_width=0,
        layer='above'
    )

def _text_annotation(cmd: Text) -> Dict[str, Any]:
    # Canvas text is anchored at its baseline, so the annotation sits above y.
    return dict(
        x=cmd.x, y=cmd.y, xref="x", yref="y",
        text=f"<b>{cmd.text}</b>" if cmd.bold else cmd.text,
        showarrow=False,
        font=dict(size=cmd.size, color=cmd.color, family="monospace"),
        xanchor='center' if cmd.align == 'center' else 'left',
        yanchor='bottom'
    )

def _hover_trace(circles: List[Circle]) -> go.Scatter:
    """Invisible markers at the defect centers so the shapes get hover labels."""
    return go.Scatter(
        x=[c.cx for c in circles],
        y=[c.cy for c in circles],
        mode='markers',
        marker=dict(size=[max(6, c.radius * 2) for c in circles], opacity=0),
        text=[c.hover_text for c in circles],
        hovertemplate="%{text}<extra></extra>",
        showlegend=False,
        name='Defects'
    )

# ==============================================================================
# --- Public API Functions ---
# ==============================================================================

def create_wafer_figure(
    commands: Sequence[DrawCommand],
    theme: PlotTheme = DEFAULT_THEME,
    height: int = CANVAS_HEIGHT
) -> go.Figure:
    """
    Issues the draw commands, in order, onto a new Plotly figure.
    A Clear command discards everything issued before it.
    """
    width, canvas_height, canvas_color = CANVAS_WIDTH, CANVAS_HEIGHT, theme.canvas_color
    shapes: List[Dict[str, Any]] = []
    annotations: List[Dict[str, Any]] = []
    hover_circles: List[Circle] = []

    for cmd in commands:
        if isinstance(cmd, Clear):
            width, canvas_height, canvas_color = cmd.width, cmd.height, cmd.color
            shapes, annotations, hover_circles = [], [], []
        elif isinstance(cmd, Circle):
            shapes.append(_circle_shape(cmd))
            if cmd.hover_text:
                hover_circles.append(cmd)
        elif isinstance(cmd, Line):
            shapes.append(_line_shape(cmd))
        elif isinstance(cmd, Rect):
            shapes.append(_rect_shape(cmd))
        elif isinstance(cmd, Text):
            annotations.append(_text_annotation(cmd))

    fig = go.Figure()
    if hover_circles:
        fig.add_trace(_hover_trace(hover_circles))

    fig.update_layout(
        shapes=shapes,
        annotations=annotations,
        xaxis=dict(range=[0, width], visible=False, fixedrange=True),
        # Canvas coordinates grow downwards.
        yaxis=dict(range=[canvas_height, 0], visible=False, fixedrange=True, scaleanchor="x", scaleratio=1),
        plot_bgcolor=canvas_color,
        paper_bgcolor=theme.background_color,
        margin=dict(l=0, r=0, t=0, b=0),
        showlegend=False,
        hoverlabel=dict(bgcolor="#4A4A4A", font_size=12, font_family="monospace"),
        height=height
    )
    return fig

def create_severity_pareto_trace(breakdown: Dict[str, int]) -> go.Bar:
    """
    Creates a single bar trace of defect counts per severity, colored by severity.
    """
    if not breakdown:
        return go.Bar(name='Severity')
    labels = list(breakdown.keys())
    return go.Bar(
        x=[label.upper() for label in labels],
        y=[breakdown[label] for label in labels],
        name='Severity',
        marker_color=[Severity.color_for(label) for label in labels]
    )
