import pytest
import plotly.graph_objects as go
from src.plotting import create_wafer_figure, create_severity_pareto_trace, to_rgba, TRANSPARENT
from src.schematic import build_schematic, Clear, Circle, Line, Rect, Text
from src.models import CycleState
from src.fixtures import get_fixture
from src.metrics import severity_breakdown
from src.config import DEFAULT_THEME, CRITICAL_COLOR, DEFAULT_DEFECT_COLOR

@pytest.fixture
def complete_state() -> CycleState:
    """Wafer 2 just after its scan completed (one critical defect)."""
    return CycleState(current_wafer_id=2, revealed_defects=get_fixture(2).defects)

def test_create_wafer_figure_smoke(complete_state):
    """Smoke test to ensure the executor runs without errors."""
    fig = create_wafer_figure(build_schematic(complete_state))
    assert isinstance(fig, go.Figure)

def test_every_command_is_issued(complete_state):
    commands = build_schematic(complete_state)
    fig = create_wafer_figure(commands)

    shape_commands = [c for c in commands if isinstance(c, (Circle, Line, Rect))]
    text_commands = [c for c in commands if isinstance(c, Text)]
    assert len(fig.layout.shapes) == len(shape_commands)
    assert len(fig.layout.annotations) == len(text_commands)
    assert fig.layout.annotations[-1].text == '<b>WAFER-002</b>'

def test_canvas_is_y_down(complete_state):
    fig = create_wafer_figure(build_schematic(complete_state))
    assert tuple(fig.layout.xaxis.range) == (0, 500)
    assert tuple(fig.layout.yaxis.range) == (400, 0)
    assert fig.layout.plot_bgcolor == DEFAULT_THEME.canvas_color

def test_circle_shape_geometry():
    fig = create_wafer_figure([Clear(100, 100, '#000000'), Circle(50, 40, 10, fill=CRITICAL_COLOR)])
    shape = fig.layout.shapes[0]
    assert shape.type == 'circle'
    assert (shape.x0, shape.y0, shape.x1, shape.y1) == (40, 30, 60, 50)
    assert shape.fillcolor == CRITICAL_COLOR
    assert shape.line.width == 0

def test_stroke_only_circle_is_transparent_inside():
    fig = create_wafer_figure([Circle(50, 40, 15, stroke=CRITICAL_COLOR, line_width=2)])
    shape = fig.layout.shapes[0]
    assert shape.fillcolor == TRANSPARENT
    assert shape.line.color == CRITICAL_COLOR
    assert shape.line.width == 2

def test_rect_fill_is_translucent():
    fig = create_wafer_figure([Rect(0, 0, 10, 10, '#00FF41', 0.1)])
    assert fig.layout.shapes[0].fillcolor == 'rgba(0,255,65,0.1)'

def test_clear_discards_earlier_commands():
    fig = create_wafer_figure([
        Line(0, 0, 10, 10, '#FFFFFF'),
        Text(5, 5, 'old', '#FFFFFF'),
        Clear(200, 100, '#111111'),
        Line(0, 0, 20, 20, '#FFFFFF'),
    ])
    assert len(fig.layout.shapes) == 1
    assert len(fig.layout.annotations) == 0
    assert tuple(fig.layout.xaxis.range) == (0, 200)
    assert fig.layout.plot_bgcolor == '#111111'

def test_hover_trace_only_for_defect_markers(complete_state):
    fig = create_wafer_figure(build_schematic(complete_state))
    assert len(fig.data) == 1
    hover = fig.data[0]
    assert isinstance(hover, go.Scatter)
    assert len(hover.x) == 2
    assert "Metal Bridging" in hover.text[0]

def test_idle_figure_has_no_hover_trace():
    fig = create_wafer_figure(build_schematic(CycleState()))
    assert len(fig.data) == 0

def test_to_rgba():
    assert to_rgba('#FF0000', 0.5) == 'rgba(255,0,0,0.5)'
    assert to_rgba('yellow') == 'rgba(255,255,0,1.0)'

def test_create_severity_pareto_trace():
    trace = create_severity_pareto_trace(severity_breakdown(get_fixture(2).defects))
    assert isinstance(trace, go.Bar)
    assert list(trace.x) == ['CRITICAL', 'HIGH', 'MEDIUM', 'LOW']
    assert list(trace.y) == [1, 0, 1, 0]
    assert trace.marker.color[0] == CRITICAL_COLOR

def test_create_severity_pareto_trace_unknown_and_empty():
    trace = create_severity_pareto_trace({'weird': 2})
    assert trace.marker.color[0] == DEFAULT_DEFECT_COLOR

    empty = create_severity_pareto_trace({})
    assert isinstance(empty, go.Bar)
