import pytest
from src.controller import ScanCycleController
from src.config import ScanTiming, INITIAL_WAFERS_PROCESSED, INITIAL_YIELD_RATE
from src.enums import CyclePhase
from src.fixtures import WAFER_CATALOG
from src.scheduler import VirtualScheduler

# 50 ticks of 25ms take progress to 100; the reveal follows 500ms later.
FULL_SCAN_MS = 50 * 25
REVEAL_MS = 500

@pytest.fixture
def scheduler() -> VirtualScheduler:
    return VirtualScheduler()

@pytest.fixture
def controller(scheduler) -> ScanCycleController:
    return ScanCycleController(scheduler)

def test_initial_state_is_idle_on_first_wafer(controller):
    """A fresh controller sits idle on wafer 1 with the starting production counters."""
    state = controller.state
    assert controller.phase == CyclePhase.IDLE
    assert state.current_wafer_id == 1
    assert state.running is False
    assert state.progress == 0
    assert state.elapsed_ms == 0
    assert state.revealed_defects == ()
    assert state.cumulative_yield_rate == INITIAL_YIELD_RATE
    assert state.cumulative_wafers_processed == INITIAL_WAFERS_PROCESSED

def test_start_enters_scanning(controller, scheduler):
    assert controller.start() is True
    assert controller.phase == CyclePhase.SCANNING
    assert controller.state.running is True
    assert scheduler.pending == 1

def test_tick_advances_progress_and_elapsed(controller, scheduler):
    controller.start()
    scheduler.advance(25)
    assert controller.state.progress == 2
    assert controller.state.elapsed_ms == 2

    scheduler.advance(24)
    assert controller.state.progress == 2, "No tick should fire before the interval elapses"

    scheduler.advance(1)
    assert controller.state.progress == 4

def test_progress_is_monotonic_and_capped(controller, scheduler):
    """Progress never decreases and never exceeds 100 while running."""
    controller.start()
    previous = 0
    while controller.state.running:
        scheduler.advance(5)
        assert controller.state.progress >= previous
        assert controller.state.progress <= 100
        previous = controller.state.progress
    assert controller.state.progress == 100

def test_progress_clamps_when_step_overshoots(scheduler):
    """A step that does not divide 100 still stops exactly at 100."""
    controller = ScanCycleController(scheduler, timing=ScanTiming(tick_interval_ms=10, progress_step=30, reveal_delay_ms=0))
    controller.start()
    scheduler.advance(40)
    assert controller.state.progress == 100
    assert controller.state.elapsed_ms == 120

def test_reaching_100_enters_revealing(controller, scheduler):
    controller.start()
    scheduler.advance(FULL_SCAN_MS)

    assert controller.state.progress == 100
    assert controller.phase == CyclePhase.REVEALING
    assert controller.state.running is True
    assert controller.state.revealed_defects == ()

    # The tick has been cancelled: only the pending reveal remains.
    assert scheduler.pending == 1
    scheduler.advance(REVEAL_MS - 1)
    assert controller.state.progress == 100
    assert controller.state.elapsed_ms == 100

def test_reveal_is_atomic(controller, scheduler):
    """Defects stay empty through scanning, then appear as the full fixture list in one step."""
    controller.start()
    for _ in range((FULL_SCAN_MS + REVEAL_MS) // 25 - 1):
        scheduler.advance(25)
        assert controller.state.revealed_defects == ()

    scheduler.advance(25)
    assert controller.phase == CyclePhase.COMPLETE
    assert controller.state.running is False
    assert controller.state.revealed_defects == WAFER_CATALOG[0].defects

def test_completion_updates_metrics_once(controller, scheduler):
    controller.start()
    scheduler.run_until_idle()

    assert controller.state.cumulative_wafers_processed == INITIAL_WAFERS_PROCESSED + 1
    assert controller.state.cumulative_yield_rate == 96.5
    assert scheduler.pending == 0

def test_start_is_idempotent_while_scanning(scheduler):
    """Calling start() twice ends in the same state as calling it once."""
    once = ScanCycleController(VirtualScheduler())
    once.start()
    once.scheduler.run_until_idle()

    twice = ScanCycleController(scheduler)
    assert twice.start() is True
    assert twice.start() is False
    assert scheduler.pending == 1, "A second start must not register a second tick source"
    scheduler.run_until_idle()

    assert twice.state == once.state

def test_start_ignored_while_revealing(controller, scheduler):
    controller.start()
    scheduler.advance(FULL_SCAN_MS)
    assert controller.phase == CyclePhase.REVEALING

    assert controller.start() is False
    assert controller.state.progress == 100

def test_start_allowed_again_after_complete(controller, scheduler):
    """Restarting a completed wafer clears the revealed defects and rescans it."""
    controller.start()
    scheduler.run_until_idle()
    assert controller.state.revealed_defects

    assert controller.start() is True
    assert controller.state.revealed_defects == ()
    assert controller.state.progress == 0
    assert controller.state.elapsed_ms == 0
    assert controller.state.current_wafer_id == 1

    scheduler.run_until_idle()
    assert controller.state.cumulative_wafers_processed == INITIAL_WAFERS_PROCESSED + 2

def test_reset_wraps_over_catalog(controller):
    """After N resets from wafer 1 the controller is back on wafer 1."""
    seen = []
    for _ in range(len(WAFER_CATALOG)):
        controller.reset()
        seen.append(controller.state.current_wafer_id)
    assert seen == [2, 3, 1]

def test_reset_mid_scan_cancels_everything(controller, scheduler):
    controller.start()
    scheduler.advance(500)
    assert controller.state.progress == 40

    controller.reset()
    assert controller.phase == CyclePhase.IDLE
    assert controller.state.running is False
    assert controller.state.progress == 0
    assert controller.state.elapsed_ms == 0
    assert controller.state.current_wafer_id == 2
    assert scheduler.pending == 0

    scheduler.advance(10_000)
    assert controller.state.progress == 0
    assert controller.state.revealed_defects == ()

def test_reset_before_reveal_prevents_stale_reveal(controller, scheduler):
    """
    Scan to 100%, then reset before the reveal delay elapses: the pending reveal
    never fires and the processed counter is not incremented.
    """
    controller.start()
    scheduler.advance(FULL_SCAN_MS)
    assert controller.phase == CyclePhase.REVEALING

    controller.reset()
    scheduler.advance(REVEAL_MS * 4)

    assert controller.phase == CyclePhase.IDLE
    assert controller.state.current_wafer_id == 2
    assert controller.state.revealed_defects == ()
    assert controller.state.cumulative_wafers_processed == INITIAL_WAFERS_PROCESSED
    assert controller.state.cumulative_yield_rate == INITIAL_YIELD_RATE

def test_reset_after_complete_keeps_counters(controller, scheduler):
    controller.start()
    scheduler.run_until_idle()
    controller.reset()

    assert controller.state.revealed_defects == ()
    assert controller.state.cumulative_wafers_processed == INITIAL_WAFERS_PROCESSED + 1
    assert controller.state.cumulative_yield_rate == 96.5

def test_second_wafer_scenario(controller, scheduler):
    """Wafer 2 carries one critical defect out of two: yield 95.0."""
    controller.reset()
    controller.start()
    scheduler.run_until_idle()

    assert len(controller.state.revealed_defects) == 2
    assert controller.state.cumulative_yield_rate == 95.0

def test_out_of_range_wafer_falls_back_to_first_fixture(scheduler):
    controller = ScanCycleController(scheduler)
    controller.state.current_wafer_id = 99

    controller.start()
    scheduler.run_until_idle()
    assert controller.state.revealed_defects == WAFER_CATALOG[0].defects

def test_configure_only_when_inactive(controller, scheduler):
    fast = ScanTiming(tick_interval_ms=10, progress_step=10, reveal_delay_ms=100)

    controller.start()
    assert controller.configure(fast) is False
    controller.reset()

    assert controller.configure(fast) is True
    controller.start()
    scheduler.advance(100)
    assert controller.phase == CyclePhase.REVEALING
    scheduler.advance(100)
    assert controller.phase == CyclePhase.COMPLETE
