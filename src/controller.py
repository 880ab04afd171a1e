"""
Scan Cycle Controller Module.

Owns the CycleState and drives it through Idle -> Scanning -> Revealing ->
Complete on timer callbacks from an injected Scheduler. start() and reset()
are the only user-triggered entry points; neither raises.
"""
import logging
from typing import Optional, Tuple

from src.config import ScanTiming, DEFAULT_TIMING
from src.enums import CyclePhase
from src.fixtures import WAFER_CATALOG, get_fixture, next_wafer_id
from src.metrics import record_completion
from src.models import CycleState, WaferFixture
from src.scheduler import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

class ScanCycleController:
    """
    Single owner of the simulation state.
    All mutation happens here, either in start()/reset() or in the tick and
    reveal callbacks registered on the scheduler.
    """

    def __init__(
        self,
        scheduler: Scheduler,
        catalog: Tuple[WaferFixture, ...] = WAFER_CATALOG,
        timing: ScanTiming = DEFAULT_TIMING,
        state: Optional[CycleState] = None
    ):
        self.scheduler = scheduler
        self.catalog = catalog
        self.timing = timing
        self.state = state if state is not None else CycleState()
        self._phase = CyclePhase.IDLE
        self._tick_handle: Optional[TimerHandle] = None
        self._reveal_handle: Optional[TimerHandle] = None

    # --- Read-only views ---

    @property
    def phase(self) -> CyclePhase:
        return self._phase

    @property
    def is_active(self) -> bool:
        return self._phase.is_active()

    @property
    def current_fixture(self) -> WaferFixture:
        return get_fixture(self.state.current_wafer_id, self.catalog)

    # --- Actions ---

    def start(self) -> bool:
        """
        Begins a scan of the current wafer.
        Returns False (and changes nothing) if a scan is already in progress.
        """
        if self.is_active:
            logger.debug(f"Ignoring start() while {self._phase.value} {self.state.wafer_label}")
            return False

        self.state.clear_scan()
        self.state.running = True
        self._phase = CyclePhase.SCANNING
        self._tick_handle = self.scheduler.call_every(self.timing.tick_interval_ms, self._on_tick)

        logger.info(f"Scan started for {self.state.wafer_label}")
        return True

    def reset(self):
        """
        Abandons any scan in progress and moves on to the next wafer.
        Pending timers are cancelled before the state is touched.
        """
        self._cancel_timers()

        previous = self.state.wafer_label
        self.state.running = False
        self.state.clear_scan()
        self.state.current_wafer_id = next_wafer_id(self.state.current_wafer_id, self.catalog)
        self._phase = CyclePhase.IDLE

        logger.info(f"Reset {previous} -> {self.state.wafer_label}")

    def configure(self, timing: ScanTiming) -> bool:
        """
        Replaces the timing used by the next scan.
        Returns False while a scan is active; the running scan keeps its timing.
        """
        if self.is_active:
            logger.debug("Ignoring timing change while a scan is active")
            return False
        self.timing = timing
        return True

    # --- Timer callbacks ---

    def _on_tick(self):
        step = self.timing.progress_step
        self.state.progress += step
        self.state.elapsed_ms += step

        if self.state.progress >= 100:
            self.state.progress = 100
            if self._tick_handle is not None:
                self._tick_handle.cancel()
                self._tick_handle = None
            self._phase = CyclePhase.REVEALING
            self._reveal_handle = self.scheduler.call_later(self.timing.reveal_delay_ms, self._on_reveal)

    def _on_reveal(self):
        self._reveal_handle = None
        fixture = self.current_fixture

        self.state.revealed_defects = tuple(fixture.defects)
        self.state.running = False
        yield_rate = record_completion(self.state, fixture.defects)
        self._phase = CyclePhase.COMPLETE

        logger.info(
            f"Scan complete for {self.state.wafer_label}: {len(fixture.defects)} defect(s), "
            f"yield {yield_rate}%, processed {self.state.cumulative_wafers_processed}"
        )

    def _cancel_timers(self):
        for handle in (self._tick_handle, self._reveal_handle):
            if handle is not None:
                handle.cancel()
        self._tick_handle = None
        self._reveal_handle = None
