"""
Domain Models for Wafer Inspection Simulation.
Encapsulates the fixture records (wafers and their defects) and the mutable
scan-cycle state owned by the controller.
"""
from dataclasses import dataclass
import pandas as pd
from typing import List, Sequence, Tuple

from src.config import INITIAL_YIELD_RATE, INITIAL_WAFERS_PROCESSED
from src.enums import DefectCategory, Severity
from src.utils import format_wafer_label

@dataclass(frozen=True)
class DefectRecord:
    """
    A single canned defect on a wafer.
    Coordinates are relative to the top-left corner of the wafer's bounding box.
    """
    x: float
    y: float
    category: str
    severity: str
    size: float

    @property
    def category_label(self) -> str:
        return DefectCategory.label_for(self.category)

    @property
    def color(self) -> str:
        return Severity.color_for(self.severity)

    @property
    def is_critical(self) -> bool:
        return self.severity in (Severity.CRITICAL, Severity.CRITICAL.value)


@dataclass(frozen=True)
class WaferFixture:
    """A predefined wafer and the full list of defects its scan reveals."""
    id: int
    defects: Tuple[DefectRecord, ...] = ()

    @property
    def label(self) -> str:
        return format_wafer_label(self.id)

    def __len__(self):
        return len(self.defects)


@dataclass
class CycleState:
    """
    Mutable simulation state for the scan cycle.
    Owned by a single ScanCycleController; the renderer and metrics only read it.
    """
    current_wafer_id: int = 1
    running: bool = False
    progress: int = 0
    elapsed_ms: int = 0
    revealed_defects: Tuple[DefectRecord, ...] = ()
    cumulative_yield_rate: float = INITIAL_YIELD_RATE
    cumulative_wafers_processed: int = INITIAL_WAFERS_PROCESSED

    @property
    def wafer_label(self) -> str:
        return format_wafer_label(self.current_wafer_id)

    @property
    def defect_count(self) -> int:
        return len(self.revealed_defects)

    def clear_scan(self):
        """Zeroes progress, elapsed time and revealed defects together."""
        self.progress = 0
        self.elapsed_ms = 0
        self.revealed_defects = ()


DEFECT_TABLE_COLUMNS = ['ID', 'Category', 'Severity', 'Size (μm)', 'X', 'Y']

def defects_to_dataframe(defects: Sequence[DefectRecord]) -> pd.DataFrame:
    """
    Builds the per-defect detail table (1-based IDs matching the D<n> markers).
    """
    rows: List[dict] = []
    for index, defect in enumerate(defects):
        rows.append({
            'ID': f"D{index + 1}",
            'Category': defect.category_label,
            'Severity': str(defect.severity).upper(),
            'Size (μm)': defect.size,
            'X': defect.x,
            'Y': defect.y,
        })
    return pd.DataFrame(rows, columns=DEFECT_TABLE_COLUMNS)
