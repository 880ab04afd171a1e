"""
Metrics Engine Module.

Pure functions deriving the production metrics shown on the dashboard from the
defects of a completed wafer scan.
"""
from typing import Dict, Sequence

from src.config import YIELD_BASE_RATE, YIELD_CRITICAL_PENALTY, YIELD_DEFECT_PENALTY, YIELD_FLOOR
from src.enums import Severity
from src.models import CycleState, DefectRecord

def compute_yield(defects: Sequence[DefectRecord]) -> float:
    """
    Estimates the yield rate (%) for a wafer from its defect list.
    Each critical defect costs 2 points and every defect 0.5 points off a
    98% baseline, floored at 85% and rounded to one decimal place.
    """
    critical_count = sum(1 for defect in defects if defect.is_critical)
    rate = YIELD_BASE_RATE - (critical_count * YIELD_CRITICAL_PENALTY) - (len(defects) * YIELD_DEFECT_PENALTY)
    rate = max(YIELD_FLOOR, rate)
    return round(rate, 1)

def record_completion(state: CycleState, defects: Sequence[DefectRecord]) -> float:
    """
    Applies the once-per-cycle bookkeeping for a completed scan.
    The yield rate is replaced, not averaged; the processed counter only grows.
    """
    state.cumulative_wafers_processed += 1
    state.cumulative_yield_rate = compute_yield(defects)
    return state.cumulative_yield_rate

def severity_breakdown(defects: Sequence[DefectRecord]) -> Dict[str, int]:
    """
    Counts defects per severity, ordered critical -> low.
    Known severities are always present (zero if absent); unknown ones are appended.
    """
    counts = {value: 0 for value in Severity.values()}
    for defect in defects:
        key = defect.severity.value if isinstance(defect.severity, Severity) else str(defect.severity)
        counts[key] = counts.get(key, 0) + 1
    return counts
