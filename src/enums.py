"""
Enum Definitions Module.

This module contains Enumeration classes for defining constant sets of values,
such as defect categories, severities and scan-cycle phases. Using enums instead
of raw strings improves code readability and reduces the risk of typos.
"""
from enum import Enum
from typing import Union

from src.config import (
    CRITICAL_COLOR, HIGH_COLOR, MEDIUM_COLOR, LOW_COLOR,
    DEFAULT_DEFECT_COLOR, DEFAULT_DEFECT_LABEL
)

class DefectCategory(Enum):
    """Enumeration for the defect categories reported by the inspection."""
    PARTICLE = "particle"
    SCRATCH = "scratch"
    RESIDUE = "residue"
    BRIDGING = "bridging"
    MISALIGNMENT = "misalignment"
    ETCH_RESIDUE = "etch_residue"

    @classmethod
    def values(cls) -> list[str]:
        """Returns the string values of all enum members."""
        return [item.value for item in cls]

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]

    @classmethod
    def label_for(cls, value: Union["DefectCategory", str]) -> str:
        """Returns the display label for a category, or the default label if unknown."""
        try:
            return cls(value).label
        except ValueError:
            return DEFAULT_DEFECT_LABEL


_CATEGORY_LABELS = {
    DefectCategory.PARTICLE: "Metal Particle",
    DefectCategory.SCRATCH: "Surface Scratch",
    DefectCategory.RESIDUE: "Chemical Residue",
    DefectCategory.BRIDGING: "Metal Bridging",
    DefectCategory.MISALIGNMENT: "Pattern Misalignment",
    DefectCategory.ETCH_RESIDUE: "Etch Residue",
}


class Severity(Enum):
    """Enumeration for defect severities, declared in visual priority order."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @classmethod
    def values(cls) -> list[str]:
        """Returns the string values of all enum members."""
        return [item.value for item in cls]

    @property
    def color(self) -> str:
        return _SEVERITY_COLORS[self]

    @classmethod
    def color_for(cls, value: Union["Severity", str]) -> str:
        """Returns the marker color for a severity, or the default grey if unknown."""
        try:
            return cls(value).color
        except ValueError:
            return DEFAULT_DEFECT_COLOR


_SEVERITY_COLORS = {
    Severity.CRITICAL: CRITICAL_COLOR,
    Severity.HIGH: HIGH_COLOR,
    Severity.MEDIUM: MEDIUM_COLOR,
    Severity.LOW: LOW_COLOR,
}


class CyclePhase(Enum):
    """Enumeration for the phases of a single scan cycle."""
    IDLE = "Idle"
    SCANNING = "Scanning"
    REVEALING = "Revealing"
    COMPLETE = "Complete"

    def is_active(self) -> bool:
        """Returns True while a scan owns the timers (start() is a no-op)."""
        return self in [CyclePhase.SCANNING, CyclePhase.REVEALING]
