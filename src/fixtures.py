"""
Fixture Catalog Module.
The fixed, ordered set of sample wafers the simulation cycles through.
Each wafer is pre-populated with the defects its scan will reveal.
"""
from typing import Tuple

from src.models import DefectRecord, WaferFixture

WAFER_CATALOG: Tuple[WaferFixture, ...] = (
    WaferFixture(id=1, defects=(
        DefectRecord(x=150, y=120, category='particle', severity='high', size=8),
        DefectRecord(x=280, y=200, category='scratch', severity='medium', size=12),
        DefectRecord(x=320, y=80, category='residue', severity='low', size=6),
    )),
    WaferFixture(id=2, defects=(
        DefectRecord(x=200, y=160, category='bridging', severity='critical', size=10),
        DefectRecord(x=100, y=250, category='particle', severity='medium', size=7),
    )),
    WaferFixture(id=3, defects=(
        DefectRecord(x=250, y=100, category='misalignment', severity='high', size=15),
        DefectRecord(x=180, y=300, category='etch_residue', severity='low', size=5),
        DefectRecord(x=350, y=180, category='particle', severity='medium', size=9),
    )),
)

def get_fixture(wafer_id: int, catalog: Tuple[WaferFixture, ...] = WAFER_CATALOG) -> WaferFixture:
    """
    Returns the fixture for a 1-based wafer id.
    Ids outside the catalog fall back to the first fixture.
    """
    if 1 <= wafer_id <= len(catalog):
        return catalog[wafer_id - 1]
    return catalog[0]

def next_wafer_id(wafer_id: int, catalog: Tuple[WaferFixture, ...] = WAFER_CATALOG) -> int:
    """Advances to the next wafer, wrapping from the last back to 1."""
    return (wafer_id % len(catalog)) + 1
