"""CSV parsing and row-to-record mapping for the yearly sample files.

The yearly files are simple comma-delimited text with a single header
row.  :func:`parse_csv` turns that text into loosely typed row mappings
and :func:`row_to_record` turns one row into a :class:`SampleRecord`.

Both functions are total: malformed cells never raise, they are coerced
to defaults instead.  Chemistry readings that are missing or unparsable
become ``0.0``; the E. coli reading is the one exception, where the
``-9999`` sentinel becomes ``None`` so that "not sampled" can be told
apart from a measured zero.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from .config import (
    CHEMISTRY_COLUMNS,
    COL_DESCRIPTION,
    COL_ECOLI,
    COL_LATITUDE,
    COL_LONGITUDE,
    COL_QUARTER,
    COL_SAMPLE_ID,
    PARAMETERS,
    SENTINEL,
)

Cell = Union[float, str]
Row = Dict[str, Cell]


# ---------------------------------------------------------------------------
# Record type
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SampleRecord:
    """One water-chemistry sample at a site for a given year and quarter."""

    location_id: str
    name: str
    year: int
    quarter: int
    ammonia: float = 0.0
    chloride: float = 0.0
    fluoride: float = 0.0
    m_alkalinity: float = 0.0
    nitrate: float = 0.0
    phosphate: float = 0.0
    sulphate: float = 0.0
    cod: float = 0.0
    conductivity: float = 0.0
    ph: float = 0.0
    ecoli: Optional[float] = None
    lat: float = 0.0
    lng: float = 0.0

    def value(self, parameter_id: str) -> Optional[float]:
        """Return the reading for a catalog parameter id (e.g. ``"COD"``)."""
        return getattr(self, PARAMETERS[parameter_id].field)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _coerce_cell(cell: str) -> Cell:
    """Return ``cell`` as a float when the whole string is numeric."""
    if cell == "" or "_" in cell:
        return cell
    try:
        number = float(cell)
    except ValueError:
        return cell
    if math.isnan(number):
        return cell
    return number


def _to_float(value: object) -> float:
    """Coerce a parsed cell to float; anything unparsable becomes 0.0."""
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        try:
            number = float(str(value).strip())
        except (TypeError, ValueError):
            return 0.0
    # NaN would otherwise leak into the averages
    return 0.0 if math.isnan(number) else number


def _to_text(value: object) -> str:
    if value is None or value == "":
        return ""
    if isinstance(value, float) and value.is_integer():
        # A numeric-looking site code was coerced by the parser
        return str(int(value))
    return str(value)


def _is_sentinel(value: object) -> bool:
    if isinstance(value, str):
        return value.strip() == str(SENTINEL)
    return isinstance(value, (int, float)) and value == SENTINEL


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def parse_csv(text: str) -> List[Row]:
    """Parse delimited text into a list of ``header -> cell`` mappings.

    Parameters
    ----------
    text : str
        Raw file contents.  The first line is the header row.

    Returns
    -------
    List[Dict[str, float | str]]
        One mapping per data line.  Cells are trimmed and converted to
        ``float`` when the entire cell is numeric; other cells stay strings
        and short rows are padded with empty strings.  Quoted fields are
        not supported.
    """
    lines = text.strip().splitlines()
    if not lines:
        return []

    headers = [h.strip() for h in lines[0].split(",")]
    rows: List[Row] = []
    for line in lines[1:]:
        values = [v.strip() for v in line.split(",")]
        row: Row = {}
        for index, header in enumerate(headers):
            cell = values[index] if index < len(values) else ""
            row[header] = _coerce_cell(cell)
        rows.append(row)
    return rows


def row_to_record(row: Row, year: int) -> SampleRecord:
    """Map one parsed row of a given year to a :class:`SampleRecord`."""
    readings = {
        field: _to_float(row.get(column, ""))
        for column, field in CHEMISTRY_COLUMNS.items()
    }

    quarter = _to_float(row.get(COL_QUARTER, ""))
    raw_ecoli = row.get(COL_ECOLI, "")
    ecoli = None if _is_sentinel(raw_ecoli) else _to_float(raw_ecoli)

    return SampleRecord(
        location_id=_to_text(row.get(COL_SAMPLE_ID, "")),
        name=_to_text(row.get(COL_DESCRIPTION, "")),
        year=year,
        quarter=int(quarter) if math.isfinite(quarter) else 0,
        ecoli=ecoli,
        lat=_to_float(row.get(COL_LATITUDE, "")),
        lng=_to_float(row.get(COL_LONGITUDE, "")),
        **readings,
    )
