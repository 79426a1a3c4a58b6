"""Core pipeline logic: yearly CSV text to an in-memory sample dataset.

This module turns the raw yearly files into a :class:`Dataset` holding

* every :class:`~vaal_water.parsing.SampleRecord`, in year then file order;
* a location index mapping each site code to its display name and
  coordinates, taken from the first record seen for that site.

The dataset is built once and never mutated.  The query functions
(:func:`quarterly_series`, :func:`annual_series` and
:func:`overview_series`) recompute from the records on every call and
return ordered :class:`SeriesPoint` sequences in which ``None`` marks a
gap rather than a zero.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import cached_property, reduce
from types import MappingProxyType
from typing import Callable, Dict, Iterable, List, Mapping, NamedTuple, Optional, Tuple

import logging
import pandas as pd

from .config import (
    DATA_SOURCE,
    DEFAULT_YEAR_RANGE,
    GLOBAL_YEAR_MAX,
    GLOBAL_YEAR_MIN,
    PARAMETERS,
    QUARTERS,
    SENTINEL,
    YEARS,
)
from .csv_fetch import fetch_all_years
from .parsing import SampleRecord, parse_csv, row_to_record

# Module‑level logger
logger = logging.getLogger(__name__)

KEY_COLS: List[str] = ["location_id", "year", "quarter"]


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LocationCoordinate:
    name: str
    lat: float
    lng: float


class SeriesPoint(NamedTuple):
    """One chart point; ``value`` is ``None`` where there is no data."""

    label: str
    value: Optional[float]


@dataclass(frozen=True)
class Dataset:
    """All samples loaded for the session plus the derived location index."""

    records: Tuple[SampleRecord, ...] = ()
    locations: Mapping[str, LocationCoordinate] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @cached_property
    def frame(self) -> pd.DataFrame:
        """The records as a DataFrame with one column per parameter id."""
        return records_to_frame(self.records)

    def __len__(self) -> int:
        return len(self.records)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def ensure_parameter(parameter_id: str) -> None:
    """Raise an error if ``parameter_id`` is not in the catalog."""
    if parameter_id not in PARAMETERS:
        raise KeyError(f"Unknown parameter: {parameter_id!r}")


def records_to_frame(records: Iterable[SampleRecord]) -> pd.DataFrame:
    """Flatten records into a DataFrame keyed by location, year and quarter.

    Parameter columns are named by catalog id (``"COD"``, ``"Ecoli"`` …) and
    are float typed; a missing E. coli reading becomes ``NaN``.
    """
    param_ids = list(PARAMETERS)
    rows = [
        {
            "location_id": r.location_id,
            "year": r.year,
            "quarter": r.quarter,
            **{pid: r.value(pid) for pid in param_ids},
        }
        for r in records
    ]
    df = pd.DataFrame(rows, columns=KEY_COLS + param_ids)
    return df.astype(
        {"year": "int64", "quarter": "int64", **{pid: "float64" for pid in param_ids}}
    )


def _add_location(
    index: Dict[str, LocationCoordinate], record: SampleRecord
) -> Dict[str, LocationCoordinate]:
    # First record seen for a site wins
    if record.location_id not in index:
        index[record.location_id] = LocationCoordinate(
            name=record.name, lat=record.lat, lng=record.lng
        )
    return index


def build_location_index(
    records: Iterable[SampleRecord],
) -> Mapping[str, LocationCoordinate]:
    """Fold records into a read-only ``location_id -> coordinate`` mapping."""
    return MappingProxyType(reduce(_add_location, records, {}))


def _clean_values(values: pd.Series) -> pd.Series:
    """Blank out the ``-9999`` placeholder so it is treated like a gap."""
    return values.mask(values == SENTINEL)


def _as_optional(value: object) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def filter_years(
    df: pd.DataFrame, year_min: int, year_max: int, *, year_col: str = "year"
) -> pd.DataFrame:
    """Return the rows of ``df`` whose year lies in the inclusive range."""
    return df.loc[df[year_col].between(year_min, year_max, inclusive="both")]


def normalise_year_range(
    year_min: object, year_max: object
) -> Tuple[int, int]:
    """Return a valid ``(year_min, year_max)`` pair.

    Each bound is clamped to the catalog years; a bound that is not a
    number falls back to the default range.  If the lower bound ends up
    above the upper bound the two are swapped.
    """

    def _bound(value: object, default: int) -> int:
        try:
            year = int(value)  # type: ignore[arg-type]
        except (TypeError, ValueError, OverflowError):
            return default
        return min(max(year, GLOBAL_YEAR_MIN), GLOBAL_YEAR_MAX)

    lo = _bound(year_min, DEFAULT_YEAR_RANGE[0])
    hi = _bound(year_max, DEFAULT_YEAR_RANGE[1])
    if lo > hi:
        lo, hi = hi, lo
    return lo, hi


def resolve_location(
    locations: Mapping[str, LocationCoordinate], selected: Optional[str]
) -> Optional[str]:
    """Return ``selected`` if it is a known site, else the first known site.

    ``None`` is returned only while the location index is empty.
    """
    if selected in locations:
        return selected
    return next(iter(locations), None)


def location_choices(locations: Mapping[str, LocationCoordinate]) -> Dict[str, str]:
    """Return ``location_id -> label`` ordered by site name for a selector."""
    ordered = sorted(locations.items(), key=lambda item: item[1].name.casefold())
    return {loc_id: (coord.name or loc_id) for loc_id, coord in ordered}


def current_value(points: List[SeriesPoint]) -> Optional[float]:
    """Value of the last point in a series (the status card reading)."""
    return points[-1].value if points else None


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def build_dataset(texts_by_year: Mapping[int, str]) -> Dataset:
    """Parse and map every year's text into a :class:`Dataset`.

    Parameters
    ----------
    texts_by_year : Mapping[int, str]
        Raw CSV text keyed by year.  Years are processed in mapping order,
        which fixes the order of ``Dataset.records``.

    Returns
    -------
    Dataset
        Records for every data row, plus the location index built from them.
    """
    records: List[SampleRecord] = []
    for year, text in texts_by_year.items():
        rows = parse_csv(text)
        records.extend(row_to_record(row, year) for row in rows)
        logger.debug("Parsed %d rows for %s", len(rows), year)

    return Dataset(records=tuple(records), locations=build_location_index(records))


def run_pipeline(
    *,
    source: str = DATA_SOURCE,
    years: Iterable[int] = YEARS,
    fetch: Optional[Callable[[int], str]] = None,
) -> Dataset:
    """Fetch, parse and map every configured year into a :class:`Dataset`.

    Years whose files cannot be fetched contribute no records; see
    :func:`vaal_water.csv_fetch.fetch_all_years`.
    """
    texts = fetch_all_years(years, source=source, fetch=fetch)
    dataset = build_dataset(texts)
    logger.info(
        "Loaded %d samples for %d locations from %d year files",
        len(dataset),
        len(dataset.locations),
        len(texts),
    )
    return dataset


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


def quarterly_series(
    dataset: Dataset, location_id: Optional[str], parameter_id: str, year: int
) -> List[SeriesPoint]:
    """Per-quarter readings of one parameter at one site for one year.

    Returns four points, quarters 1 to 4 in order.  Each value is the
    reading of the first record for that quarter, or ``None`` when there
    is no record, no reading, or the ``-9999`` placeholder.
    """
    ensure_parameter(parameter_id)
    df = dataset.frame
    sub = df.loc[(df["location_id"] == location_id) & (df["year"] == year)]

    points: List[SeriesPoint] = []
    for quarter in QUARTERS:
        matches = _clean_values(sub.loc[sub["quarter"] == quarter, parameter_id])
        value = _as_optional(matches.iloc[0]) if not matches.empty else None
        points.append(SeriesPoint(f"Q{quarter} {year}", value))
    return points


def annual_series(
    dataset: Dataset,
    location_id: Optional[str],
    parameter_id: str,
    year_range: Tuple[object, object],
) -> List[SeriesPoint]:
    """Annual means of one parameter at one site across a year range.

    Parameters
    ----------
    dataset : Dataset
        Loaded samples.
    location_id : str or None
        Site code; an unknown or ``None`` site yields all-``None`` points.
    parameter_id : str
        Catalog parameter id.
    year_range : Tuple
        Inclusive ``(year_min, year_max)``; normalised with
        :func:`normalise_year_range` first.

    Returns
    -------
    List[SeriesPoint]
        One point per year, ascending.  Missing readings and ``-9999``
        placeholders are left out of both the sum and the count; a year
        without any eligible reading has value ``None``.
    """
    ensure_parameter(parameter_id)
    year_min, year_max = normalise_year_range(*year_range)

    df = filter_years(dataset.frame, year_min, year_max)
    sub = df.loc[df["location_id"] == location_id]
    means = _clean_values(sub[parameter_id]).groupby(sub["year"]).mean()

    return [
        SeriesPoint(str(year), _as_optional(means.get(year)))
        for year in YEARS
        if year_min <= year <= year_max
    ]


def overview_series(
    dataset: Dataset, location_id: Optional[str], parameter_id: str
) -> List[SeriesPoint]:
    """Annual means over every catalog year (the long-term overview)."""
    return annual_series(
        dataset, location_id, parameter_id, (GLOBAL_YEAR_MIN, GLOBAL_YEAR_MAX)
    )
