"""
Fetches the yearly sample CSV files from a local directory or a web host.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, Optional

import requests

from .config import DATA_SOURCE, FILE_PATTERN, REQUEST_TIMEOUT, YEARS

logger = logging.getLogger(__name__)

FETCH_ERRORS = (requests.RequestException, OSError, UnicodeDecodeError)


def _is_url(source: str) -> bool:
    return source.lower().startswith(("http://", "https://"))


def year_location(year: int, source: str = DATA_SOURCE) -> str:
    """Return the path or URL of one year's file under ``source``."""
    filename = FILE_PATTERN.format(year=year)
    if _is_url(source):
        return f"{source.rstrip('/')}/{filename}"
    return str(Path(source) / filename)


def fetch_year_csv(
    year: int, source: str = DATA_SOURCE, timeout: float = REQUEST_TIMEOUT
) -> str:
    """Fetch the raw text of one year's file.

    Raises ``requests.RequestException`` for network failures and non-2xx
    responses, and ``OSError`` for unreadable local files.
    """
    location = year_location(year, source)
    if _is_url(source):
        response = requests.get(location, timeout=timeout)
        response.raise_for_status()
        return response.text
    return Path(location).read_text(encoding="utf-8-sig")


def fetch_all_years(
    years: Iterable[int] = YEARS,
    source: str = DATA_SOURCE,
    fetch: Optional[Callable[[int], str]] = None,
) -> Dict[int, str]:
    """Fetch every year in order, skipping the years that fail.

    Parameters
    ----------
    years : Iterable[int]
        Years to fetch; the result keeps this order.
    source : str
        Directory or base URL passed to :func:`fetch_year_csv`.
    fetch : Callable[[int], str], optional
        Replacement for :func:`fetch_year_csv` taking only the year.

    Returns
    -------
    Dict[int, str]
        Raw text keyed by year for the years that loaded.  A failed year
        is logged and left out; it never stops the remaining years.
    """
    if fetch is None:
        def fetch(year: int) -> str:
            return fetch_year_csv(year, source)

    texts: Dict[int, str] = {}
    failed = []
    for year in years:
        try:
            texts[year] = fetch(year)
        except FETCH_ERRORS as exc:
            logger.warning("Could not load data for %s: %s", year, exc)
            failed.append(year)

    if failed:
        logger.error(
            "Error loading CSV data: %d of %d years unavailable (%s)",
            len(failed),
            len(failed) + len(texts),
            ", ".join(str(y) for y in failed),
        )
    return texts
