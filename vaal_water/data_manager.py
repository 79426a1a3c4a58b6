"""Data manager for loading the sample dataset once per process.

This module wraps :func:`pipeline.run_pipeline` in a memoised loader so
that every Shiny session in the same process shares one immutable
:class:`~vaal_water.pipeline.Dataset`.  Nothing is written to disk: the
dataset lives for the lifetime of the process and is rebuilt on restart
or when a reload is forced.
"""

import logging
from functools import lru_cache

from . import pipeline
from .config import DATA_SOURCE

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _compute_dataset(source: str) -> pipeline.Dataset:
    """Runs the fetch/parse/map pipeline for ``source``."""
    return pipeline.run_pipeline(source=source)


def load_dataset(
    source: str = DATA_SOURCE, force_reload: bool = False
) -> pipeline.Dataset:
    """
    Return the dataset for ``source``, computing it on first use.

    Parameters
    ----------
    source : str, optional
        Directory or base URL of the yearly files.
    force_reload : bool, optional
        If ``True``, drop the memoised dataset and fetch everything again.

    Returns
    -------
    pipeline.Dataset
        The loaded samples and location index.  Years that failed to load
        are simply absent.
    """
    if force_reload:
        _compute_dataset.cache_clear()

    logger.info("Loading water quality data from %s", source)
    dataset = _compute_dataset(source)
    if not dataset.records:
        logger.warning("No samples loaded from %s; charts will be empty", source)
    return dataset
