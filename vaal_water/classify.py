"""Water-quality status classification against the parameter catalog."""

import math
from typing import Mapping, NamedTuple, Optional

from .config import AMBER, GREEN, LIME, NEUTRAL_GRAY, PARAMETERS, RED, ParameterDescriptor

# pH bands: inside GOOD is "Good", inside MODERATE (but not GOOD) is "Moderate"
PH_GOOD_BAND = (6.5, 8.5)
PH_MODERATE_BAND = (6.0, 9.0)


class QualityStatus(NamedTuple):
    status: str
    color: str


UNKNOWN = QualityStatus("unknown", NEUTRAL_GRAY)


def classify(
    value: Optional[float],
    parameter_id: str,
    parameters: Mapping[str, ParameterDescriptor] = PARAMETERS,
) -> QualityStatus:
    """Classify ``value`` for ``parameter_id``.

    pH uses fixed two-band rules and never yields ``"Excellent"``.  Every
    other parameter is graded against the upper bound ``max`` of its good
    range: up to half of ``max`` is Excellent, up to ``max`` Good, up to
    one and a half times ``max`` Moderate, anything above Poor.

    Missing values, NaN and unknown parameter ids give :data:`UNKNOWN`.
    """
    descriptor = parameters.get(parameter_id)
    if descriptor is None or value is None:
        return UNKNOWN
    try:
        if math.isnan(value):
            return UNKNOWN
    except TypeError:
        return UNKNOWN

    if parameter_id == "pH":
        if PH_GOOD_BAND[0] <= value <= PH_GOOD_BAND[1]:
            return QualityStatus("Good", GREEN)
        if PH_MODERATE_BAND[0] <= value <= PH_MODERATE_BAND[1]:
            return QualityStatus("Moderate", AMBER)
        return QualityStatus("Poor", RED)

    upper = descriptor.good_range[1]
    if value <= upper * 0.5:
        return QualityStatus("Excellent", GREEN)
    if value <= upper:
        return QualityStatus("Good", LIME)
    if value <= upper * 1.5:
        return QualityStatus("Moderate", AMBER)
    return QualityStatus("Poor", RED)
