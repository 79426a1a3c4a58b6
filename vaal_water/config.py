"""
Configuration constants for the Vaal River water quality dashboard.
"""

import os
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Tuple

# ======================================================
#  DATA SOURCES / CONSTANTS
# ======================================================
# Local directory or http(s) base URL holding one ``{year}.csv`` per year.
DATA_SOURCE: str = os.getenv(
    "VAAL_DATA_SOURCE",
    os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "data"),
)
FILE_PATTERN: str = "{year}.csv"

# Seconds before a single year's HTTP fetch is abandoned.
REQUEST_TIMEOUT: float = 15.0

GLOBAL_YEAR_MIN: int = 2011
GLOBAL_YEAR_MAX: int = 2024
YEARS: Tuple[int, ...] = tuple(range(GLOBAL_YEAR_MIN, GLOBAL_YEAR_MAX + 1))
QUARTERS: Tuple[int, ...] = (1, 2, 3, 4)

# Source-data convention for "not measured".
SENTINEL: int = -9999

# Exact header strings of the yearly CSV files
COL_SAMPLE_ID: str = "Sample ID"
COL_DESCRIPTION: str = "Sample Point Description"
COL_QUARTER: str = "Quarter"
COL_ECOLI: str = "E. coli"
COL_LATITUDE: str = "Latitude"
COL_LONGITUDE: str = "Longitude"

# CSV header -> SampleRecord attribute for the float readings
CHEMISTRY_COLUMNS: Mapping[str, str] = MappingProxyType(
    {
        "Ammonia": "ammonia",
        "Chloride": "chloride",
        "Fluoride": "fluoride",
        "M-Alkalinity": "m_alkalinity",
        "Nitrate": "nitrate",
        "Phosphate": "phosphate",
        "Sulphate": "sulphate",
        "Chemical Oxygen Demand": "cod",
        "Conductivity": "conductivity",
        "pH": "ph",
    }
)

REQUIRED_COLUMNS: List[str] = [
    COL_SAMPLE_ID,
    COL_DESCRIPTION,
    COL_QUARTER,
    *CHEMISTRY_COLUMNS,
    COL_ECOLI,
    COL_LATITUDE,
    COL_LONGITUDE,
]


# ======================================================
#  PARAMETER CATALOG
# ======================================================
@dataclass(frozen=True)
class ParameterDescriptor:
    """Static display and threshold settings for one chemistry parameter."""

    id: str
    label: str
    unit: str
    good_range: Tuple[float, float]
    colors: Tuple[str, ...]
    field: str


GREEN = "#22c55e"
LIME = "#84cc16"
AMBER = "#f59e0b"
RED = "#ef4444"
NEUTRAL_GRAY = "#94a3b8"

_TRAFFIC_LIGHT: Tuple[str, ...] = (GREEN, AMBER, RED)

PARAMETERS: Mapping[str, ParameterDescriptor] = MappingProxyType(
    {
        p.id: p
        for p in (
            ParameterDescriptor("pH", "pH", "", (6.5, 8.5), (RED, AMBER, GREEN, AMBER, RED), "ph"),
            ParameterDescriptor("Ammonia", "Ammonia", "mg/L", (0, 1), _TRAFFIC_LIGHT, "ammonia"),
            ParameterDescriptor("Chloride", "Chloride", "mg/L", (0, 250), _TRAFFIC_LIGHT, "chloride"),
            ParameterDescriptor("Ecoli", "E. coli", "cfu/100ml", (0, 1000), _TRAFFIC_LIGHT, "ecoli"),
            ParameterDescriptor("COD", "COD", "mg/L", (0, 30), _TRAFFIC_LIGHT, "cod"),
            ParameterDescriptor("Conductivity", "Conductivity", "mS/m", (0, 170), _TRAFFIC_LIGHT, "conductivity"),
            ParameterDescriptor("Nitrate", "Nitrate", "mg/L", (0, 50), _TRAFFIC_LIGHT, "nitrate"),
            ParameterDescriptor("Phosphate", "Phosphate", "mg/L", (0, 0.1), _TRAFFIC_LIGHT, "phosphate"),
            ParameterDescriptor("Fluoride", "Fluoride", "mg/L", (0, 1.5), _TRAFFIC_LIGHT, "fluoride"),
            ParameterDescriptor("Sulphate", "Sulphate", "mg/L", (0, 250), _TRAFFIC_LIGHT, "sulphate"),
            ParameterDescriptor(
                "MAlkalinity", "M-Alkalinity", "mg/L as CaCO3", (20, 200), _TRAFFIC_LIGHT, "m_alkalinity"
            ),
        )
    }
)

# Legend order and colours of the general four-band scale
QUALITY_SCALE: List[Tuple[str, str]] = [
    ("Excellent", GREEN),
    ("Good", LIME),
    ("Moderate", AMBER),
    ("Poor", RED),
]

# ======================================================
#  MAP
# ======================================================
MAP_CENTER: Tuple[float, float] = (-27.0, 28.5)
MAP_ZOOM: int = 8
MAP_STYLE: str = "open-street-map"
MARKER_SELECTED_COLOR: str = "#dc2626"
MARKER_COLOR: str = "#2563eb"

# ======================================================
#  UI DEFAULTS
# ======================================================
VIEW_MODE_OPTIONS: List[Tuple[str, str]] = [
    ("Quarterly", "quarterly"),
    ("Annual", "annual"),
]

DEFAULT_PARAMETER: str = "pH"
DEFAULT_LOCATION: str = "KB"
DEFAULT_VIEW_MODE: str = "quarterly"
DEFAULT_YEAR_RANGE: Tuple[int, int] = (GLOBAL_YEAR_MIN, GLOBAL_YEAR_MAX)

TREND_LINE_COLOR: str = "#22d3ee"
OVERVIEW_LINE_COLOR: str = "#a78bfa"

# ======================================================
#  POSTER CONTENT
# ======================================================
POSTER_TITLE: str = (
    "Spatiotemporal Assessment of Water Quality in the Vaal River Catchment"
)
POSTER_AUTHORS: List[str] = [
    "Ntebogeng Raisibe Mothibe",
    "Khuliso Masindi",
    "Mary Evans",
]
MAP_TITLE: str = "Monitoring Locations - Vaal River Catchment"

CONTACT_NAME: str = "Ntebogeng Raisibe Mothibe"
CONTACT_PHONE: str = "(+27) 64 815 4264"
CONTACT_EMAIL: str = "2584720@students.wits.ac.za"
CONTACT_LINKEDIN: str = "https://www.linkedin.com/in/NRMothibe"
FOOTER_TEXT: str = (
    "© 2024 University of the Witwatersrand, Johannesburg. All rights reserved."
)
