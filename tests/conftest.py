import pytest

from vaal_water.config import REQUIRED_COLUMNS
from vaal_water.data_manager import _compute_dataset


def make_csv(rows, headers=REQUIRED_COLUMNS):
    """Render ``rows`` (dicts keyed by header) as yearly-file CSV text."""
    lines = [",".join(headers)]
    for row in rows:
        lines.append(",".join(str(row.get(h, "")) for h in headers))
    return "\n".join(lines) + "\n"


def sample_row(location_id="KB", quarter=1, **values):
    row = {
        "Sample ID": location_id,
        "Sample Point Description": f"{location_id} weir",
        "Quarter": quarter,
        "Latitude": -26.9,
        "Longitude": 28.1,
    }
    row.update(values)
    return row


@pytest.fixture(autouse=True)
def _clear_dataset_cache():
    _compute_dataset.cache_clear()
    yield
    _compute_dataset.cache_clear()
