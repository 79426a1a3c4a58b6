from types import SimpleNamespace

from shiny import reactive

from vaal_water.map_events import consume_click, marker_click_handler
from vaal_water.pipeline import LocationCoordinate
from vaal_water.plotting import create_location_map

LOCATIONS = {
    "KB": LocationCoordinate("Klip River bridge", -26.5, 28.0),
    "VD": LocationCoordinate("Vaal Dam wall", -26.9, 28.1),
}


def _click(index):
    return SimpleNamespace(point_inds=[index])


def test_click_stores_location_id():
    clicked = reactive.value(None)
    handler = marker_click_handler(clicked)
    trace = create_location_map(LOCATIONS, selected="KB").data[0]

    handler(trace, _click(1), None)

    assert consume_click(clicked) == "VD"


def test_click_without_points_is_ignored():
    clicked = reactive.value(None)
    handler = marker_click_handler(clicked)
    trace = create_location_map(LOCATIONS).data[0]

    handler(trace, SimpleNamespace(point_inds=[]), None)

    assert consume_click(clicked) is None


def test_same_marker_clicked_again_after_rerender():
    clicked = reactive.value(None)
    handler = marker_click_handler(clicked)

    first = create_location_map(LOCATIONS, selected="KB").data[0]
    handler(first, _click(0), None)
    assert consume_click(clicked) == "KB"

    # Map is redrawn after the dropdown moved to VD; KB is clicked again
    second = create_location_map(LOCATIONS, selected="VD").data[0]
    assert clicked.set(second.customdata[0]) is True
    assert consume_click(clicked) == "KB"

    handler(second, _click(0), None)
    assert consume_click(clicked) == "KB"
