from vaal_water.config import MAP_CENTER, MARKER_COLOR, MARKER_SELECTED_COLOR
from vaal_water.pipeline import LocationCoordinate, SeriesPoint
from vaal_water.plotting import create_location_map, create_trend_plot


def test_trend_plot_renders_gaps():
    points = [
        SeriesPoint("Q1 2011", 7.1),
        SeriesPoint("Q2 2011", None),
        SeriesPoint("Q3 2011", 7.4),
        SeriesPoint("Q4 2011", 7.6),
    ]

    fig = create_trend_plot(points, "pH")
    trace = fig.data[0]

    assert list(trace.x) == ["Q1 2011", "Q2 2011", "Q3 2011", "Q4 2011"]
    assert trace.y[1] is None
    assert trace.connectgaps is False
    assert trace.name == "pH"


def test_trend_plot_empty_series():
    fig = create_trend_plot([], "COD", unit="mg/L")

    assert len(fig.data) == 1
    assert len(fig.data[0].x or ()) == 0


def test_location_map_highlights_selection():
    locations = {
        "KB": LocationCoordinate("Klip River bridge", -26.5, 28.0),
        "VD": LocationCoordinate("Vaal Dam wall", -26.9, 28.1),
    }

    fig = create_location_map(locations, selected="VD")
    trace = fig.data[0]

    assert list(trace.customdata) == ["KB", "VD"]
    assert list(trace.marker.color) == [MARKER_COLOR, MARKER_SELECTED_COLOR]
    assert list(trace.lat) == [-26.5, -26.9]
    assert list(trace.text) == ["Klip River bridge", "Vaal Dam wall"]
    assert fig.layout.map.center.lat == MAP_CENTER[0]
    assert fig.layout.map.center.lon == MAP_CENTER[1]
