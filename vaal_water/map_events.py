"""
Click-to-select plumbing between the site map widget and the Shiny session.
"""

from typing import Callable, Optional

from shiny import reactive


def marker_click_handler(target: reactive.Value) -> Callable:
    """Build a plotly ``on_click`` callback that stores the clicked site id.

    Map markers carry their location id in ``customdata`` (see
    :func:`vaal_water.plotting.create_location_map`).
    """

    def _on_click(trace, points, state):
        if points.point_inds:
            target.set(trace.customdata[points.point_inds[0]])

    return _on_click


def consume_click(target: reactive.Value) -> Optional[str]:
    """Return the pending clicked site id and clear it.

    Clearing lets a later click on the same marker invalidate ``target``
    again.
    """
    with reactive.isolate():
        location_id = target.get()
    target.set(None)
    return location_id
