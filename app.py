from pathlib import Path

from shiny import reactive, render
from shiny.express import input, ui
from shinywidgets import render_plotly

# Import organized modules
from vaal_water.classify import UNKNOWN, classify
from vaal_water.config import (
    CONTACT_EMAIL,
    CONTACT_LINKEDIN,
    CONTACT_NAME,
    CONTACT_PHONE,
    DEFAULT_LOCATION,
    DEFAULT_PARAMETER,
    DEFAULT_VIEW_MODE,
    DEFAULT_YEAR_RANGE,
    FOOTER_TEXT,
    GLOBAL_YEAR_MAX,
    GLOBAL_YEAR_MIN,
    MAP_TITLE,
    OVERVIEW_LINE_COLOR,
    PARAMETERS,
    POSTER_AUTHORS,
    POSTER_TITLE,
    QUALITY_SCALE,
    VIEW_MODE_OPTIONS,
)
from vaal_water.data_manager import load_dataset
from vaal_water.map_events import consume_click, marker_click_handler
from vaal_water.pipeline import (
    annual_series,
    current_value,
    location_choices,
    normalise_year_range,
    overview_series,
    quarterly_series,
    resolve_location,
)
from vaal_water.plotting import create_location_map, create_trend_plot

# Helpers for UI mapping
PARAMETER_MAPPING = {pid: p.label for pid, p in PARAMETERS.items()}
VIEW_MODE_MAPPING = {value: label for label, value in VIEW_MODE_OPTIONS}

# ======================================================
#  REACTIVE STATE
# ======================================================
# Load once on startup; values stay in-memory until app restart.
dataset = load_dataset()

LOCATION_CHOICES = location_choices(dataset.locations) or {"": "No data available"}
START_LOCATION = resolve_location(dataset.locations, DEFAULT_LOCATION) or ""

clicked_location = reactive.value(None)


@reactive.calc
def selected_location():
    return resolve_location(dataset.locations, input.location())


@reactive.calc
def selected_parameter():
    parameter = input.parameter()
    return parameter if parameter in PARAMETERS else DEFAULT_PARAMETER


@reactive.calc
def year_range():
    return normalise_year_range(input.year_min(), input.year_max())


@reactive.calc
def trend_points():
    location, parameter = selected_location(), selected_parameter()
    if input.view_mode() == "annual":
        return annual_series(dataset, location, parameter, year_range())
    # Quarterly view shows the upper bound of the year range
    return quarterly_series(dataset, location, parameter, year_range()[1])


@reactive.calc
def current_status():
    value = current_value(trend_points())
    if value is None:
        return None, UNKNOWN
    return value, classify(value, selected_parameter())


def location_name():
    coord = dataset.locations.get(selected_location())
    return coord.name if coord is not None and coord.name else "—"


# ======================================================
#  UI LAYOUT
# ======================================================
css_file = Path(__file__).parent / "css" / "theme.css"

ui.include_css(css_file)

ui.page_opts(
    title="Vaal River Water Quality",
    fillable=False,
    fillable_mobile=True,
    full_width=True,
    id="page",
    lang="en",
)

with ui.tags.section(id="landing", class_="hero"):
    ui.h1(POSTER_TITLE)
    ui.p(" | ".join(POSTER_AUTHORS), class_="authors")

with ui.tags.section(id="dashboard", class_="dashboard"):
    with ui.layout_columns(col_widths=[4, 8]):
        with ui.card(class_="glass"):
            ui.card_header("Water Chemistry Status")
            ui.input_select(
                "location", "Location", LOCATION_CHOICES, selected=START_LOCATION
            )
            ui.input_select(
                "parameter",
                "Parameter",
                PARAMETER_MAPPING,
                selected=DEFAULT_PARAMETER,
            )

            with ui.div(class_="status-box"):
                ui.div("Water Quality", class_="status-label")

                @render.ui
                def status_reading():
                    value, status = current_status()
                    unit = PARAMETERS[selected_parameter()].unit
                    text = f"{value:.2f} {unit}" if value is not None else f"N/A {unit}"
                    return ui.TagList(
                        ui.div(text.strip(), class_="status-value", style=f"color:{status.color};"),
                        ui.span(
                            status.status,
                            class_="status-badge",
                            style=f"background-color:{status.color};",
                        ),
                    )

            with ui.div(class_="status-box"):
                ui.div("Quality Scale", class_="status-label")
                with ui.div(class_="quality-scale"):
                    for label, color in QUALITY_SCALE:
                        with ui.span(class_="scale-item"):
                            ui.span(class_="dot", style=f"background-color:{color};")
                            ui.span(label)

            ui.input_radio_buttons(
                "view_mode",
                "View Mode",
                VIEW_MODE_MAPPING,
                selected=DEFAULT_VIEW_MODE,
                inline=True,
            )
            with ui.layout_columns(col_widths=[6, 6]):
                ui.input_numeric(
                    "year_min",
                    "From",
                    value=DEFAULT_YEAR_RANGE[0],
                    min=GLOBAL_YEAR_MIN,
                    max=GLOBAL_YEAR_MAX,
                    step=1,
                )
                ui.input_numeric(
                    "year_max",
                    "To",
                    value=DEFAULT_YEAR_RANGE[1],
                    min=GLOBAL_YEAR_MIN,
                    max=GLOBAL_YEAR_MAX,
                    step=1,
                )
            ui.input_action_button(
                "reset_filters", "Reset filters", class_="btn-primary mt-3"
            )

        with ui.card(class_="glass"):
            ui.card_header(MAP_TITLE)

            @render_plotly
            def location_map():
                return create_location_map(dataset.locations, selected_location())

            ui.p(
                "Click a marker to select a location • Red marker = selected",
                class_="hint",
            )

    with ui.layout_columns(col_widths=[6, 6]):
        with ui.card(class_="glass"):

            @render.ui
            def trend_header():
                title = "Annual Trends" if input.view_mode() == "annual" else "Quarterly Trends"
                return ui.TagList(ui.h3(title), ui.p(location_name(), class_="hint"))

            @render_plotly
            def trend_plot():
                parameter = PARAMETERS[selected_parameter()]
                return create_trend_plot(
                    trend_points(), parameter.label, unit=parameter.unit
                )

        with ui.card(class_="glass"):

            @render.ui
            def overview_header():
                return ui.TagList(ui.h3("14-Year Overview"), ui.p(location_name(), class_="hint"))

            @render_plotly
            def overview_plot():
                parameter = PARAMETERS[selected_parameter()]
                points = overview_series(dataset, selected_location(), parameter.id)
                return create_trend_plot(
                    points,
                    parameter.label,
                    unit=parameter.unit,
                    line_color=OVERVIEW_LINE_COLOR,
                )

with ui.tags.section(id="contact", class_="contact"):
    ui.h2("Get In Touch")
    ui.p("For more information contact us on:")
    with ui.div(class_="contact-details"):
        ui.h3(CONTACT_NAME)
        ui.p(CONTACT_PHONE)
        ui.p(ui.a(CONTACT_EMAIL, href=f"mailto:{CONTACT_EMAIL}"))
        ui.p(
            ui.a(
                CONTACT_LINKEDIN.replace("https://www.", ""),
                href=CONTACT_LINKEDIN,
                target="_blank",
                rel="noopener noreferrer",
            )
        )
    ui.p(FOOTER_TEXT, class_="footer")


# ======================================================
#  EVENTS
# ======================================================
_on_marker_click = marker_click_handler(clicked_location)


@reactive.effect
def _register_map_click():
    # A new widget is created on every re-render
    widget = location_map.widget
    if widget is not None and widget.data:
        widget.data[0].on_click(_on_marker_click)


@reactive.effect
@reactive.event(clicked_location)
def _select_clicked_location():
    location_id = consume_click(clicked_location)
    if location_id in dataset.locations:
        ui.update_select("location", selected=location_id)


@reactive.effect
@reactive.event(input.reset_filters)
def _reset_filters():
    ui.update_select("location", selected=START_LOCATION)
    ui.update_select("parameter", selected=DEFAULT_PARAMETER)
    ui.update_radio_buttons("view_mode", selected=DEFAULT_VIEW_MODE)
    ui.update_numeric("year_min", value=DEFAULT_YEAR_RANGE[0])
    ui.update_numeric("year_max", value=DEFAULT_YEAR_RANGE[1])
