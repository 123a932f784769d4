"""Rich terminal rendering of a LookupState.

Pure presentation: every number shown here goes through the controller's
formatting helpers, so the dashboard always reflects the current unit.
"""

from rich.console import Console, Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from weather_wizard.models.lookup import LookupState
from weather_wizard.models.weather import CurrentConditions, ForecastSummary
from weather_wizard.services.formatting import location_label, unit_toggle_label, weekday_label
from weather_wizard.services.lookup_controller import LookupController

TITLE = "Weather Wizard"
IDLE_BORDER = "#bfdbfe"


def _current_section(current: CurrentConditions, controller: LookupController) -> Text:
    wind = controller.format_wind_speed(current.wind_speed_ms)
    text = Text(justify="center")
    text.append(f"{location_label(current)}\n", style="bold")
    text.append(f"{controller.format_temperature(current.temperature_celsius)}\n", style="bold white")
    text.append(f"{current.condition_description.capitalize()}\n")
    text.append(f"Humidity: {current.humidity_percent}%    ", style="dim")
    text.append(f"Wind Speed: {wind.value} {wind.label}", style="dim")
    return text


def _forecast_section(forecast: ForecastSummary, controller: LookupController) -> Table:
    table = Table(
        show_header=True,
        header_style="bold",
        border_style="dim",
        title="5-Day Forecast",
        expand=True,
    )
    for day in forecast.days:
        table.add_column(weekday_label(day.timestamp_utc), justify="center", ratio=1)
    table.add_row(*(day.condition_description for day in forecast.days))
    table.add_row(*(controller.format_temperature(day.temperature_celsius) for day in forecast.days))
    return table


def build_dashboard(state: LookupState, controller: LookupController) -> Panel:
    """Build the full dashboard panel for a state."""
    parts: list[RenderableType] = []

    if state.is_loading:
        parts.append(Text(f"Searching for {state.query}...", style="italic"))
    if state.error:
        parts.append(Text(state.error, style="bold red", justify="center"))
    if state.current is not None:
        parts.append(_current_section(state.current, controller))
    if state.forecast is not None and len(state.forecast):
        parts.append(_forecast_section(state.forecast, controller))
    if not parts:
        parts.append(Text("Enter city name", style="dim"))

    parts.append(Text(f"[{unit_toggle_label(controller.unit)}]  [Reset]", style="dim"))

    border = IDLE_BORDER
    if state.current is not None:
        tier = controller.select_background_tier(state.current.temperature_celsius)
        border = tier.gradient[0]

    return Panel(
        Group(*parts),
        border_style=border,
        title=f"[bold]{TITLE}[/bold]",
        title_align="center",
        expand=True,
        safe_box=True,
    )


def print_dashboard(state: LookupState, controller: LookupController, console: Console) -> None:
    console.print(build_dashboard(state, controller))
