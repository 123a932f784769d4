"""Weather Wizard CLI: Typer entry point.

Commands:
- weather-wizard lookup <city>  : one lookup, printed as a dashboard or JSON
- weather-wizard dashboard      : interactive prompt loop
"""

import asyncio
import json
from typing import Any, Optional

from dotenv import load_dotenv

# Load environment variables before anything else
load_dotenv()

import typer
from rich.console import Console

from weather_wizard import __version__
from weather_wizard.config import get_settings
from weather_wizard.dashboard import print_dashboard
from weather_wizard.models.lookup import LookupState, LookupStatus
from weather_wizard.models.weather import DisplayUnit
from weather_wizard.services.logging_service import configure_logging, get_logger
from weather_wizard.services.lookup_controller import LookupController

app = typer.Typer(
    name="weather-wizard",
    help="Current conditions and a 5-day forecast for any city.",
    no_args_is_help=True,
)
console = Console(soft_wrap=True)

UNIT_COMMAND = ":unit"
RESET_COMMAND = ":reset"
QUIT_COMMANDS = {":quit", ":q"}


def _make_controller(imperial: bool) -> LookupController:
    """Controller wired to settings, with the API key injected explicitly."""
    settings = get_settings()
    unit = DisplayUnit.IMPERIAL if imperial else None
    return LookupController(settings.openweathermap_api_key, settings=settings, unit=unit)


def _state_payload(state: LookupState, controller: LookupController) -> dict[str, Any]:
    """JSON view of a state with display-ready values."""
    payload = state.model_dump(mode="json")
    payload["unit"] = controller.unit.value
    payload["is_loading"] = state.is_loading
    if state.current is not None:
        wind = controller.format_wind_speed(state.current.wind_speed_ms)
        payload["display"] = {
            "temperature": controller.format_temperature(state.current.temperature_celsius),
            "wind_speed": f"{wind.value} {wind.label}",
            "background_tier": controller.select_background_tier(
                state.current.temperature_celsius
            ).value,
            "icon_url": controller.icon_url(state.current.icon_id),
        }
    if state.forecast is not None:
        payload["forecast_display"] = [
            {
                "temperature": controller.format_temperature(day.temperature_celsius),
                "icon_url": controller.icon_url(day.icon_id),
            }
            for day in state.forecast.days
        ]
    return payload


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)"
    ),
) -> None:
    """Configure logging before any command runs."""
    configure_logging(log_level or get_settings().log_level)


@app.command()
def version() -> None:
    """Print the version."""
    console.print(f"weather-wizard {__version__}")


@app.command()
def lookup(
    city: str = typer.Argument(..., help="City name, e.g. 'London' or 'London,GB'"),
    imperial: bool = typer.Option(False, "--imperial", help="Show °F and mph"),
    as_json: bool = typer.Option(False, "--json", help="Print the view model as JSON"),
) -> None:
    """Look up current conditions and the forecast for one city."""

    async def _run() -> tuple[LookupState, LookupController]:
        async with _make_controller(imperial) as controller:
            state = await controller.search(city)
            return state, controller

    state, controller = asyncio.run(_run())

    if as_json:
        typer.echo(json.dumps(_state_payload(state, controller), indent=2))
    else:
        print_dashboard(state, controller, console)

    if state.status is LookupStatus.ERROR:
        raise typer.Exit(code=1)


@app.command()
def dashboard(
    imperial: bool = typer.Option(False, "--imperial", help="Start in °F and mph"),
) -> None:
    """Interactive dashboard: type a city, :unit, :reset or :quit."""
    logger = get_logger("dashboard")

    async def _loop() -> None:
        async with _make_controller(imperial) as controller:

            def _announce_loading(state: LookupState) -> None:
                if state.is_loading:
                    console.print(f"Searching for {state.query}...", style="italic")

            controller.subscribe(_announce_loading)
            print_dashboard(controller.state, controller, console)
            while True:
                # Input is only read between lookups, so searching is disabled while loading
                try:
                    entry = typer.prompt("Enter city name", default="", show_default=False)
                except (EOFError, typer.Abort):
                    break
                command = entry.strip()
                if command.lower() in QUIT_COMMANDS:
                    break
                if command.lower() == UNIT_COMMAND:
                    controller.toggle_unit()
                elif command.lower() == RESET_COMMAND:
                    controller.reset()
                elif command:
                    await controller.search(command)
                else:
                    continue
                print_dashboard(controller.state, controller, console)
        logger.debug("dashboard_closed")

    asyncio.run(_loop())
