"""Allow ``python -m weather_wizard``."""

from weather_wizard.main import app

app()
