"""Weather Wizard: city weather lookup with unit conversion and theming."""

__version__ = "0.1.0"
