"""PlantWatch — plant needs versus historical weather."""

__version__ = "1.0.0"
