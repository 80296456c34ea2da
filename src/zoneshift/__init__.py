"""zoneshift - copy, move and re-point DNS zones between provider accounts."""

__version__ = "0.1.0"
