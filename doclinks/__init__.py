"""doclinks - scheduled link checking for documentation trees."""

__version__ = "0.1.0"
