"""Asset allocation service: centres, locations, assets and their allocation."""

__version__ = "0.1.0"
