"""Convert newspaper issues into the Islandora newspaper batch format."""

__version__ = "0.1.0"
