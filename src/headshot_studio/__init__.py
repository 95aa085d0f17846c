"""Command-line workflow around the headshot generation client."""

__version__ = "0.1.0"
