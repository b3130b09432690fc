"""Developer interaction style classification and coaching."""

__version__ = "1.0.0"
