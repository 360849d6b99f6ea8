"""Document portal admin statistics service."""

__version__ = "1.0.0"
