"""A top-down arcade road-crossing game built on pygame."""

__version__ = "0.1.0"