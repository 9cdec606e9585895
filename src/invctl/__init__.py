"""invctl — typed inventory repositories and their control CLI."""

__version__ = "0.1.0"
