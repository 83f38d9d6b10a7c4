"""pwctl — password store control CLI."""

__version__ = "0.4.0"
