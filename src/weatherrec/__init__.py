"""Weather lookup and record-keeping backend."""

__version__ = "0.1.0"
