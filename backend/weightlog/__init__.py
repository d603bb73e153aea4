"""Weight Log — one body-weight measurement per day, over HTTP."""

__version__ = "1.0.0"
