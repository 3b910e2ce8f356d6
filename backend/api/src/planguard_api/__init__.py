"""FastAPI application for Plan Guard Pro checkout."""

__version__ = "0.1.0"
