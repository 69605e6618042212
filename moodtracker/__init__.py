"""Gamified mood tracker: FastAPI backend plus a terminal client."""

__version__ = "1.0.0"
