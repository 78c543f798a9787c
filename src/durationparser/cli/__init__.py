"""Command line interface for durationparser."""

from .main import app, run

__all__ = ["app", "run"]
