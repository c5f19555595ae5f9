"""Mini README: Core package initializer for the fuel station simulator.

This module exposes convenience imports so callers can build a station and
process sales without needing to know the exact module structure. Heavy
interface dependencies (FastAPI, Typer) are deliberately not imported here.
"""

from .logging_utils import get_logger
from .station import Station

__all__ = ["Station", "get_logger"]
