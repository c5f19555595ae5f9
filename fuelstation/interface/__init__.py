"""Mini README: Interactive interfaces for the fuel station.

Exports the FastAPI application factory that powers the browser dashboard
and JSON endpoints. The console menu lives in ``station_console.py`` at the
repository root.
"""

from .web_app import create_application

__all__ = ["create_application"]
