"""Mini README: Application-wide logging helpers for the fuel station.

Structure:
    * configure_root_logger - one-time root handler setup; entry points pass
      the configured ``log_level`` to adjust the level afterwards.
    * get_logger - factory returning module loggers with baseline configuration.

Modules call ``get_logger(__name__)`` once and keep the result in
``LOGGER``. Sales and supplies log at INFO, storage growth fallbacks and
low stock at WARNING, ledger exhaustion at CRITICAL.
"""

from __future__ import annotations

import logging
from typing import Optional, Union

_LOGGER_INITIALISED = False


def configure_root_logger(level: Optional[Union[int, str]] = None) -> None:
    """Attach a single timestamped stream handler to the root logger.

    Later calls only change the level, and only when one is given.
    """

    global _LOGGER_INITIALISED
    root_logger = logging.getLogger()
    if _LOGGER_INITIALISED:
        if level is not None:
            root_logger.setLevel(level)
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger.setLevel(level if level is not None else logging.INFO)
    root_logger.addHandler(handler)
    _LOGGER_INITIALISED = True


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
