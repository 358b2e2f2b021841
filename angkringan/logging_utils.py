"""Mini README: Application-wide logging helpers for Angkringan POS.

Structure:
    * level_for_environment - map the settings' environment label to a level.
    * configure_root_logger - one-time root configuration (handler, format).
    * get_logger - factory used by every module for its ``LOGGER``.

The till logs every committed sale and menu change at INFO, cart taps at
DEBUG and cloud failures at WARNING. Configuration happens once per process
so uvicorn's reloader never stacks duplicate handlers; chatty HTTP client
loggers are capped at WARNING so sync retries don't flood the console.
"""

from __future__ import annotations

import logging
from typing import Optional

_LOGGER_INITIALISED = False
_NOISY_LOGGERS = ("urllib3", "httpx", "multipart")

_ENVIRONMENT_LEVELS = {
    "development": logging.DEBUG,
    "test": logging.WARNING,
    "production": logging.INFO,
}


def level_for_environment(environment: Optional[str]) -> int:
    """Return the logging level for an environment label (INFO if unknown)."""

    return _ENVIRONMENT_LEVELS.get((environment or "").strip().lower(), logging.INFO)


def configure_root_logger(level: int = logging.INFO) -> None:
    """Attach a console handler to the root logger, once."""

    global _LOGGER_INITIALISED
    if _LOGGER_INITIALISED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter(
            "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.addHandler(handler)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
    _LOGGER_INITIALISED = True


def set_level(level: int) -> None:
    """Adjust the root level after configuration (e.g. from CLI settings)."""

    configure_root_logger(level)
    logging.getLogger().setLevel(level)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return a module-specific logger ensuring baseline configuration."""

    configure_root_logger()
    return logging.getLogger(name)
