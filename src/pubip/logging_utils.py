"""Logging helpers."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Configure application logging once for CLI usage.

    Without ``verbose`` only warnings and errors are shown, so stdout carries
    nothing but the address.
    """
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def get_logger() -> logging.Logger:
    """Return the module logger used across the package."""
    return logging.getLogger("pubip")
