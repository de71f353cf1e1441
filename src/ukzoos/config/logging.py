"""Root logger setup for command-line runs."""

from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Attach a terse stderr handler to the root logger.

    Only the first call has an effect unless ``force=True``, matching
    ``logging.basicConfig``.
    """

    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt="%H:%M:%S", force=force)
