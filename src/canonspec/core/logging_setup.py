#!/usr/bin/env python3
"""
Purpose:
    Configures the `canonspec` logger hierarchy from the `logging` section of
    the loaded configuration.
"""

import logging
from typing import Any, Dict

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def configure_logging(config: Dict[str, Any]) -> logging.Logger:
    """
    Attach a stderr handler to the `canonspec` logger at `config['logging']['level']`.

    Unknown level names fall back to WARNING. Calling this again replaces the
    level but does not add a second handler.
    """
    level_name = str(config.get("logging", {}).get("level", "WARNING")).strip().upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.WARNING

    root = logging.getLogger("canonspec")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root
