"""Logging setup for SealBox.

The library only attaches a NullHandler on import; applications that want to
see the DEBUG trail of encrypt/decrypt calls call ``configure_logging()``.
"""

import logging
import sys
from typing import Optional, TextIO

LOG_FORMAT = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"


def configure_logging(level: int = logging.INFO, stream: Optional[TextIO] = None) -> logging.Logger:
    # Attach one stream handler to the package logger; repeated calls only adjust the level.
    logger = logging.getLogger("sealbox")
    logger.setLevel(level)
    if not any(getattr(h, "_sealbox_handler", False) for h in logger.handlers):
        handler = logging.StreamHandler(stream or sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
        handler._sealbox_handler = True
        logger.addHandler(handler)
    return logger
