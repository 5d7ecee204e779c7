"""
One shared logger for the app.

- get_logger(): returns the "offerfinder" logger, configured on first use.
- Level comes from OFFERFINDER_LOG_LEVEL (default INFO).

Services call `get_logger()` at the top of a function and log with f-strings.
"""

import logging
import os
import sys

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
_configured = False


def get_logger(name: str = "offerfinder") -> logging.Logger:
    global _configured
    if not _configured:
        root = logging.getLogger("offerfinder")
        if not root.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(logging.Formatter(_LOG_FORMAT))
            root.addHandler(handler)
        root.setLevel(os.getenv("OFFERFINDER_LOG_LEVEL", "INFO").upper())
        _configured = True
    return logging.getLogger(name)
