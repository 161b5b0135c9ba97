from __future__ import annotations

import logging
from importlib.metadata import version

__version__ = version("sendcov")

logger = logging.getLogger("sendcov")

__all__ = ["__version__", "logger"]
