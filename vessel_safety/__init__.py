"""
Vessel Safety Analysis Package

Collision prediction, behavior classification and navigation safety scoring
over point-in-time snapshots of AIS vessel state.
"""

import logging
from importlib.metadata import PackageNotFoundError, version

from . import config, data, maritime, tools, utils, weather

try:
    __version__ = version("vessel-safety")
except PackageNotFoundError:
    __version__ = "0.1.0+local"

__all__ = [
    "config",
    "data",
    "maritime",
    "tools",
    "utils",
    "weather",
    "__version__",
]

logging.getLogger(__name__).addHandler(logging.NullHandler())
