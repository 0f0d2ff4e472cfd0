"""Configuration helpers for tftpcodec."""

from .settings import *  # noqa: F401, F403
from . import logging, settings  # noqa: F401  # pyright: ignore[reportUnusedImport]
from .logging import configure_logging  # noqa: F401
