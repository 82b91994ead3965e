"""Utilities module"""
from .logging_config import setup_logging
from .state_store import SetupStore
from .timestamps import utc_now_iso

__all__ = [
    "setup_logging",
    "SetupStore",
    "utc_now_iso",
]
