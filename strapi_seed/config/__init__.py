"""Configuration module"""
from .settings import Settings, get_settings, PROCESSING_STEPS, PUBLIC_PERMISSIONS

__all__ = [
    "Settings",
    "get_settings",
    "PROCESSING_STEPS",
    "PUBLIC_PERMISSIONS",
]
