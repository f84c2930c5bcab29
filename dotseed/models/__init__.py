"""Data models for dotseed."""
from dotseed.models.config import (
    CORE_PACKAGES,
    DEFAULT_EXCLUDE_DIRS,
    ConfigValidationError,
    Settings,
)
from dotseed.models.entries import ConfigEntry, SecretRecord, HIERARCHY_SEPARATOR

__all__ = [
    'CORE_PACKAGES',
    'DEFAULT_EXCLUDE_DIRS',
    'ConfigValidationError',
    'Settings',
    'ConfigEntry',
    'SecretRecord',
    'HIERARCHY_SEPARATOR',
]
