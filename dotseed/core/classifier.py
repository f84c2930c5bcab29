"""Decides which configuration values are worth storing as secrets.

Template placeholders, boolean flags and documentation URLs show up in
nearly every appsettings file; none of them are secrets.
"""
import re
from typing import Optional

from dotseed.models.entries import ConfigEntry, SecretRecord

PLACEHOLDER_PREFIX = "YOUR_"
BOOLEAN_LITERALS = ("true", "false")

_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)


def should_forward(raw_value: Optional[str]) -> bool:
    """Return True if the value should be written to the secret store."""
    if raw_value is None:
        return False

    value = raw_value.strip()
    if not value:
        return False
    if value.startswith(PLACEHOLDER_PREFIX):
        return False
    if value in BOOLEAN_LITERALS:
        return False
    if _URL_PATTERN.match(value):
        return False
    return True


def to_secret(entry: ConfigEntry) -> Optional[SecretRecord]:
    """Map an entry to the record to forward, or None when it is skipped."""
    if not should_forward(entry.raw_value):
        return None
    return SecretRecord(full_key=entry.full_key, value=entry.raw_value.strip())
