"""Key/value records flowing from configuration files into the secret store."""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

# Joins nested key segments into the flat key accepted by user-secrets
HIERARCHY_SEPARATOR = ":"


@dataclass(frozen=True)
class ConfigEntry:
    """One key/value pair produced by a format parser."""
    key: Tuple[str, ...]
    raw_value: str
    source: Optional[Path] = None

    def __post_init__(self):
        if not self.key:
            raise ValueError("ConfigEntry key must have at least one segment")
        for segment in self.key:
            if HIERARCHY_SEPARATOR in segment:
                raise ValueError(
                    f"Key segment '{segment}' contains the hierarchy separator "
                    f"'{HIERARCHY_SEPARATOR}'"
                )

    @property
    def full_key(self) -> str:
        return HIERARCHY_SEPARATOR.join(self.key)


@dataclass(frozen=True)
class SecretRecord:
    """A key/value pair as handed to the secret store."""
    full_key: str
    value: str
