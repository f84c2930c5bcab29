"""ENV-style configuration parser (.env, .env.local, ...)."""
from pathlib import Path
from typing import List, Optional

from dotseed.core.logger import get_logger
from dotseed.models.entries import ConfigEntry
from dotseed.parsers.base import FormatParser

logger = get_logger(__name__)

EXPORT_PREFIX = "export "
QUOTE_CHARS = ('"', "'")


def unquote(value: str) -> str:
    """Strip one matching pair of surrounding quotes, if present."""
    if len(value) >= 2 and value[0] in QUOTE_CHARS and value[-1] == value[0]:
        return value[1:-1]
    return value


class EnvConfigParser(FormatParser):
    """Flat KEY=value parser; no sections, optional 'export' keyword."""

    name = "env"

    def parse(self, text: str, source: Optional[Path] = None) -> List[ConfigEntry]:
        entries: List[ConfigEntry] = []

        for line_no, line in enumerate(text.splitlines(), start=1):
            if self.is_skippable(line):
                continue

            stripped = line.strip()
            if stripped.startswith(EXPORT_PREFIX):
                stripped = stripped[len(EXPORT_PREFIX):].lstrip()

            if "=" not in stripped:
                logger.warning(f"Skipping malformed line{self._location(source, line_no)}: no '='")
                continue

            key, value = stripped.split("=", 1)
            key = key.strip()
            value = unquote(value.strip())
            if not key or not value:
                continue

            entry = self.make_entry((key,), value, source, line_no)
            if entry is not None:
                entries.append(entry)

        return entries
