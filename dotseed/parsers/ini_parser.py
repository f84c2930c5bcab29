"""INI-style configuration parser (config*.ini, *.config)."""
import re
from pathlib import Path
from typing import List, Optional

from dotseed.core.logger import get_logger
from dotseed.models.entries import ConfigEntry
from dotseed.parsers.base import FormatParser

logger = get_logger(__name__)

_SECTION_PATTERN = re.compile(r"^\[(.*)\]$")


class IniConfigParser(FormatParser):
    """Line-oriented parser with single-level [section] headers.

    Keys under a section become 'section:key'. A section runs until the
    next header or the next blank line. The first '=' splits key from
    value; no escaping is supported.
    """

    name = "ini"

    def parse(self, text: str, source: Optional[Path] = None) -> List[ConfigEntry]:
        entries: List[ConfigEntry] = []
        section: Optional[str] = None

        for line_no, line in enumerate(text.splitlines(), start=1):
            if not line.strip():
                # A blank line closes the active section
                section = None
                continue
            if self.is_skippable(line):
                continue

            stripped = line.strip()
            header = _SECTION_PATTERN.match(stripped)
            if header:
                name = header.group(1).strip()
                if not name:
                    logger.warning(f"Ignoring empty section header{self._location(source, line_no)}")
                    continue
                section = name
                continue

            if "=" not in stripped:
                logger.warning(f"Skipping malformed line{self._location(source, line_no)}: no '='")
                continue

            key, value = stripped.split("=", 1)
            key = key.strip()
            value = value.strip()
            if not key or not value:
                continue

            path = (section, key) if section else (key,)
            entry = self.make_entry(path, value, source, line_no)
            if entry is not None:
                entries.append(entry)

        return entries
