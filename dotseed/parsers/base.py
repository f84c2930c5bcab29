"""Shared behaviour for configuration format parsers."""
from pathlib import Path
from typing import List, Optional, Sequence

from dotseed.core.logger import get_logger
from dotseed.models.entries import HIERARCHY_SEPARATOR, ConfigEntry

logger = get_logger(__name__)

COMMENT_PREFIX = "#"


class FormatParser:
    """Turns one document's text into flat ConfigEntry values.

    Subclasses implement parse(). Line-level anomalies are logged and
    skipped; document-level failures raise ConfigParseError.
    """

    name = "base"

    def parse(self, text: str, source: Optional[Path] = None) -> List[ConfigEntry]:
        raise NotImplementedError

    @staticmethod
    def is_skippable(line: str) -> bool:
        """Blank lines and '#' comments carry no entries."""
        stripped = line.strip()
        return not stripped or stripped.startswith(COMMENT_PREFIX)

    def make_entry(
        self,
        key: Sequence[str],
        value: str,
        source: Optional[Path] = None,
        line_no: Optional[int] = None,
    ) -> Optional[ConfigEntry]:
        """Build an entry, rejecting segments that contain the separator."""
        bad = [segment for segment in key if HIERARCHY_SEPARATOR in segment]
        if bad:
            location = self._location(source, line_no)
            logger.warning(
                f"Skipping key '{bad[0]}'{location}: contains reserved "
                f"separator '{HIERARCHY_SEPARATOR}'"
            )
            return None
        return ConfigEntry(key=tuple(key), raw_value=value, source=source)

    @staticmethod
    def _location(source: Optional[Path], line_no: Optional[int]) -> str:
        if source is None and line_no is None:
            return ""
        if line_no is None:
            return f" in {source}"
        if source is None:
            return f" at line {line_no}"
        return f" in {source}:{line_no}"
