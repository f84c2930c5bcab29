"""JSON configuration parser (appsettings*.json)."""
import json
from pathlib import Path
from typing import Any, List, Optional, Tuple

from dotseed.core.errors import ConfigParseError
from dotseed.models.entries import ConfigEntry
from dotseed.parsers.base import FormatParser


def stringify_leaf(value: Any) -> str:
    """Render a non-object JSON value the way it would be read back as config."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    # Numbers keep their JSON spelling; arrays are kept whole
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


class JsonConfigParser(FormatParser):
    """Flattens nested JSON objects into colon-joined keys.

    Objects are walked recursively; everything else (including arrays) is
    a leaf and yields one entry.
    """

    name = "json"

    def parse(self, text: str, source: Optional[Path] = None) -> List[ConfigEntry]:
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise ConfigParseError(f"invalid JSON: {e}", path=source) from e
        except RecursionError as e:
            raise ConfigParseError("JSON nested too deeply", path=source) from e

        if not isinstance(document, dict):
            raise ConfigParseError(
                f"top-level JSON value must be an object, got {type(document).__name__}",
                path=source,
            )

        entries: List[ConfigEntry] = []
        try:
            self._walk(document, (), entries, source)
        except RecursionError as e:
            raise ConfigParseError("JSON nested too deeply", path=source) from e
        return entries

    def _walk(
        self,
        node: dict,
        prefix: Tuple[str, ...],
        entries: List[ConfigEntry],
        source: Optional[Path],
    ) -> None:
        for field_name, value in node.items():
            path = prefix + (field_name,)
            if isinstance(value, dict):
                self._walk(value, path, entries, source)
                continue

            entry = self.make_entry(path, stringify_leaf(value), source)
            if entry is not None:
                entries.append(entry)
