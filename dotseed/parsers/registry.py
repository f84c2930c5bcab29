"""Picks the parser for a configuration file by its name."""
from pathlib import Path

from dotseed.core.errors import UnsupportedFormatError
from dotseed.parsers.base import FormatParser
from dotseed.parsers.env_parser import EnvConfigParser
from dotseed.parsers.ini_parser import IniConfigParser
from dotseed.parsers.json_parser import JsonConfigParser

_JSON = JsonConfigParser()
_INI = IniConfigParser()
_ENV = EnvConfigParser()


def parser_for(path: Path) -> FormatParser:
    """Return the parser for a file.

    Extension wins over name: '.json' is JSON, '.ini' and '.config' are
    INI; otherwise a name containing '.env' is ENV.
    """
    suffix = path.suffix.lower()
    name = path.name.lower()

    if suffix == ".json":
        return _JSON
    if suffix in (".ini", ".config"):
        return _INI
    if ".env" in name:
        return _ENV
    raise UnsupportedFormatError(f"no parser for '{path.name}'", path=path)
