"""Configuration format parsers (JSON, INI, ENV)."""
from dotseed.parsers.base import FormatParser
from dotseed.parsers.env_parser import EnvConfigParser
from dotseed.parsers.ini_parser import IniConfigParser
from dotseed.parsers.json_parser import JsonConfigParser
from dotseed.parsers.registry import parser_for

__all__ = [
    'FormatParser',
    'JsonConfigParser',
    'IniConfigParser',
    'EnvConfigParser',
    'parser_for',
]
