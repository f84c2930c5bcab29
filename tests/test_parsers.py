"""Tests for JSON, INI and ENV configuration parsers."""
from pathlib import Path
from unittest.mock import patch

import pytest

from dotseed.core.classifier import to_secret
from dotseed.core.errors import ConfigParseError, UnsupportedFormatError
from dotseed.parsers import (
    EnvConfigParser,
    IniConfigParser,
    JsonConfigParser,
    parser_for,
)


def as_pairs(entries):
    return [(entry.full_key, entry.raw_value) for entry in entries]


class TestJsonConfigParser:
    """Test JSON flattening."""

    def test_nested_objects_flatten_with_colons(self):
        entries = JsonConfigParser().parse('{"A": {"B": "x", "C": "YOUR_SECRET"}}')

        assert as_pairs(entries) == [("A:B", "x"), ("A:C", "YOUR_SECRET")]
        assert to_secret(entries[0]).value == "x"
        assert to_secret(entries[1]) is None

    def test_deep_nesting(self):
        entries = JsonConfigParser().parse('{"A": {"B": {"C": {"D": "deep"}}}, "E": "top"}')
        assert as_pairs(entries) == [("A:B:C:D", "deep"), ("E", "top")]

    def test_leaf_stringification(self):
        """Numbers keep JSON spelling, arrays stay whole, null is empty."""
        text = (
            '{"Port": 5432, "Ratio": 1.5, "Enabled": true, "Off": false, '
            '"Nothing": null, "Hosts": ["a", "b"], "Mixed": [1, {"x": 2}]}'
        )
        pairs = dict(as_pairs(JsonConfigParser().parse(text)))

        assert pairs == {
            "Port": "5432",
            "Ratio": "1.5",
            "Enabled": "true",
            "Off": "false",
            "Nothing": "",
            "Hosts": '["a","b"]',
            "Mixed": '[1,{"x":2}]',
        }

    def test_empty_object_yields_nothing(self):
        assert JsonConfigParser().parse('{"Section": {}}') == []

    def test_malformed_document_raises(self):
        with pytest.raises(ConfigParseError) as exc_info:
            JsonConfigParser().parse('{"A": ', source=Path("appsettings.json"))
        assert "appsettings.json" in str(exc_info.value)

    def test_excessive_nesting_raises(self):
        depth = 5000
        text = '{"a":' * depth + '1' + '}' * depth
        with pytest.raises(ConfigParseError, match="nested too deeply"):
            JsonConfigParser().parse(text, source=Path("appsettings.json"))

    def test_excessive_nesting_while_flattening_raises(self):
        """Documents the decoder accepts can still be too deep to flatten."""
        document = {}
        node = document
        for _ in range(5000):
            node["a"] = {}
            node = node["a"]
        node["a"] = "leaf"

        with patch('dotseed.parsers.json_parser.json.loads', return_value=document):
            with pytest.raises(ConfigParseError, match="nested too deeply"):
                JsonConfigParser().parse("{}")

    def test_top_level_array_raises(self):
        with pytest.raises(ConfigParseError):
            JsonConfigParser().parse('["not", "an", "object"]')

    def test_key_with_separator_is_skipped(self):
        entries = JsonConfigParser().parse('{"A:B": "collides", "C": "ok"}')
        assert as_pairs(entries) == [("C", "ok")]

    def test_source_is_recorded(self):
        source = Path("/tmp/appsettings.json")
        entries = JsonConfigParser().parse('{"A": "x"}', source=source)
        assert entries[0].source == source


class TestIniConfigParser:
    """Test INI-style parsing."""

    def test_sections_comments_and_bare_keys(self):
        entries = IniConfigParser().parse("[Db]\nConn=abc\n\n# comment\nBare=val")
        assert as_pairs(entries) == [("Db:Conn", "abc"), ("Bare", "val")]

    def test_last_section_header_wins(self):
        text = "[First]\n[Second]\nKey=value\n"
        assert as_pairs(IniConfigParser().parse(text)) == [("Second:Key", "value")]

    def test_first_equals_splits(self):
        entries = IniConfigParser().parse("[Db]\nConn=Server=x;Password=y\n")
        assert as_pairs(entries) == [("Db:Conn", "Server=x;Password=y")]

    def test_trims_and_skips_empty(self):
        text = "  Key  =  value  \nEmptyValue=\n=novalue\n   # indented comment\n"
        assert as_pairs(IniConfigParser().parse(text)) == [("Key", "value")]

    def test_malformed_lines_are_skipped(self):
        text = "[Db]\njust some text\nConn=abc\n"
        assert as_pairs(IniConfigParser().parse(text)) == [("Db:Conn", "abc")]

    def test_empty_section_header_is_ignored(self):
        text = "[Db]\n[]\nConn=abc\n"
        assert as_pairs(IniConfigParser().parse(text)) == [("Db:Conn", "abc")]

    def test_key_with_separator_is_skipped(self):
        text = "Db:Conn=abc\nOther=ok\n"
        assert as_pairs(IniConfigParser().parse(text)) == [("Other", "ok")]

    def test_values_are_not_unquoted(self):
        assert as_pairs(IniConfigParser().parse('Key="quoted"')) == [("Key", '"quoted"')]


class TestEnvConfigParser:
    """Test dotenv parsing."""

    def test_double_quotes_stripped(self):
        assert as_pairs(EnvConfigParser().parse('DB_HOST="localhost"')) == [("DB_HOST", "localhost")]

    def test_single_quotes_stripped(self):
        assert as_pairs(EnvConfigParser().parse("TOKEN='abc def'")) == [("TOKEN", "abc def")]

    def test_unquoting_is_not_recursive(self):
        assert as_pairs(EnvConfigParser().parse("""KEY=""x"" """)) == [("KEY", '"x"')]

    def test_mismatched_quotes_kept(self):
        assert as_pairs(EnvConfigParser().parse("""KEY="abc'""")) == [("KEY", """"abc'""")]

    def test_commented_line_yields_nothing(self):
        assert EnvConfigParser().parse("# KEY=val") == []

    def test_no_sections(self):
        """Bracket lines are not headers in ENV files."""
        entries = EnvConfigParser().parse("[Db]\nPASSWORD=x\n")
        assert as_pairs(entries) == [("PASSWORD", "x")]

    def test_export_prefix_accepted(self):
        assert as_pairs(EnvConfigParser().parse("export API_KEY=abc123")) == [("API_KEY", "abc123")]

    def test_empty_quoted_value_skipped(self):
        assert EnvConfigParser().parse('EMPTY=""\nBLANK=\n') == []

    def test_key_with_separator_is_skipped(self):
        assert as_pairs(EnvConfigParser().parse("A:B=1\nC=2")) == [("C", "2")]


class TestParserFor:
    """Test parser dispatch by file name."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("appsettings.json", JsonConfigParser),
            ("appsettings.Development.json", JsonConfigParser),
            ("config.ini", IniConfigParser),
            ("config.local.INI", IniConfigParser),
            ("web.config", IniConfigParser),
            (".env", EnvConfigParser),
            (".env.local", EnvConfigParser),
            (".env.json", JsonConfigParser),
        ],
    )
    def test_dispatch(self, name, expected):
        assert isinstance(parser_for(Path(name)), expected)

    def test_unknown_format_raises(self):
        with pytest.raises(UnsupportedFormatError):
            parser_for(Path("notes.txt"))
