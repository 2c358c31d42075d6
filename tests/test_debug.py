"""Test human-readable and JSON token dumps."""

import io
import json

from confscan.debug import dump_tokens, dump_tokens_json, format_token, token_to_dict
from confscan.scanner import tokenize


class TestTextDump:
    def test_format_word(self):
        token = tokenize("set")[0]
        assert format_token(token) == "1:1-1:4 Word 'set'"

    def test_format_invalid_includes_error(self):
        token = tokenize('"ab')[0]
        assert format_token(token) == "1:1-1:4 Invalid '\"ab' error: unterminated string"

    def test_dump_one_line_per_token(self):
        out = io.StringIO()
        dump_tokens(tokenize("a --b\n"), file=out)
        lines = out.getvalue().splitlines()
        assert lines == [
            "1:1-1:2 Word 'a'",
            "1:2-1:3 White Space ' '",
            "1:3-1:6 Option '-b'",
            "1:6-2:1 Terminator '\\n'",
            "2:1-2:1 EOF ''",
        ]


class TestJsonDump:
    def test_token_to_dict(self):
        token = tokenize("!ls")[0]
        assert token_to_dict(token) == {
            "kind": "SHELL_COMMAND",
            "value": "!ls",
            "start": [1, 1],
            "end": [1, 4],
            "error": None,
        }

    def test_dump_is_valid_json(self):
        out = io.StringIO()
        dump_tokens_json(tokenize('# c\n"x'), file=out)
        data = json.loads(out.getvalue())
        assert [d["kind"] for d in data] == ["COMMENT", "TERMINATOR", "INVALID", "EOF"]
        assert data[2]["error"] == "unterminated string"
