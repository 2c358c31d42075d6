"""Tests for the CLI module: arg parsing, exit codes, output formats, end-to-end."""

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from confscan.cli import CliOptions, build_parser, main, scan_input, select_tokens
from confscan.tokens import TokenKind

# ---------------------------------------------------------------------------
# Arg parsing via build_parser
# ---------------------------------------------------------------------------


class TestArgParsing:
    def test_input_only(self) -> None:
        p = build_parser()
        ns = p.parse_args(["grvrc"])
        assert ns.input == "grvrc"
        assert ns.output is None
        assert ns.format is None
        assert ns.skip_whitespace is None

    def test_output_flag(self) -> None:
        p = build_parser()
        ns = p.parse_args(["grvrc", "-o", "tokens.txt"])
        assert ns.output == "tokens.txt"

    def test_format_and_skips(self) -> None:
        p = build_parser()
        ns = p.parse_args(["grvrc", "--format", "json", "--skip-whitespace", "--skip-comments"])
        assert ns.format == "json"
        assert ns.skip_whitespace is True
        assert ns.skip_comments is True

    def test_bad_format_rejected(self) -> None:
        p = build_parser()
        with pytest.raises(SystemExit):
            p.parse_args(["grvrc", "--format", "xml"])


# ---------------------------------------------------------------------------
# Exit codes
# ---------------------------------------------------------------------------


class TestExitCodes:
    def test_success(self, tmp_path: Path, capsys) -> None:
        conf = tmp_path / "grvrc"
        conf.write_text("set theme dark\n")
        assert main([str(conf)]) == 0
        out = capsys.readouterr().out
        assert "Word 'theme'" in out

    def test_invalid_token_returns_1(self, tmp_path: Path, capsys) -> None:
        conf = tmp_path / "grvrc"
        conf.write_text('set prompt "unclosed\n')
        assert main([str(conf)]) == 1
        err = capsys.readouterr().err
        assert "error: unterminated string" in err
        assert f"{conf}:1:12" in err

    def test_missing_file_returns_2(self, tmp_path: Path, capsys) -> None:
        assert main([str(tmp_path / "absent")]) == 2
        assert "error:" in capsys.readouterr().err

    def test_unwritable_output_returns_2(self, tmp_path: Path, capsys) -> None:
        conf = tmp_path / "grvrc"
        conf.write_text("set a b\n")
        out = tmp_path / "missing-dir" / "tokens.txt"
        assert main([str(conf), "-o", str(out)]) == 2
        assert "error:" in capsys.readouterr().err
        assert not out.exists()

    def test_undecodable_file_returns_2(self, tmp_path: Path, capsys) -> None:
        conf = tmp_path / "grvrc"
        conf.write_bytes(b"set \xff\xfe\n")
        assert main([str(conf)]) == 2
        assert "failed to read input" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------


class TestOutput:
    def test_json_output_file(self, tmp_path: Path) -> None:
        conf = tmp_path / "grvrc"
        conf.write_text("map --name x\n")
        out = tmp_path / "tokens.json"
        assert main([str(conf), "--format", "json", "-o", str(out)]) == 0
        data = json.loads(out.read_text())
        assert data[2] == {
            "kind": "OPTION",
            "value": "-name",
            "start": [1, 5],
            "end": [1, 11],
            "error": None,
        }

    def test_skip_whitespace_and_comments(self, tmp_path: Path, capsys) -> None:
        conf = tmp_path / "grvrc"
        conf.write_text("# header\nset a b\n")
        assert main([str(conf), "--skip-whitespace", "--skip-comments"]) == 0
        out = capsys.readouterr().out
        assert "White Space" not in out
        assert "Comment" not in out
        assert "Word 'set'" in out

    def test_stdin(self, monkeypatch, capsys) -> None:
        monkeypatch.setattr("sys.stdin", io.StringIO("!make\n"))
        assert main(["-"]) == 0
        assert "Shell Command '!make'" in capsys.readouterr().out

    def test_debug_logging(self, tmp_path: Path, caplog) -> None:
        conf = tmp_path / "grvrc"
        conf.write_text("x")
        with caplog.at_level("DEBUG", logger="confscan"):
            assert main([str(conf), "--debug"]) == 0
        assert any("Word 'x'" in r.getMessage() for r in caplog.records)


# ---------------------------------------------------------------------------
# scan_input / select_tokens
# ---------------------------------------------------------------------------


def _options(path: Path, **overrides) -> CliOptions:
    values = dict(
        input_file=path,
        output_file=None,
        format="text",
        skip_whitespace=False,
        skip_comments=False,
        debug=False,
    )
    values.update(overrides)
    return CliOptions(**values)


class TestScanInput:
    def test_returns_tokens_and_source(self, tmp_path: Path) -> None:
        conf = tmp_path / "grvrc"
        conf.write_text("a b\n")
        tokens, source = scan_input(_options(conf))
        assert source == "a b\n"
        assert tokens[-1].kind is TokenKind.EOF

    def test_select_tokens(self, tmp_path: Path) -> None:
        conf = tmp_path / "grvrc"
        conf.write_text("a b # c\n")
        options = _options(conf, skip_whitespace=True, skip_comments=True)
        tokens, _ = scan_input(options)
        kinds = [t.kind for t in select_tokens(tokens, options)]
        assert kinds == [TokenKind.WORD, TokenKind.WORD, TokenKind.TERMINATOR, TokenKind.EOF]
