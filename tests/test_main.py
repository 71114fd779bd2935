"""Tests for the command line entrypoint."""

from __future__ import annotations

import io
import sys

import pytest

from ircformat import __version__
from ircformat.__main__ import _safe_message_filter, build_parser, convert, main, reload_config, setup_logging
from ircformat.config import Config


class TestSetupLogging:
    def test_setup_logging_default(self):
        setup_logging(verbose=False)

    def test_setup_logging_verbose(self):
        setup_logging(verbose=True)

    def test_setup_logging_env_level(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        setup_logging(verbose=False)

    def test_safe_message_filter_escapes(self):
        record = {"message": "<span style='x'>{0}</span>"}
        assert _safe_message_filter(record) is True
        assert record["message"] == "\\<span style='x'>{{0}}\\</span>"


class TestParser:
    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.text == []
        assert args.config is None
        assert args.plain is False
        assert args.span_format is None

    def test_rejects_unknown_span_format(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--span-format", "inline"])

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            build_parser().parse_args(["--version"])
        assert excinfo.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestConvert:
    def test_html(self):
        assert convert("\x02b\x02", Config({})) == "<span style='font-weight: bold'>b</span>"

    def test_plain(self):
        assert convert("\x02b\x02", Config({}), plain=True) == "b"

    def test_truncates_long_input(self):
        assert convert("abcdefgh", Config({"max_input_length": 5}), plain=True) == "abcde"

    def test_config_settings_applied(self):
        config = Config({"span_format": "class", "balanced_markup": True, "palette": {4: "crimson"}})
        assert convert("\x034x", config) == "<span class='crimson'>x</span>"


class TestMain:
    def test_converts_arguments(self, capsys):
        assert main(["\x02hi\x02", "see http://example.com"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == [
            "<span style='font-weight: bold'>hi</span>",
            "see <a href='http://example.com'>http://example.com</a>",
        ]

    def test_plain_flag(self, capsys):
        assert main(["--plain", "\x034red\x0f"]) == 0
        assert capsys.readouterr().out == "red\n"

    def test_span_format_flag(self, capsys):
        assert main(["--span-format", "class", "\x02b\x02"]) == 0
        assert capsys.readouterr().out == "<span class='bold'>b</span>\n"

    def test_no_links_and_balanced_flags(self, capsys):
        assert main(["--no-links", "--balanced", "\x02http://example.com"]) == 0
        assert capsys.readouterr().out == "<span style='font-weight: bold'>http://example.com</span>\n"

    def test_reads_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr(sys, "stdin", io.StringIO("a\x02b\x02\r\nplain\n"))
        assert main([]) == 0
        assert capsys.readouterr().out == "a<span style='font-weight: bold'>b</span>\nplain\n"

    def test_config_file(self, capsys, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("span_format: class\npalette:\n  4: crimson\n")
        assert main(["-c", str(path), "\x034x"]) == 0
        assert capsys.readouterr().out == "<span class='crimson'>x\n"

    def test_flag_beats_config_file(self, capsys, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("span_format: class\n")
        assert main(["-c", str(path), "--span-format", "style", "\x02b"]) == 0
        assert capsys.readouterr().out == "<span style='font-weight: bold'>b\n"

    def test_missing_config_file(self, tmp_path):
        assert main(["-c", str(tmp_path / "missing.yaml"), "x"]) == 1

    def test_invalid_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("span_format: inline\n")
        assert main(["-c", str(path), "x"]) == 2

    def test_invalid_url_pattern_in_config(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("url_pattern: '(['\n")
        assert main(["-c", str(path), "x"]) == 2


class TestReloadConfig:
    def test_defaults_without_path(self):
        config = reload_config(None)
        assert config.link_detection is True
        assert config.balanced_markup is False

    def test_overrides(self):
        config = reload_config(None, {"link_detection": False})
        assert config.url_pattern == ""


class TestEnvironment:
    def test_dotenv_loaded_without_config_file(self, capsys, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".env").write_text("IRCFORMAT_SPAN_FORMAT=class\n")
        assert main(["\x02b\x02"]) == 0
        assert capsys.readouterr().out == "<span class='bold'>b</span>\n"

    def test_flag_beats_environment(self, capsys, monkeypatch):
        monkeypatch.setenv("IRCFORMAT_SPAN_FORMAT", "class")
        monkeypatch.setenv("IRCFORMAT_LINK_DETECTION", "yes")
        assert main(["--span-format", "style", "--no-links", "\x02http://example.com"]) == 0
        assert capsys.readouterr().out == "<span style='font-weight: bold'>http://example.com\n"

    def test_environment_used_without_flag(self, capsys, monkeypatch):
        monkeypatch.setenv("IRCFORMAT_BALANCED_MARKUP", "true")
        assert main(["\x02b"]) == 0
        assert capsys.readouterr().out == "<span style='font-weight: bold'>b</span>\n"
