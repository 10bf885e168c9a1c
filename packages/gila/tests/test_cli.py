"""Tests for the gila command-line entry point."""

from __future__ import annotations

import termios

import pytest

from gila import __version__, cli


@pytest.fixture
def no_logging(monkeypatch):
    monkeypatch.setattr(cli, "setup_logging", lambda config: None)


class TestParser:
    def test_path_is_optional(self) -> None:
        assert cli.build_parser().parse_args([]).path is None

    def test_path(self) -> None:
        assert cli.build_parser().parse_args(["notes.txt"]).path == "notes.txt"

    def test_version(self, capsys) -> None:
        with pytest.raises(SystemExit) as exc:
            cli.build_parser().parse_args(["--version"])
        assert exc.value.code == 0
        assert f"gila {__version__}" in capsys.readouterr().out


class TestMain:
    def test_success_returns_zero(self, monkeypatch, no_logging) -> None:
        calls = []
        monkeypatch.setattr(cli, "run", lambda path, config: calls.append(path))
        assert cli.main(["notes.txt"]) == 0
        assert calls == ["notes.txt"]

    def test_os_error_returns_one(self, monkeypatch, capsys, no_logging) -> None:
        def fail(path, config):
            raise FileNotFoundError(2, "No such file or directory", path)

        monkeypatch.setattr(cli, "run", fail)
        assert cli.main(["missing.txt"]) == 1
        err = capsys.readouterr().err
        assert err.startswith("gila: ")
        assert "missing.txt" in err

    def test_termios_error_returns_one(self, monkeypatch, capsys, no_logging) -> None:
        def fail(path, config):
            raise termios.error(25, "Inappropriate ioctl for device")

        monkeypatch.setattr(cli, "run", fail)
        assert cli.main([]) == 1
        assert "gila: " in capsys.readouterr().err

    def test_config_comes_from_environment(self, monkeypatch, no_logging) -> None:
        seen = []
        monkeypatch.setenv("GILA_WRITE_LOG", "writes.log")
        monkeypatch.setattr(cli, "run", lambda path, config: seen.append(config))
        cli.main([])
        assert seen[0].write_log == "writes.log"
