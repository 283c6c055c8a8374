"""Unit tests for the CLI — Typer command registration and basic behavior."""

from __future__ import annotations

import sys

import pytest
from typer.testing import CliRunner

from scanpulse import __version__
from scanpulse.cli.app import app

runner = CliRunner()

_FAKE_SCANNER = (
    "import sys\n"
    "print('Starting Nmap 7.94')\n"
    "print('Stats: 0:00:01 elapsed; 0 hosts completed')\n"
    "print('22/tcp open  ssh')\n"
    "print('args=' + ' '.join(sys.argv[1:]))\n"
    "sys.exit(int(sys.argv[-1]))\n"
)


@pytest.fixture
def fake_scanner(tmp_path, monkeypatch: pytest.MonkeyPatch):
    """Point the scanner binary at a Python script that mimics nmap output.

    The script exits with the code given as its last argument.
    """
    script = tmp_path / "fake_nmap.py"
    script.write_text(_FAKE_SCANNER)
    wrapper = tmp_path / "fake_nmap"
    wrapper.write_text(f"#!/bin/sh\nexec \"{sys.executable}\" \"{script}\" \"$@\"\n")
    wrapper.chmod(0o755)
    monkeypatch.setenv("SCANPULSE_SCANNER_BINARY", str(wrapper))
    monkeypatch.chdir(tmp_path)
    return wrapper


class TestCliApp:
    def test_no_args_shows_help(self):
        result = runner.invoke(app, [])
        assert result.exit_code in (0, 2)
        assert "scan" in result.output

    def test_help_flag(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "scan" in result.output
        assert "version" in result.output

    def test_scan_command_exists(self):
        result = runner.invoke(app, ["scan", "--help"])
        assert result.exit_code == 0

    def test_version(self):
        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestScanCommand:
    def test_scan_without_args_fails(self):
        result = runner.invoke(app, ["scan"])
        assert result.exit_code == 1
        assert "must not be empty" in result.output

    def test_missing_binary_fails(self, monkeypatch: pytest.MonkeyPatch, tmp_path):
        monkeypatch.setenv("SCANPULSE_SCANNER_BINARY", "scanpulse-no-such-scanner")
        monkeypatch.chdir(tmp_path)
        result = runner.invoke(app, ["scan", "host"])
        assert result.exit_code == 1
        assert "Error starting" in result.output

    @pytest.mark.skipif(sys.platform == "win32", reason="uses a shell wrapper")
    def test_scan_passes_options_through(self, fake_scanner):
        result = runner.invoke(app, ["scan", "-sV", "-p", "1-100", "0"])
        assert result.exit_code == 0
        assert "args=--stats-every=1s -sV -p 1-100 0" in result.output
        assert "22/tcp open ssh" in result.output
        assert "Starting Nmap" not in result.output

    @pytest.mark.skipif(sys.platform == "win32", reason="uses a shell wrapper")
    def test_scan_propagates_exit_code(self, fake_scanner):
        result = runner.invoke(app, ["scan", "--stats-every=5s", "7"])
        assert result.exit_code == 7
        assert "args=--stats-every=5s 7" in result.output
