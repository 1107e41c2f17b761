"""Tests for the command line entry point."""

from pathlib import Path
from typing import Callable

import orjson
import pytest

from mapconfig.__main__ import main

VALID = """\
output_dir = output

[world:overworld]
input_dir = .

[map:day]
world = overworld
rotations = 0-270
"""


class TestMain:
    """Test validating files from the command line."""

    def test_valid_config(self, write_config: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
        """Test a valid file exits with 0 and prints nothing on stdout."""
        path = write_config(VALID)
        assert main([str(path), "--no-color"]) == 0
        assert capsys.readouterr().out == ""

    def test_invalid_config(self, write_config: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
        """Test an invalid file exits with 1 and lists its errors."""
        path = write_config(VALID.replace("rotations = 0-270", "texture_size = 0"))
        assert main([str(path), "--no-color"]) == 1
        out = capsys.readouterr().out
        assert "[map:day]" in out
        assert "Error: 'texture_size' must be a positive number! Got 0." in out

    def test_json_report(self, write_config: Callable[..., Path], capsys: pytest.CaptureFixture[str]) -> None:
        """Test --json prints a machine readable report."""
        path = write_config(VALID + "zoom = 3\n")
        assert main([str(path), "--json", "--no-color"]) == 0
        report = orjson.loads(capsys.readouterr().out)
        assert report["valid"] is True
        assert report["sections"]["map:day"] == [
            {"severity": "warning", "message": "Unknown configuration option 'zoom'."}
        ]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file exits with 1."""
        assert main([str(tmp_path / "missing.conf"), "--no-color"]) == 1

    def test_log_file(self, tmp_path: Path, write_config: Callable[..., Path]) -> None:
        """Test --log-file writes a CSV log."""
        log_file = tmp_path / "logs" / "mapconfig.csv"
        assert main([str(write_config(VALID)), "--no-color", "--log-file", str(log_file)]) == 0
        assert "Map 'day'" in log_file.read_text(encoding="utf-8")

    def test_log_file_records_diagnostics(self, tmp_path: Path, write_config: Callable[..., Path]) -> None:
        """Test every error and warning is written to the log file."""
        log_file = tmp_path / "mapconfig.csv"
        text = VALID.replace("rotations = 0-270", "texture_size = 0\nzoom = 3")
        assert main([str(write_config(text)), "--json", "--no-color", "--log-file", str(log_file)]) == 1

        lines = log_file.read_text(encoding="utf-8").splitlines()
        assert any(
            line.split(";")[1].strip() == "ERROR"
            and "[map:day] 'texture_size' must be a positive number! Got 0." in line
            for line in lines
        )
        assert any(
            line.split(";")[1].strip() == "WARNING"
            and "[map:day] Unknown configuration option 'zoom'." in line
            for line in lines
        )
