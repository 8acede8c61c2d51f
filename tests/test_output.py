"""Tests for the output formatter."""

import json

from pass_fxa.output import OutputFormatter


class TestOutputFormatter:
    """Tests for OutputFormatter."""

    def test_info_printed(self, capsys):
        OutputFormatter().info("Uploading 2 passwords.")
        assert "Uploading 2 passwords." in capsys.readouterr().out

    def test_quiet_suppresses_info(self, capsys):
        OutputFormatter(quiet=True).info("hidden")
        assert capsys.readouterr().out == ""

    def test_error_shown_when_quiet(self, capsys):
        OutputFormatter(quiet=True).error("Failed to decrypt [web]/alice")
        assert "Failed to decrypt [web]/alice" in capsys.readouterr().err

    def test_warning_goes_to_stderr(self, capsys):
        OutputFormatter().warning("careful")
        captured = capsys.readouterr()
        assert "careful" in captured.err
        assert captured.out == ""

    def test_json_mode_suppresses_info(self, capsys):
        out = OutputFormatter(json_output=True)
        out.info("hidden")
        out.output_json({"creates": 1})
        assert json.loads(capsys.readouterr().out) == {"creates": 1}
