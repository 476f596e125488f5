"""Tests for the OutputFormatter class."""

import io
import json

from rich.console import Console

from idasync.output import OutputFormatter


def _formatter(**kwargs):
    stdout = io.StringIO()
    stderr = io.StringIO()
    out = OutputFormatter(
        console=Console(file=stdout, soft_wrap=True),
        err_console=Console(file=stderr, soft_wrap=True),
        **kwargs,
    )
    return out, stdout, stderr


class TestOutputFormatter:
    """Test OutputFormatter functionality."""

    def test_info_and_success(self):
        out, stdout, _ = _formatter()

        out.info("[idasync] Copied: a.txt")
        out.success("Done [ok]")

        text = stdout.getvalue()
        assert "[idasync] Copied: a.txt" in text
        assert "Done [ok]" in text

    def test_quiet_suppresses_messages(self):
        out, stdout, stderr = _formatter(quiet=True)

        out.info("info")
        out.success("success")
        out.warning("warning")
        out.print("plain")

        assert stdout.getvalue() == ""
        assert stderr.getvalue() == ""

    def test_errors_never_suppressed(self):
        out, _, stderr = _formatter(quiet=True)

        out.error("Source directory does not exist: /x")

        assert "Error: Source directory does not exist: /x" in stderr.getvalue()

    def test_warning_goes_to_stderr(self):
        out, stdout, stderr = _formatter()

        out.warning("careful")

        assert stdout.getvalue() == ""
        assert "careful" in stderr.getvalue()

    def test_json_mode_silences_text(self, capsys):
        out, stdout, _ = _formatter(json_output=True)

        out.info("info")
        out.output_json({"copied": 1})

        assert stdout.getvalue() == ""
        assert json.loads(capsys.readouterr().out) == {"copied": 1}

    def test_json_mode_error(self, capsys):
        out, _, _ = _formatter(json_output=True)

        out.error("boom")

        assert json.loads(capsys.readouterr().err) == {"error": "boom"}
