"""Tests for logging color output."""
from __future__ import annotations

import io
import logging
import os
from unittest.mock import patch


def _record(**attrs) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="test message",
        args=(),
        exc_info=None,
    )
    record.tag = "INFO"
    record.request_id = "-"
    record.seconds = None
    record.event = None
    record.extra_data = None
    for key, value in attrs.items():
        setattr(record, key, value)
    return record


class TestColorSupport:
    """Test color support detection."""

    def test_no_color_env_disables_colors(self):
        """WEBTTS_NO_COLOR=1 disables colors."""
        from webtts.core.logging import supports_color

        with patch.dict(os.environ, {"WEBTTS_NO_COLOR": "1"}):
            assert supports_color() is False

    def test_no_color_standard_env(self):
        """NO_COLOR env var disables colors (standard)."""
        from webtts.core.logging import supports_color

        env = os.environ.copy()
        env.pop("WEBTTS_NO_COLOR", None)
        env["NO_COLOR"] = "1"
        with patch.dict(os.environ, env, clear=True):
            assert supports_color() is False

    def test_non_tty_disables_colors(self):
        """A redirected stdout gets plain text."""
        from webtts.core.logging import supports_color

        env = {k: v for k, v in os.environ.items() if k not in ("NO_COLOR", "WEBTTS_NO_COLOR")}
        with patch.dict(os.environ, env, clear=True), patch("sys.stdout", io.StringIO()):
            assert supports_color() is False


class TestColorCodes:
    """Test ANSI color codes are applied correctly."""

    def test_colorize_with_colors_enabled(self):
        from webtts.core.logging import Colors, colorize, formatters

        with patch.object(formatters, "USE_COLORS", True):
            result = colorize("test", Colors.RED)
        assert result == f"{Colors.RED}test{Colors.RESET}"

    def test_colorize_with_colors_disabled(self):
        from webtts.core.logging import Colors, colorize, formatters

        with patch.object(formatters, "USE_COLORS", False):
            assert colorize("test", Colors.RED) == "test"


class TestTagColors:
    """Test that tags get correct colors."""

    def test_tag_colors(self):
        from webtts.core.logging import Colors
        from webtts.core.logging.formatters import get_tag_color

        assert get_tag_color("SUCCESS") == Colors.BRIGHT_GREEN
        assert get_tag_color("ERROR") == Colors.BRIGHT_RED
        assert get_tag_color("FAIL") == Colors.BRIGHT_RED
        assert get_tag_color("WARN") == Colors.BRIGHT_YELLOW
        assert get_tag_color("INFO") == Colors.BRIGHT_CYAN
        assert get_tag_color("DEBUG") == Colors.GRAY

    def test_unknown_tag_is_white(self):
        from webtts.core.logging import Colors
        from webtts.core.logging.formatters import get_tag_color

        assert get_tag_color("whatever") == Colors.WHITE


class TestColoredOutput:
    """Test that colored output is produced correctly."""

    def test_output_contains_ansi_when_forced(self):
        """Output contains ANSI codes when colors are on."""
        from webtts.core.logging import configure_logging, formatters, get_logger, success

        captured = io.StringIO()
        with patch("sys.stdout", captured):
            configure_logging(level=2, force=True)
            # configure_logging re-evaluates USE_COLORS, so patch afterwards
            with patch.object(formatters, "USE_COLORS", True):
                success(get_logger("test_color"), "colored success")

        assert "\033[" in captured.getvalue()

    def test_output_no_ansi_when_redirected(self):
        """Output has no ANSI codes when stdout is not a terminal."""
        from webtts.core.logging import configure_logging, get_logger, success

        captured = io.StringIO()
        with patch("sys.stdout", captured):
            configure_logging(level=2, force=True)
            success(get_logger("test_no_color"), "plain success")

        output = captured.getvalue()
        assert "\033[" not in output
        assert "plain success" in output


class TestFieldColors:
    """Test that timing and HTTP status values get color-coded."""

    def test_fast_timing_is_green(self):
        from webtts.core.logging import Colors, ColoredConsoleFormatter, formatters

        with patch.object(formatters, "USE_COLORS", True):
            output = ColoredConsoleFormatter().format(_record(seconds=0.05))
        assert f"{Colors.GREEN}0.050s" in output

    def test_slow_timing_is_red(self):
        from webtts.core.logging import Colors, ColoredConsoleFormatter, formatters

        with patch.object(formatters, "USE_COLORS", True):
            output = ColoredConsoleFormatter().format(_record(seconds=3.0))
        assert f"{Colors.RED}3.000s" in output

    def test_status_200_is_green(self):
        from webtts.core.logging import Colors, ColoredConsoleFormatter, formatters

        with patch.object(formatters, "USE_COLORS", True):
            output = ColoredConsoleFormatter().format(_record(extra_data={"status": 200}))
        assert f"{Colors.GREEN}status=200" in output

    def test_status_500_is_red(self):
        from webtts.core.logging import Colors, ColoredConsoleFormatter, formatters

        with patch.object(formatters, "USE_COLORS", True):
            output = ColoredConsoleFormatter().format(_record(extra_data={"status": 500}))
        assert f"{Colors.RED}status=500" in output

    def test_plain_format(self):
        from webtts.core.logging import ColoredConsoleFormatter, formatters

        with patch.object(formatters, "USE_COLORS", False):
            output = ColoredConsoleFormatter().format(
                _record(request_id="rid-9", extra_data={"locale": "en-US"})
            )
        assert "(rid-9)" in output
        assert "test message" in output
        assert "locale=en-US" in output
