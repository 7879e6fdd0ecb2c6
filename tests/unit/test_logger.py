"""Unit tests for logging infrastructure."""

import io
import json
import logging
import sys

from pantry_chef.utils.logger import ConsoleFormatter, JSONFormatter, get_logger, logger


def make_record(msg: str = "Test message", level: int = logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="test_logger",
        level=level,
        pathname="test.py",
        lineno=10,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:
    """Test JSONFormatter produces valid JSON output."""

    def test_json_formatter_outputs_valid_json(self):
        """Test that JSONFormatter produces valid JSON."""
        parsed = json.loads(JSONFormatter().format(make_record()))

        assert parsed["level"] == "INFO"
        assert parsed["logger"] == "test_logger"
        assert parsed["message"] == "Test message"
        assert "timestamp" in parsed

    def test_json_formatter_includes_exception_traceback(self):
        """Test that JSONFormatter includes exception traceback when present."""
        try:
            raise ValueError("Test error")
        except ValueError:
            record = make_record("Error occurred", level=logging.ERROR, exc_info=sys.exc_info())

        parsed = json.loads(JSONFormatter().format(record))
        assert "ValueError" in parsed["exception"]

    def test_json_formatter_includes_suggestion_fields(self):
        """Test that request_id, model and recipe_count extras are carried."""
        record = make_record(request_id="ab12cd34", model="gemini-2.5-flash", recipe_count=3)

        parsed = json.loads(JSONFormatter().format(record))

        assert parsed["request_id"] == "ab12cd34"
        assert parsed["model"] == "gemini-2.5-flash"
        assert parsed["recipe_count"] == 3

    def test_json_formatter_omits_absent_fields(self):
        """Test that extras are not invented when absent."""
        parsed = json.loads(JSONFormatter().format(make_record()))
        assert "request_id" not in parsed
        assert "recipe_count" not in parsed


class TestConsoleFormatter:
    """Test ConsoleFormatter output."""

    def test_includes_level_name_and_message(self):
        output = ConsoleFormatter(use_color=False).format(make_record(level=logging.WARNING))
        assert "WARNING" in output
        assert output.endswith("Test message")

    def test_colors_level_when_enabled(self):
        output = ConsoleFormatter(use_color=True).format(make_record(level=logging.ERROR))
        assert f"{ConsoleFormatter.LEVEL_COLORS['ERROR']}ERROR  {ConsoleFormatter.RESET}" in output

    def test_no_escape_codes_without_color(self):
        output = ConsoleFormatter(use_color=False).format(make_record(level=logging.ERROR))
        assert "\033[" not in output

    def test_request_id_prefixes_message(self):
        output = ConsoleFormatter(use_color=False).format(make_record(request_id="ab12cd34"))
        assert "[ab12cd34] Test message" in output

    def test_model_and_recipe_count_trail_message(self):
        record = make_record(request_id="ab12cd34", model="gemini-2.5-flash", recipe_count=2)
        output = ConsoleFormatter(use_color=False).format(record)
        assert output.endswith("Test message (model=gemini-2.5-flash, recipes=2)")

    def test_plain_record_has_no_details(self):
        output = ConsoleFormatter(use_color=False).format(make_record())
        assert "(" not in output
        assert "[" not in output

    def test_includes_exception_traceback(self):
        try:
            raise RuntimeError("boom")
        except RuntimeError:
            record = make_record(level=logging.ERROR, exc_info=sys.exc_info())
        assert "RuntimeError: boom" in ConsoleFormatter(use_color=False).format(record)


class TestGetLogger:
    """Test get_logger factory."""

    def test_get_logger_returns_same_configured_instance(self):
        first = get_logger("pantry_chef_test_same")
        second = get_logger("pantry_chef_test_same")
        assert first is second
        assert len(second.handlers) == 1

    def test_get_logger_respects_log_level_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert get_logger("pantry_chef_test_debug").level == logging.DEBUG

    def test_invalid_log_level_defaults_to_info(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "CHATTY")
        assert get_logger("pantry_chef_test_invalid").level == logging.INFO

    def test_get_logger_respects_log_type_json(self, monkeypatch):
        monkeypatch.setenv("LOG_TYPE", "json")
        test_logger = get_logger("pantry_chef_test_json")
        assert isinstance(test_logger.handlers[0].formatter, JSONFormatter)

    def test_get_logger_defaults_to_text(self, monkeypatch):
        monkeypatch.delenv("LOG_TYPE", raising=False)
        test_logger = get_logger("pantry_chef_test_text")
        assert isinstance(test_logger.handlers[0].formatter, ConsoleFormatter)

    def test_non_tty_stream_gets_uncolored_text(self, monkeypatch):
        monkeypatch.delenv("LOG_TYPE", raising=False)
        stream = io.StringIO()
        test_logger = get_logger("pantry_chef_test_stream", stream=stream)
        test_logger.warning("No recipes", extra={"request_id": "ab12cd34"})
        output = stream.getvalue()
        assert "[ab12cd34] No recipes" in output
        assert "\033[" not in output


class TestModuleLevelLogger:
    """Test module-level logger instance."""

    def test_logger_name(self):
        assert logger.name == "pantry_chef"
        assert len(logger.handlers) > 0

    def test_google_genai_logger_quieted(self):
        assert logging.getLogger("google.genai").level == logging.WARNING
