"""Tests for the exception hierarchy and error handling helpers."""

import logging

import pytest
from pydantic import BaseModel, Field, ValidationError

from launchemu.exceptions import (
    ConfigFileInvalidError,
    ConfigurationError,
    ConfigValidationError,
    ErrorContext,
    LaunchEmuError,
    ProtocolError,
    UnknownCommandError,
    format_error_for_display,
    handle_errors,
    wrap_command_error,
    wrap_pydantic_error,
)


class _Limits(BaseModel):
    low: int = Field(ge=0)
    high: int = Field(le=10)


def _validation_error(**values) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        _Limits(**values)
    return exc_info.value


class TestHierarchy:
    @pytest.mark.unit
    def test_protocol_errors(self):
        """Test the protocol error hierarchy."""
        assert issubclass(UnknownCommandError, ProtocolError)
        assert issubclass(ProtocolError, LaunchEmuError)

    @pytest.mark.unit
    def test_config_errors(self):
        """Test the configuration error hierarchy."""
        assert issubclass(ConfigFileInvalidError, ConfigurationError)
        assert issubclass(ConfigValidationError, ConfigurationError)
        assert issubclass(ConfigurationError, LaunchEmuError)

    @pytest.mark.unit
    def test_full_message_includes_hint(self):
        """Test that the full message ends with the suggestion."""
        error = UnknownCommandError("SCRL")

        assert "SCRL" in str(error)
        assert "Suggestion:" in error.get_full_message()
        assert "strict" in error.recovery_hint


class TestWrapCommandError:
    """Test conversion of validation failures into ProtocolError."""

    @pytest.mark.unit
    def test_names_the_field(self):
        """Test that wrap_command_error names the field."""
        error = wrap_command_error(_validation_error(low=-1, high=1), {"low": -1, "high": 1})

        assert isinstance(error, ProtocolError)
        assert error.field == "low"
        assert error.value == -1

    @pytest.mark.unit
    def test_non_validation_error(self):
        """Test wrapping an error that is not a ValidationError."""
        error = wrap_command_error(RuntimeError("odd"), {"evt": "RST"})

        assert error.field == "message"
        assert error.value == {"evt": "RST"}


class TestWrapPydanticError:
    """Test conversion of config validation failures."""

    @pytest.mark.unit
    def test_single_error(self):
        """Test that a single config error names its field."""
        error = wrap_pydantic_error(_validation_error(low=0, high=11), "cfg.json")

        assert isinstance(error, ConfigValidationError)
        assert error.field == "high"

    @pytest.mark.unit
    def test_multiple_errors(self):
        """Test that several config errors are reported together."""
        error = wrap_pydantic_error(_validation_error(low=-1, high=11), "cfg.json")

        assert isinstance(error, ConfigValidationError)
        assert error.field == "multiple fields"

    @pytest.mark.unit
    def test_invalid_json(self):
        """Test that invalid JSON becomes ConfigFileInvalidError."""
        with pytest.raises(ValidationError) as exc_info:
            _Limits.model_validate_json("{ nope")

        error = wrap_pydantic_error(exc_info.value, "cfg.json")

        assert isinstance(error, ConfigFileInvalidError)


class TestHandleErrors:
    """Test the handle_errors decorator."""

    @pytest.mark.unit
    def test_swallows_and_returns_fallback(self, caplog):
        """Test that handle_errors returns the fallback value."""
        notifications = []

        @handle_errors(
            operation_name="do work",
            user_notification=notifications.append,
            fallback_value="fallback",
            re_raise=False,
        )
        def work():
            raise ProtocolError("x", 9, "too big")

        with caplog.at_level(logging.ERROR):
            assert work() == "fallback"

        assert "Failed to do work" in caplog.text
        assert "'x'" in notifications[0]

    @pytest.mark.unit
    def test_re_raises_by_default(self):
        """Test that handle_errors re-raises by default."""
        @handle_errors(operation_name="do work")
        def work():
            raise ValueError("boom")

        with pytest.raises(ValueError):
            work()

    @pytest.mark.unit
    def test_passes_result_through(self):
        """Test that handle_errors returns the result on success."""
        @handle_errors(operation_name="do work")
        def work(a, b=1):
            return a + b

        assert work(1, b=2) == 3


class TestErrorContext:
    @pytest.mark.unit
    def test_records_and_suppresses(self):
        """Test that ErrorContext records the error and suppresses it."""
        with ErrorContext("open port", re_raise=False) as ctx:
            raise OSError("busy")

        assert isinstance(ctx.error, OSError)

    @pytest.mark.unit
    def test_re_raises(self):
        """Test that ErrorContext can re-raise."""
        with pytest.raises(OSError):
            with ErrorContext("open port"):
                raise OSError("busy")

    @pytest.mark.unit
    def test_no_error(self):
        """Test ErrorContext when nothing fails."""
        with ErrorContext("open port") as ctx:
            pass
        assert ctx.error is None


class TestFormatErrorForDisplay:
    @pytest.mark.unit
    def test_app_error(self):
        """Test display formatting of a LaunchEmuError."""
        message, hint = format_error_for_display(UnknownCommandError("SCRL"))

        assert "SCRL" in message
        assert hint is not None

    @pytest.mark.unit
    def test_other_error(self):
        """Test display formatting of an unexpected error."""
        message, hint = format_error_for_display(KeyError("k"))

        assert message.startswith("KeyError")
        assert hint is None
