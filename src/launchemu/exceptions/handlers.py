"""
Centralized error handling utilities.

Each layer translates errors to be more useful at the next level up:

1. **Low level** (mido callbacks, JSON parsing, pydantic validation) raises
   library exceptions.
2. **Boundary** (command parsing, config loading) converts them into
   `LaunchEmuError` subclasses with user/technical messages and recovery hints.
3. **User layer** (CLI, TUI) formats `user_message` and `recovery_hint`.

## Quick Reference

| Scenario | Use This |
|----------|----------|
| Command field out of range | `raise wrap_command_error(e, message)` |
| Config value invalid | `raise wrap_pydantic_error(e, str(path)) from e` |
| Log and swallow in an I/O thread callback | `@handle_errors(operation_name="...", re_raise=False)` |
| Critical section with auto-logging | `with ErrorContext("open MIDI port"): ...` |
| Show an error on the CLI | `format_error_for_display(e)` |
"""

import logging
from functools import wraps
from typing import Any, Callable, Mapping, Optional, TypeVar

from .base import LaunchEmuError
from .config import ConfigFileInvalidError, ConfigValidationError
from .protocol import ProtocolError

logger = logging.getLogger(__name__)

T = TypeVar('T')


def handle_errors(
    *,
    operation_name: str,
    user_notification: Optional[Callable[[str], None]] = None,
    fallback_value: Optional[T] = None,
    re_raise: bool = True,
    log_level: int = logging.ERROR
) -> Callable:
    """
    Decorator that logs whatever the wrapped call raises.

    LaunchEmuError is logged with its technical message; anything else is
    logged with a traceback.

    Args:
        operation_name: What the call does, for the log line ("apply MIDI message")
        user_notification: Called with a displayable message on failure
        fallback_value: Returned instead of raising when re_raise is False
        re_raise: Propagate the exception after logging
        log_level: Level of the log line
    """
    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                if isinstance(e, LaunchEmuError):
                    logger.log(log_level, f"Failed to {operation_name}: {e.technical_message}")
                    notice = e.get_full_message()
                else:
                    logger.log(
                        log_level,
                        f"Unexpected error during {operation_name}: {e}",
                        exc_info=True,
                    )
                    notice = f"Error: {e}"

                if user_notification:
                    user_notification(notice)
                if re_raise:
                    raise
                return fallback_value

        return wrapper
    return decorator


class ErrorContext:
    """
    Context manager logging the failure of a block of code.

    Example:
        ```python
        with ErrorContext("open MIDI output 'LP Out'", logger):
            port = mido.open_output("LP Out")
        ```

    With re_raise=False the exception is kept in `error` instead of
    propagating.
    """

    def __init__(
        self,
        operation: str,
        logger_instance: Optional[logging.Logger] = None,
        re_raise: bool = True
    ):
        self.operation = operation
        self.logger = logger_instance or logger
        self.re_raise = re_raise
        self.error: Optional[BaseException] = None

    def __enter__(self):
        self.logger.debug(f"Starting: {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.debug(f"Completed: {self.operation}")
            return False

        self.error = exc_val
        if isinstance(exc_val, LaunchEmuError):
            self.logger.error(f"Failed to {self.operation}: {exc_val.technical_message}")
        else:
            self.logger.error(f"Failed to {self.operation}: {exc_val}", exc_info=True)
        return not self.re_raise


def _format_loc(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "message"


def wrap_command_error(error: Exception, message: Mapping[str, Any]) -> ProtocolError:
    """
    Convert a command validation failure into a ProtocolError.

    The first reported error wins; its location names the offending field.
    Discriminated unions prefix the location with the tag, which is dropped.

    Args:
        error: The pydantic ValidationError raised while parsing the command
        message: The raw inbound message

    Returns:
        ProtocolError naming the offending field
    """
    from pydantic import ValidationError

    if isinstance(error, ValidationError):
        errors = error.errors()
        if errors:
            first = errors[0]
            loc = tuple(first.get("loc", ()))
            if loc and loc[0] == message.get("evt"):
                loc = loc[1:]
            return ProtocolError(
                field=_format_loc(loc),
                value=first.get("input"),
                reason=first.get("msg", "validation failed"),
            )

    return ProtocolError(field="message", value=dict(message), reason=str(error))


def wrap_pydantic_error(error: Exception, file_path: str) -> LaunchEmuError:
    """
    Convert a config file validation failure into a ConfigurationError.

    JSON syntax errors become ConfigFileInvalidError. Value errors become
    ConfigValidationError, naming the field when exactly one is wrong.

    Args:
        error: The pydantic ValidationError
        file_path: Config file that failed to load
    """
    from pydantic import ValidationError

    if not isinstance(error, ValidationError) or not error.errors():
        return ConfigValidationError("unknown", None, str(error), file_path)

    errors = error.errors()
    for err in errors:
        if err.get("type") == "json_invalid":
            detail = (err.get("ctx") or {}).get("error", err.get("msg", ""))
            return ConfigFileInvalidError(file_path, str(detail))

    if len(errors) == 1:
        err = errors[0]
        return ConfigValidationError(
            field=_format_loc(tuple(err.get("loc", ()))),
            value=err.get("input"),
            error_msg=err.get("msg", "validation failed"),
            file_path=file_path,
        )

    summary = "\n".join(
        f"  - {_format_loc(tuple(err.get('loc', ())))}: {err.get('msg', 'validation failed')}"
        for err in errors
    )
    return ConfigValidationError(
        field="multiple fields",
        value=None,
        error_msg=f"{len(errors)} validation errors:\n{summary}",
        file_path=file_path,
    )


def format_error_for_display(error: Exception) -> tuple[str, Optional[str]]:
    """
    Format an exception for user display.

    Args:
        error: The exception to format

    Returns:
        Tuple of (user_message, recovery_hint or None)
    """
    if isinstance(error, LaunchEmuError):
        return error.user_message, error.recovery_hint

    error_type = type(error).__name__
    return f"{error_type}: {error}", None
