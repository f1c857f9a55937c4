"""
Custom exception hierarchy for launchemu.

## Exception Hierarchy

```
LaunchEmuError (base)
├── ProtocolError
│   └── UnknownCommandError
└── ConfigurationError
    ├── ConfigFileInvalidError
    └── ConfigValidationError
```

All custom exceptions inherit from `LaunchEmuError`, which provides
`user_message`, `technical_message`, `recoverable` and `recovery_hint`.

### Example: Out-of-range command field

```python
from launchemu.exceptions import ProtocolError

raise ProtocolError(field="x", value=9, reason="Input should be less than or equal to 7")

# User sees: "Invalid protocol field 'x': Input should be less than or equal to 7"
```

See `launchemu.exceptions.handlers` for utilities to handle these exceptions systematically.
"""

from .base import LaunchEmuError
from .config import ConfigFileInvalidError, ConfigurationError, ConfigValidationError
from .handlers import (
    ErrorContext,
    format_error_for_display,
    handle_errors,
    wrap_command_error,
    wrap_pydantic_error,
)
from .protocol import ProtocolError, UnknownCommandError

__all__ = [
    "ConfigFileInvalidError",
    "ConfigValidationError",
    # Config
    "ConfigurationError",
    "ErrorContext",
    # Base
    "LaunchEmuError",
    # Protocol
    "ProtocolError",
    "UnknownCommandError",
    "format_error_for_display",
    # Handlers
    "handle_errors",
    "wrap_command_error",
    "wrap_pydantic_error",
]
