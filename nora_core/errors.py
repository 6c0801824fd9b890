# =============================================================================
# nora_core/errors.py  —  Error Taxonomy
# =============================================================================
#
# Every failure the server can report maps to exactly one class below.
# Only ConfigError stops the process; all the others are caught at the
# dispatch boundary (tools/dispatcher.py) and turned into a failed tool result.
#
#   NoraError
#   ├── ConfigError          missing/invalid runtime configuration (startup)
#   ├── ValidationError      malformed tool arguments
#   ├── AuthError            Odoo rejected the credentials
#   ├── TransportError       HTTP-level failure talking to Odoo
#   ├── RemoteError          Odoo answered with an error envelope
#   │   └── FieldMismatchError   ...which we traced back to unknown field names
#   └── UnknownToolError     tool name not in the catalog
# =============================================================================

from typing import Optional, Sequence


class NoraError(Exception):
    """Base class for every error raised by the server."""


class ConfigError(NoraError):
    """Required runtime configuration is missing or unusable."""


class ValidationError(NoraError):
    """Tool arguments failed their schema.

    Carries a list of ``(path, reason)`` issues so the caller can see every
    offending argument at once, not just the first.
    """

    def __init__(self, issues: Sequence[tuple[str, str]]):
        self.issues = list(issues)
        super().__init__("; ".join(f"{path}: {reason}" for path, reason in self.issues))


class AuthError(NoraError):
    """The remote server did not return a usable identity for our credentials."""


class TransportError(NoraError):
    """The HTTP exchange itself failed (non-success status, network, bad body)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class RemoteError(NoraError):
    """The remote server reported an error in the JSON-RPC response envelope."""

    def __init__(self, message: str, detail: Optional[str] = None):
        self.detail = detail
        text = f"{message}: {detail}" if detail and detail != message else message
        super().__init__(text)


class FieldMismatchError(RemoteError):
    """A remote failure confirmed to be caused by field names the model lacks."""

    def __init__(self, model: str, invalid_fields: Sequence[str]):
        self.model = model
        self.invalid_fields = list(invalid_fields)
        super().__init__(
            f"Invalid field(s) for model '{model}': {', '.join(self.invalid_fields)}. "
            f"Call get_model_fields to list the fields this model provides."
        )


class UnknownToolError(NoraError):
    """The requested tool name is not part of the catalog."""

    def __init__(self, tool_name: str):
        self.tool_name = tool_name
        super().__init__(f"Unknown tool: {tool_name}")
