# =============================================================================
# nora_core/models.py  —  Data Models (the "nouns" of the system)
# =============================================================================
#
# These dataclasses define the shape of everything that crosses a layer
# boundary: the authenticated session, the outcome of one JSON-RPC exchange,
# the tool definitions advertised over MCP and the result every tool returns.
#
# DESIGN PRINCIPLE — "One result shape":
#   A tool call never raises past the dispatcher.  Success and failure both
#   come back as a ToolResult; only the is_error flag differs.
# =============================================================================

from dataclasses import dataclass, field
from typing import Any, Optional, Union


# -----------------------------------------------------------------------------
# RemoteSession — the per-process identity on the Odoo server
# -----------------------------------------------------------------------------
# Created empty together with the client.  uid stays None until the first
# successful authenticate call, then lives for the rest of the process.
# -----------------------------------------------------------------------------
@dataclass
class RemoteSession:
    """Authenticated identity plus the JSON-RPC request counter."""

    uid: Optional[Union[int, str]] = None
    sequence: int = 0                  # id of the last request sent

    @property
    def is_authenticated(self) -> bool:
        return bool(self.uid)

    def next_request_id(self) -> int:
        self.sequence += 1
        return self.sequence


# -----------------------------------------------------------------------------
# RpcOk / RpcErr — outcome of one JSON-RPC exchange
# -----------------------------------------------------------------------------
# The client turns the raw response envelope into one of these two before
# anything else looks at it, so callers branch on a type instead of probing
# for "error" / "result" keys.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class RpcOk:
    """Successful exchange; value is the envelope's result, untouched."""

    value: Any


@dataclass(frozen=True)
class RpcErr:
    """The server answered with an error member."""

    message: str
    detail: Optional[str] = None       # Odoo's error.data.message, when present


RpcOutcome = Union[RpcOk, RpcErr]


# -----------------------------------------------------------------------------
# ToolDefinition — one entry of the advertised catalog
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolDefinition:
    """Name, description and JSON input schema of an MCP tool."""

    name: str
    description: str
    input_schema: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ToolCall:
    """A named tool invocation with its raw, unvalidated arguments."""

    name: str
    arguments: Any = None


# -----------------------------------------------------------------------------
# ToolResult — the only thing a tool call ever returns
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class ToolResult:
    """Ordered text blocks plus a success/failure flag.

    Mirrors the MCP CallToolResult shape (content blocks plus isError).
    """

    content: tuple[dict, ...]
    is_error: bool = False

    @classmethod
    def success(cls, text: str) -> "ToolResult":
        return cls(content=({"type": "text", "text": text},), is_error=False)

    @classmethod
    def failure(cls, text: str) -> "ToolResult":
        return cls(content=({"type": "text", "text": text},), is_error=True)

    @property
    def text(self) -> str:
        """All text blocks joined by newlines."""
        return "\n".join(block.get("text", "") for block in self.content)
