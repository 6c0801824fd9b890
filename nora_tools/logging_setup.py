# =============================================================================
# nora_tools/logging_setup.py  —  Logging to STDERR
# =============================================================================
# We log to STDERR because the MCP server talks to its client over STDOUT
# (stdin/stdout is the MCP transport).  Anything printed to stdout would
# corrupt the JSON-RPC stream.
#
# ANSI COLOR CODES:
#   - CYAN for incoming tool calls (name + arguments)
#   - YELLOW for intermediate status (remote calls, retries)
#   - GREEN for the outgoing result summary
# =============================================================================

import json
import logging
import sys

from nora_core.models import ToolResult

_CYAN = "\033[36m"     # Requests (tool calls with params)
_GREEN = "\033[32m"    # Responses
_YELLOW = "\033[33m"   # Status/progress messages
_RED = "\033[31m"      # Failed responses
_RESET = "\033[0m"     # Reset to default terminal color

_MAX_LOGGED_TEXT = 300

logger = logging.getLogger("nora")


def configure_logging(level: str = "INFO") -> None:
    """Install the stderr handler.  Safe to call more than once."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s [MCP] %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
        force=True,
    )


def log_request(tool_name: str, arguments) -> None:
    """Log an incoming tool call with its arguments in CYAN."""
    try:
        rendered = json.dumps(arguments, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        rendered = repr(arguments)
    logger.info(f"{_CYAN}{tool_name} called with: {rendered}{_RESET}")


def log_status(message: str) -> None:
    """Log an intermediate status message in YELLOW."""
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def log_response(tool_name: str, result: ToolResult) -> ToolResult:
    """Log a truncated view of the result, then return it."""
    text = result.text
    if len(text) > _MAX_LOGGED_TEXT:
        text = text[:_MAX_LOGGED_TEXT] + f"... ({len(result.text)} chars)"
    color = _RED if result.is_error else _GREEN
    status = "error" if result.is_error else "ok"
    logger.info(f"{color}  ← {tool_name} {status}: {text}{_RESET}")
    return result
