# =============================================================================
# nora_tools/results.py  —  Error Translation
# =============================================================================
#
# translate_error() is the last stop for every exception raised while a tool
# runs.  Whatever it receives, it returns a failed ToolResult; nothing escapes.
#
#   ValidationError           →  "Validation Error: path: reason; ..."
#   any other exception       →  "Error: <message>"
#   exception with no message →  "Unknown error"
# =============================================================================

import logging

from nora_core.errors import NoraError, ValidationError
from nora_core.models import ToolResult

logger = logging.getLogger(__name__)


def format_error(error: BaseException) -> str:
    """Human-readable text for an exception."""
    if isinstance(error, ValidationError):
        issues = "; ".join(f"{path}: {reason}" for path, reason in error.issues)
        return f"Validation Error: {issues}" if issues else "Validation Error"
    message = str(error).strip()
    if not message:
        return "Unknown error"
    return f"Error: {message}"


def translate_error(error: BaseException) -> ToolResult:
    """Convert an exception into a failed ToolResult."""
    if not isinstance(error, NoraError):
        # Not one of ours: a bug or an unexpected library failure.
        logger.error("unexpected error during tool call", exc_info=error)
    return ToolResult.failure(format_error(error))
