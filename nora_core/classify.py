# =============================================================================
# nora_core/classify.py  —  Failure Classification
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Decides what kind of failure an exception represents, so the dispatcher
#   knows whether it is worth asking Odoo which fields a model really has.
#
# THE HEURISTIC:
#   Odoo does not return structured error codes over JSON-RPC.  A bad field
#   name surfaces as free text such as:
#       "Invalid field 'bogus' on model 'res.partner'"
#       "ValueError: Invalid field bogus in leaf ..."
#   so we match on the message text.  A match only means "suspect"; the
#   dispatcher confirms with fields_get before reporting anything, and keeps
#   the original error when it cannot confirm.
#
#   If Odoo ever exposes error codes, classify_failure() is the one function
#   to replace.
# =============================================================================

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional, Sequence

from nora_core.errors import (
    AuthError,
    RemoteError,
    TransportError,
    UnknownToolError,
    ValidationError,
)

_FIELD_PATTERN = re.compile(r"\bfields?\b", re.IGNORECASE)


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    AUTH = "auth"
    TRANSPORT = "transport"
    FIELD_SUSPECT = "field_suspect"    # remote failure that mentions a field
    REMOTE = "remote"
    UNKNOWN_TOOL = "unknown_tool"
    INTERNAL = "internal"


@dataclass(frozen=True)
class FailureContext:
    """What the failed call asked for."""

    model: str
    requested_fields: Sequence[str] = field(default_factory=tuple)


def classify_failure(error: BaseException, context: Optional[FailureContext] = None) -> ErrorKind:
    """Map an exception to an ErrorKind.

    FIELD_SUSPECT is returned only for a RemoteError whose text mentions a
    field AND when the call actually requested fields; without a field list
    there is nothing to check against.
    """
    if isinstance(error, ValidationError):
        return ErrorKind.VALIDATION
    if isinstance(error, AuthError):
        return ErrorKind.AUTH
    if isinstance(error, TransportError):
        return ErrorKind.TRANSPORT
    if isinstance(error, UnknownToolError):
        return ErrorKind.UNKNOWN_TOOL
    if isinstance(error, RemoteError):
        if context is not None and context.requested_fields and _FIELD_PATTERN.search(str(error)):
            return ErrorKind.FIELD_SUSPECT
        return ErrorKind.REMOTE
    return ErrorKind.INTERNAL


def find_missing_fields(requested: Iterable[str], available: Mapping) -> list[str]:
    """Requested field names absent from a fields_get result, in request order."""
    missing: list[str] = []
    for name in requested:
        if name not in available and name not in missing:
            missing.append(name)
    return missing
