# =============================================================================
# nora_tools/dispatcher.py  —  Tool Dispatch
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Routes a tool call by name to its handler and guarantees that the caller
#   always gets a ToolResult back.
#
# HOW IT WORKS (the flow, for every call):
#   1. Look the name up in the catalog (unknown → failure, no remote call)
#   2. Validate the arguments (nora_core/validation.py)
#   3. Run the handler, which issues one or more OdooClient.call()s
#   4. On a field-looking remote failure, ask fields_get which of the
#      requested fields really are missing (search_records, get_record)
#   5. Format success text, or hand the exception to translate_error()
#
# The dispatcher keeps no state between calls.  The only shared state is the
# OdooClient session, injected once at startup.
# =============================================================================

import json
import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence

from nora_core.classify import ErrorKind, FailureContext, classify_failure, find_missing_fields
from nora_core.errors import FieldMismatchError, NoraError, RemoteError, UnknownToolError
from nora_core.models import ToolCall, ToolResult
from nora_core.validation import (
    CountRecordsArguments,
    GetModelFieldsArguments,
    GetRecordArguments,
    ListModelsArguments,
    SearchRecordsArguments,
    parse_arguments,
)
from nora_tools.catalog import SEARCH_LIMIT, get_tool
from nora_tools.logging_setup import log_request, log_response, log_status
from nora_tools.results import translate_error

logger = logging.getLogger(__name__)

MODEL_CATALOG = "ir.model"


class RemoteClient(Protocol):
    async def call(
        self, model: str, method: str, args: Sequence[Any] = (), kwargs: Optional[dict] = None
    ) -> Any: ...


def _as_json(value: Any) -> str:
    return json.dumps(value, indent=2, ensure_ascii=False, default=str)


def _count(rows: Any) -> int:
    return len(rows) if isinstance(rows, (list, dict)) else 0


class ToolDispatcher:
    """Runs catalog tools against an injected Odoo client."""

    def __init__(self, client: RemoteClient):
        self.client = client
        self._handlers: dict[str, Callable[[Any], Awaitable[str]]] = {
            "search_records": self._search_records,
            "count_records": self._count_records,
            "get_record": self._get_record,
            "list_models": self._list_models,
            "get_model_fields": self._get_model_fields,
        }

    async def dispatch(self, name: str, arguments: Any = None) -> ToolResult:
        """Execute a tool call.  Never raises (except on cancellation)."""
        log_request(name, arguments)
        try:
            handler = self._handlers.get(name)
            if handler is None or get_tool(name) is None:
                raise UnknownToolError(name)
            params = parse_arguments(name, arguments)
            text = await handler(params)
        except Exception as exc:
            log_status(f"{classify_failure(exc).value} failure: {exc}")
            return log_response(name, translate_error(exc))
        return log_response(name, ToolResult.success(text))

    async def execute(self, call: ToolCall) -> ToolResult:
        return await self.dispatch(call.name, call.arguments)

    # -------------------------------------------------------------------------
    # Handlers: each returns the success text or raises
    # -------------------------------------------------------------------------
    async def _search_records(self, params: SearchRecordsArguments) -> str:
        kwargs: dict[str, Any] = {"limit": SEARCH_LIMIT}
        if params.fields is not None:
            kwargs["fields"] = params.fields

        rows = await self._call_checking_fields(
            params.model, params.fields, "search_read", [params.domain], kwargs
        )
        rows = rows or []
        count = _count(rows)
        log_status(f"search_read returned {count} rows")
        return f"{count} records match in model '{params.model}'\n" + _as_json(
            {"count": count, "rows": rows}
        )

    async def _count_records(self, params: CountRecordsArguments) -> str:
        count = await self.client.call(params.model, "search_count", [params.domain])
        return json.dumps({"model": params.model, "count": count})

    async def _get_record(self, params: GetRecordArguments) -> str:
        kwargs = {"fields": params.fields} if params.fields is not None else {}
        rows = await self._call_checking_fields(
            params.model, params.fields, "read", [params.ids], kwargs
        )
        return f"Retrieved {_count(rows)} records from model '{params.model}'\n" + _as_json(rows)

    async def _list_models(self, params: ListModelsArguments) -> str:
        models = await self.client.call(
            MODEL_CATALOG, "search_read", [[]], {"fields": ["model", "name"]}
        )
        models = sorted(models or [], key=lambda m: m.get("model") or "")
        lines = [f"Found {len(models)} available models"]
        lines.extend(f"- {m.get('model')}: {m.get('name')}" for m in models)
        return "\n".join(lines)

    async def _get_model_fields(self, params: GetModelFieldsArguments) -> str:
        try:
            fields = await self.client.call(params.model, "fields_get", [], {})
        except RemoteError as exc:
            raise RemoteError(
                f"Error fetching fields for model '{params.model}': {exc}. Invalid model name?"
            ) from exc
        return f"Model '{params.model}' has {_count(fields)} fields\n" + _as_json(fields)

    # -------------------------------------------------------------------------
    # Field-validation retry policy
    # -------------------------------------------------------------------------
    async def _call_checking_fields(
        self,
        model: str,
        fields: Optional[list[str]],
        method: str,
        args: list,
        kwargs: dict,
    ) -> Any:
        """Call model.method; on a field-looking failure, name the bad fields.

        Raises FieldMismatchError when fields_get confirms some requested
        fields do not exist.  Otherwise the original exception propagates
        unchanged.
        """
        try:
            return await self.client.call(model, method, args, kwargs)
        except RemoteError as exc:
            context = FailureContext(model=model, requested_fields=tuple(fields or ()))
            if classify_failure(exc, context) is not ErrorKind.FIELD_SUSPECT:
                raise
            log_status(f"{method} failed on a field, checking fields of {model}")
            invalid = await self._find_invalid_fields(model, context.requested_fields)
            if invalid:
                raise FieldMismatchError(model, invalid) from exc
            raise

    async def _find_invalid_fields(self, model: str, requested: Sequence[str]) -> list[str]:
        try:
            available = await self.client.call(model, "fields_get", [], {"attributes": ["type"]})
        except NoraError as exc:
            logger.warning("fields_get lookup for %s failed: %s", model, exc)
            return []
        if not isinstance(available, dict):
            return []
        return find_missing_fields(requested, available)
