# =============================================================================
# nora_tools/catalog.py  —  The Advertised Tool Catalog
# =============================================================================
#
# Five read-only tools, in the order they are advertised.  The tuple is the
# single source of names and descriptions: mcp_server.py registers exactly
# these, and the dispatcher refuses anything else.
#
# TOOL NAMING CONVENTIONS:
#   - search_* / count_*  → query with a domain filter
#   - get_* / list_*      → read-only retrieval
#   Nothing here writes to Odoo.
# =============================================================================

from typing import Any, Optional

from nora_core.models import ToolDefinition

SEARCH_LIMIT = 1000                    # Hard cap on rows returned by search_records

_MODEL: dict[str, Any] = {
    "type": "string",
    "minLength": 1,
    "description": "Technical model name, e.g. 'res.partner' or 'sale.order'.",
}

_DOMAIN: dict[str, Any] = {
    "type": "array",
    "items": {"anyOf": [{"type": "array"}, {"type": "string", "enum": ["&", "|", "!"]}]},
    "description": (
        "Odoo domain: a list of [field, operator, value] clauses, "
        "e.g. [[\"is_company\", \"=\", true]]. Prefix operators \"&\", \"|\" and \"!\" "
        "may be mixed in. Defaults to [] (all records)."
    ),
}

_FIELDS: dict[str, Any] = {
    "type": "array",
    "items": {"type": "string"},
    "description": "Field names to return. Omit for the model's default fields.",
}

_IDS: dict[str, Any] = {
    "type": "array",
    "items": {
        "anyOf": [
            {"type": "integer", "minimum": 1},
            {"type": "string", "pattern": "^[0-9]+$"},
        ]
    },
    "description": "Record ids; digit strings are accepted and converted to integers.",
}

SEARCH_RECORDS = ToolDefinition(
    name="search_records",
    description=(
        "Search records inside a model that satisfy the given domain. "
        f"Returns at most {SEARCH_LIMIT} rows."
    ),
    input_schema={
        "type": "object",
        "properties": {"model": _MODEL, "domain": _DOMAIN, "fields": _FIELDS},
        "required": ["model"],
    },
)

COUNT_RECORDS = ToolDefinition(
    name="count_records",
    description="Count records inside a model that satisfy the given domain.",
    input_schema={
        "type": "object",
        "properties": {"model": _MODEL, "domain": _DOMAIN},
        "required": ["model"],
    },
)

GET_RECORD = ToolDefinition(
    name="get_record",
    description="Read records of a model by their ids.",
    input_schema={
        "type": "object",
        "properties": {"model": _MODEL, "ids": _IDS, "fields": _FIELDS},
        "required": ["model", "ids"],
    },
)

LIST_MODELS = ToolDefinition(
    name="list_models",
    description="List every model available on the Odoo server, sorted by technical name.",
    input_schema={"type": "object", "properties": {}},
)

GET_MODEL_FIELDS = ToolDefinition(
    name="get_model_fields",
    description="List all fields of a model with their types and attributes.",
    input_schema={
        "type": "object",
        "properties": {"model": _MODEL},
        "required": ["model"],
    },
)

TOOL_CATALOG: tuple[ToolDefinition, ...] = (
    SEARCH_RECORDS,
    COUNT_RECORDS,
    GET_RECORD,
    LIST_MODELS,
    GET_MODEL_FIELDS,
)


def get_tool(name: str) -> Optional[ToolDefinition]:
    """Look up a catalog entry by name."""
    for definition in TOOL_CATALOG:
        if definition.name == name:
            return definition
    return None

