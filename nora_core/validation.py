# =============================================================================
# nora_core/validation.py  —  Per-Tool Argument Schemas
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Each tool has its own pydantic model.  parse_arguments(tool, raw) checks
#   the raw MCP arguments against it and returns the normalized model:
#     - domain defaults to [] and must be a list of clause lists, optionally
#       mixed with the prefix operators "&", "|" and "!"
#     - fields is an optional list of strings
#     - ids elements may be ints or digit strings; they come out as ints
#
#   Nothing reaches the Odoo client until this has passed.  Failures are
#   re-raised as our ValidationError with one (path, reason) pair per problem.
#
#   Domain clauses themselves are NOT interpreted: ("name", "ilike", "acme")
#   goes to Odoo exactly as given.
# =============================================================================

import re
from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from nora_core.errors import ValidationError

_DIGITS = re.compile(r"[0-9]+")


def _coerce_record_id(value: Any) -> int:
    # bool is an int subclass; True must not turn into record 1.
    if isinstance(value, bool):
        raise ValueError("record id must be a positive integer or a string of digits")
    if isinstance(value, int):
        record_id = value
    elif isinstance(value, str) and _DIGITS.fullmatch(value.strip()):
        record_id = int(value.strip())
    else:
        raise ValueError("record id must be a positive integer or a string of digits")
    if record_id <= 0:
        raise ValueError("record id must be positive")
    return record_id


DOMAIN_OPERATORS = ("&", "|", "!")


def _check_domain_term(value: Any) -> Any:
    # A term is a clause list or one of the prefix operators.
    if isinstance(value, (list, tuple)) or value in DOMAIN_OPERATORS:
        return value
    raise ValueError("domain term must be a [field, operator, value] clause or one of '&', '|', '!'")


RecordId = Annotated[int, BeforeValidator(_coerce_record_id)]
Domain = list[Annotated[Any, BeforeValidator(_check_domain_term)]]


class ToolArguments(BaseModel):
    """Base for all argument models; unknown keys are dropped."""

    model_config = ConfigDict(extra="ignore")


class ModelArguments(ToolArguments):
    model: str = Field(min_length=1, description="Technical model name, e.g. res.partner")

    @field_validator("model")
    @classmethod
    def _model_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("model must not be blank")
        return value.strip()


class _DomainMixin(BaseModel):
    domain: Domain = Field(default_factory=list)

    @field_validator("domain", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value


class SearchRecordsArguments(ModelArguments, _DomainMixin):
    fields: Optional[list[str]] = None


class CountRecordsArguments(ModelArguments, _DomainMixin):
    pass


class GetRecordArguments(ModelArguments):
    ids: list[RecordId]
    fields: Optional[list[str]] = None


class ListModelsArguments(ToolArguments):
    pass


class GetModelFieldsArguments(ModelArguments):
    pass


ARGUMENT_MODELS: dict[str, type[ToolArguments]] = {
    "search_records": SearchRecordsArguments,
    "count_records": CountRecordsArguments,
    "get_record": GetRecordArguments,
    "list_models": ListModelsArguments,
    "get_model_fields": GetModelFieldsArguments,
}


def parse_arguments(tool_name: str, raw: Any) -> ToolArguments:
    """Validate raw tool arguments and return the normalized model.

    Args:
        tool_name: A name present in ARGUMENT_MODELS.
        raw: Whatever the caller sent; None is treated as {}.

    Raises:
        KeyError: tool_name has no schema (the dispatcher checks first).
        ValidationError: with every offending path and its reason.
    """
    schema = ARGUMENT_MODELS[tool_name]
    try:
        return schema.model_validate({} if raw is None else raw)
    except PydanticValidationError as exc:
        raise ValidationError(
            [(_format_path(error["loc"]), error["msg"]) for error in exc.errors()]
        ) from None


def _format_path(loc: tuple) -> str:
    if not loc:
        return "arguments"
    return ".".join(str(part) for part in loc)
