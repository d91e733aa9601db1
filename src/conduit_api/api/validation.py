"""
Request Validation

This module turns raw request bodies into typed payloads, or into a complete,
field-addressed report of everything that is wrong with them.

Design Goals
------------
- Schemas are data: pydantic models whose fields carry ordered rule chains
- Every field is evaluated; failures are aggregated, never short-circuited
- Within one field, the first failing rule in declared order wins
- A body that is not JSON at all is reported separately, before any schema runs
"""

from __future__ import annotations

import json
import logging
import re
from typing import Annotated, Any, Callable, Dict, List, Type, TypeVar

from fastapi import Request
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError
from pydantic_core import PydanticCustomError

from ..core.result import Err, Ok, Result

logger = logging.getLogger("conduit.validation")

ModelT = TypeVar("ModelT", bound=BaseModel)

Rule = Callable[[str], str]

MALFORMED_JSON_MESSAGE = "Malformed JSON payload"


# ---------------------------------------------------------------------
# Input Error Types
# ---------------------------------------------------------------------

class InputViolations(BaseModel):
    """
    Mapping of dotted field path to the messages reported for that field.

    Keys keep the order in which fields were first reported.
    """

    fields: Dict[str, List[str]] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


class MalformedPayload(BaseModel):
    """The body could not be decoded as JSON."""

    message: str = MALFORMED_JSON_MESSAGE

    model_config = ConfigDict(frozen=True)


# ---------------------------------------------------------------------
# Field Rules
# ---------------------------------------------------------------------

def min_length(n: int) -> Rule:
    """Reject strings shorter than ``n`` characters."""

    def check(value: str) -> str:
        if len(value) < n:
            raise PydanticCustomError(
                "min_length",
                "Minimum length is {n}",
                {"n": n},
            )
        return value

    return check


def matches(pattern: str, message: str) -> Rule:
    """Reject strings that do not match ``pattern`` as a whole."""
    compiled = re.compile(pattern)

    def check(value: str) -> str:
        if compiled.fullmatch(value) is None:
            raise PydanticCustomError("pattern_mismatch", message)
        return value

    return check


def rule_set(*rules: Rule) -> Any:
    """
    Compose rules into an annotated ``str`` type.

    Rules run in the order given and stop at the first failure, so a field
    reports at most one rule violation. Wrap the result in ``Optional[...]``
    with a ``None`` default to accept an absent field.
    """
    return Annotated[(str,) + tuple(AfterValidator(rule) for rule in rules)]


EMAIL_PATTERN = r"[a-zA-Z0-9.+\-]+@[a-zA-Z0-9]+\.[a-zA-Z0-9]+"
ALPHANUMERIC_PATTERN = r"[a-zA-Z0-9]+"

Email = rule_set(matches(EMAIL_PATTERN, "Not a valid email"))
Username = rule_set(
    min_length(3),
    matches(ALPHANUMERIC_PATTERN, "Should be alphanumeric"),
)
Password = rule_set(min_length(5))


# ---------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------

def _field_path(loc: tuple) -> str:
    """
    Render a pydantic error location as a dotted path.

    The leading segment is the payload wrapper key ("user", "article", ...)
    and is dropped; an error on the wrapper itself keeps it.
    """
    parts = [str(part) for part in loc]
    if len(parts) > 1:
        parts = parts[1:]
    return ".".join(parts) or "body"


def collect_violations(exc: ValidationError) -> InputViolations:
    fields: Dict[str, List[str]] = {}
    for error in exc.errors():
        fields.setdefault(_field_path(error["loc"]), []).append(error["msg"])
    return InputViolations(fields=fields)


def validate_payload(
    schema: Type[ModelT],
    data: Any,
) -> Result[ModelT, InputViolations]:
    """
    Validate already-decoded JSON against a schema.

    Parameters
    ----------
    schema : Type[BaseModel]
        Request schema describing every field and its rule chain.

    data : Any
        Decoded JSON value.

    Returns
    -------
    Result[BaseModel, InputViolations]
        ``Ok`` with the typed payload when every field is accepted, otherwise
        ``Err`` with every failing field. Accepted values are discarded on
        failure.
    """
    try:
        return Ok(schema.model_validate(data))
    except ValidationError as exc:
        return Err(collect_violations(exc))


def decode_json(raw: bytes) -> Result[Any, MalformedPayload]:
    try:
        return Ok(json.loads(raw))
    except (ValueError, RecursionError):
        return Err(MalformedPayload())


async def parse_json_body(
    request: Request,
    schema: Type[ModelT],
) -> Result[ModelT, Any]:
    """
    Read, decode and validate the request body.

    Returns ``Err(MalformedPayload)`` when the body is not JSON, in which case
    the schema is never evaluated, or ``Err(InputViolations)`` when the JSON
    fails validation.
    """
    decoded = decode_json(await request.body())
    if isinstance(decoded, Err):
        logger.info("Malformed JSON body on %s %s", request.method, request.url.path)
        return decoded

    return validate_payload(schema, decoded.value)
