"""
Request Pipeline

Per-endpoint orchestration shared by every route:

    authenticate -> validate body -> call service -> respond

Each endpoint declares its authentication mode, its body schema (if any),
the service call to make, the dispatcher for that service's error family, and
how to serialize success. Every step yields a ``Result``; the first ``Err``
becomes the response and nothing after it runs.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional, Type

from fastapi import Request, Response
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..auth.models import CurrentUser
from ..auth.security import optional_user, require_user
from ..core.result import Err, Ok, Result
from ..domain.models import ArticleFilter, Pagination
from .dispatch import dispatch_input_error, dispatch_token_error
from .validation import parse_json_body

logger = logging.getLogger("conduit.pipeline")

DEFAULT_LIMIT = 20
DEFAULT_OFFSET = 0


class AuthMode(str, Enum):
    REQUIRED = "required"
    OPTIONAL = "optional"
    NONE = "none"


@dataclass(frozen=True)
class RequestContext:
    """Trusted inputs for one service call."""

    user: Optional[CurrentUser] = None
    payload: Any = None


ServiceCall = Callable[[RequestContext], Awaitable[Result[Any, Any]]]
ErrorHandler = Callable[[Any], Response]
Serializer = Callable[[Any], Response]


# ---------------------------------------------------------------------
# Success serializers
# ---------------------------------------------------------------------

def wrap(key: str) -> Serializer:
    """Serialize the result under a single top-level key."""

    def serialize(value: Any) -> Response:
        return JSONResponse(content={key: jsonable_encoder(value, by_alias=True)})

    return serialize


def wrap_articles(articles: Any) -> Response:
    return JSONResponse(
        content={
            "articles": jsonable_encoder(articles, by_alias=True),
            "articlesCount": len(articles),
        }
    )


def acknowledge(_: Any) -> Response:
    """Empty 200 for calls performed only for their side effect."""
    return Response(status_code=200)


# ---------------------------------------------------------------------
# Query parameters
# ---------------------------------------------------------------------

def _non_negative_int(params: Mapping[str, str], name: str, default: int) -> int:
    raw = params.get(name)
    if raw is None:
        return default
    # plain ASCII digits only: no sign, whitespace or underscores
    if not (raw.isascii() and raw.isdigit()):
        return default
    return int(raw)


def parse_pagination(params: Mapping[str, str]) -> Pagination:
    """Best effort: anything unreadable falls back to limit 20, offset 0."""
    return Pagination(
        limit=_non_negative_int(params, "limit", DEFAULT_LIMIT),
        offset=_non_negative_int(params, "offset", DEFAULT_OFFSET),
    )


def parse_article_filter(params: Mapping[str, str]) -> ArticleFilter:
    return ArticleFilter(
        tag=params.get("tag"),
        author=params.get("author"),
        favorited_by=params.get("favorited"),
    )


# ---------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------

async def run_pipeline(
    request: Request,
    call: ServiceCall,
    *,
    serialize: Serializer,
    auth: AuthMode = AuthMode.NONE,
    schema: Optional[Type[BaseModel]] = None,
    on_error: Optional[ErrorHandler] = None,
) -> Response:
    """
    Run one endpoint through the pipeline.

    Parameters
    ----------
    request : Request
        Incoming request; headers and body are read from it.

    call : ServiceCall
        Business operation, invoked with the resolved identity and the
        validated payload.

    serialize : Serializer
        Turns the ``Ok`` value into the success response.

    auth : AuthMode
        ``REQUIRED`` answers 401 on any token failure; ``OPTIONAL`` treats
        failure as an anonymous caller; ``NONE`` skips resolution.

    schema : Optional[Type[BaseModel]]
        Body schema. Malformed JSON and field violations answer 422 before the
        service is called.

    on_error : Optional[ErrorHandler]
        Dispatcher for the service's error family. Required whenever the
        call can return ``Err``.

    Returns
    -------
    Response
    """
    user: Optional[CurrentUser] = None

    if auth is AuthMode.REQUIRED:
        resolved = await require_user(request)
        if isinstance(resolved, Err):
            return dispatch_token_error(resolved.error)
        user = resolved.value
    elif auth is AuthMode.OPTIONAL:
        user = await optional_user(request)

    payload: Any = None
    if schema is not None:
        parsed = await parse_json_body(request, schema)
        if isinstance(parsed, Err):
            return dispatch_input_error(parsed.error)
        payload = parsed.value

    result = await call(RequestContext(user=user, payload=payload))

    if isinstance(result, Err):
        if on_error is None:
            raise RuntimeError(
                f"{request.method} {request.url.path} returned an error with no dispatcher"
            )
        return on_error(result.error)

    if not isinstance(result, Ok):
        raise TypeError(f"Service call returned {type(result).__name__}, expected a Result")

    return serialize(result.value)
