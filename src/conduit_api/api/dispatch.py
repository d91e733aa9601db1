"""
Error Dispatch

Maps each error family to an HTTP status and a JSON error body.

Each feature area keeps its own table and its own dispatcher; a route picks
the dispatcher matching the service it calls. Status codes follow the
meaning of the variant, never a shared default.

Body shapes
-----------
- Domain and token errors:  ``{"errors": {"code": ..., <variant fields>}}``
- Field violations:         ``{"errors": {"<path>": ["message", ...]}}``
- Malformed JSON:           ``{"errors": "Malformed JSON payload"}``
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Tuple, Type

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ..auth.models import TokenError
from ..domain.errors import (
    ArticleError,
    ArticleErrorNotAllowed,
    ArticleErrorNotFound,
    CommentError,
    CommentErrorNotAllowed,
    CommentErrorNotFound,
    CommentErrorSlugNotFound,
    UserError,
    UserErrorBadAuth,
    UserErrorEmailTaken,
    UserErrorNameTaken,
    UserErrorNotFound,
)
from .validation import InputViolations, MalformedPayload

logger = logging.getLogger("conduit.errors")

# starlette names this constant differently across releases
UNPROCESSABLE_CONTENT = 422


# ---------------------------------------------------------------------
# Status tables
# ---------------------------------------------------------------------

USER_ERROR_STATUS: Mapping[Type[UserError], int] = {
    UserErrorBadAuth: status.HTTP_400_BAD_REQUEST,
    UserErrorNotFound: status.HTTP_404_NOT_FOUND,
    UserErrorNameTaken: status.HTTP_400_BAD_REQUEST,
    UserErrorEmailTaken: status.HTTP_400_BAD_REQUEST,
}

ARTICLE_ERROR_STATUS: Mapping[Type[ArticleError], int] = {
    ArticleErrorNotFound: status.HTTP_404_NOT_FOUND,
    ArticleErrorNotAllowed: status.HTTP_403_FORBIDDEN,
}

COMMENT_ERROR_STATUS: Mapping[Type[CommentError], int] = {
    CommentErrorNotFound: status.HTTP_404_NOT_FOUND,
    CommentErrorSlugNotFound: status.HTTP_404_NOT_FOUND,
    CommentErrorNotAllowed: status.HTTP_403_FORBIDDEN,
}


# ---------------------------------------------------------------------
# Pure mapping
# ---------------------------------------------------------------------

def error_body(err: BaseModel) -> Dict[str, Any]:
    """Serialize a variant as its code plus whatever it carries."""
    return {"errors": {"code": err.code, **err.model_dump(mode="json")}}


def _lookup(table: Mapping[type, int], err: BaseModel) -> int:
    try:
        return table[type(err)]
    except KeyError:
        # Families are closed; an unknown variant is a programming error.
        raise TypeError(f"No status mapping for {type(err).__name__}") from None


def token_error_response(err: TokenError) -> Tuple[int, Dict[str, Any]]:
    return status.HTTP_401_UNAUTHORIZED, error_body(err)


def user_error_response(err: UserError) -> Tuple[int, Dict[str, Any]]:
    return _lookup(USER_ERROR_STATUS, err), error_body(err)


def article_error_response(err: ArticleError) -> Tuple[int, Dict[str, Any]]:
    return _lookup(ARTICLE_ERROR_STATUS, err), error_body(err)


def comment_error_response(err: CommentError) -> Tuple[int, Dict[str, Any]]:
    return _lookup(COMMENT_ERROR_STATUS, err), error_body(err)


def input_error_response(err: Any) -> Tuple[int, Dict[str, Any]]:
    if isinstance(err, MalformedPayload):
        return UNPROCESSABLE_CONTENT, {"errors": err.message}
    if isinstance(err, InputViolations):
        return UNPROCESSABLE_CONTENT, {"errors": dict(err.fields)}
    raise TypeError(f"Not an input error: {type(err).__name__}")


# ---------------------------------------------------------------------
# Response dispatchers
# ---------------------------------------------------------------------

def _respond(status_code: int, body: Dict[str, Any]) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body)


def dispatch_token_error(err: TokenError) -> JSONResponse:
    return _respond(*token_error_response(err))


def dispatch_user_error(err: UserError) -> JSONResponse:
    logger.info("User error: %s", err.code)
    return _respond(*user_error_response(err))


def dispatch_article_error(err: ArticleError) -> JSONResponse:
    logger.info("Article error: %s", err.code)
    return _respond(*article_error_response(err))


def dispatch_comment_error(err: CommentError) -> JSONResponse:
    logger.info("Comment error: %s", err.code)
    return _respond(*comment_error_response(err))


def dispatch_input_error(err: Any) -> JSONResponse:
    return _respond(*input_error_response(err))
