"""
Authentication Models

This module defines the caller identity produced by token resolution and the
closed set of token failures that can occur while producing it.
"""

from __future__ import annotations

from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class CurrentUser(BaseModel):
    """
    Authenticated caller identity derived from a verified token.

    Lives for the duration of one request and is never persisted by the
    HTTP layer.
    """

    token: str = Field(
        ...,
        description="Raw token string the identity was resolved from.",
    )

    user_id: int = Field(
        ...,
        description="Identifier of the authenticated user.",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )


# ---------------------------------------------------------------------
# Token Errors
# ---------------------------------------------------------------------

class TokenError(BaseModel):
    """Base of the token error family. Every variant maps to 401."""

    code: ClassVar[str]

    model_config = ConfigDict(frozen=True, extra="forbid")


class TokenErrorNotFound(TokenError):
    """No Authorization header was sent."""

    code: ClassVar[str] = "token_not_found"


class TokenErrorMalformed(TokenError):
    """The header or the token inside it could not be decoded."""

    code: ClassVar[str] = "token_malformed"

    detail: str


class TokenErrorExpired(TokenError):
    code: ClassVar[str] = "token_expired"


class TokenErrorUserIdNotFound(TokenError):
    """The token verified but carries no usable user id."""

    code: ClassVar[str] = "token_user_id_not_found"
