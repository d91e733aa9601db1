"""
Caller Authentication

This module is responsible for:

1. Extracting the token from the ``Authorization`` header.
2. Handing it to the configured ``TokenResolver`` collaborator.
3. Exposing the two retrieval modes endpoints choose between:
   ``require_user`` (failure ends the request with 401) and
   ``optional_user`` (failure means an anonymous caller).

Header Format
-------------
``Authorization: Token <token>``. The scheme prefix has a fixed length at
the protocol level and is stripped without looking at it, unless
``strict_token_scheme`` is enabled (see DESIGN.md).
"""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import Request

from ..core.result import Err, Ok, Result
from .models import CurrentUser, TokenError, TokenErrorMalformed, TokenErrorNotFound

logger = logging.getLogger("conduit.auth")

DEFAULT_TOKEN_PREFIX = "Token "


# ---------------------------------------------------------------------
# Header handling
# ---------------------------------------------------------------------

def extract_token(
    header: Optional[str],
    prefix: str = DEFAULT_TOKEN_PREFIX,
    strict: bool = False,
) -> Result[str, TokenError]:
    """
    Pull the token string out of a raw ``Authorization`` header value.

    In lenient mode the first ``len(prefix)`` characters are dropped whatever
    they are. In strict mode a header that does not start with ``prefix`` is
    rejected as malformed.
    """
    if header is None:
        return Err(TokenErrorNotFound())

    if strict and not header.startswith(prefix):
        return Err(
            TokenErrorMalformed(detail=f"Expected '{prefix.strip()}' authorization scheme.")
        )

    return Ok(header[len(prefix):])


async def get_current_user(
    header: Optional[str],
    resolver,
    prefix: str = DEFAULT_TOKEN_PREFIX,
    strict: bool = False,
) -> Result[CurrentUser, TokenError]:
    """
    Resolve the caller identity for a raw header value.

    Parameters
    ----------
    header : Optional[str]
        ``Authorization`` header value, ``None`` when absent.

    resolver : TokenResolver
        External collaborator exchanging a token for an identity. Its
        failures are propagated unchanged.

    Returns
    -------
    Result[CurrentUser, TokenError]
    """
    token = extract_token(header, prefix=prefix, strict=strict)
    if isinstance(token, Err):
        return token

    return await resolver.resolve(token.value)


# ---------------------------------------------------------------------
# Retrieval modes
# ---------------------------------------------------------------------

async def require_user(request: Request) -> Result[CurrentUser, TokenError]:
    """
    Resolve the caller for an endpoint that needs one.

    The pipeline turns an ``Err`` into a 401 response and runs nothing else
    for the request.
    """
    app_settings = request.app.state.settings

    result = await get_current_user(
        request.headers.get("Authorization"),
        request.app.state.token_resolver,
        prefix=app_settings.token_prefix,
        strict=app_settings.strict_token_scheme,
    )

    if isinstance(result, Err):
        logger.info(
            "Authentication failed on %s %s: %s",
            request.method,
            request.url.path,
            result.error.code,
        )

    return result


async def optional_user(request: Request) -> Optional[CurrentUser]:
    """Resolve the caller if possible; any token failure means anonymous."""
    app_settings = request.app.state.settings

    result = await get_current_user(
        request.headers.get("Authorization"),
        request.app.state.token_resolver,
        prefix=app_settings.token_prefix,
        strict=app_settings.strict_token_scheme,
    )

    if isinstance(result, Ok):
        return result.value
    return None
