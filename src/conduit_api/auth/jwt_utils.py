"""
JWT Token Utilities

Default token resolution collaborator. User tokens are HS256-signed JWTs
carrying the user id in an ``id`` claim and an ``exp`` expiry; the business
services issue them on login/registration with ``create_user_token`` and the
HTTP layer exchanges them for a ``CurrentUser`` through ``JwtTokenResolver``.

The resolver reports *why* a token was rejected as a ``TokenError`` variant;
the HTTP layer does not interpret the reason beyond answering 401.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

import jwt

from ..config import Settings, settings
from ..core.result import Err, Ok, Result
from .models import (
    CurrentUser,
    TokenError,
    TokenErrorExpired,
    TokenErrorMalformed,
    TokenErrorUserIdNotFound,
)

logger = logging.getLogger("conduit.auth")

USER_ID_CLAIM = "id"


# ---------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------

class JWTConfigurationError(RuntimeError):
    """Raised when tokens cannot be issued due to configuration issues."""


# ---------------------------------------------------------------------
# Internal Helpers
# ---------------------------------------------------------------------

def _get_current_timestamp() -> int:
    """Return current UNIX timestamp in UTC as integer seconds."""
    return int(time.time())


def _validate_jwt_config(app_settings: Settings) -> None:
    if not app_settings.jwt_secret.get_secret_value():
        raise JWTConfigurationError("jwt_secret is not configured. Cannot issue tokens.")

    if app_settings.jwt_ttl_seconds <= 0:
        raise JWTConfigurationError(
            f"jwt_ttl_seconds must be a positive integer; got {app_settings.jwt_ttl_seconds}"
        )


# ---------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------

def create_user_token(
    user_id: int,
    app_settings: Optional[Settings] = None,
    now: Optional[int] = None,
) -> str:
    """
    Issue a signed token for ``user_id``.

    Parameters
    ----------
    user_id : int
        Identifier stored in the ``id`` claim.

    app_settings : Optional[Settings]
        Settings supplying secret, algorithm and TTL. Defaults to the process
        settings.

    now : Optional[int]
        Issue time override, mostly useful for producing expired tokens.

    Returns
    -------
    str
        Encoded JWT, sent by clients as ``Authorization: Token <jwt>``.

    Raises
    ------
    JWTConfigurationError
        If the secret or TTL is unusable.
    """
    cfg = app_settings or settings
    _validate_jwt_config(cfg)

    issued_at = now if now is not None else _get_current_timestamp()

    payload: Dict[str, Any] = {
        USER_ID_CLAIM: user_id,
        "iat": issued_at,
        "exp": issued_at + cfg.jwt_ttl_seconds,
    }

    try:
        return jwt.encode(
            payload,
            cfg.jwt_secret.get_secret_value(),
            algorithm=cfg.jwt_algo,
        )
    except Exception as exc:
        raise JWTConfigurationError(
            f"Failed to generate JWT: {type(exc).__name__}: {str(exc)}"
        ) from exc


class JwtTokenResolver:
    """
    Verifies user tokens locally with the shared secret.

    Implements the ``TokenResolver`` protocol.
    """

    def __init__(self, app_settings: Optional[Settings] = None) -> None:
        self._settings = app_settings or settings

    def _decode(self, token: str) -> Dict[str, Any]:
        return jwt.decode(
            token,
            self._settings.jwt_secret.get_secret_value(),
            algorithms=[self._settings.jwt_algo],
            options={"require": ["exp", USER_ID_CLAIM]},
        )

    async def resolve(self, token: str) -> Result[CurrentUser, TokenError]:
        try:
            payload = self._decode(token)
        except jwt.ExpiredSignatureError:
            return Err(TokenErrorExpired())
        except jwt.MissingRequiredClaimError as exc:
            if exc.claim == USER_ID_CLAIM:
                return Err(TokenErrorUserIdNotFound())
            return Err(TokenErrorMalformed(detail=str(exc)))
        except jwt.InvalidTokenError as exc:
            logger.debug("Rejected token: %s", exc)
            return Err(TokenErrorMalformed(detail=str(exc)))

        user_id = payload.get(USER_ID_CLAIM)

        # bool is an int subclass; a boolean id is as good as none
        if not isinstance(user_id, int) or isinstance(user_id, bool):
            return Err(TokenErrorUserIdNotFound())

        return Ok(CurrentUser(token=token, user_id=user_id))
