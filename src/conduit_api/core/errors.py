"""
Global Error Handling

Application-wide exception handlers. Domain, token and payload failures never
reach these: they travel as ``Err`` values and are answered by the pipeline.
What arrives here is either a framework-level request validation failure
(path parameters) or something nobody anticipated.

Design Goals
------------
- Every response carries a structured JSON body, even on 500
- Log full stack traces internally for debugging
- Keep the field-map shape for framework validation failures
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger("conduit.errors")


# ---------------------------------------------------------------------
# Public Exception Handlers
# ---------------------------------------------------------------------

async def request_validation_exception_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """
    Render FastAPI's own parameter validation failures as a field map.

    Locations look like ``("path", "comment_id")``; the source segment is
    dropped so the key is the parameter name.
    """
    logger.warning(
        "Validation error on %s %s: %s",
        request.method,
        request.url.path,
        exc.errors(),
    )

    fields: Dict[str, List[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        key = ".".join(loc[1:] if len(loc) > 1 else loc) or "request"
        fields.setdefault(key, []).append(error.get("msg", "Invalid value"))

    return JSONResponse(status_code=422, content={"errors": fields})


async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """
    Catch-all handler for uncaught exceptions.

    Behavior
    --------
    - Logs the full exception stack trace for internal diagnostics.
    - Returns 500 with the raw error text under ``errors``, so no request
      ends without a JSON body.

    Parameters
    ----------
    request : Request
        The incoming HTTP request that triggered the exception.

    exc : Exception
        The uncaught exception instance.

    Returns
    -------
    JSONResponse
    """
    logger.exception(
        "Unhandled exception during request: %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )

    payload: Dict[str, Any] = {
        "errors": str(exc) or type(exc).__name__,
    }

    return JSONResponse(
        status_code=500,
        content=payload,
    )
