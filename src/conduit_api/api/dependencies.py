"""
Service Wiring

Helpers connecting routes to the business services configured on the app.
"""

from __future__ import annotations

import importlib
import logging
from typing import Annotated, Optional

from fastapi import Depends, Request

from ..services.protocols import Services

logger = logging.getLogger("conduit.app")


class ServicesNotConfiguredError(RuntimeError):
    """Raised when a request needs business services but none were configured."""


def load_services(factory_path: Optional[str]) -> Optional[Services]:
    """
    Build services from a ``"package.module:callable"`` reference.

    Returns ``None`` when no reference is configured.
    """
    if not factory_path:
        return None

    module_name, sep, attr = factory_path.partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(
            f"services_factory must look like 'package.module:callable'; got {factory_path!r}"
        )

    factory = getattr(importlib.import_module(module_name), attr)
    services = factory()
    logger.info("Loaded business services from %s", factory_path)
    return services


def get_services(request: Request) -> Services:
    services = request.app.state.services
    if services is None:
        raise ServicesNotConfiguredError(
            "No business services configured; set SERVICES_FACTORY or pass services to create_app()."
        )
    return services


ServicesDep = Annotated[Services, Depends(get_services)]
