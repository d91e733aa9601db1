"""
Server bootstrap: ``python -m conduit_api`` or the ``conduit-api`` script.

Serves over TLS unless ``ENABLE_HTTPS`` is false.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import uvicorn

from .config import Settings, settings

logger = logging.getLogger("conduit.app")


def build_server_config(app_settings: Optional[Settings] = None) -> Dict[str, Any]:
    """Translate settings into ``uvicorn.run`` keyword arguments."""
    cfg = app_settings or settings

    config: Dict[str, Any] = {
        "host": cfg.host,
        "port": cfg.port,
        "log_level": cfg.log_level.lower(),
    }

    if cfg.enable_https:
        config["ssl_certfile"] = cfg.tls_certificate_path
        config["ssl_keyfile"] = cfg.tls_key_path

    return config


def main() -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    config = build_server_config()
    logger.info(
        "Serving on %s://%s:%s",
        "https" if settings.enable_https else "http",
        config["host"],
        config["port"],
    )

    uvicorn.run("conduit_api.main:app", **config)


if __name__ == "__main__":
    main()
