"""
Process Configuration

Settings are read from the environment (and an optional ``.env`` file) once,
when this module is imported. The resulting ``settings`` object is handed to
the application factory and stored on ``app.state``; request handling never
consults the environment directly.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_PORT = 3000
DEV_JWT_SECRET = "conduit-development-secret-change-me-please"


class Settings(BaseSettings):
    # Transport
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    enable_https: bool = True
    tls_certificate_path: str = "secrets/tls/certificate.pem"
    tls_key_path: str = "secrets/tls/key.pem"

    # Token handling
    jwt_secret: SecretStr = SecretStr(DEV_JWT_SECRET)
    jwt_algo: str = "HS256"
    jwt_ttl_seconds: int = 7200
    token_prefix: str = "Token "
    strict_token_scheme: bool = False  # see DESIGN.md, token prefix decision

    # "package.module:callable" returning a conduit_api.services.protocols.Services
    services_factory: Optional[str] = None

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )

    @field_validator("port", mode="before")
    @classmethod
    def fallback_port(cls, v: Any) -> Any:
        """An unreadable PORT falls back to the default instead of aborting startup."""
        if isinstance(v, str):
            try:
                return int(v.strip())
            except ValueError:
                return DEFAULT_PORT
        return v

    @field_validator("enable_https", mode="before")
    @classmethod
    def fallback_enable_https(cls, v: Any) -> Any:
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in ("true", "1", "yes", "on"):
                return True
            if lowered in ("false", "0", "no", "off"):
                return False
            return True
        return v


settings = Settings()
