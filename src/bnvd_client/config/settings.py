from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


class AppConfig(BaseSettings):
    """Client configuration with automatic environment variable loading.

    All settings can be overridden via environment variables with the BNVD_ prefix.
    For example:
        - BNVD_BASE_URL=https://bnvd.example.org
        - BNVD_TIMEOUT_SECONDS=10
        - BNVD_HEADERS='{"Authorization": "Bearer xxx"}'

    Values passed to the constructor take precedence over the environment:
        config = AppConfig(base_url="https://bnvd.example.org", headers={"Accept-Language": "pt-BR"})

    The instance is frozen; a client keeps the same configuration for its lifetime.
    """

    model_config = SettingsConfigDict(
        env_prefix="BNVD_",
        case_sensitive=False,
        extra="forbid",
        frozen=True,
    )

    base_url: str = Field(
        ...,
        description="API root, e.g. https://bnvd.example.org. Paths such as /api/v1/stats are appended verbatim.",
    )

    timeout_seconds: int = Field(
        default=30,
        gt=0,
        description="Upper bound on how long a single request may block",
    )

    headers: dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_HEADERS),
        description="Extra request headers, merged over Content-Type: application/json",
    )

    @field_validator("headers")
    @classmethod
    def _merge_default_headers(cls, value: dict[str, str]) -> dict[str, str]:
        # caller entries win on key collision; header names are case-insensitive
        overridden = {k.lower() for k in value}
        defaults = {k: v for k, v in DEFAULT_HEADERS.items() if k.lower() not in overridden}
        return {**defaults, **value}
