"""Mini README: Centralised configuration for the Finvault backend.

Structure:
    * FinvaultSettings - Pydantic model describing runtime configuration.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Every value can be overridden with a ``FINVAULT_`` prefixed environment
    variable or a ``.env`` file, e.g. ``FINVAULT_MONGO_URI`` and
    ``FINVAULT_JWT_SECRET``. The default secret is only suitable for local
    development and must be replaced in any shared deployment.
"""

from __future__ import annotations

from datetime import timedelta
from functools import lru_cache
from typing import List

from pydantic import Field, validator
from pydantic_settings import BaseSettings

SUPPORTED_STORE_BACKENDS = ("mongodb", "memory")


class FinvaultSettings(BaseSettings):
    """Runtime configuration for the Finvault service."""

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        5000,
        description="Port the HTTP service exposes.",
        ge=1,
        le=65535,
    )
    store_backend: str = Field(
        "mongodb",
        description="User store implementation: 'mongodb' or 'memory'.",
    )
    mongo_uri: str = Field(
        "mongodb://localhost:27017",
        description="MongoDB connection string.",
    )
    database_name: str = Field("loginApp", description="MongoDB database name.")
    users_collection: str = Field("users", description="Collection holding user documents.")
    store_timeout_ms: int = Field(
        5000,
        description="Server selection timeout applied to the MongoDB client.",
        ge=1,
    )
    jwt_secret: str = Field(
        "change-me-in-production",
        description="Secret used to sign access tokens.",
    )
    jwt_algorithm: str = Field("HS256", description="JWT signing algorithm.")
    token_lifetime_minutes: int = Field(
        60,
        description="Validity window of issued access tokens.",
        ge=1,
    )
    bcrypt_rounds: int = Field(
        10,
        description="bcrypt work factor used when hashing passwords.",
        ge=4,
        le=31,
    )
    cors_origins: str = Field(
        "*",
        description="Comma separated list of origins allowed by CORS.",
    )

    class Config:
        env_prefix = "FINVAULT_"
        env_file = ".env"
        case_sensitive = False

    @validator("store_backend", pre=True)
    def _normalise_backend(cls, value: str) -> str:
        """Accept any casing and reject unknown store backends early."""

        normalised = str(value).strip().lower()
        if normalised not in SUPPORTED_STORE_BACKENDS:
            raise ValueError(
                f"Unsupported store backend '{value}'. "
                f"Expected one of: {', '.join(SUPPORTED_STORE_BACKENDS)}"
            )
        return normalised

    @validator("jwt_secret")
    def _require_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("jwt_secret must not be empty")
        return value

    @property
    def token_lifetime(self) -> timedelta:
        return timedelta(minutes=self.token_lifetime_minutes)

    @property
    def cors_origin_list(self) -> List[str]:
        """Split the configured origins into a list for the CORS middleware."""

        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache()
def get_settings() -> FinvaultSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FinvaultSettings()
