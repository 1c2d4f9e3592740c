"""
EdgeSession Configuration — constants and validated settings.

Reads settings from environment variables:
    EDGESESSION_SECRET = <signing secret>
    EDGESESSION_FLASH_LIFETIME = <seconds, default 120>
    EDGESESSION_REDIS_URL = <redis://... optional>

Security Note:
    Never log the signing secret.
"""
import os
import logging
from typing import Optional

from pydantic import BaseModel, Field, SecretStr, field_validator

logger = logging.getLogger("navigator.edgesession")

# A ``__Host-`` cookie is only accepted by browsers when it is Secure,
# has no Domain attribute and uses Path=/.
SESSION_COOKIE = "__Host-session"
SESSION_COOKIE_PATH = "/"
SESSION_COOKIE_SAMESITE = "strict"

DATA_PREFIX = "data"
FLASH_PREFIX = "flash"
KEY_SEPARATOR = ":"

# seconds
FLASH_LIFETIME = 120
DATA_LIFETIME_MONTHS = 1


class EdgeSessionConfig(BaseModel):
    """Validated EdgeSession configuration."""

    secret: SecretStr
    flash_lifetime: int = Field(default=FLASH_LIFETIME, ge=1)
    redis_url: Optional[str] = None

    @field_validator("secret")
    @classmethod
    def validate_secret(cls, v: SecretStr) -> SecretStr:
        """Reject an empty signing secret."""
        if not v.get_secret_value():
            raise ValueError("EdgeSession secret cannot be empty")
        return v

    @field_validator("redis_url")
    @classmethod
    def validate_redis_url(cls, v: Optional[str]) -> Optional[str]:
        """Accept only redis:// style URLs."""
        if v is not None and not v.startswith(("redis://", "rediss://", "unix://")):
            raise ValueError(f"Unsupported redis URL scheme: {v.split(':', 1)[0]}")
        return v

    @classmethod
    def from_env(cls) -> "EdgeSessionConfig":
        """Create EdgeSessionConfig by loading values from environment.

        Returns:
            Populated EdgeSessionConfig instance.

        Raises:
            RuntimeError: If EDGESESSION_SECRET is not set.
        """
        secret = os.environ.get("EDGESESSION_SECRET")
        if secret is None:
            raise RuntimeError(
                "EDGESESSION_SECRET environment variable is not set"
            )
        flash_lifetime = int(
            os.environ.get("EDGESESSION_FLASH_LIFETIME", FLASH_LIFETIME)
        )
        logger.debug("Loaded EdgeSession configuration (flash_lifetime=%d)", flash_lifetime)
        return cls(
            secret=secret,
            flash_lifetime=flash_lifetime,
            redis_url=os.environ.get("EDGESESSION_REDIS_URL"),
        )
