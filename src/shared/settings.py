"""Application settings loaded from the environment.

Protean domain configuration (providers, brokers, event store) lives in each
domain's ``domain.toml``. The values here are the application-level knobs
that are handed to services when the FastAPI app is built.
"""

import os
from dataclasses import dataclass, field

_TRUTHY = {"1", "true", "yes", "on"}


def _split(value: str) -> tuple[str, ...]:
    return tuple(part.strip() for part in value.split(",") if part.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the Cartwheel API."""

    jwt_secret: str = "cartwheel-dev-secret"
    jwt_algorithm: str = "HS256"
    token_ttl_days: int = 7
    cart_write_retries: int = 5
    seed_catalogue: bool = True
    cors_origins: tuple[str, ...] = field(default=("*",))

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from ``SHOP_*`` environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            jwt_secret=env.get("SHOP_JWT_SECRET", defaults.jwt_secret),
            jwt_algorithm=env.get("SHOP_JWT_ALGORITHM", defaults.jwt_algorithm),
            token_ttl_days=int(env.get("SHOP_TOKEN_TTL_DAYS", defaults.token_ttl_days)),
            cart_write_retries=int(env.get("SHOP_CART_WRITE_RETRIES", defaults.cart_write_retries)),
            seed_catalogue=env.get("SHOP_SEED_CATALOGUE", "true").lower() in _TRUTHY,
            cors_origins=_split(env.get("SHOP_CORS_ORIGINS", "*")) or defaults.cors_origins,
        )
