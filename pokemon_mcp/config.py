import os
from functools import lru_cache

from pydantic import BaseModel, Field


class Settings(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3001
    environment: str = "production"
    log_level: str = "INFO"
    pokeapi_base_url: str = "https://pokeapi.co/api/v2"
    pokeapi_timeout: float = 5.0
    # Response cache is disabled unless a Redis URL is configured
    redis_url: str | None = None
    cache_ttl: int = 3600
    cors_origins: list[str] = Field(default_factory=lambda: ["*"])

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @classmethod
    def from_env(cls) -> "Settings":
        """Builds settings from environment variables, falling back to defaults."""
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3001")),
            environment=os.getenv("ENVIRONMENT", "production"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            pokeapi_base_url=os.getenv("POKEAPI_BASE_URL", "https://pokeapi.co/api/v2"),
            pokeapi_timeout=float(os.getenv("POKEAPI_TIMEOUT", "5.0")),
            redis_url=os.getenv("REDIS_URL") or None,
            cache_ttl=int(os.getenv("CACHE_TTL", "3600")),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
        )


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()
