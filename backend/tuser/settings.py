from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=None, extra="ignore")

    # Runtime
    environment: str = Field(default="development", validation_alias="NODE_ENV")
    port: int = Field(default=8080, validation_alias="PORT")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    # AWS / secrets
    aws_region: str = Field(default="us-west-2", validation_alias="AWS_REGION")
    tuser_secret_id: str = Field(default="prod/tuser", validation_alias="TUSER_SECRET_ID")
    # 0 disables caching: every invocation reads Secrets Manager.
    secrets_cache_ttl_seconds: int = Field(
        default=0, validation_alias="SECRETS_CACHE_TTL_SECONDS"
    )

    # Twitch Helix user directory
    directory_base_url: str = Field(
        default="https://api.twitch.tv/helix/users", validation_alias="DIRECTORY_BASE_URL"
    )

    # ---- helpers / derived flags ----
    @property
    def normalized_environment(self) -> str:
        v = (self.environment or "").strip().lower()
        if v in ("prod", "production"):
            return "production"
        if v in ("stage", "staging"):
            return "staging"
        if v in ("dev", "development"):
            return "development"
        return v or "development"

    @property
    def is_production(self) -> bool:
        return self.normalized_environment == "production"

    def to_log_safe_dict(self) -> dict[str, object]:
        """
        A redacted representation safe for structured logs / diagnostics.
        """
        return {
            "environment": self.normalized_environment,
            "port": self.port,
            "log_level": self.log_level,
            "aws": {
                "aws_region": self.aws_region,
                "tuser_secret_id": self.tuser_secret_id,
                "secrets_cache_ttl_seconds": self.secrets_cache_ttl_seconds,
            },
            "directory": {
                "directory_base_url": self.directory_base_url,
            },
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


# Module-level singleton.
settings = get_settings()
