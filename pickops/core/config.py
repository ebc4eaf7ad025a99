from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="PICKOPS_", extra="ignore")

    app_name: str = "pickops"
    env: str = "dev"

    database_url: str = "sqlite+pysqlite:///./pickops.db"

    log_level: str = "INFO"

    # Picking state backend: sql | memory
    state_backend: str = "sql"
    state_namespace: str | None = Field(
        default=None,
        description="Account id prefixed to picking state keys; unset keeps the bare per-warehouse keys",
    )

    # all | <n> | custom:<n>
    default_picking_limit: str = "all"

    def model_post_init(self, __context) -> None:
        if self.state_backend not in {"sql", "memory"}:
            raise ValueError(f"unsupported state_backend: {self.state_backend}")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
