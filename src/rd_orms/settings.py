"""
rd_orms.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide env-driven settings for the stub services and the orchestration helper.
- Resolve per-service listen ports from their own environment variables.
- Offer a cached settings instance.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    - Strict env-driven configuration (prefix `RD_ORMS_`)
    - Defaults safe for local dev
    - Single settings object handed to the services and the helper
    """

    model_config = SettingsConfigDict(env_prefix="RD_ORMS_", case_sensitive=False)

    env: Literal["dev", "test", "prod"] = "dev"
    log_level: str = "INFO"

    # Stub services
    api_host: str = "127.0.0.1"

    # Helper: repository layout
    root_dir: Path = Field(default_factory=Path.cwd)
    packages_dir: str = "packages"
    env_file: str = ".env"

    # Helper: external tools, split shell-style before invocation
    compose_command: str = "docker compose"
    package_manager: str = "pnpm"
    dotenv_command: str = "dotenv"


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def port_from_env(variable: str, default: int, environ: Mapping[str, str] | None = None) -> int:
    # Unset, empty, non-numeric and out-of-range values all fall back to the default.
    raw = (os.environ if environ is None else environ).get(variable, "").strip()
    try:
        port = int(raw)
    except ValueError:
        return default
    return port if 0 < port <= 65535 else default


# --- Module Notes -----------------------------------------------------------
# Service ports are read outside `Settings` on purpose: each service owns an unprefixed
# variable, and an invalid value must degrade to the default instead of failing validation.
