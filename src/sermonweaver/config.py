"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `SERMONWEAVER_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """SermonWeaver settings.

    All fields are environment-configurable. Prefix is `SERMONWEAVER_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="SERMONWEAVER_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")

    # Ordering
    # Display default: show thoughts missing from the stored structure after the ordered ones
    include_orphans: bool = Field(default=True)
    local_thought_prefix: str = Field(default="local-", min_length=1)

    # Storage
    data_dir: Path = Field(default=Path("data/sermons"))


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("SERMONWEAVER_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
