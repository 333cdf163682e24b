"""
Generator configuration

Only the variables cargo itself exports to build scripts are read.
"""
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Generator settings"""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Directory holding the crate's Cargo.toml
    CARGO_MANIFEST_DIR: Optional[str] = None

    # cargo binary; cargo sets this for build scripts
    CARGO: str = "cargo"


def load_settings() -> Settings:
    """Read settings from the environment at call time."""
    return Settings()
