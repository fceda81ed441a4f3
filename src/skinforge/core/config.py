"""Configuration Management."""

import tempfile
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Application settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="SKINFORGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Toolchain location
    dev_mode: bool = Field(default=False, description="Resolve binaries from the source checkout")
    dev_root: Path = Field(default=Path("."), description="Source checkout root (dev mode)")
    resources_path: Path = Field(
        default=Path("resources"), description="Bundled binaries directory (packaged mode)"
    )
    template_name: str = Field(default="AutoPatcher.exe", description="Template executable name")
    embedder_name: str = Field(default="embedder.exe", description="Embedding tool name")
    dev_template_subpath: str = Field(
        default="cpp/build/bin/Release", description="Template location under dev_root"
    )
    dev_embedder_subpath: str = Field(
        default="native/build/bin", description="Embedder location under dev_root"
    )

    # Build output
    temp_dir: Path | None = Field(default=None, description="Staging directory override")
    config_suffix: str = Field(default="_config.json", description="Fallback sidecar suffix")
    executable_suffix: str = Field(default=".exe", description="Artifact suffix")
    resources_dir_name: str = Field(default="resources", description="Side-loaded assets dir")

    def staging_root(self) -> Path:
        """Directory that receives per-build staging folders."""
        return self.temp_dir if self.temp_dir is not None else Path(tempfile.gettempdir())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
