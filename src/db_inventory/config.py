# ABOUTME: Application configuration using Pydantic Settings for environment variables
# ABOUTME: Provides type-safe access to the manifest endpoint, share paths, output and logging settings

from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_MANIFEST_URL = "https://fm.mardens.com/fmDataFiles/db_list.txt"
DEFAULT_LINK_PREFIX = "https://pricing.mardens.com/mard_db/"
DEFAULT_PATH_TEMPLATE = r"\\192.168.21.207\c$\inetpub\wwwroot\PricingWebSite\mard_db\{folder}"
DEFAULT_CONFIG_EXTENSIONS = (".php", ".json")


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    model_config = SettingsConfigDict(
        env_prefix="DB_INVENTORY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore unknown environment variables
    )

    # Manifest source
    manifest_url: str = Field(default=DEFAULT_MANIFEST_URL, description="URL of the remote site manifest")

    # Path resolution
    link_prefix: str = Field(
        default=DEFAULT_LINK_PREFIX, description="URL prefix removed from each record link before taking the folder"
    )
    path_template: str = Field(
        default=DEFAULT_PATH_TEMPLATE,
        description="Local directory template; '{folder}' is replaced by the decoded folder name",
    )

    # Connection extraction
    config_extensions: tuple[str, ...] = Field(
        default=DEFAULT_CONFIG_EXTENSIONS, description="File name suffixes scanned for key=value lines"
    )

    # Output
    output_file: Path = Field(default=Path("output.json"), description="Inventory file, relative to the working dir")

    # Logging Configuration
    log_mode: Literal["interactive", "production"] = Field(default="interactive", description="Logging output mode")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Logging verbosity level"
    )

    log_file: Path | None = Field(default=None, description="Custom log file path (overrides default)")


# Global config instance - lazy loaded when first accessed
_config_instance: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Creates the config on first access, subsequent calls return the same instance.

    Returns:
        Config: The application configuration instance
    """
    global _config_instance
    if _config_instance is None:
        _config_instance = Config()
    return _config_instance


def reload_config() -> Config:
    """Reload configuration from environment variables.

    Useful for testing or when environment variables change at runtime.

    Returns:
        Config: A fresh configuration instance
    """
    global _config_instance
    _config_instance = Config()
    return _config_instance
