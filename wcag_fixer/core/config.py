"""
Configuration module - centralized settings for the compliance engine.
Uses pydantic-settings to load values from environment variables and .env file.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Engine settings loaded from environment variables.

    Pydantic-settings automatically:
    1. Reads from environment variables (highest priority)
    2. Falls back to .env file values
    3. Uses default values if neither exists

    Every variable is prefixed, for example:
        export WCAG_FIXER_LOG_LEVEL=DEBUG
        export WCAG_FIXER_INCLUDE_LEVEL_AAA=true
    """

    # ---------------------------------------------------------------------------
    # PYDANTIC SETTINGS CONFIGURATION
    # ---------------------------------------------------------------------------
    model_config = SettingsConfigDict(
        env_prefix="WCAG_FIXER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ---------------------------------------------------------------------------
    # LOGGING
    # ---------------------------------------------------------------------------
    # LOG_LEVEL: Root level used by configure_logging()
    LOG_LEVEL: str = "INFO"

    # ---------------------------------------------------------------------------
    # COMPLIANCE LEVELS
    # ---------------------------------------------------------------------------
    # Level A rules are always active. AA is on by default, AAA is opt-in
    # because its criteria are mostly reserved extension points.
    INCLUDE_LEVEL_AA: bool = True
    INCLUDE_LEVEL_AAA: bool = False

    # ---------------------------------------------------------------------------
    # REMEDIATION DEFAULTS
    # ---------------------------------------------------------------------------
    # DEFAULT_LANGUAGE: Written to <html lang> when it is missing or invalid
    DEFAULT_LANGUAGE: str = "en"

    # GENERATED_ID_PREFIX: Prefix for ids synthesized for unlabeled controls
    GENERATED_ID_PREFIX: str = "wcag-field"


# ---------------------------------------------------------------------------
# GLOBAL SETTINGS INSTANCE
# ---------------------------------------------------------------------------
# Usage: from wcag_fixer.core.config import settings
settings = Settings()
