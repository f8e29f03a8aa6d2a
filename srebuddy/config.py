"""
Configuration management for SreBuddy.

Implements multi-level configuration loading with precedence:
1. Environment variables (highest priority)
2. Project config (./.srebuddy/config.yaml)
3. User config (~/.srebuddy/config.yaml)
4. System config (/etc/srebuddy/config.yaml)
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict, YamlConfigSettingsSource, PydanticBaseSettingsSource

from srebuddy.utils.logging import level_from_name


DEFAULT_CORPUS_PATH = str(Path(".github") / "copilot-instructions.md")


class Config(BaseSettings):
    """Complete configuration schema for SreBuddy with flat structure."""

    model_config = SettingsConfigDict(
        # Load from .env files in order of precedence (lowest to highest)
        env_file=[
            ".env",  # Project-specific
            str(Path.home() / ".srebuddy" / ".env"),  # User-specific
        ],
        # Load from YAML files in order of precedence (lowest to highest)
        yaml_file=[
            "/etc/srebuddy/config.yaml",  # System-wide
            str(Path.home() / ".srebuddy" / "config.yaml"),  # User-specific
            str(Path.cwd() / ".srebuddy" / "config.yaml"),  # Project-specific
        ],
        env_prefix="SREBUDDY_",
        case_sensitive=False,
        extra="ignore",
        env_file_encoding="utf-8",
    )

    # =================================================================
    # Prompt templates
    # =================================================================
    prompt_corpus_path: str = Field(
        default=DEFAULT_CORPUS_PATH,
        description="Markdown file holding the prompt template corpus"
    )
    template_match_threshold: float = Field(
        default=0.3, ge=0.0,
        description="A template must score above this value to be selected"
    )
    fallback_prompts_dir: Optional[str] = Field(
        default=None,
        description="Directory of <command>.md files overriding the built-in fallback prompts"
    )

    # =================================================================
    # Output
    # =================================================================
    log_level: str = Field(default="WARNING", description="Log level for SreBuddy diagnostics")
    results_dir: Optional[str] = Field(
        default=None, description="Default directory for saved results documents"
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level_from_name(value)
        return value.upper()

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include YAML support."""
        yaml_settings = YamlConfigSettingsSource(settings_cls)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            yaml_settings,
            file_secret_settings,
        )

    def get_template_config(self) -> Dict[str, Any]:
        """Get prompt template configuration."""
        return {
            "corpus_path": self.prompt_corpus_path,
            "match_threshold": self.template_match_threshold,
        }


def load_config() -> Config:
    """
    Load configuration from all sources with proper precedence.

    Precedence (highest to lowest):
    1. Environment variables (SREBUDDY_*)
    2. User .env (~/.srebuddy/.env)
    3. Project .env (./.env)
    4. Project config (./.srebuddy/config.yaml)
    5. User config (~/.srebuddy/config.yaml)
    6. System config (/etc/srebuddy/config.yaml)
    7. Default values

    Returns:
        Config: The loaded and validated configuration

    Examples:
        Basic usage:
        >>> config = load_config()
        >>> print(config.prompt_corpus_path)
        '.github/copilot-instructions.md'

        Environment variable override:
        # export SREBUDDY_TEMPLATE_MATCH_THRESHOLD=0.5
        >>> config = load_config()
        >>> print(config.template_match_threshold)
        0.5
    """
    return Config()
