"""Configuration management with YAML support and Pydantic validation."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tasknotes_nlp.exceptions import UnknownLanguageError
from tasknotes_nlp.locales import is_supported_language
from tasknotes_nlp.models.triggers import (
    NLPTriggersConfig,
    PriorityConfig,
    PropertyTriggerConfig,
    StatusConfig,
    UserMappedField,
    default_triggers,
)


class NLPConfig(BaseModel):
    """Parser behaviour."""

    language: str = Field(default="en", description="Language table used for keyword matching")
    default_to_scheduled: bool = Field(
        default=True,
        description="Assign dates without a due/scheduled keyword to the scheduled field",
    )
    forward_date: bool = Field(
        default=True,
        description="Resolve ambiguous dates (weekdays, dates without a year) into the future",
    )

    @field_validator("language")
    @classmethod
    def validate_language(cls, v: str) -> str:
        """Ensure a table ships for the configured language."""
        v = v.lower()
        if not is_supported_language(v):
            raise UnknownLanguageError(f"Unsupported language: {v}")
        return v


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="WARNING", description="Root log level")
    format: str = Field(default="%(message)s", description="Log record format")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        v = v.upper()
        if v not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Invalid log level: {v}")
        return v


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_prefix="TASKNLP_",
        env_nested_delimiter="__",
    )

    nlp: NLPConfig = Field(default_factory=NLPConfig)
    triggers: NLPTriggersConfig = Field(default_factory=NLPTriggersConfig)
    statuses: list[StatusConfig] = Field(
        default=[],
        description="Custom statuses (empty = language fallback words)",
    )
    priorities: list[PriorityConfig] = Field(
        default=[],
        description="Custom priorities (empty = language fallback words)",
    )
    user_fields: list[UserMappedField] = Field(default=[], description="User-defined fields")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("user_fields")
    @classmethod
    def validate_unique_user_field_ids(cls, v: list[UserMappedField]) -> list[UserMappedField]:
        """Ensure user field ids are unique."""
        ids = [f.id for f in v]
        if len(ids) != len(set(ids)):
            raise ValueError("user field ids must be unique")
        return v


def migrate_legacy_config(config_dict: dict) -> dict:
    """Migrate older settings layouts to the current format.

    Old format:
        status_suggestion_trigger: "*"
        user_field:
          enabled: true
          id: effort
          display_name: Effort
          key: effort
          type: number

    New format:
        triggers:
          triggers:
            - property_id: status
              trigger: "*"
        user_fields:
          - id: effort
            ...
    """
    if "status_suggestion_trigger" in config_dict:
        legacy_trigger = config_dict.pop("status_suggestion_trigger")
        triggers_section = config_dict.setdefault("triggers", {})
        if "triggers" not in triggers_section:
            triggers_section["triggers"] = [t.model_dump() for t in default_triggers()]
        for trigger in triggers_section["triggers"]:
            if trigger.get("property_id") == "status":
                trigger["trigger"] = legacy_trigger
                break
        else:
            triggers_section["triggers"].append(
                PropertyTriggerConfig(property_id="status", trigger=legacy_trigger).model_dump()
            )

    if "user_field" in config_dict:
        legacy_field = config_dict.pop("user_field") or {}
        # Disabled legacy fields are dropped rather than migrated
        if legacy_field.pop("enabled", True) and "user_fields" not in config_dict:
            config_dict["user_fields"] = [legacy_field]

    return config_dict


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from YAML file.

    Args:
        config_path: Path to the YAML configuration file. Defaults to config.yaml in CWD.

    Returns:
        Validated Config object.
    """
    if config_path is None:
        config_path = Path("config.yaml")
    else:
        config_path = Path(config_path)

    config_data: dict[str, Any] = {}

    if config_path.exists():
        with open(config_path) as f:
            loaded = yaml.safe_load(f)
            if loaded:
                config_data = loaded

    config_data = migrate_legacy_config(config_data)

    return Config(**config_data)


# Global config instance - initialized lazily
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
