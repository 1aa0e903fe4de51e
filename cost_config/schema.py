"""
Configuration Schema (``cost_config.schema``).

Frozen dataclass holding every runtime setting of the cost tracker.  Values
are validated in ``__post_init__``; construction with an invalid value
raises ``ConfigurationError``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from typing import Any, Self

from cost_kernel.exceptions import ConfigurationError

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

DEFAULT_FALLBACK_MESSAGE = (
    "Maliyet analizi sırasında bir hata oluştu. Verileri kontrol edip tekrar deneyin."
)
DEFAULT_EMPTY_MESSAGE = "Yanıt alınamadı."


@dataclass(frozen=True)
class CostTrackerConfig:
    """
    Runtime settings.

        config = CostTrackerConfig(
            database_url="sqlite:///site.db",
            namespace="mega_v2",
        )
    """

    # Persistence
    database_url: str = "sqlite:///megacost.db"
    namespace: str = "mega"
    seed_demo_data: bool = True

    # Insight generation
    insight_model: str = "gemini-3-flash-preview"
    api_key_env: str = "GEMINI_API_KEY"
    insight_fallback_message: str = DEFAULT_FALLBACK_MESSAGE
    insight_empty_message: str = DEFAULT_EMPTY_MESSAGE

    # Logging
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        # every field is a str except seed_demo_data
        for f in fields(self):
            expected = bool if f.type == "bool" else str
            value = getattr(self, f.name)
            if not isinstance(value, expected):
                raise ConfigurationError(
                    f.name, f"expected {expected.__name__}, got {type(value).__name__} {value!r}"
                )
        if not self.database_url:
            raise ConfigurationError("database_url", "must not be empty")
        if not self.namespace or not self.namespace.replace("_", "").isalnum():
            raise ConfigurationError(
                "namespace", f"must be alphanumeric/underscore, got '{self.namespace}'"
            )
        if not self.insight_model:
            raise ConfigurationError("insight_model", "must not be empty")
        if not self.api_key_env:
            raise ConfigurationError("api_key_env", "must not be empty")
        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigurationError(
                "log_level", f"must be one of {sorted(VALID_LOG_LEVELS)}, got '{self.log_level}'"
            )

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level.upper())

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """
        Create config from a dictionary (e.g. parsed YAML).

        Raises:
            ConfigurationError: on unknown keys or invalid values.
        """
        unknown = set(data) - cls.field_names()
        if unknown:
            raise ConfigurationError(", ".join(sorted(unknown)), "unknown configuration key")
        return cls(**data)
