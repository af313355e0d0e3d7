"""
Application configuration using pydantic-settings.

Loads configuration from environment variables and .env files.
"""

from functools import lru_cache
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SelectionFields(BaseModel):
    """Budgets used when picking the hypotheses that count at a leaf."""

    max_hypotheses_per_leaf: int = Field(
        default=1,
        ge=1,
        description="Maximum amount of hypotheses per hypotheses set in a leaf",
    )
    max_hypotheses_per_pseudo_hyp: int = Field(
        default=3,
        ge=1,
        description="Maximum amount of hypotheses selected from pseudo hypotheses",
    )
    skip_if_confidence_less: float | None = Field(
        default=None,
        description="Skip leaf hypotheses whose confidence is at or below this floor (None disables)",
    )


class SelectionPolicy(SelectionFields):
    """Frozen selection budgets handed to the leaf selector."""

    model_config = ConfigDict(frozen=True)


class Settings(BaseSettings, SelectionFields):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="EVALUATOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Files
    eval_file_suffix: str = Field(
        default=".eval.json",
        description="Suffix of classification store files",
    )
    no_hyp_marker: str = Field(
        default="no-hyp",
        description="File name marker of explorations scored in pseudo-hypothesis mode",
    )

    # Application
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    def selection_policy(self) -> SelectionPolicy:
        """Build the selection policy handed to the leaf selector."""
        return SelectionPolicy.model_validate(self.model_dump(include=set(SelectionFields.model_fields)))


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application settings instance.
    """
    return Settings()
