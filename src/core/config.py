"""Configuration models and YAML loader for the placement prep engine."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator


class DatabaseConfig(BaseModel):
    """Database configuration.

    All analyses live as one serialized blob under ``storage_key``.
    """

    path: str = "data/prep.db"
    storage_key: str = "placement_prep_history"

    @field_validator("storage_key")
    @classmethod
    def storage_key_not_empty(cls, v: str) -> str:
        if not v.strip():
            msg = "storage_key must not be empty"
            raise ValueError(msg)
        return v.strip()


class ScoringConfig(BaseModel):
    """Weights for the base readiness score."""

    base: int = Field(default=35, ge=0, le=100)
    per_category: int = Field(default=5, ge=0)
    category_cap: int = Field(default=30, ge=0)
    company_bonus: int = Field(default=10, ge=0)
    role_bonus: int = Field(default=10, ge=0)
    long_jd_bonus: int = Field(default=10, ge=0)
    long_jd_threshold: int = Field(default=800, ge=0)
    max_score: int = Field(default=100, ge=1, le=100)


class ConfidenceConfig(BaseModel):
    """Score delta applied per know/practice entry."""

    step: int = Field(default=2, ge=0)


class QuestionConfig(BaseModel):
    """Question set sizing."""

    limit: int = Field(default=10, ge=1)
    min_pool: int = Field(default=5, ge=0)


class SessionConfig(BaseModel):
    """Submission flow settings."""

    analysis_delay_ms: int = Field(default=800, ge=0)
    short_jd_chars: int = Field(default=200, ge=0)


class Settings(BaseModel):
    """Top-level settings loaded from YAML."""

    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    confidence: ConfidenceConfig = Field(default_factory=ConfidenceConfig)
    questions: QuestionConfig = Field(default_factory=QuestionConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Settings":
        """Load settings from a YAML file."""
        path = Path(path)
        if not path.exists():
            msg = f"Config file not found: {path}"
            raise FileNotFoundError(msg)
        raw: dict[str, Any] = yaml.safe_load(path.read_text()) or {}
        return cls.model_validate(raw)
