"""
Configuration management using Pydantic models loaded from YAML.
"""

from pathlib import Path
from typing import List

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from .domain.analytics import BEST_SLOT_COUNT, AnalyticsReporter
from .domain.ranker import NEUTRAL_FITNESS, SlotRanker
from .domain.time_normalizer import is_valid_timezone
from .domain.working_hours import DEFAULT_BANDS, ScoreBand, WorkingHoursScorer

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ScoreBandConfig(BaseModel):
    """One segment of the working-hours penalty curve."""
    start_hour: int
    end_hour: int
    score: float

    @field_validator("start_hour", "end_hour")
    @classmethod
    def validate_hour(cls, v: int) -> int:
        """Validate hour is between 0 and 24."""
        if not 0 <= v <= 24:
            raise ValueError(f"Hour must be between 0 and 24, got {v}")
        return v

    @field_validator("score")
    @classmethod
    def validate_score(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"Score must be between 0 and 1, got {v}")
        return v

    @model_validator(mode="after")
    def validate_hours_order(self) -> "ScoreBandConfig":
        """Ensure the band opens before it closes."""
        if self.end_hour <= self.start_hour:
            raise ValueError("end_hour must be later than start_hour")
        return self

    def to_band(self) -> ScoreBand:
        return ScoreBand(start_hour=self.start_hour, end_hour=self.end_hour, score=self.score)


def _default_bands() -> List[ScoreBandConfig]:
    return [
        ScoreBandConfig(start_hour=band.start_hour, end_hour=band.end_hour, score=band.score)
        for band in DEFAULT_BANDS
    ]


class ScoringConfig(BaseModel):
    """Settings for working-hours fitness."""
    bands: List[ScoreBandConfig] = Field(default_factory=_default_bands)
    neutral_fitness: float = NEUTRAL_FITNESS

    @field_validator("neutral_fitness")
    @classmethod
    def validate_neutral_fitness(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"neutral_fitness must be between 0 and 1, got {v}")
        return v

    @field_validator("bands")
    @classmethod
    def validate_bands(cls, value: List[ScoreBandConfig]) -> List[ScoreBandConfig]:
        """Ensure no hour is covered by two bands."""
        ordered = sorted(value, key=lambda band: band.start_hour)
        for previous, current in zip(ordered, ordered[1:]):
            if current.start_hour < previous.end_hour:
                raise ValueError(
                    f"Score bands overlap: {previous.start_hour}-{previous.end_hour} "
                    f"and {current.start_hour}-{current.end_hour}"
                )
        return value

    def build_scorer(self) -> WorkingHoursScorer:
        return WorkingHoursScorer(bands=[band.to_band() for band in self.bands])


class AnalyticsConfig(BaseModel):
    """Settings for the analytics report."""
    best_slot_count: int = BEST_SLOT_COUNT

    @field_validator("best_slot_count")
    @classmethod
    def validate_best_slot_count(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("best_slot_count must be greater than zero")
        return value


class AppConfig(BaseModel):
    """Application configuration."""
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    analytics: AnalyticsConfig = Field(default_factory=AnalyticsConfig)
    default_timezone: str = "UTC"
    log_level: str = "WARNING"

    @field_validator("default_timezone")
    @classmethod
    def validate_default_timezone(cls, value: str) -> str:
        if not is_valid_timezone(value):
            raise ValueError(f"Unrecognized time zone: {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(LOG_LEVELS)}, got {value!r}")
        return level

    def build_reporter(self) -> AnalyticsReporter:
        """Wire scorer, ranker and reporter from these settings."""
        ranker = SlotRanker(
            scorer=self.scoring.build_scorer(),
            neutral_fitness=self.scoring.neutral_fitness,
        )
        return AnalyticsReporter(ranker=ranker, best_slot_count=self.analytics.best_slot_count)

    @classmethod
    def load_from_yaml(cls, config_path: Path) -> "AppConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to the YAML config file

        Returns:
            AppConfig instance

        Raises:
            FileNotFoundError: If config file doesn't exist
            ValueError: If config is invalid
        """
        if not config_path.exists():
            raise FileNotFoundError(
                f"Config file not found: {config_path}\n"
                f"See config.example.yaml for reference."
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ValueError(f"Invalid YAML in {config_path}: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("Config file must contain a mapping at the root level.")

        return cls(**data)


def get_default_config_path() -> Path:
    """Get the default configuration file path."""
    # Look for config.yaml in current directory
    current_dir = Path.cwd()
    config_path = current_dir / "config.yaml"

    if not config_path.exists():
        # Try in the project root (parent of meetsync/)
        project_root = Path(__file__).parent.parent
        config_path = project_root / "config.yaml"

    return config_path


def load_config(config_path: Path | None = None) -> AppConfig:
    """
    Load the given config file, or the default one if it exists.

    An explicitly given path must exist; a missing default file falls
    back to built-in defaults.
    """
    if config_path is not None:
        return AppConfig.load_from_yaml(config_path)

    default_path = get_default_config_path()
    if default_path.exists():
        return AppConfig.load_from_yaml(default_path)
    return AppConfig()
