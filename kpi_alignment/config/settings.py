"""
Settings Management with Pydantic

Provides type-safe configuration management with:
- Environment variable support
- Validation
- Separate analysis and data source configurations
"""

from typing import Optional
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AnalysisConfig(BaseSettings):
    """Weights and thresholds used by the heuristic analysis passes."""
    model_config = SettingsConfigDict(
        env_prefix="ANALYSIS_",
        extra="ignore"
    )

    # Overlap detection
    overlap_severity_threshold: float = Field(default=0.2, ge=0.0, lt=1.0)

    # Alignment scoring
    overlap_penalty: float = 5.0
    conflict_penalty: float = 3.0
    clarity_bonus: float = 2.0
    clear_definition_min_words: int = 8

    # Score bands (badges and ratings)
    well_aligned_score: float = 80.0
    partially_aligned_score: float = 60.0
    attention_score: float = 70.0


class DataSourceConfig(BaseSettings):
    """Where the KPI definitions CSV is loaded from."""
    model_config = SettingsConfigDict(
        env_prefix="DATA_",
        extra="ignore"
    )

    csv_path: str = "./sample_data/kpi_definitions.csv"
    url: Optional[str] = None
    fetch_timeout: float = 10.0
    encoding: str = "utf-8"


class Settings(BaseSettings):
    """Main application settings."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Application
    app_name: str = "KPI Alignment Tool"
    debug: bool = False
    log_level: str = "INFO"

    # Sub-configurations
    analysis: AnalysisConfig = Field(default_factory=AnalysisConfig)
    data: DataSourceConfig = Field(default_factory=DataSourceConfig)

    @classmethod
    def from_env(cls) -> "Settings":
        """Create settings from environment variables."""
        return cls(
            analysis=AnalysisConfig(),
            data=DataSourceConfig()
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings.from_env()
