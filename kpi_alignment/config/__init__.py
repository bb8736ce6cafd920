"""
Configuration Management

Centralized configuration for:
- Analysis weights and thresholds
- Data source location (local CSV or URL)
- Logging
"""

from .settings import (
    Settings,
    AnalysisConfig,
    DataSourceConfig,
    get_settings
)
from .log import configure_logging

__all__ = [
    "Settings",
    "AnalysisConfig",
    "DataSourceConfig",
    "get_settings",
    "configure_logging"
]
