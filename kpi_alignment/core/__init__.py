"""
Core domain models and heuristic vocabulary for KPI alignment.

- entities: immutable metric records and enumerations
- vocabulary: the keyword tables and patterns behind every analysis pass
"""

from .entities import (
    MetricRecord,
    FunnelStage,
    ConflictSeverity,
    unique_teams,
    group_by_name
)
from .vocabulary import VOCABULARY_VERSION

__all__ = [
    "MetricRecord",
    "FunnelStage",
    "ConflictSeverity",
    "unique_teams",
    "group_by_name",
    "VOCABULARY_VERSION"
]
