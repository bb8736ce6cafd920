"""
KPI Alignment

Heuristic analysis of team KPI definitions: finds naming overlaps,
conflicting definitions and vague wording, scores each team's alignment,
and generates a standardized metric glossary.
"""

__version__ = "0.1.0"

from .core.entities import MetricRecord, FunnelStage, ConflictSeverity
from .exceptions import KpiAlignmentError, DataUnavailableError
from .layers.analysis import (
    AlignmentEngine,
    AlignmentReport,
    analyze,
    score_alignment,
    classify_funnel,
    detect_conflicts,
    synthesize_glossary
)

__all__ = [
    "MetricRecord",
    "FunnelStage",
    "ConflictSeverity",
    "KpiAlignmentError",
    "DataUnavailableError",
    "AlignmentEngine",
    "AlignmentReport",
    "analyze",
    "score_alignment",
    "classify_funnel",
    "detect_conflicts",
    "synthesize_glossary"
]
