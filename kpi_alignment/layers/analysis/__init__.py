"""
Analysis Layer: Heuristic KPI Alignment

Keyword and pattern rules over a snapshot of metric definitions:
- Term extraction and lexical overlap between teams
- Concept-bucket conflicts and same-name incompatibilities
- Vague and overlapping definitions
- Funnel stage classification
- Per-team alignment scoring
- Metric family glossary
"""

from .terms import TermExtractor, extract_terms
from .overlaps import OverlapDetector, detect_overlaps
from .conflicts import (
    ConceptConflictDetector,
    ConflictDetector,
    IncompatibilityDetector,
    OverlappingDefinitionDetector,
    detect_conflicts
)
from .vagueness import VaguenessDetector
from .funnel import FunnelClassifier, classify_funnel
from .scoring import AlignmentScorer, score_alignment
from .glossary import GlossarySynthesizer, synthesize_glossary
from .analyzer import KpiAnalyzer, analyze
from .engine import AlignmentEngine, AlignmentReport

__all__ = [
    "TermExtractor",
    "extract_terms",
    "OverlapDetector",
    "detect_overlaps",
    "ConceptConflictDetector",
    "ConflictDetector",
    "IncompatibilityDetector",
    "OverlappingDefinitionDetector",
    "detect_conflicts",
    "VaguenessDetector",
    "FunnelClassifier",
    "classify_funnel",
    "AlignmentScorer",
    "score_alignment",
    "GlossarySynthesizer",
    "synthesize_glossary",
    "KpiAnalyzer",
    "analyze",
    "AlignmentEngine",
    "AlignmentReport"
]
