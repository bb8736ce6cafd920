"""
Alignment Engine

Single entry point that recomputes every analysis pass for a new dataset
snapshot. The passes are independent pure functions of the record list;
only the scorer consumes other passes' outputs (overlaps and concept
conflicts).

    Records --> Term Extractor --> Overlap Detector --+
            --> Concept Conflicts --------------------+--> Alignment Scorer
            --> Vagueness / Incompatibility / Overlapping definitions
            --> Funnel Classifier
            --> Glossary Synthesizer
            --> KPI Analyzer
"""

from dataclasses import dataclass, field
from datetime import datetime
import logging

from ...config.settings import AnalysisConfig
from ...core.entities import FunnelStage, MetricRecord, unique_teams
from ...core.vocabulary import VOCABULARY_VERSION
from .analyzer import KpiAnalyzer
from .conflicts import ConflictDetector
from .funnel import FunnelClassifier
from .glossary import GlossarySynthesizer
from .overlaps import OverlapDetector
from .schemas import (
    AlignmentSummary,
    AnalysisResult,
    Conflict,
    ConflictReport,
    FunnelAssignment,
    MetricFamily,
    Overlap,
    ReportCounts,
    StageBreakdown,
    TeamAlignmentScore
)
from .scoring import AlignmentScorer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AlignmentReport:
    """Every analysis result for one dataset snapshot."""
    records: tuple[MetricRecord, ...] = ()
    analysis: AnalysisResult = field(default_factory=AnalysisResult)
    overlaps: list[Overlap] = field(default_factory=list)
    concept_conflicts: list[Conflict] = field(default_factory=list)
    conflicts: ConflictReport = field(default_factory=ConflictReport)
    funnel: dict[tuple[str, str], FunnelAssignment] = field(default_factory=dict)
    stage_breakdown: StageBreakdown = None
    scores: list[TeamAlignmentScore] = field(default_factory=list)
    alignment: AlignmentSummary = field(default_factory=AlignmentSummary)
    glossary: list[MetricFamily] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)
    vocabulary_version: str = VOCABULARY_VERSION

    @property
    def teams(self) -> list[str]:
        return unique_teams(list(self.records))

    @property
    def counts(self) -> ReportCounts:
        return ReportCounts(
            records=len(self.records),
            teams=len(self.teams),
            overlaps=len(self.overlaps),
            conflicts=len(self.concept_conflicts),
            vague=len(self.conflicts.vague),
            incompatible=len(self.conflicts.incompatible),
            families=len(self.glossary)
        )

    def stage_of(self, team: str, metric_name: str) -> FunnelStage:
        assignment = self.funnel.get((team, metric_name))
        return assignment.stage if assignment else FunnelStage.UNKNOWN

    def score_for(self, team: str):
        for team_score in self.scores:
            if team_score.team == team:
                return team_score
        return None


class AlignmentEngine:
    """
    Runs all analysis passes over an immutable record snapshot.

    Nothing is cached between loads: load() builds a fresh report and the
    previous one stays valid for whoever still holds it.
    """

    def __init__(self, config: AnalysisConfig = None):
        self.config = config or AnalysisConfig()
        self.overlap_detector = OverlapDetector(self.config.overlap_severity_threshold)
        self.conflict_detector = ConflictDetector()
        self.funnel_classifier = FunnelClassifier()
        self.scorer = AlignmentScorer(self.config)
        self.glossary = GlossarySynthesizer()
        self.analyzer = KpiAnalyzer(
            classifier=self.funnel_classifier,
            vagueness=self.conflict_detector.vagueness,
            overlapping=self.conflict_detector.overlapping
        )

    def load(self, records) -> AlignmentReport:
        """Recompute every pass for a new dataset snapshot."""
        snapshot = tuple(records)
        records = list(snapshot)
        logger.info(
            "Analyzing %d KPI definitions from %d teams",
            len(records), len(unique_teams(records))
        )

        overlaps = self.overlap_detector.detect(records)
        concept_conflicts = self.conflict_detector.concept_conflicts(records)
        funnel = self.funnel_classifier.classify(records)
        scores = self.scorer.score(records, overlaps, concept_conflicts)

        report = AlignmentReport(
            records=snapshot,
            analysis=self.analyzer.analyze(records),
            overlaps=overlaps,
            concept_conflicts=concept_conflicts,
            conflicts=self.conflict_detector.detect(records),
            funnel=funnel,
            stage_breakdown=self.funnel_classifier.stage_breakdown(records, funnel),
            scores=scores,
            alignment=self.scorer.summarize(scores),
            glossary=self.glossary.synthesize(records)
        )

        logger.info(
            "Analysis complete: %d overlaps, %d concept conflicts, %d vague, %d incompatible",
            len(overlaps), len(concept_conflicts),
            len(report.conflicts.vague), len(report.conflicts.incompatible)
        )
        return report
