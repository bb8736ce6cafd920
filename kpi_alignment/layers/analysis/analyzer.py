"""
KPI Analyzer

Per-name view of the dataset: for every metric name, who uses it and how
they define it. Names shared by several teams produce:
- a conflict entry when the definitions differ
- a translation showing what the name means in each team's funnel context
- a recommended unified definition taken from the clearest variant
"""

from ...core.entities import MetricRecord, group_by_name, unique_teams
from .conflicts import OverlappingDefinitionDetector
from .funnel import FunnelClassifier
from .schemas import (
    AnalysisResult,
    MetricSummary,
    MetricTranslation,
    NameConflict,
    Recommendation,
    TeamDefinition,
    TeamTranslation
)
from .vagueness import VaguenessDetector

IMPLEMENTATION_STEPS = [
    "Share the recommended definition with every team that reports this metric",
    "Agree on the time window and calculation method in a cross-team review",
    "Update dashboards and reports to use the unified definition",
    "Retire or rename team-specific variants that measure something else",
]


class KpiAnalyzer:
    """Summaries, conflicts, translations and recommendations per metric name."""

    def __init__(
        self,
        classifier: FunnelClassifier = None,
        vagueness: VaguenessDetector = None,
        overlapping: OverlappingDefinitionDetector = None
    ):
        self._classifier = classifier or FunnelClassifier()
        self._vagueness = vagueness or VaguenessDetector()
        self._overlapping = overlapping or OverlappingDefinitionDetector()

    def summarize(self, name: str, group: list[MetricRecord]) -> MetricSummary:
        return MetricSummary(
            metric_name=name,
            teams=unique_teams(group),
            definitions=[TeamDefinition(team=r.team, definition=r.definition) for r in group]
        )

    def find_conflict(self, name: str, group: list[MetricRecord]):
        """A NameConflict when several teams define the name differently, else None."""
        teams = unique_teams(group)
        if len(teams) < 2 or len({r.definition.strip().lower() for r in group}) < 2:
            return None

        return NameConflict(
            metric_name=name,
            description=(
                f"'{name}' is defined differently by {len(teams)} teams: "
                f"{', '.join(teams)}."
            ),
            details=[TeamDefinition(team=r.team, definition=r.definition) for r in group],
            impact=(
                "Teams reporting the same number can be measuring different things, "
                "which makes cross-team comparisons and shared targets unreliable."
            )
        )

    def translate(self, name: str, group: list[MetricRecord]) -> MetricTranslation:
        translations = []
        for record in group:
            assignment = self._classifier.classify_record(record)
            translations.append(TeamTranslation(
                team=record.team,
                context=f"{assignment.stage.value} stage",
                meaning=record.definition
            ))
        return MetricTranslation(metric_name=name, team_translations=translations)

    def recommend(
        self,
        name: str,
        group: list[MetricRecord],
        records: list[MetricRecord]
    ) -> Recommendation:
        """Pick the clearest variant: fewest vagueness reasons, then most words."""
        best = min(
            group,
            key=lambda r: (len(self._vagueness.reasons(r.definition)), -r.word_count)
        )

        alternatives = []
        for record in group:
            for other in records:
                if other.name == name or other.name in alternatives:
                    continue
                if self._overlapping.check(record, other):
                    alternatives.append(other.name)

        return Recommendation(
            metric_name=name,
            recommended_definition=best.definition,
            source_team=best.team,
            alternative_names=alternatives,
            implementation_steps=list(IMPLEMENTATION_STEPS)
        )

    def analyze(self, records: list[MetricRecord]) -> AnalysisResult:
        summaries = []
        conflicts = []
        translations = []
        recommendations = []

        for name, group in group_by_name(records).items():
            summary = self.summarize(name, group)
            summaries.append(summary)

            if not summary.has_multiple_definitions:
                continue

            conflict = self.find_conflict(name, group)
            if conflict:
                conflicts.append(conflict)
            translations.append(self.translate(name, group))
            recommendations.append(self.recommend(name, group, records))

        return AnalysisResult(
            summaries=summaries,
            conflicts=conflicts,
            translations=translations,
            recommendations=recommendations
        )


def analyze(records: list[MetricRecord]) -> AnalysisResult:
    """Per-name summaries, conflicts, translations and recommendations."""
    return KpiAnalyzer().analyze(records)
