"""
Conflict Detection

Three independent mechanisms look for teams that mean different things by
related metrics:

1. Concept buckets: metrics sharing a concept keyword (conversion,
   engagement, quality, churn, value, satisfaction) across teams.
2. Exact-name incompatibilities: one metric name whose definitions disagree
   on time window or calculation method.
3. Overlapping definitions: similar-name pairs ("churn" vs "retention") and
   definitions covering the same scope.

Vagueness is a per-record pass and lives in vagueness.py.
"""

from itertools import combinations
import logging

from ...core.entities import MetricRecord, group_by_name
from ...core.vocabulary import (
    CONCEPT_KEYWORDS,
    SIMILAR_NAME_PAIRS,
    SHARED_SCOPE_RULES,
    EXCLUSION_MARKER,
    RATIO_MARKERS,
    INCOMPATIBLE_TIME_FRAMES,
    INCOMPATIBLE_CALCULATION,
    mentions_any
)
from .schemas import (
    Conflict,
    ConflictReport,
    Incompatibility,
    MethodologyProfile,
    OverlappingDefinition,
    TeamDefinition
)
from .vagueness import VaguenessDetector, has_time_frame, has_or, has_threshold

logger = logging.getLogger(__name__)


def _canonical(record_a: MetricRecord, record_b: MetricRecord) -> tuple[MetricRecord, MetricRecord]:
    """Order a pair so the smaller (team, name) key comes first."""
    if record_b.key < record_a.key:
        return (record_b, record_a)
    return (record_a, record_b)


class ConceptConflictDetector:
    """Cross-team pairs that share a concept bucket."""

    def __init__(self, concepts: dict[str, tuple[str, ...]] = None):
        self.concepts = concepts or CONCEPT_KEYWORDS

    def assign_concepts(self, records: list[MetricRecord]) -> dict[str, list[MetricRecord]]:
        """Place each record in every concept bucket its name or definition hits."""
        buckets: dict[str, list[MetricRecord]] = {}
        for record in records:
            for concept, keywords in self.concepts.items():
                if mentions_any(record, keywords):
                    buckets.setdefault(concept, []).append(record)
        return buckets

    def detect(self, records: list[MetricRecord]) -> list[Conflict]:
        conflicts = []
        for concept, members in self.assign_concepts(records).items():
            for first, second in combinations(members, 2):
                if first.team == second.team:
                    continue
                record_a, record_b = _canonical(first, second)
                conflicts.append(Conflict(
                    concept=concept,
                    team_a=record_a.team,
                    metric_a=record_a.name,
                    definition_a=record_a.definition,
                    team_b=record_b.team,
                    metric_b=record_b.name,
                    definition_b=record_b.definition
                ))

        logger.debug("Detected %d concept conflicts", len(conflicts))
        return conflicts

    @staticmethod
    def involving(conflicts: list[Conflict], team: str) -> list[Conflict]:
        return [conflict for conflict in conflicts if conflict.involves(team)]


class IncompatibilityDetector:
    """Same metric name, different methodology."""

    def profile(self, record: MetricRecord) -> MethodologyProfile:
        definition = record.definition.lower()
        return MethodologyProfile(
            team=record.team,
            has_time_frame=has_time_frame(definition),
            has_exclusions=EXCLUSION_MARKER in definition,
            has_denominator=any(marker in definition for marker in RATIO_MARKERS),
            has_or=has_or(definition),
            has_threshold=has_threshold(definition)
        )

    def detect(self, records: list[MetricRecord]) -> list[Incompatibility]:
        incompatible = []
        for name, group in group_by_name(records).items():
            if len(group) < 2:
                continue

            profiles = [self.profile(record) for record in group]
            time_frames = {p.has_time_frame for p in profiles}
            denominators = {p.has_denominator for p in profiles}

            if len(time_frames) > 1:
                reason = INCOMPATIBLE_TIME_FRAMES
            elif len(denominators) > 1:
                reason = INCOMPATIBLE_CALCULATION
            else:
                continue

            incompatible.append(Incompatibility(
                metric_name=name,
                definitions=[
                    TeamDefinition(team=record.team, definition=record.definition)
                    for record in group
                ],
                reason=reason,
                profiles=profiles
            ))

        logger.debug("Detected %d incompatible metric names", len(incompatible))
        return incompatible


class OverlappingDefinitionDetector:
    """Pairs of metrics that look like the same concept under another name."""

    def __init__(
        self,
        similar_names: tuple[tuple[str, str], ...] = SIMILAR_NAME_PAIRS,
        scope_rules=SHARED_SCOPE_RULES
    ):
        self.similar_names = similar_names
        self.scope_rules = scope_rules

    def check(self, record_a: MetricRecord, record_b: MetricRecord):
        """Return the overlap issue for two records, or None."""
        name_a, name_b = record_a.name.lower(), record_b.name.lower()
        for term_a, term_b in self.similar_names:
            if (term_a in name_a and term_b in name_b) or (term_b in name_a and term_a in name_b):
                return f"Similar concepts: {term_a}/{term_b}"

        definition_a, definition_b = record_a.definition.lower(), record_b.definition.lower()
        for rule in self.scope_rules:
            if all(term in definition_a and term in definition_b for term in rule.terms):
                return rule.issue

        return None

    def detect(self, records: list[MetricRecord]) -> list[OverlappingDefinition]:
        overlapping = []
        for record_a, record_b in combinations(records, 2):
            issue = self.check(record_a, record_b)
            if issue:
                overlapping.append(OverlappingDefinition(
                    team_a=record_a.team,
                    metric_a=record_a.name,
                    team_b=record_b.team,
                    metric_b=record_b.name,
                    issue=issue
                ))
        return overlapping


class ConflictDetector:
    """
    Runs every conflict-style pass over one snapshot.

    detect() returns the vague / overlapping / incompatible report;
    concept_conflicts() feeds the alignment scorer.
    """

    def __init__(self):
        self.concepts = ConceptConflictDetector()
        self.incompatibilities = IncompatibilityDetector()
        self.overlapping = OverlappingDefinitionDetector()
        self.vagueness = VaguenessDetector()

    def concept_conflicts(self, records: list[MetricRecord]) -> list[Conflict]:
        return self.concepts.detect(records)

    def detect(self, records: list[MetricRecord]) -> ConflictReport:
        return ConflictReport(
            vague=self.vagueness.detect(records),
            overlapping=self.overlapping.detect(records),
            incompatible=self.incompatibilities.detect(records)
        )


def detect_conflicts(records: list[MetricRecord]) -> ConflictReport:
    """Vague, overlapping and incompatible definitions in a dataset."""
    return ConflictDetector().detect(records)
