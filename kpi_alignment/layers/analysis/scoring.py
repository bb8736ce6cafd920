"""
Alignment Scoring

Rolls overlaps and concept conflicts up into a 0-100 score per team:

    score = 100
          - overlap_count * overlap_penalty * mean_overlap_severity
          - conflict_count * conflict_penalty
          + clarity_bonus * definitions_longer_than_min_words

clamped to [0, 100]. Score bands drive the rating text and badge:
>= 80 well aligned, >= 60 some issues, otherwise significant problems.
"""

from collections import Counter
import logging
import statistics

from ...config.settings import AnalysisConfig
from ...core.entities import ConflictSeverity, MetricRecord, unique_teams
from .conflicts import ConceptConflictDetector
from .overlaps import OverlapDetector
from .schemas import (
    AlignmentSummary,
    Conflict,
    Overlap,
    TeamAlignmentScore,
    TeamPairOverlap
)

logger = logging.getLogger(__name__)

WELL_ALIGNED = "Well-aligned metrics"
SOME_ISSUES = "Some alignment issues"
SIGNIFICANT_PROBLEMS = "Significant alignment problems"


class AlignmentScorer:
    """Per-team alignment scores from overlap and conflict findings."""

    def __init__(self, config: AnalysisConfig = None):
        self.config = config or AnalysisConfig()

    def rating(self, score: float) -> str:
        if score >= self.config.well_aligned_score:
            return WELL_ALIGNED
        elif score >= self.config.partially_aligned_score:
            return SOME_ISSUES
        return SIGNIFICANT_PROBLEMS

    def badge(self, score: float) -> ConflictSeverity:
        if score >= self.config.well_aligned_score:
            return ConflictSeverity.LOW
        elif score >= self.config.partially_aligned_score:
            return ConflictSeverity.MEDIUM
        return ConflictSeverity.HIGH

    def score_team(
        self,
        team: str,
        records: list[MetricRecord],
        overlaps: list[Overlap],
        conflicts: list[Conflict]
    ) -> TeamAlignmentScore:
        """Score one team given the findings it takes part in."""
        score = 100.0

        if overlaps:
            mean_severity = statistics.mean(o.severity for o in overlaps)
            score -= len(overlaps) * self.config.overlap_penalty * mean_severity

        score -= len(conflicts) * self.config.conflict_penalty

        clear = sum(
            1 for record in records
            if record.team == team
            and record.word_count > self.config.clear_definition_min_words
        )
        score += clear * self.config.clarity_bonus

        score = max(0.0, min(100.0, score))

        return TeamAlignmentScore(
            team=team,
            score=score,
            overlaps=overlaps,
            conflicts=conflicts,
            clear_definitions=clear,
            rating=self.rating(score),
            badge=self.badge(score)
        )

    def score(
        self,
        records: list[MetricRecord],
        overlaps: list[Overlap] = None,
        conflicts: list[Conflict] = None
    ) -> list[TeamAlignmentScore]:
        """
        Score every team, highest first.

        Overlaps and conflicts are computed from the records when not
        supplied, so the scorer can run on its own.
        """
        if overlaps is None:
            overlaps = OverlapDetector(self.config.overlap_severity_threshold).detect(records)
        if conflicts is None:
            conflicts = ConceptConflictDetector().detect(records)

        scores = [
            self.score_team(
                team,
                records,
                OverlapDetector.involving(overlaps, team),
                ConceptConflictDetector.involving(conflicts, team)
            )
            for team in unique_teams(records)
        ]

        # sorted() is stable, so ties keep first-appearance order
        return sorted(scores, key=lambda s: s.score, reverse=True)

    def summarize(self, scores: list[TeamAlignmentScore]) -> AlignmentSummary:
        """Dataset-wide rollups: unique findings, busiest team pairs, teams at risk."""
        seen_overlaps: dict = {}
        seen_conflicts: dict = {}
        for team_score in scores:
            for overlap in team_score.overlaps:
                seen_overlaps.setdefault(overlap.pair_key, overlap)
            for conflict in team_score.conflicts:
                seen_conflicts.setdefault(conflict.metrics_key, conflict)

        all_overlaps = sorted(seen_overlaps.values(), key=lambda o: o.severity, reverse=True)

        pair_counts = Counter(tuple(sorted(o.teams)) for o in all_overlaps)
        team_pairs = [
            TeamPairOverlap(teams=pair, count=count)
            for pair, count in pair_counts.most_common()
        ]

        attention = sorted(
            (s for s in scores if s.score < self.config.attention_score),
            key=lambda s: s.score
        )

        return AlignmentSummary(
            all_overlaps=all_overlaps,
            all_conflicts=list(seen_conflicts.values()),
            team_pairs=team_pairs,
            teams_needing_attention=[s.team for s in attention],
            average_score=statistics.mean(s.score for s in scores) if scores else None
        )


def score_alignment(records: list[MetricRecord]) -> list[TeamAlignmentScore]:
    """Alignment scores for every team in the dataset, highest first."""
    return AlignmentScorer().score(records)
