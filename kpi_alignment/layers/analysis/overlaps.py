"""
Overlap Detection

Compares every metric of one team with every metric of another and scores
how much vocabulary their definitions share:

    severity = |common terms| / max(|terms A|, |terms B|)

Only overlaps above the configured threshold are reported. Each undirected
pair of metrics is generated once, with the lexicographically smaller team
on side A, so counting and display need no later deduplication.
"""

from itertools import combinations
import logging

from ...core.entities import MetricRecord, unique_teams
from .schemas import Overlap
from .terms import TermExtractor

logger = logging.getLogger(__name__)


class OverlapDetector:
    """Pairwise lexical overlap between metrics of different teams."""

    def __init__(
        self,
        severity_threshold: float = 0.2,
        extractor: TermExtractor = None
    ):
        self.severity_threshold = severity_threshold
        self._extractor = extractor or TermExtractor()

    def score_pair(
        self,
        record_a: MetricRecord,
        record_b: MetricRecord
    ) -> tuple[frozenset[str], float]:
        """Return (common terms, severity) for two records; severity 0 if unrelated."""
        terms_a = self._extractor.extract(record_a.definition)
        terms_b = self._extractor.extract(record_b.definition)
        common = terms_a & terms_b
        if not common:
            return (frozenset(), 0.0)
        return (common, len(common) / max(len(terms_a), len(terms_b)))

    def detect(self, records: list[MetricRecord]) -> list[Overlap]:
        """Find all significant overlaps across distinct teams."""
        by_team: dict[str, list[MetricRecord]] = {}
        for record in records:
            by_team.setdefault(record.team, []).append(record)

        overlaps = []
        for team_a, team_b in combinations(sorted(unique_teams(records)), 2):
            for record_a in by_team[team_a]:
                for record_b in by_team[team_b]:
                    common, severity = self.score_pair(record_a, record_b)
                    if severity <= self.severity_threshold:
                        continue
                    overlaps.append(Overlap(
                        team_a=team_a,
                        metric_a=record_a.name,
                        team_b=team_b,
                        metric_b=record_b.name,
                        common_terms=tuple(sorted(common)),
                        severity=severity
                    ))

        logger.debug("Detected %d overlaps across %d teams", len(overlaps), len(by_team))
        return overlaps

    @staticmethod
    def involving(overlaps: list[Overlap], team: str) -> list[Overlap]:
        """Overlaps in which the team takes part, on either side."""
        return [overlap for overlap in overlaps if overlap.involves(team)]


def detect_overlaps(records: list[MetricRecord], severity_threshold: float = 0.2) -> list[Overlap]:
    return OverlapDetector(severity_threshold).detect(records)
