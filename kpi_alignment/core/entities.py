"""
Core KPI Entities - System of Record

This module defines the fundamental entities the analysis layer operates
on. A loaded dataset is an ordered, immutable list of MetricRecords; every
analysis result is derived from that snapshot and never written back.

Entities:
- MetricRecord: one team's definition of a named metric
- FunnelStage: customer lifecycle position of a metric
- ConflictSeverity: categorical severity for family-level conflicts
"""

from dataclasses import dataclass
from enum import Enum


class FunnelStage(str, Enum):
    """
    Customer lifecycle stages used to position KPIs in the funnel.
    Unknown is the fallback when no classification rule matches.
    """
    AWARENESS = "Awareness"
    CONSIDERATION = "Consideration"
    CONVERSION = "Conversion"
    RETENTION = "Retention"
    UNKNOWN = "Unknown"


class ConflictSeverity(str, Enum):
    """Categorical severity, ordered Low < Medium < High."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]

    def escalate(self, other: "ConflictSeverity") -> "ConflictSeverity":
        """Return the higher of the two severities; never downgrades."""
        return other if other.rank > self.rank else self


_SEVERITY_RANK = {
    ConflictSeverity.LOW: 0,
    ConflictSeverity.MEDIUM: 1,
    ConflictSeverity.HIGH: 2,
}


@dataclass(frozen=True)
class MetricRecord:
    """
    A single team's definition of a metric.

    The same metric name may appear under several teams with different
    definitions; that is the situation the analysis is built to expose.
    """
    team: str = ""
    name: str = ""
    definition: str = ""

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the record: (team, metric name)."""
        return (self.team, self.name)

    @property
    def word_count(self) -> int:
        return len(self.definition.split())

    @classmethod
    def from_row(cls, row: dict) -> "MetricRecord":
        """Build a record from a parsed CSV row; absent columns become ''."""
        return cls(
            team=row.get("Team") or "",
            name=row.get("Metric_Name") or "",
            definition=row.get("Definition") or ""
        )


def unique_teams(records: list[MetricRecord]) -> list[str]:
    """Distinct team names in first-appearance order."""
    return list(dict.fromkeys(record.team for record in records))


def group_by_name(records: list[MetricRecord]) -> dict[str, list[MetricRecord]]:
    """Group records by exact metric name, preserving input order."""
    groups: dict[str, list[MetricRecord]] = {}
    for record in records:
        groups.setdefault(record.name, []).append(record)
    return groups
