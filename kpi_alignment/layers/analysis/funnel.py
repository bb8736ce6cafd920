"""
Funnel Classification

Places each metric in one customer lifecycle stage. Rules are evaluated in
priority order (Awareness, Consideration, Conversion, Retention) and the
first match wins; metrics matching none are Unknown.
"""

from ...core.entities import FunnelStage, MetricRecord, unique_teams
from ...core.vocabulary import (
    FUNNEL_RULES,
    FUNNEL_STAGE_ORDER,
    UNKNOWN_STAGE_DESCRIPTION,
    FunnelRule,
    contains_any
)
from .schemas import FunnelAssignment, StageBreakdown


class FunnelClassifier:
    """Keyword rule chain mapping metrics to funnel stages."""

    def __init__(self, rules: tuple[FunnelRule, ...] = FUNNEL_RULES):
        self.rules = rules

    def classify_record(self, record: MetricRecord) -> FunnelAssignment:
        for rule in self.rules:
            if (contains_any(record.definition, rule.definition_keywords)
                    or contains_any(record.name, rule.name_keywords)):
                return FunnelAssignment(stage=rule.stage, description=rule.description)
        return FunnelAssignment(
            stage=FunnelStage.UNKNOWN,
            description=UNKNOWN_STAGE_DESCRIPTION
        )

    def classify(self, records: list[MetricRecord]) -> dict[tuple[str, str], FunnelAssignment]:
        """Map (team, metric name) to its funnel assignment."""
        return {record.key: self.classify_record(record) for record in records}

    def stage_breakdown(
        self,
        records: list[MetricRecord],
        assignments: dict[tuple[str, str], FunnelAssignment] = None
    ) -> StageBreakdown:
        """Metric counts per stage, overall and per team (chart data)."""
        if assignments is None:
            assignments = self.classify(records)

        overall = [
            sum(1 for a in assignments.values() if a.stage == stage)
            for stage in FUNNEL_STAGE_ORDER
        ]

        by_team = {}
        for team in unique_teams(records):
            # One entry per (team, metric), as in the overall series
            team_stages = [
                assignment.stage
                for (assigned_team, _), assignment in assignments.items()
                if assigned_team == team
            ]
            by_team[team] = [team_stages.count(stage) for stage in FUNNEL_STAGE_ORDER]

        return StageBreakdown(
            stages=list(FUNNEL_STAGE_ORDER),
            overall=overall,
            by_team=by_team
        )


def classify_funnel(records: list[MetricRecord]) -> dict[tuple[str, str], FunnelAssignment]:
    return FunnelClassifier().classify(records)
