"""
Glossary Synthesis

Groups metrics into fixed semantic families (Engagement, Conversion,
Retention, Satisfaction, Product Usage, Financial), attaches the family's
standard definition, and summarises how contested each family is.

Membership is non-exclusive: a metric matching two families' keywords
belongs to both.
"""

import logging

from ...core.entities import ConflictSeverity, MetricRecord, group_by_name, unique_teams
from ...core.vocabulary import (
    METRIC_FAMILIES,
    TEAM_CONFLICT,
    DEFINITION_CONFLICT,
    FAMILY_RECOMMENDATIONS,
    DEFAULT_FAMILY_RECOMMENDATION,
    FamilyDefinition,
    mentions_any
)
from .schemas import FamilyConflictSummary, MetricFamily

logger = logging.getLogger(__name__)


class GlossarySynthesizer:
    """Builds the metric-family glossary for a dataset."""

    def __init__(self, families: tuple[FamilyDefinition, ...] = METRIC_FAMILIES):
        self.families = families

    def members(self, family: FamilyDefinition, records: list[MetricRecord]) -> list[MetricRecord]:
        return [record for record in records if mentions_any(record, family.keywords)]

    def summarize_conflicts(
        self,
        family: FamilyDefinition,
        members: list[MetricRecord]
    ) -> FamilyConflictSummary:
        """
        Rank how contested a family is.

        Several owning teams make a Medium "Team Conflict"; one metric name
        with differing definitions makes a High "Definition Conflict".
        """
        types = []
        severity = ConflictSeverity.LOW
        description = "No significant conflicts detected."

        teams = unique_teams(members)
        if len(teams) > 1:
            types.append(TEAM_CONFLICT)
            description = (
                f"Metrics within the {family.name} family are owned by "
                f"different teams: {', '.join(teams)}."
            )
            severity = severity.escalate(ConflictSeverity.MEDIUM)

        contested = [
            name for name, group in group_by_name(members).items()
            if len(group) > 1 and len({r.definition for r in group}) > 1
        ]
        if contested:
            types.append(DEFINITION_CONFLICT)
            for name in contested:
                description += f" '{name}' has different definitions across teams."
            severity = severity.escalate(ConflictSeverity.HIGH)

        if types:
            recommendation = FAMILY_RECOMMENDATIONS[types[0]]
        else:
            recommendation = DEFAULT_FAMILY_RECOMMENDATION

        return FamilyConflictSummary(
            types=types,
            severity=severity,
            description=description.strip(),
            recommendation=recommendation
        )

    def build_family(self, family: FamilyDefinition, members: list[MetricRecord]) -> MetricFamily:
        teams = unique_teams(members)
        translations = {
            team: list(dict.fromkeys(r.name for r in members if r.team == team))
            for team in teams
        }
        return MetricFamily(
            name=family.name,
            keywords=list(family.keywords),
            metrics=list(dict.fromkeys(r.name for r in members)),
            teams=teams,
            standard_definition=family.standard_definition,
            conflict_summary=self.summarize_conflicts(family, members),
            team_translations=translations
        )

    def synthesize(self, records: list[MetricRecord]) -> list[MetricFamily]:
        """Families with at least one member, in fixed family order."""
        glossary = []
        for family in self.families:
            members = self.members(family, records)
            if members:
                glossary.append(self.build_family(family, members))

        logger.debug("Glossary has %d populated families", len(glossary))
        return glossary


def synthesize_glossary(records: list[MetricRecord]) -> list[MetricFamily]:
    return GlossarySynthesizer().synthesize(records)
