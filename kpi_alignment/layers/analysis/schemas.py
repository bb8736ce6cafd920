"""
Pydantic Schemas for Analysis Results

These schemas define the structures handed to the presentation layer. Each
analysis pass returns instances of these models, so the dashboard and the
exporters receive validated, JSON-serialisable data.
"""

from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, computed_field

from ...core.entities import ConflictSeverity, FunnelStage


class FrozenModel(BaseModel):
    """Results are snapshots; they are never mutated after creation."""
    model_config = ConfigDict(frozen=True)


class TeamDefinition(FrozenModel):
    """A team's wording of a metric."""
    team: str
    definition: str


# =============================================================================
# Overlap Schemas
# =============================================================================

class Overlap(FrozenModel):
    """
    Lexical overlap between two metrics owned by different teams.

    Undirected: generated once per pair with team_a < team_b.
    """
    team_a: str
    metric_a: str
    team_b: str
    metric_b: str
    common_terms: Tuple[str, ...] = Field(
        description="Vocabulary terms both definitions share, sorted"
    )
    severity: float = Field(
        gt=0.0, le=1.0,
        description="Shared terms over the larger of the two term sets"
    )

    @property
    def pair_key(self) -> frozenset:
        return frozenset({(self.team_a, self.metric_a), (self.team_b, self.metric_b)})

    @property
    def teams(self) -> Tuple[str, str]:
        return (self.team_a, self.team_b)

    def involves(self, team: str) -> bool:
        return team in (self.team_a, self.team_b)

    def reversed(self) -> "Overlap":
        """The same fact seen from the other team's side."""
        return Overlap(
            team_a=self.team_b,
            metric_a=self.metric_b,
            team_b=self.team_a,
            metric_b=self.metric_a,
            common_terms=self.common_terms,
            severity=self.severity
        )


# =============================================================================
# Conflict Schemas
# =============================================================================

class Conflict(FrozenModel):
    """Two teams' metrics that fall into the same concept bucket."""
    concept: str
    team_a: str
    metric_a: str
    definition_a: str
    team_b: str
    metric_b: str
    definition_b: str

    @property
    def pair_key(self) -> Tuple[str, frozenset]:
        return (self.concept, self.metrics_key)

    @property
    def metrics_key(self) -> frozenset:
        """The two (team, metric) records regardless of concept."""
        return frozenset({(self.team_a, self.metric_a), (self.team_b, self.metric_b)})

    def involves(self, team: str) -> bool:
        return team in (self.team_a, self.team_b)


class MethodologyProfile(FrozenModel):
    """Methodology signals read from one definition."""
    team: str
    has_time_frame: bool
    has_exclusions: bool
    has_denominator: bool
    has_or: bool
    has_threshold: bool


class Incompatibility(FrozenModel):
    """A metric name whose definitions disagree on methodology."""
    metric_name: str
    definitions: List[TeamDefinition]
    reason: str = Field(
        description="'Inconsistent time frames' or 'Different calculation methods'"
    )
    profiles: List[MethodologyProfile] = Field(default_factory=list)


class VagueDefinition(FrozenModel):
    """A definition that lacks measurable criteria."""
    team: str
    metric_name: str
    definition: str
    reasons: List[str]

    @computed_field
    @property
    def issue(self) -> str:
        return "; ".join(self.reasons)


class OverlappingDefinition(FrozenModel):
    """Two metrics that appear to measure a similar concept."""
    team_a: str
    metric_a: str
    team_b: str
    metric_b: str
    issue: str


class ConflictReport(FrozenModel):
    """Output of detect_conflicts."""
    vague: List[VagueDefinition] = Field(default_factory=list)
    overlapping: List[OverlappingDefinition] = Field(default_factory=list)
    incompatible: List[Incompatibility] = Field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.vague or self.overlapping or self.incompatible)


# =============================================================================
# Funnel Schemas
# =============================================================================

class FunnelAssignment(FrozenModel):
    """The lifecycle stage assigned to one metric."""
    stage: FunnelStage
    description: str


class StageBreakdown(FrozenModel):
    """Metric counts per funnel stage, overall and per team."""
    stages: List[FunnelStage]
    overall: List[int]
    by_team: Dict[str, List[int]] = Field(default_factory=dict)


# =============================================================================
# Scoring Schemas
# =============================================================================

class TeamAlignmentScore(FrozenModel):
    """How well one team's KPIs align with everyone else's."""
    team: str
    score: float = Field(ge=0.0, le=100.0)
    overlaps: List[Overlap] = Field(default_factory=list)
    conflicts: List[Conflict] = Field(default_factory=list)
    clear_definitions: int = 0
    rating: str = ""
    badge: ConflictSeverity = ConflictSeverity.LOW


class TeamPairOverlap(FrozenModel):
    """Number of overlaps between two teams."""
    teams: Tuple[str, str]
    count: int


# =============================================================================
# Glossary Schemas
# =============================================================================

class FamilyConflictSummary(FrozenModel):
    """Severity-ranked conflict summary for a metric family."""
    types: List[str] = Field(default_factory=list)
    severity: ConflictSeverity = ConflictSeverity.LOW
    description: str = "No significant conflicts detected."
    recommendation: str = ""


class MetricFamily(FrozenModel):
    """A glossary entry grouping related metrics under one standard."""
    name: str
    keywords: List[str]
    metrics: List[str]
    teams: List[str]
    standard_definition: str
    conflict_summary: FamilyConflictSummary
    team_translations: Dict[str, List[str]] = Field(
        default_factory=dict,
        description="Family metrics each team owns"
    )


# =============================================================================
# Per-name Analysis Schemas
# =============================================================================

class MetricSummary(FrozenModel):
    """Every team's definition of a single metric name."""
    metric_name: str
    teams: List[str]
    definitions: List[TeamDefinition]

    @computed_field
    @property
    def has_multiple_definitions(self) -> bool:
        return len(self.teams) > 1


class NameConflict(FrozenModel):
    """A metric name defined differently by several teams."""
    metric_name: str
    description: str
    details: List[TeamDefinition]
    impact: str


class TeamTranslation(FrozenModel):
    """What a metric name means to one team."""
    team: str
    context: str
    meaning: str


class MetricTranslation(FrozenModel):
    metric_name: str
    team_translations: List[TeamTranslation]


class Recommendation(FrozenModel):
    """A proposed unified definition for a shared metric name."""
    metric_name: str
    recommended_definition: str
    source_team: str
    alternative_names: List[str] = Field(default_factory=list)
    implementation_steps: List[str] = Field(default_factory=list)


class AnalysisResult(FrozenModel):
    """Output of analyze."""
    summaries: List[MetricSummary] = Field(default_factory=list)
    conflicts: List[NameConflict] = Field(default_factory=list)
    translations: List[MetricTranslation] = Field(default_factory=list)
    recommendations: List[Recommendation] = Field(default_factory=list)


class ReportCounts(FrozenModel):
    records: int = 0
    teams: int = 0
    overlaps: int = 0
    conflicts: int = 0
    vague: int = 0
    incompatible: int = 0
    families: int = 0


class AlignmentSummary(FrozenModel):
    """Dataset-level rollups used by the scorecard."""
    all_overlaps: List[Overlap] = Field(default_factory=list)
    all_conflicts: List[Conflict] = Field(default_factory=list)
    team_pairs: List[TeamPairOverlap] = Field(default_factory=list)
    teams_needing_attention: List[str] = Field(default_factory=list)
    average_score: Optional[float] = None
