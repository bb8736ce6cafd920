"""
Dashboard Data Generation

Generates data for the alignment dashboard from an analysis report.
"""

from dataclasses import dataclass, field
from datetime import datetime
import statistics

from ..config.settings import AnalysisConfig
from ..layers.analysis.engine import AlignmentReport
from .alerts import AlertEngine


@dataclass
class FunnelChartData:
    """Bar chart series for the funnel view."""
    labels: list = field(default_factory=list)
    overall: list = field(default_factory=list)
    by_team: dict = field(default_factory=dict)


@dataclass
class DashboardData:
    """Complete dashboard data snapshot."""
    generated_at: datetime = field(default_factory=datetime.now)

    # Dataset
    record_count: int = 0
    teams: list = field(default_factory=list)

    # Scorecard
    team_scores: list = field(default_factory=list)
    average_score: float = 0.0

    # Funnel
    funnel_chart: FunnelChartData = field(default_factory=FunnelChartData)

    # Findings
    finding_counts: dict = field(default_factory=dict)
    top_overlaps: list = field(default_factory=list)
    cross_team_reviews: list = field(default_factory=list)

    # Alerts
    active_alerts: list = field(default_factory=list)

    # Summary
    overall_health: str = "unknown"  # excellent, good, warning, critical
    improvement_areas: list = field(default_factory=list)


class DashboardGenerator:
    """Generates dashboard data from an alignment report."""

    def __init__(self, config: AnalysisConfig = None, alert_engine: AlertEngine = None):
        self.config = config or AnalysisConfig()
        self._alerts = alert_engine or AlertEngine(self.config)

    def generate_dashboard(self, report: AlignmentReport, top_n: int = 10) -> DashboardData:
        """Generate complete dashboard data."""
        dashboard = DashboardData()
        dashboard.generated_at = report.generated_at
        dashboard.record_count = len(report.records)
        dashboard.teams = report.teams

        # Scorecard
        for team_score in report.scores:
            dashboard.team_scores.append({
                "team": team_score.team,
                "score": team_score.score,
                "rating": team_score.rating,
                "badge": team_score.badge.value,
                "overlaps": len(team_score.overlaps),
                "conflicts": len(team_score.conflicts)
            })
        if report.scores:
            dashboard.average_score = statistics.mean(s.score for s in report.scores)

        # Funnel chart
        if report.stage_breakdown is not None:
            dashboard.funnel_chart = FunnelChartData(
                labels=[stage.value for stage in report.stage_breakdown.stages],
                overall=list(report.stage_breakdown.overall),
                by_team=dict(report.stage_breakdown.by_team)
            )

        counts = report.counts
        dashboard.finding_counts = {
            "overlaps": counts.overlaps,
            "conflicts": counts.conflicts,
            "vague": counts.vague,
            "overlapping": len(report.conflicts.overlapping),
            "incompatible": counts.incompatible
        }

        dashboard.top_overlaps = report.alignment.all_overlaps[:top_n]
        dashboard.cross_team_reviews = [
            {"teams": list(pair.teams), "overlaps": pair.count}
            for pair in report.alignment.team_pairs[:3]
        ]

        dashboard.active_alerts = self._alerts.evaluate(report)
        dashboard.overall_health = self._calculate_health(report)
        dashboard.improvement_areas = self._identify_improvements(report)

        return dashboard

    def _calculate_health(self, report: AlignmentReport) -> str:
        """Calculate overall health status from the mean team score."""
        if not report.scores:
            return "unknown"

        average = statistics.mean(s.score for s in report.scores)

        if average >= 90:
            return "excellent"
        elif average >= self.config.well_aligned_score:
            return "good"
        elif average >= self.config.partially_aligned_score:
            return "warning"
        else:
            return "critical"

    def _identify_improvements(self, report: AlignmentReport) -> list:
        """Teams below the attention threshold, worst first."""
        improvements = []

        for team_score in report.scores:
            if team_score.score < self.config.attention_score:
                improvements.append({
                    "team": team_score.team,
                    "score": team_score.score,
                    "overlaps": len(team_score.overlaps),
                    "conflicts": len(team_score.conflicts),
                    "gap": self.config.attention_score - team_score.score
                })

        # Sort by gap size
        improvements.sort(key=lambda x: x["gap"], reverse=True)

        return improvements

    def format_summary(self, dashboard: DashboardData) -> str:
        """Format dashboard as text summary."""
        lines = [
            f"KPI Alignment Summary ({dashboard.generated_at.strftime('%Y-%m-%d %H:%M')})",
            f"Overall Health: {dashboard.overall_health.upper()}",
            f"Definitions: {dashboard.record_count} across {len(dashboard.teams)} teams",
            "",
            "Team Scores:"
        ]

        for entry in dashboard.team_scores:
            lines.append(
                f"  {entry['team']}: {entry['score']:.1f}/100 - {entry['rating']} "
                f"(overlaps: {entry['overlaps']}, conflicts: {entry['conflicts']})"
            )

        if dashboard.funnel_chart.labels:
            lines.extend(["", "Funnel Stages:"])
            for label, count in zip(dashboard.funnel_chart.labels, dashboard.funnel_chart.overall):
                lines.append(f"  {label}: {count}")

        if dashboard.improvement_areas:
            lines.extend(["", "Teams Needing Attention:"])
            for area in dashboard.improvement_areas[:3]:
                lines.append(
                    f"  - {area['team']}: {area['score']:.1f} "
                    f"(address {area['overlaps']} overlaps and {area['conflicts']} conflicts)"
                )

        if dashboard.cross_team_reviews:
            lines.extend(["", "Recommended Cross-Team Reviews:"])
            for review in dashboard.cross_team_reviews:
                lines.append(
                    f"  - {review['teams'][0]} and {review['teams'][1]}: "
                    f"{review['overlaps']} overlapping metrics"
                )

        if dashboard.active_alerts:
            lines.extend(["", "Alerts:"])
            for alert in dashboard.active_alerts:
                lines.append(f"  [{alert.severity.value.upper()}] {alert.message}")

        return "\n".join(lines)
