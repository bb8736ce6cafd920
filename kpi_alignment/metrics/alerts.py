"""
Alert Engine

Evaluates threshold rules over an alignment report and raises alerts for
the dashboard.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional
from uuid import UUID, uuid4

from ..config.settings import AnalysisConfig
from ..layers.analysis.engine import AlignmentReport


class AlertSeverity(Enum):
    """Alert severity levels."""
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class AlertScope(Enum):
    """What a rule measures."""
    TEAM = "team"        # evaluated once per team score
    DATASET = "dataset"  # evaluated once per report


@dataclass
class AlertRule:
    """Definition of an alert rule."""
    id: UUID = field(default_factory=uuid4)
    name: str = ""
    description: str = ""
    scope: AlertScope = AlertScope.TEAM

    # Value read from the report (team score or report)
    measure: Optional[Callable] = None

    # Threshold
    condition: str = "gt"  # gt, lt, gte, lte, eq
    threshold: float = 0.0

    severity: AlertSeverity = AlertSeverity.WARNING
    enabled: bool = True


@dataclass
class Alert:
    """A raised alert."""
    id: UUID = field(default_factory=uuid4)
    rule_id: UUID = field(default_factory=uuid4)
    rule_name: str = ""
    subject: str = ""  # team name, or "dataset"

    severity: AlertSeverity = AlertSeverity.WARNING
    message: str = ""
    current_value: float = 0.0
    threshold: float = 0.0

    triggered_at: datetime = field(default_factory=datetime.now)


class AlertEngine:
    """
    Engine for turning alignment findings into alerts.

    Alerts when:
    - A team's score shows significant alignment problems
    - A team needs immediate attention
    - Vague or incompatible definitions exist
    """

    def __init__(self, config: AnalysisConfig = None):
        self.config = config or AnalysisConfig()
        self._rules: dict[str, AlertRule] = {}

        self._initialize_default_rules()

    def _initialize_default_rules(self) -> None:
        """Create default alert rules."""
        default_rules = [
            AlertRule(
                name="Significant Alignment Problems",
                description="Team score is in the lowest band",
                scope=AlertScope.TEAM,
                measure=lambda team_score: team_score.score,
                condition="lt",
                threshold=self.config.partially_aligned_score,
                severity=AlertSeverity.CRITICAL
            ),
            AlertRule(
                name="Needs Immediate Attention",
                description="Team score below attention threshold",
                scope=AlertScope.TEAM,
                measure=lambda team_score: team_score.score,
                condition="lt",
                threshold=self.config.attention_score,
                severity=AlertSeverity.WARNING
            ),
            AlertRule(
                name="Incompatible Definitions",
                description="Metric names defined with different methodologies",
                scope=AlertScope.DATASET,
                measure=lambda report: len(report.conflicts.incompatible),
                condition="gt",
                threshold=0,
                severity=AlertSeverity.WARNING
            ),
            AlertRule(
                name="Vague Definitions",
                description="Definitions without measurable criteria",
                scope=AlertScope.DATASET,
                measure=lambda report: len(report.conflicts.vague),
                condition="gt",
                threshold=0,
                severity=AlertSeverity.INFO
            )
        ]

        for rule in default_rules:
            self.add_rule(rule)

    def add_rule(self, rule: AlertRule) -> None:
        """Add an alert rule."""
        self._rules[str(rule.id)] = rule

    def remove_rule(self, rule_id: UUID) -> bool:
        """Remove an alert rule."""
        key = str(rule_id)
        if key in self._rules:
            del self._rules[key]
            return True
        return False

    @property
    def rules(self) -> list[AlertRule]:
        return list(self._rules.values())

    def evaluate(self, report: AlignmentReport) -> list[Alert]:
        """Evaluate all rules against a report, most severe first."""
        alerts = []

        for rule in self._rules.values():
            if not rule.enabled or rule.measure is None:
                continue

            if rule.scope == AlertScope.TEAM:
                subjects = [(s.team, rule.measure(s)) for s in report.scores]
            else:
                subjects = [("dataset", rule.measure(report))]

            for subject, value in subjects:
                if self._check_condition(value, rule.condition, rule.threshold):
                    alerts.append(self._create_alert(rule, subject, value))

        # Sort by severity (critical first) then by subject
        severity_order = {
            AlertSeverity.CRITICAL: 0,
            AlertSeverity.WARNING: 1,
            AlertSeverity.INFO: 2
        }
        alerts.sort(key=lambda a: (severity_order[a.severity], a.subject))

        return alerts

    def _check_condition(self, value: float, condition: str, threshold: float) -> bool:
        """Check if condition is met."""
        if condition == "gt":
            return value > threshold
        elif condition == "lt":
            return value < threshold
        elif condition == "gte":
            return value >= threshold
        elif condition == "lte":
            return value <= threshold
        elif condition == "eq":
            return abs(value - threshold) < 0.001
        return False

    def _create_alert(self, rule: AlertRule, subject: str, current_value: float) -> Alert:
        """Create an alert from a triggered rule."""
        condition_text = {
            "gt": "exceeded",
            "lt": "fell below",
            "gte": "reached or exceeded",
            "lte": "reached or fell below",
            "eq": "equals"
        }

        message = (
            f"{rule.name} ({subject}): {condition_text.get(rule.condition, 'breached')} "
            f"threshold with {current_value:.1f} (threshold: {rule.threshold:.1f})"
        )

        return Alert(
            rule_id=rule.id,
            rule_name=rule.name,
            subject=subject,
            severity=rule.severity,
            message=message,
            current_value=current_value,
            threshold=rule.threshold
        )

    def get_alert_summary(self, alerts: list[Alert]) -> dict:
        """Get summary of raised alerts."""
        return {
            "total": len(alerts),
            "by_severity": {
                "critical": sum(1 for a in alerts if a.severity == AlertSeverity.CRITICAL),
                "warning": sum(1 for a in alerts if a.severity == AlertSeverity.WARNING),
                "info": sum(1 for a in alerts if a.severity == AlertSeverity.INFO)
            },
            "by_subject": {
                subject: sum(1 for a in alerts if a.subject == subject)
                for subject in set(a.subject for a in alerts)
            }
        }
