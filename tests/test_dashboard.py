"""Tests for dashboard generation and alert rules."""
from __future__ import annotations

import pytest

from kpi_alignment.core.entities import MetricRecord
from kpi_alignment.layers.analysis import AlignmentEngine
from kpi_alignment.metrics import AlertEngine, AlertRule, AlertScope, AlertSeverity, DashboardGenerator


@pytest.fixture
def failing_records() -> list[MetricRecord]:
    records = [MetricRecord("Ops", "Active Users", "")]
    records += [MetricRecord("Product", f"Active {i}", "") for i in range(40)]
    return records


class TestDashboardGenerator:
    def test_healthy_dataset(self, active_user_records):
        report = AlignmentEngine().load(active_user_records)
        dashboard = DashboardGenerator().generate_dashboard(report)

        assert dashboard.record_count == 2
        assert dashboard.teams == ["Sales", "Marketing"]
        assert dashboard.average_score == pytest.approx(93.0)
        assert dashboard.overall_health == "excellent"
        assert dashboard.improvement_areas == []
        assert dashboard.cross_team_reviews == [{"teams": ["Marketing", "Sales"], "overlaps": 1}]
        assert dashboard.finding_counts["incompatible"] == 1
        assert dashboard.funnel_chart.labels[-1] == "Unknown"
        assert dashboard.funnel_chart.overall == [0, 0, 0, 0, 2]

    def test_critical_dataset(self, failing_records):
        report = AlignmentEngine().load(failing_records)
        dashboard = DashboardGenerator().generate_dashboard(report)

        assert dashboard.overall_health == "critical"
        assert [area["team"] for area in dashboard.improvement_areas] == ["Ops", "Product"]
        assert dashboard.improvement_areas[0]["gap"] == pytest.approx(70.0)

    def test_empty_dataset(self):
        dashboard = DashboardGenerator().generate_dashboard(AlignmentEngine().load([]))
        assert dashboard.overall_health == "unknown"
        assert dashboard.team_scores == []

    def test_format_summary(self, active_user_records):
        generator = DashboardGenerator()
        text = generator.format_summary(
            generator.generate_dashboard(AlignmentEngine().load(active_user_records))
        )
        assert "Overall Health: EXCELLENT" in text
        assert "Marketing: 94.0/100 - Well-aligned metrics" in text
        assert "Funnel Stages:" in text
        assert "Marketing and Sales: 1 overlapping metrics" in text
        assert "[WARNING] Incompatible Definitions (dataset)" in text
        assert "Teams Needing Attention:" not in text


class TestAlertEngine:
    def test_dataset_alerts(self, active_user_records):
        alerts = AlertEngine().evaluate(AlignmentEngine().load(active_user_records))
        assert [(a.rule_name, a.severity) for a in alerts] == [
            ("Incompatible Definitions", AlertSeverity.WARNING),
            ("Vague Definitions", AlertSeverity.INFO),
        ]
        assert alerts[0].current_value == 1

    def test_low_scores_are_critical_first(self, failing_records):
        alerts = AlertEngine().evaluate(AlignmentEngine().load(failing_records))
        assert [(a.severity, a.subject) for a in alerts[:4]] == [
            (AlertSeverity.CRITICAL, "Ops"),
            (AlertSeverity.CRITICAL, "Product"),
            (AlertSeverity.WARNING, "Ops"),
            (AlertSeverity.WARNING, "Product"),
        ]
        assert "fell below threshold with 0.0" in alerts[0].message

        summary = AlertEngine().get_alert_summary(alerts)
        assert summary["by_severity"] == {"critical": 2, "warning": 2, "info": 1}
        assert summary["by_subject"]["dataset"] == 1

    def test_custom_rule(self, active_user_records):
        engine = AlertEngine()
        rule = AlertRule(
            name="Any Overlap",
            scope=AlertScope.TEAM,
            measure=lambda team_score: len(team_score.overlaps),
            condition="gte",
            threshold=1,
            severity=AlertSeverity.INFO
        )
        engine.add_rule(rule)
        alerts = engine.evaluate(AlignmentEngine().load(active_user_records))
        assert {a.subject for a in alerts if a.rule_name == "Any Overlap"} == {"Marketing", "Sales"}

        assert engine.remove_rule(rule.id)
        assert not engine.remove_rule(rule.id)
        assert len(engine.rules) == 4

    def test_disabled_rules_are_skipped(self, active_user_records):
        engine = AlertEngine()
        for rule in engine.rules:
            rule.enabled = False
        assert engine.evaluate(AlignmentEngine().load(active_user_records)) == []
