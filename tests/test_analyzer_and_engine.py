"""Tests for per-name analysis and the alignment engine."""
from __future__ import annotations

import pytest

from kpi_alignment import (
    AlignmentEngine,
    FunnelStage,
    MetricRecord,
    analyze,
    classify_funnel,
    detect_conflicts,
    score_alignment,
    synthesize_glossary
)
from kpi_alignment.config.settings import AnalysisConfig
from kpi_alignment.core.vocabulary import VOCABULARY_VERSION
from kpi_alignment.layers.analysis.analyzer import IMPLEMENTATION_STEPS
from kpi_alignment.layers.data_ingestion.loader import parse_kpi_csv


class TestKpiAnalyzer:
    def test_summaries_group_by_name(self, active_user_records, satisfaction_records):
        result = analyze(active_user_records + satisfaction_records)
        assert [s.metric_name for s in result.summaries] == ["Active User", "CSAT", "NPS"]

        active = result.summaries[0]
        assert active.teams == ["Sales", "Marketing"]
        assert active.has_multiple_definitions
        assert not result.summaries[1].has_multiple_definitions

    def test_conflict_for_shared_name(self, active_user_records):
        result = analyze(active_user_records)
        assert len(result.conflicts) == 1
        conflict = result.conflicts[0]
        assert conflict.metric_name == "Active User"
        assert [d.team for d in conflict.details] == ["Sales", "Marketing"]
        assert "2 teams" in conflict.description

    def test_identical_definitions_are_not_conflicts(self):
        records = [
            MetricRecord("Sales", "Pipeline", "Open deals in 90 days"),
            MetricRecord("Finance", "Pipeline", "Open deals in 90 days"),
        ]
        result = analyze(records)
        assert result.conflicts == []
        assert len(result.translations) == 1

    def test_translations_carry_funnel_context(self):
        records = [
            MetricRecord("Marketing", "Conversion", "Leads that become trials in 30 days"),
            MetricRecord("Sales", "Conversion", "Trials that purchase within 14 days"),
        ]
        translation = analyze(records).translations[0]
        contexts = {t.team: t.context for t in translation.team_translations}
        assert contexts == {"Marketing": "Consideration stage", "Sales": "Conversion stage"}
        assert translation.team_translations[1].meaning == "Trials that purchase within 14 days"

    def test_recommendation_prefers_clearest_definition(self, active_user_records):
        recommendation = analyze(active_user_records).recommendations[0]
        assert recommendation.source_team == "Marketing"
        assert recommendation.recommended_definition == "A user who logs in 3+ times in 30 days"
        assert recommendation.implementation_steps == IMPLEMENTATION_STEPS
        assert recommendation.alternative_names == []

    def test_recommendation_lists_alternative_names(self):
        records = [
            MetricRecord("Success", "Churn Rate", "Accounts lost in 30 days"),
            MetricRecord("Finance", "Churn Rate", "Revenue lost in 30 days"),
            MetricRecord("Product", "Retention Rate", "Accounts kept after 30 days"),
        ]
        recommendation = analyze(records).recommendations[0]
        assert recommendation.alternative_names == ["Retention Rate"]

    def test_empty_input(self):
        result = analyze([])
        assert result.summaries == []
        assert result.recommendations == []


class TestAlignmentEngine:
    def test_load_builds_full_report(self, sample_csv_text):
        records = parse_kpi_csv(sample_csv_text)
        report = AlignmentEngine().load(records)

        assert report.records == tuple(records)
        assert report.vocabulary_version == VOCABULARY_VERSION
        assert report.counts.records == len(records)
        assert report.counts.teams == len(report.teams)
        assert {s.team for s in report.scores} == set(report.teams)
        assert len(report.funnel) == len({r.key for r in records})
        assert sum(report.stage_breakdown.overall) == len(report.funnel)
        assert all(0.0 <= s.score <= 100.0 for s in report.scores)

    def test_matches_standalone_operations(self, sample_csv_text):
        records = parse_kpi_csv(sample_csv_text)
        report = AlignmentEngine().load(records)

        assert report.analysis == analyze(records)
        assert report.conflicts == detect_conflicts(records)
        assert report.funnel == classify_funnel(records)
        assert report.glossary == synthesize_glossary(records)
        assert [(s.team, s.score) for s in report.scores] == [
            (s.team, s.score) for s in score_alignment(records)
        ]

    def test_reload_leaves_previous_report_untouched(self, active_user_records, satisfaction_records):
        engine = AlignmentEngine()
        first = engine.load(active_user_records)
        second = engine.load(satisfaction_records)

        assert [r.name for r in first.records] == ["Active User", "Active User"]
        assert first.teams == ["Sales", "Marketing"]
        assert second.teams == ["Support", "Success"]
        assert first.conflicts.incompatible and not second.conflicts.incompatible

    def test_report_lookups(self, active_user_records):
        report = AlignmentEngine().load(active_user_records)
        assert report.stage_of("Sales", "Active User") == FunnelStage.UNKNOWN
        assert report.stage_of("Nobody", "Nothing") == FunnelStage.UNKNOWN
        assert report.score_for("Marketing").score == pytest.approx(94.0)
        assert report.score_for("Nobody") is None

    def test_engine_config_threshold(self, active_user_records):
        report = AlignmentEngine(AnalysisConfig(overlap_severity_threshold=0.99)).load(
            active_user_records
        )
        # severity 1.0 is still above 0.99
        assert report.counts.overlaps == 1

    def test_empty_snapshot(self):
        report = AlignmentEngine().load([])
        assert report.scores == []
        assert report.glossary == []
        assert report.conflicts.is_clean
        assert report.counts.records == 0
