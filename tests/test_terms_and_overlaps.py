"""Tests for term extraction and cross-team overlap detection."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

from kpi_alignment.core.entities import MetricRecord
from kpi_alignment.layers.analysis.overlaps import OverlapDetector, detect_overlaps
from kpi_alignment.layers.analysis.schemas import Overlap
from kpi_alignment.layers.analysis.terms import TermExtractor, extract_terms


class TestTermExtractor:
    def test_extracts_vocabulary_terms(self):
        terms = extract_terms("Active user with one session per trial")
        assert terms == frozenset({"active", "user", "session", "trial"})

    def test_case_and_order_invariant(self):
        assert extract_terms("Active User session") == extract_terms("session user ACTIVE")

    def test_whole_word_only(self):
        assert extract_terms("Users in the userbase") == frozenset()

    def test_deduplicates(self):
        assert extract_terms("user user USER") == frozenset({"user"})

    def test_empty_definition(self):
        assert extract_terms("") == frozenset()

    def test_idempotent(self):
        extractor = TermExtractor()
        definition = "Net revenue per customer account with NPS above 50"
        assert extractor.extract(definition) == extractor.extract(definition)
        assert extractor.extract(definition) == frozenset({"revenue", "customer", "account", "nps"})


class TestOverlapDetector:
    def test_detects_overlap_between_teams(self, active_user_records):
        overlaps = detect_overlaps(active_user_records)
        assert len(overlaps) == 1
        overlap = overlaps[0]
        assert overlap.common_terms == ("user",)
        assert overlap.severity == pytest.approx(1.0)

    def test_pair_is_canonicalised(self, active_user_records):
        overlap = detect_overlaps(active_user_records)[0]
        assert (overlap.team_a, overlap.team_b) == ("Marketing", "Sales")

    def test_input_order_does_not_matter(self, active_user_records):
        forward = detect_overlaps(active_user_records)
        backward = detect_overlaps(list(reversed(active_user_records)))
        assert forward == backward

    def test_severity_is_symmetric(self):
        detector = OverlapDetector()
        a = MetricRecord("A", "m1", "user session click")
        b = MetricRecord("B", "m2", "user session revenue churn")
        assert detector.score_pair(a, b) == detector.score_pair(b, a)
        common, severity = detector.score_pair(a, b)
        assert common == frozenset({"user", "session"})
        assert severity == pytest.approx(0.5)

    def test_threshold_is_exclusive(self):
        records = [
            MetricRecord("A", "Wide", "user feature session click active"),
            MetricRecord("B", "Narrow", "user"),
        ]
        # 1 / 5 == 0.2 is not above the threshold
        assert detect_overlaps(records) == []

    def test_custom_threshold(self):
        records = [
            MetricRecord("A", "m1", "user session click"),
            MetricRecord("B", "m2", "user session revenue churn"),
        ]
        assert len(OverlapDetector(severity_threshold=0.4).detect(records)) == 1
        assert OverlapDetector(severity_threshold=0.5).detect(records) == []

    def test_same_team_not_compared(self):
        records = [
            MetricRecord("Sales", "m1", "user session"),
            MetricRecord("Sales", "m2", "user session"),
        ]
        assert detect_overlaps(records) == []

    def test_no_shared_terms(self):
        records = [
            MetricRecord("A", "m1", "revenue per account"),
            MetricRecord("B", "m2", "tickets closed by support"),
        ]
        assert detect_overlaps(records) == []

    def test_empty_input(self):
        assert detect_overlaps([]) == []

    def test_involving_either_side(self, active_user_records):
        overlaps = detect_overlaps(active_user_records)
        assert OverlapDetector.involving(overlaps, "Sales") == overlaps
        assert OverlapDetector.involving(overlaps, "Marketing") == overlaps
        assert OverlapDetector.involving(overlaps, "Finance") == []


class TestOverlapSchema:
    def test_reversed_keeps_pair_key_and_severity(self, active_user_records):
        overlap = detect_overlaps(active_user_records)[0]
        flipped = overlap.reversed()
        assert flipped.team_a == overlap.team_b
        assert flipped.metric_a == overlap.metric_b
        assert flipped.severity == overlap.severity
        assert flipped.pair_key == overlap.pair_key

    def test_dedup_by_pair_key_collapses_directions(self, active_user_records):
        overlap = detect_overlaps(active_user_records)[0]
        unique = {o.pair_key: o for o in [overlap, overlap.reversed()]}
        assert len(unique) == 1

    def test_severity_must_be_positive(self):
        with pytest.raises(ValidationError):
            Overlap(
                team_a="A", metric_a="m1", team_b="B", metric_b="m2",
                common_terms=(), severity=0.0
            )
