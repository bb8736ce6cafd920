"""Shared test fixtures for the KPI alignment test suite."""
from __future__ import annotations

from pathlib import Path

import pytest

from kpi_alignment.core.entities import MetricRecord

SAMPLE_CSV = Path(__file__).resolve().parent.parent / "sample_data" / "kpi_definitions.csv"


@pytest.fixture
def active_user_records() -> list[MetricRecord]:
    return [
        MetricRecord("Sales", "Active User", "A user who logs in at least once"),
        MetricRecord("Marketing", "Active User", "A user who logs in 3+ times in 30 days"),
    ]


@pytest.fixture
def satisfaction_records() -> list[MetricRecord]:
    return [
        MetricRecord("Support", "CSAT", "Customer satisfaction score based on survey responses"),
        MetricRecord("Success", "NPS", "Net promoter score from quarterly survey"),
    ]


@pytest.fixture
def churn_records() -> list[MetricRecord]:
    return [
        MetricRecord(
            "Success", "Churn Rate",
            "Accounts that cancel within 30 days / total accounts"
        ),
        MetricRecord(
            "Finance", "Churn Rate",
            "Lost revenue divided by starting revenue over 30 days"
        ),
    ]


@pytest.fixture
def sample_csv_path() -> Path:
    return SAMPLE_CSV


@pytest.fixture
def sample_csv_text() -> str:
    return SAMPLE_CSV.read_text(encoding="utf-8")
