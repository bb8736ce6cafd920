"""
Report Exporters

Writes analysis results to disk for sharing outside the dashboard:
- the full report as JSON
- the metric-family glossary as CSV
"""

from pathlib import Path
import csv
import json
import logging

from ..analysis.engine import AlignmentReport
from ..analysis.schemas import MetricFamily

logger = logging.getLogger(__name__)

GLOSSARY_COLUMNS = [
    "Family", "Standard_Definition", "Teams", "Metrics",
    "Conflict_Types", "Severity", "Recommendation",
]


def report_to_dict(report: AlignmentReport) -> dict:
    """JSON-ready view of a report."""
    return {
        "generated_at": report.generated_at.isoformat(),
        "vocabulary_version": report.vocabulary_version,
        "counts": report.counts.model_dump(),
        "records": [
            {"team": r.team, "metric_name": r.name, "definition": r.definition}
            for r in report.records
        ],
        "analysis": report.analysis.model_dump(mode="json"),
        "conflicts": report.conflicts.model_dump(mode="json"),
        "funnel": [
            {"team": team, "metric_name": name, **assignment.model_dump(mode="json")}
            for (team, name), assignment in report.funnel.items()
        ],
        "scores": [s.model_dump(mode="json") for s in report.scores],
        "alignment": report.alignment.model_dump(mode="json"),
        "glossary": [f.model_dump(mode="json") for f in report.glossary],
    }


def export_report_json(report: AlignmentReport, path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(report_to_dict(report), indent=2), encoding="utf-8")
    logger.info("Exported alignment report to %s", path)
    return path


def export_glossary_csv(families: list[MetricFamily], path) -> Path:
    path = Path(path)
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(GLOSSARY_COLUMNS)
        for family in families:
            summary = family.conflict_summary
            writer.writerow([
                family.name,
                family.standard_definition,
                "; ".join(family.teams),
                "; ".join(family.metrics),
                "; ".join(summary.types),
                summary.severity.value,
                summary.recommendation,
            ])
    logger.info("Exported glossary with %d families to %s", len(families), path)
    return path
