#!/usr/bin/env python3
"""
KPI Alignment Tool - Main Demo

Loads team KPI definitions and runs the full alignment analysis:
1. Loads the KPI table (local CSV or URL from settings)
2. Runs every analysis pass
3. Prints the dashboard summary, conflicts and glossary
4. Optionally exports the report as JSON and the glossary as CSV

Usage:
    python main.py [source] [--export-dir DIR]
"""

from pathlib import Path
import argparse
import logging
import sys

from kpi_alignment.config import configure_logging, get_settings
from kpi_alignment.exceptions import DataUnavailableError
from kpi_alignment.layers.analysis import AlignmentEngine
from kpi_alignment.layers.data_ingestion import (
    KpiCsvLoader,
    export_glossary_csv,
    export_report_json
)
from kpi_alignment.metrics import DashboardGenerator

logger = logging.getLogger("kpi_alignment.main")


def print_conflicts(report):
    """Print the conflict analysis section."""
    print("=" * 60)
    print("KPI CONFLICT ANALYSIS")
    print("=" * 60)
    print()

    conflicts = report.conflicts
    if conflicts.is_clean:
        print("No conflicts detected in the KPI definitions.")
        print()
        return

    if conflicts.vague:
        print(f"Vague Definitions ({len(conflicts.vague)}):")
        for vague in conflicts.vague:
            print(f"  - {vague.team} - {vague.metric_name}: {vague.issue}")
        print()

    if conflicts.overlapping:
        print(f"Overlapping Definitions ({len(conflicts.overlapping)}):")
        for overlap in conflicts.overlapping:
            print(
                f"  - {overlap.team_a}: {overlap.metric_a} <> "
                f"{overlap.team_b}: {overlap.metric_b} ({overlap.issue})"
            )
        print()

    if conflicts.incompatible:
        print(f"Incompatible Definitions ({len(conflicts.incompatible)}):")
        for incompatible in conflicts.incompatible:
            print(f"  - {incompatible.metric_name}: {incompatible.reason}")
            for definition in incompatible.definitions:
                print(f"      {definition.team}: {definition.definition}")
        print()


def print_glossary(report):
    """Print the generated metric family glossary."""
    print("=" * 60)
    print("KPI GLOSSARY")
    print("=" * 60)
    print()

    for family in report.glossary:
        summary = family.conflict_summary
        print(f"{family.name} [{summary.severity.value} Conflict]")
        print(f"  {len(family.metrics)} metrics across {len(family.teams)} teams")
        print(f"  Standard: {family.standard_definition}")
        if summary.types:
            print(f"  Conflicts: {', '.join(summary.types)}")
            print(f"  Recommendation: {summary.recommendation}")
        print()


def main(argv=None) -> int:
    """Main entry point."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description=settings.app_name)
    parser.add_argument(
        "source",
        nargs="?",
        default=settings.data.url or settings.data.csv_path,
        help="CSV file path or URL with Team, Metric_Name, Definition columns"
    )
    parser.add_argument("--export-dir", type=Path, default=None)
    args = parser.parse_args(argv)

    configure_logging("DEBUG" if settings.debug else settings.log_level)

    loader = KpiCsvLoader(
        timeout=settings.data.fetch_timeout,
        encoding=settings.data.encoding
    )
    try:
        records = loader.load(args.source)
    except DataUnavailableError as exc:
        logger.error("%s", exc)
        print("Failed to load KPI data. Please try again later.")
        return 1

    engine = AlignmentEngine(settings.analysis)
    report = engine.load(records)

    dashboard_generator = DashboardGenerator(settings.analysis)
    dashboard = dashboard_generator.generate_dashboard(report)

    print()
    print("=" * 60)
    print(settings.app_name.upper())
    print("=" * 60)
    print()
    print(dashboard_generator.format_summary(dashboard))
    print()

    print_conflicts(report)
    print_glossary(report)

    if args.export_dir:
        args.export_dir.mkdir(parents=True, exist_ok=True)
        export_report_json(report, args.export_dir / "kpi_alignment_report.json")
        export_glossary_csv(report.glossary, args.export_dir / "kpi_glossary.csv")
        print(f"Exported report and glossary to {args.export_dir}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
