"""
Data Ingestion and Export

Ingestion:
- KPI definition tables from text, files or URLs

Export:
- Full alignment report as JSON
- Metric family glossary as CSV
"""

from .loader import KpiCsvLoader, parse_kpi_csv, REQUIRED_COLUMNS
from .exporters import (
    GLOSSARY_COLUMNS,
    export_report_json,
    export_glossary_csv,
    report_to_dict
)

__all__ = [
    "KpiCsvLoader",
    "parse_kpi_csv",
    "REQUIRED_COLUMNS",
    "GLOSSARY_COLUMNS",
    "export_report_json",
    "export_glossary_csv",
    "report_to_dict"
]
