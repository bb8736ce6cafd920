"""
KPI Definition Loader

Turns the team KPI spreadsheet export into MetricRecords.

Input format:
- Header row with Team, Metric_Name, Definition
- Comma-separated, naive split (no quoted fields)
- Blank lines skipped; missing values become ''

Sources: raw text, a local file, or an HTTP(S) URL. Any failure to obtain
the text is reported as DataUnavailableError; parsing itself never fails.
"""

from pathlib import Path
import logging

import httpx

from ...core.entities import MetricRecord
from ...exceptions import DataUnavailableError

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("Team", "Metric_Name", "Definition")


class KpiCsvLoader:
    """Parses and fetches KPI definition tables."""

    def __init__(self, timeout: float = 10.0, encoding: str = "utf-8", client: httpx.Client = None):
        self.timeout = timeout
        self.encoding = encoding
        self._client = client

    def parse(self, text: str) -> list[MetricRecord]:
        # Spreadsheet exports often start with a UTF-8 byte order mark
        lines = text.removeprefix("\ufeff").splitlines()
        if not lines:
            return []

        headers = [header.strip() for header in lines[0].split(",")]
        missing = [column for column in REQUIRED_COLUMNS if column not in headers]
        if missing:
            logger.warning("KPI table header is missing columns: %s", ", ".join(missing))

        records = []
        for line_number, line in enumerate(lines[1:], start=2):
            if not line.strip():
                continue

            values = line.split(",")
            if len(values) < len(headers):
                logger.warning(
                    "Line %d has %d of %d columns; missing values left empty",
                    line_number, len(values), len(headers)
                )

            row = {
                header: values[index].strip() if index < len(values) else ""
                for index, header in enumerate(headers)
            }
            records.append(MetricRecord.from_row(row))

        return records

    def load_path(self, path) -> list[MetricRecord]:
        path = Path(path)
        try:
            text = path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            raise DataUnavailableError(str(path), str(exc)) from exc

        records = self.parse(text)
        logger.info("Loaded %d KPI definitions from %s", len(records), path)
        return records

    def fetch(self, url: str) -> list[MetricRecord]:
        try:
            if self._client is not None:
                response = self._client.get(url, timeout=self.timeout)
            else:
                with httpx.Client(timeout=self.timeout) as client:
                    response = client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise DataUnavailableError(url, str(exc)) from exc

        records = self.parse(response.text)
        logger.info("Fetched %d KPI definitions from %s", len(records), url)
        return records

    def load(self, source: str) -> list[MetricRecord]:
        """Load from a URL or a file path, chosen by the source's scheme."""
        if source.startswith(("http://", "https://")):
            return self.fetch(source)
        return self.load_path(source)


def parse_kpi_csv(text: str) -> list[MetricRecord]:
    """Parse KPI CSV text into records."""
    return KpiCsvLoader().parse(text)
