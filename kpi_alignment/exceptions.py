"""Exception types raised by the KPI alignment package."""


class KpiAlignmentError(Exception):
    """Base error for the package."""


class DataUnavailableError(KpiAlignmentError):
    """The KPI definitions could not be obtained from their source."""

    def __init__(self, source: str, detail: str = "") -> None:
        self.source = source
        self.detail = detail
        message = f"KPI data unavailable from {source}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
