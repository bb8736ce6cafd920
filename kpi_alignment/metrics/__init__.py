"""
Dashboard and Alerting

This module provides:
- Dashboard data generation (scorecard, funnel chart, findings)
- Text summaries of a report
- Threshold alerts over team scores and findings
"""

from .dashboard import DashboardData, DashboardGenerator, FunnelChartData
from .alerts import Alert, AlertRule, AlertEngine, AlertSeverity, AlertScope

__all__ = [
    "DashboardData",
    "DashboardGenerator",
    "FunnelChartData",
    "Alert",
    "AlertRule",
    "AlertEngine",
    "AlertSeverity",
    "AlertScope"
]
