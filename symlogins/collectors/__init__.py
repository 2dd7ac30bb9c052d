"""Data collectors - SYMCLI report source and login report collector."""

from .base import BaseCollector, CollectorError, ExternalToolError, ReportSource
from .symcli import DEFAULT_ARRAY_FAMILIES, SymcliReportSource, parse_array_ids
from .logins import LoginReportCollector, report_filename

__all__ = [
    "BaseCollector",
    "CollectorError",
    "ExternalToolError",
    "ReportSource",
    "DEFAULT_ARRAY_FAMILIES",
    "SymcliReportSource",
    "parse_array_ids",
    "LoginReportCollector",
    "report_filename",
]
