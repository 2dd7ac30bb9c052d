"""
symlogins - turn `symaccess list logins -v` reports into CSV.

Usage:
    symlogins collect
    symlogins parse --csv logins.csv
    symlogins run --filter "^10000090fa" --csv emulex.csv
"""

__version__ = "0.1.0"

from symlogins.errors import (
    SymLoginsError,
    PathNotFoundError,
    NoInputError,
    ParseFormatError,
    CollectorError,
    ExternalToolError,
    ToolNotFoundError,
)
from symlogins.data.models import LoginRecord, ParseResult, CSV_COLUMNS
from symlogins.data.parser import LoginReportParser, parse_reports
from symlogins.collectors import ReportSource, SymcliReportSource, LoginReportCollector

__all__ = [
    "__version__",
    # Errors
    "SymLoginsError",
    "PathNotFoundError",
    "NoInputError",
    "ParseFormatError",
    "CollectorError",
    "ExternalToolError",
    "ToolNotFoundError",
    # Parsing
    "LoginRecord",
    "ParseResult",
    "CSV_COLUMNS",
    "LoginReportParser",
    "parse_reports",
    # Collection
    "ReportSource",
    "SymcliReportSource",
    "LoginReportCollector",
]
