"""Data layer - login record models, report parser and export helpers."""

from .models import (
    COLUMN_MAP,
    CSV_COLUMNS,
    LoginRecord,
    ParseContext,
    ParseResult,
    LoginSummary,
)
from .parser import (
    DEFAULT_REPORT_PATTERN,
    LoginReportParser,
    parse_reports,
    read_report,
    resolve_input_paths,
    split_blocks,
)
from .export import (
    filter_by_port_wwn,
    print_summary,
    print_table,
    summarize,
    write_csv,
    write_json,
)

__all__ = [
    "COLUMN_MAP",
    "CSV_COLUMNS",
    "LoginRecord",
    "ParseContext",
    "ParseResult",
    "LoginSummary",
    "DEFAULT_REPORT_PATTERN",
    "LoginReportParser",
    "parse_reports",
    "read_report",
    "resolve_input_paths",
    "split_blocks",
    "filter_by_port_wwn",
    "print_summary",
    "print_table",
    "summarize",
    "write_csv",
    "write_json",
]
