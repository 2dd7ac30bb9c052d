"""Data models for symaccess login reports.

This module defines the structures produced by the report parser:

1. LOGIN RECORDS
   - One LoginRecord per "Originator Node wwn" entry that reaches a
     "Last Active Log-In" line
   - Attribute names are snake_case; exported column names keep the
     camelCase names used in the CSV files

2. PARSE CONTEXT
   - Array id and director port details carried forward across blocks

3. RUN RESULTS
   - ParseResult and LoginSummary describe a whole parse run
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


# =============================================================================
# Column layout
# =============================================================================

# (attribute, exported column) in output order
COLUMN_MAP = (
    ("array", "array"),
    ("director_port", "directorPort"),
    ("director_wwpn", "directorWwpn"),
    ("node_wwn", "nodeWwn"),
    ("port_wwn", "portWwn"),
    ("initiator_name", "initiatorName"),
    ("fcid", "fcid"),
    ("logged_in", "loggedIn"),
    ("on_fabric", "onFabric"),
    ("log_time", "logTime"),
    ("source_file", "sourceFile"),
)

CSV_COLUMNS = tuple(column for _, column in COLUMN_MAP)


# =============================================================================
# Login Record
# =============================================================================


@dataclass
class LoginRecord:
    """A single initiator login seen on an array front-end port.

    Context fields (array, director_port, director_wwpn) are copied from the
    parse context when the record is created. The rest are filled from the
    lines that follow "Originator Node wwn" in the report.
    """

    node_wwn: str
    array: Optional[str] = None  # Symmetrix ID, e.g. 000197901042
    director_port: Optional[str] = None  # e.g. "1D-4"
    director_wwpn: Optional[str] = None  # WWN of the array port
    port_wwn: Optional[str] = None
    initiator_name: Optional[str] = None  # None when the report shows "/"
    fcid: Optional[str] = None
    logged_in: Optional[str] = None  # "Yes" / "No"
    on_fabric: Optional[str] = None  # "Yes" / "No"
    log_time: Optional[str] = None  # free text, e.g. "11:34:07 PM on Wed May 25,2022"
    source_file: Optional[str] = None

    @property
    def is_logged_in(self) -> bool:
        return (self.logged_in or "").lower() == "yes"

    @property
    def is_on_fabric(self) -> bool:
        return (self.on_fabric or "").lower() == "yes"

    def to_dict(self) -> Dict[str, Optional[str]]:
        """Return the record keyed by exported column name."""
        return {column: getattr(self, attr) for attr, column in COLUMN_MAP}


# =============================================================================
# Parse Context (carried forward between blocks)
# =============================================================================


@dataclass
class ParseContext:
    """Context established by header lines and applied to later records."""

    array: Optional[str] = None
    director_pair: Optional[str] = None  # two characters from "FA-1D" -> "1D"
    director_port: Optional[int] = None
    director_wwpn: Optional[str] = None

    @property
    def port_descriptor(self) -> Optional[str]:
        """Combined "<pair>-<port>" or None while either part is unknown."""
        if self.director_pair is None or self.director_port is None:
            return None
        return f"{self.director_pair}-{self.director_port}"

    def reset(self) -> None:
        self.array = None
        self.director_pair = None
        self.director_port = None
        self.director_wwpn = None


# =============================================================================
# Run results
# =============================================================================


@dataclass
class ParseResult:
    """Outcome of parsing a set of report files."""

    records: List[LoginRecord] = field(default_factory=list)
    files_processed: List[str] = field(default_factory=list)
    files_failed: Dict[str, str] = field(default_factory=dict)  # file path -> error message
    missing_paths: List[str] = field(default_factory=list)

    @property
    def record_count(self) -> int:
        return len(self.records)

    @property
    def has_input(self) -> bool:
        return bool(self.files_processed or self.files_failed)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "meta": {
                "record_count": self.record_count,
                "files_processed": self.files_processed,
                "files_failed": self.files_failed,
                "missing_paths": self.missing_paths,
            },
            "records": [r.to_dict() for r in self.records],
        }


@dataclass
class LoginSummary:
    """Summary statistics across a set of login records."""

    total_records: int
    array_counts: Dict[str, int]
    logged_in: int
    on_fabric: int
    named_initiators: int
    distinct_port_wwns: int
