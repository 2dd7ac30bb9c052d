"""Filtering and output helpers for parsed login records."""

from __future__ import annotations

import csv
import json
import re
import sys
from collections import Counter
from pathlib import Path
from typing import Iterable, List, Sequence

from .models import CSV_COLUMNS, LoginRecord, LoginSummary, ParseResult


def filter_by_port_wwn(records: Iterable[LoginRecord], pattern: str) -> List[LoginRecord]:
    """Keep records whose port WWN matches a regular expression.

    Matching is a case-insensitive search, so an OUI prefix such as
    ``^10000090fa`` or a bare fragment like ``0090fa`` both work.

    Raises:
        ValueError: If the pattern is not a valid regular expression.
    """
    try:
        regex = re.compile(pattern, re.IGNORECASE)
    except re.error as e:
        raise ValueError(f"Invalid port WWN filter {pattern!r}: {e}") from e
    return [r for r in records if r.port_wwn and regex.search(r.port_wwn)]


def write_csv(records: Sequence[LoginRecord], path) -> int:
    """Write records to CSV, one row per record, replacing any existing file.

    Returns:
        Number of rows written.
    """
    path = Path(path)
    if path.exists():
        print(f"[export] Warning: overwriting existing file {path}", file=sys.stderr, flush=True)

    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=list(CSV_COLUMNS))
        w.writeheader()
        for r in records:
            w.writerow({k: ("" if v is None else v) for k, v in r.to_dict().items()})
    return len(records)


def write_json(result: ParseResult, stream=None) -> None:
    stream = stream or sys.stdout
    stream.write(json.dumps(result.to_dict(), indent=2))
    stream.write("\n")


def summarize(records: Sequence[LoginRecord]) -> LoginSummary:
    """Build summary counts for a set of records."""
    array_counts = Counter(r.array or "(unknown)" for r in records)
    return LoginSummary(
        total_records=len(records),
        array_counts=dict(array_counts),
        logged_in=sum(1 for r in records if r.is_logged_in),
        on_fabric=sum(1 for r in records if r.is_on_fabric),
        named_initiators=sum(1 for r in records if r.initiator_name),
        distinct_port_wwns=len({r.port_wwn for r in records if r.port_wwn}),
    )


def print_summary(summary: LoginSummary) -> None:
    print(f"Total logins:        {summary.total_records}")
    print(f"Logged in:           {summary.logged_in}")
    print(f"On fabric:           {summary.on_fabric}")
    print(f"Named initiators:    {summary.named_initiators}")
    print(f"Distinct port WWNs:  {summary.distinct_port_wwns}")
    for array, count in sorted(summary.array_counts.items()):
        print(f"  {array}: {count}")


# --- Console table -------------------------------------------------------------

TABLE_COLUMNS = (
    ("ARRAY", "array"),
    ("DIR PORT", "director_port"),
    ("PORT WWN", "port_wwn"),
    ("INITIATOR", "initiator_name"),
    ("FCID", "fcid"),
    ("LOGGED IN", "logged_in"),
    ("ON FABRIC", "on_fabric"),
    ("LAST ACTIVE", "log_time"),
)


def print_table(records: Sequence[LoginRecord]) -> None:
    if not records:
        print("No login records found.")
        return

    widths = [
        max(len(title), max(len(getattr(r, attr) or "") for r in records))
        for title, attr in TABLE_COLUMNS
    ]

    header = "  ".join(title.ljust(w) for (title, _), w in zip(TABLE_COLUMNS, widths))
    print(header.rstrip())
    print("-" * len(header.rstrip()))

    for r in records:
        line = "  ".join((getattr(r, attr) or "").ljust(w) for (_, attr), w in zip(TABLE_COLUMNS, widths))
        print(line.rstrip())
