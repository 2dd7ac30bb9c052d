"""Parser for `symaccess list logins -v` reports.

The report is a loose sequence of "Label : value" lines grouped into blocks
separated by blank lines. Header lines (Symmetrix ID, director and port
details) set context that applies to every login listed after them, and
each login entry runs from "Originator Node wwn" to "Last Active Log-In":

    Symmetrix ID            : 000197901042
    Director Identification : FA-1D
    Director Port           : 004
    WWN Port Name           : 50000973b0104804

    Originator Node wwn : 200000051efd0ba0
    Originator Port wwn : 100000051efd0ba0
    User-generated Name : /
    FCID                : 798d40
    Logged In           : No
    On Fabric           : Yes
    Last Active Log-In  : 11:34:07 PM on Wed May 25,2022

Lines are matched against an ordered label table; the first label that
matches wins and unknown lines are ignored.
"""

from __future__ import annotations

import codecs
import glob
import os
import re
import sys
from pathlib import Path
from typing import Callable, Iterable, Iterator, List, Optional, Sequence, Tuple

from .models import LoginRecord, ParseContext, ParseResult
from ..errors import NoInputError, ParseFormatError, PathNotFoundError

DEFAULT_REPORT_PATTERN = "logins-*.txt"

# A block boundary is any run of two or more line breaks
BLOCK_SPLIT_RE = re.compile(r"(?:\r?\n){2,}")

# Initiator name placeholder used by symaccess when no alias is set
UNNAMED_INITIATOR = "/"

# Offset of the two-character director number in ids like "FA-1D"
DIRECTOR_PAIR_OFFSET = 3


def _warn(msg: str) -> None:
    print(f"[parser] {msg}", file=sys.stderr, flush=True)


def _label_pattern(label: str, free_text: bool = False) -> "re.Pattern[str]":
    """Compile `<Label> : <value>`, whitespace-tolerant around the colon."""
    value = r"(.+)" if free_text else r"(\S+)"
    return re.compile(rf"^{re.escape(label)}\s*:\s*{value}")


def split_blocks(text: str) -> List[str]:
    """Split report text into blocks on blank-line runs."""
    return [block for block in BLOCK_SPLIT_RE.split(text) if block.strip()]


class LoginReportParser:
    """Stateful parser that turns report text into LoginRecords.

    Context (array id, director port, director WWPN) lives on the parser
    instance and, unless ``reset_context_per_file`` is set, carries over from
    one file to the next.
    """

    def __init__(self, reset_context_per_file: bool = False):
        self.reset_context_per_file = reset_context_per_file
        self.context = ParseContext()
        self._current: Optional[LoginRecord] = None
        self._source_file: Optional[str] = None

        # Priority order matters: first match wins
        self._dispatch: List[Tuple[str, "re.Pattern[str]", Callable[[str, str], Optional[LoginRecord]]]] = [
            ("Symmetrix ID", _label_pattern("Symmetrix ID"), self._on_array_id),
            ("Director Identification", _label_pattern("Director Identification"), self._on_director_id),
            ("Director Port", _label_pattern("Director Port"), self._on_director_port),
            ("WWN Port Name", _label_pattern("WWN Port Name"), self._on_director_wwpn),
            ("Originator Node wwn", _label_pattern("Originator Node wwn"), self._on_node_wwn),
            ("Originator Port wwn", _label_pattern("Originator Port wwn"), self._on_port_wwn),
            ("User-generated Name", _label_pattern("User-generated Name"), self._on_initiator_name),
            ("FCID", _label_pattern("FCID"), self._on_fcid),
            ("Logged In", _label_pattern("Logged In"), self._on_logged_in),
            ("On Fabric", _label_pattern("On Fabric"), self._on_fabric),
            ("Last Active Log-In", _label_pattern("Last Active Log-In", free_text=True), self._on_last_active),
        ]

    # --- Public API ---

    def iter_records(self, text: str, source_file: str) -> Iterator[LoginRecord]:
        """Yield records from one file's text as each one is finalized.

        Raises:
            ParseFormatError: If a "Director Port" value is not an integer.
                Records yielded before the error are complete and valid.
        """
        if self.reset_context_per_file:
            self.context.reset()
        self._current = None
        self._source_file = source_file

        for block in split_blocks(text):
            for raw_line in block.splitlines():
                line = raw_line.strip()
                if not line:
                    continue
                record = self._apply_line(line)
                if record is not None:
                    yield record

        # An entry without "Last Active Log-In" is dropped
        self._current = None

    def parse_text(self, text: str, source_file: str) -> List[LoginRecord]:
        """Parse one file's text into a list of records."""
        return list(self.iter_records(text, source_file))

    def parse_files(self, paths: Iterable[Path], result: Optional[ParseResult] = None) -> ParseResult:
        """Parse report files in order, recovering per file.

        Missing and unreadable files are reported and skipped. A file that
        fails with ParseFormatError keeps the records finalized before the
        failure; parsing continues with the next file.
        """
        result = result or ParseResult()

        for path in paths:
            path = Path(path)
            name = path.name

            if not path.is_file():
                err = PathNotFoundError(str(path))
                _warn(f"Warning: {err}")
                result.missing_paths.append(str(path))
                continue

            try:
                text = read_report(path)
            except OSError as e:
                _warn(f"Error reading file {name}: {e}")
                result.files_failed[str(path)] = str(e)
                continue

            before = result.record_count
            try:
                for record in self.iter_records(text, name):
                    result.records.append(record)
            except ParseFormatError as e:
                _warn(f"Error processing file {name}: {e}")
                result.files_failed[str(path)] = str(e)
                continue

            result.files_processed.append(name)
            print(f"[parser] {name}: {result.record_count - before} login records", file=sys.stderr, flush=True)

        return result

    # --- Line dispatch ---

    def _apply_line(self, line: str) -> Optional[LoginRecord]:
        for _label, pattern, handler in self._dispatch:
            match = pattern.match(line)
            if match:
                return handler(match.group(1).strip(), line)
        return None

    def _on_array_id(self, value: str, line: str) -> None:
        self.context.array = value

    def _on_director_id(self, value: str, line: str) -> None:
        pair = value[DIRECTOR_PAIR_OFFSET:DIRECTOR_PAIR_OFFSET + 2]
        # Ids too short to hold a director number leave the pair unknown
        self.context.director_pair = pair if len(pair) == 2 else None

    def _on_director_port(self, value: str, line: str) -> None:
        try:
            self.context.director_port = int(value)
        except ValueError:
            raise ParseFormatError(self._source_file or "<text>", line, value) from None

    def _on_director_wwpn(self, value: str, line: str) -> None:
        self.context.director_wwpn = value

    def _on_node_wwn(self, value: str, line: str) -> None:
        self._current = LoginRecord(
            node_wwn=value,
            array=self.context.array,
            director_port=self.context.port_descriptor,
            director_wwpn=self.context.director_wwpn,
            source_file=self._source_file,
        )

    def _on_port_wwn(self, value: str, line: str) -> None:
        if self._current is not None:
            self._current.port_wwn = value

    def _on_initiator_name(self, value: str, line: str) -> None:
        if self._current is not None and value != UNNAMED_INITIATOR:
            self._current.initiator_name = value

    def _on_fcid(self, value: str, line: str) -> None:
        if self._current is not None:
            self._current.fcid = value

    def _on_logged_in(self, value: str, line: str) -> None:
        if self._current is not None:
            self._current.logged_in = value

    def _on_fabric(self, value: str, line: str) -> None:
        if self._current is not None:
            self._current.on_fabric = value

    def _on_last_active(self, value: str, line: str) -> Optional[LoginRecord]:
        record = self._current
        if record is None:
            return None
        record.log_time = value
        self._current = None
        return record


# =============================================================================
# File helpers
# =============================================================================


def read_report(path: Path) -> str:
    """Read a report file, honoring UTF-16 output from Windows shells."""
    data = path.read_bytes()
    if data.startswith((codecs.BOM_UTF16_LE, codecs.BOM_UTF16_BE)):
        return data.decode("utf-16", errors="replace")
    return data.decode("utf-8-sig", errors="replace")


def _has_magic(pattern: str) -> bool:
    return any(c in pattern for c in "*?[")


def resolve_input_paths(
    patterns: Optional[Sequence[str]] = None,
    default_pattern: str = DEFAULT_REPORT_PATTERN,
    base_dir: str = ".",
) -> Tuple[List[Path], List[str]]:
    """Expand explicit paths, directories and globs into report files.

    With no patterns, every file matching ``default_pattern`` in
    ``base_dir`` is used. Order follows the patterns given; glob matches are
    sorted by name. Duplicates are dropped.

    Returns:
        (files, missing) where missing lists patterns that matched nothing.

    Raises:
        NoInputError: If no file was resolved at all.
    """
    patterns = list(patterns or [default_pattern])
    files: List[Path] = []
    missing: List[str] = []
    seen = set()

    def _add(path: Path) -> None:
        key = os.path.normcase(str(path.resolve()))
        if key not in seen:
            seen.add(key)
            files.append(path)

    for pattern in patterns:
        target = Path(base_dir) / pattern
        if _has_magic(pattern):
            matches = sorted(glob.glob(str(target)))
            matches = [m for m in matches if Path(m).is_file()]
            if not matches:
                missing.append(pattern)
            for match in matches:
                _add(Path(match))
        elif target.is_dir():
            matches = sorted(p for p in target.glob(default_pattern) if p.is_file())
            if not matches:
                missing.append(pattern)
            for match in matches:
                _add(match)
        elif target.is_file():
            _add(target)
        else:
            missing.append(pattern)

    if not files:
        raise NoInputError(patterns)
    return files, missing


def parse_reports(
    patterns: Optional[Sequence[str]] = None,
    parser: Optional[LoginReportParser] = None,
    default_pattern: str = DEFAULT_REPORT_PATTERN,
    base_dir: str = ".",
) -> ParseResult:
    """Resolve input patterns and parse every matching report.

    Never raises for missing input: unresolved patterns are reported as
    warnings and an empty result is returned when nothing matched.
    """
    parser = parser or LoginReportParser()
    result = ParseResult()

    try:
        files, missing = resolve_input_paths(patterns, default_pattern=default_pattern, base_dir=base_dir)
    except NoInputError as e:
        _warn(f"Warning: {e}")
        return result

    for pattern in missing:
        _warn(f"Warning: {PathNotFoundError(pattern)}")
        result.missing_paths.append(pattern)

    parser.parse_files(files, result)

    if not result.records:
        _warn("Warning: no login records found in the matching files")
    return result
