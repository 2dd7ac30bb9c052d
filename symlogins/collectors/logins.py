"""Login report collector.

Writes one `logins-<arrayId>-<timestamp>.txt` file per array using a
ReportSource (normally SymcliReportSource).
"""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .base import BaseCollector, ReportSource
from ..errors import ExternalToolError, ToolNotFoundError

REPORT_TIMESTAMP_FORMAT = "%Y%m%d-%H%M%S"


def report_filename(array_id: str, when: datetime) -> str:
    return f"logins-{array_id}-{when.strftime(REPORT_TIMESTAMP_FORMAT)}.txt"


class LoginReportCollector(BaseCollector):
    """Collector that dumps login reports for a set of arrays to disk."""

    def __init__(
        self,
        source: ReportSource,
        output_dir: str = ".",
        now_fn: Callable[[], datetime] = datetime.now,
    ):
        self.source = source
        self.output_dir = Path(output_dir)
        self.now_fn = now_fn
        self._array_ids: List[str] = []

    @property
    def name(self) -> str:
        return "symaccess_logins"

    @property
    def display_name(self) -> str:
        return "Symaccess Login Reports"

    def is_available(self) -> bool:
        return self.source.is_available()

    def set_arrays(self, array_ids: List[str]) -> None:
        """Set the arrays to collect. An empty list means all discoverable arrays."""
        self._array_ids = list(array_ids)

    def collect(self) -> Dict[str, Any]:
        """Fetch and save a login report for every requested array.

        Failures are recorded under "errors" and never raised: a missing CLI
        stops collection for all remaining arrays, a failed invocation only
        skips that array.
        """
        files: List[str] = []
        errors: Dict[str, str] = {}

        array_ids = self._array_ids
        if not array_ids:
            try:
                array_ids = self.source.list_arrays()
            except ExternalToolError as e:
                self._error(f"Unable to list arrays: {e}")
                errors["inventory"] = str(e)
                return self._payload([], files, errors)
            if not array_ids:
                self._error("No arrays found in inventory output")
            else:
                print(f"[collector] Found {len(array_ids)} arrays: {', '.join(array_ids)}", file=sys.stderr, flush=True)

        for index, array_id in enumerate(array_ids):
            try:
                text = self.source.fetch_report(array_id)
            except ToolNotFoundError as e:
                self._error(f"{e}; skipping remaining arrays")
                for skipped in array_ids[index:]:
                    errors[skipped] = str(e)
                break
            except ExternalToolError as e:
                self._error(f"Error collecting logins for {array_id}: {e}")
                errors[array_id] = str(e)
                continue

            saved = self._save_report(array_id, text)
            if saved is None:
                errors[array_id] = f"could not write report to {self.output_dir}"
                continue
            files.append(str(saved))
            print(f"[collector] {array_id}: wrote {saved}", file=sys.stderr, flush=True)

        return self._payload(array_ids, files, errors)

    def _save_report(self, array_id: str, text: str) -> Optional[Path]:
        path = self.output_dir / report_filename(array_id, self.now_fn())
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            self._error(f"Error writing {path}: {e}")
            return None
        return path

    def _payload(self, array_ids: List[str], files: List[str], errors: Dict[str, str]) -> Dict[str, Any]:
        return {
            "meta": {
                "generated_at": datetime.now(timezone.utc).isoformat(),
                "collector": self.name,
                "arrays_requested": len(array_ids),
                "arrays_succeeded": len(files),
            },
            "files": files,
            "errors": errors,
        }

    @staticmethod
    def _error(msg: str) -> None:
        print(f"[collector] {msg}", file=sys.stderr, flush=True)
