"""Solutions Enabler (SYMCLI) report source.

Lists arrays with `symcfg list` and produces login reports with
`symaccess -sid <id> list logins -v`.
"""

from __future__ import annotations

import re
import shutil
import subprocess
from typing import List, Optional, Sequence

from .base import ReportSource
from ..errors import ExternalToolError, ToolNotFoundError

DEFAULT_ARRAY_FAMILIES = ("VMAX", "PowerMax")


def build_array_id_regex(families: Sequence[str] = DEFAULT_ARRAY_FAMILIES) -> "re.Pattern[str]":
    """Regex for a 12-digit array id followed by a known family tag.

    `symcfg list` rows look like::

        000197901042 Local       PowerMax_2000  5978 ...

    The attachment column between id and model is optional.
    """
    tags = "|".join(re.escape(f) for f in families)
    return re.compile(rf"\b(\d{{12}})\s+(?:\S+\s+)?(?:{tags})", re.IGNORECASE)


def parse_array_ids(inventory_output: str, families: Sequence[str] = DEFAULT_ARRAY_FAMILIES) -> List[str]:
    """Extract array ids from `symcfg list` output, first-seen order."""
    regex = build_array_id_regex(families)
    ids: List[str] = []
    for line in inventory_output.splitlines():
        match = regex.search(line)
        if match and match.group(1) not in ids:
            ids.append(match.group(1))
    return ids


class SymcliReportSource(ReportSource):
    """ReportSource backed by the SYMCLI binaries."""

    def __init__(
        self,
        bin_dir: Optional[str] = None,
        timeout: int = 120,
        inventory_timeout: int = 60,
        array_families: Sequence[str] = DEFAULT_ARRAY_FAMILIES,
    ):
        self.bin_dir = bin_dir
        self.timeout = timeout
        self.inventory_timeout = inventory_timeout
        self.array_families = tuple(array_families)

    def find_tool(self, tool: str) -> str:
        """Locate a SYMCLI binary in bin_dir or on PATH.

        Raises:
            ToolNotFoundError: If the binary cannot be found.
        """
        path = shutil.which(tool, path=self.bin_dir) if self.bin_dir else shutil.which(tool)
        if not path:
            where = self.bin_dir or "PATH"
            raise ToolNotFoundError("symcli", f"Cannot locate {tool} in {where}")
        return path

    def is_available(self) -> bool:
        try:
            self.find_tool("symaccess")
            return True
        except ToolNotFoundError:
            return False

    def list_arrays(self) -> List[str]:
        output = self._run([self.find_tool("symcfg"), "list"], self.inventory_timeout)
        return parse_array_ids(output, self.array_families)

    def fetch_report(self, array_id: str) -> str:
        cmd = [self.find_tool("symaccess"), "-sid", array_id, "list", "logins", "-v"]
        return self._run(cmd, self.timeout)

    def _run(self, cmd: List[str], timeout: int) -> str:
        try:
            result = subprocess.run(
                cmd,
                capture_output=True,
                text=True,
                check=True,
                timeout=timeout,
            )
            return result.stdout
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() or f"exit status {e.returncode}"
            raise ExternalToolError("symcli", f"{' '.join(cmd)} failed: {detail}", e)
        except subprocess.TimeoutExpired as e:
            raise ExternalToolError("symcli", f"Timeout after {timeout}s running {' '.join(cmd)}", e)
        except OSError as e:
            raise ExternalToolError("symcli", f"Cannot run {cmd[0]}: {e}", e)
