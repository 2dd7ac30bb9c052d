"""Configuration management for symlogins.

Supports YAML-based configuration; command line flags override it.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from ..collectors.symcli import DEFAULT_ARRAY_FAMILIES
from ..data.parser import DEFAULT_REPORT_PATTERN


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name) or {}
    if not isinstance(section, dict):
        raise ValueError(f"config section '{name}' must be a mapping")
    return section


@dataclass
class SymcliConfig:
    """Location and limits for the SYMCLI binaries."""

    bin_dir: Optional[str] = None  # None = search PATH
    timeout: int = 120  # seconds per symaccess call
    inventory_timeout: int = 60  # seconds for symcfg list
    array_families: List[str] = field(default_factory=lambda: list(DEFAULT_ARRAY_FAMILIES))


@dataclass
class ReportsConfig:
    """Where login report files are written and looked up."""

    directory: str = "."
    pattern: str = DEFAULT_REPORT_PATTERN


@dataclass
class ParseConfig:
    reset_context_per_file: bool = False


@dataclass
class OutputConfig:
    csv_path: Optional[str] = None
    port_wwn_filter: Optional[str] = None


@dataclass
class Config:
    """Main configuration container."""

    symcli: SymcliConfig = field(default_factory=SymcliConfig)
    reports: ReportsConfig = field(default_factory=ReportsConfig)
    parse: ParseConfig = field(default_factory=ParseConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        """Create config from dictionary.

        Raises:
            ValueError: If a section is not a mapping or a value has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"config must be a mapping, got {type(data).__name__}")

        symcli_data = _section(data, "symcli")
        symcli = SymcliConfig(
            bin_dir=symcli_data.get("bin_dir"),
            timeout=int(symcli_data.get("timeout", 120)),
            inventory_timeout=int(symcli_data.get("inventory_timeout", 60)),
            array_families=list(symcli_data.get("array_families") or DEFAULT_ARRAY_FAMILIES),
        )

        reports_data = _section(data, "reports")
        reports = ReportsConfig(
            directory=str(reports_data.get("directory", ".")),
            pattern=reports_data.get("pattern", DEFAULT_REPORT_PATTERN),
        )

        parse_data = _section(data, "parse")
        parse = ParseConfig(
            reset_context_per_file=bool(parse_data.get("reset_context_per_file", False)),
        )

        output_data = _section(data, "output")
        output = OutputConfig(
            csv_path=output_data.get("csv"),
            port_wwn_filter=output_data.get("port_wwn_filter"),
        )

        return cls(symcli=symcli, reports=reports, parse=parse, output=output)

    @classmethod
    def from_yaml(cls, path: Path) -> "Config":
        """Load config from YAML file."""
        if not path.exists():
            return cls()
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)

    @classmethod
    def load(cls, config_path: Optional[str] = None) -> "Config":
        """Load config from path or defaults.

        Checks in order:
        1. Provided path
        2. SYMLOGINS_CONFIG env var
        3. ./configs/config.yaml
        4. ./config.yaml
        5. ~/.symlogins/config.yaml
        6. Default config
        """
        paths_to_try = []

        if config_path:
            paths_to_try.append(Path(config_path))

        if env_path := os.environ.get("SYMLOGINS_CONFIG"):
            paths_to_try.append(Path(env_path))

        paths_to_try.extend([
            Path("./configs/config.yaml"),
            Path("./config.yaml"),
            Path.home() / ".symlogins" / "config.yaml",
        ])

        for path in paths_to_try:
            if path.exists():
                return cls.from_yaml(path)

        return cls()

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "symcli": {
                "bin_dir": self.symcli.bin_dir,
                "timeout": self.symcli.timeout,
                "inventory_timeout": self.symcli.inventory_timeout,
                "array_families": list(self.symcli.array_families),
            },
            "reports": {
                "directory": self.reports.directory,
                "pattern": self.reports.pattern,
            },
            "parse": {
                "reset_context_per_file": self.parse.reset_context_per_file,
            },
            "output": {
                "csv": self.output.csv_path,
                "port_wwn_filter": self.output.port_wwn_filter,
            },
        }
