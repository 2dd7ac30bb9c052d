"""Command line entry point and configuration."""

from .config import Config, OutputConfig, ParseConfig, ReportsConfig, SymcliConfig

__all__ = ["Config", "OutputConfig", "ParseConfig", "ReportsConfig", "SymcliConfig"]
