#!/usr/bin/env python3
"""
symlogins - collect and parse `symaccess list logins -v` reports.

Usage:
    symlogins collect [SID ...] [--output-dir DIR]
    symlogins parse [PATH_OR_GLOB ...] [--csv FILE] [--filter REGEX]
    symlogins run [SID ...] [--csv FILE] [--filter REGEX]
"""

from __future__ import annotations

import argparse
import dataclasses
import sys
from typing import List, Optional

import yaml

from .config import Config
from ..collectors import LoginReportCollector, SymcliReportSource
from ..data import (
    LoginReportParser,
    filter_by_port_wwn,
    parse_reports,
    print_summary,
    print_table,
    summarize,
    write_csv,
    write_json,
)


def _log(msg: str) -> None:
    print(f"[symlogins] {msg}", file=sys.stderr, flush=True)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="symlogins",
        description="Collect symaccess login reports and convert them to CSV",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Dump login reports for every array in the symcfg inventory
  symlogins collect

  # Dump reports for two arrays into ./reports
  symlogins collect 000197901042 000197901043 --output-dir reports

  # Parse all logins-*.txt files in the current directory to CSV
  symlogins parse --csv logins.csv

  # Only Emulex initiators
  symlogins parse "reports/*.txt" --filter "^10000000c9"

  # Collect and parse in one go
  symlogins run --csv logins.csv --summary
""",
    )
    parser.add_argument("--config", help="Path to YAML config (or set SYMLOGINS_CONFIG)")

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    collect_parser = subparsers.add_parser(
        "collect",
        help="Write login reports for arrays",
        description="Run symaccess for each array and save its login report",
    )
    _add_collect_args(collect_parser)

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse login report files",
        description="Parse login report files into login records",
    )
    parse_parser.add_argument(
        "paths",
        nargs="*",
        help="Report files, directories or glob patterns (default: logins-*.txt in the reports directory)",
    )
    _add_output_args(parse_parser)

    run_parser = subparsers.add_parser(
        "run",
        help="Collect reports, then parse them",
        description="Collect login reports and parse the files just written",
    )
    _add_collect_args(run_parser)
    _add_output_args(run_parser)

    return parser


def _add_collect_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "sids",
        nargs="*",
        metavar="SID",
        help="Array identifiers (default: all arrays listed by symcfg)",
    )
    parser.add_argument("--output-dir", "-o", help="Directory for report files (default: reports directory)")
    parser.add_argument("--symcli-bin", help="Directory holding symcfg/symaccess (default: PATH)")


def _add_output_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--csv", dest="csv_path", help="Write records to CSV at this path")
    parser.add_argument("--filter", dest="port_wwn_filter", help="Only keep records whose port WWN matches this regex")
    parser.add_argument("--json", action="store_true", help="Output records as JSON")
    parser.add_argument("--summary", action="store_true", help="Print summary counts")
    parser.add_argument(
        "--reset-context",
        action="store_true",
        help="Reset array/director context at the start of each file",
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    try:
        config = Config.load(args.config)
    except (OSError, ValueError, TypeError, yaml.YAMLError) as e:
        sys.stderr.write(f"Error: unable to load config: {e}\n")
        return 1

    if args.command == "collect":
        return handle_collect(args, config)
    elif args.command == "parse":
        return handle_parse(args, config)
    elif args.command == "run":
        return handle_run(args, config)
    else:
        parser.print_help()
        return 1


def _collect(args, config: Config) -> dict:
    source = SymcliReportSource(
        bin_dir=args.symcli_bin or config.symcli.bin_dir,
        timeout=config.symcli.timeout,
        inventory_timeout=config.symcli.inventory_timeout,
        array_families=config.symcli.array_families,
    )
    collector = LoginReportCollector(source, output_dir=args.output_dir or config.reports.directory)
    collector.set_arrays(args.sids)
    payload = collector.collect()

    meta = payload["meta"]
    _log(
        f"{collector.display_name}: collected {meta['arrays_succeeded']} of {meta['arrays_requested']} arrays, "
        f"{len(payload['errors'])} errors"
    )
    return payload


def handle_collect(args, config: Config) -> int:
    _collect(args, config)
    return 0


def handle_parse(args, config: Config, paths: Optional[List[str]] = None) -> int:
    if paths is None:
        paths = args.paths
        base_dir = "." if paths else config.reports.directory
    else:
        base_dir = "."

    parser = LoginReportParser(
        reset_context_per_file=args.reset_context or config.parse.reset_context_per_file,
    )
    result = parse_reports(
        paths,
        parser=parser,
        default_pattern=config.reports.pattern,
        base_dir=base_dir,
    )

    records = result.records
    pattern = args.port_wwn_filter or config.output.port_wwn_filter
    if pattern:
        try:
            records = filter_by_port_wwn(records, pattern)
        except ValueError as e:
            sys.stderr.write(f"Error: {e}\n")
            return 1
        _log(f"Filter {pattern!r} kept {len(records)} of {result.record_count} records")

    csv_path = args.csv_path or config.output.csv_path
    if csv_path:
        if records:
            try:
                write_csv(records, csv_path)
            except OSError as e:
                sys.stderr.write(f"Error: unable to write {csv_path}: {e}\n")
                return 1
            _log(f"Wrote {len(records)} records to {csv_path}")
        else:
            _log(f"No records to write; {csv_path} not created")

    if args.json:
        write_json(dataclasses.replace(result, records=records))
    elif not csv_path:
        print_table(records)

    if args.summary and not args.json:
        print_summary(summarize(records))

    _log(
        f"Processed {len(result.files_processed)} files, {len(records)} records "
        f"({len(result.files_failed)} failed, {len(result.missing_paths)} missing)"
    )
    return 0


def handle_run(args, config: Config) -> int:
    payload = _collect(args, config)
    if not payload["files"]:
        _log("No reports collected; nothing to parse")
        return 0
    return handle_parse(args, config, paths=payload["files"])


if __name__ == "__main__":
    sys.exit(main())
