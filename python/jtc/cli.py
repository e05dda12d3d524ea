"""Command line entrypoint for jtc."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Iterable, List

from .config import CheckConfig, OUTPUT_FORMATS
from .errors import ConfigError, MalformedSchema
from .logging_utils import configure_logging
from .runner import PairReport, check_directory, check_pair
from .typedef import load_typedef_file

PREFIX = "[JTC]: "


def print_message(message: str) -> None:
    print(PREFIX + message)


def _print_human(report: PairReport, strict: bool) -> None:
    print_message(f"📜 Validating {report.data_path}")
    if report.error is not None:
        print_message(f"💥 {report.error}")
    for finding in report.findings:
        print_message(finding.render())
    if report.ok(strict=strict):
        print_message(f"✅ Successfully validated {report.data_path}")
    else:
        print_message(f"🚫 Validation failed for {report.data_path}")


def _emit(reports: List[PairReport], config: CheckConfig) -> int:
    failed = sum(1 for r in reports if not r.ok(strict=config.strict))
    if config.output_format == "json":
        output = {
            "pairs": len(reports),
            "failed": failed,
            "results": [r.to_dict(strict=config.strict) for r in reports],
        }
        print(json.dumps(output, indent=2, ensure_ascii=False))
    else:
        for report in reports:
            _print_human(report, config.strict)
    return 0 if failed == 0 else 1


def _resolve_config(args: argparse.Namespace) -> CheckConfig:
    config = CheckConfig.from_config_file(args.config) if args.config else CheckConfig()
    return config.with_overrides(
        directory=getattr(args, "directory", None),
        output_format=args.format,
        strict=args.strict,
        max_alias_hops=args.max_alias_hops,
    )


def cmd_check(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    reports = []
    for report in check_directory(config):
        if config.output_format == "human":
            _print_human(report, config.strict)
        reports.append(report)
    if not reports:
        if config.output_format == "human":
            print_message(f"No typedef/data pairs found under {config.directory}")
        else:
            print(json.dumps({"pairs": 0, "failed": 0, "results": []}, indent=2))
        return 0
    if config.output_format == "json":
        return _emit(reports, config)
    return 0 if all(r.ok(strict=config.strict) for r in reports) else 1


def cmd_validate(args: argparse.Namespace) -> int:
    config = _resolve_config(args)
    report = check_pair(args.typedef, args.data, max_alias_hops=config.max_alias_hops)
    return _emit([report], config)


def cmd_schema(args: argparse.Namespace) -> int:
    try:
        node = load_typedef_file(args.typedef)
    except MalformedSchema as exc:
        print_message(f"💥 {exc}")
        return 1
    print(json.dumps(node.to_dict(), indent=2, ensure_ascii=False))
    return 0


def _add_output_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--config", help="Path to configuration (json, toml or pyproject.toml)")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default=None, help="Output format (default: human)")
    parser.add_argument("--strict", action="store_true", default=None, help="Treat warnings as failures")
    parser.add_argument("--max-alias-hops", type=int, default=None, help="Alias dereferences allowed without consuming data")


def build_parser(prog: str = "jtc") -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=prog, description="Validate JSON documents against typedef schemas")
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeat for debug)")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    sub = parser.add_subparsers(dest="command", required=True)

    p_check = sub.add_parser("check", help="Validate every *.typedef.json / *.json pair under a directory")
    p_check.add_argument("directory", nargs="?", default=None, help="Directory to search (default: .)")
    _add_output_options(p_check)
    p_check.set_defaults(func=cmd_check)

    p_validate = sub.add_parser("validate", help="Validate one data document against one typedef")
    p_validate.add_argument("typedef", help="Typedef document")
    p_validate.add_argument("data", help="JSON data document")
    _add_output_options(p_validate)
    p_validate.set_defaults(func=cmd_validate)

    p_schema = sub.add_parser("schema", help="Parse a typedef document and print its normalised form")
    p_schema.add_argument("typedef", help="Typedef document")
    p_schema.set_defaults(func=cmd_schema)

    return parser


def main(argv: Iterable[str] | None = None) -> None:
    if argv is None:
        raw_args = sys.argv[1:]
        prog = Path(sys.argv[0]).name
    else:
        raw_args = list(argv)
        prog = "jtc"

    parser = build_parser(prog=prog)
    if prog == "jtc-check" and (not raw_args or raw_args[0] != "check"):
        raw_args = ["check", *raw_args]

    args = parser.parse_args(raw_args)
    configure_logging(args.verbose, args.quiet, all_to_stderr=getattr(args, "format", None) == "json")
    try:
        code = args.func(args)
    except (ConfigError, FileNotFoundError, NotADirectoryError) as exc:
        print(f"{prog}: error: {exc}", file=sys.stderr)
        code = 2
    sys.exit(code)


if __name__ == "__main__":  # pragma: no cover - CLI entrypoint
    main()
