# Copyright 2026 CMLModel Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the CMLModel command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from cmlmodel.parser.parser import ParseError, parse, parse_with_report
from cmlmodel.workspace.config import (
    CONFIG_FILE_NAME,
    LOG_LEVELS,
    WorkspaceConfig,
    WorkspaceConfigError,
    default_config_text,
    load_workspace_config,
)

logger = logging.getLogger(__name__)

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the CMLModel CLI."""
    parser = argparse.ArgumentParser(
        prog="cmlmodel",
        description="CMLModel: parse Context Mapper (CML) documents into a queryable model",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        default=None,
        help="Logging level (default: from the workspace configuration, else WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # init subcommand
    init_parser = subparsers.add_parser(
        "init",
        help="Initialize a new CMLModel workspace",
        description=f"Write a default {CONFIG_FILE_NAME} into a directory.",
    )
    init_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory to initialize the workspace in (default: current directory)",
    )

    # check subcommand
    check_parser = subparsers.add_parser(
        "check",
        help="Parse all CML files and report dropped fragments",
        description="Parse every *.cml file of a workspace and report what could not be read.",
    )
    check_parser.add_argument(
        "directory",
        nargs="?",
        default=".",
        help="Directory containing the CML files (default: current directory)",
    )
    check_parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat every dropped fragment as an error",
    )

    # dump subcommand
    dump_parser = subparsers.add_parser(
        "dump",
        help="Print the parsed model of a CML file as JSON",
        description="Parse a single CML file and print the resulting model as JSON.",
    )
    dump_parser.add_argument("file", help="Path to the .cml file")
    dump_parser.add_argument(
        "--indent",
        type=int,
        default=2,
        help="JSON indentation (default: 2)",
    )
    dump_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail instead of silently dropping malformed fragments",
    )

    args = parser.parse_args()
    _configure_logging(args.log_level or "WARNING")
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    sys.exit(_dispatch(args))


# ################
# Implementation
# ################

_CML_SUFFIX = ".cml"


def _configure_logging(level: str) -> None:
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger().setLevel(level)


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "init":
        return _cmd_init(args)
    if args.command == "check":
        return _cmd_check(args)
    if args.command == "dump":
        return _cmd_dump(args)
    return 0


def _cmd_init(args: argparse.Namespace) -> int:
    """Handle the init subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config_file = directory / CONFIG_FILE_NAME

    if config_file.exists():
        print(
            f"Error: workspace already exists at '{config_file}'.",
            file=sys.stderr,
        )
        return 1

    config_file.write_text(default_config_text(), encoding="utf-8")
    print(f"Initialized CMLModel workspace at '{config_file}'.")
    return 0


def _cmd_check(args: argparse.Namespace) -> int:
    """Handle the check subcommand."""
    directory = Path(args.directory).resolve()

    if not directory.exists():
        print(f"Error: directory '{directory}' does not exist.", file=sys.stderr)
        return 1

    config = WorkspaceConfig()
    config_file = directory / CONFIG_FILE_NAME
    if config_file.exists():
        try:
            config = load_workspace_config(config_file)
        except WorkspaceConfigError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1
        if args.log_level is None:
            logging.getLogger().setLevel(config.log_level)

    strict = args.strict or config.strict
    source_dir = directory / config.source_directory
    if not source_dir.is_dir():
        print(f"Error: source directory '{source_dir}' does not exist.", file=sys.stderr)
        return 1

    cml_files = sorted(source_dir.rglob(f"*{_CML_SUFFIX}"))
    if not cml_files:
        print("No .cml files found in the workspace.")
        return 0

    print(f"Checking {len(cml_files)} CML file(s)...")
    has_errors = False
    for path in cml_files:
        label = path.relative_to(directory)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot read '{label}': {exc}", file=sys.stderr)
            has_errors = True
            continue

        logger.info("Parsing %s", label)
        report = parse_with_report(source)
        model = report.model
        relationships = len(model.context_map.relationships) if model.context_map else 0
        print(f"  {label}: {len(model.bounded_contexts)} bounded context(s), {relationships} relationship(s)")
        for skipped in report.skipped:
            message = f"{label}:{skipped.line}: {skipped.reason}: {skipped.fragment}"
            if strict:
                print(f"Error: {message}", file=sys.stderr)
                has_errors = True
            else:
                print(f"Warning: {message}")

    if has_errors:
        return 1

    print("No issues found.")
    return 0


def _cmd_dump(args: argparse.Namespace) -> int:
    """Handle the dump subcommand."""
    path = Path(args.file)
    try:
        source = path.read_text(encoding="utf-8")
    except OSError as exc:
        print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
        return 1

    try:
        model = parse(source, strict=args.strict)
    except ParseError as exc:
        print(f"Error: {path}: {exc}", file=sys.stderr)
        return 1

    print(model.model_dump_json(indent=args.indent))
    return 0
