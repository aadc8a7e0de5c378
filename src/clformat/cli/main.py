# Copyright 2026 CLFormat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Entry point for the CLFormat command-line interface."""

import argparse
import logging
import sys
from pathlib import Path

from clformat.formatter.layout import LAYOUT_FILE_NAME, LayoutConfig, LayoutConfigError, load_layout_config
from clformat.model.metadata import MetadataError, load_command_def

# ###############
# Public Interface
# ###############


def main() -> None:
    """Run the CLFormat CLI."""
    parser = argparse.ArgumentParser(
        prog="clformat",
        description="CLFormat - IBM i CL command formatter",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log diagnostics to stderr",
    )
    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # format subcommand
    format_parser = subparsers.add_parser(
        "format",
        help="Reformat CL source into fixed columns",
        description="Join continued lines and print every statement in SEU column layout.",
    )
    format_parser.add_argument(
        "file",
        help="CL source file to format (use '-' for standard input)",
    )
    format_parser.add_argument(
        "--layout",
        default=None,
        help=f"Layout configuration file (default: {LAYOUT_FILE_NAME} in the current directory, if present)",
    )

    # build subcommand
    build_parser = subparsers.add_parser(
        "build",
        help="Re-assemble a statement from a command definition",
        description=(
            "Parse a statement against a command definition and print it re-assembled "
            "with parameters in declaration order."
        ),
    )
    build_parser.add_argument(
        "definition",
        help="YAML command definition file",
    )
    build_parser.add_argument(
        "statement",
        help="CL statement to re-assemble",
    )

    args = parser.parse_args()
    if args.command is None:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(_dispatch(args))


# ################
# Implementation
# ################


def _dispatch(args: argparse.Namespace) -> int:
    """Dispatch to the appropriate subcommand handler."""
    if args.command == "format":
        return _cmd_format(args)
    if args.command == "build":
        return _cmd_build(args)
    return 0


def _cmd_format(args: argparse.Namespace) -> int:
    """Handle the format subcommand."""
    from clformat.formatter.seu import format_statement
    from clformat.parser.continuation import join_continuations

    layout = _resolve_layout(args.layout)
    if layout is None:
        return 1

    if args.file == "-":
        text = sys.stdin.read()
    else:
        path = Path(args.file)
        if not path.exists():
            print(f"Error: file '{path}' does not exist.", file=sys.stderr)
            return 1
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as exc:
            print(f"Error: cannot read '{path}': {exc}", file=sys.stderr)
            return 1

    for statement in join_continuations(text.splitlines()):
        if statement.startswith("/*"):
            print(statement)
            continue
        for line in format_statement(statement, layout):
            print(line)
    return 0


def _cmd_build(args: argparse.Namespace) -> int:
    """Handle the build subcommand."""
    from clformat.assembler.command import build_command
    from clformat.parser.parameters import parse_parameters
    from clformat.parser.parser import split_label

    try:
        definition = load_command_def(Path(args.definition))
    except MetadataError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    label, text = split_label(args.statement)
    values = parse_parameters(text, definition.parameters)
    print(
        build_command(
            definition.command,
            values,
            definition.parameters,
            defaults=definition.defaults(),
            allowed_values=definition.allowed_values(),
            types=definition.types(),
            present=set(values),
            label=label,
        )
    )
    return 0


def _resolve_layout(option: str | None) -> LayoutConfig | None:
    """Load the layout from *option*, or from the default file if present; None on error."""
    path = Path(option) if option else Path.cwd() / LAYOUT_FILE_NAME
    if option is None and not path.exists():
        return LayoutConfig()
    try:
        return load_layout_config(path)
    except LayoutConfigError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return None
