"""Command line interface for sapling."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from .blueprint import DEFAULT_BLUEPRINT, InstallResult
from .commands import InitCommand, NewCommand
from .config import LANGUAGE_DEFAULT, InitOptions, NewOptions
from .errors import SaplingError
from .reporting import StreamReporter, WriteLevel


def _add_common_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-d", "--dry-run", action="store_true", help="List generated files without writing them")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "-b",
        "--blueprint",
        default=DEFAULT_BLUEPRINT,
        help="Built-in blueprint name or path to a blueprint directory",
    )
    parser.add_argument("--skip-npm", action="store_true", help="Do not install npm packages")
    parser.add_argument("--skip-bower", action="store_true", help="Do not install bower packages")
    parser.add_argument("--skip-git", action="store_true", help="Do not initialise a git repository")
    parser.add_argument(
        "--welcome",
        action=argparse.BooleanOptionalAction,
        default=True,
        help="Include the welcome page. Use --no-welcome to skip it.",
    )
    parser.add_argument(
        "--yarn",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Use yarn instead of npm; by default the blueprint decides",
    )
    parser.add_argument(
        "-l",
        "--lang",
        "--language",
        dest="language",
        default=LANGUAGE_DEFAULT,
        help=(
            "Sets the base human language of the application via index.html. "
            "Giving --lang without a value is a usage error"
        ),
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="sapling", description="Create projects from blueprints")
    subparsers = parser.add_subparsers(dest="command", required=True)

    new_parser = subparsers.add_parser("new", help="create a new directory and run init in it")
    new_parser.add_argument("project_name", nargs="?", help="Name of the new project")
    new_parser.add_argument("--directory", "--dir", help="Directory to create instead of one named after the project")
    _add_common_options(new_parser)

    init_parser = subparsers.add_parser("init", help="install a blueprint into the current directory")
    init_parser.add_argument("--name", help="Project name; defaults to package.json or the directory name")
    _add_common_options(init_parser)

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _handle_new(args: argparse.Namespace, reporter: StreamReporter) -> InstallResult:
    command = NewCommand(reporter=reporter)
    return asyncio.run(command.execute(args.project_name, NewOptions.from_namespace(args)))


def _handle_init(args: argparse.Namespace, reporter: StreamReporter) -> InstallResult:
    command = InitCommand(reporter=reporter)
    return asyncio.run(command.execute(InitOptions.from_namespace(args)))


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    reporter = StreamReporter(write_level=WriteLevel.DEBUG if args.verbose else WriteLevel.INFO)
    handlers = {"new": _handle_new, "init": _handle_init}

    try:
        result = handlers[args.command](args, reporter)
    except SaplingError as exc:
        reporter.write_error_line(exc.message)
        return 1
    except FileExistsError as exc:
        reporter.write_error_line(f"Refusing to overwrite existing files: {exc}")
        return 1

    verb = "Would create" if result.dry_run else "Created"
    sys.stdout.write(f"{verb} project at {result.project_root}\n")
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
