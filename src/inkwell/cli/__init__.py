"""Inkwell CLI: serve the blog and manage its database.

Entry point registered as ``inkwell`` in ``pyproject.toml``::

    [project.scripts]
    inkwell = "inkwell.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``inkwell`` command."""
    parser = argparse.ArgumentParser(
        prog="inkwell",
        description="Inkwell: a small blog served over ASGI.",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        choices=("critical", "error", "warning", "info", "debug"),
        help="Override INKWELL_LOG_LEVEL",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- inkwell run --------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Serve the blog")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--reload",
        action="store_true",
        help="Restart on code changes (builds the blog from the environment)",
    )

    # -- inkwell migrate ----------------------------------------------------
    subparsers.add_parser("migrate", help="Apply pending schema migrations")

    # -- inkwell stats ------------------------------------------------------
    subparsers.add_parser("stats", help="Print the number of stored posts")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from inkwell.cli._commands import run_command

    sys.exit(run_command(args))
