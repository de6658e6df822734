"""Subcommand implementations for the ``inkwell`` CLI."""

import argparse
import logging
import sys
from dataclasses import replace

import anyio

from inkwell.app import Blog
from inkwell.config import BlogConfig
from inkwell.data.errors import DataError
from inkwell.data.migrate import migrate
from inkwell.errors import ConfigurationError


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level.upper(),
        format="%(asctime)s %(levelname)-8s %(name)s: %(message)s",
    )


def run_command(args: argparse.Namespace, environ: dict[str, str] | None = None) -> int:
    """Run the parsed subcommand; return the process exit code."""
    try:
        config = BlogConfig.from_env(environ)
        if args.log_level:
            config = replace(config, log_level=args.log_level)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 2

    _configure_logging(config.log_level)

    if args.command == "run":
        from inkwell.server.dev import run_server

        blog = Blog(config)
        run_server(
            blog,
            args.host or config.host,
            args.port or config.port,
            log_level=config.log_level,
            reload=args.reload,
        )
        return 0

    try:
        if args.command == "migrate":
            print(anyio.run(_migrate, config))
        elif args.command == "stats":
            print(f"{anyio.run(_count, config)} post(s)")
    except DataError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


async def _migrate(config: BlogConfig) -> str:
    blog = Blog(config)
    async with blog.db:
        result = await migrate(blog.db)
    return result.summary


async def _count(config: BlogConfig) -> int:
    blog = Blog(config)
    async with blog.db:
        return await blog.store.count()
