"""Command-line interface for the runner policy check.

Typical use inside a workflow step::

    python -m runner_policy --allowed-runners "ubuntu-latest self-hosted"

When run as a GitHub Action the allowlist comes from the ``allowed-runners``
input and the workspace from ``GITHUB_WORKSPACE``.
"""
from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Mapping, Optional

from . import __version__
from .actions import ActionsChannel
from .config import resolve_settings
from .errors import ConfigError
from .policy import run

LOG_FORMAT = "[runner-policy] %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runner-policy",
        description="Fail when workflows use runner tags outside the allowlist.",
    )
    parser.add_argument(
        "--workspace",
        default=None,
        help="Repository root (default: $GITHUB_WORKSPACE or the current directory)",
    )
    parser.add_argument(
        "--allowed-runners",
        default=None,
        help="Space-separated allowed runner tags; '*' allows everything",
    )
    parser.add_argument(
        "--workflows-dir",
        default=None,
        help="Workflow directory, relative to the workspace (default: .github/workflows)",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML config file (default: .github/runner-policy.yml when present)",
    )
    parser.add_argument(
        "--no-summary",
        action="store_true",
        help="Do not append a report to $GITHUB_STEP_SUMMARY",
    )
    parser.add_argument("--verbose", action="store_true", help="Log every file processed")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbose: bool = False) -> logging.Handler:
    """Attach a stderr handler to the package logger and return it."""
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger = logging.getLogger("runner_policy")
    package_logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    package_logger.addHandler(handler)
    return handler


def main(argv: List[str] | None = None, env: Optional[Mapping[str, str]] = None) -> int:
    """Entry point for the CLI. Returns the process exit code."""
    args = build_parser().parse_args(sys.argv[1:] if argv is None else argv)
    handler = configure_logging(args.verbose)
    env = os.environ if env is None else env
    channel = ActionsChannel(env)
    try:
        try:
            settings = resolve_settings(args, env)
        except ConfigError as exc:
            channel.set_failed(str(exc))
            return 2
        run(settings, channel)
        return channel.exit_code
    finally:
        logging.getLogger("runner_policy").removeHandler(handler)


__all__ = ["build_parser", "configure_logging", "main"]
