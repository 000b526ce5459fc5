"""
Command line entry points.

Usage:
  git-obsidian-sync [-v] [-c CONFIG] [CONFIG]         # Run the synchronization
  git-obsidian-sync-install-hook [-r REPO] [-c CONFIG]  # Install the post-commit hook
  obsidian-sync-lint [--all | --black ...] [--fix] [PATHS...]
"""

import argparse
import sys
from typing import List, Optional

from .config.config_loader import DEFAULT_CONFIG_FILENAME
from .core.orchestrator import run_sync
from .errors import SyncError
from .hooks.installer import install_post_commit_hook
from .linting.dispatcher import LintDispatcher, default_linters
from .utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def _add_logging_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output.")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file.")
    parser.add_argument("--json-logs", action="store_true", help="Emit logs as JSON.")


def _setup_logging(args: argparse.Namespace) -> None:
    setup_logging(
        log_level="DEBUG" if args.verbose else "INFO",
        log_to_file=bool(args.log_file),
        log_file_path=args.log_file,
        json_format=args.json_logs
    )


def build_sync_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-obsidian-sync",
        description="Synchronize Markdown files from a Git repository into an Obsidian vault.",
    )
    parser.add_argument(
        "config_path",
        nargs="?",
        default=None,
        metavar="CONFIG_PATH",
        help=f"Configuration file (default: {DEFAULT_CONFIG_FILENAME}).",
    )
    parser.add_argument("-c", "--config", default=None, help="Configuration file, takes precedence over CONFIG_PATH.")
    _add_logging_arguments(parser)
    return parser


def sync_main(argv: Optional[List[str]] = None) -> int:
    args = build_sync_parser().parse_args(argv)
    _setup_logging(args)

    config_path = args.config or args.config_path
    try:
        report = run_sync(config_path)
    except SyncError as e:
        logger.error(str(e))
        return 1

    for result in report.results:
        if not result.success:
            logger.error(f"{result.status.value}: {result.source_path} -> {result.target_path}: {result.error_message}")
    return 0 if report.success else 1


def build_install_hook_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="git-obsidian-sync-install-hook",
        description="Install the post-commit hook that synchronizes the repository into the vault.",
    )
    parser.add_argument("-r", "--repo", default=".", help="Repository path (default: .).")
    parser.add_argument(
        "-c", "--config", default=DEFAULT_CONFIG_FILENAME,
        help=f"Configuration file (default: {DEFAULT_CONFIG_FILENAME})."
    )
    parser.add_argument("--python", default=None, help="Interpreter the hook runs (default: current one).")
    _add_logging_arguments(parser)
    return parser


def install_hook_main(argv: Optional[List[str]] = None) -> int:
    args = build_install_hook_parser().parse_args(argv)
    _setup_logging(args)

    try:
        install_post_commit_hook(args.repo, args.config, args.python)
    except SyncError as e:
        logger.error(str(e))
        return 1

    logger.info("Installation completed!")
    return 0


def build_lint_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="obsidian-sync-lint",
        description="Run code-quality tools on Python and shell sources.",
    )
    for linter in default_linters():
        parser.add_argument(
            f"--{linter.name}",
            dest="tools",
            action="append_const",
            const=linter.name,
            help=f"Run {linter.name} ({linter.description.lower()}).",
        )
    parser.add_argument("--all", action="store_true", help="Run every linter that applies (default).")
    parser.add_argument("--fix", action="store_true", help="Let tools that support it rewrite files.")
    parser.add_argument("paths", nargs="*", default=["."], help="Files or directories (default: .).")
    _add_logging_arguments(parser)
    return parser


def lint_main(argv: Optional[List[str]] = None) -> int:
    args = build_lint_parser().parse_args(argv)
    _setup_logging(args)

    tools = None if args.all else args.tools
    try:
        results = LintDispatcher().run(args.paths, tools=tools, fix=args.fix)
    except (SyncError, ValueError) as e:
        logger.error(str(e))
        return 1

    for result in results:
        if result.output:
            print(result.output)

    if all(result.success for result in results):
        logger.info("All linting checks passed!")
        return 0
    logger.warning("Some linting issues were found. Review the output above.")
    return 1


def main() -> None:
    sys.exit(sync_main())


def install_hook() -> None:
    sys.exit(install_hook_main())


def lint() -> None:
    sys.exit(lint_main())


if __name__ == "__main__":
    main()
