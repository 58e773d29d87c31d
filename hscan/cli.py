"""Command-line interface for hscan.

Parses flags into a ScanConfig and runs the scan-to-document pipeline:
filename, directories, optional countdown, scan (or test report), conversion,
temp cleanup, then the optional open and print actions.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from hscan import __version__
from hscan.config.logger import setup_logging
from hscan.config.scan import ScanConfig, ToolSettings, default_target_directory, load_tool_settings
from hscan.controllers.acquisition import acquire_document
from hscan.controllers.countdown import countdown, parse_wait_seconds
from hscan.controllers.directories import provision_directories, remove_temp_directory, resolve_directories
from hscan.controllers.filenames import generate_filename, prompt_for_filename
from hscan.controllers.post_actions import open_document, print_document
from hscan.errors import HScanError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that exits with status 1 on usage errors."""

    def error(self, message: str):
        self.print_usage(sys.stderr)
        self.exit(EXIT_FAILURE, f"{self.prog}: error: {message}\n")


def _build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        argparse.ArgumentParser: Parser for all scan options.
    """
    parser = _ArgumentParser(
        prog="hscan",
        allow_abbrev=False,
        description="Scan a page to PDF, then optionally open and print it.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("-t", "--test", action="store_true",
                        help="Enable test mode (fake the scan, no scanner needed)")
    parser.add_argument("-a", "--auto", action="store_true", help="Auto generate file names")
    parser.add_argument(
        "-d", "--directory",
        metavar="PATH",
        help=f"Set directory (default: {default_target_directory()})",
    )
    parser.add_argument("-o", "--open", action="store_true", help="Open the file")
    parser.add_argument("-p", "--print", action="store_true", help="Print the file")
    parser.add_argument("-b", "--blank-pages", action="store_true",
                        help="Print a blank page instead of the scanned file")
    parser.add_argument("-w", "--wait", metavar="SECONDS", default="0",
                        help="Count down SECONDS before scanning (default: 0)")
    return parser


def _config_from_args(args: argparse.Namespace) -> ScanConfig:
    """Turn parsed arguments into a ScanConfig.

    Raises:
        InvalidWaitError: If --wait is not a non-negative integer.
    """
    custom_directory = args.directory is not None
    target = Path(args.directory).expanduser() if custom_directory else default_target_directory()
    return ScanConfig(
        verbose=args.verbose,
        test_mode=args.test,
        auto_name=args.auto,
        target_directory=target,
        custom_directory=custom_directory,
        open_after=args.open,
        print_after=args.print,
        print_blank=args.blank_pages,
        wait_seconds=parse_wait_seconds(args.wait),
    )


def _log_enabled_options(config: ScanConfig) -> None:
    flags = {
        "Verbose mode (-v)": config.verbose,
        "Test mode (-t)": config.test_mode,
        "Automatic mode (-a)": config.auto_name,
        "Open file (-o)": config.open_after,
        "Print file (-p)": config.print_after,
        "Blank pages (-b)": config.print_blank,
    }
    for label, enabled in flags.items():
        if enabled:
            logger.debug("%s enabled.", label)
    if config.custom_directory:
        logger.debug("Target directory set to '%s'.", config.target_directory)
    if config.wait_seconds:
        logger.debug("Wait before scanning set to %d seconds.", config.wait_seconds)


def run(
    config: ScanConfig,
    tools: ToolSettings,
    read: Optional[Callable[[str], str]] = None,
    help_text: str = "",
) -> int:
    """Run the pipeline once.

    Args:
        config: Parsed run options.
        tools: External command names and scan parameters.
        read: Prompt function used when no auto name is requested
            (defaults to input()).
        help_text: Embedded into the test mode report.

    Returns:
        Exit status code (0 on success, 1 if no document was produced).

    Raises:
        HScanError: On directory or scanner failures.
    """
    logger.info("Checking filename...")
    filename = generate_filename() if config.auto_name else prompt_for_filename(read)
    logger.debug("Filename created: '%s'", filename)

    logger.info("Checking and creating directories...")
    dirs = resolve_directories(config, filename)
    try:
        provision_directories(dirs)
        if config.wait_seconds:
            countdown(config.wait_seconds)
        result = acquire_document(config, dirs, filename, tools, help_text)
    finally:
        remove_temp_directory(dirs)

    if not result.created:
        logger.error("Error: No document was created.")
        return EXIT_FAILURE

    if config.open_after:
        open_document(result.document, tools)

    if config.print_after:
        print_document(result.document, tools, blank=config.print_blank)

    logger.info("Done.")
    return EXIT_OK


def main(argv: Optional[list[str]] = None) -> None:
    """CLI entry point.

    Args:
        argv: Optional list of arguments. Defaults to sys.argv[1:].

    Notes:
        This function is used by both the console_script `hscan` and
        by module execution via `python -m hscan`.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)
    if args.directory is not None and not args.directory.strip():
        parser.error("argument -d/--directory: expected a non-empty directory path")

    setup_logging(verbose=args.verbose)

    try:
        tools = load_tool_settings()
        config = _config_from_args(args)
        _log_enabled_options(config)
        code = run(config, tools, help_text=parser.format_help())
    except HScanError as e:
        logger.error("Error: %s", e)
        code = EXIT_FAILURE
    except ValidationError as e:
        logger.error("Error: Invalid configuration: %s", e)
        code = EXIT_FAILURE
    except EOFError:
        logger.error("Error: No filename given.")
        code = EXIT_FAILURE
    except KeyboardInterrupt:
        logger.error("Interrupted.")
        code = EXIT_INTERRUPTED

    if code != 0:
        sys.exit(code)
