"""Opening and printing the finished document."""

import logging
import tempfile
from pathlib import Path

from hscan.config.scan import ToolSettings
from hscan.controllers.commands import run_command, spawn_detached

logger = logging.getLogger(__name__)

NO_DEFAULT_DESTINATION = "No default destination"
BLANK_PAGE_FILENAME = "blank.pdf"
# A4 at 300 DPI
BLANK_PAGE_SIZE = "2480x3508"
BLANK_PAGE_DENSITY = "300"

PRINTER_HINT = """
    Printer Issues?

    It appears that no default printer is set on this system.
    Use the 'lpoptions' command to set one:
        1. List available printers using 'lpstat -p -d'
        2. Set a default printer using 'lpoptions -d <printer_name>'

    Try again once the issue is resolved.
"""


def open_document(document: Path, tools: ToolSettings) -> bool:
    """Open the document and its folder with the desktop opener.

    The opener is not waited on. Returns False when the document is missing or
    the opener could not be started.
    """
    if not document.is_file():
        logger.error("Error: Cannot open file. PDF was not found at %s", document)
        return False

    logger.debug("Opening generated PDF: %s", document)
    opened_folder = spawn_detached([tools.opener, str(document.parent)])
    opened_file = spawn_detached([tools.opener, str(document)])
    if not (opened_folder and opened_file):
        logger.error("Error: Could not start '%s' to open %s", tools.opener, document)
        return False
    return True


def make_blank_page(directory: Path, tools: ToolSettings) -> Path | None:
    """Render a single white A4 page to PDF inside ``directory``."""
    blank = directory / BLANK_PAGE_FILENAME
    result = run_command([
        tools.converter,
        "-size", BLANK_PAGE_SIZE,
        "xc:white",
        "-units", "PixelsPerInch",
        "-density", BLANK_PAGE_DENSITY,
        str(blank),
    ])
    if not result.ok:
        logger.error("Error: Failed to generate blank page. %s exit code: %s",
                     tools.converter, result.returncode)
        return None
    return blank


def send_to_printer(document: Path, tools: ToolSettings) -> bool:
    logger.debug("Sending PDF to printer: %s", document)
    result = run_command([tools.spooler, str(document)])

    if not result.ok:
        logger.error("Error: Failed to send PDF to printer. %s exit code: %s",
                     tools.spooler, result.returncode)
        logger.error("%s command output: %s", tools.spooler, result.output.strip())
        if NO_DEFAULT_DESTINATION in result.output:
            logger.error(PRINTER_HINT)
        return False

    logger.debug("PDF successfully sent to printer.")
    return True


def print_document(document: Path, tools: ToolSettings, blank: bool = False) -> bool:
    """Print the document, or a generated blank page when ``blank`` is set.

    Returns whether the spooler accepted the job. Failures are only logged.
    """
    if not document.is_file():
        logger.error("Error: Cannot print file. PDF was not found at %s", document)
        return False

    if not blank:
        return send_to_printer(document, tools)

    with tempfile.TemporaryDirectory(prefix="hscan_blank_") as tmp:
        logger.debug("Printing a blank page instead of %s", document)
        page = make_blank_page(Path(tmp), tools)
        if page is None:
            return False
        return send_to_printer(page, tools)
