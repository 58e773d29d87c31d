"""
Acquisition and conversion

Produces the final document either from a real scan (scanimage followed by
ImageMagick convert) or, in test mode, from a generated diagnostic report so
the pipeline can be exercised without a scanner attached.
"""

import getpass
import logging
import platform
import socket
from datetime import datetime
from pathlib import Path
from typing import Optional

from hscan.config.scan import ScanConfig, ToolSettings
from hscan.controllers.commands import run_command
from hscan.errors import ScanAcquisitionError
from hscan.models.document import AcquisitionResult, ScanDirectories, ValidatedFilename

logger = logging.getLogger(__name__)

RASTER_BASENAME = "scan_result"
REPORT_FILENAME = "scan_result.txt"


def scan_to_raster(dirs: ScanDirectories, tools: ToolSettings) -> Path:
    """Run the scanner and return the path of the raster it wrote.

    Raises:
        ScanAcquisitionError: If the scanner exits non-zero. The partial
            raster is removed first.
    """
    raster = dirs.temp / f"{RASTER_BASENAME}.{tools.scan_format}"
    logger.info("Performing scan...")
    result = run_command(
        [
            tools.scanner,
            f"--format={tools.scan_format}",
            "--mode", tools.scan_mode,
            "--resolution", str(tools.scan_resolution),
        ],
        stdout_path=raster,
    )
    if not result.ok:
        logger.info("Scan Unsuccessful.")
        raster.unlink(missing_ok=True)
        raise ScanAcquisitionError(result.returncode, result.output)

    logger.info("Scan Successful!")
    return raster


def convert_to_document(source: str, target: Path, tools: ToolSettings) -> bool:
    """Convert ``source`` (a path or an ImageMagick coder spec) into ``target``."""
    result = run_command([tools.converter, source, str(target)])
    if not result.ok:
        logger.error("Error: Conversion to '%s' failed. %s exit code: %s",
                     target, tools.converter, result.returncode)
        if result.output:
            logger.error("%s output: %s", tools.converter, result.output.strip())
        return False
    return True


def _current_user() -> str:
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def build_test_report(help_text: str, now: Optional[datetime] = None) -> str:
    """Return the text of the diagnostic page used in test mode."""
    timestamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    lines = [
        "--- Test Document ---",
        "",
        "This is a test document generated by hscan.",
        "No actual scan has taken place.",
        "",
        "Scan Simulation Details:",
        f"  Timestamp: {timestamp}",
        f"  Machine: {socket.gethostname()}",
        f"  User: {_current_user()}",
        f"  Operating System: {platform.system()}",
        f"  Kernel Version: {platform.release()}",
        "",
        "This file is for testing purposes only.",
        "",
        "---------------------",
        "",
        "Additional help (-h --help):",
        help_text,
        "",
        "---------------------",
    ]
    return "\n".join(lines) + "\n"


def write_test_report(path: Path, help_text: str, now: Optional[datetime] = None) -> Path:
    logger.debug("Generating dummy text file...")
    path.write_text(build_test_report(help_text, now), encoding="utf-8")
    return path


def acquire_document(
    config: ScanConfig,
    dirs: ScanDirectories,
    filename: ValidatedFilename,
    tools: ToolSettings,
    help_text: str = "",
) -> AcquisitionResult:
    """Produce the output document for this run.

    Returns:
        AcquisitionResult: ``created`` is True only when conversion succeeded.

    Raises:
        ScanAcquisitionError: Live mode only, when the scanner fails.
    """
    document = dirs.document_path(filename)

    if config.test_mode:
        logger.info("Test mode enabled. Faking scan...")
        report = write_test_report(dirs.temp / REPORT_FILENAME, help_text)
        logger.debug("Converting dummy text file to PDF...")
        created = convert_to_document(f"TEXT:{report}", document, tools)
    else:
        raster = scan_to_raster(dirs, tools)
        logger.debug("Converting to PDF...")
        created = convert_to_document(str(raster), document, tools)

    return AcquisitionResult(document=document if created else None, created=created)
