"""Target, output and temp directory bookkeeping."""

import logging
import shutil
from pathlib import Path

from hscan.config.scan import ScanConfig, TEMP_DIRECTORY_NAME
from hscan.errors import DirectoryProvisioningError
from hscan.models.document import ScanDirectories, ValidatedFilename

logger = logging.getLogger(__name__)


def ensure_directory(path: Path, label: str = "directory") -> Path:
    """Create ``path`` if needed and fail if it is still not a directory."""
    path = Path(path)
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.debug("mkdir failed for %s: %s", path, e)

    if not path.is_dir():
        raise DirectoryProvisioningError(path, label)

    logger.debug("Ensured %s '%s' exists.", label, path)
    return path


def resolve_directories(config: ScanConfig, filename: ValidatedFilename) -> ScanDirectories:
    """Derive output and temp directories from the target.

    A custom target is used verbatim for output; the default target gets a
    subdirectory named after the file extension.
    """
    target = Path(config.target_directory).expanduser()
    if config.custom_directory:
        output = target
        logger.debug("Target '%s' is a custom directory.", target)
    else:
        output = target / filename.extension
        logger.debug("Target '%s' is the default directory.", target)
    return ScanDirectories(target=target, output=output, temp=target / TEMP_DIRECTORY_NAME)


def provision_directories(dirs: ScanDirectories) -> ScanDirectories:
    """Create target, temp and output directories, in that order."""
    ensure_directory(dirs.target, "target directory")
    ensure_directory(dirs.temp, "temp directory")
    ensure_directory(dirs.output, "output directory")
    return dirs


def remove_temp_directory(dirs: ScanDirectories) -> None:
    """Delete the temp directory and everything in it, if present."""
    if not dirs.temp.is_dir():
        return
    logger.debug("Removing temp files...")
    shutil.rmtree(dirs.temp)
