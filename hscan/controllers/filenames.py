"""
Filename handling

Validates user supplied output names, generates timestamp names for
automatic mode and runs the interactive prompt until a usable name is given.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from hscan.errors import InvalidFilenameError
from hscan.models.document import ValidatedFilename

logger = logging.getLogger(__name__)

FORBIDDEN_CHARACTERS = frozenset('/\\\x00<>:"|?*')
RESERVED_NAMES = (".", "..")
SUPPORTED_EXTENSIONS = ("pdf",)
AUTO_NAME_FORMAT = "%Y%m%d-%H%M%S"
PROMPT = "Please enter a filename for the scan (e.g. MyScan.pdf): "


def fetch_extension(filename: str) -> Optional[str]:
    """Return the text after the last dot, or None when there is nothing there."""
    if "." not in filename:
        return None
    extension = filename.rsplit(".", 1)[1]
    return extension or None


def validate_filename(proposed_name: str) -> ValidatedFilename:
    """Check a proposed output filename.

    Args:
        proposed_name: Name as typed by the user.

    Returns:
        ValidatedFilename: The accepted name and its extension.

    Raises:
        InvalidFilenameError: With the first rule the name breaks.
    """
    if not proposed_name:
        raise InvalidFilenameError("Filename cannot be empty.")

    if any(char in FORBIDDEN_CHARACTERS for char in proposed_name):
        raise InvalidFilenameError("Filename contains forbidden characters.")

    if proposed_name.startswith("-"):
        raise InvalidFilenameError("Filename cannot start with a hyphen (-).")

    if proposed_name in RESERVED_NAMES:
        raise InvalidFilenameError("Filename cannot be '.' or '..'.")

    if proposed_name != proposed_name.strip():
        raise InvalidFilenameError("Filename cannot start or end with spaces.")

    extension = fetch_extension(proposed_name)
    logger.debug("Found extension '%s' for '%s'", extension, proposed_name)

    if extension is None:
        raise InvalidFilenameError("Filename must have an extension.")
    if extension not in SUPPORTED_EXTENSIONS:
        raise InvalidFilenameError(f"File extension '{extension}' is not supported.")

    logger.debug("Filename '%s' is valid.", proposed_name)
    return ValidatedFilename(name=proposed_name, extension=extension)


def generate_filename(now: Optional[datetime] = None) -> ValidatedFilename:
    """Build a timestamp based name such as ``20240131-154500.pdf``."""
    timestamp = (now or datetime.now()).strftime(AUTO_NAME_FORMAT)
    logger.debug("Manual filename not required. Using timestamp: [%s].", timestamp)
    return ValidatedFilename(name=f"{timestamp}.pdf", extension="pdf")


def prompt_for_filename(read: Optional[Callable[[str], str]] = None) -> ValidatedFilename:
    """Ask for a filename until one passes validation.

    ``read`` defaults to the builtin input().
    """
    read = read or input
    logger.debug("Manual filename required.")
    while True:
        proposed = read(PROMPT)
        logger.debug("Validating filename...")
        try:
            return validate_filename(proposed)
        except InvalidFilenameError as e:
            logger.error("Error: %s", e)
