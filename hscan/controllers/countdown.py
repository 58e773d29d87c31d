import logging
import time
from typing import Callable, Optional, Union

from hscan.errors import InvalidWaitError

logger = logging.getLogger(__name__)


def parse_wait_seconds(value: Union[int, str]) -> int:
    """Return ``value`` as a non-negative int or raise InvalidWaitError."""
    if isinstance(value, bool):
        raise InvalidWaitError(value)
    if isinstance(value, int):
        seconds = value
    else:
        text = str(value).strip()
        if not (text.isascii() and text.isdigit()):
            raise InvalidWaitError(value)
        seconds = int(text)
    if seconds < 0:
        raise InvalidWaitError(value)
    return seconds


def _should_announce(remaining: int) -> bool:
    return remaining <= 5 or remaining % 5 == 0


def countdown(seconds: Union[int, str], sleep: Optional[Callable[[float], None]] = None) -> None:
    """Block for ``seconds`` seconds, announcing progress along the way.

    Every second is announced during the last five, otherwise only on
    multiples of five. The value is validated before anything sleeps.
    """
    total = parse_wait_seconds(seconds)
    sleep = sleep or time.sleep
    if total == 0:
        return

    logger.debug("Waiting %d seconds before scanning.", total)
    for remaining in range(total, 0, -1):
        if _should_announce(remaining):
            unit = "second" if remaining == 1 else "seconds"
            logger.info("Scanning in %d %s...", remaining, unit)
        sleep(1)
