"""
System Dependency Check

Verifies that the external binaries the probe relies on are installed.
Run once at startup, before any ping test is scheduled.
"""

import logging
import shutil
from typing import Iterable, List

from config.settings import REQUIRED_DEPENDENCIES


def get_missing_dependencies(
    binaries: Iterable[str] = REQUIRED_DEPENDENCIES,
) -> List[str]:
    """
    List required binaries that are not on PATH.

    Returns:
        Names of missing binaries, empty list if everything is installed
    """
    return [binary for binary in binaries if shutil.which(binary) is None]


async def has_required_dependencies(
    binaries: Iterable[str] = REQUIRED_DEPENDENCIES,
) -> bool:
    """
    Check if every required binary is installed.

    Returns:
        True if all binaries were found, False otherwise

    Example:
        if not await has_required_dependencies():
            print("Install with: sudo apt-get install expect")
    """
    logger = logging.getLogger(__name__)

    missing = get_missing_dependencies(binaries)
    if missing:
        logger.warning(f"Missing required dependencies: {', '.join(missing)}")
        return False

    return True
