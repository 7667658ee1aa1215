"""Locking the host device on request."""

import asyncio
import sys
from typing import Protocol

from ..logging_config import get_logger

logger = get_logger(__name__)

WINDOWS_LOCK_COMMAND = ["rundll32.exe", "user32.dll,LockWorkStation"]
LOGIND_LOCK_COMMAND = ["loginctl", "lock-session"]


class IDeviceLocker(Protocol):
    """Locks the device the bot runs on."""

    async def lock(self) -> None:
        """Lock the device."""
        ...


class NullDeviceLocker:
    """Default locker: records the request and does nothing."""

    async def lock(self) -> None:
        logger.warning("Device lock requested but DEVICE_LOCK_ENABLED is off")


class WorkstationLocker:
    """Runs the operating system's lock command."""

    def __init__(self, command: list[str] | None = None, delay: float = 0.2):
        if command is None:
            command = WINDOWS_LOCK_COMMAND if sys.platform == "win32" else LOGIND_LOCK_COMMAND
        self._command = command
        self._delay = delay

    async def lock(self) -> None:
        """Lock after a short delay. Failures are logged, not raised."""
        await asyncio.sleep(self._delay)

        try:
            process = await asyncio.create_subprocess_exec(*self._command)
            return_code = await process.wait()
        except OSError as e:
            logger.error("Device lock failed: %s", e)
            return

        if return_code != 0:
            logger.warning(
                "Device lock command %s exited with %s", self._command, return_code
            )
        else:
            logger.info("Device locked")
