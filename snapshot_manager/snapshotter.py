from __future__ import annotations

import datetime
import logging
import subprocess
from typing import Callable

logger = logging.getLogger(__name__)

DEFAULT_BINARY = "zfs"


class SnapshotError(Exception):
    """Base class for a snapshot attempt that did not succeed."""

    reason: str

    def __init__(self, volume: str, target: str, message: str) -> None:
        super().__init__(message)
        self.volume = volume
        self.target = target


class SnapshotSpawnError(SnapshotError):
    """The snapshot command could not be started at all."""

    reason = "spawn"

    def __init__(self, volume: str, target: str, error: OSError) -> None:
        super().__init__(volume, target, f"Could not run snapshot command for {target}: {error}")
        self.errno = error.errno


class SnapshotCommandError(SnapshotError):
    """The snapshot command ran but exited unsuccessfully."""

    reason = "command"

    def __init__(self, volume: str, target: str, returncode: int) -> None:
        super().__init__(volume, target, f"Snapshot command for {target} exited with status {returncode}")
        self.returncode = returncode


def snapshot_name(volume: str, day: datetime.date) -> str:
    return f"{volume}@{day.strftime('%Y-%m-%d')}"


class Snapshotter:
    """Creates one dated snapshot per call by shelling out to the zfs tool.

    Callers are expected to have checked the volume against the whitelist.
    The child's output is left alone and never reported back to the caller.
    """

    def __init__(
        self,
        binary: str = DEFAULT_BINARY,
        today: Callable[[], datetime.date] = datetime.date.today,
    ) -> None:
        self.binary = binary
        self._today = today

    def command(self, target: str) -> list[str]:
        return [self.binary, "snapshot", target]

    def perform(self, volume: str) -> str:
        target = snapshot_name(volume, self._today())
        logger.info(f"Creating snapshot {target}")

        try:
            completed = subprocess.run(self.command(target), stdin=subprocess.DEVNULL, check=False)
        except OSError as exc:
            logger.error(f"Failed creating snapshot {target}: {exc}")
            raise SnapshotSpawnError(volume, target, exc) from exc

        if completed.returncode != 0:
            logger.error(f"Failed creating snapshot {target}, exit status {completed.returncode}")
            raise SnapshotCommandError(volume, target, completed.returncode)

        logger.info(f"Created snapshot {target} successfully.")
        return target
