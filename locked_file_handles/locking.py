"""
Advisory lock mechanism for open file objects, on top of portalocker.

portalocker uses flock on POSIX and LockFileEx on Windows, so shared locks
stay shared on both.
"""
from __future__ import annotations
import logging
from typing import IO

import portalocker

from .policy import LockKind

logger = logging.getLogger(__name__)

_FLAGS = {
    LockKind.SHARED: portalocker.LOCK_SH,
    LockKind.EXCLUSIVE: portalocker.LOCK_EX,
}

# what acquire() raises when the lock cannot be taken
LOCK_FAILURES = (OSError, portalocker.exceptions.LockException)


def acquire(fh: IO[bytes], kind: LockKind, blocking: bool = False) -> None:
    """
    Lock the open file `fh`. Raises one of LOCK_FAILURES
    (portalocker.exceptions.AlreadyLocked on contention) if the lock cannot be taken.
    """
    flags = _FLAGS[kind]
    if not blocking:
        flags |= portalocker.LOCK_NB
    portalocker.lock(fh, flags)
    logger.debug("lock (%s) acquired on fd %d", kind.value, fh.fileno())


def release(fh: IO[bytes]) -> None:
    portalocker.unlock(fh)
