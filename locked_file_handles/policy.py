from __future__ import annotations
from enum import Enum
from typing import NamedTuple


class LockKind(str, Enum):
    SHARED = "shared"        # other shared holders allowed
    EXCLUSIVE = "exclusive"  # single holder


class Policy(NamedTuple):
    """
    (open mode, lock kind) pair a file handle variant is opened with.
    `truncate` marks modes that empty the file; the handle truncates only
    once the lock is held.
    """
    mode: str
    lock_kind: LockKind
    truncate: bool = False


READ = Policy("rb", LockKind.SHARED)
WRITE = Policy("wb", LockKind.EXCLUSIVE, truncate=True)
APPEND = Policy("ab", LockKind.EXCLUSIVE)
