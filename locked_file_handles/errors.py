from __future__ import annotations
from typing import Optional


class FileHandleError(Exception):
    """Base error for locked file handles. Carries the path it concerns."""
    def __init__(self, message: str, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class OpenError(FileHandleError):
    pass


class LockError(FileHandleError):
    def __init__(self, message: str, path: Optional[str] = None, lock_kind: Optional[str] = None) -> None:
        super().__init__(message, path)
        self.lock_kind = lock_kind


class NotOpenError(FileHandleError):
    pass


class WriteError(FileHandleError):
    pass
