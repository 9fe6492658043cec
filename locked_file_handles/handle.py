from __future__ import annotations
import logging
import os
from typing import IO, Optional

from . import locking
from .errors import LockError, NotOpenError, OpenError
from .events import EventCallback, Events
from .policy import LockKind, Policy

logger = logging.getLogger(__name__)


class FileHandle:
    """
    A file that is open only while it holds an advisory lock.

    Subclasses set `policy` to the (mode, lock kind) pair they are opened with.
    The handle is either closed (no OS file) or open and locked; open() either
    reaches that state or leaves nothing behind.
    """
    policy: Optional[Policy] = None

    def __init__(
        self,
        path: str | os.PathLike[str],
        *,
        encoding: str = "utf-8",
        errors: str = "replace",
        blocking: bool = False,
        on_event: Optional[EventCallback] = None,
    ) -> None:
        self._fh: Optional[IO[bytes]] = None
        if self.policy is None:
            raise TypeError(f"{type(self).__name__} has no file policy; use FileReader, FileWriter or FileAppender")
        path = os.fspath(path)
        if not isinstance(path, str):
            raise TypeError(f"path must be str or os.PathLike[str], not {type(path).__name__}")
        self._path = path
        # lines are split on b"\n", so the codec must encode newline as that byte
        try:
            newline = "\n".encode(encoding)
        except LookupError as e:
            raise ValueError(f"unknown encoding {encoding!r}") from e
        if newline != b"\n":
            raise ValueError(f"encoding {encoding!r} is not ASCII-compatible")
        self.encoding = encoding
        self.errors = errors
        self.blocking = blocking
        self._events = Events(on_event)

    @property
    def path(self) -> str:
        return self._path

    file_name = path

    @property
    def mode(self) -> str:
        return self.policy.mode

    @property
    def lock_kind(self) -> LockKind:
        return self.policy.lock_kind

    @property
    def is_open(self) -> bool:
        return self._fh is not None

    def open(self) -> "FileHandle":
        """
        Open the file with the policy's mode and lock it. No-op if already open.

        Raises OpenError if the OS refuses the file and LockError if the lock
        cannot be taken; in both cases the handle stays closed and, for
        truncating modes, the file content is untouched.
        """
        if self._fh is not None:
            return self

        self._events.emit("open.start", self._path, mode=self.mode, lock=self.lock_kind.value)
        try:
            fh = self._open_file()
        except (OSError, ValueError) as e:
            self._events.emit("open.failed", self._path, error=str(e))
            reason = e.strerror if isinstance(e, OSError) and e.strerror else e
            raise OpenError(f"Failed to open file {self._path}: {reason}", self._path) from e

        try:
            locking.acquire(fh, self.lock_kind, blocking=self.blocking)
        except locking.LOCK_FAILURES as e:
            self._discard(fh)
            logger.error("lock %s on %s failed: %s", self.lock_kind.value, self._path, e)
            self._events.emit("lock.failed", self._path, lock=self.lock_kind.value, error=str(e))
            raise LockError(
                f"Failed to acquire a lock of type {self.lock_kind.value} on file {self._path}",
                self._path,
                lock_kind=self.lock_kind.value,
            ) from e
        except BaseException:
            self._discard(fh)
            raise

        if self.policy.truncate:
            try:
                fh.truncate(0)
            except OSError as e:
                self._release(fh)
                self._events.emit("open.failed", self._path, error=str(e))
                raise OpenError(f"Failed to truncate file {self._path}: {e.strerror or e}", self._path) from e

        self._fh = fh
        logger.debug("opened %s (mode=%s, lock=%s)", self._path, self.mode, self.lock_kind.value)
        self._events.emit("open.done", self._path, mode=self.mode, lock=self.lock_kind.value)
        return self

    def _open_file(self) -> IO[bytes]:
        if not self.policy.truncate:
            return open(self._path, self.mode)
        # create without truncating; the content is dropped once the lock is held
        flags = os.O_WRONLY | os.O_CREAT | getattr(os, "O_BINARY", 0)
        fd = os.open(self._path, flags, 0o666)
        try:
            return os.fdopen(fd, "wb")
        except BaseException:
            os.close(fd)
            raise

    def close(self) -> None:
        """
        Unlock and close the file. Release failures are logged; the handle
        always ends up closed.
        """
        fh = self._fh
        if fh is None:
            raise NotOpenError(f"Cannot close file {self._path} because it is not currently open.", self._path)
        self._fh = None
        self._release(fh)
        logger.debug("closed %s", self._path)
        self._events.emit("close.done", self._path)

    def is_at_end(self) -> bool:
        fh = self._require_open("check end of")
        if fh.readable():
            return not fh.peek(1)
        # write_string flushes, so the OS size is current
        return fh.tell() >= os.fstat(fh.fileno()).st_size

    def _release(self, fh: IO[bytes]) -> None:
        try:
            locking.release(fh)
        except locking.LOCK_FAILURES as e:
            logger.warning("unlock of %s failed: %s", self._path, e)
        self._discard(fh)

    def _require_open(self, action: str) -> IO[bytes]:
        if self._fh is None:
            raise NotOpenError(f"Cannot {action} file {self._path} because it is not currently open.", self._path)
        return self._fh

    def _discard(self, fh: IO[bytes]) -> None:
        try:
            fh.close()
        except OSError as e:
            logger.warning("close of %s failed: %s", self._path, e)

    def __str__(self) -> str:
        s = f"File name: {self._path}\n"
        if self._fh is not None:
            s += f"Lock type: {self.lock_kind.value}\n"
            s += f"File mode: {self.mode}\n"
        return s

    def __repr__(self) -> str:
        state = "open" if self._fh is not None else "closed"
        return f"<{type(self).__name__} {self._path!r} {state}>"

    def __enter__(self) -> "FileHandle":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        if self._fh is not None:
            self.close()

    def __del__(self) -> None:
        if getattr(self, "_fh", None) is None:
            return
        try:
            self.close()
        except Exception as e:
            logger.debug("teardown close of %s failed: %s", getattr(self, "_path", "?"), e)
