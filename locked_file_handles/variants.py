from __future__ import annotations
from typing import Iterator

from .errors import WriteError
from .handle import FileHandle
from .policy import APPEND, READ, WRITE


class FileReader(FileHandle):
    """Read-only handle under a shared lock."""
    policy = READ

    def read_line(self) -> str:
        """
        Read the next line with trailing whitespace removed.
        Returns "" at end of stream.
        """
        fh = self._require_open("read from")
        if self.is_at_end():
            return ""
        return fh.readline().decode(self.encoding, self.errors).rstrip()

    def iter_lines(self) -> Iterator[str]:
        while not self.is_at_end():
            yield self.read_line()


class FileWriter(FileHandle):
    """Truncating write handle under an exclusive lock."""
    policy = WRITE

    def write_string(self, s: str) -> int:
        fh = self._require_open("write to")
        data = s.encode(self.encoding, self.errors)
        try:
            n = fh.write(data)
            fh.flush()
        except OSError as e:
            raise WriteError(f"Failed to write to file {self.path}: {e}", self.path) from e
        return n


class FileAppender(FileWriter):
    policy = APPEND
