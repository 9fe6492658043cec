from .errors import FileHandleError, LockError, NotOpenError, OpenError, WriteError
from .handle import FileHandle
from .policy import APPEND, READ, WRITE, LockKind, Policy
from .variants import FileAppender, FileReader, FileWriter

__all__ = [
    "FileHandle",
    "FileReader",
    "FileWriter",
    "FileAppender",
    "Policy",
    "LockKind",
    "READ",
    "WRITE",
    "APPEND",
    "FileHandleError",
    "OpenError",
    "LockError",
    "NotOpenError",
    "WriteError",
]
