import errno
import os

import pytest
from locked_file_handles import FileAppender, FileReader, FileWriter, WriteError

def write_all(cls, path, *chunks):
    h = cls(path)
    h.open()
    for c in chunks:
        h.write_string(c)
    h.close()

def read_all(path, n):
    r = FileReader(path)
    r.open()
    try:
        return [r.read_line() for _ in range(n)]
    finally:
        r.close()

def test_write_then_read(tmp_path):
    p = str(tmp_path / "rt.txt")
    write_all(FileWriter, p, "abc", "def")
    assert read_all(p, 3) == ["abcdef", "", ""]

def test_append(tmp_path):
    p = str(tmp_path / "app.txt")
    write_all(FileWriter, p, "line1\n")
    write_all(FileAppender, p, "line2\n")
    assert read_all(p, 3) == ["line1", "line2", ""]

def test_writer_truncates(tmp_path):
    p = tmp_path / "trunc.txt"
    p.write_text("old content that is long\n")
    write_all(FileWriter, str(p), "new\n")
    assert p.read_bytes() == b"new\n"

def test_appender_creates_missing_file(tmp_path):
    p = tmp_path / "sub_new.txt"
    write_all(FileAppender, str(p), "first\n")
    assert p.read_bytes() == b"first\n"

def test_read_strips_trailing_whitespace(tmp_path):
    p = tmp_path / "ws.txt"
    p.write_bytes(b"  padded \t\r\nnext\n")
    # leading whitespace is kept
    assert read_all(str(p), 3) == ["  padded", "next", ""]

def test_empty_file(tmp_path):
    p = tmp_path / "empty.txt"
    p.write_bytes(b"")
    r = FileReader(str(p))
    r.open()
    assert r.is_at_end()
    assert r.read_line() == ""
    r.close()

def test_is_at_end_tracks_cursor(tmp_path):
    p = tmp_path / "cursor.txt"
    p.write_bytes(b"a\nb\n")
    with FileReader(str(p)) as r:
        assert not r.is_at_end()
        r.read_line()
        assert not r.is_at_end()
        r.read_line()
        assert r.is_at_end()

def test_writer_is_at_end(tmp_path):
    with FileWriter(str(tmp_path / "w.txt")) as w:
        assert w.is_at_end()
        w.write_string("xyz")
        assert w.is_at_end()

def test_iter_lines(tmp_path):
    p = str(tmp_path / "iter.txt")
    write_all(FileWriter, p, "Testing here!\n", "More tests!\n")
    write_all(FileAppender, p, "Appending once!\n", "Appending twice!\n")
    with FileReader(p) as r:
        assert list(r.iter_lines()) == [
            "Testing here!",
            "More tests!",
            "Appending once!",
            "Appending twice!",
        ]

def test_encoding(tmp_path):
    p = str(tmp_path / "enc.txt")
    with FileWriter(p, encoding="latin-1") as w:
        assert w.write_string("zoë\ncafé\n") == 9
    with FileReader(p, encoding="latin-1") as r:
        assert list(r.iter_lines()) == ["zoë", "café"]
        assert r.read_line() == ""

def test_encoding_must_keep_newline_byte(tmp_path):
    p = str(tmp_path / "wide.txt")
    with pytest.raises(ValueError):
        FileReader(p, encoding="utf-16-le")
    with pytest.raises(ValueError):
        FileWriter(p, encoding="utf-32")
    with pytest.raises(ValueError):
        FileWriter(p, encoding="no-such-codec")

def test_invalid_bytes_are_replaced(tmp_path):
    p = tmp_path / "bad.txt"
    p.write_bytes(b"\xff\xfeok\nfine\n")
    with FileReader(str(p)) as r:
        assert r.read_line() == "\ufffd\ufffdok"
        assert r.read_line() == "fine"
        assert r.read_line() == ""

def test_strict_decoding_is_opt_in(tmp_path):
    p = tmp_path / "strict.txt"
    p.write_bytes(b"\xff\n")
    with FileReader(str(p), errors="strict") as r:
        with pytest.raises(UnicodeDecodeError):
            r.read_line()

@pytest.mark.skipif(not os.path.exists("/proc/self/status"), reason="needs procfs")
def test_reads_files_reporting_zero_size():
    # procfs reports st_size == 0 but has content
    with FileReader("/proc/self/status") as r:
        assert not r.is_at_end()
        first = r.read_line()
        assert first != ""
        assert first.startswith("Name:")

def test_unicode_default_utf8(tmp_path):
    p = tmp_path / "utf8.txt"
    with FileWriter(str(p)) as w:
        w.write_string("Привіт\n")
    assert p.read_bytes() == "Привіт\n".encode("utf-8")
    with FileReader(str(p)) as r:
        assert r.read_line() == "Привіт"

class _FailingFile:
    def __init__(self, fh):
        self._fh = fh

    def write(self, data):
        raise OSError(errno.ENOSPC, "No space left on device")

    def __getattr__(self, name):
        return getattr(self._fh, name)

def test_write_error(tmp_path):
    p = str(tmp_path / "full.txt")
    w = FileWriter(p)
    w.open()
    real = w._fh
    w._fh = _FailingFile(real)
    try:
        with pytest.raises(WriteError) as ei:
            w.write_string("data")
        assert p in str(ei.value)
        assert isinstance(ei.value.__cause__, OSError)
        # a failed write does not close the handle
        assert w.is_open
    finally:
        w._fh = real
        w.close()
