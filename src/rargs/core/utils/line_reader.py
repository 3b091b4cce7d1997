# src/rargs/core/utils/line_reader.py
from __future__ import annotations

from typing import BinaryIO, Iterator, Tuple

from rargs.core.errors import LineDecodeError

NEWLINE = b"\n"
NUL = b"\0"
CHUNK_SIZE = 64 * 1024


def iter_records(stream: BinaryIO, delimiter: bytes = NEWLINE, chunk_size: int = CHUNK_SIZE) -> Iterator[bytes]:
    """
    Yields the records of a binary stream, each still ending with its delimiter
    (the last one may not, if the stream does not end with a delimiter).
    """
    # read1 returns whatever is available, so records flow through a pipe
    # as soon as they are complete
    read = getattr(stream, "read1", stream.read)
    buffer = bytearray()
    while True:
        chunk = read(chunk_size)
        if not chunk:
            break
        buffer += chunk
        start = 0
        while True:
            idx = buffer.find(delimiter, start)
            if idx < 0:
                break
            yield bytes(buffer[start:idx + 1])
            start = idx + 1
        del buffer[:start]
    if buffer:
        yield bytes(buffer)


def strip_terminator(record: bytes) -> bytes:
    """Removes a trailing CRLF, or else a single trailing LF or NUL."""
    if record.endswith(b"\r\n"):
        return record[:-2]
    if record.endswith(NEWLINE) or record.endswith(NUL):
        return record[:-1]
    return record


def read_lines(stream: BinaryIO, delimiter: bytes = NEWLINE, startnum: int = 1) -> Iterator[Tuple[str, int]]:
    """
    Yields ``(line, line_num)`` pairs, numbering from ``startnum``.

    Raises LineDecodeError on the first record that is not valid UTF-8.
    """
    line_num = startnum - 1
    for record in iter_records(stream, delimiter):
        line_num += 1
        try:
            line = strip_terminator(record).decode("utf-8")
        except UnicodeDecodeError as e:
            raise LineDecodeError(line_num, str(e)) from e
        yield line, line_num
