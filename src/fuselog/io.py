"""
I/O utilities: the default stderr output and the line-writer adapter.
"""

from __future__ import annotations

import codecs
import sys
from typing import TYPE_CHECKING

from .levels import Level

if TYPE_CHECKING:
    from .handle import LogHandle


class StderrOutput:
    """Binary stream over whatever ``sys.stderr`` is at write time."""

    def write(self, data: bytes) -> int:
        stream = sys.stderr
        buffer = getattr(stream, "buffer", None)
        if buffer is None:
            return stream.write(data.decode(getattr(stream, "encoding", None) or "utf-8", errors="replace"))
        stream.flush()
        return buffer.write(data)

    def flush(self) -> None:
        stream = sys.stderr
        getattr(stream, "buffer", stream).flush()


class StreamToLogger:
    """Redirects writes to a log handle, one record per line."""

    def __init__(self, handle: LogHandle, level: Level, encoding: str = "utf-8"):
        self.handle = handle
        self.level = level
        self.encoding = encoding
        self.decoder = codecs.getincrementaldecoder(encoding)(errors="replace")
        self.linebuf = ""

    def write(self, buf: str | bytes) -> int:
        size = len(buf)
        if isinstance(buf, (bytes, bytearray)):
            # A multi-byte character may span two writes
            buf = self.decoder.decode(bytes(buf))

        for line in buf.splitlines(True):
            # If the line ends with a newline, log it immediately
            if line.endswith(("\n", "\r")):
                self.linebuf += line.rstrip("\r\n")
                if self.linebuf:
                    self.handle.log_at(self.level, self.linebuf)
                self.linebuf = ""
            else:
                self.linebuf += line
        return size

    def writelines(self, lines) -> None:
        for line in lines:
            self.write(line)

    def flush(self) -> None:
        self.linebuf += self.decoder.decode(b"", final=True)
        if self.linebuf:
            self.handle.log_at(self.level, self.linebuf)
            self.linebuf = ""

    def close(self) -> None:
        self.flush()

    def writable(self) -> bool:
        return True

    def isatty(self) -> bool:
        return False
