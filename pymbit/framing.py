"""
Line framing for byte-stream transports

Turns arbitrary chunks of bytes (serial reads, BLE notifications) into
complete text lines. The decoder itself only ever sees whole lines.
"""

from enum import IntEnum
from typing import List


class LineEnding(IntEnum):
    """Line ending modes"""
    LF = 1    # Line feed (\n)
    CR = 2    # Carriage return (\r)
    CRLF = 3  # Carriage return + line feed (\r\n)

    @property
    def terminator(self) -> bytes:
        return {LineEnding.LF: b"\n", LineEnding.CR: b"\r", LineEnding.CRLF: b"\r\n"}[self]


class LineFramer:
    """
    Accumulates bytes and splits them into lines.

    A line longer than max_line_length is dropped whole, as is a line
    containing bytes that are not valid ASCII. In CRLF mode a '\\r' is
    removed only when the '\\n' follows it; a lone '\\r' stays in the line.
    """

    def __init__(self, line_ending: LineEnding = LineEnding.LF, max_line_length: int = 256):
        self.line_ending = line_ending
        self.max_line_length = max_line_length
        self._buffer = bytearray()
        self._overflow = False
        self._cr_pending = False

    def feed(self, data: bytes) -> List[str]:
        """
        Add received bytes.

        Args:
            data: Bytes as read from the transport

        Returns:
            Complete lines (terminator and surrounding whitespace removed),
            empty, overlong and undecodable lines skipped
        """
        lines = []
        crlf = self.line_ending == LineEnding.CRLF
        end = ord("\r") if self.line_ending == LineEnding.CR else ord("\n")
        for byte in data:
            if crlf and self._cr_pending:
                self._cr_pending = False
                if byte != end:
                    self._append(ord("\r"))
            if byte == end:
                line = self._take_line()
                if line:
                    lines.append(line)
            elif crlf and byte == ord("\r"):
                # held back until we know whether '\n' follows
                self._cr_pending = True
            else:
                self._append(byte)
        return lines

    def _append(self, byte: int) -> None:
        if self._overflow:
            return
        if len(self._buffer) >= self.max_line_length:
            self._overflow = True
            self._buffer.clear()
            return
        self._buffer.append(byte)

    def _take_line(self) -> str:
        raw = bytes(self._buffer)
        overflow = self._overflow
        self._buffer.clear()
        self._overflow = False
        if overflow:
            return ""
        try:
            return raw.decode("ascii").strip()
        except UnicodeDecodeError:
            return ""

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet terminated."""
        return len(self._buffer)

    def reset(self):
        """Drop any partial line"""
        self._buffer.clear()
        self._overflow = False
        self._cr_pending = False
