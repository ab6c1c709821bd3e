"""
Line Sink

Append-only, line-oriented output. Lines are kept in order and, when a
stream is given, written through to it as they arrive so that output
produced before a hard failure is not lost.
"""

from typing import List, Optional, TextIO


class LineSink:
    def __init__(self, stream: Optional[TextIO] = None):
        self._lines: List[str] = []
        self._stream = stream

    def emit(self, line: str) -> None:
        self._lines.append(line)
        if self._stream is not None:
            self._stream.write(line + "\n")

    def blank(self) -> None:
        self.emit("")

    @property
    def lines(self) -> List[str]:
        return list(self._lines)

    def getvalue(self) -> str:
        """All lines, newline-terminated"""
        return "".join(line + "\n" for line in self._lines)

    def __len__(self) -> int:
        return len(self._lines)
