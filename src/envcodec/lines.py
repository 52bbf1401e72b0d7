# topmark:header:start
#
#   project      : EnvCodec
#   file         : lines.py
#   file_relpath : src/envcodec/lines.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Line sink: collect text written by an `envcodec.Encoder` as a list of lines."""

from __future__ import annotations

import io


class LineWriter(io.TextIOBase):
    """Text stream that splits everything written to it into lines.

    Line endings (``\\n`` or ``\\r\\n``) are not part of the collected lines. A
    trailing partial line is buffered across writes and becomes a line of its
    own when the writer is closed.

    Example:
        ```python
        with LineWriter() as w:
            w.write("a\\nb")
            w.write("c\\n")
        assert w.data() == ["a", "bc"]
        ```
    """

    def __init__(self) -> None:
        super().__init__()
        self._lines: list[str] = []
        self._buf: str = ""

    def writable(self) -> bool:
        """LineWriter is write-only."""
        return True

    def write(self, s: str) -> int:
        """Append ``s``, completing buffered lines as line endings arrive."""
        if self.closed:
            raise ValueError("I/O operation on closed LineWriter")
        *complete, self._buf = (self._buf + s).split("\n")
        self._lines.extend(line.removesuffix("\r") for line in complete)
        return len(s)

    def close(self) -> None:
        """Flush the buffered partial line (if any) and close the stream."""
        if not self.closed and self._buf:
            self._lines.append(self._buf)
            self._buf = ""
        super().close()

    def data(self) -> list[str]:
        """Return a copy of the completed lines."""
        return list(self._lines)
