"""Line-buffered, non-blocking reader for the test-event stream.

The stream is either stdin, a file, or the stdout of a spawned test command.
Reads never block the loop: only bytes already available are consumed and
complete lines are handed back.
"""

from __future__ import annotations

import logging
import os
import subprocess
from collections.abc import Sequence

logger = logging.getLogger(__name__)

READ_CHUNK_BYTES = 65536


class EventStream:
    """Split bytes arriving on ``fd`` into decoded text lines."""

    def __init__(self, fd: int, process: subprocess.Popen | None = None, *, owns_fd: bool = False) -> None:
        self.fd = fd
        self.process = process
        self.owns_fd = owns_fd
        self.closed = False
        self._buffer = b""

    @classmethod
    def spawn(cls, command: Sequence[str]) -> EventStream:
        """Run ``command`` and stream its stdout."""
        process = subprocess.Popen(
            list(command),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
        )
        assert process.stdout is not None
        logger.info("spawned %s (pid %d)", " ".join(command), process.pid)
        return cls(process.stdout.fileno(), process)

    def read_lines(self) -> list[str]:
        """Read one available chunk and return the lines it completes.

        On EOF any unterminated trailing text is returned as a final line and
        the stream is marked closed.
        """
        if self.closed:
            return []
        chunk = os.read(self.fd, READ_CHUNK_BYTES)
        if not chunk:
            self.closed = True
            tail, self._buffer = self._buffer, b""
            logger.info("event stream reached EOF")
            return [tail.decode("utf-8", errors="replace")] if tail.strip() else []
        self._buffer += chunk
        *complete, self._buffer = self._buffer.split(b"\n")
        return [raw.decode("utf-8", errors="replace") for raw in complete]

    def close(self) -> None:
        self.closed = True
        if self.process is not None and self.process.poll() is None:
            self.process.terminate()
            try:
                self.process.wait(timeout=2)
            except subprocess.TimeoutExpired:
                self.process.kill()
                self.process.wait()
        if self.process is not None and self.process.stdout is not None:
            self.process.stdout.close()
        elif self.owns_fd:
            self.owns_fd = False
            os.close(self.fd)


__all__ = [
    "EventStream",
]
