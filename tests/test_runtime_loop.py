from __future__ import annotations

import os
import unittest
from contextlib import contextmanager

from event_builders import json_line
from lazytest.ansi import strip_ansi
from lazytest.coordinator import ViewCoordinator
from lazytest.errors import PayloadDecodeError
from lazytest.input import _PENDING_BYTES
from lazytest.runtime.loop import drain_stream, feed_lines, render_static_report, run_main_loop
from lazytest.runtime.stream import EventStream
from lazytest.ui_theme import PLAIN_THEME


class _FakeTerminal:
    def __init__(self) -> None:
        self.frames: list[list[str]] = []

    @contextmanager
    def raw_mode(self):
        yield

    def write_frame(self, lines: list[str]) -> None:
        self.frames.append(list(lines))


def _terminal_size(_fallback: tuple[int, int]) -> os.terminal_size:
    return os.terminal_size((60, 12))


class FeedLinesTests(unittest.TestCase):
    def test_protocol_errors_are_skipped(self) -> None:
        coordinator = ViewCoordinator(theme=PLAIN_THEME)
        lines = [
            json_line(Action="start", Package="a"),
            json_line(Action="run", Package="a"),
            json_line(Action="run", Package="a", Test="TestOne"),
        ]

        with self.assertLogs("lazytest.runtime.loop", level="WARNING") as captured:
            changed = feed_lines(coordinator, lines)

        self.assertEqual(changed, 2)
        self.assertEqual([test.name for test in coordinator.run.packages[0].tests], ["TestOne"])
        self.assertIn("malformed test event skipped", captured.output[0])

    def test_decode_errors_propagate(self) -> None:
        coordinator = ViewCoordinator()

        with self.assertRaises(PayloadDecodeError):
            feed_lines(coordinator, [json_line(Action="start", Package="a"), "garbage"])
        self.assertEqual(len(coordinator.run.packages), 1)


class EventStreamTests(unittest.TestCase):
    def test_lines_split_across_reads_and_tail_flushed_at_eof(self) -> None:
        read_fd, write_fd = os.pipe()
        stream = EventStream(read_fd)
        try:
            os.write(write_fd, b'{"Action":"start"}\n{"Action":')
            self.assertEqual(stream.read_lines(), ['{"Action":"start"}'])

            os.write(write_fd, b'"run"}')
            os.close(write_fd)
            write_fd = -1
            self.assertEqual(stream.read_lines(), [])
            self.assertEqual(stream.read_lines(), ['{"Action":"run"}'])
            self.assertTrue(stream.closed)
            self.assertEqual(stream.read_lines(), [])
        finally:
            if write_fd != -1:
                os.close(write_fd)
            os.close(read_fd)

    def test_drain_applies_everything(self) -> None:
        read_fd, write_fd = os.pipe()
        payload = "\n".join(
            [
                json_line(Action="start", Package="a"),
                json_line(Action="run", Package="a", Test="TestOne"),
                json_line(Action="pass", Package="a", Test="TestOne", Elapsed=0.5),
                json_line(Action="pass", Package="a", Elapsed=0.6),
            ]
        )
        os.write(write_fd, payload.encode("utf-8"))
        os.close(write_fd)
        coordinator = ViewCoordinator(theme=PLAIN_THEME)
        try:
            drain_stream(coordinator, EventStream(read_fd))
        finally:
            os.close(read_fd)

        counts = coordinator.run.counts()
        self.assertEqual((counts.packages, counts.tests, counts.running), (1, 1, 0))


class StaticReportTests(unittest.TestCase):
    def test_static_report_lists_every_row(self) -> None:
        coordinator = ViewCoordinator(theme=PLAIN_THEME)
        feed_lines(
            coordinator,
            [
                json_line(Action="start", Package="a"),
                json_line(Action="run", Package="a", Test="TestOne"),
                json_line(Action="fail", Package="a", Test="TestOne", Elapsed=1.5),
                json_line(Action="fail", Package="a", Elapsed=2),
            ],
        )

        text = render_static_report(coordinator, 100)

        lines = [strip_ansi(line) for line in text.splitlines()]
        self.assertEqual(len(lines), 4)
        self.assertTrue(lines[0].startswith("package"))
        self.assertTrue(lines[1].startswith("a "))
        self.assertIn("└ ❎ TestOne", lines[2])
        self.assertIn("1.5s", lines[2])
        self.assertIn("1 packages", lines[3])


class MainLoopTests(unittest.TestCase):
    def setUp(self) -> None:
        _PENDING_BYTES.clear()

    def tearDown(self) -> None:
        _PENDING_BYTES.clear()

    def test_loop_renders_applies_stream_and_quits(self) -> None:
        key_read, key_write = os.pipe()
        stream_read, stream_write = os.pipe()
        os.write(stream_write, (json_line(Action="start", Package="a") + "\n").encode("utf-8"))
        os.write(key_write, b"q")
        coordinator = ViewCoordinator(theme=PLAIN_THEME)
        terminal = _FakeTerminal()
        try:
            run_main_loop(
                coordinator,
                terminal,
                key_read,
                EventStream(stream_read),
                get_terminal_size=_terminal_size,
                idle_timeout=0.01,
            )
        finally:
            for fd in (key_read, key_write, stream_read, stream_write):
                os.close(fd)

        self.assertEqual((coordinator.rows, coordinator.cols), (12, 60))
        self.assertEqual(len(terminal.frames), 1)
        self.assertEqual(len(terminal.frames[0]), 12)
        self.assertEqual([package.name for package in coordinator.run.packages], ["a"])

    def test_loop_survives_stream_eof(self) -> None:
        key_read, key_write = os.pipe()
        stream_read, stream_write = os.pipe()
        os.close(stream_write)
        os.write(key_write, b"jq")
        coordinator = ViewCoordinator(theme=PLAIN_THEME)
        stream = EventStream(stream_read)
        try:
            run_main_loop(
                coordinator,
                _FakeTerminal(),
                key_read,
                stream,
                get_terminal_size=_terminal_size,
                idle_timeout=0.01,
            )
        finally:
            for fd in (key_read, key_write, stream_read):
                os.close(fd)

        self.assertTrue(stream.closed)


if __name__ == "__main__":
    unittest.main()
