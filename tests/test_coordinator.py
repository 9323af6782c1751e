"""End-to-end tests for the screen state machine.

Drives the coordinator with JSON stream lines and key tokens the way the
terminal host does.
"""

from __future__ import annotations

import unittest

from event_builders import json_line
from lazytest.coordinator import LogScreen, ReportScreen, ViewCoordinator
from lazytest.errors import PayloadDecodeError, ProtocolError
from lazytest.events import TestResult as Result
from lazytest.logs import LogMode
from lazytest.ui_theme import PLAIN_THEME

STREAM = [
    json_line(Action="start", Package="a"),
    json_line(Action="run", Package="a", Test="TestOne"),
    json_line(Action="output", Package="a", Test="TestOne", Output="=== RUN   TestOne\n"),
    json_line(Action="output", Package="a", Test="TestOne", Output="    one_test.go:9: boom\n"),
    json_line(Action="fail", Package="a", Test="TestOne", Elapsed=0.01),
    json_line(Action="run", Package="a", Test="TestTwo"),
    json_line(Action="pass", Package="a", Test="TestTwo", Elapsed=0.0),
    json_line(Action="output", Package="a", Output="FAIL\n"),
    json_line(Action="fail", Package="a", Elapsed=0.02),
    json_line(Action="start", Package="b"),
    json_line(Action="run", Package="b", Test="TestThree"),
]


def _coordinator() -> ViewCoordinator:
    coordinator = ViewCoordinator(theme=PLAIN_THEME, rows=10, cols=60)
    for line in STREAM:
        coordinator.handle_payload(line)
    coordinator.dirty = False
    return coordinator


class PayloadTests(unittest.TestCase):
    def test_payloads_build_tree_and_mark_dirty(self) -> None:
        coordinator = ViewCoordinator()
        coordinator.dirty = False

        self.assertTrue(coordinator.handle_payload(STREAM[0]))
        self.assertTrue(coordinator.dirty)
        self.assertEqual([package.name for package in coordinator.run.packages], ["a"])

    def test_ignored_payloads_do_not_mark_dirty(self) -> None:
        coordinator = _coordinator()

        self.assertFalse(coordinator.handle_payload(json_line(Action="pause", Package="a", Test="TestOne")))
        self.assertFalse(coordinator.handle_payload(json_line(Action="output", Package="zz", Output="x")))
        self.assertFalse(coordinator.handle_payload(""))
        self.assertFalse(coordinator.dirty)

    def test_malformed_json_propagates_without_touching_tree(self) -> None:
        coordinator = _coordinator()

        with self.assertRaises(PayloadDecodeError):
            coordinator.handle_payload("{not json")
        self.assertEqual(len(coordinator.run.packages), 2)

    def test_protocol_violation_propagates(self) -> None:
        coordinator = _coordinator()

        with self.assertRaises(ProtocolError):
            coordinator.handle_payload(json_line(Action="start"))
        self.assertEqual(len(coordinator.run.packages), 2)

    def test_result_arrival_reclamps_filtered_selection(self) -> None:
        coordinator = _coordinator()
        coordinator.handle_key("2")  # fail filter: a, TestOne, b, TestThree
        for _ in range(3):
            coordinator.handle_key("j")
        self.assertEqual(coordinator.report.selected_index, 3)

        coordinator.handle_payload(json_line(Action="pass", Package="b", Test="TestThree"))

        self.assertEqual(len(coordinator.report.items(coordinator.run)), 3)
        self.assertEqual(coordinator.report.selected_index, 2)


class ReportKeyTests(unittest.TestCase):
    def test_navigation_keys_mark_dirty(self) -> None:
        coordinator = _coordinator()

        self.assertFalse(coordinator.handle_key("j"))
        self.assertTrue(coordinator.dirty)
        self.assertEqual(coordinator.report.selected_index, 1)

    def test_escape_has_no_effect_in_report(self) -> None:
        coordinator = _coordinator()

        self.assertFalse(coordinator.handle_key("ESC"))
        self.assertFalse(coordinator.dirty)
        self.assertIsInstance(coordinator.screen, ReportScreen)

    def test_digit_keys_toggle_filters(self) -> None:
        coordinator = _coordinator()

        coordinator.handle_key("1")
        coordinator.handle_key("3")
        self.assertEqual(coordinator.report.result_filter.enabled, {Result.PASS, Result.SKIP})
        coordinator.handle_key("1")
        self.assertEqual(coordinator.report.result_filter.enabled, {Result.SKIP})

    def test_quit_keys(self) -> None:
        coordinator = _coordinator()

        self.assertTrue(coordinator.handle_key("q"))
        self.assertTrue(coordinator.handle_key("CTRL_C"))

    def test_enter_on_empty_list_is_noop(self) -> None:
        coordinator = ViewCoordinator()
        coordinator.dirty = False

        self.assertFalse(coordinator.handle_key("ENTER"))
        self.assertIsInstance(coordinator.screen, ReportScreen)
        self.assertFalse(coordinator.dirty)


class LogScreenFlowTests(unittest.TestCase):
    def test_enter_opens_selected_test_log_and_escape_returns(self) -> None:
        coordinator = _coordinator()
        coordinator.handle_key("j")
        coordinator.handle_key("l")

        coordinator.handle_key("ENTER")

        self.assertIsInstance(coordinator.screen, LogScreen)
        self.assertEqual(coordinator.screen.log.title, "a TestOne")
        self.assertEqual(
            coordinator.screen.log.lines,
            ("=== RUN   TestOne\n", "    one_test.go:9: boom\n"),
        )

        coordinator.handle_key("ESC")

        self.assertIsInstance(coordinator.screen, ReportScreen)
        self.assertEqual(coordinator.report.selected_index, 1)
        self.assertEqual(coordinator.report.scroll_x, 1)

    def test_enter_on_package_opens_package_log(self) -> None:
        coordinator = _coordinator()

        coordinator.handle_key("ENTER")

        self.assertEqual(coordinator.screen.log.lines, ("FAIL\n",))

    def test_log_snapshot_ignores_later_output(self) -> None:
        coordinator = _coordinator()
        for _ in range(4):
            coordinator.handle_key("j")
        coordinator.handle_key("ENTER")
        self.assertEqual(coordinator.screen.log.title, "b TestThree")

        changed = coordinator.handle_payload(
            json_line(Action="output", Package="b", Test="TestThree", Output="late\n")
        )

        self.assertTrue(changed)
        self.assertEqual(coordinator.screen.log.lines, ())
        self.assertEqual(coordinator.run.packages[1].tests[0].log, ["late\n"])

    def test_report_keys_do_not_leak_into_log_screen(self) -> None:
        coordinator = _coordinator()
        coordinator.handle_key("ENTER")

        self.assertFalse(coordinator.handle_key("q"))
        coordinator.handle_key("2")

        self.assertIsInstance(coordinator.screen, LogScreen)
        self.assertEqual(coordinator.report.result_filter.enabled, set())

    def test_search_flow_in_log_screen(self) -> None:
        coordinator = _coordinator()
        coordinator.handle_key("j")
        coordinator.handle_key("ENTER")

        for key in ("/", "b", "o", "o", "m", "ENTER"):
            coordinator.handle_key(key)

        log = coordinator.screen.log
        self.assertIs(log.mode, LogMode.BROWSING)
        self.assertEqual(log.search.query, "boom")
        self.assertEqual(log.search.current, 0)
        self.assertEqual(log.scroll_y, 1)
        status = coordinator.render()[-1]
        self.assertIn("/boom", status)
        self.assertIn("match 1/1", status)

    def test_back_discards_search_state(self) -> None:
        coordinator = _coordinator()
        coordinator.handle_key("j")
        coordinator.handle_key("ENTER")
        for key in ("/", "x", "ENTER", "ESC"):
            coordinator.handle_key(key)

        coordinator.handle_key("ENTER")

        self.assertEqual(coordinator.screen.log.search.query, "")

    def test_render_switches_with_screen(self) -> None:
        coordinator = _coordinator()
        report_frame = coordinator.render()
        coordinator.handle_key("ENTER")

        log_frame = coordinator.render()

        self.assertNotEqual(report_frame, log_frame)
        self.assertEqual(len(log_frame), 10)
        self.assertEqual(log_frame[0], "FAIL")


class ResizeTests(unittest.TestCase):
    def test_resize_marks_dirty_only_on_change(self) -> None:
        coordinator = ViewCoordinator(rows=24, cols=80)
        coordinator.dirty = False

        coordinator.resize(24, 80)
        self.assertFalse(coordinator.dirty)
        coordinator.resize(30, 100)
        self.assertTrue(coordinator.dirty)
        self.assertEqual((coordinator.rows, coordinator.cols), (30, 100))


if __name__ == "__main__":
    unittest.main()
