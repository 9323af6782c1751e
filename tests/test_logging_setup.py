from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from lazytest.runtime import logs


class ConfigureLoggingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.package_logger = logging.getLogger("lazytest")
        self._saved = (self.package_logger.level, self.package_logger.propagate, list(self.package_logger.handlers))

    def tearDown(self) -> None:
        self._restore()

    def _restore(self) -> None:
        level, propagate, handlers = self._saved
        for handler in self.package_logger.handlers:
            if handler not in handlers:
                handler.close()
        self.package_logger.handlers[:] = handlers
        self.package_logger.setLevel(level)
        self.package_logger.propagate = propagate

    def test_records_go_to_requested_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "sub" / "session.log"

            path = logs.configure_logging("DEBUG", target)
            logging.getLogger("lazytest.aggregator").debug("dropped %s", "event")
            for handler in self.package_logger.handlers:
                handler.flush()

            self.assertEqual(path, target)
            self.assertFalse(self.package_logger.propagate)
            self.assertIn("DEBUG lazytest.aggregator: dropped event", target.read_text(encoding="utf-8"))
            self._restore()

    def test_default_path_is_under_user_log_dir(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("lazytest.runtime.logs.user_log_dir", return_value=tmp):
                self.assertEqual(logs.default_log_path(), Path(tmp) / logs.LOG_FILENAME)

    def test_unwritable_location_disables_logging(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("", encoding="utf-8")

            path = logs.configure_logging("INFO", blocker / "nested" / "session.log")

        self.assertIsNone(path)
        self.assertIsInstance(self.package_logger.handlers[-1], logging.NullHandler)


if __name__ == "__main__":
    unittest.main()
