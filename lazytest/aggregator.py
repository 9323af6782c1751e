"""Incremental package/test tree built from a live event stream.

``TestRun.apply`` consumes one event at a time. Events referencing a package
or test that does not exist yet are dropped; events missing a field their
kind requires raise ``ProtocolError`` before anything is mutated.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field

from .errors import ProtocolError
from .events import EventKind, TestEvent, TestResult

logger = logging.getLogger(__name__)


@dataclass
class TestCase:
    __test__ = False

    name: str
    result: TestResult | None = None
    elapsed: float | None = None
    log: list[str] = field(default_factory=list)

    def finish(self, result: TestResult, elapsed: float | None) -> bool:
        """Record the first terminal result; later ones are ignored."""
        if self.result is not None:
            return False
        self.result = result
        self.elapsed = elapsed
        return True


@dataclass
class Package:
    name: str
    result: TestResult | None = None
    elapsed: float | None = None
    tests: list[TestCase] = field(default_factory=list)
    log: list[str] = field(default_factory=list)
    _test_index: dict[str, int] = field(default_factory=dict, repr=False, compare=False)

    def find_test(self, name: str) -> TestCase | None:
        idx = self._test_index.get(name)
        if idx is None:
            return None
        return self.tests[idx]

    def add_test(self, name: str) -> TestCase | None:
        if name in self._test_index:
            return None
        test = TestCase(name=name)
        self._test_index[name] = len(self.tests)
        self.tests.append(test)
        return test

    def finish(self, result: TestResult, elapsed: float | None) -> bool:
        """Record the first package-level terminal result."""
        if self.result is not None:
            return False
        self.result = result
        self.elapsed = elapsed
        return True


@dataclass(frozen=True)
class RunCounts:
    packages: int
    tests: int
    by_result: dict[TestResult, int]

    @property
    def running(self) -> int:
        return self.tests - sum(self.by_result.values())


def _require(value: str | None, what: str, kind: EventKind) -> str:
    if value is None:
        raise ProtocolError(f"Expected {what} in `{kind.value}` action")
    return value


class TestRun:
    """Owns the package tree for one test run."""

    __test__ = False

    def __init__(self) -> None:
        self.packages: list[Package] = []
        self._package_index: dict[str, int] = {}

    def find_package(self, name: str) -> Package | None:
        idx = self._package_index.get(name)
        if idx is None:
            return None
        return self.packages[idx]

    def apply(self, event: TestEvent) -> bool:
        """Fold one event into the tree and return whether anything changed."""
        kind = event.kind
        if kind is EventKind.START:
            return self._start(_require(event.package, "package name", kind))
        if kind is EventKind.RUN:
            package_name = _require(event.package, "package name", kind)
            test_name = _require(event.test, "test name", kind)
            return self._run(package_name, test_name)
        if kind is EventKind.OUTPUT:
            package_name = _require(event.package, "package name", kind)
            output = _require(event.output, "output", kind)
            return self._output(package_name, event.test, output)
        result = kind.result
        if result is not None:
            package_name = _require(event.package, "package name", kind)
            return self._finish(package_name, event.test, result, event.elapsed)
        return False

    def _start(self, package_name: str) -> bool:
        if package_name in self._package_index:
            logger.debug("duplicate start for package %s dropped", package_name)
            return False
        self._package_index[package_name] = len(self.packages)
        self.packages.append(Package(name=package_name))
        return True

    def _run(self, package_name: str, test_name: str) -> bool:
        package = self.find_package(package_name)
        if package is None:
            logger.debug("run for unknown package %s dropped", package_name)
            return False
        if package.add_test(test_name) is None:
            logger.debug("duplicate run for %s/%s dropped", package_name, test_name)
            return False
        return True

    def _output(self, package_name: str, test_name: str | None, output: str) -> bool:
        package = self.find_package(package_name)
        if package is None:
            logger.debug("output for unknown package %s dropped", package_name)
            return False
        if test_name is None:
            package.log.append(output)
            return True
        test = package.find_test(test_name)
        if test is None:
            logger.debug("output for unknown test %s/%s dropped", package_name, test_name)
            return False
        test.log.append(output)
        return True

    def _finish(
        self,
        package_name: str,
        test_name: str | None,
        result: TestResult,
        elapsed: float | None,
    ) -> bool:
        package = self.find_package(package_name)
        if package is None:
            logger.debug("%s for unknown package %s dropped", result.value, package_name)
            return False
        if test_name is None:
            return package.finish(result, elapsed)
        test = package.find_test(test_name)
        if test is None:
            logger.debug("%s for unknown test %s/%s dropped", result.value, package_name, test_name)
            return False
        return test.finish(result, elapsed)

    def counts(self) -> RunCounts:
        """Summarize test results across every package."""
        by_result: Counter[TestResult] = Counter()
        total = 0
        for package in self.packages:
            total += len(package.tests)
            for test in package.tests:
                if test.result is not None:
                    by_result[test.result] += 1
        return RunCounts(
            packages=len(self.packages),
            tests=total,
            by_result={result: by_result.get(result, 0) for result in TestResult},
        )


__all__ = [
    "Package",
    "RunCounts",
    "TestCase",
    "TestRun",
]
