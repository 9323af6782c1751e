"""Result filtering and tree flattening for the report list.

Flattening walks packages in start order and each package's tests in run
order. List items are positional handles into a ``TestRun`` and must be
rebuilt after every tree mutation.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from ..aggregator import Package, TestCase, TestRun
from ..events import TestResult

FILTER_KEYS: dict[str, TestResult] = {
    "1": TestResult.PASS,
    "2": TestResult.FAIL,
    "3": TestResult.SKIP,
}


class ResultFilter:
    """Set of enabled result kinds; an empty set shows everything."""

    def __init__(self, enabled: Iterable[TestResult] = ()) -> None:
        self.enabled: set[TestResult] = set(enabled)

    @property
    def is_active(self) -> bool:
        return bool(self.enabled)

    def toggle(self, result: TestResult) -> None:
        if result in self.enabled:
            self.enabled.discard(result)
        else:
            self.enabled.add(result)

    def accepts(self, result: TestResult | None) -> bool:
        # Entities still running are never hidden.
        if result is None or not self.enabled:
            return True
        return result in self.enabled

    def label(self) -> str:
        if not self.enabled:
            return "all"
        return ",".join(result.value for result in TestResult if result in self.enabled)

    def __repr__(self) -> str:
        return f"ResultFilter({self.label()})"


@dataclass(frozen=True)
class ListItem:
    package_index: int
    test_index: int | None = None

    @property
    def is_package(self) -> bool:
        return self.test_index is None

    def package(self, run: TestRun) -> Package:
        return run.packages[self.package_index]

    def resolve(self, run: TestRun) -> Package | TestCase:
        package = run.packages[self.package_index]
        if self.test_index is None:
            return package
        return package.tests[self.test_index]


def flatten(run: TestRun, result_filter: ResultFilter) -> list[ListItem]:
    """Return render-order list items for packages and tests passing the filter.

    A package hidden by the filter hides all of its tests.
    """
    items: list[ListItem] = []
    for package_idx, package in enumerate(run.packages):
        if not result_filter.accepts(package.result):
            continue
        items.append(ListItem(package_idx))
        for test_idx, test in enumerate(package.tests):
            if result_filter.accepts(test.result):
                items.append(ListItem(package_idx, test_idx))
    return items


__all__ = [
    "FILTER_KEYS",
    "ListItem",
    "ResultFilter",
    "flatten",
]
