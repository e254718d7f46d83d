"""
selection_sort.py — Selection Sort
==================================
For every position `i`, scans the unsorted suffix for the minimum and
swaps it into place.  The running minimum stays marked COMPARED for the
whole scan; only the resolved minimum is swapped, after the full scan.
"""

from typing import TYPE_CHECKING, Generator

from model import ArrayModel
from algorithms.step import Step

if TYPE_CHECKING:
    from engine.token import CancellationToken


def selection_sort(model: ArrayModel, token: "CancellationToken") -> Generator[Step, None, None]:
    a = model
    n = len(a)

    for i in range(n - 1):
        min_idx = i
        a[min_idx].compared = True

        for j in range(i + 1, n):
            if not token.is_active:
                return

            a[j].compared = True
            yield Step(explanation=f"Compare {a[j].value} with current minimum {a[min_idx].value}.")

            if a[j].value < a[min_idx].value:
                a[min_idx].compared = False
                min_idx = j
            else:
                a[j].compared = False
            yield Step(pause=False)

        if min_idx != i:
            a.swap(i, min_idx)
            a[i].swapped = True
            a[min_idx].swapped = True
            yield Step(explanation=f"Move minimum {a[i].value} to index {i}.")
            a[min_idx].clear_transient()

        a[i].clear_transient()
        a[i].sorted = True
        yield Step(pause=False)

    if n:
        a[n - 1].sorted = True
        yield Step(pause=False, explanation="Array sorted.")
