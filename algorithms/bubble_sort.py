"""
bubble_sort.py — Bubble Sort
============================
Compares adjacent pairs and swaps them when out of order.  After pass
`i` the largest remaining value has bubbled to index `n-i-1`, which is
marked sorted; index 0 is marked only after the final pass.

Yields a Step at:
  1. Pair (j, j+1) marked COMPARED          (pause)
  2. Pair swapped, marked SWAPPED           (pause, only if out of order)
  3. Transient flags cleared                (publish only)
  4. End of pass: index n-i-1 SORTED        (publish only)
"""

from typing import TYPE_CHECKING, Generator

from model import ArrayModel
from algorithms.step import Step

if TYPE_CHECKING:
    from engine.token import CancellationToken


def bubble_sort(model: ArrayModel, token: "CancellationToken") -> Generator[Step, None, None]:
    a = model
    n = len(a)

    for i in range(n - 1):
        for j in range(n - i - 1):
            if not token.is_active:
                return

            a[j].compared = True
            a[j + 1].compared = True
            yield Step(explanation=f"Compare {a[j].value} and {a[j + 1].value}.")

            if a[j].value > a[j + 1].value:
                a.swap(j, j + 1)
                a[j].swapped = True
                a[j + 1].swapped = True
                yield Step(explanation=f"{a[j + 1].value} > {a[j].value} — swap them.")

            a[j].clear_transient()
            a[j + 1].clear_transient()
            yield Step(pause=False)

        a[n - i - 1].sorted = True
        yield Step(pause=False, explanation=f"Pass {i + 1} done: {a[n - i - 1].value} is in place.")

    if n:
        a[0].sorted = True
        yield Step(pause=False, explanation="Array sorted.")
