"""
insertion_sort.py — Insertion Sort
==================================
Takes each key in turn and moves it left past every element strictly
greater than it, stopping at the first element that is not greater.

The move is done as a chain of adjacent swaps rather than a shift with
a held-out key, so every published snapshot is a permutation of the
input.  Everything is marked sorted once the last key is placed.
"""

from typing import TYPE_CHECKING, Generator

from model import ArrayModel
from algorithms.step import Step

if TYPE_CHECKING:
    from engine.token import CancellationToken


def insertion_sort(model: ArrayModel, token: "CancellationToken") -> Generator[Step, None, None]:
    a = model

    for i in range(1, len(a)):
        if not token.is_active:
            return

        key = a[i]
        key.compared = True
        yield Step(explanation=f"Insert key {key.value} into the sorted prefix.")

        j = i - 1
        while j >= 0 and a[j].value > key.value:
            if not token.is_active:
                return

            # a[j+1] is the key; the greater element shifts right
            a[j].compared = True
            a.swap(j, j + 1)
            a[j + 1].swapped = True
            yield Step(explanation=f"{a[j + 1].value} > {key.value} — shift it right.")

            a[j + 1].clear_transient()
            j -= 1

        key.clear_transient()
        yield Step(pause=False)

    a.mark_all_sorted()
    yield Step(pause=False, explanation="Array sorted.")
