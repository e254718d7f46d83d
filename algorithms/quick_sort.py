"""
quick_sort.py — Quick Sort
==========================
Lomuto partition around the last element, driven by an explicit work
stack of sub-ranges so cancellation is checked at every pop.

Partition steps:
  1. Pivot marked COMPARED                                  (pause)
  2. a[j] marked COMPARED                                   (pause)
  3. a[j] < pivot → swap into the "less" region, SWAPPED    (pause)
  4. Final pivot placement swap — always published, even
     when it is a swap with itself                          (pause)
  5. Transient flags cleared                                (publish only)

Only finishing the whole stack marks everything sorted.
"""

from typing import TYPE_CHECKING, Generator, List, Optional, Tuple

from model import ArrayModel
from algorithms.step import Step

if TYPE_CHECKING:
    from engine.token import CancellationToken


def quick_sort(model: ArrayModel, token: "CancellationToken") -> Generator[Step, None, None]:
    stack: List[Tuple[int, int]] = [(0, len(model) - 1)]

    while stack:
        if not token.is_active:
            return

        low, high = stack.pop()
        if low >= high:
            continue

        pivot_idx = yield from _partition(model, low, high, token)
        if pivot_idx is None:
            return

        # left range on top so it is sorted first
        stack.append((pivot_idx + 1, high))
        stack.append((low, pivot_idx - 1))

    model.mark_all_sorted()
    yield Step(pause=False, explanation="Array sorted.")


def _partition(
    a: ArrayModel,
    low: int,
    high: int,
    token: "CancellationToken",
) -> Generator[Step, None, Optional[int]]:
    """Returns the pivot's final index, or None when cancelled."""
    pivot = a[high]
    pivot.compared = True
    yield Step(explanation=f"Pivot is {pivot.value} (last element of [{low}..{high}]).")

    i = low - 1
    for j in range(low, high):
        if not token.is_active:
            return None

        a[j].compared = True
        yield Step(explanation=f"Compare {a[j].value} with pivot {pivot.value}.")

        if a[j].value < pivot.value:
            i += 1
            a.swap(i, j)
            a[i].swapped = True
            a[j].swapped = True
            yield Step(explanation=f"{a[i].value} < {pivot.value} — move it left.")
            a[i].clear_transient()

        a[j].clear_transient()

    a.swap(i + 1, high)
    a[i + 1].swapped = True
    a[high].swapped = True
    yield Step(explanation=f"Place pivot {pivot.value} at index {i + 1}.")

    a[i + 1].clear_transient()
    a[high].clear_transient()
    yield Step(pause=False)
    return i + 1
