"""
merge_sort.py — Merge Sort
==========================
Top-down merge sort driven by an explicit work stack instead of Python
recursion, so the cancellation token is checked at every frame pop no
matter how deep the split goes.

Work-stack frames are `(left, right, ready)`:
    ready=False  →  split at floor((left+right)/2) and push both halves
    ready=True   →  both halves are sorted, merge them

Halves are pushed right-then-left so the left half is handled first,
the same order the recursive version visits them.

The merge is stable (ties take the left half first) and writes copies
of the buffered halves back into the array, one slot per step.  Only
finishing the full range marks everything sorted.
"""

from typing import TYPE_CHECKING, Generator, List, Tuple

from model import ArrayModel, Element
from algorithms.step import Step

if TYPE_CHECKING:
    from engine.token import CancellationToken


def merge_sort(model: ArrayModel, token: "CancellationToken") -> Generator[Step, None, None]:
    stack: List[Tuple[int, int, bool]] = [(0, len(model) - 1, False)]

    while stack:
        if not token.is_active:
            return

        left, right, ready = stack.pop()
        if left >= right:
            continue

        mid = (left + right) // 2
        if not ready:
            stack.append((left, right, True))
            stack.append((mid + 1, right, False))
            stack.append((left, mid, False))
            continue

        yield from _merge(model, left, mid, right, token)

    if token.is_active:
        model.mark_all_sorted()
        yield Step(pause=False, explanation="Array sorted.")


def _merge(
    a: ArrayModel,
    left: int,
    mid: int,
    right: int,
    token: "CancellationToken",
) -> Generator[Step, None, None]:
    left_part:  List[Element] = [el.copy() for el in a.elements[left:mid + 1]]
    right_part: List[Element] = [el.copy() for el in a.elements[mid + 1:right + 1]]
    i = j = 0
    k = left

    while i < len(left_part) and j < len(right_part):
        if not token.is_active:
            return

        a[k].compared = True
        yield Step(explanation=f"Fill index {k}: {left_part[i].value} vs {right_part[j].value}.")

        if left_part[i].value <= right_part[j].value:
            a[k] = left_part[i].copy(swapped=True)
            i += 1
        else:
            a[k] = right_part[j].copy(swapped=True)
            j += 1
        yield Step()

        a[k].clear_transient()
        k += 1

    for rest, idx in ((left_part, i), (right_part, j)):
        while idx < len(rest):
            if not token.is_active:
                return
            a[k] = rest[idx].copy(swapped=True)
            yield Step(explanation=f"Copy remaining {rest[idx].value} to index {k}.")
            a[k].clear_transient()
            idx += 1
            k += 1

    yield Step(pause=False, explanation=f"Merged [{left}..{right}].")
