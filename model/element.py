"""
element.py — Sortable Array Model
=================================
`Element` is one bar of the sorting view; `ArrayModel` is the mutable
array the sorting engines work on in place.

Invariants the engines rely on:
  - `sorted` is only ever set during a run, never cleared.
  - `compared` / `swapped` are transient: whoever sets them clears them
    by the end of the same step.
  - The length never changes during a run.  A new array replaces the
    model wholesale, between runs only.
"""

import random
from typing import Iterable, List, Optional

from errors import InputFormatError
from model.snapshot import ArraySnapshot, Bar


# value range used by the random generator and the custom-input check
MIN_VALUE = 10
MAX_VALUE = 300


class Element:
    __slots__ = ("value", "compared", "swapped", "sorted")

    def __init__(self, value: float, compared: bool = False, swapped: bool = False, sorted: bool = False):
        self.value    = value
        self.compared = compared
        self.swapped  = swapped
        self.sorted   = sorted

    def clear_transient(self) -> None:
        self.compared = False
        self.swapped  = False

    def reset(self) -> None:
        self.clear_transient()
        self.sorted = False

    def copy(self, **overrides) -> "Element":
        el = Element(self.value, self.compared, self.swapped, self.sorted)
        for name, value in overrides.items():
            setattr(el, name, value)
        return el

    def freeze(self) -> Bar:
        return Bar(self.value, self.compared, self.swapped, self.sorted)

    def __repr__(self) -> str:
        flags = "".join(c for c, on in (("c", self.compared), ("s", self.swapped), ("S", self.sorted)) if on)
        return f"Element({self.value}{', ' + flags if flags else ''})"


class ArrayModel:
    """Ordered list of Elements, mutated in place by the sorting engines."""

    def __init__(self, values: Iterable[float] = ()):
        self.elements: List[Element] = [Element(v) for v in values]

    # ==================================================================
    # FACTORIES
    # ==================================================================
    @classmethod
    def random(cls, size: int, rng: Optional[random.Random] = None) -> "ArrayModel":
        """`size` random integers in [MIN_VALUE, MAX_VALUE)."""
        rng = rng or random.Random()
        return cls(rng.randrange(MIN_VALUE, MAX_VALUE) for _ in range(size))

    @classmethod
    def from_text(cls, text: str) -> "ArrayModel":
        """
        Parse comma-separated custom input, e.g. "42, 17, 250".
        Every value must be an integer in [MIN_VALUE, MAX_VALUE].
        """
        values = []
        for token in text.split(","):
            token = token.strip()
            try:
                value = int(token)
            except ValueError:
                raise InputFormatError(f"not an integer: {token!r}") from None
            if not MIN_VALUE <= value <= MAX_VALUE:
                raise InputFormatError(
                    f"{value} is out of range; enter numbers between {MIN_VALUE} and {MAX_VALUE}"
                )
            values.append(value)
        return cls(values)

    # ==================================================================
    # MUTATION (engines only)
    # ==================================================================
    def swap(self, i: int, j: int) -> None:
        self.elements[i], self.elements[j] = self.elements[j], self.elements[i]

    def mark_all_sorted(self) -> None:
        for el in self.elements:
            el.sorted = True

    def clear_transient(self) -> None:
        for el in self.elements:
            el.clear_transient()

    def reset_algo_state(self) -> None:
        for el in self.elements:
            el.reset()

    # ==================================================================
    # READ
    # ==================================================================
    def values(self) -> List[float]:
        return [el.value for el in self.elements]

    def snapshot(self, step_number: int = 0, explanation: str = "", run_id: int = 0) -> ArraySnapshot:
        return ArraySnapshot(
            step_number=step_number,
            bars=tuple(el.freeze() for el in self.elements),
            explanation=explanation,
            run_id=run_id,
        )

    def __len__(self) -> int:
        return len(self.elements)

    def __getitem__(self, idx: int) -> Element:
        return self.elements[idx]

    def __setitem__(self, idx: int, el: Element) -> None:
        self.elements[idx] = el

    def __repr__(self) -> str:
        return f"ArrayModel({self.values()})"
