"""
step.py — Step Marker & Run Outcome
===================================
Every algorithm is a generator that mutates its model in place and
yields a Step at each observable boundary.  The Stepper turns each
yielded Step into:

    publish a snapshot of the model
    → (if step.pause) wait for the speed-derived delay
    → check the cancellation token

So a Step carries no state of its own; the model IS the state.  The
generator's `return` value (StopIteration.value) is its Outcome, with
None meaning "ran to the end".

Design decisions:
  - Step is frozen.  The algorithm generator is the only writer of the
    model; the stepper / renderer are pure readers of snapshots.
  - `pause=False` is used for bookkeeping publishes (clearing transient
    flags, marking sorted) that don't deserve a full delay.
"""

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class Step:
    """
    Attributes:
        pause       : Wait for the step delay after publishing.
        explanation : Human-readable "what just happened".
    """

    pause:       bool = True
    explanation: str  = ""


class Outcome(Enum):
    COMPLETED      = "completed"        # ran to the end
    CANCELLED      = "cancelled"        # stop() was requested
    NEGATIVE_CYCLE = "negative_cycle"   # Bellman-Ford detector pass fired
    FAILED         = "failed"           # unexpected error inside an engine
