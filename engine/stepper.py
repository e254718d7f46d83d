"""
stepper.py — Step Loop
======================
The Stepper drives one algorithm generator to the end.  For every Step
the generator yields it:

    1. checks the token               (stop requested while mutating?)
    2. publishes a snapshot           (store.publish)
    3. waits the speed delay          (only if step.pause)
    4. checks the token again         (stop requested while waiting?)

The generator itself checks the token at its loop heads / work-stack
pops; the stepper's checks cover the suspension points.  Whichever
side notices first, the generator is closed and the run ends CANCELLED.

State machine:
    IDLE  →  run()  →  RUNNING  →  (exhausted / cancelled)  →  FINISHED

Thread safety:
  One Stepper drives one run on one thread.  Other threads interact
  with the run only through the token and the store.
"""

from enum import Enum
from typing import Generator, Optional

from algorithms.step import Step, Outcome
from engine.scheduler import DelayScheduler
from engine.store import SnapshotStore
from engine.token import CancellationToken


class StepperState(Enum):
    IDLE     = "idle"
    RUNNING  = "running"
    FINISHED = "finished"


class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps_taken : Steps pulled from the generator so far.
    """

    def __init__(self, store: SnapshotStore, scheduler: DelayScheduler):
        self.store:       SnapshotStore  = store
        self.scheduler:   DelayScheduler = scheduler
        self.state:       StepperState   = StepperState.IDLE
        self.steps_taken: int            = 0

    def run(
        self,
        generator: Generator[Step, None, Optional[Outcome]],
        token: CancellationToken,
        speed: int,
    ) -> Outcome:
        """Exhaust `generator`, publishing and pacing every step."""
        self.state       = StepperState.RUNNING
        self.steps_taken = 0
        outcome: Optional[Outcome] = None

        try:
            while outcome is None:
                if not token.is_active:
                    outcome = Outcome.CANCELLED
                    break
                try:
                    step = next(generator)
                except StopIteration as stop:
                    outcome = stop.value or (Outcome.COMPLETED if token.is_active else Outcome.CANCELLED)
                    break

                self.steps_taken += 1
                if not token.is_active:
                    outcome = Outcome.CANCELLED
                    break
                self.store.publish(token, step.explanation)

                if step.pause and not self.scheduler.wait(token, speed):
                    outcome = Outcome.CANCELLED
        finally:
            generator.close()
            self.state = StepperState.FINISHED

        return outcome
