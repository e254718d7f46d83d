"""
token.py — Cancellation Token
=============================
One token per run.  It is ACTIVE from creation until `cancel()`; it can
never be re-activated, so a token left over from an earlier run can
never let that run continue.  The controller hands a fresh token to
every run, and the Snapshot Store only accepts publishes carrying the
token it currently authorises.

Every delay of a run waits on the token's event, so `cancel()` wakes
all of them at once — there is no list of timers to tear down.

Checking is cooperative: nothing here interrupts a running generator.
"""

import itertools
import threading

_run_ids = itertools.count(1)


class CancellationToken:
    """
    Attributes:
        run_id : Unique, increasing id of the run this token belongs to.
    """

    def __init__(self):
        self.run_id: int = next(_run_ids)
        self._cancelled = threading.Event()

    @property
    def is_active(self) -> bool:
        return not self._cancelled.is_set()

    def cancel(self) -> None:
        """Deactivate for good.  Idempotent."""
        self._cancelled.set()

    def wait(self, seconds: float) -> bool:
        """
        Sleep up to `seconds`, returning early if the token is cancelled.
        Returns True if the token is still active afterwards.
        """
        if seconds > 0:
            self._cancelled.wait(seconds)
        return self.is_active

    def __repr__(self) -> str:
        return f"CancellationToken(run_id={self.run_id}, active={self.is_active})"
