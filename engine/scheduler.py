"""
scheduler.py — Delay Scheduler
==============================
Turns the 1–10 speed slider into a pause between steps:

    delay_ms = 1100 - speed × 100        (speed 1 → 1 s, speed 10 → 100 ms)

`scale` multiplies every delay; 0 runs headless at full speed (tests),
values between 0 and 1 give a quicker demo.
"""

from errors import PreconditionError
from engine.token import CancellationToken

MIN_SPEED = 1
MAX_SPEED = 10


def validate_speed(speed: int) -> int:
    if isinstance(speed, bool) or not isinstance(speed, int) or not MIN_SPEED <= speed <= MAX_SPEED:
        raise PreconditionError(f"speed must be an integer between {MIN_SPEED} and {MAX_SPEED}, got {speed!r}")
    return speed


def delay_ms(speed: int) -> int:
    return 1100 - validate_speed(speed) * 100


class DelayScheduler:
    def __init__(self, scale: float = 1.0):
        if scale < 0:
            raise ValueError("delay scale must be >= 0")
        self.scale = scale

    def delay_seconds(self, speed: int) -> float:
        return delay_ms(speed) * self.scale / 1000.0

    def wait(self, token: CancellationToken, speed: int) -> bool:
        """
        Suspend the caller for the speed's delay.  Resolves immediately
        once the token is cancelled.  Returns True if the run may go on.
        """
        if not token.is_active:
            return False
        return token.wait(self.delay_seconds(speed))
