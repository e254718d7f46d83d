"""
engine/
-------
Run layer: cancellation, pacing, publishing and orchestration.

    from engine import RunController
"""

from engine.token      import CancellationToken
from engine.scheduler  import DelayScheduler, delay_ms, validate_speed, MIN_SPEED, MAX_SPEED
from engine.store      import SnapshotStore
from engine.stepper    import Stepper, StepperState
from engine.recorder   import Recorder, RunMetrics
from engine.controller import RunController

__all__ = [
    "CancellationToken",
    "DelayScheduler",
    "delay_ms",
    "validate_speed",
    "MIN_SPEED",
    "MAX_SPEED",
    "SnapshotStore",
    "Stepper",
    "StepperState",
    "Recorder",
    "RunMetrics",
    "RunController",
]
