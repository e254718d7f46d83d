"""
errors.py — Error Kinds
=======================
Every failure the user can trigger maps to one of these.  None of them
is fatal: the run either never starts or the current run exits.

    VisualizerError
     ├── InputFormatError    malformed adjacency text / custom array
     ├── PreconditionError   nothing to run on, bad start node, bad speed …
     └── RunActiveError      a run is already in progress

Cancellation and negative-cycle detection are NOT errors; they are
run outcomes (see algorithms.step.Outcome).
"""


class VisualizerError(Exception):
    """Base class for all user-facing errors."""


class InputFormatError(VisualizerError, ValueError):
    """Input text could not be parsed into a model."""

    def __init__(self, message: str, line: int = 0):
        self.line = line
        if line:
            message = f"line {line}: {message}"
        super().__init__(message)


class PreconditionError(VisualizerError):
    """A run was requested without what it needs to start."""


class RunActiveError(VisualizerError):
    """start() was called while another run is still active."""
