from __future__ import annotations

from typing import Optional


class Bf2cError(Exception):
    pass


class StructureError(Bf2cError):
    """Raised when loop brackets in a Brainfuck program do not balance."""

    kind = "structure"

    def __init__(self, message: str, offset: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.offset = offset


class UnmatchedCloseError(StructureError):
    kind = "unmatched_close"

    def __init__(self, offset: int) -> None:
        super().__init__(f"Unmatched ']' at position {offset}", offset)


class UnmatchedOpenError(StructureError):
    kind = "unmatched_open"

    def __init__(self, offset: Optional[int] = None) -> None:
        if offset is None:
            message = "Unmatched '[' detected"
        else:
            message = f"Unmatched '[' at position {offset}"
        super().__init__(message, offset)


class ExecutionError(Bf2cError):
    pass


class StepLimitExceeded(ExecutionError):
    """Raised when interpretation exceeds the configured step budget."""


class TapeBoundsError(ExecutionError):
    """Raised when the cursor leaves the tape during interpretation."""


__all__ = [
    "Bf2cError",
    "ExecutionError",
    "StepLimitExceeded",
    "StructureError",
    "TapeBoundsError",
    "UnmatchedCloseError",
    "UnmatchedOpenError",
]
