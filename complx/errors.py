"""Error types surfaced by the optimizers."""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    INVALID_INPUT = "INVALID_INPUT"
    OUT_OF_BOUNDS = "OUT_OF_BOUNDS"


class ComplxError(Exception):
    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}


class InvalidInputError(ComplxError):
    """The problem parameters cannot describe a valid instance."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.INVALID_INPUT, message, details)


class OutOfBoundsError(ComplxError):
    """A coordinate lies outside the field."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(ErrorCode.OUT_OF_BOUNDS, message, details)
