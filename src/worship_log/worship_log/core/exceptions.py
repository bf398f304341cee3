from __future__ import annotations

from typing import Optional

from .enums import StoreOperation


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class NameSuffixExhausted(ValidationError):
    """Raised when every suffix letter A-Z is already taken for a name."""


class AmbiguousNameDeclined(DomainError):
    """The operator did not confirm that a same-named student is a different person.

    Not a failure: nothing was written.
    """

    def __init__(self, base_name: str, prompt: str):
        super().__init__(prompt)
        self.base_name = base_name
        self.prompt = prompt


class StoreWriteFailure(DomainError):
    """A persistence call failed; ``operation`` names the step that failed."""

    def __init__(
        self,
        operation: StoreOperation,
        message: str,
        *,
        student_id: Optional[int] = None,
        rolled_back: Optional[bool] = None,
    ):
        super().__init__(message)
        self.operation = operation
        self.student_id = student_id
        self.rolled_back = rolled_back


class InconsistentStateWarning(UserWarning):
    """Legacy record whose dates/tags contradict the roster rules."""
