"""
Specification exception hierarchy.

All exceptions inherit from ``SpecificationError`` and provide
``to_dict()`` for API-friendly error responses.  Failures raised by wrapped
predicates are never translated into these types.
"""

from __future__ import annotations

from typing import Any


class SpecificationError(Exception):
    """Base exception for all specification errors."""

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": self.__class__.__name__,
            "message": str(self),
        }


class InvalidArgumentError(SpecificationError, ValueError):
    """A specification was constructed with an argument the caller must fix."""

    def __init__(self, message: str, argument: str | None = None) -> None:
        self.message = message
        self.argument = argument
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVALID_ARGUMENT",
            "message": self.message,
            "argument": self.argument,
        }


class InvariantViolationError(SpecificationError, AssertionError):
    """
    Internal invariant of the algebra has been broken.

    Raised when an aggregate is built with no children, or ``not`` with
    more than one.  The public factories substitute the identity
    specification for empty input, so seeing this error means the factory
    guard itself is faulty.
    """

    def __init__(self, operator: str, message: str | None = None) -> None:
        self.operator = operator
        super().__init__(
            message
            or f"Aggregate '{operator}' requires at least one child specification; "
            f"use the nil specification instead"
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "INVARIANT_VIOLATION",
            "message": str(self),
            "operator": self.operator,
        }
