"""
Evaluation closures for composite specifications.

Each aggregate takes the ordered children of a composite and returns the
function the composite evaluates with.  ``AGGREGATES`` maps every
:class:`CompositeOperator` to its aggregate.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, TypeVar

from .exceptions import InvariantViolationError
from .operators import CompositeOperator

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

T = TypeVar("T")
T_contra = TypeVar("T_contra", contravariant=True)


class Evaluable(Protocol[T_contra]):
    """Anything that can evaluate a candidate to a boolean."""

    def evaluate(self, candidate: T_contra) -> bool:
        ...


def _require_children(
    operator: CompositeOperator, children: Sequence[Evaluable[Any]]
) -> None:
    if not children:
        raise InvariantViolationError(operator.value)


def not_aggregate(children: Sequence[Evaluable[T]]) -> Callable[[T], bool]:
    """Negate the single child."""
    _require_children(CompositeOperator.NOT, children)
    if len(children) != 1:
        raise InvariantViolationError(
            CompositeOperator.NOT.value,
            f"Aggregate 'not' requires exactly one child specification, "
            f"got {len(children)}",
        )
    child = children[0]

    def satisfy(candidate: T) -> bool:
        return not child.evaluate(candidate)

    return satisfy


def all_aggregate(children: Sequence[Evaluable[T]]) -> Callable[[T], bool]:
    """True when every child is satisfied; stops at the first failure."""
    _require_children(CompositeOperator.ALL, children)

    def satisfy(candidate: T) -> bool:
        for child in children:
            if not child.evaluate(candidate):
                return False
        return True

    return satisfy


def any_aggregate(children: Sequence[Evaluable[T]]) -> Callable[[T], bool]:
    """True when some child is satisfied; stops at the first success."""
    _require_children(CompositeOperator.ANY, children)

    def satisfy(candidate: T) -> bool:
        for child in children:
            if child.evaluate(candidate):
                return True
        return False

    return satisfy


AGGREGATES: dict[
    CompositeOperator, Callable[[Sequence[Evaluable[Any]]], Callable[[Any], bool]]
] = {
    CompositeOperator.NOT: not_aggregate,
    CompositeOperator.ALL: all_aggregate,
    CompositeOperator.ANY: any_aggregate,
}
