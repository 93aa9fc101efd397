"""
Specification variants and the factories that build them.

Three variants share one abstract base:

* :class:`PredicateSpecification` wraps a single predicate (leaf);
* :class:`NilSpecification` is the identity element, true for everything;
* :class:`CompositeSpecification` combines children with ``not``, ``all``
  or ``any``.

Every variant is immutable.  Combining always returns a new specification
and never copies or mutates the children it references.

Example::

    spec = new(Employee.is_legal_age).and_not_func(Employee.is_male)
    spec.evaluate(bob)  # False
    str(spec)           # "all(.is_legal_age, not(.is_male))"
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from .aggregates import AGGREGATES
from .exceptions import InvalidArgumentError
from .naming import resolve_name
from .operators import CompositeOperator

if TYPE_CHECKING:
    from .naming import NamingPolicy

T = TypeVar("T")

Predicate = Callable[[T], bool]

logger = logging.getLogger("specs_algebra.base")


class Specification(ABC, Generic[T]):
    """
    Base class for specifications with logic operator support.

    Subclasses implement :meth:`evaluate` and :meth:`describe`; the fluent
    combinators are defined here once and delegate to :meth:`and_`,
    :meth:`or_` and :meth:`not_`.
    """

    __slots__ = ()

    @abstractmethod
    def evaluate(self, candidate: T) -> bool:
        """Return True if *candidate* satisfies the specification."""
        ...

    @abstractmethod
    def describe(self) -> str:
        """Render the specification tree, e.g. ``all(.a, not(.b))``."""
        ...

    def is_satisfied_by(self, candidate: T) -> bool:
        return self.evaluate(candidate)

    def __call__(self, candidate: T) -> bool:
        return self.evaluate(candidate)

    def spec_name(self) -> str:
        """Name used when this specification is itself wrapped as a predicate."""
        return self.describe()

    # -- fluent combinators --------------------------------------------------

    def and_(self, other: Specification[T]) -> Specification[T]:
        return all_of(self, other)

    def or_(self, other: Specification[T]) -> Specification[T]:
        return any_of(self, other)

    def not_(self) -> Specification[T]:
        return not_(self)

    def and_not(self, other: Specification[T]) -> Specification[T]:
        return self.and_(not_(other))

    def or_not(self, other: Specification[T]) -> Specification[T]:
        return self.or_(not_(other))

    def and_func(
        self, predicate: Predicate[T] | None, *, naming: NamingPolicy | None = None
    ) -> Specification[T]:
        return self.and_(new(predicate, naming=naming))

    def or_func(
        self, predicate: Predicate[T] | None, *, naming: NamingPolicy | None = None
    ) -> Specification[T]:
        return self.or_(new(predicate, naming=naming))

    def and_not_func(
        self, predicate: Predicate[T] | None, *, naming: NamingPolicy | None = None
    ) -> Specification[T]:
        return self.and_not(new(predicate, naming=naming))

    def or_not_func(
        self, predicate: Predicate[T] | None, *, naming: NamingPolicy | None = None
    ) -> Specification[T]:
        return self.or_not(new(predicate, naming=naming))

    # -- operators -----------------------------------------------------------

    def __and__(self, other: Specification[T]) -> Specification[T]:
        return self.and_(other)

    def __or__(self, other: Specification[T]) -> Specification[T]:
        return self.or_(other)

    def __invert__(self) -> Specification[T]:
        return self.not_()

    def __str__(self) -> str:
        return self.describe()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


@dataclass(frozen=True, eq=False, repr=False)
class PredicateSpecification(Specification[T]):
    """Leaf specification wrapping one predicate."""

    name: str
    predicate: Predicate[T]

    def evaluate(self, candidate: T) -> bool:
        return bool(self.predicate(candidate))

    def describe(self) -> str:
        return self.name


class NilSpecification(Specification[T]):
    """
    No-op specification that evaluates to true for every candidate.

    Its combinators deliberately depart from classical logic:

    - ``and_(other)`` and ``or_(other)`` both return ``other``; "no
      constraint" combined with X behaves like X, even under OR;
    - ``not_()`` returns the nil specification itself.

    Use :func:`nil` rather than instantiating this class.
    """

    __slots__ = ()

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def evaluate(self, candidate: T) -> bool:
        return True

    def describe(self) -> str:
        return "nil"

    def and_(self, other: Specification[T]) -> Specification[T]:
        return ensure_specification(other, "and")

    def or_(self, other: Specification[T]) -> Specification[T]:
        return ensure_specification(other, "or")

    def not_(self) -> Specification[T]:
        return self


@dataclass(frozen=True, eq=False, repr=False)
class CompositeSpecification(Specification[T]):
    """Specification derived from one or more children by a logical operator."""

    operator: CompositeOperator
    children: tuple[Specification[T], ...]
    _satisfy: Predicate[T] = field(init=False)

    def __post_init__(self) -> None:
        children = tuple(self.children)
        for idx, child in enumerate(children):
            ensure_specification(child, self.operator.value, idx)
        object.__setattr__(self, "children", children)
        object.__setattr__(self, "_satisfy", AGGREGATES[self.operator](children))

    def evaluate(self, candidate: T) -> bool:
        return self._satisfy(candidate)

    def describe(self) -> str:
        args = ", ".join(child.describe() for child in self.children)
        return f"{self.operator.value}({args})"


_NIL: NilSpecification[Any] = NilSpecification()


# -- factories -----------------------------------------------------------------


def nil() -> Specification[Any]:
    """Return the shared nil (identity) specification."""
    return _NIL


def new(
    predicate: Predicate[T] | None = None,
    *,
    naming: NamingPolicy | None = None,
) -> Specification[T]:
    """
    Wrap *predicate* in a leaf specification.

    The leaf is named by :func:`~specs_algebra.naming.resolve_name`.
    Passing ``None`` returns the nil specification.
    """
    if predicate is None:
        return nil()
    return PredicateSpecification(resolve_name(predicate, naming), predicate)


def new_named(name: str, predicate: Predicate[T]) -> Specification[T]:
    """
    Wrap *predicate* in a leaf specification with an explicit name.

    Raises:
        InvalidArgumentError: If *name* is empty or *predicate* is ``None``.
    """
    if not name or not name.strip():
        raise InvalidArgumentError(
            "Specification name must not be empty", argument="name"
        )
    if predicate is None:
        raise InvalidArgumentError(
            f"Specification '{name}' requires a predicate", argument="predicate"
        )
    return PredicateSpecification(name, predicate)


def not_(spec: Specification[T]) -> Specification[T]:
    """Negate *spec*.  Negating the nil specification returns it unchanged."""
    if isinstance(spec, NilSpecification):
        return spec
    return _composite(CompositeOperator.NOT, (spec,))


def all_of(*specs: Specification[T]) -> Specification[T]:
    """Satisfied when every spec is; the nil specification when none given."""
    if not specs:
        logger.debug("Empty 'all' composite; substituting nil specification")
        return nil()
    return _composite(CompositeOperator.ALL, specs)


def any_of(*specs: Specification[T]) -> Specification[T]:
    """Satisfied when some spec is; the nil specification when none given."""
    if not specs:
        logger.debug("Empty 'any' composite; substituting nil specification")
        return nil()
    return _composite(CompositeOperator.ANY, specs)


def ensure_specification(value: Any, context: str, idx: int = 0) -> Any:
    """
    Return *value* if it is a :class:`Specification`.

    Raises:
        InvalidArgumentError: For anything else, raw predicates included.
    """
    if not isinstance(value, Specification):
        raise InvalidArgumentError(
            f"'{context}' argument {idx} is {type(value).__name__}, "
            f"not a Specification; wrap predicates with new()",
            argument=f"specs[{idx}]",
        )
    return value


def _composite(
    operator: CompositeOperator, specs: tuple[Specification[T], ...]
) -> Specification[T]:
    return CompositeSpecification(operator, specs)
