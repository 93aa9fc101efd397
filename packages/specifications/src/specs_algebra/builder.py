"""
Fluent builder for constructing specification trees.

Example::

    spec = (
        SpecificationBuilder()
        .where(Employee.is_legal_age)
        .where(Employee.has_contract)
        .build()
    )
    # → all(.is_legal_age, .has_contract)

    spec = (
        SpecificationBuilder()
        .any_group()
            .where(Employee.is_manager)
            .where(Employee.is_contractor)
        .end_group()
        .not_group()
            .where(Employee.is_suspended)
        .end_group()
        .build()
    )
    # → all(any(.is_manager, .is_contractor), not(.is_suspended))
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from .base import all_of, any_of, ensure_specification, new, new_named, nil, not_
from .exceptions import InvalidArgumentError
from .operators import CompositeOperator

if TYPE_CHECKING:
    from .base import Predicate, Specification
    from .naming import NamingPolicy

logger = logging.getLogger("specs_algebra.builder")


class SpecificationBuilder:
    """
    Fluent builder for composing specification trees.

    Conditions added at the same level are combined with ``all`` by default.
    Use ``any_group()`` / ``all_group()`` / ``not_group()`` for explicit
    grouping, and ``end_group()`` to close the current group.
    """

    def __init__(self, naming: NamingPolicy | None = None) -> None:
        self._naming = naming
        self._specs: list[Specification[Any]] = []
        # stack items: (group_operator, specs_list)
        self._stack: list[tuple[CompositeOperator, list[Specification[Any]]]] = []

    # -- leaf conditions -----------------------------------------------------

    def where(self, predicate: Predicate[Any]) -> SpecificationBuilder:
        """Add a predicate, named by the builder's naming policy."""
        if predicate is None:
            raise InvalidArgumentError(
                "where() requires a predicate", argument="predicate"
            )
        self._current_list().append(new(predicate, naming=self._naming))
        return self

    def where_named(self, name: str, predicate: Predicate[Any]) -> SpecificationBuilder:
        """Add a predicate under an explicit name."""
        self._current_list().append(new_named(name, predicate))
        return self

    def add(self, spec: Specification[Any]) -> SpecificationBuilder:
        """Add an already-constructed specification to the current group."""
        self._current_list().append(ensure_specification(spec, "add"))
        return self

    # -- grouping ------------------------------------------------------------

    def all_group(self) -> SpecificationBuilder:
        """Open a new ``all`` group.  Close with ``end_group()``."""
        self._stack.append((CompositeOperator.ALL, []))
        return self

    def any_group(self) -> SpecificationBuilder:
        """Open a new ``any`` group.  Close with ``end_group()``."""
        self._stack.append((CompositeOperator.ANY, []))
        return self

    def not_group(self) -> SpecificationBuilder:
        """Open a new ``not`` group (single child).  Close with ``end_group()``."""
        self._stack.append((CompositeOperator.NOT, []))
        return self

    def end_group(self) -> SpecificationBuilder:
        """Close the current group and add it to the parent."""
        if not self._stack:
            raise InvalidArgumentError("No open group to close")
        group_op, specs = self._stack.pop()
        if not specs:
            raise InvalidArgumentError(
                f"Cannot close an empty '{group_op.value}' group"
            )
        self._current_list().append(_combine(group_op, specs))
        return self

    # -- build ---------------------------------------------------------------

    def build(self) -> Specification[Any]:
        """
        Finalise and return the composed specification.

        A single top-level condition is returned as-is, several are combined
        with ``all``, and no conditions at all yield the nil specification.

        Raises:
            InvalidArgumentError: If groups are still open.
        """
        if self._stack:
            raise InvalidArgumentError(
                f"{len(self._stack)} group(s) still open; "
                f"call end_group() before build()"
            )
        if not self._specs:
            return nil()
        spec = _combine(CompositeOperator.ALL, self._specs)
        logger.debug("Built specification %s", spec)
        return spec

    def reset(self) -> SpecificationBuilder:
        """Clear all conditions and return ``self`` for reuse."""
        self._specs.clear()
        self._stack.clear()
        return self

    # -- internals -----------------------------------------------------------

    def _current_list(self) -> list[Specification[Any]]:
        """Return the list that new specs should be appended to."""
        if self._stack:
            return self._stack[-1][1]
        return self._specs


def _combine(
    op: CompositeOperator, specs: list[Specification[Any]]
) -> Specification[Any]:
    """Combine a non-empty list of specs with the given operator."""
    if op is CompositeOperator.NOT:
        if len(specs) != 1:
            raise InvalidArgumentError("'not' group must contain exactly one condition")
        return not_(specs[0])
    if len(specs) == 1:
        return specs[0]
    if op is CompositeOperator.ALL:
        return all_of(*specs)
    return any_of(*specs)
