from .aggregates import AGGREGATES, all_aggregate, any_aggregate, not_aggregate
from .base import (
    CompositeSpecification,
    NilSpecification,
    Predicate,
    PredicateSpecification,
    Specification,
    all_of,
    any_of,
    ensure_specification,
    new,
    new_named,
    nil,
    not_,
)
from .builder import SpecificationBuilder
from .exceptions import (
    InvalidArgumentError,
    InvariantViolationError,
    SpecificationError,
)
from .naming import (
    DEFAULT_NAMING_POLICY,
    NO_NAME,
    NamedPredicate,
    NamingPolicy,
    resolve_name,
)
from .operators import CompositeOperator

__all__ = [
    # Core types
    "CompositeOperator",
    "Specification",
    "PredicateSpecification",
    "NilSpecification",
    "CompositeSpecification",
    "Predicate",
    # Factories
    "new",
    "new_named",
    "nil",
    "not_",
    "all_of",
    "any_of",
    "ensure_specification",
    # Builder
    "SpecificationBuilder",
    # Aggregates
    "AGGREGATES",
    "not_aggregate",
    "all_aggregate",
    "any_aggregate",
    # Naming
    "NamingPolicy",
    "NamedPredicate",
    "DEFAULT_NAMING_POLICY",
    "NO_NAME",
    "resolve_name",
    # Exceptions
    "SpecificationError",
    "InvalidArgumentError",
    "InvariantViolationError",
]
