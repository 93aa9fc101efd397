from enum import Enum


class CompositeOperator(str, Enum):
    """Logical operators a composite specification can be built with."""

    NOT = "not"
    ALL = "all"
    ANY = "any"
