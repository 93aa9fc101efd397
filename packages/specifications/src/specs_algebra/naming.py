"""
Diagnostic names for predicates.

:func:`resolve_name` derives the label a leaf specification renders with
from the predicate's introspection metadata:

* ``Employee.is_legal_age`` (a method declared on the candidate's type)
  renders as ``.is_legal_age``;
* other named callables render fully qualified, e.g.
  ``rules.eligibility.has_contract``;
* lambdas render their definition site, e.g.
  ``<anonymous: /srv/rules.py:12>``;
* callables without metadata (callable instances, ``functools.partial``)
  render the placeholder ``<no-name>``.

Only methods looked up on their class are shortened.  A bound method such
as ``bob.is_older_than`` renders fully qualified
(``hr.Employee.is_older_than``): the receiver is an arbitrary object,
not the candidate, so the method is not a property of the candidate's type.

Labels are diagnostic only.  Different interpreters expose different
metadata, so equivalent predicates may render differently and names must
never be compared to decide whether two specifications are equivalent.
"""

from __future__ import annotations

import inspect
import logging
import os
import sys
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger("specs_algebra.naming")

NO_NAME = "<no-name>"
ANONYMOUS_TEMPLATE = "<anonymous: {file}:{line}>"


class NamingPolicy(BaseModel):
    """
    Immutable configuration for :func:`resolve_name`.

    Attributes:
        placeholder: Label for predicates without introspection metadata.
        anonymous_template: Format for lambdas; receives ``file`` and ``line``.
        shorten_methods: Render methods declared on the candidate's type as
            ``.method`` instead of their fully qualified name.
        basename_only: Render only the file's base name for lambdas.
    """

    model_config = ConfigDict(frozen=True)

    placeholder: str = Field(default=NO_NAME, min_length=1)
    anonymous_template: str = ANONYMOUS_TEMPLATE
    shorten_methods: bool = True
    basename_only: bool = False

    @field_validator("anonymous_template")
    @classmethod
    def _require_placeholders(cls, value: str) -> str:
        missing = [key for key in ("{file}", "{line}") if key not in value]
        if missing:
            raise ValueError(f"anonymous_template must contain {', '.join(missing)}")
        try:
            value.format(file="", line=0)
        except (KeyError, IndexError, ValueError) as exc:
            raise ValueError(f"anonymous_template is not a valid format: {exc}") from exc
        return value


DEFAULT_NAMING_POLICY = NamingPolicy()


@runtime_checkable
class NamedPredicate(Protocol):
    """A predicate that knows its own diagnostic name."""

    def __call__(self, candidate: Any) -> bool:
        ...

    def spec_name(self) -> str:
        ...


def resolve_name(predicate: Any, policy: NamingPolicy | None = None) -> str:
    """Return a deterministic diagnostic label for *predicate*. Never raises."""
    policy = policy or DEFAULT_NAMING_POLICY

    label = _explicit_name(predicate)
    if label is not None:
        return label

    if inspect.ismethod(predicate):
        # Bound to an instance or class: not a method of the candidate type.
        return _qualified_name(predicate.__func__) or _placeholder(predicate, policy)

    if getattr(predicate, "__name__", None) == "<lambda>":
        return _anonymous_name(predicate, policy)

    if policy.shorten_methods and _is_declared_method(predicate):
        return "." + predicate.__name__

    return _qualified_name(predicate) or _placeholder(predicate, policy)


# -- internals ---------------------------------------------------------------


def _explicit_name(predicate: Any) -> str | None:
    """Label from a ``spec_name()`` instance method, if it yields a usable one."""
    if inspect.isclass(predicate) or not isinstance(predicate, NamedPredicate):
        return None
    try:
        label = predicate.spec_name()
    except Exception:
        logger.debug("spec_name() of %r raised; ignoring it", predicate, exc_info=True)
        return None
    if not isinstance(label, str) or not label:
        logger.debug("spec_name() of %r returned %r; ignoring it", predicate, label)
        return None
    return label


def _qualified_name(func: Any) -> str | None:
    qualname = getattr(func, "__qualname__", None)
    if not isinstance(qualname, str):
        return None
    module = getattr(func, "__module__", None)
    return f"{module}.{qualname}" if isinstance(module, str) else qualname


def _placeholder(predicate: Any, policy: NamingPolicy) -> str:
    logger.debug("No introspection metadata for %r; using placeholder", predicate)
    return policy.placeholder


def _anonymous_name(predicate: Any, policy: NamingPolicy) -> str:
    code = getattr(predicate, "__code__", None)
    if code is None:
        return _placeholder(predicate, policy)
    filename = code.co_filename
    if policy.basename_only:
        filename = os.path.basename(filename)
    logger.debug(
        "Naming anonymous predicate after %s:%d", filename, code.co_firstlineno
    )
    return policy.anonymous_template.format(file=filename, line=code.co_firstlineno)


def _is_declared_method(predicate: Any) -> bool:
    """
    True when *predicate* is a plain function looked up on its own class.

    The owner is located through ``sys.modules`` with static attribute
    access only, so resolution has no side effects.  Staticmethods, nested
    functions and owners that cannot be located are not methods.
    """
    if not inspect.isfunction(predicate):
        return False

    owner_path, _, attr = predicate.__qualname__.rpartition(".")
    if not owner_path or "<locals>" in owner_path:
        return False

    owner: Any = sys.modules.get(predicate.__module__)
    for part in owner_path.split("."):
        if owner is None:
            return False
        owner = inspect.getattr_static(owner, part, None)

    if not inspect.isclass(owner):
        return False
    return inspect.getattr_static(owner, attr, None) is predicate
