"""Tests for predicate name resolution."""

from __future__ import annotations

import functools
import logging

import pytest
from pydantic import ValidationError

from employees import Employee, Gender, Manager
from specs_algebra import NO_NAME, NamedPredicate, NamingPolicy, resolve_name


def has_even_age(employee: Employee) -> bool:
    return employee.age % 2 == 0


class OlderThan:
    """Callable instance without introspection metadata."""

    def __init__(self, age: int) -> None:
        self.age = age

    def __call__(self, employee: Employee) -> bool:
        return employee.age > self.age


class Labelled:
    """Callable instance implementing the explicit naming capability."""

    def __call__(self, employee: Employee) -> bool:
        return True

    def spec_name(self) -> str:
        return "is-anyone"


class Faulty:
    """Callable instance whose naming capability fails."""

    def __init__(self, label: object) -> None:
        self.label = label

    def __call__(self, employee: Employee) -> bool:
        return True

    def spec_name(self) -> object:
        if isinstance(self.label, Exception):
            raise self.label
        return self.label


# -- Methods on the candidate type ------------------------------------------


def test_method_of_candidate_type_is_shortened():
    assert resolve_name(Employee.is_legal_age) == ".is_legal_age"
    assert resolve_name(Employee.is_male) == ".is_male"


def test_inherited_method_is_shortened():
    assert resolve_name(Manager.is_legal_age) == ".is_legal_age"


def test_shortening_can_be_disabled():
    policy = NamingPolicy(shorten_methods=False)
    assert resolve_name(Employee.is_legal_age, policy) == (
        "employees.Employee.is_legal_age"
    )


def test_staticmethod_is_fully_qualified():
    assert resolve_name(Employee.is_retired) == "employees.Employee.is_retired"


def test_bound_method_is_fully_qualified():
    bob = Employee(age=19, gender=Gender.MALE)
    assert resolve_name(bob.is_legal_age) == "employees.Employee.is_legal_age"


# -- Other named callables ---------------------------------------------------


def test_module_function_is_fully_qualified():
    assert resolve_name(has_even_age) == f"{has_even_age.__module__}.has_even_age"


def test_nested_function_keeps_locals_marker():
    def is_senior(employee: Employee) -> bool:
        return employee.age > 60

    name = resolve_name(is_senior)
    assert name.endswith("test_nested_function_keeps_locals_marker.<locals>.is_senior")


def test_builtin_is_fully_qualified():
    assert resolve_name(callable) == "builtins.callable"


# -- Anonymous predicates ----------------------------------------------------


def test_lambda_renders_definition_site():
    predicate = lambda employee: employee.age > 30  # noqa: E731
    code = predicate.__code__
    assert resolve_name(predicate) == (
        f"<anonymous: {code.co_filename}:{code.co_firstlineno}>"
    )


def test_lambda_basename_only():
    predicate = lambda employee: True  # noqa: E731
    line = predicate.__code__.co_firstlineno
    policy = NamingPolicy(basename_only=True)
    assert resolve_name(predicate, policy) == f"<anonymous: test_naming.py:{line}>"


def test_distinct_lambdas_render_distinct_names():
    first = lambda employee: True  # noqa: E731
    second = lambda employee: False  # noqa: E731
    assert resolve_name(first) != resolve_name(second)


def test_custom_anonymous_template():
    predicate = lambda employee: True  # noqa: E731
    policy = NamingPolicy(anonymous_template="λ@{file}#{line}", basename_only=True)
    assert resolve_name(predicate, policy).startswith("λ@test_naming.py#")


# -- Missing metadata --------------------------------------------------------


def test_callable_instance_uses_placeholder():
    assert resolve_name(OlderThan(30)) == NO_NAME


def test_partial_uses_placeholder():
    assert resolve_name(functools.partial(has_even_age)) == "<no-name>"


def test_custom_placeholder():
    policy = NamingPolicy(placeholder="<unnamed>")
    assert resolve_name(OlderThan(30), policy) == "<unnamed>"


def test_placeholder_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="specs_algebra.naming")
    resolve_name(OlderThan(30))
    assert "placeholder" in caplog.text


# -- Explicit naming capability ----------------------------------------------


def test_named_predicate_supplies_its_own_name():
    predicate = Labelled()
    assert isinstance(predicate, NamedPredicate)
    assert resolve_name(predicate) == "is-anyone"


def test_plain_function_is_not_a_named_predicate():
    assert not isinstance(has_even_age, NamedPredicate)


def test_class_with_naming_capability_is_named_after_itself():
    assert resolve_name(Labelled) == f"{__name__}.Labelled"


@pytest.mark.parametrize("label", [RuntimeError("no label"), None, 42, ""], ids=repr)
def test_unusable_spec_name_falls_back_to_placeholder(label: object):
    assert resolve_name(Faulty(label)) == NO_NAME


def test_unusable_spec_name_is_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="specs_algebra.naming")
    resolve_name(Faulty(RuntimeError("no label")))
    assert "spec_name() of" in caplog.text


# -- Determinism -------------------------------------------------------------


@pytest.mark.parametrize(
    "predicate",
    [Employee.is_legal_age, has_even_age, callable, OlderThan(1)],
)
def test_resolution_is_deterministic(predicate):
    assert resolve_name(predicate) == resolve_name(predicate)


# -- NamingPolicy ------------------------------------------------------------


def test_policy_defaults():
    policy = NamingPolicy()
    assert policy.placeholder == "<no-name>"
    assert policy.anonymous_template == "<anonymous: {file}:{line}>"
    assert policy.shorten_methods is True
    assert policy.basename_only is False


def test_policy_is_frozen():
    policy = NamingPolicy()
    with pytest.raises(ValidationError):
        policy.placeholder = "changed"


def test_policy_rejects_template_without_placeholders():
    with pytest.raises(ValidationError, match="line"):
        NamingPolicy(anonymous_template="<anonymous: {file}>")


def test_policy_rejects_empty_placeholder():
    with pytest.raises(ValidationError):
        NamingPolicy(placeholder="")


def test_policy_rejects_unknown_template_fields():
    with pytest.raises(ValidationError, match="not a valid format"):
        NamingPolicy(anonymous_template="{file}:{line} in {function}")
