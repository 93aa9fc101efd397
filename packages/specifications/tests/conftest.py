"""Shared fixtures for specification tests."""

from __future__ import annotations

import pytest

from employees import Employee, Gender


@pytest.fixture
def bob() -> Employee:
    return Employee(age=19, gender=Gender.MALE)


@pytest.fixture
def alice() -> Employee:
    return Employee(age=17, gender=Gender.FEMALE)


@pytest.fixture
def carol() -> Employee:
    return Employee(age=42, gender=Gender.FEMALE)
