"""Pytest configuration for dataknobs_fieldspec tests."""

import pytest

from dataknobs_fieldspec import constraint, optional_field, required_field


def is_binary(value):
    return isinstance(value, (str, bytes))


def is_number(value):
    return isinstance(value, (int, float))


def length_of(n):
    return lambda value: len(value) == n


@pytest.fixture
def name_and_code_spec():
    """Two required fields without constraints."""
    return [
        required_field("name", "name", "missing_name", []),
        required_field("country_code", "country_code", "missing_country_code", []),
    ]


@pytest.fixture
def country_spec():
    """Full country spec with constraints on every field."""
    return [
        required_field("name", "name", "missing_name", [
            constraint(is_binary, "not_binary"),
        ]),
        required_field("country_code", "country_code", "missing_country_code", [
            constraint(is_binary, "not_binary"),
            constraint(length_of(2), ("equal_length", 2)),
        ]),
        optional_field("currency_code", "currency_code", [
            constraint(is_number, "not_number"),
            constraint(length_of(3), ("equal_length", 3)),
        ]),
    ]


@pytest.fixture
def code_currency_spec():
    """Required code plus optional currency, both checked for type and length."""
    return [
        required_field("code", "code", "missing_code", [
            constraint(is_binary, "not_string"),
            constraint(length_of(2), ("equal_length", 2)),
        ]),
        optional_field("currency", "currency", [
            constraint(is_binary, "not_string"),
            constraint(length_of(3), ("equal_length", 3)),
        ]),
    ]
