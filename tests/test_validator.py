"""Tests for the validation engine."""

import threading

import pytest

from dataknobs_fieldspec import (
    AccessorError,
    ConfigurationError,
    ErrorOrder,
    SpecificationError,
    ValidationResult,
    Validator,
    constraint,
    optional_field,
    required_field,
    validate,
)

from .records import Country, CountryTuple


class TestMissingValues:
    """Test required and optional handling of absent values."""

    def test_missing_required_name(self, name_and_code_spec):
        """A missing required field yields exactly its missing error."""
        result = validate(Country(country_code="NL"), name_and_code_spec)
        assert result.valid is False
        assert result.errors == [("name", ["missing_name"])]

    def test_missing_required_country_code(self, name_and_code_spec):
        """Test the second required field going missing."""
        result = validate(Country(name="Netherlands"), name_and_code_spec)
        assert result.errors == [("country_code", ["missing_country_code"])]

    def test_missing_optional_is_ignored(self, country_spec):
        """An absent optional field produces no bucket."""
        record = Country(name="Netherlands", country_code="NL")
        assert validate(record, country_spec) == ValidationResult.success()

    def test_missing_required_skips_constraints(self):
        """Constraints are not evaluated on an absent value."""
        calls = []

        def spy(value):
            calls.append(value)
            return False

        spec = [required_field("name", "name", "missing_name", [
            constraint(spy, "a"),
            constraint(spy, "b"),
        ])]
        result = validate({"name": None}, spec)
        assert result.errors == [("name", ["missing_name"])]
        assert calls == []

    def test_missing_optional_skips_constraints(self):
        """Optional fields with failing constraints still pass when absent."""
        spec = [optional_field("x", "x", [constraint(lambda v: False, "never")])]
        assert validate({}, spec).valid is True

    def test_falsy_values_are_present(self):
        """Only None means absent; 0, '' and False are checked normally."""
        spec = [
            required_field("a", "a", "missing_a", [constraint(lambda v: v == 0, "not_zero")]),
            required_field("b", "b", "missing_b", [constraint(lambda v: v != "", "empty")]),
            required_field("c", "c", "missing_c"),
        ]
        result = validate({"a": 0, "b": "", "c": False}, spec)
        assert result.errors == [("b", ["empty"])]


class TestConstraintEvaluation:
    """Test constraint evaluation on present values."""

    def test_multiple_constraint_failures(self, country_spec):
        """Every failing constraint is reported."""
        record = Country(name="Netherlands", country_code="NL", currency_code="EURO")
        result = validate(record, country_spec)
        assert result.errors == [("currency_code", ["not_number", ("equal_length", 3)])]

    def test_valid_record(self):
        """A record satisfying all constraints passes."""
        spec = [
            required_field("name", "name", "missing_name", [
                constraint(lambda v: isinstance(v, str), "not_binary"),
            ]),
            optional_field("currency_code", "currency_code", [
                constraint(lambda v: isinstance(v, str), "not_binary"),
                constraint(lambda v: len(v) == 3, ("equal_length", 3)),
            ]),
        ]
        record = Country(name="Netherlands", country_code="NL", currency_code="EUR")
        result = validate(record, spec)
        assert result.valid is True
        assert result.errors == []
        assert bool(result) is True

    def test_code_passes_currency_fails(self, code_currency_spec):
        """Only the failing field gets a bucket."""
        result = validate({"code": "NL", "currency": "EURO"}, code_currency_spec)
        assert result.errors == [("currency", [("equal_length", 3)])]

    def test_code_and_currency_pass(self, code_currency_spec):
        """Test a fully valid record."""
        result = validate({"code": "NL", "currency": "EUR"}, code_currency_spec)
        assert result.valid is True

    def test_each_constraint_evaluated_once(self):
        """Each constraint runs exactly once per present value."""
        calls = []

        def counting(tag, outcome):
            def check(value):
                calls.append(tag)
                return outcome
            return check

        spec = [required_field("f", "f", "missing", [
            constraint(counting("first", True), "e1"),
            constraint(counting("second", False), "e2"),
            constraint(counting("third", False), "e3"),
        ])]
        result = validate({"f": 1}, spec)
        assert calls == ["first", "second", "third"]
        assert result.errors == [("f", ["e2", "e3"])]

    def test_shared_constraint_reused(self):
        """One constraint instance can be used by several fields."""
        positive = constraint(lambda v: v > 0, "not_positive")
        spec = [
            required_field("a", "a", "missing_a", [positive]),
            required_field("b", "b", "missing_b", [positive]),
        ]
        result = validate({"a": 1, "b": -1}, spec)
        assert result.errors == [("b", ["not_positive"])]

    def test_unlisted_fields_not_inspected(self):
        """Fields without a spec are never read."""
        spec = [required_field("a", "a", "missing_a")]
        assert validate({"a": 1, "b": None}, spec).valid is True

    def test_reordering_constraints_keeps_classification(self):
        """Reordering constraints changes at most the error order."""
        c1 = constraint(lambda v: False, "e1")
        c2 = constraint(lambda v: True, "e2")
        c3 = constraint(lambda v: False, "e3")
        forward = validate({"f": 1}, [required_field("f", "f", "m", [c1, c2, c3])])
        backward = validate({"f": 1}, [required_field("f", "f", "m", [c3, c2, c1])])
        assert forward.fields() == backward.fields() == ["f"]
        assert sorted(forward.errors_for("f")) == sorted(backward.errors_for("f"))

    def test_predicate_exception_propagates(self):
        """Exceptions raised by a predicate are not swallowed."""
        spec = [required_field("f", "f", "m", [constraint(lambda v: len(v) == 2, "len")])]
        with pytest.raises(TypeError):
            validate({"f": 42}, spec)

    def test_duplicate_names_share_a_bucket(self):
        """Two specs with one name merge into a single bucket."""
        spec = [
            required_field("address", "street", "missing_street"),
            required_field("city", "city", "missing_city"),
            required_field("address", "zip", "missing_zip"),
        ]
        result = validate({}, spec)
        assert result.errors == [
            ("address", ["missing_street", "missing_zip"]),
            ("city", ["missing_city"]),
        ]


class TestErrorOrder:
    """Test the declaration and reversed ordering policies."""

    def test_declaration_order_is_default(self, country_spec):
        """Buckets follow field order by default."""
        result = validate(Country(), country_spec)
        assert result.fields() == ["name", "country_code"]

    def test_reversed_order_matches_fold_accumulation(self, country_spec):
        """REVERSED reverses both buckets and errors within a bucket."""
        record = Country(name="Netherlands", country_code="NL", currency_code="EURO")
        result = validate(record, country_spec, order=ErrorOrder.REVERSED)
        assert result.errors == [("currency_code", [("equal_length", 3), "not_number"])]

    def test_reversed_bucket_order(self, country_spec):
        """Test bucket reversal across fields."""
        result = validate(Country(), country_spec, order="reversed")
        assert result.errors == [
            ("country_code", ["missing_country_code"]),
            ("name", ["missing_name"]),
        ]

    def test_unknown_order_raises(self):
        """Test that an unknown ordering name is a configuration error."""
        with pytest.raises(ConfigurationError):
            validate({}, [], order="sideways")


class TestPurity:
    """Test that validation has no side effects."""

    def test_idempotent(self, country_spec):
        """Validating twice yields identical results."""
        record = Country(name="Netherlands", country_code="NLD", currency_code="EURO")
        assert validate(record, country_spec) == validate(record, country_spec)

    def test_record_not_mutated(self, code_currency_spec):
        """The record is left untouched."""
        record = {"code": "NL", "currency": "EURO"}
        validate(record, code_currency_spec)
        assert record == {"code": "NL", "currency": "EURO"}

    def test_concurrent_validation(self, code_currency_spec):
        """One specification can be used from many threads."""
        results = []
        lock = threading.Lock()

        def worker(currency):
            result = validate({"code": "NL", "currency": currency}, code_currency_spec)
            with lock:
                results.append((currency, result.valid))

        threads = [
            threading.Thread(target=worker, args=(c,))
            for c in ["EUR", "EURO", "USD", "DOLLAR"] * 5
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(results) == 20
        for currency, valid in results:
            assert valid is (len(currency) == 3)


class TestAccessorFailures:
    """Test that addressing errors are fatal, not validation failures."""

    def test_index_out_of_range(self):
        """A positional accessor past the end raises AccessorError."""
        spec = [required_field("extra", 5, "missing_extra")]
        with pytest.raises(AccessorError) as exc_info:
            validate(CountryTuple("Netherlands", "NL", None), spec)
        assert exc_info.value.field_name == "extra"
        assert exc_info.value.context["record_type"] == "CountryTuple"

    def test_missing_attribute(self):
        """An attribute the record type does not have raises AccessorError."""
        spec = [optional_field("population", "population")]
        with pytest.raises(AccessorError):
            validate(Country(), spec)

    def test_accessor_error_is_specification_error(self):
        """AccessorError is part of the specification error family."""
        spec = [required_field("first", 0, "missing_first")]
        with pytest.raises(SpecificationError):
            validate({"first": 1}, spec)

    def test_positional_record(self):
        """Index accessors work on tuples and named tuples."""
        spec = [
            required_field("name", 0, "missing_name"),
            required_field("country_code", 1, "missing_country_code"),
            optional_field("currency_code", 2, [constraint(lambda v: len(v) == 3, "len")]),
        ]
        assert validate(CountryTuple("Netherlands", "NL", None), spec).valid is True
        result = validate(("Netherlands", None, "EURO"), spec)
        assert result.errors == [("country_code", ["missing_country_code"]), ("currency_code", ["len"])]


class TestValidator:
    """Test the reusable Validator wrapper."""

    def test_basic_properties(self, country_spec):
        """Test name, length and field names."""
        validator = Validator(country_spec, name="country")
        assert validator.name == "country"
        assert len(validator) == 3
        assert validator.field_names == ["name", "country_code", "currency_code"]
        assert "country" in repr(validator)

    def test_validate_and_is_valid(self, code_currency_spec):
        """Test single-record validation helpers."""
        validator = Validator(code_currency_spec)
        assert validator.is_valid({"code": "NL", "currency": "EUR"})
        assert not validator.is_valid({"code": "NLD"})
        assert validator.validate({}).errors == [("code", ["missing_code"])]

    def test_order_applies(self, country_spec):
        """Test that the validator's order is used."""
        validator = Validator(country_spec, order=ErrorOrder.REVERSED)
        assert validator.validate(Country()).fields() == ["country_code", "name"]

    def test_validate_many(self, code_currency_spec):
        """Test validating several records."""
        validator = Validator(code_currency_spec)
        results = validator.validate_many([
            {"code": "NL"},
            {"code": "N"},
            {"code": "BE", "currency": "EUR"},
        ])
        assert [r.valid for r in results] == [True, False, True]

    def test_validate_many_stop_on_error(self, code_currency_spec):
        """Test stopping after the first failure."""
        validator = Validator(code_currency_spec)
        results = validator.validate_many(
            [{"code": "NL"}, {}, {"code": "BE"}],
            stop_on_error=True,
        )
        assert len(results) == 2
        assert results[-1].valid is False

    def test_rejects_non_fieldspec(self):
        """Test that a malformed spec list is rejected up front."""
        with pytest.raises(SpecificationError):
            Validator(["name"])
