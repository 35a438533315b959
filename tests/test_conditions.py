"""Tests for workflow condition evaluation.

Covers:
- Vacuous truth for an empty condition list
- Loose equality ("5" == 5) kept for stored conditions
- Ordering operators fail on non-numeric input instead of raising
- CONTAINS over strings, sequences and other types
- Unknown operators and malformed conditions fail closed
"""
import math

import pytest

from contract_access.schemas.snapshots import Condition
from contract_access.services.condition_service import (
    evaluate_condition,
    evaluate_conditions,
    loose_equals,
    to_number,
)


def _cond(field, operator, value):
    return {"field": field, "operator": operator, "value": value}


class TestEmptyConditions:

    @pytest.mark.parametrize("record", [{}, {"amount": 5}, {"tags": ["x"]}])
    def test_empty_list_is_true(self, record):
        assert evaluate_conditions([], record) is True

    def test_none_list_is_unconditional(self):
        assert evaluate_conditions(None, {"amount": 5}) is True


class TestEquality:

    def test_numeric_string_equals_number(self):
        assert evaluate_conditions([_cond("amount", "EQUALS", 5)], {"amount": "5"}) is True

    def test_number_equals_numeric_string(self):
        assert evaluate_conditions([_cond("amount", "EQUALS", "5")], {"amount": 5}) is True

    def test_float_text_equals_int(self):
        assert loose_equals("5.0", 5) is True

    def test_strings_compare_exactly(self):
        assert evaluate_conditions([_cond("type", "EQUALS", "NDA")], {"type": "nda"}) is False

    def test_missing_field_not_equal_to_value(self):
        assert evaluate_conditions([_cond("type", "EQUALS", "NDA")], {}) is False

    def test_missing_field_equals_none(self):
        assert evaluate_conditions([_cond("type", "EQUALS", None)], {}) is True

    def test_not_equals(self):
        assert evaluate_conditions([_cond("type", "NOT_EQUALS", "NDA")], {"type": "RFP"}) is True
        assert evaluate_conditions([_cond("amount", "NOT_EQUALS", 5)], {"amount": "5"}) is False

    def test_non_numeric_text_never_equals_number(self):
        assert loose_equals("abc", 0) is False

    def test_bool_against_numeric_text(self):
        assert loose_equals(True, "1") is True


class TestOrdering:

    def test_greater_than_with_numeric_string(self):
        conditions = [_cond("amount", "GREATER_THAN", 100)]
        assert evaluate_conditions(conditions, {"amount": "150"}) is True
        assert evaluate_conditions(conditions, {"amount": "50"}) is False

    def test_greater_than_non_numeric_is_false(self):
        assert evaluate_conditions([_cond("amount", "GREATER_THAN", 100)], {"amount": "abc"}) is False

    def test_non_numeric_comparison_value_is_false(self):
        assert evaluate_conditions([_cond("amount", "LESS_THAN", "abc")], {"amount": 5}) is False
        assert evaluate_conditions([_cond("amount", "GREATER_THAN", "abc")], {"amount": 5}) is False

    def test_missing_field_is_false_for_both_directions(self):
        assert evaluate_conditions([_cond("amount", "GREATER_THAN", 0)], {}) is False
        assert evaluate_conditions([_cond("amount", "LESS_THAN", 0)], {}) is False

    def test_less_than(self):
        assert evaluate_conditions([_cond("amount", "LESS_THAN", 100)], {"amount": 99.5}) is True
        assert evaluate_conditions([_cond("amount", "LESS_THAN", 100)], {"amount": 100}) is False

    def test_blank_text_is_not_a_number(self):
        assert evaluate_conditions([_cond("amount", "LESS_THAN", 10)], {"amount": "  "}) is False

    def test_to_number(self):
        assert to_number(" 42 ") == 42.0
        assert to_number(True) == 1.0
        assert to_number([1]) != to_number([1])  # NaN

    @pytest.mark.parametrize("value", ["inf", "-Infinity", "nan", "", None])
    def test_non_finite_and_missing_are_not_numbers(self, value):
        assert math.isnan(to_number(value))
        assert evaluate_conditions([_cond("amount", "LESS_THAN", 100)], {"amount": value}) is False

    def test_blank_text_does_not_equal_zero(self):
        assert loose_equals("", 0) is False


class TestContains:

    def test_list_element(self):
        record = {"tags": ["urgent", "legal"]}
        assert evaluate_conditions([_cond("tags", "CONTAINS", "urgent")], record) is True

    def test_substring(self):
        record = {"tags": "urgent-memo"}
        assert evaluate_conditions([_cond("tags", "CONTAINS", "urgent")], record) is True

    def test_integer_field_is_false(self):
        assert evaluate_conditions([_cond("tags", "CONTAINS", "urgent")], {"tags": 42}) is False

    def test_list_without_element(self):
        assert evaluate_conditions([_cond("tags", "CONTAINS", "urgent")], {"tags": ["legal"]}) is False

    def test_list_membership_is_strict(self):
        assert evaluate_conditions([_cond("codes", "CONTAINS", "1")], {"codes": [1, 2]}) is False
        assert evaluate_conditions([_cond("codes", "CONTAINS", 1)], {"codes": [1, 2]}) is True

    def test_tuple_field(self):
        assert evaluate_conditions([_cond("codes", "CONTAINS", 2)], {"codes": (1, 2)}) is True

    def test_number_inside_text(self):
        assert evaluate_conditions([_cond("ref", "CONTAINS", 2025)], {"ref": "PO-2025-001"}) is True

    def test_set_field_is_false(self):
        assert evaluate_conditions([_cond("tags", "CONTAINS", "a")], {"tags": {"a"}}) is False

    def test_missing_field_is_false(self):
        assert evaluate_conditions([_cond("tags", "CONTAINS", "a")], {}) is False


class TestFailClosed:

    def test_unknown_operator_fails_whole_evaluation(self):
        conditions = [
            _cond("type", "EQUALS", "NDA"),
            _cond("type", "STARTS_WITH", "N"),
        ]
        assert evaluate_conditions(conditions, {"type": "NDA"}) is False

    def test_unknown_operator_single(self):
        assert evaluate_condition("IS_EMPTY", None, None) is False

    def test_lowercase_operator_accepted(self):
        assert evaluate_conditions([_cond("type", "equals", "NDA")], {"type": "NDA"}) is True

    def test_missing_operator_is_false(self):
        assert evaluate_conditions([{"field": "type", "value": "NDA"}], {"type": "NDA"}) is False

    def test_non_mapping_condition_is_false(self):
        assert evaluate_conditions(["type == NDA"], {"type": "NDA"}) is False

    @pytest.mark.parametrize("record", [None, "x", 42, ["a"]])
    def test_non_mapping_record_is_false(self, record):
        assert evaluate_conditions([_cond("a", "EQUALS", None)], record) is False
        assert evaluate_conditions([_cond("a", "NOT_EQUALS", 1)], record) is False
        assert evaluate_conditions([_cond("type", "EQUALS", "NDA")], record) is False

    @pytest.mark.parametrize("record", [None, "x", 42])
    def test_empty_list_ignores_record(self, record):
        assert evaluate_conditions([], record) is True

    def test_condition_list_must_be_a_list(self):
        assert evaluate_conditions(_cond("type", "EQUALS", "NDA"), {"type": "NDA"}) is False

    def test_and_combination(self):
        conditions = [
            _cond("amount", "GREATER_THAN", 1000),
            _cond("type", "EQUALS", "NDA"),
        ]
        assert evaluate_conditions(conditions, {"amount": 5000, "type": "NDA"}) is True
        assert evaluate_conditions(conditions, {"amount": 5000, "type": "RFP"}) is False


class TestConditionModels:

    def test_condition_models_are_accepted(self):
        conditions = [
            Condition(field="amount", operator="GREATER_THAN", value=100),
            Condition(field="tags", operator="CONTAINS", value="legal"),
        ]
        record = {"amount": "250", "tags": ["legal"]}
        assert evaluate_conditions(conditions, record) is True

    def test_same_inputs_same_result(self):
        conditions = [Condition(field="amount", operator="EQUALS", value="5")]
        assert evaluate_conditions(conditions, {"amount": 5}) == evaluate_conditions(conditions, {"amount": 5})
