# =====================================================
# FILE: contract_access/services/condition_service.py
# Workflow Condition Evaluation
# =====================================================

import logging
import math
from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional, Tuple

from contract_access.schemas.snapshots import Condition, ConditionOperator

logger = logging.getLogger(__name__)

NAN = float("nan")
_NUMBER_TYPES = (int, float, Decimal)


def evaluate_conditions(conditions: Iterable[Any], record: Any) -> bool:
    """
    Check that every condition holds for record (logical AND).

    Conditions are evaluated in order and evaluation stops at the first
    failing one. Malformed conditions and unknown operators fail closed;
    nothing here raises for bad input.
    """
    # A step without conditions is unconditional
    if conditions is None:
        return True
    if isinstance(conditions, (str, bytes, Mapping)) or not isinstance(conditions, Iterable):
        logger.warning(f"Condition list expected, got {type(conditions).__name__}")
        return False

    for condition in conditions:
        parsed = _read_condition(condition)
        if parsed is None:
            logger.warning(f"Malformed workflow condition: {condition!r}")
            return False

        if not isinstance(record, Mapping):
            logger.warning(f"Record must be a mapping, got {type(record).__name__}")
            return False

        field, operator, expected = parsed
        actual = record.get(field)

        if not evaluate_condition(operator, actual, expected):
            return False

    return True


def evaluate_condition(operator: Any, actual: Any, expected: Any) -> bool:
    """Evaluate a single predicate, False for unknown operators"""
    op = _parse_operator(operator)
    if op is None:
        logger.warning(f"Unknown condition operator: {operator!r}")
        return False

    if op == ConditionOperator.EQUALS:
        return loose_equals(actual, expected)

    if op == ConditionOperator.NOT_EQUALS:
        return not loose_equals(actual, expected)

    if op in (ConditionOperator.GREATER_THAN, ConditionOperator.LESS_THAN):
        left, right = to_number(actual), to_number(expected)
        if math.isnan(left) or math.isnan(right):
            return False
        if op == ConditionOperator.GREATER_THAN:
            return left > right
        return left < right

    # CONTAINS
    return _contains(actual, expected)


# =====================================================
# Coercion helpers
# =====================================================

def to_number(value: Any) -> float:
    """Numeric value of value, NaN when it has none"""
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, _NUMBER_TYPES):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        # Only finite decimal text is numeric: blank text, digit separators
        # and "inf"/"nan" spellings are NaN, so they never compare
        if not text or "_" in text:
            return NAN
        try:
            number = float(text)
        except ValueError:
            return NAN
        return number if math.isfinite(number) else NAN
    # None is missing, not zero
    return NAN


def loose_equals(left: Any, right: Any) -> bool:
    """
    Equality where numeric text matches numbers ("5" == 5).

    Stored workflow conditions were written against this behaviour, so it
    is kept as-is.
    """
    if left is None or right is None:
        return left is None and right is None

    if isinstance(left, str) and isinstance(right, str):
        return left == right

    if _is_scalar(left) and _is_scalar(right):
        x, y = to_number(left), to_number(right)
        if math.isnan(x) or math.isnan(y):
            return False
        return x == y

    return left == right


def _contains(actual: Any, expected: Any) -> bool:
    if isinstance(actual, str):
        needle = _as_text(expected)
        return needle is not None and needle in actual

    if isinstance(actual, (list, tuple)):
        return any(_same_value(item, expected) for item in actual)

    return False


def _same_value(item: Any, expected: Any) -> bool:
    # Element match is strict: "1" is not an element of [1]
    if isinstance(item, bool) or isinstance(expected, bool):
        return isinstance(item, bool) and isinstance(expected, bool) and item == expected
    if isinstance(item, _NUMBER_TYPES) and isinstance(expected, _NUMBER_TYPES):
        x, y = float(item), float(expected)
        return x == y or (math.isnan(x) and math.isnan(y))
    return type(item) is type(expected) and item == expected


def _as_text(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, (float, Decimal)):
        number = float(value)
        if math.isfinite(number) and number.is_integer():
            return str(int(number))
        return str(number)
    return None


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, bool) + _NUMBER_TYPES)


def _parse_operator(operator: Any) -> Optional[ConditionOperator]:
    if isinstance(operator, ConditionOperator):
        return operator
    if not isinstance(operator, str):
        return None
    try:
        return ConditionOperator(operator.strip().upper())
    except ValueError:
        return None


def _read_condition(condition: Any) -> Optional[Tuple[str, Any, Any]]:
    """(field, operator, value) of a Condition or mapping, None if malformed"""
    if isinstance(condition, Condition):
        return condition.field, condition.operator, condition.value

    if isinstance(condition, Mapping):
        field = condition.get("field")
        if not isinstance(field, str) or "operator" not in condition:
            return None
        return field, condition.get("operator"), condition.get("value")

    return None
