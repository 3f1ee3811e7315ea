"""Operator symbol registry.

Maps criterion operators to the comparison symbols understood by the audience
rule evaluator.
"""

from __future__ import annotations

from audience_rules.errors import UnknownOperator
from audience_rules.models import Operator

# Registry mapping criterion operators to evaluator symbols
OPERATOR_SYMBOLS: dict[Operator, str] = {
    Operator.EQUAL: "==",
    Operator.NOT_EQUAL: "!=",
    Operator.STARTS_WITH: "=~",
    Operator.ENDS_WITH: "~=",
}


def map_operator(op: Operator | str) -> str:
    """Return the evaluator symbol for a criterion operator.

    Args:
        op: Operator enum member or its raw string value (e.g. "StartsWith")

    Returns:
        Comparison symbol ("==", "!=", "=~" or "~=")

    Raises:
        UnknownOperator: If op is not a supported operator
    """
    try:
        operator = Operator(op)
    except ValueError:
        raise UnknownOperator(f"Unknown operator: {op!r}") from None
    return OPERATOR_SYMBOLS[operator]
