"""Registry modules for declarative mappings."""

from audience_rules.registries.operators import OPERATOR_SYMBOLS, map_operator

__all__ = [
    "OPERATOR_SYMBOLS",
    "map_operator",
]
