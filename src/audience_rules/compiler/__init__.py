"""Compiler package for audience rule translation.

Phases:
1. predicate_builder - Build one predicate string per criterion
2. formula_assembler - Combine predicates per the rule's combination mode

Referenced entity fields accumulate into FieldRegistry.
"""

from audience_rules.compiler.context import FieldRegistry
from audience_rules.compiler.formula_assembler import (
    assemble_formula,
    substitute_placeholders,
    tokenize_formula,
)
from audience_rules.compiler.predicate_builder import (
    build_predicate,
    qualify_field,
    quote_literal,
)

__all__ = [
    "FieldRegistry",
    "assemble_formula",
    "build_predicate",
    "qualify_field",
    "quote_literal",
    "substitute_placeholders",
    "tokenize_formula",
]
