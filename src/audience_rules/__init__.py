"""Audience rule translator.

Converts declarative audience rules (criteria plus a combination formula) to
the single boolean expression string interpreted at render time by the
audience rules evaluator, together with the entity fields the rules read.

The translation pipeline:
  1. Loader (external) decodes rule records -> Rule models
  2. build_predicate: Criterion -> "Account.Industry == 'Retail'"
     (FieldBased criteria register their field in FieldRegistry)
  3. assemble_formula: predicates + combination mode -> expression
  4. translate_rules: all rules -> TranslationResult(rules, entity_fields)

Serializing the result is left to the caller (TranslationResult is a pydantic
model, so model_dump_json() works).
"""

from audience_rules.compiler import FieldRegistry, assemble_formula, build_predicate
from audience_rules.config import LiteralPolicy, TranslatorSettings, configure_logging
from audience_rules.errors import (
    DuplicatePlaceholder,
    MissingCriterionValue,
    PlaceholderNotFound,
    TranslationError,
    UnknownCriterionKind,
    UnknownOperator,
    UnsafeLiteral,
    UnsupportedPermissionKind,
)
from audience_rules.models import (
    CombinationMode,
    Criterion,
    CriterionKind,
    CriterionValue,
    Operator,
    PermissionKind,
    Rule,
    TranslatedRule,
    TranslationResult,
)
from audience_rules.registries import map_operator
from audience_rules.translator import RuleTranslator, translate_rule, translate_rules

__all__ = [
    "RuleTranslator",
    "translate_rule",
    "translate_rules",
    "map_operator",
    "build_predicate",
    "assemble_formula",
    "FieldRegistry",
    "TranslatorSettings",
    "LiteralPolicy",
    "configure_logging",
    "CombinationMode",
    "Criterion",
    "CriterionKind",
    "CriterionValue",
    "Operator",
    "PermissionKind",
    "Rule",
    "TranslatedRule",
    "TranslationResult",
    "TranslationError",
    "UnknownOperator",
    "UnknownCriterionKind",
    "UnsupportedPermissionKind",
    "MissingCriterionValue",
    "UnsafeLiteral",
    "PlaceholderNotFound",
    "DuplicatePlaceholder",
]
