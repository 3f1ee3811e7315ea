"""Predicate builder for compiling criteria to evaluator predicates.

Each criterion becomes one comparison of the form

    <subject> <symbol> '<literal>'

where the subject depends on the criterion kind (Audience, Permission,
Profile, or a qualified entity field) and the symbol comes from the operator
registry. FieldBased criteria also register their field in the FieldRegistry
so the evaluator knows which entity data to fetch.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from audience_rules.config import LiteralPolicy, TranslatorSettings
from audience_rules.errors import (
    MissingCriterionValue,
    UnknownCriterionKind,
    UnsafeLiteral,
    UnsupportedPermissionKind,
)
from audience_rules.models import Criterion, CriterionKind, PermissionKind
from audience_rules.registries.operators import map_operator

if TYPE_CHECKING:
    from audience_rules.compiler.context import FieldRegistry

logger = logging.getLogger(__name__)

# Storage format marks field references with a leading "$"
FIELD_REFERENCE_MARKER = "$"

# Type alias for per-kind builders: (criterion, symbol, registry, settings) -> predicate
PredicateBuilder = Callable[[Criterion, str, "FieldRegistry", TranslatorSettings], str]


# =============================================================================
# Public API
# =============================================================================


def build_predicate(
    criterion: Criterion,
    registry: FieldRegistry,
    settings: TranslatorSettings | None = None,
) -> str:
    """Build the predicate string for one criterion.

    The operator is resolved before the kind, so a criterion that is wrong on
    both counts reports the operator.

    Args:
        criterion: The criterion to compile.
        registry: Field registry; FieldBased criteria register their field here.
        settings: Translator settings (literal quoting policy).

    Returns:
        Predicate string, e.g. "Account.Industry == 'Retail'".

    Raises:
        UnknownOperator: If the operator is not supported.
        UnknownCriterionKind: If no builder exists for the criterion kind.
        UnsupportedPermissionKind: For non-Custom permission criteria.
        MissingCriterionValue: If the payload lacks a required field.
        UnsafeLiteral: If a literal violates the quoting policy.
    """
    settings = settings or TranslatorSettings()
    symbol = map_operator(criterion.operator)

    try:
        kind = CriterionKind(criterion.kind)
    except ValueError:
        raise UnknownCriterionKind(
            f"Unknown criterion kind: {criterion.kind!r}", position=criterion.position
        ) from None

    builder = PREDICATE_BUILDERS[kind]
    predicate = builder(criterion, symbol, registry, settings)
    logger.debug(f"Criterion {criterion.position} ({kind.value}) -> {predicate}")
    return predicate


def qualify_field(entity_type: str, entity_field: str) -> str:
    """Return the fully qualified field path for an entity field.

    A field that already begins with the entity type name is kept as is:
    "$Account.Industry" stays "Account.Industry", "AccountNumber" stays
    "AccountNumber". "Industry" becomes "Account.Industry".
    """
    field_path = entity_field.removeprefix(FIELD_REFERENCE_MARKER)
    if field_path.startswith(entity_type):
        return field_path
    return f"{entity_type}.{field_path}"


def quote_literal(value: str, policy: LiteralPolicy = LiteralPolicy.ESCAPE) -> str:
    """Wrap a literal in single quotes according to the quoting policy.

    The evaluator accepts exactly one escape sequence, a backslash before a
    single quote, so a literal backslash can never be expressed.

    Raises:
        UnsafeLiteral: If the value cannot be quoted under the policy.
    """
    if policy is LiteralPolicy.VERBATIM:
        return f"'{value}'"
    if "\\" in value:
        raise UnsafeLiteral(f"Literal contains a backslash: {value!r}")
    if "'" in value:
        if policy is LiteralPolicy.REJECT:
            raise UnsafeLiteral(f"Literal contains a single quote: {value!r}")
        value = value.replace("'", "\\'")
    return f"'{value}'"


# =============================================================================
# Internal: per-kind builders
# =============================================================================


def _require(criterion: Criterion, attr: str) -> str:
    value = getattr(criterion.value, attr)
    if value is None:
        raise MissingCriterionValue(
            f"Criterion payload has no {attr}", position=criterion.position
        )
    return value


def _build_audience(
    criterion: Criterion, symbol: str, registry: FieldRegistry, settings: TranslatorSettings
) -> str:
    name = _require(criterion, "audience_name")
    return f"Audience {symbol} {quote_literal(name, settings.literal_policy)}"


def _build_field_based(
    criterion: Criterion, symbol: str, registry: FieldRegistry, settings: TranslatorSettings
) -> str:
    entity_type = _require(criterion, "entity_type")
    entity_field = _require(criterion, "entity_field")
    field_value = _require(criterion, "field_value")

    field_path = qualify_field(entity_type, entity_field)
    literal = quote_literal(field_value, settings.literal_policy)
    registry.register(entity_type, field_path)
    return f"{field_path} {symbol} {literal}"


def _build_permission(
    criterion: Criterion, symbol: str, registry: FieldRegistry, settings: TranslatorSettings
) -> str:
    permission_type = criterion.value.permission_type
    if permission_type != PermissionKind.CUSTOM:
        raise UnsupportedPermissionKind(
            f"Unsupported permission type: {permission_type!r}", position=criterion.position
        )
    name = _require(criterion, "permission_name")
    return f"Permission {symbol} {quote_literal(name, settings.literal_policy)}"


def _build_profile(
    criterion: Criterion, symbol: str, registry: FieldRegistry, settings: TranslatorSettings
) -> str:
    profile = _require(criterion, "profile")
    return f"Profile {symbol} {quote_literal(profile, settings.literal_policy)}"


# Registry mapping criterion kinds to predicate builders
PREDICATE_BUILDERS: dict[CriterionKind, PredicateBuilder] = {
    CriterionKind.AUDIENCE: _build_audience,
    CriterionKind.FIELD_BASED: _build_field_based,
    CriterionKind.PERMISSION: _build_permission,
    CriterionKind.PROFILE: _build_profile,
}
