"""Shared test fixtures and helpers."""

import pytest

from audience_rules.compiler import FieldRegistry
from audience_rules.models import (
    CombinationMode,
    Criterion,
    CriterionKind,
    CriterionValue,
    Operator,
    Rule,
)


def field_criterion(
    position: int,
    entity_type: str = "Account",
    entity_field: str = "Industry",
    field_value: str = "Retail",
    operator: Operator | str = Operator.EQUAL,
) -> Criterion:
    """FieldBased criterion, e.g. Account.Industry == 'Retail'."""
    return Criterion(
        position=position,
        operator=operator,
        kind=CriterionKind.FIELD_BASED,
        value=CriterionValue(
            entity_type=entity_type,
            entity_field=entity_field,
            field_value=field_value,
        ),
    )


def profile_criterion(
    position: int,
    profile: str = "System Administrator",
    operator: Operator | str = Operator.EQUAL,
) -> Criterion:
    return Criterion(
        position=position,
        operator=operator,
        kind=CriterionKind.PROFILE,
        value=CriterionValue(profile=profile),
    )


def permission_criterion(
    position: int,
    permission_name: str = "Edit_Orders",
    permission_type: str = "Custom",
    operator: Operator | str = Operator.EQUAL,
) -> Criterion:
    return Criterion(
        position=position,
        operator=operator,
        kind=CriterionKind.PERMISSION,
        value=CriterionValue(permission_type=permission_type, permission_name=permission_name),
    )


def audience_criterion(
    position: int,
    audience_name: str = "AmericaLoc",
    operator: Operator | str = Operator.EQUAL,
) -> Criterion:
    return Criterion(
        position=position,
        operator=operator,
        kind=CriterionKind.AUDIENCE,
        value=CriterionValue(audience_name=audience_name),
    )


def make_rule(
    name: str,
    criteria: list[Criterion],
    mode: CombinationMode = CombinationMode.ALL_MATCH,
    formula: str | None = None,
) -> Rule:
    return Rule(name=name, criteria=criteria, combination_mode=mode, custom_formula=formula)


@pytest.fixture
def registry() -> FieldRegistry:
    """Fresh, empty field registry."""
    return FieldRegistry()
