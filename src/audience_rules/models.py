"""Data model for audience rule translation.

Rules arrive already decoded from their source records (XML, JSON, ...).
Enum values are the literal strings used by the audience metadata format, so a
loader can hand over raw strings and let pydantic coerce them.

Operator, kind and permission type also accept unrecognized strings: those
are reported by the translator as UnknownOperator / UnknownCriterionKind /
UnsupportedPermissionKind, with the failing rule and criterion attached,
instead of surfacing as a generic validation error at load time.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

# =============================================================================
# Enums
# =============================================================================


class Operator(str, Enum):
    """Criterion comparison operators."""

    EQUAL = "Equal"
    NOT_EQUAL = "NotEqual"
    STARTS_WITH = "StartsWith"
    ENDS_WITH = "EndsWith"


class CriterionKind(str, Enum):
    """Semantic type of a criterion; selects the meaningful payload fields."""

    AUDIENCE = "Audience"
    FIELD_BASED = "FieldBased"
    PERMISSION = "Permission"
    PROFILE = "Profile"


class PermissionKind(str, Enum):
    """Permission flavours. Only CUSTOM is translatable."""

    CUSTOM = "Custom"
    STANDARD = "Standard"


class CombinationMode(str, Enum):
    """How criterion predicates are combined into the rule expression."""

    ALL_MATCH = "AllCriteriaMatch"
    ANY_MATCH = "AnyCriterionMatches"
    CUSTOM = "CustomLogicMatches"


# Enum first, raw string as fallback so unknown values reach the translator
OperatorValue = Annotated[Operator | str, Field(union_mode="left_to_right")]
CriterionKindValue = Annotated[CriterionKind | str, Field(union_mode="left_to_right")]
PermissionKindValue = Annotated[
    PermissionKind | str | None, Field(union_mode="left_to_right")
]


# =============================================================================
# Input records
# =============================================================================


class CriterionValue(BaseModel):
    """Kind-dependent criterion payload. Only the fields for the kind are set."""

    # Audience
    audience_name: str | None = None

    # FieldBased
    entity_type: str | None = None
    entity_field: str | None = None
    field_value: str | None = None

    # Permission
    permission_type: PermissionKindValue = None
    permission_name: str | None = None

    # Profile
    profile: str | None = None


class Criterion(BaseModel):
    """One atomic test within a rule."""

    position: int = Field(..., gt=0, description="Author-assigned criterion number")
    operator: OperatorValue
    kind: CriterionKindValue
    value: CriterionValue = Field(default_factory=CriterionValue)


class Rule(BaseModel):
    """A named audience rule: criteria plus the way they are combined."""

    name: str
    criteria: list[Criterion] = Field(default_factory=list)
    combination_mode: CombinationMode
    custom_formula: str | None = Field(
        default=None,
        description="Boolean formula over criterion positions, e.g. '1 AND (2 OR 3)'. "
        "Only used in CustomLogicMatches mode.",
    )

    @model_validator(mode="after")
    def validate_unique_positions(self) -> Self:
        seen: set[int] = set()
        for criterion in self.criteria:
            if criterion.position in seen:
                raise ValueError(
                    f"Duplicate criterion position {criterion.position} in rule '{self.name}'"
                )
            seen.add(criterion.position)
        return self


# =============================================================================
# Output records
# =============================================================================


class TranslatedRule(BaseModel):
    """A rule rendered to a single boolean expression."""

    model_config = ConfigDict(frozen=True)

    name: str
    expression: str


class TranslationResult(BaseModel):
    """Output of a translation run.

    rules keeps the input order. entity_fields maps each entity type to the
    local field names referenced anywhere in the run (order not significant).
    """

    model_config = ConfigDict(frozen=True)

    rules: list[TranslatedRule] = Field(default_factory=list)
    entity_fields: dict[str, list[str]] = Field(default_factory=dict)
