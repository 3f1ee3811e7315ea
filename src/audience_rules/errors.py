"""Translation errors.

Every error is a validation failure over a single rule's data. A translation
run stops at the first one; the rule name and criterion position are attached
by the orchestrator so the message says exactly which record is broken.
"""

from __future__ import annotations


class TranslationError(Exception):
    """Raised when a rule cannot be translated."""

    def __init__(self, message: str, *, rule_name: str | None = None, position: int | None = None):
        super().__init__(message)
        self.message = message
        self.rule_name = rule_name
        self.position = position

    def with_context(self, *, rule_name: str | None = None, position: int | None = None):
        """Attach rule/criterion context without overwriting what is already set."""
        if self.rule_name is None:
            self.rule_name = rule_name
        if self.position is None:
            self.position = position
        return self

    def __str__(self) -> str:
        where = []
        if self.rule_name is not None:
            where.append(f"rule '{self.rule_name}'")
        if self.position is not None:
            where.append(f"criterion {self.position}")
        if not where:
            return self.message
        return f"{', '.join(where)}: {self.message}"


class UnknownOperator(TranslationError):
    """Criterion operator is not one of the supported comparisons."""


class UnknownCriterionKind(TranslationError):
    """Criterion kind has no predicate builder."""


class UnsupportedPermissionKind(TranslationError):
    """Permission criterion with a permission type other than Custom."""


class MissingCriterionValue(TranslationError):
    """Criterion payload lacks a field its kind requires."""


class UnsafeLiteral(TranslationError):
    """Literal value cannot be quoted safely for the downstream evaluator."""


class PlaceholderNotFound(TranslationError):
    """Custom formula and criterion positions do not line up."""


class DuplicatePlaceholder(TranslationError):
    """Custom formula references the same criterion position more than once."""
