"""Audience rule translator.

Turns decoded Rule records into evaluator expressions plus the index of entity
fields they reference. A run is fail-fast: the first rule that cannot be
translated aborts the run and nothing is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from audience_rules.compiler import FieldRegistry, assemble_formula, build_predicate
from audience_rules.config import TranslatorSettings
from audience_rules.errors import TranslationError
from audience_rules.models import Rule, TranslatedRule, TranslationResult

logger = logging.getLogger(__name__)


def translate_rule(
    rule: Rule,
    registry: FieldRegistry,
    settings: TranslatorSettings | None = None,
) -> TranslatedRule:
    """Translate one rule, registering its entity fields in registry.

    Raises:
        TranslationError: Any failure, with the rule name (and criterion
            position when known) attached.
    """
    settings = settings or TranslatorSettings()

    predicates: dict[int, str] = {}
    for criterion in rule.criteria:
        try:
            predicates[criterion.position] = build_predicate(criterion, registry, settings)
        except TranslationError as e:
            raise e.with_context(rule_name=rule.name, position=criterion.position)

    try:
        expression = assemble_formula(
            rule.combination_mode, rule.criteria, rule.custom_formula, predicates
        )
    except TranslationError as e:
        raise e.with_context(rule_name=rule.name)

    logger.debug(f"Rule '{rule.name}' -> {expression}")
    return TranslatedRule(name=rule.name, expression=expression)


def translate_rules(
    rules: Iterable[Rule],
    settings: TranslatorSettings | None = None,
) -> TranslationResult:
    """Translate a batch of rules with one shared field registry.

    Rules are processed in the order given. Output rules keep that order.

    Raises:
        TranslationError: On the first rule that fails; no partial result.
    """
    return RuleTranslator(settings).translate(rules)


class RuleTranslator:
    """Translates audience rules to evaluator expressions."""

    def __init__(self, settings: TranslatorSettings | None = None):
        """Initialize translator.

        Args:
            settings: Translator settings. Defaults to TranslatorSettings().
        """
        self.settings = settings or TranslatorSettings()

    def translate_rule(self, rule: Rule, registry: FieldRegistry) -> TranslatedRule:
        """Translate a single rule into registry."""
        return translate_rule(rule, registry, self.settings)

    def translate(self, rules: Iterable[Rule]) -> TranslationResult:
        """Translate all rules.

        Returns:
            TranslationResult with every translated rule and the field index

        Raises:
            TranslationError: If any rule fails to translate
        """
        # Fresh accumulator per run; only published once every rule succeeded
        registry = FieldRegistry()
        translated: list[TranslatedRule] = []

        for rule in rules:
            try:
                translated.append(self.translate_rule(rule, registry))
            except TranslationError as e:
                logger.error(
                    f"Translation aborted after {len(translated)} rule(s); no output produced: {e}"
                )
                raise

        logger.info(
            f"Translated {len(translated)} rule(s) referencing {len(registry)} entity type(s)"
        )
        return TranslationResult(rules=translated, entity_fields=registry.snapshot())
