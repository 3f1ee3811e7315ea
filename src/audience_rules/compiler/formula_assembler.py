"""Formula assembler: combines criterion predicates into one rule expression.

AllCriteriaMatch and AnyCriterionMatches join every predicate with "&&" or
"||", highest criterion position first.

CustomLogicMatches starts from the author's formula, e.g.

    "1 AND (2 OR 10)"

turns the connective words into "&&" / "||" and replaces each numeral with
the predicate of the criterion at that position:

    "A && (B || J)"

Criteria are processed in descending position order (as the legacy converter
did), but the formula is tokenized first, so a placeholder is only ever
matched against a whole numeral token. "1" can therefore never be found
inside "10", nor inside digits carried by an already-substituted predicate.
For every well-formed formula the output equals the legacy string
substitution.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from audience_rules.errors import DuplicatePlaceholder, PlaceholderNotFound
from audience_rules.models import CombinationMode, Criterion

logger = logging.getLogger(__name__)

AND_SYMBOL = "&&"
OR_SYMBOL = "||"

# Connective words of the custom formula syntax
CONNECTIVES = {
    "AND": AND_SYMBOL,
    "OR": OR_SYMBOL,
}

_JOIN_SYMBOLS = {
    CombinationMode.ALL_MATCH: AND_SYMBOL,
    CombinationMode.ANY_MATCH: OR_SYMBOL,
}

# Every character falls into exactly one group, so finditer covers the input
_TOKEN_RE = re.compile(r"(?P<numeral>\d+)|(?P<word>[A-Za-z_]+)|(?P<text>[^\dA-Za-z_]+)")


class TokenKind(str, Enum):
    """Lexical category of a formula token."""

    NUMERAL = "numeral"
    WORD = "word"
    TEXT = "text"


@dataclass(frozen=True)
class FormulaToken:
    """A lexical piece of a custom formula."""

    kind: TokenKind
    text: str

    def render(self) -> str:
        if self.kind is TokenKind.WORD:
            return CONNECTIVES.get(self.text, self.text)
        return self.text


PredicateLookup = Mapping[int, str] | Callable[[int], str]


# =============================================================================
# Public API
# =============================================================================


def assemble_formula(
    mode: CombinationMode,
    criteria: Sequence[Criterion],
    custom_formula: str | None,
    predicate_of: PredicateLookup,
) -> str:
    """Combine criterion predicates into the rule's boolean expression.

    Args:
        mode: How the criteria are combined.
        criteria: The rule's criteria, in load order.
        custom_formula: Author formula; only read in CustomLogicMatches mode.
        predicate_of: Predicate for a criterion position (mapping or callable).

    Returns:
        The final expression. Empty string for a rule without criteria.

    Raises:
        PlaceholderNotFound: Custom formula and criterion positions disagree.
        DuplicatePlaceholder: Custom formula references a position twice.
    """
    lookup = predicate_of.__getitem__ if isinstance(predicate_of, Mapping) else predicate_of
    positions = sorted((c.position for c in criteria), reverse=True)

    mode = CombinationMode(mode)
    if mode is CombinationMode.CUSTOM:
        return substitute_placeholders(custom_formula or "", positions, lookup)

    symbol = _JOIN_SYMBOLS[mode]
    return f" {symbol} ".join(lookup(position) for position in positions)


def tokenize_formula(formula: str) -> list[FormulaToken]:
    """Split a custom formula into numeral, word and text tokens."""
    return [
        FormulaToken(kind=TokenKind(match.lastgroup), text=match.group())
        for match in _TOKEN_RE.finditer(formula)
    ]


def substitute_placeholders(
    formula: str,
    positions: Sequence[int],
    lookup: Callable[[int], str],
) -> str:
    """Replace formula placeholders with predicates.

    Args:
        formula: Custom formula, e.g. "1 AND (2 OR 3)".
        positions: Criterion positions to substitute, in processing order.
        lookup: Predicate for a position.

    Returns:
        The substituted expression with connectives translated.

    Raises:
        DuplicatePlaceholder: A numeral occurs more than once in the formula.
        PlaceholderNotFound: A position has no numeral in the formula, or a
            numeral has no criterion.
    """
    tokens = tokenize_formula(formula)

    # numeral text -> token index
    placeholders: dict[str, int] = {}
    for index, token in enumerate(tokens):
        if token.kind is TokenKind.NUMERAL:
            if token.text in placeholders:
                raise DuplicatePlaceholder(
                    f"Placeholder {token.text} appears more than once in formula: {formula}"
                )
            placeholders[token.text] = index
        elif token.kind is TokenKind.WORD and token.text not in CONNECTIVES:
            logger.warning(f"Unrecognized word {token.text!r} in formula kept as is: {formula}")

    rendered = [token.render() for token in tokens]
    for position in positions:
        index = placeholders.pop(str(position), None)
        if index is None:
            raise PlaceholderNotFound(
                f"Placeholder {position} not found in formula: {formula}", position=position
            )
        rendered[index] = lookup(position)

    if placeholders:
        unknown = ", ".join(sorted(placeholders, key=placeholders.get))
        raise PlaceholderNotFound(f"Formula references unknown criteria {unknown}: {formula}")

    expression = "".join(rendered)
    logger.debug(f"Formula {formula!r} -> {expression!r}")
    return expression
