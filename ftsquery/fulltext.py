"""Full-text search condition normalization."""

from __future__ import annotations

from typing import Any

import msgspec

from .condition import ConditionParser, SearchOptions


def parse(condition: str | None, options: SearchOptions = SearchOptions.DEFAULT) -> str:
    """Normalize a condition into a valid full-text predicate.

    Args:
        condition: Condition as typed by a user
        options: Stemming, trimming and strictness flags

    Returns:
        Predicate suitable for a CONTAINS style query

    Raises:
        ConditionError: If the condition is malformed and the matching throw
            option is set
    """
    return str(ConditionParser(condition, options).root_expression)


def literal(condition: str | None) -> str:
    """Quote a whole condition as one opaque term.

    Used as a fallback when a strict parse rejects the input.
    """
    return '"' + (condition or "").replace('"', '""') + '"'


class FullTextSearch(msgspec.Struct, frozen=True, kw_only=True):
    """A parsed condition with its normal form and search terms.

    ``search_terms`` lists the literal text of every non-empty term in the
    order it appears, duplicates included, for use by highlighters.
    """

    condition: str
    options: SearchOptions
    normal_form: str
    search_terms: list[str] = msgspec.field(default_factory=list)

    @classmethod
    def from_condition(
        cls, condition: str | None, options: SearchOptions = SearchOptions.DEFAULT
    ) -> FullTextSearch:
        """Parse a condition.

        Raises:
            ConditionError: If the condition is malformed and the matching
                throw option is set
        """
        root = ConditionParser(condition, options).root_expression
        terms = [exp.term for exp in root if exp.is_term and exp.term]
        return cls(
            condition=condition or "",
            options=options,
            normal_form=str(root),
            search_terms=terms,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain representation for JSON encoding."""
        return {
            "condition": self.condition,
            "options": self.options.names(),
            "normal_form": self.normal_form,
            "search_terms": list(self.search_terms),
        }
