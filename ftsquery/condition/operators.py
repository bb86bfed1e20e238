"""Operator symbols and words recognized in search conditions."""

from __future__ import annotations

from enum import Enum


class ConditionOperator(Enum):
    """Operator relating an expression to its preceding sibling."""

    AND = 0
    AND_NOT = 1
    OR = 2
    NEAR = 3

    def __str__(self) -> str:
        return _WORDS[self]

    @staticmethod
    def is_symbol(char: str) -> bool:
        """Check whether a character is one of the operator symbols."""
        return char in SYMBOLS

    @classmethod
    def try_parse(
        cls, token: str, current: ConditionOperator
    ) -> ConditionOperator | None:
        """Resolve a token to an operator.

        ``current`` is the operator accumulated so far. ``!`` and the word
        ``not`` only mean AND NOT when it is AND, which lets both ``and not``
        and a bare ``not`` negate while ``or not`` leaves ``not`` as a term.

        Returns:
            The resolved operator, or None if the token is a term
        """
        if len(token) == 1:
            if token == "!":
                return cls.AND_NOT if current is cls.AND else None
            return SYMBOLS.get(token)

        word = token.lower()
        if word == "not":
            return cls.AND_NOT if current is cls.AND else None
        return _WORD_OPERATORS.get(word)


_WORDS = {
    ConditionOperator.AND: "and",
    ConditionOperator.AND_NOT: "and not",
    ConditionOperator.OR: "or",
    ConditionOperator.NEAR: "near",
}

_WORD_OPERATORS = {
    "and": ConditionOperator.AND,
    "or": ConditionOperator.OR,
    "near": ConditionOperator.NEAR,
}

SYMBOLS = {
    "&": ConditionOperator.AND,
    "+": ConditionOperator.AND,
    ",": ConditionOperator.AND,
    ";": ConditionOperator.AND,
    "-": ConditionOperator.AND_NOT,
    "!": ConditionOperator.AND_NOT,
    "|": ConditionOperator.OR,
    "~": ConditionOperator.NEAR,
}
