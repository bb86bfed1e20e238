"""Condition parsing subsystem: stream, operators, parser and tree."""

from .exceptions import (
    ConditionError,
    InvalidNearUseError,
    UnbalancedParenthesesError,
    UnbalancedQuotesError,
)
from .expression import ConditionExpression
from .operators import ConditionOperator
from .options import SearchOptions
from .parser import ConditionParser
from .stream import ConditionStream

__all__ = [
    "ConditionParser",
    "ConditionExpression",
    "ConditionOperator",
    "ConditionStream",
    "SearchOptions",
    "ConditionError",
    "UnbalancedParenthesesError",
    "UnbalancedQuotesError",
    "InvalidNearUseError",
]
