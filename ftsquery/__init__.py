"""Normalization of ad hoc full-text search conditions.

Turns loosely typed boolean search conditions into predicates a full-text
engine accepts.

Main components:
- parse: Normalize a condition into a predicate string
- FullTextSearch: Parsed condition with normal form and search terms
- SearchOptions: Stemming, prefix trimming and strictness flags
- FullTextSearchInterceptor: Rewrites marked LIKE filters in commands
"""

__version__ = "1.0.0"

from .condition import (
    ConditionError,
    ConditionOperator,
    ConditionParser,
    InvalidNearUseError,
    SearchOptions,
    UnbalancedParenthesesError,
    UnbalancedQuotesError,
)
from .fulltext import FullTextSearch, literal, parse
from .interceptor import (
    Command,
    CommandParameter,
    FullTextParseOption,
    FullTextSearchInterceptor,
    fulltext_pattern,
)

__all__ = [
    # Normalization
    "parse",
    "literal",
    "FullTextSearch",
    "SearchOptions",
    "ConditionParser",
    "ConditionOperator",
    # Errors
    "ConditionError",
    "UnbalancedParenthesesError",
    "UnbalancedQuotesError",
    "InvalidNearUseError",
    # Interception
    "FullTextSearchInterceptor",
    "FullTextParseOption",
    "Command",
    "CommandParameter",
    "fulltext_pattern",
]
