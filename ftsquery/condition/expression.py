"""Expression tree built while parsing a search condition."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterator

from .exceptions import InvalidNearUseError
from .operators import ConditionOperator
from .options import SearchOptions

logger = logging.getLogger(__name__)

MULTI_SPACE = re.compile(r" {2,}")
PREFIX_FRAGMENT = re.compile(r"(\*[^ ]+)|(\*)")


class ConditionExpression:
    """A node of the normalized condition tree.

    A node is either a term (``is_term``) holding literal text, or a
    subexpression holding child nodes. Every node except the root records
    the operator that relates it to its preceding sibling; the first child
    of a subexpression always carries AND.

    Nodes are only created through ``add_subexpression`` and ``add_term`` on
    their parent, and are never removed once attached.
    """

    def __init__(self, options: SearchOptions = SearchOptions.DEFAULT):
        """Create a root expression."""
        self.options = options
        self.parent: ConditionExpression | None = None
        self.operator: ConditionOperator | None = None
        self.term = ""
        self.is_term = False
        self.term_is_phrase = False
        self.term_is_prefix = False
        self._index = 0
        self._children: list[ConditionExpression] = []

    @classmethod
    def _child(
        cls, parent: ConditionExpression, op: ConditionOperator
    ) -> ConditionExpression:
        exp = cls(parent.options)
        exp.parent = parent
        exp.operator = op
        exp._index = len(parent._children)
        return exp

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_subexpression(self) -> bool:
        return not self.is_term

    @property
    def has_subexpressions(self) -> bool:
        return bool(self._children)

    @property
    def children(self) -> tuple[ConditionExpression, ...]:
        return tuple(self._children)

    @property
    def is_last_subexpression(self) -> bool:
        """Whether this node is the last child of its parent (or the root)."""
        if self.parent is None:
            return True
        return self._index == len(self.parent._children) - 1

    @property
    def next_subexpression(self) -> ConditionExpression | None:
        """The following sibling, if any."""
        if self.parent is None or self.is_last_subexpression:
            return None
        return self.parent._children[self._index + 1]

    @property
    def last_subexpression(self) -> ConditionExpression | None:
        """The most recently added child, if any."""
        return self._children[-1] if self._children else None

    def add_subexpression(self, op: ConditionOperator) -> ConditionExpression:
        """Append a parenthesized group and return it.

        Raises:
            InvalidNearUseError: If ``op`` is NEAR and
                THROW_ON_INVALID_NEAR_USE is set
        """
        if op is ConditionOperator.NEAR:
            if SearchOptions.THROW_ON_INVALID_NEAR_USE in self.options:
                raise InvalidNearUseError("before")
            logger.debug("Demoting near before subexpression to and")
            op = ConditionOperator.AND
        if not self._children:
            op = ConditionOperator.AND

        exp = self._child(self, op)
        self._children.append(exp)
        return exp

    def add_term(self, op: ConditionOperator, term: str) -> ConditionExpression:
        """Append a term and return it.

        Raises:
            InvalidNearUseError: If ``op`` is NEAR right after a non-empty
                group and THROW_ON_INVALID_NEAR_USE is set
        """
        if not self._children:
            op = ConditionOperator.AND
        elif op is ConditionOperator.NEAR and self._children[-1].has_subexpressions:
            if SearchOptions.THROW_ON_INVALID_NEAR_USE in self.options:
                raise InvalidNearUseError("after")
            logger.debug(f"Demoting near after subexpression to and before {term!r}")
            op = ConditionOperator.AND

        exp = self._child(self, op)
        exp.is_term = True
        exp.term = exp._trim_prefix(term)
        exp.term_is_phrase = " " in term
        exp.term_is_prefix = "*" in term
        self._children.append(exp)
        return exp

    def _trim_prefix(self, term: str) -> str:
        prefix_index = term.find("*")
        if prefix_index == -1:
            return term

        if " " not in term:
            if SearchOptions.TRIM_PREFIX_TERMS not in self.options:
                return term
            if prefix_index == len(term) - 1:
                return term
            return "" if prefix_index == 0 else term[: prefix_index + 1]

        if SearchOptions.TRIM_PREFIX_PHRASES not in self.options:
            return term
        term = PREFIX_FRAGMENT.sub("", term)
        return MULTI_SPACE.sub(" ", term.strip()) + "*"

    def do_stem(self) -> bool:
        """Whether the term should be wrapped for inflectional matching.

        Prefix terms and terms on either side of a NEAR are never stemmed.
        """
        if self.is_subexpression:
            return False
        if len(self.term) < 2:
            return False
        if self.term_is_prefix:
            return False
        flag = (
            SearchOptions.STEM_PHRASES
            if self.term_is_phrase
            else SearchOptions.STEM_TERMS
        )
        if flag not in self.options:
            return False
        if self.operator is ConditionOperator.NEAR:
            return False
        following = self.next_subexpression
        if following is not None and following.operator is ConditionOperator.NEAR:
            return False
        return True

    def __str__(self) -> str:
        if self.is_term:
            quoted = '"' + self.term.replace('"', '""') + '"'
            if self.do_stem():
                return f"formsof(inflectional, {quoted})"
            return quoted

        if not self._children:
            # An empty predicate is rejected by the engine.
            body = '""'
        else:
            parts = [str(self._children[0])]
            for exp in self._children[1:]:
                parts.append(f" {exp.operator} {exp}")
            body = "".join(parts)

        return body if self.is_root else f"({body})"

    def __iter__(self) -> Iterator[ConditionExpression]:
        """Yield every descendant in pre-order."""
        for exp in self._children:
            yield exp
            if exp.has_subexpressions:
                yield from exp

    def __repr__(self) -> str:
        if self.is_term:
            return f"ConditionExpression(term={self.term!r}, operator={self.operator.name})"
        if self.operator is None:
            return f"ConditionExpression(root, children={len(self._children)})"
        return (
            f"ConditionExpression(children={len(self._children)}, "
            f"operator={self.operator.name})"
        )
