"""Parser turning ad hoc search conditions into an expression tree."""

from __future__ import annotations

import logging
import re

from .exceptions import ConditionError, UnbalancedParenthesesError
from .expression import ConditionExpression
from .operators import ConditionOperator
from .options import SearchOptions
from .stream import ConditionStream

logger = logging.getLogger(__name__)

MULTI_SPACE = re.compile(r" {2,}")


class ConditionParser:
    """Single pass parser for full-text search conditions.

    Characters are read one at a time and accumulated into tokens. Each
    completed token is either an operator, which becomes the pending
    operator, or a term, which is attached to the current subexpression with
    that operator. Operators are applied left to right with no precedence;
    grouping comes only from parentheses.

    Malformed input is repaired unless the matching throw option is set:
    stray closing parentheses are ignored, unclosed groups are closed at the
    end, an open quote runs to the end of input and NEAR next to a group
    becomes AND.

    Example:
        >>> parser = ConditionParser('apples or "green pears"')
        >>> str(parser.root_expression)
        'formsof(inflectional, "apples") or formsof(inflectional, "green pears")'
    """

    def __init__(
        self, condition: str | None, options: SearchOptions = SearchOptions.DEFAULT
    ):
        """Parse ``condition`` immediately.

        Raises:
            ConditionError: If the condition is malformed and the matching
                throw option is set
        """
        self.options = options
        self.root_expression = ConditionExpression(options)

        self._stream = ConditionStream(condition, options)
        self._current = self.root_expression
        self._token: list[str] = []
        self._last_op = ConditionOperator.AND
        self._in_quotes = False

        try:
            self._parse()
        except ConditionError as e:
            if e.position is None:
                e.position = self._stream.position
            raise

    def _parse(self) -> None:
        stream = self._stream
        while stream.read():
            char = stream.current
            if ConditionOperator.is_symbol(char):
                self._put_token()
                self._token = [char]
                self._put_token()
            elif char == " ":
                self._put_token()
            elif char == "(":
                self._push_expression()
            elif char == ")":
                self._pop_expression()
            elif char == '"':
                self._put_token()
                self._in_quotes = True
                self._token = [stream.read_quote()]
                self._put_token()
                self._in_quotes = False
            else:
                self._token.append(char)
        self._put_token()

        if self._current is not self.root_expression:
            if SearchOptions.THROW_ON_UNBALANCED_PARENS in self.options:
                raise UnbalancedParenthesesError(len(stream.condition))
            logger.debug("Closing unbalanced parentheses at end of condition")

    def _reset(self) -> None:
        self._token = []
        self._last_op = ConditionOperator.AND

    def _push_expression(self) -> None:
        self._put_token()
        self._current = self._current.add_subexpression(self._last_op)
        self._reset()

    def _pop_expression(self) -> None:
        self._put_token()
        if self._current.parent is None:
            if SearchOptions.THROW_ON_UNBALANCED_PARENS in self.options:
                raise UnbalancedParenthesesError(self._stream.position)
            logger.debug(
                f"Ignoring unbalanced closing parenthesis at {self._stream.position}"
            )
        else:
            self._current = self._current.parent
        self._reset()

    def _put_token(self) -> None:
        token = "".join(self._token)

        if not self._in_quotes:
            op = ConditionOperator.try_parse(token, self._last_op)
            if op is not None:
                self._last_op = op
                self._token = []
                return
            if not token:
                return
        else:
            token = MULTI_SPACE.sub(" ", token.strip())

        self._current.add_term(self._last_op, token)
        self._reset()
