"""Command interceptor rewriting LIKE filters into full-text predicates.

An ORM typically renders a substring filter as ``[t].[c] LIKE @p`` with the
parameter value ``%text%``. Callers that want a full-text search instead pass
a value carrying a sentinel prefix (``%fulltext:text%``); the interceptor
swaps the comparison for ``contains([t].[c], @p)`` and the value for the
normalized condition before the command is sent to the server.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .condition import SearchOptions
from .fulltext import parse

logger = logging.getLogger(__name__)

DEFAULT_PREFIX = "fulltext:"

# Server side limit on the declared size of a full-text parameter.
MIN_PARAMETER_SIZE = 4000


class FullTextParseOption(Enum):
    """How the condition in an intercepted parameter is processed."""

    NO_PARSE = "no-parse"
    PARSE = "parse"
    PARSE_AS_PREFIX = "parse-as-prefix"


@dataclass
class CommandParameter:
    """A named command parameter."""

    name: str
    value: Any
    is_string: bool = True
    size: int = 0


@dataclass
class Command:
    """Command text with its parameters."""

    text: str
    parameters: list[CommandParameter] = field(default_factory=list)


def fulltext_pattern(condition: str, prefix: str = DEFAULT_PREFIX) -> str:
    """Build the LIKE argument that marks a condition for interception."""
    return f"%{prefix}{condition}%"


class FullTextSearchInterceptor:
    """Rewrites sentinel-marked LIKE comparisons into ``contains`` calls."""

    def __init__(
        self,
        prefix: str = DEFAULT_PREFIX,
        option: FullTextParseOption = FullTextParseOption.PARSE_AS_PREFIX,
        options: SearchOptions = SearchOptions.DEFAULT,
    ):
        self.prefix = "%" + prefix
        self.option = option
        self.options = options

    def non_query_executing(self, command: Command) -> None:
        """Statements without a result set are left untouched."""

    def reader_executing(self, command: Command) -> None:
        self.rewrite(command)

    def scalar_executing(self, command: Command) -> None:
        self.rewrite(command)

    def rewrite(self, command: Command) -> int:
        """Rewrite every intercepted parameter of a command in place.

        Returns:
            Number of parameters rewritten

        Raises:
            ConditionError: If a condition is rejected by a throw option
        """
        rewritten = 0
        for parameter in command.parameters:
            if not parameter.is_string:
                continue
            value = parameter.value
            if not isinstance(value, str) or not value.startswith(self.prefix):
                continue

            name = re.escape(parameter.name)
            pattern = rf"\[(\w+)\].\[(\w+)\]\s+LIKE\s+@{name}(?:\s*ESCAPE N?'~')?"
            text = re.sub(
                pattern,
                lambda m: f"contains([{m.group(1)}].[{m.group(2)}], @{parameter.name})",
                command.text,
            )
            if text == command.text:
                continue

            condition = self.condition_for(value)
            command.text = text
            parameter.size = max(parameter.size, MIN_PARAMETER_SIZE)
            parameter.value = condition
            rewritten += 1
            logger.debug(f"Rewrote @{parameter.name} as full-text condition")
        return rewritten

    def condition_for(self, value: str) -> str:
        """Turn an intercepted parameter value into the condition to send."""
        condition = value[len(self.prefix) :]
        if condition.endswith("%"):
            condition = condition[:-1]
        if self.option is FullTextParseOption.NO_PARSE:
            return condition
        if self.option is FullTextParseOption.PARSE_AS_PREFIX:
            condition += "*"
        return parse(condition, self.options)
