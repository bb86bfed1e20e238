"""Character stream over a raw search condition."""

from __future__ import annotations

import re

from .exceptions import UnbalancedQuotesError
from .operators import ConditionOperator
from .options import SearchOptions

# Tab, CR, LF and the remaining C0 controls; NUL is left alone.
CONTROL_CHARS = re.compile(r"[\x01-\x1f]")

NUL = "\0"


class ConditionStream:
    """Cursor over a condition with control characters blanked out."""

    def __init__(self, condition: str | None, options: SearchOptions):
        self.options = options
        self.condition = CONTROL_CHARS.sub(" ", condition or "")
        self._index = -1

    @property
    def position(self) -> int:
        """Index of the current character."""
        return self._index

    @property
    def current(self) -> str:
        """Character at the cursor, or NUL outside the condition."""
        if self._index < 0 or self._eoq():
            return NUL
        return self.condition[self._index]

    def read(self) -> bool:
        """Advance to the next character; False once the input is exhausted."""
        self._index += 1
        return not self._eoq()

    def read_quote(self) -> str:
        """Read a quoted run, starting just after its opening quote.

        A quote closes the run when it is followed by a delimiter (space,
        parenthesis or operator symbol) or ends the input. A doubled quote is
        an escaped literal quote. Any other quote is kept as part of the run,
        unless unbalanced quotes are being rejected, in which case it ends the
        run early.

        Raises:
            UnbalancedQuotesError: If the input ends inside the run and
                THROW_ON_UNBALANCED_QUOTES is set
        """
        run = []
        while self.read():
            char = self.current
            if char == '"':
                if self._index + 1 == len(self.condition):
                    self._index = len(self.condition)
                    return "".join(run)
                peek = self.condition[self._index + 1]
                if peek in " ()" or ConditionOperator.is_symbol(peek):
                    return "".join(run)
                if peek == '"':
                    self._index += 1
                elif SearchOptions.THROW_ON_UNBALANCED_QUOTES in self.options:
                    return "".join(run)
            run.append(char)

        if SearchOptions.THROW_ON_UNBALANCED_QUOTES in self.options:
            raise UnbalancedQuotesError(len(self.condition))
        return "".join(run)

    def _eoq(self) -> bool:
        return self._index >= len(self.condition)
