"""Exception classes for condition parsing."""


class ConditionError(ValueError):
    """Base exception for conditions rejected by a throw option."""

    def __init__(self, message: str, position: int | None = None):
        """Initialize with message and the stream position it was found at."""
        self.position = position
        super().__init__(message)


class UnbalancedParenthesesError(ConditionError):
    """Raised for an unmatched ``)`` or a group left open at end of input."""

    def __init__(self, position: int | None = None):
        super().__init__("Unbalanced parentheses.", position)


class UnbalancedQuotesError(ConditionError):
    """Raised when the input ends inside an open quote."""

    def __init__(self, position: int | None = None):
        super().__init__("Unbalanced quotes.", position)


class InvalidNearUseError(ConditionError):
    """Raised when NEAR adjoins a parenthesized group."""

    def __init__(self, placement: str, position: int | None = None):
        """Initialize with where the group sits relative to the operator."""
        self.placement = placement
        super().__init__(f"Invalid near operator {placement} subexpression.", position)
