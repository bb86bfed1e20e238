"""Option flags controlling condition normalization."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Flag


class SearchOptions(Flag):
    """Closed set of flags selected once per parse.

    Stemming flags mark terms eligible for ``formsof(inflectional, ...)``
    wrapping, trimming flags cut wildcard terms at their first asterisk, and
    the throw flags turn a silent repair into a ``ConditionError``.
    """

    NONE = 0

    STEM_TERMS = 1
    STEM_PHRASES = 2

    TRIM_PREFIX_TERMS = 4
    TRIM_PREFIX_PHRASES = 8

    THROW_ON_UNBALANCED_PARENS = 128
    THROW_ON_UNBALANCED_QUOTES = 256
    THROW_ON_INVALID_NEAR_USE = 512

    STEM_ALL = STEM_TERMS | STEM_PHRASES
    TRIM_PREFIX_ALL = TRIM_PREFIX_TERMS | TRIM_PREFIX_PHRASES
    THROW_ON_ALL = (
        THROW_ON_UNBALANCED_PARENS
        | THROW_ON_UNBALANCED_QUOTES
        | THROW_ON_INVALID_NEAR_USE
    )
    DEFAULT = STEM_ALL | TRIM_PREFIX_ALL

    @classmethod
    def from_names(cls, names: Iterable[str]) -> SearchOptions:
        """Combine flags given by name.

        Names are case-insensitive and may use dashes or underscores, so
        ``"stem-terms"``, ``"STEM_TERMS"`` and ``"throw-on-all"`` are all
        accepted.

        Raises:
            ValueError: If a name is not a member of the flag set
        """
        options = cls.NONE
        for name in names:
            key = name.strip().upper().replace("-", "_")
            if not key:
                continue
            try:
                options |= cls[key]
            except KeyError:
                raise ValueError(f"Unknown search option: {name!r}") from None
        return options

    def names(self) -> list[str]:
        """Names of the single flags that are set, in declaration order."""
        return [
            flag.name.lower().replace("_", "-")
            for flag in SINGLE_FLAGS
            if flag in self
        ]


SINGLE_FLAGS: tuple[SearchOptions, ...] = (
    SearchOptions.STEM_TERMS,
    SearchOptions.STEM_PHRASES,
    SearchOptions.TRIM_PREFIX_TERMS,
    SearchOptions.TRIM_PREFIX_PHRASES,
    SearchOptions.THROW_ON_UNBALANCED_PARENS,
    SearchOptions.THROW_ON_UNBALANCED_QUOTES,
    SearchOptions.THROW_ON_INVALID_NEAR_USE,
)

OPTION_NAMES: tuple[str, ...] = tuple(
    name.lower().replace("_", "-") for name in SearchOptions.__members__
)
