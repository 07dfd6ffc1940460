"""Namespace pattern matching."""

from ..exceptions import MalformedPatternError

WILDCARD = "*"


def matches(pattern: str, namespace: str) -> bool:
    """Match a namespace against an exact or trailing-wildcard pattern.

    ``"Microsoft.*"`` matches any namespace starting with ``"Microsoft."``;
    ``"mscorlib"`` matches only ``"mscorlib"``. Comparison is case-sensitive.
    A bare ``"*"`` matches everything.

    Raises:
        MalformedPatternError: if a wildcard appears before the last character
    """
    star = pattern.find(WILDCARD)
    if star == -1:
        return namespace == pattern
    if star != len(pattern) - 1:
        raise MalformedPatternError(pattern)
    return namespace.startswith(pattern[:-1])
