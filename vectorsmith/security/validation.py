"""
Identifier quoting and vector validation.

Provides the checks every adapter runs before touching the network:
- SQL identifier quoting (prevents injection through table names)
- Vector dimension checks
- Finite-number checks for embeddings
"""

import math
from typing import Optional, Sequence

from vectorsmith.exceptions import ConfigurationError, DimensionMismatchError


def quote_identifier(identifier: str) -> str:
    """
    Quote an SQL identifier for interpolation into a statement.

    Wraps the name in double quotes and doubles any embedded double quote,
    which is the escaping rule shared by PostgreSQL and SQLite.

    Example:
        >>> quote_identifier("documents")
        '"documents"'
        >>> quote_identifier('bad"; DROP TABLE x; --')
        '"bad""; DROP TABLE x; --"'
    """
    if not isinstance(identifier, str) or not identifier:
        raise ConfigurationError("Identifier must be a non-empty string")
    if "\x00" in identifier:
        raise ConfigurationError("Identifier must not contain NUL characters")
    return '"' + identifier.replace('"', '""') + '"'


def validate_dimension(
    vector: Sequence[float],
    expected: Optional[int],
    context: str = "Vector"
) -> None:
    """
    Check that a vector has the expected length.

    Args:
        vector: Vector to check
        expected: Required length, or None to skip the check
        context: Prefix used in the error message

    Raises:
        DimensionMismatchError: If the length differs from ``expected``
    """
    if expected is None:
        return
    try:
        actual = len(vector)
    except TypeError:
        actual = None
    if actual != expected:
        raise DimensionMismatchError(expected, actual, context=context)


def is_finite_vector(vector: Sequence[float]) -> bool:
    """
    Return True if every component is a finite int or float.

    Example:
        >>> is_finite_vector([0.1, 2, -3.5])
        True
        >>> is_finite_vector([0.1, float("nan")])
        False
    """
    return all(
        isinstance(value, (int, float))
        and not isinstance(value, bool)
        and math.isfinite(value)
        for value in vector
    )


__all__ = [
    "quote_identifier",
    "validate_dimension",
    "is_finite_vector",
]
