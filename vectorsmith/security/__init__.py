"""
Security utilities module.

Provides:
- SQL identifier quoting (injection prevention for dynamic table names)
- Vector dimension and finiteness validation
"""

from vectorsmith.security.validation import (
    quote_identifier,
    validate_dimension,
    is_finite_vector
)

__all__ = [
    "quote_identifier",
    "validate_dimension",
    "is_finite_vector",
]
