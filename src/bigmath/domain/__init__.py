"""
Domain models and value objects.

Contains the precision context model and the library-wide exceptions.
"""

from src.bigmath.domain.errors import DomainError
from src.bigmath.domain.precision_context import (
    DECIMAL32,
    DECIMAL64,
    DECIMAL128,
    PrecisionContext,
    RoundingMode,
)

__all__ = [
    # Precision context
    "PrecisionContext",
    "RoundingMode",
    "DECIMAL32",
    "DECIMAL64",
    "DECIMAL128",
    # Errors
    "DomainError",
]
