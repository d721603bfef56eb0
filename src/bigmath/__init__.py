"""
bigmath — элементарные функции произвольной точности

Фасад библиотеки: реэкспорт всего набора функций, без собственной логики.

Каждая функция принимает операнды (Decimal, int или str) и PrecisionContext.
Результат возвращается округлённым до рабочего (расширенного) контекста и
содержит guard-цифры; round_to(value, context) даёт значение ровно на
точности вызывающего кода. pi и e возвращаются сразу на точности context.

Округление двойное (рабочий контекст, затем round_to), поэтому итог
верный (faithful): отличается от точного значения меньше чем на единицу
последнего разряда, но не гарантированно округлён корректно. Рядом с
серединой между соседними значениями возможен сосед корректного результата.

Пример:
    >>> from decimal import Decimal
    >>> from src.bigmath import PrecisionContext, round_to, sqrt
    >>> ctx = PrecisionContext(precision=20)
    >>> round_to(sqrt(Decimal(2), ctx), ctx)
    Decimal('1.4142135623730950488')
"""

import logging

# Domain (context model, errors)
from src.bigmath.domain import (
    DECIMAL32,
    DECIMAL64,
    DECIMAL128,
    DomainError,
    PrecisionContext,
    RoundingMode,
)

# Context Utility
from src.bigmath.ops.context_utils import (
    CACHED_CONSTANT_PRECISION,
    MIN_GUARD_DIGITS,
    DecimalLike,
    as_decimal,
    epsilon,
    expand_context,
    round_to,
    scaled_precision,
    working_context,
    working_precision,
)

# Root Extractor
from src.bigmath.ops.roots import principal_root, sqrt

# Circle Constant Generator
from src.bigmath.ops.circle_constant import PI_40, pi

# Exponential/Logarithm Engine
from src.bigmath.ops.exp_log import E_40, e, exp, log, power

# Trigonometric Engine
from src.bigmath.ops.trigonometry import (
    SinCos,
    cos,
    cot,
    csc,
    sec,
    sin,
    sin_and_cos,
    tan,
)

# Inverse Trigonometric Engine
from src.bigmath.ops.inverse_trigonometry import arccos, arcsin, arctan, atan2

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Domain
    "PrecisionContext",
    "RoundingMode",
    "DECIMAL32",
    "DECIMAL64",
    "DECIMAL128",
    "DomainError",
    # Context Utility
    "CACHED_CONSTANT_PRECISION",
    "MIN_GUARD_DIGITS",
    "DecimalLike",
    "as_decimal",
    "epsilon",
    "expand_context",
    "round_to",
    "scaled_precision",
    "working_context",
    "working_precision",
    # Roots
    "principal_root",
    "sqrt",
    # Circle constant
    "PI_40",
    "pi",
    # Exponential / Logarithm
    "E_40",
    "e",
    "exp",
    "log",
    "power",
    # Trigonometry
    "SinCos",
    "sin_and_cos",
    "sin",
    "cos",
    "tan",
    "cot",
    "sec",
    "csc",
    # Inverse trigonometry
    "arcsin",
    "arccos",
    "arctan",
    "atan2",
]
