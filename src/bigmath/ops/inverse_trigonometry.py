"""
Inverse Trigonometry — arcsin, arccos, arctan, atan2

Все функции сводятся к atan2(y, x) с учётом квадранта, а atan2 — к
внутреннему atan для конечных отношений y/x.

Редукция аргумента atan:
1. atan(-x) = -atan(x)
2. x > 1   → atan(x) = π/2 - atan(1/x)
3. x > 0.8 → atan(x) = 2 · atan(x / (√(1 + x²) + 1))
   (у x = 1 ряд Лейбница сходится слишком медленно)
4. Ряд: Σ (-1)^k x^(2k+1) / (2k+1) до |term| < epsilon

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. atan2(0, 0) → DomainError
2. arcsin/arccos: |z| > 1 → DomainError
3. Точные значения на границах: arcsin(±1) = ±π/2, arccos(1) = 0
4. Главные ветви: atan2 ∈ (-π, π], arcsin ∈ [-π/2, π/2], arccos ∈ [0, π]
"""

from decimal import Decimal
from typing import Final

from src.bigmath.domain.errors import DomainError
from src.bigmath.domain.precision_context import PrecisionContext
from src.bigmath.ops.circle_constant import pi
from src.bigmath.ops.context_utils import (
    DecimalLike,
    as_decimal,
    epsilon,
    working_context,
)
from src.bigmath.ops.roots import sqrt

# =============================================================================
# CONSTANTS
# =============================================================================

# Порог редукции половинного угла для atan
HALF_ANGLE_THRESHOLD: Final[Decimal] = Decimal("0.8")

# Множитель точности для atan2, arcsin, arccos
INVERSE_TRIG_PRECISION_FACTOR: Final[Decimal] = Decimal("1.2")

_ZERO: Final[Decimal] = Decimal(0)
_ONE: Final[Decimal] = Decimal(1)
_TWO: Final[Decimal] = Decimal(2)
_HALF: Final[Decimal] = Decimal("0.5")


# =============================================================================
# ATAN (internal)
# =============================================================================


def _atan(x: Decimal, working: PrecisionContext) -> Decimal:
    """
    Арктангенс конечного x в рабочем контексте.

    Для бесконечных отношений используется atan2.
    """
    c = working.to_decimal_context()

    # atan(-x) = -atan(x)
    if x < _ZERO:
        return c.minus(_atan(x.copy_negate(), working))

    # Ряд Тейлора безнадёжно медленный при x > 1
    if x > _ONE:
        half_pi = c.multiply(pi(working), _HALF)
        return c.subtract(half_pi, _atan(c.divide(_ONE, x), working))

    # И при x близком к 1 тоже: уменьшаем аргумент
    if x > HALF_ANGLE_THRESHOLD:
        #                 x
        # new_x = -----------------
        #         sqrt(1 + x^2) + 1
        root = sqrt(c.add(_ONE, c.multiply(x, x)), working)
        new_x = c.divide(x, c.add(root, _ONE))
        return c.multiply(_TWO, _atan(new_x, working))

    return _atan_series(x, working)


def _atan_series(x: Decimal, working: PrecisionContext) -> Decimal:
    """Ряд Тейлора arctan для нормализованного x ∈ [0, 0.8]."""
    c = working.to_decimal_context()
    eps = epsilon(working)

    minus_x_squared = c.minus(c.multiply(x, x))

    numerator = x
    total = _ZERO
    term = x
    denominator = 1
    while c.abs(term) >= eps:
        term = c.divide(numerator, denominator)
        numerator = c.multiply(numerator, minus_x_squared)
        total = c.add(total, term)
        denominator += 2

    return total


# =============================================================================
# PUBLIC API
# =============================================================================


def atan2(y: DecimalLike, x: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Арктангенс отношения y/x с учётом квадранта.

    ВАЖНО: порядок аргументов — сначала вертикальная компонента (y),
    затем горизонтальная (x).

    Args:
        y: Вертикальная компонента
        x: Горизонтальная компонента
        context: Требуемый контекст точности

    Returns:
        Угол в (-π, π], округлённый до рабочего контекста
        (working_precision(context, 1.2))

    Raises:
        DomainError: Если x == 0 и y == 0

    Examples:
        >>> atan2(Decimal(0), Decimal(1), PrecisionContext(precision=10))
        Decimal('0')
    """
    y = as_decimal(y, "y")
    x = as_decimal(x, "x")

    working = working_context(context, INVERSE_TRIG_PRECISION_FACTOR)
    c = working.to_decimal_context()

    if x.is_zero():
        # Исключительные случаи
        if y.is_zero():
            raise DomainError("atan2: undefined for atan2(0, 0)")
        half_pi = c.multiply(pi(working), _HALF)
        return half_pi if y > _ZERO else c.minus(half_pi)

    if x < _ZERO:
        # Отрицательная полуось и II/III квадранты
        if y.is_zero():
            return pi(working)
        angle = _atan(c.divide(y, x), working)
        if y > _ZERO:
            return c.add(angle, pi(working))
        return c.subtract(angle, pi(working))

    # Обычный случай
    return _atan(c.divide(y, x), working)


def arctan(z: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Арктангенс z: atan2(z, 1).

    Returns:
        Угол в (-π/2, π/2)
    """
    return atan2(z, _ONE, context)


def arcsin(z: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Арксинус z ∈ [-1, 1]: atan2(z, √(1 - z²)).

    Raises:
        DomainError: Если |z| > 1

    Examples:
        >>> from src.bigmath.ops.context_utils import round_to
        >>> ctx = PrecisionContext(precision=10)
        >>> round_to(arcsin(Decimal(1), ctx), ctx)
        Decimal('1.570796327')
    """
    z = as_decimal(z, "z")

    z_abs = z.copy_abs()
    if z_abs > _ONE:
        raise DomainError(f"arcsin: argument must lie in [-1, 1], got {z}")

    working = working_context(context, INVERSE_TRIG_PRECISION_FACTOR)
    c = working.to_decimal_context()

    if z_abs == _ONE:
        half_pi = c.multiply(pi(working), _HALF)
        return half_pi if z > _ZERO else c.minus(half_pi)

    cosine = sqrt(c.subtract(_ONE, c.multiply(z, z)), working)
    return atan2(z, cosine, working)


def arccos(z: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Арккосинус z ∈ [-1, 1]: atan2(√(1 - z²), z).

    Raises:
        DomainError: Если |z| > 1

    Examples:
        >>> arccos(Decimal(1), PrecisionContext(precision=10))
        Decimal('0')
    """
    z = as_decimal(z, "z")

    if z.copy_abs() > _ONE:
        raise DomainError(f"arccos: argument must lie in [-1, 1], got {z}")
    if z == _ONE:
        return _ZERO

    working = working_context(context, INVERSE_TRIG_PRECISION_FACTOR)
    c = working.to_decimal_context()

    sine = sqrt(c.subtract(_ONE, c.multiply(z, z)), working)
    return atan2(sine, z, working)
