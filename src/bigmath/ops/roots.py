"""
Roots — Principal n-th Root (Newton-Raphson)

Главный (неотрицательный) корень n-й степени из неотрицательного Decimal.

Алгоритм:
    f(x) = x^n - a
    x ← x + (a / x^(n-1) - x) / n

- Вычисления в контексте, расширенном на +n цифр
- Начальное приближение — порядок величины: (n-1)/n бит мантиссы
  отбрасываются сдвигом, scale делится на n
- Количество итераций ФИКСИРОВАНО (без epsilon-сравнения):
      limit = n² · ⌈log2(new_precision)⌉ // 2
  Метод Ньютона сходится квадратично (каждая итерация удваивает число
  верных цифр), поэтому limit гарантирует сходимость.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. n < 2 → DomainError
2. a < 0 → DomainError
3. a == 0 → 0, a == 1 → 1 (без итераций)
4. Результат округлён до расширенного контекста (precision + n)
"""

import logging
from decimal import Decimal
from typing import Final

from src.bigmath.domain.errors import DomainError
from src.bigmath.domain.precision_context import PrecisionContext
from src.bigmath.ops.context_utils import DecimalLike, as_decimal, expand_context

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Минимальная допустимая степень корня
ROOT_MIN_DEGREE: Final[int] = 2

# Нижняя граница числа итераций Ньютона.
# При очень малой точности (1-2 цифры) формула limit даёт 4 итерации,
# а начальное приближение может отличаться от корня в ~6 раз.
NEWTON_MIN_ITERATIONS: Final[int] = 8


# =============================================================================
# PUBLIC API
# =============================================================================


def principal_root(
    decimal_value: DecimalLike, n: int, context: PrecisionContext
) -> Decimal:
    """
    Главный корень n-й степени.

    Args:
        decimal_value: Подкоренное значение (>= 0)
        n: Степень корня (>= 2)
        context: Требуемый контекст точности

    Returns:
        Корень, округлённый до контекста с precision + n цифр

    Raises:
        DomainError: Если n < 2 или значение отрицательное

    Examples:
        >>> ctx = PrecisionContext(precision=10)
        >>> principal_root(Decimal(0), 3, ctx)
        Decimal('0')
        >>> principal_root(Decimal(1), 5, ctx)
        Decimal('1')
    """
    if n < ROOT_MIN_DEGREE:
        raise DomainError(f"principal_root: n must be at least {ROOT_MIN_DEGREE}, got {n}")

    a = as_decimal(decimal_value, "decimal_value")

    if a < 0:
        raise DomainError(f"principal_root: value must be non-negative, got {a}")

    # Quick exits
    if a.is_zero():
        return Decimal(0)
    if a == 1:
        return Decimal(1)

    return _nth_root(a, n, context)


def sqrt(decimal_value: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Квадратный корень: principal_root(x, 2, context).

    Raises:
        DomainError: Если значение отрицательное
    """
    return principal_root(decimal_value, 2, context)


# =============================================================================
# NEWTON-RAPHSON
# =============================================================================


def iteration_limit(n: int, new_precision: int) -> int:
    """
    Фиксированное число итераций Ньютона для корня степени n.

    limit = n² · ⌈log2(new_precision)⌉ // 2, но не меньше NEWTON_MIN_ITERATIONS.

    Examples:
        >>> iteration_limit(2, 32)
        10
        >>> iteration_limit(3, 33)
        27
    """
    ceil_log2 = (new_precision - 1).bit_length()
    return max(n * n * ceil_log2 // 2, NEWTON_MIN_ITERATIONS)


def guess_root(a: Decimal, n: int) -> Decimal:
    """
    Начальное приближение корня: порядок величины, не точное значение.

    1. От немасштабированной мантиссы остаётся первая 1/n часть бит
    2. scale делится на n (с усечением к нулю)

    Examples:
        >>> guess_root(Decimal("1E-100"), 2)
        Decimal('1E-50')
        >>> guess_root(Decimal(2), 2)
        Decimal('1')
    """
    _, digits, exponent = a.as_tuple()
    magnitude = int("".join(str(d) for d in digits))
    scale = -exponent

    # 1. Первая (1/n)-я часть бит мантиссы
    length = magnitude.bit_length() * (n - 1) // n
    magnitude >>= length

    # 2. scale / n, усечение к нулю
    new_scale = abs(scale) // n
    if scale < 0:
        new_scale = -new_scale

    return Decimal((0, tuple(int(d) for d in str(magnitude)), -new_scale))


def _nth_root(a: Decimal, n: int, context: PrecisionContext) -> Decimal:
    """Newton-Raphson для проверенного a > 0, a != 1."""
    new_precision = context.precision + n
    c = expand_context(context, new_precision).to_decimal_context()

    limit = iteration_limit(n, new_precision)
    big_n = Decimal(n)
    n_1 = n - 1

    logger.debug(
        "principal_root: n=%d precision=%d iterations=%d", n, new_precision, limit
    )

    x = guess_root(a, n)
    for _ in range(limit):
        # delta = (a / x^(n-1) - x) / n
        delta = c.divide(c.subtract(c.divide(a, c.power(x, n_1)), x), big_n)
        x = c.add(x, delta)

    return c.plus(x)
