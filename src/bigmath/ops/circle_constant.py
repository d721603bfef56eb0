"""
Circle Constant — π (Gauss–Legendre AGM)

Алгоритм Гаусса–Лежандра (arithmetic-geometric mean):

    a₀ = 1, b₀ = 1/√2, t₀ = 1/4, p₀ = 1

    A  = (a + b) / 2        (арифметическое среднее)
    b' = √(a · b)           (геометрическое среднее)
    t  = t - p · (A - a)²
    p  = 2 · p
    a  = A

    повторять, пока |a - b| >= epsilon

         (a + b)²
    π = ----------
           4t

Квадратичная сходимость: ~log2(precision) итераций.

Быстрый путь: при precision <= CACHED_CONSTANT_PRECISION возвращается
закэшированный 40-значный литерал, округлённый до контекста. Порог совпадает
с порогом для e (exp_log.e).
"""

import logging
from decimal import Decimal
from typing import Final

from src.bigmath.domain.precision_context import PrecisionContext
from src.bigmath.ops.context_utils import (
    CACHED_CONSTANT_PRECISION,
    epsilon,
    expand_context,
    round_to,
)
from src.bigmath.ops.roots import sqrt

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# π с 40 значащими цифрами. Неизменяемая константа уровня процесса,
# инициализируется один раз при импорте модуля.
PI_40: Final[Decimal] = Decimal("3.141592653589793238462643383279502884197")

# Дополнительные цифры рабочего контекста AGM.
# Критерий остановки использует epsilon исходного контекста, который на
# PI_GUARD_DIGITS порядков грубее шума округления: цикл всегда завершается.
PI_GUARD_DIGITS: Final[int] = 10

_ONE: Final[Decimal] = Decimal(1)
_TWO: Final[Decimal] = Decimal(2)
_FOUR: Final[Decimal] = Decimal(4)
_HALF: Final[Decimal] = Decimal("0.5")
_FOURTH: Final[Decimal] = Decimal("0.25")


# =============================================================================
# PI
# =============================================================================


def pi(context: PrecisionContext) -> Decimal:
    """
    Значение π с точностью контекста.

    Args:
        context: Требуемый контекст точности

    Returns:
        π, округлённое до context (ровно context.precision цифр)

    Examples:
        >>> pi(PrecisionContext(precision=5))
        Decimal('3.1416')
    """
    if context.precision <= CACHED_CONSTANT_PRECISION:
        return round_to(PI_40, context)

    working = expand_context(context, context.precision + PI_GUARD_DIGITS)
    c = working.to_decimal_context()
    eps = epsilon(context)

    a = _ONE
    b = c.divide(_ONE, sqrt(_TWO, working))
    t = _FOURTH
    p = _ONE

    iterations = 0
    while c.abs(c.subtract(a, b)) >= eps:
        arithmetic_mean = c.multiply(c.add(a, b), _HALF)
        b = sqrt(c.multiply(a, b), working)
        t = c.subtract(t, c.multiply(p, c.power(c.subtract(arithmetic_mean, a), 2)))
        p = c.add(p, p)
        a = arithmetic_mean
        iterations += 1

    logger.debug("pi: precision=%d agm_iterations=%d", context.precision, iterations)

    #      (a + b)^2
    # pi = ---------
    #         4t
    return context.to_decimal_context().divide(
        c.power(c.add(a, b), 2), c.multiply(_FOUR, t)
    )
