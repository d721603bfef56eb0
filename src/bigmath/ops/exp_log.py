"""
ExpLog — Exponential, Logarithm & Power

Функции:
- e(context)            : число Эйлера
- exp(x, context)       : e^x
- log(x, context)       : натуральный логарифм
- power(x, y, context)  : x^y для x >= 0

ФОРМУЛЫ:
    exp(x) = e^k · exp(f),   |x| = k + f,  k целое, f ∈ [0, 1)
    exp(f) = Σ f^i / i!                     (до |term| < epsilon)

    log(x) = k + log(m),     x = m · e^k,  m ∈ [1, e)
    log(m) = 2 · Σ t^(2k+1) / (2k+1),  t = (m - 1) / (m + 1)

    x^y    = x^p · exp(f · log(x)),  |y| = p + f

Расширение точности:
- exp, power: ×1.2
- log: ×1.5
- но всегда не меньше precision + MIN_GUARD_DIGITS (context_utils)
Результат возвращается округлённым до рабочего (расширенного) контекста;
для точности вызывающего кода — context_utils.round_to.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. log(x <= 0) → DomainError
2. power(x < 0, y) → DomainError для любого y (включая целые)
3. power(0, y < 0) → DomainError, power(0, 0) = 1, power(0, y > 0) = 0
4. small_exp — единственный ряд, останавливаемый по epsilon в зависимости
   от величины x; аргумент всегда в [0, 1)
"""

import logging
from decimal import Decimal
from typing import Final

from src.bigmath.domain.errors import DomainError
from src.bigmath.domain.precision_context import PrecisionContext
from src.bigmath.ops.context_utils import (
    CACHED_CONSTANT_PRECISION,
    DecimalLike,
    as_decimal,
    epsilon,
    expand_context,
    round_to,
    working_context,
    working_precision,
)

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# e с 40 значащими цифрами (неизменяемая константа уровня процесса)
E_40: Final[Decimal] = Decimal("2.718281828459045235360287471352662497761")

# Множитель точности для exp и power
EXP_PRECISION_FACTOR: Final[Decimal] = Decimal("1.2")

# Множитель точности для log
LOG_PRECISION_FACTOR: Final[Decimal] = Decimal("1.5")

# Дополнительные цифры при вычислении e рядом Тейлора
E_GUARD_DIGITS: Final[int] = 5

_ZERO: Final[Decimal] = Decimal(0)
_ONE: Final[Decimal] = Decimal(1)


# =============================================================================
# EULER'S NUMBER
# =============================================================================


def e(context: PrecisionContext) -> Decimal:
    """
    Число Эйлера (основание натурального логарифма).

    При precision <= CACHED_CONSTANT_PRECISION — литерал E_40, округлённый до
    контекста; иначе ряд Тейлора для exp(1).

    Returns:
        e, округлённое до context (ровно context.precision цифр)

    Examples:
        >>> e(PrecisionContext(precision=5))
        Decimal('2.7183')
    """
    if context.precision <= CACHED_CONSTANT_PRECISION:
        return round_to(E_40, context)

    working = expand_context(context, context.precision + E_GUARD_DIGITS)
    return round_to(small_exp(_ONE, working), context)


# =============================================================================
# EXPONENTIAL
# =============================================================================


def small_exp(x: Decimal, context: PrecisionContext) -> Decimal:
    """
    Ряд Тейлора exp(x) = Σ x^i / i! для малых x.

    Ряд останавливается, когда |term| < epsilon(context): скорость
    сходимости зависит от x, поэтому фиксированного числа итераций нет.

    Args:
        x: Малый аргумент (в exp всегда [0, 1))
        context: Рабочий контекст

    Returns:
        exp(x) в рабочем контексте
    """
    if x.is_zero():
        return _ONE

    c = context.to_decimal_context()
    eps = epsilon(context)

    term = x
    total = c.add(_ONE, x)
    i = 1
    while c.abs(term) >= eps:
        i += 1
        term = c.divide(c.multiply(term, x), i)
        total = c.add(total, term)

    return total


def exp(x: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    e в степени x.

    Целая часть |x| возводится через e(c)^k (целочисленная степень), дробная —
    через small_exp; для отрицательного x результат обращается.

    Рабочая точность: working_precision(context, 1.2) плюс число цифр k, чтобы
    погрешность e(c) не умножалась на k сверх рабочей точности.

    Args:
        x: Показатель степени
        context: Требуемый контекст точности

    Returns:
        e^x, округлённое до рабочего контекста

    Raises:
        DomainError: Если x — NaN/Infinity
        decimal.Overflow: Если e^|x| выходит за диапазон экспоненты Decimal

    Examples:
        >>> exp(Decimal(0), PrecisionContext(precision=10))
        Decimal('1')
    """
    x = as_decimal(x, "x")
    if x.is_zero():
        return _ONE

    abs_x = x.copy_abs()
    int_exp = int(abs_x)

    working = expand_context(
        context, working_precision(context, EXP_PRECISION_FACTOR) + len(str(int_exp))
    )
    c = working.to_decimal_context()

    # Значение e для целой части
    euler = e(working)
    fraction = c.subtract(abs_x, Decimal(int_exp))

    logger.debug(
        "exp: precision=%d integral_part=%d", working.precision, int_exp
    )

    result = c.multiply(c.power(euler, int_exp), small_exp(fraction, working))

    return c.divide(_ONE, result) if x < 0 else result


# =============================================================================
# LOGARITHM
# =============================================================================


def small_log(x: Decimal, context: PrecisionContext) -> Decimal:
    """
    Логарифм нормализованного x ∈ [1, e) через ряд atanh.

        t = (x - 1) / (x + 1)
        log(x) = 2 · Σ t^(2k+1) / (2k+1)

    Ряд останавливается, когда |t^(2k+1)| < epsilon(context).
    """
    c = context.to_decimal_context()
    eps = epsilon(context)

    term = c.divide(c.subtract(x, _ONE), c.add(x, _ONE))
    square = c.multiply(term, term)

    total = term
    denominator = 3
    while c.abs(term) >= eps:
        term = c.multiply(term, square)
        total = c.add(total, c.divide(term, denominator))
        denominator += 2

    # Финальное умножение на 2
    return c.add(total, total)


def log(x: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Натуральный логарифм положительного x.

    x приводится в [1, e) последовательным делением (для x < 1 — умножением)
    на e с накоплением целого смещения k; log(x) = k + small_log(m).

    Args:
        x: Положительный аргумент
        context: Требуемый контекст точности

    Returns:
        log(x), округлённый до рабочего контекста (working_precision(context, 1.5))

    Raises:
        DomainError: Если x <= 0 или NaN/Infinity

    Examples:
        >>> log(Decimal(1), PrecisionContext(precision=10))
        Decimal('0')
    """
    x = as_decimal(x, "x")
    if x <= 0:
        raise DomainError(f"log: argument must be positive, got {x}")

    working = working_context(context, LOG_PRECISION_FACTOR)
    c = working.to_decimal_context()
    euler = e(working)

    value = x
    offset = 0

    # Целая часть показателя
    while value >= euler:
        value = c.divide(value, euler)
        offset += 1
    # Коррекция для аргументов меньше 1
    while value < _ONE:
        value = c.multiply(value, euler)
        offset -= 1

    logger.debug("log: precision=%d offset=%d", working.precision, offset)

    return c.add(Decimal(offset), small_log(value, working))


# =============================================================================
# POWER
# =============================================================================


def power(x: DecimalLike, y: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    x в степени y для неотрицательного основания.

    |y| = p + f: x^p — целочисленная степень, x^f = exp(f · log(x));
    для отрицательного y результат обращается.

    Отрицательное основание не поддерживается ни для какого y (включая
    целые): результат был бы зависим от представления y.

    Args:
        x: Основание (>= 0)
        y: Показатель степени
        context: Требуемый контекст точности

    Returns:
        x^y, округлённое до рабочего контекста (working_precision(context, 1.2))

    Raises:
        DomainError: Если x < 0, или x == 0 и y < 0, или операнды NaN/Infinity

    Examples:
        >>> power(Decimal(2), Decimal(10), PrecisionContext(precision=10))
        Decimal('1024')
    """
    x = as_decimal(x, "x")
    y = as_decimal(y, "y")

    # Quick exits
    if x < 0:
        raise DomainError(f"power: negative base is not supported, got {x}")
    if x.is_zero():
        if y > 0:
            return _ZERO
        if y.is_zero():
            return _ONE
        raise DomainError(f"power: zero base with negative exponent {y}")

    working = working_context(context, EXP_PRECISION_FACTOR)
    c = working.to_decimal_context()

    # Целая и дробная части показателя отдельно
    abs_y = y.copy_abs()
    p = int(abs_y)
    f = c.subtract(abs_y, Decimal(p))

    integral = c.power(x, p)
    if f.is_zero():
        value = c.plus(integral)
    else:
        value = c.multiply(integral, exp(c.multiply(f, log(x, working)), working))

    # Знак показателя
    return c.divide(_ONE, value) if y < 0 else value
