"""
Trigonometry — sin, cos, tan и обратные им отношения (cot, sec, csc)

sin и cos вычисляются одновременно одним степенным рядом: ряды Тейлора
sin и cos дополняют друг друга, и общий член t_i = t_(i-1) · x / i
распределяется по i mod 4:

    i ≡ 0 → cos += t_i
    i ≡ 1 → sin += t_i
    i ≡ 2 → cos -= t_i
    i ≡ 3 → sin -= t_i

Редукция аргумента (до ряда):
1. Одна операция по модулю 2π: x = k · 2π + r, r ∈ [0, 2π).
   π вычисляется с дополнительными цифрами по числу целых цифр x, поэтому
   остаток точен до рабочей точности даже для больших |x|.
2. r >= π   → sin/cos(r) = -sin/cos(r - π)
3. r >= π/2 → sin(r) = cos(r - π/2), cos(r) = -sin(r - π/2)
4. r > π/4  → sin(r) = cos(π/2 - r), cos(r) = sin(π/2 - r)
5. Если после вычитаний остаток потерял старшие цифры (x рядом с k · π/2),
   редукция повторяется с π, расширенным на число потерянных цифр.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ряд останавливается при |t_i| < epsilon рабочего контекста
2. sin/cos рядом с k · π/2 сохраняют относительную точность
3. tan/sec в нечётном кратном π/2 → DomainError
4. cot/csc в кратном π → DomainError
5. "Кратное" определяется на рабочей точности: аргумент, совпадающий
   с k · π/2 после округления до рабочего контекста
"""

import logging
from decimal import ROUND_FLOOR, ROUND_HALF_EVEN, Decimal
from typing import Final, NamedTuple, Optional

from src.bigmath.domain.errors import DomainError
from src.bigmath.domain.precision_context import PrecisionContext
from src.bigmath.ops.circle_constant import pi
from src.bigmath.ops.context_utils import (
    DecimalLike,
    as_decimal,
    epsilon,
    expand_context,
    working_context,
)

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

# Дополнительные цифры рабочего контекста sin_and_cos
TRIG_GUARD_DIGITS: Final[int] = 4

# Множитель точности для tan, cot, sec, csc
TAN_PRECISION_FACTOR: Final[Decimal] = Decimal("1.2")

_ZERO: Final[Decimal] = Decimal(0)
_ONE: Final[Decimal] = Decimal(1)
_TWO: Final[Decimal] = Decimal(2)
_HALF: Final[Decimal] = Decimal("0.5")
_QUARTER: Final[Decimal] = Decimal("0.25")


# =============================================================================
# TYPES
# =============================================================================


class SinCos(NamedTuple):
    """Пара (sin, cos): индекс 0 — синус, индекс 1 — косинус."""

    sin: Decimal
    cos: Decimal


# =============================================================================
# RANGE REDUCTION
# =============================================================================


class _Folded(NamedTuple):
    """Редуцированный аргумент t ∈ [0, π/4] и применённые тождества."""

    t: Decimal
    negate: bool
    swap: bool
    complement: bool
    subtracted: bool


def _reduction_context(
    x: Decimal, working: PrecisionContext, extra_digits: int = 0
) -> PrecisionContext:
    """Рабочий контекст + по одной цифре на каждую целую цифру |x| + extra_digits."""
    integer_digits = max(x.adjusted() + 1, 0)
    return expand_context(working, working.precision + integer_digits + extra_digits)


def reduce_modulo_two_pi(
    x: Decimal, working: PrecisionContext, extra_digits: int = 0
) -> tuple[Decimal, Decimal]:
    """
    Редукция x по модулю 2π одной операцией.

    Args:
        x: Аргумент (любой конечный)
        working: Рабочий контекст
        extra_digits: Дополнительные цифры π сверх рабочей точности

    Returns:
        (r, π): r ∈ [0, 2π) и π в контексте редукции
        (working + целые цифры x + extra_digits)
    """
    reduction = _reduction_context(x, working, extra_digits)
    rc = reduction.to_decimal_context()

    pi_r = pi(reduction)
    two_pi = rc.multiply(_TWO, pi_r)

    if _ZERO <= x < two_pi:
        return rc.plus(x), pi_r

    k = int(rc.divide(x, two_pi).to_integral_value(rounding=ROUND_FLOOR))
    r = rc.subtract(x, rc.multiply(Decimal(k), two_pi))
    # Остаток может выйти за [0, 2π) на единицу последнего разряда частного
    if r < _ZERO:
        r = rc.add(r, two_pi)
    elif r >= two_pi:
        r = rc.subtract(r, two_pi)
    logger.debug("sin_and_cos: reduced by %d periods", k)

    return r, pi_r


def _fold(x: Decimal, working: PrecisionContext, extra_digits: int) -> _Folded:
    """Редукция x в [0, π/4] с запоминанием тождеств для sin/cos."""
    reduction = _reduction_context(x, working, extra_digits)
    rc = reduction.to_decimal_context()

    r, pi_r = reduce_modulo_two_pi(x, working, extra_digits)
    subtracted = r != x

    # sin/cos(π + r) = -sin/cos(r)
    negate = r >= pi_r
    if negate:
        r = rc.subtract(r, pi_r)

    # sin/cos(π/2 + r) = cos/-sin(r)
    half_pi = rc.multiply(pi_r, _HALF)
    swap = r >= half_pi
    if swap:
        r = rc.subtract(r, half_pi)

    # sin/cos(π/2 - t) = cos/sin(t)
    complement = r > rc.multiply(pi_r, _QUARTER)
    if complement:
        r = rc.subtract(half_pi, r)

    subtracted = subtracted or negate or swap or complement
    return _Folded(r, negate, swap, complement, subtracted)


def _reduce(x: Decimal, working: PrecisionContext) -> _Folded:
    """
    _fold с повтором, пока вычитания π съедают старшие цифры остатка.

    Абсолютная погрешность остатка ~10^-(working + extra_digits); для
    относительной точности t нужно ещё -t.adjusted() цифр. Потеря одной
    цифры покрывается TRIG_GUARD_DIGITS.
    """
    extra_digits = 0
    while True:
        folded = _fold(x, working, extra_digits)
        if not folded.subtracted:
            return folded
        if folded.t.is_zero():
            lost = working.precision + extra_digits
        else:
            lost = -folded.t.adjusted()
        if lost <= extra_digits + 1:
            return folded
        extra_digits = lost + 1
        logger.debug("sin_and_cos: cancellation, retry with %d extra digits", extra_digits)


def nearest_half_pi_multiple(x: Decimal, working: PrecisionContext) -> Optional[int]:
    """
    k, если x совпадает с k · π/2 на рабочей точности, иначе None.

    Examples:
        >>> working = PrecisionContext(precision=12)
        >>> nearest_half_pi_multiple(Decimal("1.57079632679"), working)
        1
        >>> nearest_half_pi_multiple(Decimal("1.6"), working) is None
        True
    """
    reduction = _reduction_context(x, working, 1)
    rc = reduction.to_decimal_context()
    half_pi = rc.multiply(pi(reduction), _HALF)

    k = int(rc.divide(x, half_pi).to_integral_value(rounding=ROUND_HALF_EVEN))

    c = working.to_decimal_context()
    if c.multiply(Decimal(k), half_pi) == c.plus(x):
        return k
    return None


# =============================================================================
# SIN & COS
# =============================================================================


def _sin_cos_series(x: Decimal, working: PrecisionContext) -> SinCos:
    """Совместный ряд Тейлора для редуцированного x ∈ [0, π/4]."""
    c = working.to_decimal_context()
    eps = epsilon(working)

    term = _ONE
    sine = _ZERO
    cosine = _ONE

    i = 0
    while c.abs(term) >= eps:
        i += 1
        term = c.divide(c.multiply(term, x), i)
        remainder = i % 4
        if remainder == 0:
            cosine = c.add(cosine, term)
        elif remainder == 1:
            sine = c.add(sine, term)
        elif remainder == 2:
            cosine = c.subtract(cosine, term)
        else:
            sine = c.subtract(sine, term)

    return SinCos(sine, cosine)


def sin_and_cos(x: DecimalLike, context: PrecisionContext) -> SinCos:
    """
    Синус и косинус x (в радианах) одновременно.

    Работает для любых конечных x; рядом с k · π/2 малая компонента
    сохраняет относительную точность.

    Args:
        x: Аргумент в радианах
        context: Требуемый контекст точности

    Returns:
        SinCos(sin, cos), округлённые до рабочего контекста
        (precision + TRIG_GUARD_DIGITS)

    Examples:
        >>> sin_and_cos(Decimal(0), PrecisionContext(precision=10))
        SinCos(sin=Decimal('0'), cos=Decimal('1'))
    """
    x = as_decimal(x, "x")
    working = expand_context(context, context.precision + TRIG_GUARD_DIGITS)
    c = working.to_decimal_context()

    t, negate, swap, complement, _ = _reduce(x, working)

    sine, cosine = _sin_cos_series(t, working)

    if complement:
        sine, cosine = cosine, sine
    if swap:
        sine, cosine = cosine, c.minus(sine)
    if negate:
        sine, cosine = c.minus(sine), c.minus(cosine)

    return SinCos(sine, cosine)


def sin(x: DecimalLike, context: PrecisionContext) -> Decimal:
    """Синус x (радианы)."""
    return sin_and_cos(x, context).sin


def cos(x: DecimalLike, context: PrecisionContext) -> Decimal:
    """Косинус x (радианы)."""
    return sin_and_cos(x, context).cos


# =============================================================================
# TAN & RECIPROCAL FUNCTIONS
# =============================================================================


def _ratio_parts(
    x: Decimal, context: PrecisionContext, name: str, forbid_odd: bool
) -> tuple[SinCos, PrecisionContext]:
    """
    Проверка полюсов и sin/cos в рабочем контексте
    (working_precision(context, 1.2)).

    forbid_odd=True  → полюса в нечётных кратных π/2 (tan, sec)
    forbid_odd=False → полюса в кратных π (cot, csc)
    """
    working = working_context(context, TAN_PRECISION_FACTOR)

    k = nearest_half_pi_multiple(x, working)
    if k is not None and (k % 2 == 1) == forbid_odd:
        where = "odd multiples of pi/2" if forbid_odd else "multiples of pi"
        raise DomainError(f"{name}: undefined at {where}, got {x}")

    c = working.to_decimal_context()
    sine, cosine = sin_and_cos(x, working)
    return SinCos(c.plus(sine), c.plus(cosine)), working


def _divide(
    numerator: Decimal, denominator: Decimal, working: PrecisionContext, name: str, x: Decimal
) -> Decimal:
    if denominator.is_zero():
        raise DomainError(f"{name}: undefined at {x}")
    return working.to_decimal_context().divide(numerator, denominator)


def tan(x: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Тангенс x (радианы): sin(x) / cos(x).

    sin и cos округляются до рабочего контекста
    (working_precision(context, 1.2)) перед делением.

    Raises:
        DomainError: Если x — нечётное кратное π/2 (на рабочей точности)

    Examples:
        >>> tan(Decimal(0), PrecisionContext(precision=10))
        Decimal('0')
    """
    x = as_decimal(x, "x")
    if x.is_zero():
        return _ZERO

    (sine, cosine), working = _ratio_parts(x, context, "tan", forbid_odd=True)
    return _divide(sine, cosine, working, "tan", x)


def cot(x: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Котангенс x (радианы): cos(x) / sin(x).

    Raises:
        DomainError: Если x — кратное π (включая 0)
    """
    x = as_decimal(x, "x")
    (sine, cosine), working = _ratio_parts(x, context, "cot", forbid_odd=False)
    return _divide(cosine, sine, working, "cot", x)


def sec(x: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Секанс x (радианы): 1 / cos(x).

    Raises:
        DomainError: Если x — нечётное кратное π/2
    """
    x = as_decimal(x, "x")
    (_, cosine), working = _ratio_parts(x, context, "sec", forbid_odd=True)
    return _divide(_ONE, cosine, working, "sec", x)


def csc(x: DecimalLike, context: PrecisionContext) -> Decimal:
    """
    Косеканс x (радианы): 1 / sin(x).

    Raises:
        DomainError: Если x — кратное π (включая 0)
    """
    x = as_decimal(x, "x")
    (sine, _), working = _ratio_parts(x, context, "csc", forbid_odd=False)
    return _divide(_ONE, sine, working, "csc", x)
