"""
Context Utility — расширение точности и epsilon

Примитивы, от которых зависят все остальные модули:
- Расширение контекста (expand) с сохранением режима округления
- Масштабирование точности на множитель (×1.2, ×1.5) без float-погрешности
- Epsilon = 10^-(precision+1) — порог сходимости рядов и итераций
- Округление результата до контекста
- Строгая конверсия операндов в Decimal

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Все функции чистые, без состояния
2. Операнды конвертируются точно (без округления)
3. NaN/Infinity никогда не попадают в алгоритмы (DomainError)
"""

from decimal import Decimal, InvalidOperation
from typing import Final, Union

from src.bigmath.domain.errors import DomainError
from src.bigmath.domain.precision_context import PrecisionContext

# Допустимые типы операндов публичных функций
DecimalLike = Union[Decimal, int, str]

# =============================================================================
# CONSTANTS
# =============================================================================

# Точность, до которой π и e берутся из закэшированных 40-значных литералов.
# Общий порог для обеих констант.
CACHED_CONSTANT_PRECISION: Final[int] = 40

# Минимальное число guard-цифр рабочего контекста.
# При precision <= 4 множитель 1.2 не добавляет ни одной цифры.
MIN_GUARD_DIGITS: Final[int] = 5


# =============================================================================
# РАСШИРЕНИЕ КОНТЕКСТА
# =============================================================================


def expand_context(context: PrecisionContext, new_precision: int) -> PrecisionContext:
    """
    Расширение контекста: новая точность, тот же режим округления.

    Args:
        context: Исходный контекст
        new_precision: Требуемая точность (по соглашению >= context.precision)

    Returns:
        Новый PrecisionContext

    Examples:
        >>> expand_context(PrecisionContext(precision=30), 36).precision
        36
    """
    return context.expand(new_precision)


def scaled_precision(context: PrecisionContext, factor: Decimal) -> int:
    """
    Точность, умноженная на factor и усечённая до целого.

    Вычисляется через точную дробь factor: int(34 * 1.2) == 40 без сюрпризов
    двоичного float и без ambient decimal-контекста.

    Examples:
        >>> scaled_precision(PrecisionContext(precision=34), Decimal("1.2"))
        40
        >>> scaled_precision(PrecisionContext(precision=3), Decimal("1.2"))
        3
    """
    numerator, denominator = factor.as_integer_ratio()
    return context.precision * numerator // denominator


def working_precision(context: PrecisionContext, factor: Decimal) -> int:
    """
    Точность рабочего контекста: precision × factor, но не меньше
    precision + MIN_GUARD_DIGITS.

    Examples:
        >>> working_precision(PrecisionContext(precision=30), Decimal("1.2"))
        36
        >>> working_precision(PrecisionContext(precision=2), Decimal("1.2"))
        7
    """
    return max(scaled_precision(context, factor), context.precision + MIN_GUARD_DIGITS)


def working_context(context: PrecisionContext, factor: Decimal) -> PrecisionContext:
    """Рабочий контекст с точностью working_precision(context, factor)."""
    return expand_context(context, working_precision(context, factor))


def epsilon(context: PrecisionContext) -> Decimal:
    """
    Порог сходимости: 1 × 10^-(precision + 1).

    Examples:
        >>> epsilon(PrecisionContext(precision=5))
        Decimal('0.000001')
    """
    return Decimal((0, (1,), -(context.precision + 1)))


def round_to(value: Decimal, context: PrecisionContext) -> Decimal:
    """
    Округление значения до точности и режима округления контекста.

    Examples:
        >>> round_to(Decimal("3.14159"), PrecisionContext(precision=3))
        Decimal('3.14')
    """
    return context.to_decimal_context().plus(value)


# =============================================================================
# ОПЕРАНДЫ
# =============================================================================


def as_decimal(value: DecimalLike, name: str = "value") -> Decimal:
    """
    Точная конверсия операнда в конечный Decimal.

    Args:
        value: Decimal, int или строка с десятичной записью
        name: Имя параметра (для сообщения об ошибке)

    Returns:
        Decimal с тем же значением (без округления)

    Raises:
        DomainError: Если значение NaN/Infinity или строка не является числом
        TypeError: Если тип не поддерживается (например, float)
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool):
        raise TypeError(f"{name} must be Decimal, int or str, got bool")
    elif isinstance(value, (int, str)):
        try:
            result = Decimal(value)
        except InvalidOperation as e:
            raise DomainError(f"{name} is not a decimal number: {value!r}") from e
    else:
        raise TypeError(
            f"{name} must be Decimal, int or str, got {type(value).__name__}"
        )

    if not result.is_finite():
        raise DomainError(f"{name} must be finite (not NaN/Infinity), got {result}")

    return result
