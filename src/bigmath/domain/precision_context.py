"""
PrecisionContext — Модель контекста точности

Immutable Pydantic модель пары (precision, rounding mode), управляющей
округлением всех промежуточных и финальных результатов.

Контекст никогда не мутируется: расширение точности ("expand") создаёт
новый контекст с большей точностью и тем же режимом округления.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. precision > 0 (валидируется при создании)
2. Расширенный контекст сохраняет rounding исходного
3. Арифметика выполняется только через decimal.Context, построенный из
   модели (thread-local decimal.getcontext() не используется)
"""

import decimal
from enum import Enum
from typing import Final

from pydantic import BaseModel, Field


# =============================================================================
# ENUMS
# =============================================================================


class RoundingMode(str, Enum):
    """
    Режим округления.

    Значения совпадают с константами модуля decimal, поэтому
    RoundingMode.HALF_EVEN.value можно передавать прямо в decimal.Context.
    """

    UP = decimal.ROUND_UP
    DOWN = decimal.ROUND_DOWN
    CEILING = decimal.ROUND_CEILING
    FLOOR = decimal.ROUND_FLOOR
    HALF_UP = decimal.ROUND_HALF_UP
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    ZERO_FIVE_UP = decimal.ROUND_05UP


# =============================================================================
# PRECISION CONTEXT
# =============================================================================


class PrecisionContext(BaseModel):
    """
    Контекст точности: количество значащих цифр + режим округления.

    Examples:
        >>> ctx = PrecisionContext(precision=30)
        >>> ctx.rounding
        <RoundingMode.HALF_EVEN: 'ROUND_HALF_EVEN'>
        >>> ctx.expand(36).precision
        36
    """

    precision: int = Field(..., gt=0, description="Количество значащих цифр")
    rounding: RoundingMode = Field(
        default=RoundingMode.HALF_EVEN, description="Режим округления"
    )

    model_config = {"frozen": True}

    def expand(self, new_precision: int) -> "PrecisionContext":
        """
        Новый контекст с new_precision и тем же режимом округления.

        Вызывающий код передаёт new_precision >= precision; здесь это не
        проверяется.
        """
        return PrecisionContext(precision=new_precision, rounding=self.rounding)

    def to_decimal_context(self) -> decimal.Context:
        """
        decimal.Context для арифметики в этом контексте.

        Диапазон экспоненты максимальный: переполнение возможно только
        на действительно астрономических значениях.
        """
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding.value,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
        )

    @classmethod
    def from_decimal_context(cls, context: decimal.Context) -> "PrecisionContext":
        """Конверсия decimal.Context → PrecisionContext (precision и rounding)."""
        return cls(precision=context.prec, rounding=RoundingMode(context.rounding))


# =============================================================================
# PRESETS
# =============================================================================

# IEEE 754-2008 decimal interchange formats
DECIMAL32: Final[PrecisionContext] = PrecisionContext(precision=7)
DECIMAL64: Final[PrecisionContext] = PrecisionContext(precision=16)
DECIMAL128: Final[PrecisionContext] = PrecisionContext(precision=34)
