"""
Юнит-тесты для модуля trigonometry

Проверяет:
1. Известные значения sin/cos/tan
2. sin² + cos² = 1
3. Редукцию аргумента: отрицательные и большие x (одна операция mod 2π)
4. Полюса tan/sec (нечётные кратные π/2) и cot/csc (кратные π)
5. SinCos: доступ по имени и по индексу
6. Относительную точность sin/cos рядом с k · π/2
7. Малую точность (1-5 цифр) рядом с полюсами
"""

import decimal
from decimal import Decimal

import pytest

from src.bigmath.domain import DomainError, PrecisionContext
from src.bigmath.ops.circle_constant import pi
from src.bigmath.ops.context_utils import round_to
from src.bigmath.ops.trigonometry import (
    SinCos,
    cos,
    cot,
    csc,
    nearest_half_pi_multiple,
    reduce_modulo_two_pi,
    sec,
    sin,
    sin_and_cos,
    tan,
)

CTX25 = PrecisionContext(precision=25)
CTX30 = PrecisionContext(precision=30)

SIN_1 = Decimal("0.8414709848078965066525023")
COS_1 = Decimal("0.5403023058681397174009366")

# k · π/2, округлённые до 30 цифр (не полюса на рабочей точности)
HALF_PI_30 = Decimal("1.57079632679489661923132169164")
PI_30 = Decimal("3.14159265358979323846264338328")
QUARTER_PI_30 = Decimal("0.785398163397448309615660845820")


def _half_pi_multiple_60(k: int) -> Decimal:
    """k · π/2 с 60 цифрами: неотличимо от полюса на рабочей точности."""
    c = decimal.Context(prec=60)
    return c.divide(c.multiply(k, pi(PrecisionContext(precision=60))), 2)


def _wide() -> decimal.Context:
    return decimal.Context(prec=80)


# =============================================================================
# SIN & COS
# =============================================================================


class TestSinAndCos:
    """Тесты sin_and_cos"""

    def test_zero(self) -> None:
        result = sin_and_cos(Decimal(0), CTX25)
        assert result == SinCos(Decimal(0), Decimal(1))

    def test_named_and_indexed_access(self) -> None:
        result = sin_and_cos(Decimal(1), CTX25)
        assert result[0] == result.sin
        assert result[1] == result.cos
        sine, cosine = result
        assert (sine, cosine) == (result.sin, result.cos)

    def test_one(self) -> None:
        result = sin_and_cos(Decimal(1), CTX25)
        assert round_to(result.sin, CTX25) == SIN_1
        assert round_to(result.cos, CTX25) == COS_1

    def test_accessors(self) -> None:
        assert sin(Decimal(1), CTX25) == sin_and_cos(Decimal(1), CTX25).sin
        assert cos(Decimal(1), CTX25) == sin_and_cos(Decimal(1), CTX25).cos

    def test_negative_argument(self) -> None:
        """sin(-x) = -sin(x), cos(-x) = cos(x)"""
        result = sin_and_cos(Decimal(-1), CTX25)
        assert round_to(result.sin, CTX25) == -SIN_1
        assert round_to(result.cos, CTX25) == COS_1

    def test_sin_pi_over_six(self) -> None:
        x = _wide().divide(pi(PrecisionContext(precision=40)), 6)
        assert round_to(sin(x, CTX25), CTX25) == Decimal("0.5")

    @pytest.mark.parametrize(
        "x",
        [
            Decimal("0.001"),
            Decimal("0.7"),
            Decimal("2"),
            Decimal("3.5"),
            Decimal("5"),
            Decimal("-4.2"),
            Decimal("123.456"),
        ],
    )
    def test_pythagorean_identity(self, x: Decimal) -> None:
        """sin² + cos² = 1 во всех квадрантах"""
        sine, cosine = sin_and_cos(x, CTX25)
        c = CTX30.to_decimal_context()
        total = c.add(c.multiply(sine, sine), c.multiply(cosine, cosine))
        assert round_to(total, CTX25) == 1

    @pytest.mark.parametrize("periods", [1, 100, 10**12])
    def test_periodicity_large_arguments(self, periods: int) -> None:
        """sin(1 + 2πk) == sin(1) даже для огромных k"""
        two_pi = _wide().multiply(2, pi(PrecisionContext(precision=60)))
        x = _wide().add(1, _wide().multiply(periods, two_pi))
        result = sin_and_cos(x, CTX25)
        assert round_to(result.sin, CTX25) == SIN_1
        assert round_to(result.cos, CTX25) == COS_1

    def test_precision_of_result(self) -> None:
        """Результат несёт 4 guard-цифры"""
        result = sin(Decimal(1), CTX25)
        assert len(result.as_tuple().digits) == 29


class TestNearMultiplesOfHalfPi:
    """Малая компонента sin/cos рядом с k · π/2 сохраняет все цифры"""

    @pytest.mark.parametrize(
        "x,expected_sin",
        [
            (Decimal("3.1415926535897932"), Decimal("3.8462643383279502884E-17")),
            (Decimal("314.15926535897932384626"), Decimal("-4.3383279502884197169E-21")),
            (Decimal("-3.1415926535897932"), Decimal("-3.8462643383279502884E-17")),
        ],
    )
    def test_sin_near_multiple_of_pi(self, x: Decimal, expected_sin: Decimal) -> None:
        ctx = PrecisionContext(precision=20)
        assert round_to(sin(x, ctx), ctx) == expected_sin

    def test_cos_near_half_pi(self) -> None:
        ctx = PrecisionContext(precision=20)
        assert round_to(cos(Decimal("1.5707963267948966"), ctx), ctx) == Decimal(
            "1.9231321691639751442E-17"
        )

    def test_large_component_unaffected(self) -> None:
        """Большая компонента рядом с π остаётся ≈ -1"""
        ctx = PrecisionContext(precision=20)
        assert round_to(cos(Decimal("3.1415926535897932"), ctx), ctx) == -1


class TestRangeReduction:
    """Тесты редукции аргумента"""

    def test_already_reduced(self) -> None:
        r, _ = reduce_modulo_two_pi(Decimal("1.5"), CTX30)
        assert r == Decimal("1.5")

    @pytest.mark.parametrize(
        "x", [Decimal(-1), Decimal(7), Decimal("-1000.25"), Decimal("1E+15")]
    )
    def test_remainder_in_range(self, x: Decimal) -> None:
        r, pi_w = reduce_modulo_two_pi(x, CTX30)
        assert 0 <= r < CTX30.to_decimal_context().multiply(2, pi_w)

    def test_negative_wraps(self) -> None:
        r, pi_w = reduce_modulo_two_pi(Decimal(-1), CTX30)
        c = CTX30.to_decimal_context()
        expected = c.subtract(c.multiply(2, pi_w), 1)
        assert abs(r - expected) < Decimal("1E-28")

    def test_nearest_half_pi_multiple(self) -> None:
        """Совпадение с k · π/2 проверяется на рабочей точности"""
        working = CTX30.expand(36)
        assert nearest_half_pi_multiple(_half_pi_multiple_60(1), working) == 1
        assert nearest_half_pi_multiple(_half_pi_multiple_60(2), working) == 2
        assert nearest_half_pi_multiple(_half_pi_multiple_60(-1), working) == -1
        assert nearest_half_pi_multiple(Decimal(0), working) == 0
        assert nearest_half_pi_multiple(HALF_PI_30, working) is None
        assert nearest_half_pi_multiple(Decimal("1.57"), working) is None


# =============================================================================
# TAN & RECIPROCALS
# =============================================================================


class TestTan:
    """Тесты tan"""

    def test_zero(self) -> None:
        assert tan(Decimal(0), CTX25) == 0

    def test_one(self) -> None:
        ctx = PrecisionContext(precision=20)
        assert round_to(tan(Decimal(1), ctx), ctx) == Decimal("1.5574077246549022305")

    def test_quarter_pi(self) -> None:
        assert round_to(tan(QUARTER_PI_30, CTX25), CTX25) == 1

    def test_odd_function(self) -> None:
        expected = Decimal("0.5463024898437905132551795")
        assert round_to(tan(Decimal("0.5"), CTX25), CTX25) == expected
        assert round_to(tan(Decimal("-0.5"), CTX25), CTX25) == -expected

    @pytest.mark.parametrize("k", [1, -1, 3])
    def test_pole(self, k: int) -> None:
        """tan в нечётном кратном π/2 → DomainError"""
        with pytest.raises(DomainError):
            tan(_half_pi_multiple_60(k), CTX30)

    def test_rounded_half_pi_is_not_pole(self) -> None:
        """π/2, округлённое до 30 цифр, отличается от полюса: tan ≈ -1/δ"""
        value = tan(HALF_PI_30, CTX30)
        assert Decimal("-4.1E+30") < value < Decimal("-4.0E+30")

    @pytest.mark.parametrize(
        "x,precision,expected",
        [
            (Decimal("1.6"), 1, Decimal("-3E+1")),
            (Decimal("1.6"), 2, Decimal("-34")),
            (Decimal("1.6"), 3, Decimal("-34.2")),
            (Decimal("1.6"), 5, Decimal("-34.233")),
            (Decimal("-1.5874"), 2, Decimal("60")),
            (Decimal(1), 1, Decimal("2")),
            (Decimal(1), 3, Decimal("1.56")),
            (Decimal(1), 5, Decimal("1.5574")),
        ],
    )
    def test_low_precision(self, x: Decimal, precision: int, expected: Decimal) -> None:
        """Рядом с π/2 на малой точности: конечное значение, верные цифры"""
        ctx = PrecisionContext(precision=precision)
        assert round_to(tan(x, ctx), ctx) == expected

    def test_near_pole_is_finite(self) -> None:
        """Рядом с полюсом (на точности контекста) значение конечно и велико"""
        assert tan(Decimal("1.5707963"), CTX30) > Decimal("1E+7")

    def test_multiple_of_pi_allowed(self) -> None:
        """tan(π) ≈ 0, не полюс"""
        assert abs(tan(PI_30, CTX30)) < Decimal("1E-28")

    def test_multiple_of_pi_relative_accuracy(self) -> None:
        """tan(π30) = tan(π30 - π): все цифры малого значения верны"""
        ctx = PrecisionContext(precision=20)
        assert round_to(tan(PI_30, ctx), ctx) == Decimal("4.9711580283060062489E-31")


class TestReciprocalFunctions:
    """Тесты cot, sec, csc"""

    def test_sec_zero(self) -> None:
        assert round_to(sec(Decimal(0), CTX25), CTX25) == 1

    def test_csc_half_pi(self) -> None:
        assert round_to(csc(HALF_PI_30, CTX30), CTX25) == 1

    def test_cot_quarter_pi(self) -> None:
        assert round_to(cot(QUARTER_PI_30, CTX25), CTX25) == 1

    def test_cot_at_half_pi_is_zero(self) -> None:
        assert abs(cot(HALF_PI_30, CTX30)) < Decimal("1E-28")

    def test_reciprocal_of_tan(self) -> None:
        x = Decimal("0.7")
        c = CTX30.to_decimal_context()
        assert round_to(c.multiply(tan(x, CTX25), cot(x, CTX25)), CTX25) == 1

    def test_sec_pole(self) -> None:
        with pytest.raises(DomainError):
            sec(_half_pi_multiple_60(1), CTX30)

    @pytest.mark.parametrize("k", [0, 2, -2])
    def test_cot_csc_poles(self, k: int) -> None:
        """cot/csc в кратном π (включая 0) → DomainError"""
        x = _half_pi_multiple_60(k)
        with pytest.raises(DomainError):
            cot(x, CTX30)
        with pytest.raises(DomainError):
            csc(x, CTX30)
