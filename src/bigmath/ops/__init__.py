"""
Elementary-function algorithms over arbitrary-precision Decimal.

Модули (в порядке зависимостей):
- context_utils        : расширение контекста, epsilon, округление
- roots                : главный корень n-й степени (Newton-Raphson)
- circle_constant      : π (Gauss–Legendre AGM)
- exp_log              : e, exp, log, power
- trigonometry         : sin, cos, tan, cot, sec, csc
- inverse_trigonometry : arcsin, arccos, arctan, atan2
"""
