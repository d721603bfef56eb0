"""
Exceptions для bigmath

Все отказы библиотеки — domain errors: детерминированные, зависящие только
от входа, без retry и без частичных результатов.
"""


class DomainError(ValueError, ArithmeticError):
    """
    Аргумент вне области определения функции.

    Примеры:
    - principal_root: n < 2 или отрицательное подкоренное выражение
    - log: x <= 0
    - power: отрицательное основание, 0 в отрицательной степени
    - tan/sec: нечётное кратное π/2; cot/csc: кратное π
    - arcsin/arccos: |z| > 1
    - atan2(0, 0)
    - NaN/Infinity в качестве операнда

    Наследуется от ValueError (как math.sqrt(-1)) и от ArithmeticError
    (как остальные ошибки decimal-арифметики).
    """

    pass
