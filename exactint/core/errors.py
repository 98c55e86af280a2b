"""
Errors — таксономия ошибок exactint

Все ошибки терминальны для операции, которая их подняла: частичных
результатов нет, повторов внутри ядра нет. Ни одна операция не подменяет
точный результат приближённым.

Каждый класс дополнительно наследует встроенное исключение Python, чтобы
вызывающий код мог ловить привычные семейства (TypeError, ValueError,
ZeroDivisionError, OverflowError).
"""


class ExactIntError(Exception):
    """Базовый класс всех ошибок exactint."""
    pass


class DomainTypeError(ExactIntError, TypeError):
    """
    Type condition: смешение доменов BigInteger и float.

    Поднимается Domain Guard, когда оператор вне разрешённого набора
    сравнений получает один BigInteger и один float операнд.
    """
    pass


class IntRangeError(ExactIntError, ValueError):
    """
    Range condition.

    - from_float получил дробное значение или NaN/Inf
    - power получил отрицательную степень
    - as_int_n / as_uint_n получили невалидную ширину
    - radix вне диапазона 2..36
    """
    pass


class DivisionByZeroError(IntRangeError, ZeroDivisionError):
    """Range condition: делитель равен нулю (бесконечностей в домене нет)."""
    pass


class IntSyntaxError(ExactIntError, ValueError):
    """Syntax condition: некорректный текст числа при парсинге."""
    pass


class ResourceLimitError(ExactIntError, OverflowError):
    """
    Resource condition: результат превышает max_bit_length.

    Поднимается до выделения памяти, если превышение доказуемо заранее,
    иначе сразу после вычисления.
    """
    pass
