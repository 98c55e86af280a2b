"""
Тесты для BigInteger и BigIntEngine

Проверяет поверхность операторов Python:
1. Каноничность и неизменяемость значения
2. Арифметика / битовые операции с int хоста как литералом
3. Смешение с float → DomainTypeError (кроме сравнений)
4. Точные сравнения с float, hash
5. Явные мосты: str / format / float / int
6. Конфигурируемый движок: resource ceiling, политика сравнений, логирование
"""

import dataclasses
import logging
import math

import pytest

from exactint import (
    DEFAULT_ENGINE,
    MINUS_ONE,
    ONE,
    ZERO,
    BigIntEngine,
    BigInteger,
    CrossDomainComparison,
    DivisionByZeroError,
    DomainTypeError,
    EngineConfig,
    IntRangeError,
    IntSyntaxError,
    ResourceLimitError,
    Sign,
    bigint,
)
from exactint.core.domain import big_integer as big_integer_module


# =============================================================================
# ЗНАЧЕНИЕ
# =============================================================================


class TestValue:
    """Тесты представления BigInteger"""

    def test_constants(self):
        assert ZERO.sign == Sign.ZERO and ZERO.magnitude == ()
        assert ONE.to_int() == 1
        assert MINUS_ONE.to_int() == -1

    def test_non_canonical_rejected(self):
        with pytest.raises(ValueError, match="non-canonical"):
            BigInteger(Sign.POSITIVE, (1, 0))
        with pytest.raises(ValueError, match="inconsistent"):
            BigInteger(Sign.NEGATIVE, ())
        with pytest.raises(ValueError, match="inconsistent"):
            BigInteger(Sign.ZERO, (1,))
        with pytest.raises(ValueError, match="tuple"):
            BigInteger(Sign.POSITIVE, [1])

    def test_immutable(self):
        value = bigint(5)
        with pytest.raises(dataclasses.FrozenInstanceError):
            value.sign = Sign.NEGATIVE

    def test_from_int_rejects_non_int(self):
        with pytest.raises(TypeError):
            BigInteger.from_int(1.0)
        with pytest.raises(TypeError):
            BigInteger.from_int(True)

    def test_constructors(self):
        assert BigInteger.parse("-0x1f").to_int() == -31
        assert BigInteger.parse("zz", 36).to_int() == 1295
        assert BigInteger.from_float(-8.0).to_int() == -8

    def test_bit_length(self):
        assert bigint(0).bit_length() == 0
        assert bigint(-(2 ** 100)).bit_length() == 101


# =============================================================================
# АРИФМЕТИКА
# =============================================================================


class TestArithmeticOperators:
    """Операторы + - * / % ** divmod"""

    def test_basic(self):
        a, b = bigint(2 ** 100), bigint(-12345)
        assert (a + b).to_int() == 2 ** 100 - 12345
        assert (a - b).to_int() == 2 ** 100 + 12345
        assert (a * b).to_int() == 2 ** 100 * -12345
        assert (-a).to_int() == -(2 ** 100)
        assert abs(b).to_int() == 12345

    def test_truncating_division(self):
        """/ и % усекают к нулю, как BigInt"""
        assert (bigint(-7) / bigint(2)).to_int() == -3
        assert (bigint(-7) % bigint(2)).to_int() == -1
        q, r = divmod(bigint(-7), 2)
        assert (q.to_int(), r.to_int()) == (-3, -1)

    def test_host_int_on_either_side(self):
        assert (bigint(5) + 3).to_int() == 8
        assert (3 + bigint(5)).to_int() == 8
        assert (10 - bigint(4)).to_int() == 6
        assert (2 * bigint(21)).to_int() == 42
        assert (100 / bigint(7)).to_int() == 14
        assert (100 % bigint(7)).to_int() == 2
        assert (2 ** bigint(10)).to_int() == 1024
        assert divmod(100, bigint(7)) == (bigint(14), bigint(2))

    def test_power(self):
        assert (bigint(2) ** 200).to_int() == 2 ** 200
        assert (bigint(0) ** 0).to_int() == 1
        with pytest.raises(IntRangeError):
            bigint(2) ** -1

    def test_three_argument_pow_unsupported(self):
        with pytest.raises(TypeError):
            pow(bigint(2), 10, 7)

    def test_floor_division_unsupported(self):
        with pytest.raises(TypeError):
            bigint(7) // bigint(2)

    def test_division_by_zero(self):
        with pytest.raises(DivisionByZeroError):
            bigint(1) / 0
        with pytest.raises(ZeroDivisionError):
            bigint(1) % bigint(0)

    def test_unary_plus_rejected(self):
        with pytest.raises(DomainTypeError, match="unary plus"):
            +bigint(1)

    @pytest.mark.parametrize(
        "operation",
        [
            lambda x: x + 1.0,
            lambda x: 1.0 + x,
            lambda x: x - 0.5,
            lambda x: x * 2.0,
            lambda x: 2.0 * x,
            lambda x: x / 2.0,
            lambda x: x % 2.0,
            lambda x: x ** 2.0,
            lambda x: 2.0 ** x,
            lambda x: divmod(x, 2.0),
        ],
    )
    def test_mixing_with_float_rejected(self, operation):
        with pytest.raises(DomainTypeError, match="cannot mix BigInteger and float"):
            operation(bigint(3))

    def test_unknown_types_return_not_implemented(self):
        with pytest.raises(TypeError):
            bigint(1) + None
        with pytest.raises(TypeError):
            bigint(1) * None
        with pytest.raises(TypeError):
            bigint(1) + True

    def test_engine_ceiling_through_operators(self):
        with pytest.raises(ResourceLimitError):
            bigint(2) ** (2 ** 40)


# =============================================================================
# БИТОВЫЕ ОПЕРАЦИИ
# =============================================================================


class TestBitwiseOperators:
    """Операторы & | ^ ~ << >>"""

    def test_basic(self):
        a, b = bigint(-12), bigint(2 ** 70 + 5)
        assert (a & b).to_int() == -12 & (2 ** 70 + 5)
        assert (a | b).to_int() == -12 | (2 ** 70 + 5)
        assert (a ^ b).to_int() == -12 ^ (2 ** 70 + 5)
        assert (~a).to_int() == 11

    def test_shifts(self):
        assert (bigint(1) << 100).to_int() == 2 ** 100
        assert (bigint(-5) >> 1).to_int() == -3
        assert (bigint(40) << -3).to_int() == 5
        assert (bigint(1) << bigint(3)).to_int() == 8
        assert (1 << bigint(3)).to_int() == 8
        assert (256 >> bigint(4)).to_int() == 16

    def test_mixing_with_float_rejected(self):
        for operation in (
            lambda x: x & 1.0,
            lambda x: 1.0 | x,
            lambda x: x ^ 1.0,
            lambda x: x << 1.0,
            lambda x: 1.0 >> x,
        ):
            with pytest.raises(DomainTypeError):
                operation(bigint(3))

    def test_no_unsigned_shift(self):
        with pytest.raises(DomainTypeError, match="no unsigned right shift"):
            DEFAULT_ENGINE.unsigned_shift_right(bigint(-1), 1)


# =============================================================================
# СРАВНЕНИЯ
# =============================================================================


class TestComparisons:
    """Точные сравнения, включая float"""

    def test_same_domain(self):
        assert bigint(-5) < bigint(3)
        assert bigint(3) <= 3
        assert bigint(2 ** 100) > 2 ** 99
        assert bigint(7) >= bigint(7)
        assert bigint(7) == 7
        assert bigint(7) != bigint(8)

    def test_exact_against_float(self):
        """BigInt(2^53 - 1) < 2^53 как float"""
        assert bigint(9007199254740991) < 9007199254740992.0
        assert not bigint(9007199254740991) == 9007199254740992.0
        assert 9007199254740992.0 > bigint(9007199254740991)
        assert bigint(2 ** 100 + 1) > 2.0 ** 100
        assert bigint(2 ** 100 + 1) != 2.0 ** 100

    def test_float_on_left(self):
        assert 1.5 < bigint(2)
        assert 2.5 >= bigint(2)
        assert 2.0 == bigint(2)
        assert not 2.5 <= bigint(2)

    def test_nan_unordered(self):
        nan = float("nan")
        value = bigint(1)
        assert not value < nan
        assert not value <= nan
        assert not value > nan
        assert not value >= nan
        assert not value == nan
        assert value != nan
        assert not nan < value

    def test_infinities(self):
        assert bigint(2 ** 5000) < math.inf
        assert -math.inf < bigint(-(2 ** 5000))

    def test_hash_consistent_with_equality(self):
        assert hash(bigint(4)) == hash(4) == hash(4.0)
        assert {bigint(4): "x"}[4] == "x"
        assert len({bigint(1), 1, 1.0}) == 1

    def test_sorting_mixed(self):
        values = [bigint(3), 2.5, bigint(-1), 0.0, bigint(2 ** 64)]
        assert sorted(values) == [bigint(-1), 0.0, 2.5, bigint(3), bigint(2 ** 64)]

    def test_comparison_with_other_types(self):
        assert bigint(1) != "1"
        assert not bigint(1) == None  # noqa: E711
        with pytest.raises(TypeError):
            bigint(1) < "2"

    def test_truth(self):
        assert not bigint(0)
        assert bigint(-1)
        assert bigint(2 ** 100)


# =============================================================================
# ЯВНЫЕ МОСТЫ
# =============================================================================


class TestBridges:
    """str / format / float / int / конкатенация"""

    def test_str_and_repr(self):
        assert str(bigint(-42)) == "-42"
        assert repr(bigint(10 ** 20)) == "BigInteger(100000000000000000000)"

    def test_format(self):
        assert format(bigint(255), "x") == "ff"
        assert format(bigint(255), "X") == "FF"
        assert format(bigint(8), "o") == "10"
        assert format(bigint(5), "b") == "101"
        assert format(bigint(42), ">6d") == "    42"
        assert f"{bigint(7)}" == "7"

    @pytest.mark.parametrize(
        "value, spec",
        [
            (-5, "05d"),
            (5, "08b"),
            (-5, "08b"),
            (255, "#x"),
            (-255, "#X"),
            (5, "+d"),
            (-5, "+d"),
            (1234, ",d"),
            (-(10 ** 25), "_d"),
            (2 ** 70, "#o"),
            (-42, "^9d"),
            (-42, "=+9"),
            (0, "04x"),
        ],
    )
    def test_format_matches_int(self, value, spec):
        """Ширина, заполнение нулями, знак и разделители как у int."""
        assert format(bigint(value), spec) == format(value, spec)

    @pytest.mark.parametrize("spec", ["f", ".2f", "e", "G", "%"])
    def test_format_float_presentation_rejected(self, spec):
        """Типы float не конвертируют значение неявно."""
        with pytest.raises(DomainTypeError, match="float presentation type"):
            format(bigint(3), spec)

    def test_to_string_radix(self):
        assert bigint(-255).to_string(16) == "-ff"
        with pytest.raises(IntRangeError):
            bigint(1).to_string(37)

    def test_float_is_explicit_lossy_bridge(self):
        assert float(bigint(2 ** 53 + 1)) == 2.0 ** 53
        assert bigint(3).to_float() == 3.0

    def test_int_and_index(self):
        value = bigint(2 ** 70)
        assert int(value) == 2 ** 70
        assert [10, 20, 30][bigint(1)] == 20
        assert hex(bigint(255)) == "0xff"

    def test_string_concatenation(self):
        assert "n=" + bigint(10 ** 20) == "n=100000000000000000000"
        assert bigint(-3) + "!" == "-3!"

    def test_wraps(self):
        assert bigint(-1).as_uint_n(64).to_int() == 2 ** 64 - 1
        assert bigint(2 ** 63).as_int_n(64).to_int() == -(2 ** 63)

    def test_bigint_constructor(self):
        assert bigint("0x100") == 256
        assert bigint(4.0) == 4
        with pytest.raises(IntRangeError):
            bigint(1.5)
        with pytest.raises(IntSyntaxError):
            bigint("0640")
        with pytest.raises(DomainTypeError):
            bigint(True)


# =============================================================================
# КОНФИГУРИРУЕМЫЙ ДВИЖОК
# =============================================================================


class TestBigIntEngine:
    """Тесты BigIntEngine с пользовательской конфигурацией"""

    def test_default_engine_config(self):
        assert DEFAULT_ENGINE.config == EngineConfig()

    def test_operators_resolve_default_engine_once(self):
        """Операторы берут DEFAULT_ENGINE из кэша модуля"""
        bigint(1) + 1
        assert big_integer_module._ENGINE is DEFAULT_ENGINE
        assert big_integer_module._engine() is big_integer_module._engine()

    def test_small_ceiling(self):
        engine = BigIntEngine(EngineConfig(max_bit_length=64))
        assert engine.multiply(2 ** 32, 2 ** 31).to_int() == 2 ** 63
        with pytest.raises(ResourceLimitError):
            engine.multiply(2 ** 40, 2 ** 40)
        with pytest.raises(ResourceLimitError):
            engine.shift_left(1, 64)
        with pytest.raises(ResourceLimitError):
            engine.power(2, 64)
        with pytest.raises(ResourceLimitError):
            engine.as_uint_n(-1, 65)

    def test_ceiling_hit_logged_at_warning(self, caplog):
        engine = BigIntEngine(EngineConfig(max_bit_length=64))
        with caplog.at_level(logging.WARNING, logger="exactint.core.engine"):
            with pytest.raises(ResourceLimitError):
                engine.power(3, 100)
        assert any(
            record.levelno == logging.WARNING and "power" in record.getMessage()
            for record in caplog.records
        )

    def test_karatsuba_cutoff_does_not_change_result(self):
        a, b = 7 ** 3000, 11 ** 2500
        small = BigIntEngine(EngineConfig(karatsuba_cutoff=4))
        large = BigIntEngine(EngineConfig(karatsuba_cutoff=10 ** 6))
        assert small.multiply(a, b) == large.multiply(a, b)
        assert small.multiply(a, b).to_int() == a * b

    def test_reject_cross_domain_comparison(self):
        engine = BigIntEngine(EngineConfig(cross_domain_comparison=CrossDomainComparison.REJECT))
        with pytest.raises(DomainTypeError, match="disabled by policy"):
            engine.less_than(bigint(1), 2.0)
        assert engine.less_than(bigint(1), 2)

    def test_compare(self):
        assert DEFAULT_ENGINE.compare(1, 2) == -1
        assert DEFAULT_ENGINE.compare(2.5, bigint(2)) == 1
        assert DEFAULT_ENGINE.compare(bigint(2), float("nan")) is None

    def test_engine_operands_are_guarded(self):
        with pytest.raises(DomainTypeError):
            DEFAULT_ENGINE.add(1.0, 2)
        with pytest.raises(DomainTypeError):
            DEFAULT_ENGINE.negate(1.0)
        with pytest.raises(DomainTypeError):
            DEFAULT_ENGINE.to_string(1.5)

    def test_repr(self):
        assert repr(BigIntEngine()).startswith("BigIntEngine(")
