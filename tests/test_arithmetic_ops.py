import math

import pytest

from arithmetic_ops import ArithmeticOps, PythonMathProvider, factorial
from errors import InvalidInputError


class TestBinary:
    def setup_method(self):
        self.ops = ArithmeticOps()

    @pytest.mark.parametrize("a, b", [(2, 3), (-4.5, 1.25), (0, 7), (1e10, -3)])
    def test_basic_arithmetic(self, a, b):
        assert self.ops.apply_binary("+", a, b) == a + b
        assert self.ops.apply_binary("-", a, b) == a - b
        assert self.ops.apply_binary("×", a, b) == a * b

    def test_divide(self):
        assert self.ops.apply_binary("÷", 7, 2) == 3.5

    @pytest.mark.parametrize("a", [5, -3, 0, 1e300])
    def test_divide_by_zero_is_zero(self, a):
        assert self.ops.apply_binary("÷", a, 0) == 0

    def test_remainder_follows_dividend(self):
        assert self.ops.apply_binary("%", 7, 3) == 1
        assert self.ops.apply_binary("%", -7, 3) == -1
        assert self.ops.apply_binary("%", 7, -3) == 1
        assert self.ops.apply_binary("%", 5.5, 2) == 1.5

    def test_remainder_by_zero_is_nan(self):
        assert math.isnan(self.ops.apply_binary("%", 5, 0))

    def test_power(self):
        assert self.ops.apply_binary("^", 2, 10) == 1024
        assert self.ops.apply_binary("^", 4, 0.5) == 2

    def test_power_overflow(self):
        assert self.ops.apply_binary("^", 10, 400) == math.inf
        assert self.ops.apply_binary("^", -10, 401) == -math.inf
        assert self.ops.apply_binary("^", -10, 400) == math.inf

    def test_power_domain(self):
        assert self.ops.apply_binary("^", 0, -1) == math.inf
        assert math.isnan(self.ops.apply_binary("^", -8, 1 / 3))

    def test_unknown_operator(self):
        with pytest.raises(InvalidInputError):
            self.ops.apply_binary("*", 1, 2)


class TestUnary:
    def setup_method(self):
        self.ops = ArithmeticOps()

    def test_trig_uses_degrees(self):
        assert self.ops.apply_unary("sin", 30) == pytest.approx(0.5)
        assert self.ops.apply_unary("cos", 60) == pytest.approx(0.5)
        assert self.ops.apply_unary("tan", 45) == pytest.approx(1.0)

    def test_radian_mode(self):
        ops = ArithmeticOps(PythonMathProvider(angle_mode="rad"))
        assert ops.apply_unary("sin", math.pi / 2) == pytest.approx(1.0)

    def test_invalid_angle_mode(self):
        with pytest.raises(ValueError):
            PythonMathProvider(angle_mode="grad")

    def test_logs(self):
        assert self.ops.apply_unary("ln", math.e) == pytest.approx(1.0)
        assert self.ops.apply_unary("log", 1000) == pytest.approx(3.0)
        assert self.ops.apply_unary("ln", 0) == -math.inf
        assert math.isnan(self.ops.apply_unary("ln", -1))
        assert math.isnan(self.ops.apply_unary("log", -10))

    def test_roots_and_squares(self):
        assert self.ops.apply_unary("√", 16) == 4
        assert math.isnan(self.ops.apply_unary("√", -4))
        assert self.ops.apply_unary("x²", -3) == 9

    def test_reciprocal(self):
        assert self.ops.apply_unary("1/x", 4) == 0.25
        assert self.ops.apply_unary("1/x", 0) == 0

    def test_constants_ignore_argument(self):
        assert self.ops.apply_unary("π", 123) == math.pi
        assert self.ops.apply_unary("e", math.nan) == math.e
        assert ArithmeticOps.is_constant("π")
        assert not ArithmeticOps.is_constant("sin")

    def test_sin_of_infinity_is_nan(self):
        assert math.isnan(self.ops.apply_unary("sin", math.inf))

    def test_unknown_function(self):
        with pytest.raises(InvalidInputError):
            self.ops.apply_unary("cosh", 1)


class TestFactorial:
    def test_values(self):
        assert factorial(0) == 1
        assert factorial(1) == 1
        assert factorial(5) == 120
        assert factorial(10) == 3628800

    @pytest.mark.parametrize("n", [-1, 2.5, math.nan])
    def test_domain(self, n):
        assert math.isnan(factorial(n))

    def test_overflow(self):
        assert factorial(171) == math.inf
        assert factorial(math.inf) == math.inf
