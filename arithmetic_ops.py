"""Tablas de operaciones binarias y unarias de la calculadora."""

import logging
import math

from errors import InvalidInputError


log = logging.getLogger("calculator.ops")

BINARY_OPERATORS = ("+", "-", "×", "÷", "%", "^")
UNARY_FUNCTIONS = ("sin", "cos", "tan", "ln", "log", "√", "x²", "1/x", "!")
CONSTANTS = ("π", "e")


def _domain_safe(fn):
    """Devuelve NaN en lugar de ValueError y ∞ en lugar de OverflowError."""

    def wrapped(x):
        try:
            return fn(x)
        except ValueError:
            return math.nan
        except OverflowError:
            return math.inf

    return wrapped


def _logarithm(fn):
    def wrapped(x):
        if x == 0:
            return -math.inf
        return fn(x)

    return _domain_safe(wrapped)


def factorial(n: float) -> float:
    """Producto iterativo 2..n; NaN para negativos o no enteros."""
    if math.isnan(n) or n < 0:
        return math.nan
    if math.isinf(n):
        return math.inf
    if n != math.floor(n):
        return math.nan
    result = 1.0
    for i in range(2, int(n) + 1):
        result *= i
        if math.isinf(result):
            break
    return result


def reciprocal(x: float) -> float:
    if x == 0:
        return 0.0
    return 1.0 / x


class PythonMathProvider:
    """Provee funciones unarias y constantes basadas en el módulo math."""

    def __init__(self, angle_mode: str = "deg"):
        self._angle_mode = "deg"
        self.angle_mode = angle_mode

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    def build_namespace(self) -> dict:
        mode = self._angle_mode

        def _trig(fn):
            def w(x):
                return fn(math.radians(x) if mode == "deg" else x)

            return _domain_safe(w)

        return {
            "sin": _trig(math.sin),
            "cos": _trig(math.cos),
            "tan": _trig(math.tan),
            "ln": _logarithm(math.log),
            "log": _logarithm(math.log10),
            "√": _domain_safe(math.sqrt),
            "x²": lambda x: x * x,
            "1/x": reciprocal,
            "!": factorial,
            "π": math.pi,
            "e": math.e,
        }


class ArithmeticOps:
    """Aplica operadores binarios y funciones del proveedor a valores float.

    Los dominios inválidos producen NaN o ±∞, nunca excepciones; sólo un
    símbolo desconocido lanza InvalidInputError.
    """

    def __init__(self, provider=None):
        self._provider = provider if provider is not None else PythonMathProvider()

    @property
    def provider(self):
        return self._provider

    # ── Binarias ─────────────────────────────────────────────────

    def apply_binary(self, op: str, a: float, b: float) -> float:
        if op == "+":
            return a + b
        if op == "-":
            return a - b
        if op == "×":
            return a * b
        if op == "÷":
            # División por cero definida como 0, no como error
            if b == 0:
                log.debug("División por cero: %s ÷ 0 -> 0", a)
                return 0.0
            return a / b
        if op == "%":
            return self._remainder(a, b)
        if op == "^":
            return self._power(a, b)
        log.warning("Operador desconocido: %r", op)
        raise InvalidInputError(f"Operador desconocido: {op!r}")

    @staticmethod
    def _remainder(a: float, b: float) -> float:
        # Resto truncado: el signo sigue al dividendo
        if b == 0:
            return math.nan
        try:
            return math.fmod(a, b)
        except ValueError:
            return math.nan

    @staticmethod
    def _power(a: float, b: float) -> float:
        try:
            return math.pow(a, b)
        except OverflowError:
            odd_exponent = float(b).is_integer() and math.fmod(b, 2) != 0
            return -math.inf if a < 0 and odd_exponent else math.inf
        except ValueError:
            # pow(0, negativo) diverge; el resto son raíces de negativos
            return math.inf if a == 0 else math.nan

    # ── Unarias y constantes ─────────────────────────────────────

    def apply_unary(self, fn: str, x: float) -> float:
        namespace = self._provider.build_namespace()
        if fn not in namespace:
            log.warning("Función desconocida: %r", fn)
            raise InvalidInputError(f"Función desconocida: {fn!r}")

        entry = namespace[fn]
        if not callable(entry):
            # Constante: ignora el valor actual
            return float(entry)
        return float(entry(x))

    @staticmethod
    def is_constant(fn: str) -> bool:
        return fn in CONSTANTS
