"""
Formato de números para la pantalla de la calculadora.

Contrato de interfaz:
    - format(value: float) -> str
    - parse(text: str) -> float   (inverso de format)
"""

from decimal import Decimal
import math

from errors import InvalidInputError


ERROR_TEXT = "Error"
INFINITY_TEXT = "∞"


class NumberFormatter:
    """Convierte resultados numéricos en cadenas canónicas de pantalla."""

    MAX_LENGTH = 12
    EXPONENTIAL_THRESHOLD = 1e9
    SIGNIFICANT_DIGITS = 10

    # ── Formato ──────────────────────────────────────────────────

    @classmethod
    def format(cls, value) -> str:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"Valor no numérico: {value!r}")

        value = float(value)
        if math.isnan(value):
            return ERROR_TEXT
        if math.isinf(value):
            return INFINITY_TEXT

        text = cls._shortest(value)
        if len(text) <= cls.MAX_LENGTH:
            return text

        if abs(value) >= cls.EXPONENTIAL_THRESHOLD:
            return cls._exponential(value, 6)
        return cls._precision(value, cls.SIGNIFICANT_DIGITS)

    @staticmethod
    def _exponential(value: float, fraction_digits: int) -> str:
        # Exponente sin ceros de relleno: 1.000000e+9
        mantissa, exponent = f"{value:.{fraction_digits}e}".split("e")
        return f"{mantissa}e{'-' if exponent[0] == '-' else '+'}{int(exponent[1:])}"

    @classmethod
    def _precision(cls, value: float, digits: int) -> str:
        """digits cifras significativas, conservando los ceros finales."""
        exponent = int(f"{value:.{digits - 1}e}".split("e")[1])
        if exponent < -6 or exponent >= digits:
            return cls._exponential(value, digits - 1)
        return f"{value:.{digits - 1 - exponent}f}"

    @staticmethod
    def _shortest(value: float) -> str:
        # repr() da las cifras más cortas que conservan el valor;
        # se colocan en notación fija entre 1e-7 y 1e21
        if value == 0:
            return "0"
        sign = "-" if value < 0 else ""
        parsed = Decimal(repr(abs(value))).normalize()
        digits = "".join(str(d) for d in parsed.as_tuple().digits)
        k = len(digits)
        n = parsed.as_tuple().exponent + k

        if k <= n <= 21:
            return sign + digits + "0" * (n - k)
        if 0 < n <= 21:
            return sign + digits[:n] + "." + digits[n:]
        if -6 < n <= 0:
            return sign + "0." + "0" * -n + digits

        e = n - 1
        mantissa = digits if k == 1 else digits[0] + "." + digits[1:]
        return f"{sign}{mantissa}e{'-' if e < 0 else '+'}{abs(e)}"

    # ── Inverso ──────────────────────────────────────────────────

    @staticmethod
    def parse(text: str) -> float:
        if text == ERROR_TEXT:
            return math.nan
        if text == INFINITY_TEXT:
            return math.inf
        try:
            return float(text)
        except (TypeError, ValueError) as exc:
            raise InvalidInputError(f"Texto no numérico: {text!r}") from exc

    @staticmethod
    def is_sentinel(text: str) -> bool:
        return text in (ERROR_TEXT, INFINITY_TEXT)
