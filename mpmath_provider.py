"""Proveedor de funciones unarias con precisión de trabajo extendida.

Las funciones se evalúan con mpmath y el resultado se redondea de vuelta
a float, de modo que el motor sigue operando en coma flotante binaria.
"""

from __future__ import annotations

import math

from arithmetic_ops import factorial, reciprocal

try:
    from mpmath import mp
except ImportError as exc:  # pragma: no cover
    raise ImportError(
        "mpmath no está instalado. Instala con: pip install mpmath"
    ) from exc


class MPMathProvider:
    """Proveedor matemático basado en mpmath."""

    def __init__(self, angle_mode: str = "deg", working_digits: int = 30):
        self._angle_mode = "deg"
        self.angle_mode = angle_mode
        self._working_digits = max(17, working_digits)

    @property
    def angle_mode(self) -> str:
        return self._angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        if mode not in ("rad", "deg"):
            raise ValueError("El modo debe ser 'rad' o 'deg'")
        self._angle_mode = mode

    @property
    def working_digits(self) -> int:
        return self._working_digits

    def _evaluate(self, fn):
        digits = self._working_digits

        def wrapped(x):
            if math.isnan(x):
                return math.nan
            with mp.workdps(digits):
                try:
                    result = fn(mp.mpf(x))
                except ZeroDivisionError:
                    return math.inf
                return self._to_float(result)

        return wrapped

    @staticmethod
    def _to_float(value) -> float:
        if isinstance(value, mp.mpc):
            if value.imag != 0:
                return math.nan
            value = value.real
        return float(value)

    def _sin(self, x):
        if mp.isinf(x):
            return mp.nan
        if self._angle_mode == "deg":
            return mp.sinpi(x / 180)
        return mp.sin(x)

    def _cos(self, x):
        if mp.isinf(x):
            return mp.nan
        if self._angle_mode == "deg":
            return mp.cospi(x / 180)
        return mp.cos(x)

    def _tan(self, x):
        if mp.isinf(x):
            return mp.nan
        if self._angle_mode == "deg":
            cosine = mp.cospi(x / 180)
            if cosine == 0:
                return mp.inf
            return mp.sinpi(x / 180) / cosine
        return mp.tan(x)

    @staticmethod
    def _ln(x):
        if x == 0:
            return mp.ninf
        return mp.log(x)

    @staticmethod
    def _log10(x):
        if x == 0:
            return mp.ninf
        return mp.log10(x)

    def build_namespace(self) -> dict:
        return {
            "sin": self._evaluate(self._sin),
            "cos": self._evaluate(self._cos),
            "tan": self._evaluate(self._tan),
            "ln": self._evaluate(self._ln),
            "log": self._evaluate(self._log10),
            "√": self._evaluate(mp.sqrt),
            "x²": lambda x: x * x,
            "1/x": reciprocal,
            "!": factorial,
            "π": float(mp.pi),
            "e": float(mp.e),
        }
