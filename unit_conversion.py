"""
Tabla de conversión de unidades.

Cada categoría es una variante etiquetada:
    - RatioTable: factor = unidades por una unidad de referencia.
    - TemperatureFormulaSet: fórmulas explícitas por par ordenado.

Un único punto de entrada, convert(), despacha según la variante.
"""

from dataclasses import dataclass
import logging
from typing import Callable, Dict, Optional, Tuple

from errors import InvalidInputError


log = logging.getLogger("calculator.units")


@dataclass(frozen=True)
class Unit:
    name: str
    factor: Optional[float] = None


class RatioTable:
    """Conversión lineal a través de la unidad de referencia (factor 1)."""

    kind = "ratio"

    def __init__(self, name: str, units: Dict[str, Unit]):
        self.name = name
        self.units = units

    def convert(self, value: float, source: str, target: str) -> float:
        return (value / self.units[source].factor) * self.units[target].factor


class TemperatureFormulaSet:
    """Conversión por fórmulas: el cero de cada escala está desplazado."""

    kind = "formula"

    FORMULAS: Dict[Tuple[str, str], Callable[[float], float]] = {
        ("c", "f"): lambda v: (v * 9 / 5) + 32,
        ("f", "c"): lambda v: (v - 32) * 5 / 9,
        ("c", "k"): lambda v: v + 273.15,
        ("k", "c"): lambda v: v - 273.15,
        ("f", "k"): lambda v: ((v - 32) * 5 / 9) + 273.15,
        ("k", "f"): lambda v: ((v - 273.15) * 9 / 5) + 32,
    }

    def __init__(self, name: str, units: Dict[str, Unit]):
        self.name = name
        self.units = units

    def convert(self, value: float, source: str, target: str) -> float:
        formula = self.FORMULAS.get((source, target))
        if formula is None:
            # Mismo par o par sin fórmula: identidad
            return value
        return formula(value)


CONVERSIONS = {
    "length": RatioTable("Length", {
        "m": Unit("Meter", 1),
        "ft": Unit("Feet", 3.28084),
        "cm": Unit("Centimeter", 100),
        "mm": Unit("Millimeter", 1000),
        "km": Unit("Kilometer", 0.001),
        "inch": Unit("Inch", 39.3701),
        "yard": Unit("Yard", 1.09361),
    }),
    "weight": RatioTable("Weight", {
        "kg": Unit("Kilogram", 1),
        "g": Unit("Gram", 1000),
        "lb": Unit("Pound", 2.20462),
        "oz": Unit("Ounce", 35.274),
        "ton": Unit("Ton", 0.001),
    }),
    "temperature": TemperatureFormulaSet("Temperature", {
        "c": Unit("Celsius"),
        "f": Unit("Fahrenheit"),
        "k": Unit("Kelvin"),
    }),
    "area": RatioTable("Area", {
        "m2": Unit("Square Meter", 1),
        "cm2": Unit("Square Centimeter", 10000),
        "km2": Unit("Square Kilometer", 1e-6),
        "ft2": Unit("Square Feet", 10.7639),
        "acre": Unit("Acre", 0.000247105),
        "ha": Unit("Hectare", 0.0001),
    }),
    "volume": RatioTable("Volume", {
        "l": Unit("Liter", 1),
        "ml": Unit("Milliliter", 1000),
        "m3": Unit("Cubic Meter", 0.001),
        "gal": Unit("Gallon (US)", 0.264172),
        "cup": Unit("Cup (US)", 4.22675),
    }),
    "time": RatioTable("Time", {
        "s": Unit("Second", 1),
        "ms": Unit("Millisecond", 1000),
        "min": Unit("Minute", 1 / 60),
        "h": Unit("Hour", 1 / 3600),
        "day": Unit("Day", 1 / 86400),
        "week": Unit("Week", 1 / 604800),
    }),
}


# ── Consultas ────────────────────────────────────────────────────

def get_category(category: str):
    try:
        return CONVERSIONS[category]
    except KeyError:
        log.warning("Categoría desconocida: %r", category)
        raise InvalidInputError(f"Categoría desconocida: {category!r}") from None


def check_unit(category: str, unit: str) -> None:
    if unit not in get_category(category).units:
        log.warning("Unidad desconocida en %s: %r", category, unit)
        raise InvalidInputError(f"Unidad desconocida en {category}: {unit!r}")


def unit_name(category: str, unit: str) -> str:
    check_unit(category, unit)
    return CONVERSIONS[category].units[unit].name


def default_units(category: str) -> Tuple[str, str]:
    keys = list(get_category(category).units)
    return keys[0], keys[1 if len(keys) > 1 else 0]


def convert(category: str, value: float, source: str, target: str) -> float:
    """Convierte value de source a target dentro de category."""
    check_unit(category, source)
    check_unit(category, target)
    return CONVERSIONS[category].convert(value, source, target)
