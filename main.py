"""Punto de entrada de la calculadora: ejecuta una secuencia de teclas."""

import argparse
import logging
from logging.handlers import RotatingFileHandler
import os
import sys

from arithmetic_ops import BINARY_OPERATORS, CONSTANTS, UNARY_FUNCTIONS, PythonMathProvider
from calculator_engine import CalculatorEngine
from errors import InvalidInputError


USE_EXTENDED_PRECISION = os.getenv("CALC_EXTENDED_PRECISION", "1") != "0"
MP_WORKING_DIGITS = 30
DEFAULT_ANGLE_MODE = "deg"

OPERATOR_ALIASES = {"*": "×", "x": "×", "/": "÷"}

SIMPLE_KEYS = {
    "=": "equals",
    ".": "input_decimal",
    "C": "clear_entry",
    "AC": "clear_all",
    "BS": "backspace",
    "MS": "memory_store",
    "MR": "memory_recall",
    "M+": "memory_add",
    "M-": "memory_subtract",
    "MC": "memory_clear",
    "CH": "clear_history",
    "swap": "swap_units",
    "convert": "recompute_conversion",
}

PREFIXED_KEYS = {
    "mode": "set_mode",
    "cat": "set_conversion_category",
    "from": "set_source_unit",
    "to": "set_target_unit",
}


# ── Registro (logging) ───────────────────────────────────────────
def setup_logging():
    level_name = os.getenv("CALC_LOG_LEVEL", "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)

    logger = logging.getLogger("calculator")
    logger.setLevel(level)

    if logger.handlers:
        return logger  # ya configurado

    fmt = logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")

    sh = logging.StreamHandler()
    sh.setLevel(level)
    sh.setFormatter(fmt)
    logger.addHandler(sh)

    log_path = os.getenv("CALC_LOG_FILE")
    if log_path:
        fh = RotatingFileHandler(log_path, maxBytes=512_000, backupCount=2, encoding="utf-8")
        fh.setLevel(level)
        fh.setFormatter(fmt)
        logger.addHandler(fh)

    return logger


def build_engine(extended_precision: bool = USE_EXTENDED_PRECISION) -> CalculatorEngine:
    if extended_precision:
        from mpmath_provider import MPMathProvider

        provider = MPMathProvider(
            angle_mode=DEFAULT_ANGLE_MODE,
            working_digits=MP_WORKING_DIGITS,
        )
    else:
        provider = PythonMathProvider(angle_mode=DEFAULT_ANGLE_MODE)
    return CalculatorEngine(provider)


def dispatch(engine: CalculatorEngine, key: str):
    """Traduce una tecla de texto en un comando del motor."""
    if key.isdigit() and len(key) == 1:
        engine.input_digit(int(key))
    elif key in SIMPLE_KEYS:
        getattr(engine, SIMPLE_KEYS[key])()
    elif key in BINARY_OPERATORS or key in OPERATOR_ALIASES:
        engine.set_operator(OPERATOR_ALIASES.get(key, key))
    elif key in UNARY_FUNCTIONS or key in CONSTANTS:
        engine.apply_function(key)
    elif key.startswith("angle:"):
        try:
            engine.angle_mode = key.split(":", 1)[1]
        except ValueError as exc:
            raise InvalidInputError(str(exc)) from exc
    elif key.startswith("recall:"):
        index = key.split(":", 1)[1]
        history = engine.history
        if not index.isdigit() or int(index) >= len(history):
            raise InvalidInputError(f"Índice de historial inválido: {index!r}")
        engine.recall_history_entry(history[int(index)])
    elif ":" in key and key.split(":", 1)[0] in PREFIXED_KEYS:
        prefix, arg = key.split(":", 1)
        getattr(engine, PREFIXED_KEYS[prefix])(arg)
    else:
        raise InvalidInputError(f"Tecla desconocida: {key!r}")


def render(engine: CalculatorEngine) -> str:
    snap = engine.snapshot()
    lines = [
        f"mode:       {snap.mode}",
        f"expression: {snap.expression_trace}",
        f"display:    {snap.display}",
    ]
    if snap.mode == "converter":
        lines.append(
            f"converted:  {snap.converted_display} "
            f"({snap.conversion_category}: {snap.source_unit} -> {snap.target_unit})"
        )
    if snap.memory != 0:
        lines.append(f"memory:     {snap.memory!r}")
    if snap.history:
        lines.append("history:")
        lines.extend(f"  {i}. {entry}" for i, entry in enumerate(snap.history))
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Calculadora por secuencia de teclas")
    parser.add_argument("keys", nargs="*", help="teclas, p. ej.: 7 + 3 =")
    parser.add_argument(
        "--float-trig", action="store_true",
        help="usar math en lugar de mpmath para las funciones unarias",
    )
    args = parser.parse_args(argv)

    setup_logging()
    engine = build_engine(extended_precision=USE_EXTENDED_PRECISION and not args.float_trig)
    for key in args.keys:
        try:
            dispatch(engine, key)
        except InvalidInputError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 2
    print(render(engine))
    return 0


if __name__ == "__main__":
    sys.exit(main())
