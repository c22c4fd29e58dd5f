"""
Motor de estado de la calculadora.

Este módulo provee la clase CalculatorEngine, la máquina de estados que
recibe comandos discretos (dígito, operador, función, memoria, modo) y
mantiene la pantalla, la operación pendiente, la memoria y el historial.
La interfaz que lo usa no forma parte del motor: envía un comando, el motor
realiza una única transición síncrona y la interfaz vuelve a leer una
instantánea inmutable.

Contrato de interfaz:
    - comandos: input_digit, input_decimal, set_operator, equals, ...
    - snapshot() -> EngineSnapshot
    - angle_mode: propiedad 'rad' | 'deg'
"""

from dataclasses import dataclass, field
import logging
import math
from typing import List, Optional, Tuple

from arithmetic_ops import BINARY_OPERATORS, ArithmeticOps
from errors import InvalidInputError
from number_formatter import ERROR_TEXT, NumberFormatter
import unit_conversion


log = logging.getLogger("calculator.engine")

MODE_BASIC = "basic"
MODE_SCIENTIFIC = "scientific"
MODE_CONVERTER = "converter"
MODE_PROGRAMMER = "programmer"
MODES = (MODE_BASIC, MODE_SCIENTIFIC, MODE_CONVERTER, MODE_PROGRAMMER)

HISTORY_LIMIT = 20
DEFAULT_CATEGORY = "length"


@dataclass
class EngineState:
    """Agregado mutable; el motor es su único dueño."""

    display: str = "0"
    previous_value: Optional[float] = None
    pending_operation: Optional[str] = None
    awaiting_new_operand: bool = False
    # Sólo verdadero justo después de set_operator: otro operador lo reemplaza
    operator_armed: bool = False
    expression_trace: str = ""
    memory: float = 0.0
    history: List[str] = field(default_factory=list)
    mode: str = MODE_BASIC
    conversion_category: str = DEFAULT_CATEGORY
    source_unit: str = "m"
    target_unit: str = "ft"
    converted_display: str = "0"


@dataclass(frozen=True)
class EngineSnapshot:
    display: str
    expression_trace: str
    pending_operation: Optional[str]
    memory: float
    history: Tuple[str, ...]
    mode: str
    conversion_category: str
    source_unit: str
    target_unit: str
    converted_display: str


class CalculatorEngine:
    """Máquina de estados de la calculadora con memoria e historial."""

    def __init__(self, provider=None):
        self._ops = ArithmeticOps(provider)
        self._fmt = NumberFormatter()
        self._state = EngineState()

    # ── Propiedad: modo angular ──────────────────────────────────

    @property
    def angle_mode(self) -> str:
        return self._ops.provider.angle_mode

    @angle_mode.setter
    def angle_mode(self, mode: str):
        self._ops.provider.angle_mode = mode

    # ── Consultas ────────────────────────────────────────────────

    def snapshot(self) -> EngineSnapshot:
        s = self._state
        return EngineSnapshot(
            display=s.display,
            expression_trace=s.expression_trace,
            pending_operation=s.pending_operation,
            memory=s.memory,
            history=tuple(s.history),
            mode=s.mode,
            conversion_category=s.conversion_category,
            source_unit=s.source_unit,
            target_unit=s.target_unit,
            converted_display=s.converted_display,
        )

    @property
    def display(self) -> str:
        return self._state.display

    @property
    def expression_trace(self) -> str:
        return self._state.expression_trace

    @property
    def pending_operation(self) -> Optional[str]:
        return self._state.pending_operation

    @property
    def memory(self) -> float:
        return self._state.memory

    @property
    def history(self) -> Tuple[str, ...]:
        return tuple(self._state.history)

    @property
    def mode(self) -> str:
        return self._state.mode

    @property
    def conversion_category(self) -> str:
        return self._state.conversion_category

    @property
    def source_unit(self) -> str:
        return self._state.source_unit

    @property
    def target_unit(self) -> str:
        return self._state.target_unit

    @property
    def converted_display(self) -> str:
        return self._state.converted_display

    # ── Entrada de dígitos ───────────────────────────────────────

    def input_digit(self, d: int):
        if isinstance(d, bool) or not isinstance(d, int) or not 0 <= d <= 9:
            log.warning("Dígito inválido: %r", d)
            raise InvalidInputError(f"Dígito inválido: {d!r}")

        s = self._state
        log.debug("Dígito: %s", d)
        if s.mode == MODE_CONVERTER:
            # En el conversor el dígito es el nuevo valor de origen
            s.display = str(d)
            s.expression_trace = s.display
            self.recompute_conversion()
            return

        if s.awaiting_new_operand or s.display == "0" or self._fmt.is_sentinel(s.display):
            s.display = str(d)
        else:
            s.display += str(d)
        self._operand_entered()

    def input_decimal(self):
        s = self._state
        if s.awaiting_new_operand or self._fmt.is_sentinel(s.display):
            s.display = "0."
        elif "." not in s.display and "e" not in s.display:
            s.display += "."
        else:
            # Ya hay punto, o la mantisa en notación exponencial no admite otro
            log.debug("Punto ignorado en %s", s.display)
            return
        self._operand_entered()

    def _operand_entered(self):
        s = self._state
        s.awaiting_new_operand = False
        s.operator_armed = False
        self._refresh_trace()
        self._sync_conversion()

    def _sync_conversion(self):
        if self._state.mode == MODE_CONVERTER:
            self.recompute_conversion()

    # ── Operadores ───────────────────────────────────────────────

    def set_operator(self, op: str):
        if op not in BINARY_OPERATORS:
            log.warning("Operador desconocido: %r", op)
            raise InvalidInputError(f"Operador desconocido: {op!r}")

        s = self._state
        if s.pending_operation is not None and s.operator_armed:
            log.debug("Operador reemplazado: %s -> %s", s.pending_operation, op)
            s.pending_operation = op
            self._refresh_trace()
            return

        value = self._fmt.parse(s.display)
        if s.previous_value is None:
            s.previous_value = value
        elif s.pending_operation is not None:
            # Encadenado: se evalúa de inmediato, sin precedencia
            result = self._compute(s.previous_value, s.pending_operation, value)
            s.previous_value = result

        s.pending_operation = op
        s.awaiting_new_operand = True
        s.operator_armed = True
        self._refresh_trace()

    def equals(self):
        s = self._state
        if s.previous_value is None or s.pending_operation is None:
            log.debug("'=' sin operación pendiente")
            return

        value = self._fmt.parse(s.display)
        self._compute(s.previous_value, s.pending_operation, value)
        s.previous_value = None
        s.pending_operation = None
        s.awaiting_new_operand = True
        s.operator_armed = False
        s.expression_trace = s.display

    def _compute(self, left: float, op: str, right: float) -> float:
        result = self._ops.apply_binary(op, left, right)
        formatted = self._fmt.format(result)
        self._state.display = formatted
        self._push_history(
            f"{self._fmt.format(left)} {op} {self._fmt.format(right)} = {formatted}"
        )
        return result

    # ── Funciones científicas ────────────────────────────────────

    def apply_function(self, fn: str):
        s = self._state
        x = self._fmt.parse(s.display)
        result = self._ops.apply_unary(fn, x)
        formatted = self._fmt.format(result)
        s.display = formatted
        self._push_history(f"{fn}({self._fmt.format(x)}) = {formatted}")
        # previous_value y pending_operation no se tocan
        s.awaiting_new_operand = True
        s.operator_armed = False
        self._refresh_trace()
        self._sync_conversion()

    # ── Edición y borrado ────────────────────────────────────────

    def backspace(self):
        s = self._state
        text = s.display
        if len(text) <= 1 or self._fmt.is_sentinel(text):
            text = "0"
        else:
            text = text[:-1]
            # No dejar un exponente o un signo colgando
            while text and text[-1] in "e+-":
                text = text[:-1]
            if not text:
                text = "0"
        s.display = text
        log.debug("Borrar -> %s", text)
        self._operand_entered()

    def clear_entry(self):
        s = self._state
        s.display = "0"
        s.previous_value = None
        s.pending_operation = None
        s.awaiting_new_operand = False
        s.operator_armed = False
        s.expression_trace = ""

    def clear_all(self):
        self.clear_entry()
        self._state.history.clear()
        self._state.memory = 0.0
        log.info("Reinicio completo (AC)")

    def clear_history(self):
        self._state.history.clear()

    # ── Memoria ──────────────────────────────────────────────────

    def memory_store(self):
        self._state.memory = self._fmt.parse(self._state.display)
        log.debug("MS -> %s", self._state.memory)

    def memory_add(self):
        self._state.memory += self._fmt.parse(self._state.display)
        log.debug("M+ -> %s", self._state.memory)

    def memory_subtract(self):
        self._state.memory -= self._fmt.parse(self._state.display)
        log.debug("M- -> %s", self._state.memory)

    def memory_recall(self):
        s = self._state
        s.display = self._fmt.format(s.memory)
        s.awaiting_new_operand = True
        s.operator_armed = False
        self._refresh_trace()
        self._sync_conversion()

    def memory_clear(self):
        self._state.memory = 0.0

    # ── Modo ─────────────────────────────────────────────────────

    def set_mode(self, mode: str):
        if mode not in MODES:
            log.warning("Modo desconocido: %r", mode)
            raise InvalidInputError(f"Modo desconocido: {mode!r}")

        log.debug("Modo: %s -> %s", self._state.mode, mode)
        self._state.mode = mode
        self.clear_entry()
        if mode == MODE_CONVERTER:
            self.recompute_conversion()

    # ── Conversor ────────────────────────────────────────────────

    def _in_converter(self, command: str) -> bool:
        if self._state.mode != MODE_CONVERTER:
            log.debug("%s ignorado fuera del modo conversor", command)
            return False
        return True

    def set_conversion_category(self, category: str):
        source, target = unit_conversion.default_units(category)
        if not self._in_converter("set_conversion_category"):
            return
        s = self._state
        s.conversion_category = category
        s.source_unit = source
        s.target_unit = target
        self.recompute_conversion()

    def set_source_unit(self, unit: str):
        unit_conversion.check_unit(self._state.conversion_category, unit)
        if not self._in_converter("set_source_unit"):
            return
        self._state.source_unit = unit
        self.recompute_conversion()

    def set_target_unit(self, unit: str):
        unit_conversion.check_unit(self._state.conversion_category, unit)
        if not self._in_converter("set_target_unit"):
            return
        self._state.target_unit = unit
        self.recompute_conversion()

    def swap_units(self):
        """Intercambia origen y destino sin recalcular el resultado."""
        if not self._in_converter("swap_units"):
            return
        s = self._state
        s.source_unit, s.target_unit = s.target_unit, s.source_unit

    def recompute_conversion(self):
        s = self._state
        if not self._in_converter("recompute_conversion"):
            return
        value = self._fmt.parse(s.display)
        if math.isnan(value):
            value = 0.0
        result = unit_conversion.convert(
            s.conversion_category, value, s.source_unit, s.target_unit
        )
        s.converted_display = self._fmt.format(result)
        log.debug(
            "Conversión %s: %s %s -> %s %s",
            s.conversion_category, s.display, s.source_unit,
            s.converted_display, s.target_unit,
        )

    # ── Historial ────────────────────────────────────────────────

    def recall_history_entry(self, entry: str):
        if not isinstance(entry, str) or " = " not in entry:
            log.warning("Entrada de historial inválida: %r", entry)
            raise InvalidInputError(f"Entrada de historial inválida: {entry!r}")

        result = entry.rsplit(" = ", 1)[1]
        if result == ERROR_TEXT:
            return
        self._fmt.parse(result)
        self._state.display = result
        self._operand_entered()

    def _push_history(self, entry: str):
        history = self._state.history
        history.insert(0, entry)
        del history[HISTORY_LIMIT:]
        log.info("Historial: %s", entry)

    # ── Traza de la expresión ────────────────────────────────────

    def _refresh_trace(self):
        s = self._state
        if s.pending_operation is None:
            s.expression_trace = s.display
            return
        left = self._fmt.format(s.previous_value)
        if s.operator_armed:
            s.expression_trace = f"{left} {s.pending_operation}"
        else:
            s.expression_trace = f"{left} {s.pending_operation} {s.display}"
