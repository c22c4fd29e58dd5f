from calculator_engine import CalculatorEngine
from main import build_engine, dispatch
import sys


def _walk(keys: str, *, extended_precision: bool = False) -> CalculatorEngine:
	if extended_precision:
		engine = build_engine(extended_precision=True)
	else:
		engine = CalculatorEngine()
	for key in keys.split():
		dispatch(engine, key)
	return engine


def inspect_sequence(keys: str, *, extended_precision: bool = False) -> None:
	"""Imprime la instantánea tras cada tecla de la secuencia."""
	engine = build_engine(extended_precision=extended_precision)

	print("Sequence inspection")
	print(f"keys:           {keys}")
	print(f"extended:       {extended_precision}")

	for i, key in enumerate(keys.split(), start=1):
		dispatch(engine, key)
		snap = engine.snapshot()
		print(f"  {i}. {key!r:>8} -> {snap.display!r:<16} {snap.expression_trace!r}")

	snap = engine.snapshot()
	print(f"history:        {list(snap.history)}")
	print(f"memory:         {snap.memory!r}")


def run_regressions() -> None:
	checks: list[tuple[str, bool]] = []
	expected_actual: list[tuple[str, str, str]] = []

	chain = _walk("7 + 3 + 2 =")
	expected_actual.append(("7 + 3 + 2 =", "12", chain.display))
	checks.append((
		"chained operators evaluate left to right",
		chain.history == ("10 + 2 = 12", "7 + 3 = 10"),
	))

	no_precedence = _walk("2 + 3 × 4 =")
	expected_actual.append(("2 + 3 × 4 =", "20", no_precedence.display))

	replaced = _walk("8 + - × 2 =")
	expected_actual.append(("8 + - × 2 =", "16", replaced.display))
	checks.append((
		"operator replacement adds no history",
		len(replaced.history) == 1,
	))

	divide_zero = _walk("5 ÷ 0 =")
	expected_actual.append(("5 ÷ 0 =", "0", divide_zero.display))

	reciprocal_zero = _walk("0 1/x")
	expected_actual.append(("0 1/x", "0", reciprocal_zero.display))

	twice = _walk("4 × 5 = =")
	checks.append((
		"second equals is a no-op",
		twice.display == "20" and len(twice.history) == 1,
	))

	bad_factorial = _walk("2 . 5 !")
	expected_actual.append(("2 . 5 !", "Error", bad_factorial.display))
	recovered = _walk("2 . 5 ! 6")
	expected_actual.append(("2 . 5 ! 6", "6", recovered.display))

	mid_chain = _walk("9 + 1 6 √ =")
	expected_actual.append(("9 + 1 6 √ =", "13", mid_chain.display))

	overflow = _walk("9 ^ 9 9 9 =")
	expected_actual.append(("9 ^ 9 9 9 =", "∞", overflow.display))

	long_result = _walk("1 ÷ 3 =")
	expected_actual.append(("1 ÷ 3 =", "0.3333333333", long_result.display))

	big_result = _walk("1 2 3 4 5 6 7 × 1 2 3 4 5 6 7 =")
	expected_actual.append(("1234567 × 1234567 =", "1.524156e+12", big_result.display))

	sin_float = _walk("1 8 0 sin")
	sin_exact = _walk("1 8 0 sin", extended_precision=True)
	checks.append((
		"float sin(180) is a tiny residue",
		sin_float.display != "0" and "e-" in sin_float.display,
	))
	expected_actual.append(("mpmath sin(180)", "0", sin_exact.display))
	tan_exact = _walk("9 0 tan", extended_precision=True)
	expected_actual.append(("mpmath tan(90)", "∞", tan_exact.display))

	memory = _walk("5 MS C 3 M+ C MR")
	expected_actual.append(("5 MS C 3 M+ C MR", "8", memory.display))

	mode_switch = _walk("5 MS C 2 + 2 = mode:scientific")
	checks.append((
		"mode switch keeps memory and history",
		mode_switch.memory == 5 and len(mode_switch.history) == 1,
	))
	checks.append((
		"mode switch resets display and pending operation",
		mode_switch.display == "0" and mode_switch.pending_operation is None,
	))

	converter = _walk("mode:converter cat:temperature from:c to:f 0")
	expected_actual.append(("0 °C -> °F", "32", converter.converted_display))
	kelvin = _walk("mode:converter cat:temperature from:c to:k 1 0 0")
	checks.append((
		"converter digit replaces the source value",
		kelvin.display == "0" and kelvin.converted_display == "273.15",
	))

	length = _walk("mode:converter 1 swap convert")
	expected_actual.append(("1 ft -> m", "0.3047999902", length.converted_display))

	history = _walk(" ".join(["1 + 1 ="] * 25))
	checks.append(("history keeps 20 entries", len(history.history) == 20))

	recalled = _walk("6 × 7 = C recall:0 + 1 =")
	expected_actual.append(("recall 42 then + 1", "43", recalled.display))

	backspace = _walk("1 2 3 BS BS BS BS")
	expected_actual.append(("1 2 3 BS×4", "0", backspace.display))

	failed = [name for name, ok in checks if not ok]
	failed.extend(label for label, expected, actual in expected_actual if expected != actual)
	for name, ok in checks:
		print(f"{name}: {'OK' if ok else 'FAIL'}")

	print("\nExpected vs Actual:")
	for label, expected, actual in expected_actual:
		status = "OK" if expected == actual else "FAIL"
		print(f"- {label}: {status}")
		print(f"  expected: {expected}")
		print(f"  actual:   {actual}")

	if failed:
		print("\nFAILED CHECKS:")
		for name in failed:
			print(f"- {name}")
		raise SystemExit(1)

	print("\nAll regression checks passed.")


if __name__ == "__main__":
	# Uso rápido:
	#   python regression_checks.py
	#   python regression_checks.py --inspect "7 + 3 + 2 ="
	#   python regression_checks.py --inspect "1 8 0 sin" --extended
	if "--inspect" in sys.argv:
		try:
			keys = sys.argv[sys.argv.index("--inspect") + 1]
		except (ValueError, IndexError):
			raise SystemExit("Missing key sequence after --inspect")

		inspect_sequence(keys, extended_precision="--extended" in sys.argv)
	else:
		run_regressions()
