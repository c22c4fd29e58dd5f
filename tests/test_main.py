import logging

import pytest

from calculator_engine import CalculatorEngine
from errors import InvalidInputError
import main
from mpmath_provider import MPMathProvider


@pytest.fixture(autouse=True)
def isolated_logger(monkeypatch):
    logger = logging.getLogger("calculator")
    monkeypatch.setattr(logger, "handlers", [])
    level = logger.level
    yield logger
    logger.setLevel(level)


def run_keys(keys, engine=None):
    engine = engine or CalculatorEngine()
    for key in keys.split():
        main.dispatch(engine, key)
    return engine


class TestDispatch:
    def test_ascii_operator_aliases(self):
        assert run_keys("6 * 7 =").display == "42"
        assert run_keys("9 / 2 =").display == "4.5"
        assert run_keys("3 x 3 =").display == "9"

    def test_functions_and_memory_keys(self):
        engine = run_keys("8 1 √ MS C MR x² M- MR")
        assert engine.display == "-72"

    def test_converter_keys(self):
        engine = run_keys("mode:converter cat:weight from:kg to:g 3")
        assert engine.converted_display == "3000"
        engine = run_keys("swap convert", engine)
        assert engine.converted_display == "0.003"

    def test_angle_key(self):
        engine = run_keys("angle:rad 0 cos")
        assert engine.angle_mode == "rad"
        assert engine.display == "1"
        with pytest.raises(InvalidInputError):
            run_keys("angle:grad")

    def test_recall_key(self):
        engine = run_keys("2 + 2 = 3 + 3 = recall:1")
        assert engine.display == "4"
        with pytest.raises(InvalidInputError):
            run_keys("recall:0")

    def test_clear_keys(self):
        engine = run_keys("5 MS 2 + 2 = AC")
        assert engine.memory == 0
        assert engine.history == ()
        engine = run_keys("2 + 2 = CH")
        assert engine.history == ()

    @pytest.mark.parametrize("key", ["12", "sqrt", "mode", "unit:m"])
    def test_unknown_key(self, key):
        with pytest.raises(InvalidInputError):
            run_keys(key)


class TestMain:
    def test_build_engine_providers(self):
        assert isinstance(main.build_engine(extended_precision=True)._ops.provider, MPMathProvider)
        assert not isinstance(main.build_engine(extended_precision=False)._ops.provider, MPMathProvider)

    def test_prints_snapshot(self, capsys):
        assert main.main(["7", "+", "3", "+", "2", "="]) == 0
        out = capsys.readouterr().out
        assert "display:    12" in out
        assert "0. 10 + 2 = 12" in out
        assert "1. 7 + 3 = 10" in out

    def test_converter_output(self, capsys):
        assert main.main(["mode:converter", "cat:temperature", "0"]) == 0
        assert "converted:  32 (temperature: c -> f)" in capsys.readouterr().out

    def test_invalid_key_exit_status(self, capsys):
        assert main.main(["7", "?"]) == 2
        assert "Tecla desconocida" in capsys.readouterr().err

    def test_setup_logging_is_idempotent(self, monkeypatch, isolated_logger):
        monkeypatch.setenv("CALC_LOG_LEVEL", "debug")
        monkeypatch.delenv("CALC_LOG_FILE", raising=False)
        logger = main.setup_logging()
        assert logger is isolated_logger
        assert len(logger.handlers) == 1
        assert main.setup_logging().handlers == logger.handlers
        assert logger.level == logging.DEBUG

    def test_setup_logging_file_handler(self, monkeypatch, tmp_path):
        monkeypatch.setenv("CALC_LOG_FILE", str(tmp_path / "calculator.log"))
        logger = main.setup_logging()
        assert len(logger.handlers) == 2
        for handler in logger.handlers[1:]:
            handler.close()
