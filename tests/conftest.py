"""Configuración de pytest para tests de adminform."""

import logging

import pytest

from adminform.cli.theme import CLITheme, ThemeName
from adminform.form import FieldDescriptor, NumberKind, SelectKind, TextKind


@pytest.fixture(autouse=True)
def reset_theme():
    """Cada test arranca con el tema por defecto y consolas nuevas."""
    CLITheme.set_theme(ThemeName.DEFAULT)
    yield
    CLITheme.set_theme(ThemeName.DEFAULT)


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Quita handlers instalados por setup_logging entre tests."""
    logger = logging.getLogger("adminform")
    handlers = list(logger.handlers)
    propagate = logger.propagate
    level = logger.level
    yield
    logger.handlers = handlers
    logger.propagate = propagate
    logger.setLevel(level)


def _too_small(value, values):
    return "too small" if value < 1 else None


@pytest.fixture
def person_fields():
    """name (requerido) y age (requerido, mínimo 1 por validador propio)."""
    return [
        FieldDescriptor(key="name", label="Nombre", required=True),
        FieldDescriptor(
            key="age", label="Edad", kind=NumberKind(), required=True, validate=_too_small
        ),
    ]


@pytest.fixture
def toggle_fields():
    """Un selector de modo y un campo que solo se ve en modo avanzado."""
    return [
        FieldDescriptor(
            key="mode",
            label="Modo",
            kind=SelectKind(options=[("Simple", "simple"), ("Avanzado", "advanced")]),
            default="simple",
        ),
        FieldDescriptor(
            key="detail",
            label="Detalle",
            required=True,
            show=lambda values: values.get("mode") == "advanced",
        ),
        FieldDescriptor(key="notes", label="Notas", kind=TextKind(input_type="textarea")),
    ]


class Recorder:
    """Colaborador de datos que registra las llamadas."""

    def __init__(self, result=None):
        self.result = result
        self.calls = []

    def __call__(self, *args):
        self.calls.append(args)
        return self.result


@pytest.fixture
def recorder():
    return Recorder()


@pytest.fixture
def make_recorder():
    return Recorder
