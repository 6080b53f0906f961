"""
Tests para config.py, logging_setup.py y cli/theme.py.
"""

import io
import logging

import pytest
from pydantic import ValidationError
from rich.logging import RichHandler

from adminform.cli.theme import (
    CLITheme, ICONS_ASCII, ICONS_UNICODE, THEMES, ThemeName, get_icons, get_palette,
    set_theme_by_name,
)
from adminform.config import EngineSettings, FormSettings, Layout, Locale, get_message
from adminform.form.errors import AdminFormError, SubmitError
from adminform.logging_setup import get_log_level_from_env, setup_logging


class TestFormSettings:
    """Tests para FormSettings."""

    def test_defaults(self):
        """Test valores por defecto."""
        settings = FormSettings()
        assert settings.destroy_on_close is False
        assert settings.close_on_success is True
        assert settings.layout == Layout.INLINE
        assert settings.locale == Locale.ES

    def test_submit_label(self):
        """Test etiqueta del botón según modo e idioma."""
        assert FormSettings().submit_label(False) == "Crear"
        assert FormSettings().submit_label(True) == "Actualizar"
        assert FormSettings(locale="zh").submit_label(True) == "更新"
        assert FormSettings(submit_text="Guardar").submit_label(True) == "Guardar"

    def test_get_message(self):
        """Test plantillas con parámetros."""
        assert get_message(Locale.EN, "max", limit=5) == "Maximum: 5"
        assert get_message(Locale.ES, "max_length", limit=10) == "Máximo 10 caracteres"


class TestEngineSettings:
    """Tests para EngineSettings.from_env."""

    def test_from_env(self, monkeypatch):
        """Test lectura de variables ADMINFORM_*."""
        monkeypatch.setenv("ADMINFORM_LOCALE", "EN")
        monkeypatch.setenv("ADMINFORM_LOG_LEVEL", "debug")
        monkeypatch.setenv("ADMINFORM_THEME", "Nord")
        settings = EngineSettings.from_env()
        assert settings.locale == Locale.EN
        assert settings.log_level == "DEBUG"
        assert settings.theme == "nord"
        assert settings.form_settings().locale == Locale.EN
        assert settings.form_settings(locale=Locale.ZH).locale == Locale.ZH

    def test_defaults_without_env(self, monkeypatch):
        """Test sin variables de entorno."""
        for name in ("ADMINFORM_LOCALE", "ADMINFORM_LOG_LEVEL", "ADMINFORM_THEME"):
            monkeypatch.delenv(name, raising=False)
        settings = EngineSettings.from_env()
        assert settings.locale == Locale.ES
        assert settings.log_level == "WARNING"

    def test_invalid_log_level(self):
        """Test nivel de log inválido."""
        with pytest.raises(ValidationError):
            EngineSettings(log_level="RUIDOSO")


class TestLogging:
    """Tests para setup_logging."""

    def test_idempotent(self):
        """Test llamadas repetidas no duplican el handler."""
        logger = setup_logging("INFO")
        setup_logging("DEBUG")
        handlers = [h for h in logger.handlers if isinstance(h, RichHandler)]
        assert len(handlers) == 1
        assert logger.level == logging.DEBUG
        assert logger.name == "adminform"

    def test_invalid_level(self):
        """Test nombre de nivel desconocido."""
        with pytest.raises(ValueError):
            setup_logging("RUIDOSO")

    def test_level_from_env(self, monkeypatch):
        """Test nivel desde el entorno."""
        monkeypatch.setenv("ADMINFORM_LOG_LEVEL", "error")
        assert get_log_level_from_env() == logging.ERROR
        monkeypatch.setenv("ADMINFORM_LOG_LEVEL", "10")
        assert get_log_level_from_env() == 10
        monkeypatch.delenv("ADMINFORM_LOG_LEVEL")
        assert get_log_level_from_env() == logging.WARNING


class TestTheme:
    """Tests para el tema de la CLI."""

    def test_set_theme_by_name(self):
        """Test activar un tema por nombre."""
        set_theme_by_name("nord")
        assert get_palette() == THEMES[ThemeName.NORD]

    def test_unknown_theme_falls_back(self):
        """Test un nombre desconocido usa el tema por defecto."""
        set_theme_by_name("neon")
        assert CLITheme.get_palette() == THEMES[ThemeName.DEFAULT]

    def test_icons_follow_stdout_encoding(self, monkeypatch):
        """Test iconos ASCII cuando stdout no admite Unicode."""
        monkeypatch.setattr("sys.stdout", io.TextIOWrapper(io.BytesIO(), encoding="ascii"))
        assert get_icons() == ICONS_ASCII
        monkeypatch.setattr("sys.stdout", io.TextIOWrapper(io.BytesIO(), encoding="utf-8"))
        assert get_icons() == ICONS_UNICODE


class TestErrors:
    """Tests para la jerarquía de excepciones."""

    def test_str_includes_code_and_details(self):
        """Test representación con código y detalles."""
        error = SubmitError("falló", mode="update", record_id=3)
        assert isinstance(error, AdminFormError)
        assert str(error) == "[FRM020] falló (mode=update, record_id=3)"
        assert error.details == {"mode": "update", "record_id": 3}

    def test_custom_code(self):
        """Test código de error explícito."""
        error = AdminFormError("x", error_code="APP999")
        assert str(error) == "[APP999] x"
