"""Modelos Pydantic para configuración del motor de formularios."""

import os
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator


class Locale(str, Enum):
    """Idiomas soportados para los mensajes generados por el motor."""
    ES = "es"
    EN = "en"
    ZH = "zh"


class Layout(str, Enum):
    """Disposición de etiqueta y control."""
    INLINE = "inline"
    VERTICAL = "vertical"


# Mensajes sintetizados por el motor (no los de validadores propios de cada pantalla)
MESSAGES = {
    Locale.ES: {
        "required": "Ingrese {label}",
        "number": "Debe ser un número",
        "integer": "Debe ser un número entero",
        "min": "Mínimo: {limit}",
        "max": "Máximo: {limit}",
        "max_length": "Máximo {limit} caracteres",
        "create": "Crear",
        "update": "Actualizar",
    },
    Locale.EN: {
        "required": "Please provide {label}",
        "number": "Must be a number",
        "integer": "Must be an integer",
        "min": "Minimum: {limit}",
        "max": "Maximum: {limit}",
        "max_length": "At most {limit} characters",
        "create": "Create",
        "update": "Update",
    },
    Locale.ZH: {
        "required": "请输入{label}",
        "number": "必须是数字",
        "integer": "必须是整数",
        "min": "最小值：{limit}",
        "max": "最大值：{limit}",
        "max_length": "不能超过{limit}个字符",
        "create": "创建",
        "update": "更新",
    },
}


def get_message(locale: Locale, name: str, **kwargs) -> str:
    """Obtiene un mensaje localizado, con fallback a español."""
    table = MESSAGES.get(locale, MESSAGES[Locale.ES])
    template = table.get(name, MESSAGES[Locale.ES][name])
    return template.format(**kwargs)


class FormSettings(BaseModel):
    """Comportamiento configurable de una instancia de formulario."""
    destroy_on_close: bool = Field(
        default=False,
        description="Descartar valores y opciones al cerrar",
    )
    close_on_success: bool = Field(
        default=True,
        description="Cerrar el formulario tras un envío exitoso",
    )
    layout: Layout = Layout.INLINE
    submit_text: Optional[str] = Field(
        default=None,
        description="Texto del botón de envío (None: según modo)",
    )
    locale: Locale = Locale.ES

    def submit_label(self, is_update: bool) -> str:
        """Texto del botón de envío para el modo actual."""
        if self.submit_text:
            return self.submit_text
        return get_message(self.locale, "update" if is_update else "create")


class EngineSettings(BaseModel):
    """Configuración global leída del entorno."""
    locale: Locale = Locale.ES
    log_level: str = "WARNING"
    theme: str = "default"

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Nivel de log inválido: {v}")
        return level

    @classmethod
    def from_env(cls) -> "EngineSettings":
        """Construye la configuración a partir de variables ADMINFORM_*."""
        values = {}
        if os.environ.get("ADMINFORM_LOCALE"):
            values["locale"] = os.environ["ADMINFORM_LOCALE"].lower()
        if os.environ.get("ADMINFORM_LOG_LEVEL"):
            values["log_level"] = os.environ["ADMINFORM_LOG_LEVEL"]
        if os.environ.get("ADMINFORM_THEME"):
            values["theme"] = os.environ["ADMINFORM_THEME"].lower()
        return cls(**values)

    def form_settings(self, **overrides) -> FormSettings:
        """FormSettings con el idioma global y overrides por pantalla."""
        overrides.setdefault("locale", self.locale)
        return FormSettings(**overrides)
