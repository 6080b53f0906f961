"""
Validación, conversión y formateo de valores de campos.

La validación completa tiene dos fases y nunca se corta en el primer
error: el mapa resultante refleja todos los campos visibles inválidos.

1. Por campo: requerido -> mensaje sintetizado (sin validador propio);
   si no, restricciones del tipo y validador propio sobre valores no vacíos.
2. Formulario: un validador cruzado cuyos mensajes pisan los de la fase 1.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from adminform.config import Locale, get_message

from .models import (
    CustomKind, DateKind, DateRangeKind, FieldDescriptor, FormValidator,
    MultiSelectKind, NumberKind, Option, RadioKind, SelectKind, SwitchKind,
    TextKind,
)
from .registry import FieldRegistry
from .visibility import is_visible


def is_empty_value(value: Any) -> bool:
    """None, cadena vacía o colección vacía."""
    if value is None or value == "":
        return True
    if isinstance(value, (list, tuple, set, frozenset, dict)) and len(value) == 0:
        return True
    return False


def required_message(field: FieldDescriptor, locale: Locale = Locale.ES) -> str:
    return get_message(locale, "required", label=field.label)


def _kind_error(field: FieldDescriptor, value: Any, locale: Locale) -> Optional[str]:
    """Restricciones propias del tipo de campo (rango numérico, longitud)."""
    kind = field.kind
    if isinstance(kind, NumberKind):
        if isinstance(value, bool):
            return get_message(locale, "number")
        try:
            num = float(value)
        except (TypeError, ValueError):
            return get_message(locale, "number")
        if kind.integer and not num.is_integer():
            return get_message(locale, "integer")
        if kind.min_value is not None and num < kind.min_value:
            return get_message(locale, "min", limit=kind.min_value)
        if kind.max_value is not None and num > kind.max_value:
            return get_message(locale, "max", limit=kind.max_value)
    elif isinstance(kind, TextKind) and kind.max_length is not None:
        if len(str(value)) > kind.max_length:
            return get_message(locale, "max_length", limit=kind.max_length)
    return None


def check_field(
    field: FieldDescriptor,
    value: Any,
    values: Mapping[str, Any],
    locale: Locale = Locale.ES,
) -> Optional[str]:
    """
    Valida un campo visible.

    Returns:
        Mensaje de error o None si es válido
    """
    if is_empty_value(value):
        if field.required:
            return required_message(field, locale)
        return None

    error = _kind_error(field, value, locale)
    if error:
        return error

    if field.validate is not None:
        result = field.validate(value, values)
        if result:
            return str(result)
    return None


def live_field_error(
    field: FieldDescriptor,
    value: Any,
    values: Mapping[str, Any],
    locale: Locale = Locale.ES,
) -> Optional[str]:
    """
    Revalidación inmediata tras editar un campo.

    No exige requeridos mientras se edita: solo tipo y validador propio.
    """
    if not is_visible(field, values) or is_empty_value(value):
        return None
    error = _kind_error(field, value, locale)
    if error:
        return error
    if field.validate is not None:
        result = field.validate(value, values)
        if result:
            return str(result)
    return None


def validate_fields(
    registry: FieldRegistry,
    values: Mapping[str, Any],
    locale: Locale = Locale.ES,
) -> Dict[str, str]:
    """Fase 1: errores de todos los campos visibles."""
    errors: Dict[str, str] = {}
    for fld in registry:
        if not is_visible(fld, values):
            continue
        error = check_field(fld, values.get(fld.key), values, locale)
        if error:
            errors[fld.key] = error
    return errors


def validate_form(
    registry: FieldRegistry,
    values: Mapping[str, Any],
    form_validator: Optional[FormValidator] = None,
    locale: Locale = Locale.ES,
) -> Dict[str, str]:
    """Validación completa: campos visibles y validador de formulario."""
    errors = validate_fields(registry, values, locale)
    if form_validator is not None:
        form_errors = form_validator(values) or {}
        for key, message in form_errors.items():
            if message:
                errors[key] = str(message)
    return errors


# =============================================================================
# CONVERSIÓN DE ENTRADA
# =============================================================================

_TRUE_WORDS = {"1", "true", "t", "yes", "y", "si", "sí", "s", "on"}
_FALSE_WORDS = {"0", "false", "f", "no", "n", "off"}


def _match_option(raw: str, options: Sequence[Option]) -> Any:
    text = raw.strip()
    for opt in options:
        if str(opt.value) == text:
            return opt.value
    for opt in options:
        if opt.label.lower() == text.lower():
            return opt.value
    raise ValueError(f"Opción no válida: {text}")


def coerce_input(
    field: FieldDescriptor,
    raw: str,
    options: Sequence[Option] = (),
) -> Any:
    """
    Convierte texto ingresado por el usuario al tipo del campo.

    Texto vacío se convierte en None. Lanza ValueError si no se puede
    convertir.
    """
    text = raw.strip() if isinstance(raw, str) else raw
    if text == "" or text is None:
        return None

    kind = field.kind
    if isinstance(kind, NumberKind):
        try:
            num = float(text)
        except ValueError:
            raise ValueError("Debe ser un número")
        if kind.integer or num.is_integer():
            return int(num)
        return num
    if isinstance(kind, SwitchKind):
        lowered = str(text).lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise ValueError("Debe ser sí o no")
    if isinstance(kind, DateKind):
        return datetime.strptime(text, kind.date_format).date()
    if isinstance(kind, DateRangeKind):
        separator = ".." if ".." in text else ","
        parts = [p.strip() for p in text.split(separator)]
        if len(parts) != 2:
            raise ValueError("Use inicio..fin")
        start, end = (datetime.strptime(p, kind.date_format).date() for p in parts)
        if end < start:
            raise ValueError("La fecha final es anterior a la inicial")
        return [start, end]
    if isinstance(kind, MultiSelectKind):
        items = [p for p in text.split(",") if p.strip()]
        if not options:
            return [p.strip() for p in items]
        return [_match_option(p, options) for p in items]
    if isinstance(kind, (SelectKind, RadioKind)):
        if not options:
            return text
        return _match_option(text, options)
    return text


# =============================================================================
# FORMATEO
# =============================================================================

def _option_label(value: Any, options: Sequence[Option]) -> str:
    for opt in options:
        if opt.value == value or str(opt.value) == str(value):
            return opt.label
    return str(value)


def _format_number(field: FieldDescriptor, value: Any, options: Sequence[Option]) -> str:
    if isinstance(value, float) and not value.is_integer():
        return f"{value:.2f}"
    try:
        return str(int(value)) if float(value).is_integer() else str(value)
    except (TypeError, ValueError):
        return str(value)


def _format_choice(field: FieldDescriptor, value: Any, options: Sequence[Option]) -> str:
    return _option_label(value, options)


def _format_multi(field: FieldDescriptor, value: Any, options: Sequence[Option]) -> str:
    if not isinstance(value, (list, tuple, set)):
        return _option_label(value, options)
    names = [_option_label(v, options) for v in value]
    return ", ".join(names) if names else "-"


def _format_switch(field: FieldDescriptor, value: Any, options: Sequence[Option]) -> str:
    return "Sí" if value else "No"


def _format_date(field: FieldDescriptor, value: Any, options: Sequence[Option]) -> str:
    if isinstance(value, (date, datetime)):
        return value.strftime(field.kind.date_format)
    return str(value)


def _format_range(field: FieldDescriptor, value: Any, options: Sequence[Option]) -> str:
    if isinstance(value, (list, tuple)) and len(value) == 2:
        return " → ".join(_format_date(field, v, options) for v in value)
    return str(value)


def _format_text(field: FieldDescriptor, value: Any, options: Sequence[Option]) -> str:
    if isinstance(field.kind, TextKind) and field.kind.input_type == "password":
        return "••••••"
    return str(value)


_FORMATTERS = {
    TextKind: _format_text,
    NumberKind: _format_number,
    SelectKind: _format_choice,
    RadioKind: _format_choice,
    MultiSelectKind: _format_multi,
    SwitchKind: _format_switch,
    DateKind: _format_date,
    DateRangeKind: _format_range,
    CustomKind: _format_text,
}


def format_field_value(
    field: FieldDescriptor,
    value: Any,
    options: Sequence[Option] = (),
) -> str:
    """Formatea el valor de un campo para mostrar."""
    if is_empty_value(value):
        return "-"

    formatter = _FORMATTERS.get(type(field.kind), _format_text)
    text = formatter(field, value, options)

    if field.unit:
        text += f" {field.unit}"
    return text


def option_labels(options: Sequence[Option]) -> List[str]:
    return [opt.label for opt in options]
