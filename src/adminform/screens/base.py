"""
Definición común de pantallas CRUD y validadores reutilizables.

Cada pantalla aporta sus descriptores, su transformación de salida y,
opcionalmente, un validador de formulario. Los cargadores de opciones
se inyectan por clave de campo.
"""

import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Mapping, Optional

from adminform.config import FormSettings
from adminform.form.engine import GenericForm
from adminform.form.models import FieldDescriptor, FieldValidator, FormValidator
from adminform.form.state import has_record_id
from adminform.form.submission import FormOperations

Loaders = Mapping[str, Callable[[], Any]]
FieldsFactory = Callable[..., List[FieldDescriptor]]
ScreenTransform = Callable[[Mapping[str, Any], Any], Dict[str, Any]]

STATUS_OPTIONS = [
    {"label": "Habilitado", "value": 1},
    {"label": "Deshabilitado", "value": 0},
]


# =============================================================================
# VALIDADORES
# =============================================================================

def not_blank(message: str) -> FieldValidator:
    """Rechaza valores formados solo por espacios."""
    def check(value: Any, values: Mapping[str, Any]) -> Optional[str]:
        if not str(value).strip():
            return message
        return None
    return check


def max_length(limit: int, message: str) -> FieldValidator:
    def check(value: Any, values: Mapping[str, Any]) -> Optional[str]:
        if len(str(value)) > limit:
            return message
        return None
    return check


def matches(pattern: str, message: str) -> FieldValidator:
    regex = re.compile(pattern)

    def check(value: Any, values: Mapping[str, Any]) -> Optional[str]:
        if not regex.match(str(value)):
            return message
        return None
    return check


def in_range(low: float, high: float, message: str) -> FieldValidator:
    def check(value: Any, values: Mapping[str, Any]) -> Optional[str]:
        try:
            num = float(value)
        except (TypeError, ValueError):
            return message
        if not low <= num <= high:
            return message
        return None
    return check


def chain(*validators: FieldValidator) -> FieldValidator:
    """Combina validadores; retorna el primer mensaje."""
    def check(value: Any, values: Mapping[str, Any]) -> Optional[str]:
        for validator in validators:
            message = validator(value, values)
            if message:
                return message
        return None
    return check


# =============================================================================
# CONVERSIÓN DE SALIDA
# =============================================================================

def clean_str(value: Any) -> str:
    """Texto recortado; None se convierte en cadena vacía."""
    if value is None:
        return ""
    return str(value).strip()


def to_int(value: Any, default: int) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return default


def with_id(payload: Dict[str, Any], record_id: Any) -> Dict[str, Any]:
    """Incluye el identificador en modo edición."""
    if has_record_id(record_id):
        payload["id"] = record_id
    return payload


# =============================================================================
# PANTALLA
# =============================================================================

@dataclass(frozen=True)
class Screen:
    """Pantalla CRUD: descriptores, transformación y títulos."""
    name: str
    create_title: str
    edit_title: str
    fields: FieldsFactory
    transform: ScreenTransform
    form_validator: Optional[FormValidator] = None
    description: str = ""

    def title(self, is_edit: bool) -> str:
        return self.edit_title if is_edit else self.create_title

    def build_fields(self, is_edit: bool = False, loaders: Optional[Loaders] = None) -> List[FieldDescriptor]:
        return self.fields(is_edit=is_edit, loaders=loaders or {})

    def build_form(
        self,
        record_id: Any = None,
        operations: Optional[FormOperations] = None,
        loaders: Optional[Loaders] = None,
        on_submit: Optional[Callable[[Dict[str, Any]], Any]] = None,
        on_success: Optional[Callable[[], Any]] = None,
        on_cancel: Optional[Callable[[], Any]] = None,
        settings: Optional[FormSettings] = None,
    ) -> GenericForm:
        """
        Instancia el formulario de la pantalla.

        Args:
            record_id: Identificador a editar (None: crear)
            operations: Colaboradores de datos
            loaders: Cargadores de opciones por clave de campo
        """
        is_edit = has_record_id(record_id)

        # El identificador se lee al enviar: open/reload pueden cambiarlo
        def transform(values):
            return self.transform(values, form.state.record_id)

        form = GenericForm(
            self.build_fields(is_edit=is_edit, loaders=loaders),
            title=self.title(is_edit),
            operations=operations,
            transform=transform,
            on_submit=on_submit,
            on_success=on_success,
            on_cancel=on_cancel,
            form_validator=self.form_validator,
            settings=settings,
        )
        return form
