"""Pantalla de roles."""

from typing import Any, Dict, List, Mapping

from adminform.form.models import FieldDescriptor, NumberKind, RadioKind, SelectKind

from .base import (
    STATUS_OPTIONS, Loaders, Screen, chain, clean_str, in_range, matches,
    max_length, not_blank, to_int, with_id,
)

DATA_SCOPE_OPTIONS = [
    {"label": "Todos los datos", "value": 1},
    {"label": "Departamento y subdepartamentos", "value": 2},
    {"label": "Solo su departamento", "value": 3},
    {"label": "Solo datos propios", "value": 4},
]


def role_fields(is_edit: bool = False, loaders: Loaders = None) -> List[FieldDescriptor]:
    return [
        FieldDescriptor(
            key="name",
            label="Nombre del rol",
            required=True,
            validate=chain(
                not_blank("El nombre no puede estar vacío"),
                max_length(50, "El nombre no puede superar 50 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="code",
            label="Código",
            required=True,
            help_text="Mayúsculas, números y guion bajo",
            validate=chain(
                matches(r"^[A-Z0-9_]+$", "El código solo admite mayúsculas, números y guion bajo"),
                max_length(20, "El código no puede superar 20 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="dataScope",
            label="Alcance de datos",
            kind=SelectKind(options=DATA_SCOPE_OPTIONS),
            required=True,
            default=2,
        ),
        FieldDescriptor(
            key="status",
            label="Estado",
            kind=RadioKind(options=STATUS_OPTIONS),
            required=True,
            default=1,
        ),
        FieldDescriptor(
            key="sort",
            label="Orden",
            kind=NumberKind(min_value=0, max_value=999, integer=True),
            required=True,
            default=1,
            validate=in_range(0, 999, "El orden debe estar entre 0 y 999"),
        ),
    ]


def transform_role(values: Mapping[str, Any], record_id: Any = None) -> Dict[str, Any]:
    payload = {
        "name": clean_str(values.get("name")),
        "code": clean_str(values.get("code")),
        "dataScope": to_int(values.get("dataScope"), 2),
        "status": to_int(values.get("status"), 1),
        "sort": to_int(values.get("sort"), 1),
    }
    return with_id(payload, record_id)


ROLE_SCREEN = Screen(
    name="role",
    create_title="Nuevo rol",
    edit_title="Editar rol",
    fields=role_fields,
    transform=transform_role,
    description="Roles y alcance de datos",
)
