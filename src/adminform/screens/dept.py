"""Pantalla de departamentos."""

from typing import Any, Dict, List, Mapping

from adminform.form.models import FieldDescriptor, NumberKind, RadioKind, SelectKind

from .base import (
    STATUS_OPTIONS, Loaders, Screen, chain, clean_str, in_range, matches,
    max_length, not_blank, to_int, with_id,
)


def dept_fields(is_edit: bool = False, loaders: Loaders = None) -> List[FieldDescriptor]:
    loaders = loaders or {}
    return [
        FieldDescriptor(
            key="parentId",
            label="Departamento superior",
            kind=SelectKind(load_options=loaders.get("parentId")),
            default=0,
        ),
        FieldDescriptor(
            key="name",
            label="Nombre",
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
            key="sort",
            label="Orden",
            kind=NumberKind(min_value=0, max_value=999, integer=True),
            required=True,
            default=1,
            validate=in_range(0, 999, "El orden debe estar entre 0 y 999"),
        ),
        FieldDescriptor(
            key="status",
            label="Estado",
            kind=RadioKind(options=STATUS_OPTIONS),
            required=True,
            default=1,
        ),
    ]


def transform_dept(values: Mapping[str, Any], record_id: Any = None) -> Dict[str, Any]:
    payload = {
        "parentId": to_int(values.get("parentId"), 0),
        "name": clean_str(values.get("name")),
        "code": clean_str(values.get("code")),
        "sort": to_int(values.get("sort"), 1),
        "status": to_int(values.get("status"), 1),
    }
    return with_id(payload, record_id)


def validate_dept(values: Mapping[str, Any]) -> Dict[str, str]:
    """Un departamento no puede ser su propio superior."""
    record_id = values.get("id")
    if record_id is not None and values.get("parentId") == record_id:
        return {"parentId": "Un departamento no puede ser su propio superior"}
    return {}


DEPT_SCREEN = Screen(
    name="dept",
    create_title="Nuevo departamento",
    edit_title="Editar departamento",
    fields=dept_fields,
    transform=transform_dept,
    form_validator=validate_dept,
    description="Árbol de departamentos",
)
