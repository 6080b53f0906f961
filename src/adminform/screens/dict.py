"""Pantallas de diccionarios y de ítems de diccionario."""

from typing import Any, Dict, List, Mapping

from adminform.form.models import FieldDescriptor, NumberKind, RadioKind, SelectKind, TextKind

from .base import (
    STATUS_OPTIONS, Loaders, Screen, chain, clean_str, in_range, matches,
    max_length, not_blank, to_int, with_id,
)

TAG_TYPE_OPTIONS = [
    {"label": "success", "value": "success"},
    {"label": "warning", "value": "warning"},
    {"label": "info", "value": "info"},
    {"label": "primary", "value": "primary"},
    {"label": "danger", "value": "danger"},
    {"label": "Ninguno", "value": ""},
]


def dict_fields(is_edit: bool = False, loaders: Loaders = None) -> List[FieldDescriptor]:
    return [
        FieldDescriptor(
            key="name",
            label="Nombre del diccionario",
            required=True,
            validate=chain(
                not_blank("El nombre no puede estar vacío"),
                max_length(50, "El nombre no puede superar 50 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="dictCode",
            label="Código",
            required=True,
            validate=chain(
                matches(r"^[a-zA-Z0-9_]+$", "El código solo admite letras, números y guion bajo"),
                max_length(50, "El código no puede superar 50 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="status",
            label="Estado",
            kind=RadioKind(options=STATUS_OPTIONS),
            required=True,
            default=1,
        ),
        FieldDescriptor(
            key="remark",
            label="Observaciones",
            kind=TextKind(input_type="textarea"),
            validate=max_length(200, "Las observaciones no pueden superar 200 caracteres"),
        ),
    ]


def transform_dict(values: Mapping[str, Any], record_id: Any = None) -> Dict[str, Any]:
    payload = {
        "name": clean_str(values.get("name")),
        "dictCode": clean_str(values.get("dictCode")),
        "status": to_int(values.get("status"), 1),
    }
    if values.get("remark"):
        payload["remark"] = clean_str(values.get("remark"))
    return with_id(payload, record_id)


def dict_item_fields(is_edit: bool = False, loaders: Loaders = None) -> List[FieldDescriptor]:
    return [
        FieldDescriptor(
            key="label",
            label="Etiqueta",
            required=True,
            validate=chain(
                not_blank("Ingrese la etiqueta"),
                max_length(50, "La etiqueta no puede superar 50 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="value",
            label="Valor",
            required=True,
            validate=chain(
                not_blank("Ingrese el valor"),
                max_length(50, "El valor no puede superar 50 caracteres"),
            ),
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
            default=1,
            validate=in_range(0, 999, "El orden debe estar entre 0 y 999"),
        ),
        FieldDescriptor(
            key="tagType",
            label="Tipo de etiqueta",
            kind=SelectKind(options=TAG_TYPE_OPTIONS),
        ),
        FieldDescriptor(
            key="remark",
            label="Observaciones",
            kind=TextKind(input_type="textarea"),
            validate=max_length(200, "Las observaciones no pueden superar 200 caracteres"),
        ),
    ]


def transform_dict_item(values: Mapping[str, Any], record_id: Any = None) -> Dict[str, Any]:
    payload = {
        "label": clean_str(values.get("label")),
        "value": clean_str(values.get("value")),
        "sort": to_int(values.get("sort"), 1),
        "status": to_int(values.get("status"), 1),
    }
    if values.get("tagType") is not None:
        payload["tagType"] = clean_str(values.get("tagType"))
    if values.get("remark"):
        payload["remark"] = clean_str(values.get("remark"))
    return with_id(payload, record_id)


DICT_SCREEN = Screen(
    name="dict",
    create_title="Nuevo diccionario",
    edit_title="Editar diccionario",
    fields=dict_fields,
    transform=transform_dict,
    description="Tipos de diccionario",
)

DICT_ITEM_SCREEN = Screen(
    name="dict-item",
    create_title="Nuevo ítem de diccionario",
    edit_title="Editar ítem de diccionario",
    fields=dict_item_fields,
    transform=transform_dict_item,
    description="Valores de un diccionario",
)
