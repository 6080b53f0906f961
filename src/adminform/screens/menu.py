"""
Pantalla de menús.

Los campos visibles dependen del tipo de menú: los botones solo llevan
identificador de permiso; los directorios y enlaces, ruta e ícono; las
páginas además el componente.
"""

from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional

from adminform.form.models import FieldDescriptor, NumberKind, RadioKind, SelectKind

from .base import (
    STATUS_OPTIONS, Loaders, Screen, chain, clean_str, in_range, max_length,
    not_blank, to_int, with_id,
)


class MenuType(IntEnum):
    DIRECTORY = 1
    MENU = 2
    EXTLINK = 3
    BUTTON = 4


MENU_TYPE_OPTIONS = [
    {"label": "Directorio", "value": MenuType.DIRECTORY.value},
    {"label": "Menú", "value": MenuType.MENU.value},
    {"label": "Enlace externo", "value": MenuType.EXTLINK.value},
    {"label": "Botón", "value": MenuType.BUTTON.value},
]

VISIBLE_OPTIONS = [
    {"label": "Mostrar", "value": 1},
    {"label": "Ocultar", "value": 0},
]


def menu_type(values: Mapping[str, Any]) -> Optional[int]:
    """Tipo de menú actual; los valores llegan como número o texto."""
    raw = values.get("type")
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def is_button(values: Mapping[str, Any]) -> bool:
    return menu_type(values) == MenuType.BUTTON


def is_page(values: Mapping[str, Any]) -> bool:
    return menu_type(values) == MenuType.MENU


def menu_fields(is_edit: bool = False, loaders: Loaders = None) -> List[FieldDescriptor]:
    loaders = loaders or {}
    return [
        FieldDescriptor(
            key="name",
            label="Nombre del menú",
            required=True,
            validate=chain(
                not_blank("El nombre no puede estar vacío"),
                max_length(50, "El nombre no puede superar 50 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="type",
            label="Tipo",
            kind=RadioKind(options=MENU_TYPE_OPTIONS),
            required=True,
            default=MenuType.DIRECTORY.value,
        ),
        FieldDescriptor(
            key="parentId",
            label="Menú superior",
            kind=SelectKind(load_options=loaders.get("parentId")),
            default=0,
            show=lambda values: not is_edit,
        ),
        FieldDescriptor(
            key="path",
            label="Ruta",
            required=True,
            placeholder="ej: /system/user",
            show=lambda values: not is_button(values),
        ),
        FieldDescriptor(
            key="component",
            label="Componente",
            required=True,
            placeholder="ej: system/user/index",
            show=is_page,
        ),
        FieldDescriptor(
            key="icon",
            label="Ícono",
            show=lambda values: not is_button(values),
        ),
        FieldDescriptor(
            key="perm",
            label="Permiso",
            placeholder="ej: system:user:add",
            show=is_button,
        ),
        FieldDescriptor(
            key="sort",
            label="Orden",
            kind=NumberKind(min_value=0, max_value=999, integer=True),
            default=1,
            validate=in_range(0, 999, "El orden debe estar entre 0 y 999"),
        ),
        FieldDescriptor(
            key="status",
            label="Estado",
            kind=RadioKind(options=STATUS_OPTIONS),
            default=1,
        ),
        FieldDescriptor(
            key="visible",
            label="Visible",
            kind=RadioKind(options=VISIBLE_OPTIONS),
            default=1,
            show=lambda values: not is_button(values),
        ),
    ]


def transform_menu(values: Mapping[str, Any], record_id: Any = None) -> Dict[str, Any]:
    """Payload de menú: campos numéricos como enteros, permiso vacío como None."""
    perm = clean_str(values.get("perm"))
    payload = {
        "name": clean_str(values.get("name")),
        "type": to_int(values.get("type"), MenuType.DIRECTORY.value),
        "parentId": to_int(values.get("parentId"), 0),
        "path": clean_str(values.get("path")),
        "component": clean_str(values.get("component")),
        "icon": clean_str(values.get("icon")),
        "perm": perm or None,
        "sort": to_int(values.get("sort"), 1),
        "status": to_int(values.get("status"), 1),
        "visible": to_int(values.get("visible"), 1),
    }
    return with_id(payload, record_id)


MENU_SCREEN = Screen(
    name="menu",
    create_title="Nuevo menú",
    edit_title="Editar menú",
    fields=menu_fields,
    transform=transform_menu,
    description="Menús, páginas y botones",
)
