"""Pantalla de avisos."""

import re
from typing import Any, Dict, List, Mapping, Optional

from adminform.form.models import FieldDescriptor, MultiSelectKind, RadioKind, SelectKind, TextKind

from .base import Loaders, Screen, chain, clean_str, max_length, not_blank, to_int, with_id

TARGET_ALL = 1
TARGET_SPECIFIC = 2

TARGET_OPTIONS = [
    {"label": "Todos", "value": TARGET_ALL},
    {"label": "Específicos", "value": TARGET_SPECIFIC},
]

LEVEL_OPTIONS = [
    {"label": "Baja", "value": "L"},
    {"label": "Media", "value": "M"},
    {"label": "Alta", "value": "H"},
]

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(text: Any) -> str:
    """Texto visible de un contenido enriquecido."""
    if text is None:
        return ""
    return _TAG_RE.sub("", str(text)).replace("&nbsp;", " ").strip()


def targets_specific(values: Mapping[str, Any]) -> bool:
    return to_int(values.get("targetType"), TARGET_ALL) == TARGET_SPECIFIC


def _content_not_empty(value: Any, values: Mapping[str, Any]) -> Optional[str]:
    if not strip_html(value):
        return "Ingrese el contenido"
    return None


def notice_fields(is_edit: bool = False, loaders: Loaders = None) -> List[FieldDescriptor]:
    loaders = loaders or {}
    return [
        FieldDescriptor(
            key="title",
            label="Título",
            required=True,
            validate=chain(
                not_blank("El título no puede estar vacío"),
                max_length(100, "El título no puede superar 100 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="type",
            label="Tipo de aviso",
            kind=SelectKind(load_options=loaders.get("type")),
            required=True,
        ),
        FieldDescriptor(
            key="level",
            label="Nivel",
            kind=SelectKind(options=LEVEL_OPTIONS),
            default="M",
        ),
        FieldDescriptor(
            key="targetType",
            label="Destinatarios",
            kind=RadioKind(options=TARGET_OPTIONS),
            required=True,
            default=TARGET_ALL,
        ),
        FieldDescriptor(
            key="targetUserIds",
            label="Usuarios destinatarios",
            kind=MultiSelectKind(load_options=loaders.get("targetUserIds")),
            show=targets_specific,
        ),
        FieldDescriptor(
            key="content",
            label="Contenido",
            kind=TextKind(input_type="textarea", rows=8),
            required=True,
            validate=_content_not_empty,
        ),
    ]


def validate_notice(values: Mapping[str, Any]) -> Dict[str, str]:
    """Un aviso dirigido necesita al menos un usuario."""
    if targets_specific(values) and not values.get("targetUserIds"):
        return {"targetUserIds": "Seleccione al menos un usuario"}
    return {}


def transform_notice(values: Mapping[str, Any], record_id: Any = None) -> Dict[str, Any]:
    """Los usuarios destinatarios viajan como texto separado por comas."""
    target_type = to_int(values.get("targetType"), TARGET_ALL)
    user_ids = ""
    if target_type == TARGET_SPECIFIC:
        user_ids = ",".join(str(v) for v in values.get("targetUserIds") or [])
    payload = {
        "title": clean_str(values.get("title")),
        "type": values.get("type"),
        "level": values.get("level") or "M",
        "targetType": target_type,
        "targetUserIds": user_ids,
        "content": values.get("content") or "",
    }
    return with_id(payload, record_id)


NOTICE_SCREEN = Screen(
    name="notice",
    create_title="Nuevo aviso",
    edit_title="Editar aviso",
    fields=notice_fields,
    transform=transform_notice,
    form_validator=validate_notice,
    description="Avisos a todos o a usuarios específicos",
)
