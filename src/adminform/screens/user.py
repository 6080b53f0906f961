"""Pantalla de usuarios."""

from typing import Any, Dict, List, Mapping

from adminform.form.models import (
    FieldDescriptor, MultiSelectKind, RadioKind, SelectKind, SwitchKind, TextKind,
)
from adminform.form.state import has_record_id

from .base import Loaders, Screen, chain, clean_str, matches, max_length, not_blank, to_int, with_id

GENDER_OPTIONS = [
    {"label": "Masculino", "value": 1},
    {"label": "Femenino", "value": 2},
    {"label": "No indica", "value": 0},
]

MOBILE_PATTERN = r"^1[3-9]\d{9}$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"


def user_fields(is_edit: bool = False, loaders: Loaders = None) -> List[FieldDescriptor]:
    loaders = loaders or {}
    return [
        FieldDescriptor(
            key="username",
            label="Usuario",
            required=True,
            validate=chain(
                not_blank("El usuario no puede estar vacío"),
                max_length(50, "El usuario no puede superar 50 caracteres"),
            ),
            disabled=is_edit,
        ),
        FieldDescriptor(
            key="nickname",
            label="Nombre visible",
            required=True,
            validate=max_length(50, "El nombre no puede superar 50 caracteres"),
        ),
        FieldDescriptor(
            key="deptId",
            label="Departamento",
            kind=SelectKind(load_options=loaders.get("deptId")),
            required=True,
        ),
        FieldDescriptor(
            key="gender",
            label="Género",
            kind=RadioKind(options=GENDER_OPTIONS),
            default=0,
        ),
        FieldDescriptor(
            key="roleIds",
            label="Roles",
            kind=MultiSelectKind(load_options=loaders.get("roleIds")),
        ),
        FieldDescriptor(
            key="mobile",
            label="Celular",
            validate=matches(MOBILE_PATTERN, "Ingrese un número de celular válido"),
        ),
        FieldDescriptor(
            key="email",
            label="Correo",
            kind=TextKind(input_type="email"),
            validate=matches(EMAIL_PATTERN, "Ingrese un correo válido"),
        ),
        FieldDescriptor(
            key="status",
            label="Habilitado",
            kind=SwitchKind(),
            default=True,
        ),
        FieldDescriptor(
            key="password",
            label="Contraseña",
            kind=TextKind(input_type="password", max_length=32),
            required=True,
            show=lambda values: not is_edit,
        ),
    ]


def transform_user(values: Mapping[str, Any], record_id: Any = None) -> Dict[str, Any]:
    """Roles como enteros y estado como 1/0; la contraseña solo al crear."""
    payload = {
        "username": clean_str(values.get("username")),
        "nickname": clean_str(values.get("nickname")),
        "deptId": values.get("deptId"),
        "gender": to_int(values.get("gender"), 0),
        "roleIds": [to_int(v, 0) for v in values.get("roleIds") or []],
        "mobile": clean_str(values.get("mobile")),
        "email": clean_str(values.get("email")),
        "status": 1 if values.get("status") else 0,
    }
    if not has_record_id(record_id):
        payload["password"] = values.get("password") or ""
    return with_id(payload, record_id)


USER_SCREEN = Screen(
    name="user",
    create_title="Nuevo usuario",
    edit_title="Editar usuario",
    fields=user_fields,
    transform=transform_user,
    description="Cuentas de usuario",
)
