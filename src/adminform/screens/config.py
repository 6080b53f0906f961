"""Pantalla de configuración del sistema."""

from typing import Any, Dict, List, Mapping

from adminform.form.models import FieldDescriptor, TextKind

from .base import Loaders, Screen, chain, clean_str, matches, max_length, not_blank, with_id


def config_fields(is_edit: bool = False, loaders: Loaders = None) -> List[FieldDescriptor]:
    return [
        FieldDescriptor(
            key="configName",
            label="Nombre de configuración",
            required=True,
            placeholder="Ingrese el nombre",
            validate=chain(
                not_blank("El nombre no puede estar vacío"),
                max_length(50, "El nombre no puede superar 50 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="configKey",
            label="Clave",
            required=True,
            placeholder="ej: system.name",
            help_text="Solo letras, números, guion bajo y punto",
            validate=chain(
                matches(r"^[a-zA-Z0-9_.]+$", "La clave solo admite letras, números, guion bajo y punto"),
                max_length(100, "La clave no puede superar 100 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="configValue",
            label="Valor",
            kind=TextKind(input_type="textarea"),
            required=True,
            validate=chain(
                not_blank("El valor no puede estar vacío"),
                max_length(500, "El valor no puede superar 500 caracteres"),
            ),
        ),
        FieldDescriptor(
            key="remark",
            label="Observaciones",
            kind=TextKind(input_type="textarea"),
            validate=max_length(200, "Las observaciones no pueden superar 200 caracteres"),
        ),
    ]


def transform_config(values: Mapping[str, Any], record_id: Any = None) -> Dict[str, Any]:
    payload = {
        "configName": clean_str(values.get("configName")),
        "configKey": clean_str(values.get("configKey")),
        "configValue": clean_str(values.get("configValue")),
    }
    if values.get("remark"):
        payload["remark"] = clean_str(values.get("remark"))
    return with_id(payload, record_id)


CONFIG_SCREEN = Screen(
    name="config",
    create_title="Nueva configuración",
    edit_title="Editar configuración",
    fields=config_fields,
    transform=transform_config,
    description="Parámetros clave/valor del sistema",
)
