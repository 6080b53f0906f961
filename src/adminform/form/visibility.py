"""
Evaluación de visibilidad condicional de campos.

Los predicados se evalúan siempre contra los valores actuales, sin caché:
un predicado puede depender de cualquier otro campo.

Ocultar un campo no borra su valor. Los campos ocultos quedan fuera de la
validación y del mapa de errores, pero su dato se conserva para que el
usuario pueda alternar un interruptor sin perder lo ingresado.
"""

from typing import Any, List, Mapping

from .models import FieldDescriptor
from .registry import FieldRegistry


def is_visible(field: FieldDescriptor, values: Mapping[str, Any]) -> bool:
    """Indica si un campo se muestra con los valores dados."""
    if field.show is None:
        return True
    return bool(field.show(values))


def visible_fields(registry: FieldRegistry, values: Mapping[str, Any]) -> List[FieldDescriptor]:
    """Campos visibles, en el orden del registro."""
    return [f for f in registry if is_visible(f, values)]


def visible_keys(registry: FieldRegistry, values: Mapping[str, Any]) -> List[str]:
    return [f.key for f in visible_fields(registry, values)]


def hidden_keys(registry: FieldRegistry, values: Mapping[str, Any]) -> List[str]:
    return [f.key for f in registry if not is_visible(f, values)]
