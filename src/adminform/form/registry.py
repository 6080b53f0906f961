"""
Registro ordenado de descriptores de un formulario.
"""

import dataclasses
from typing import Any, Iterable, Iterator, List, Optional, Tuple, get_type_hints

from .errors import DescriptorError
from .models import FieldDescriptor


def record_keys(record_type: Any) -> Optional[frozenset]:
    """
    Claves declaradas por un tipo de registro.

    Soporta modelos Pydantic, dataclasses y TypedDict. Retorna None si el
    tipo no declara sus claves (ej: dict).
    """
    if record_type is None:
        return None
    model_fields = getattr(record_type, "model_fields", None)
    if isinstance(model_fields, dict):
        return frozenset(model_fields)
    if dataclasses.is_dataclass(record_type):
        return frozenset(f.name for f in dataclasses.fields(record_type))
    if hasattr(record_type, "__required_keys__"):
        return frozenset(get_type_hints(record_type))
    return None


class FieldRegistry:
    """Lista inmutable y ordenada de descriptores con búsqueda por clave."""

    def __init__(self, fields: Iterable[FieldDescriptor], record_type: Any = None):
        self._fields: Tuple[FieldDescriptor, ...] = tuple(fields)
        self._by_key = {}
        allowed = record_keys(record_type)

        for fld in self._fields:
            if fld.key in self._by_key:
                raise DescriptorError(f"Clave duplicada: {fld.key}", key=fld.key)
            if allowed is not None and fld.key not in allowed:
                raise DescriptorError(
                    f"La clave {fld.key} no pertenece a {record_type.__name__}",
                    key=fld.key,
                )
            self._by_key[fld.key] = fld

        self.record_type = record_type

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __contains__(self, key: object) -> bool:
        return key in self._by_key

    def get(self, key: str) -> Optional[FieldDescriptor]:
        """Obtiene un descriptor por su clave."""
        return self._by_key.get(key)

    def require(self, key: str) -> FieldDescriptor:
        """Como get, pero lanza DescriptorError si la clave no existe."""
        fld = self._by_key.get(key)
        if fld is None:
            raise DescriptorError(f"Campo desconocido: {key}", key=key)
        return fld

    def keys(self) -> List[str]:
        return [f.key for f in self._fields]

    @property
    def fields(self) -> Tuple[FieldDescriptor, ...]:
        return self._fields

    def with_loaders(self) -> List[FieldDescriptor]:
        """Descriptores de elección con cargador de opciones."""
        return [f for f in self._fields if f.options_loader is not None]

    def defaults(self) -> dict:
        """Valores por defecto de los campos que declaran uno."""
        return {f.key: f.default for f in self._fields if f.default is not None}
