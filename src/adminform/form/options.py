"""
Carga y caché de opciones de campos de elección.

Cada cargador se invoca una vez al abrir el formulario; todos corren en
paralelo y cada uno es un dominio de fallo aislado: si falla, el campo
queda sin opciones y los demás siguen.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Iterable, List, Optional

from .errors import OptionLoadError
from .models import FieldDescriptor, Option, coerce_options

logger = logging.getLogger(__name__)


class OptionCache:
    """
    Opciones resueltas por clave de campo.

    Se limpia al reabrir el formulario. Las opciones estáticas de un
    descriptor no se guardan aquí.
    """

    def __init__(self):
        self._entries: Dict[str, List[Option]] = {}

    def get(self, key: str) -> Optional[List[Option]]:
        entry = self._entries.get(key)
        return list(entry) if entry is not None else None

    def set(self, key: str, options: Iterable[Option]) -> None:
        self._entries[key] = list(options)

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def resolve_options(field: FieldDescriptor, cache: OptionCache) -> List[Option]:
    """Opciones a mostrar: estáticas, luego caché, luego lista vacía."""
    if field.static_options:
        return list(field.static_options)
    cached = cache.get(field.key)
    return cached if cached is not None else []


async def _call_loader(field: FieldDescriptor) -> List[Option]:
    """Invoca el cargador (síncrono o asíncrono) y normaliza el resultado."""
    result = field.options_loader()
    if inspect.isawaitable(result):
        result = await result
    if result is None:
        return []
    try:
        return list(coerce_options(result))
    except Exception as exc:
        raise OptionLoadError(f"Opciones inválidas: {exc}", key=field.key) from exc


async def load_field_options(field: FieldDescriptor) -> List[Option]:
    """
    Resuelve las opciones de un campo sin propagar errores.

    Un fallo se registra en el log y degrada a lista vacía.
    """
    try:
        return await _call_loader(field)
    except asyncio.CancelledError:
        raise
    except Exception as exc:
        logger.warning("No se pudieron cargar las opciones de %s: %s", field.key, exc)
        return []


class OptionLoader:
    """Lanza los cargadores de opciones de un formulario en paralelo."""

    def __init__(self, fields: Iterable[FieldDescriptor]):
        self.fields = [f for f in fields if f.options_loader is not None]

    async def load_all(
        self,
        cache: OptionCache,
        is_current: Optional[Callable[[], bool]] = None,
    ) -> Dict[str, List[Option]]:
        """
        Carga todas las opciones y las escribe en la caché.

        Args:
            cache: Caché destino
            is_current: Si retorna False al terminar, el resultado es de una
                apertura anterior y se descarta

        Returns:
            Diccionario clave -> opciones resueltas (vacío si se descartó)
        """
        if not self.fields:
            return {}

        results = await asyncio.gather(*(load_field_options(f) for f in self.fields))

        if is_current is not None and not is_current():
            logger.debug("Descartando opciones de una apertura anterior")
            return {}

        loaded: Dict[str, Any] = {}
        for fld, options in zip(self.fields, results):
            cache.set(fld.key, options)
            loaded[fld.key] = options
        return loaded
