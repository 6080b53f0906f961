"""
Contenedor de estado de una instancia de formulario.

Posee valores, errores, caché de opciones y estado de envío. Al abrir,
materializa los valores con precedencia estricta:

1. Registro cargado con load_by_id (si hay identificador y cargador)
2. Datos iniciales explícitos
3. Valores por defecto de cada campo

Todo trabajo asíncrono queda asociado a una "generación" de apertura; los
resultados de una generación anterior (el formulario se cerró o se abrió
para otro registro) se descartan. Las opciones siguen un ciclo aparte
que solo open, close y reset renuevan: un reload no las descarta.
"""

import asyncio
import inspect
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from adminform.config import FormSettings

from .errors import FormStateError, RecordLoadError
from .models import (
    FieldDescriptor, FormMode, FormPhase, FormSnapshot, FormValidator,
    SubmissionState,
)
from .options import OptionCache, OptionLoader, resolve_options
from .registry import FieldRegistry
from .validators import live_field_error, validate_form
from .visibility import is_visible, visible_fields

logger = logging.getLogger(__name__)

RecordLoader = Callable[[Any], Any]


def has_record_id(record_id: Any) -> bool:
    """Un identificador vacío (None o "") indica creación."""
    return record_id is not None and record_id != ""


def shallow_equal(current: Mapping[str, Any], candidate: Mapping[str, Any]) -> bool:
    """Igualdad clave a clave, sin descender en los valores."""
    if current is candidate:
        return True
    if current.keys() != candidate.keys():
        return False
    for key, value in current.items():
        other = candidate[key]
        if value is not other and value != other:
            return False
    return True


async def maybe_await(result: Any) -> Any:
    """Espera el resultado si es awaitable (colaboradores sync o async)."""
    if inspect.isawaitable(result):
        return await result
    return result


class FormStateContainer:
    """Estado de un formulario y su sincronización con colaboradores."""

    def __init__(
        self,
        fields: Union[FieldRegistry, Iterable[FieldDescriptor]],
        title: str = "",
        record_type: Any = None,
        settings: Optional[FormSettings] = None,
        load_by_id: Optional[RecordLoader] = None,
        form_validator: Optional[FormValidator] = None,
        on_cancel: Optional[Callable[[], Any]] = None,
    ):
        if isinstance(fields, FieldRegistry):
            self.registry = fields
        else:
            self.registry = FieldRegistry(fields, record_type)
        self.title = title
        self.settings = settings or FormSettings()
        self.load_by_id = load_by_id
        self.form_validator = form_validator
        self.on_cancel = on_cancel

        self.values: Dict[str, Any] = {}
        self.errors: Dict[str, str] = {}
        self.options = OptionCache()
        self.submission = SubmissionState()
        self.phase = FormPhase.CLOSED
        self.record_id: Any = None
        self._generation = 0
        self._lifecycle = 0
        self._option_loader = OptionLoader(self.registry.with_loaders())

    # ------------------------------------------------------------------
    # Generaciones
    # ------------------------------------------------------------------

    @property
    def generation(self) -> int:
        return self._generation

    def is_current(self, generation: int) -> bool:
        """True si la generación sigue activa y el formulario abierto."""
        return generation == self._generation and self.phase != FormPhase.CLOSED

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _next_lifecycle(self) -> int:
        self._lifecycle += 1
        return self._lifecycle

    def is_current_lifecycle(self, lifecycle: int) -> bool:
        """True si no hubo open, close ni reset desde que empezó el ciclo."""
        return lifecycle == self._lifecycle and self.phase != FormPhase.CLOSED

    # ------------------------------------------------------------------
    # Ciclo de vida
    # ------------------------------------------------------------------

    @property
    def is_open(self) -> bool:
        return self.phase != FormPhase.CLOSED

    @property
    def mode(self) -> FormMode:
        return self.submission.mode

    @property
    def in_flight(self) -> bool:
        return self.submission.in_flight

    def _set_record(self, record_id: Any) -> None:
        self.record_id = record_id if has_record_id(record_id) else None
        self.submission.mode = FormMode.UPDATE if has_record_id(record_id) else FormMode.CREATE

    async def open(
        self,
        record_id: Any = None,
        initial_data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Abre el formulario: materializa valores y carga opciones en paralelo.

        Args:
            record_id: Identificador del registro a editar (None: crear)
            initial_data: Datos iniciales explícitos
        """
        generation = self._next_generation()
        lifecycle = self._next_lifecycle()
        self.phase = FormPhase.OPENING
        self.errors = {}
        self.options.clear()
        self._set_record(record_id)

        await asyncio.gather(
            self._materialize(generation, record_id, initial_data),
            self._option_loader.load_all(
                self.options, is_current=lambda: self.is_current_lifecycle(lifecycle)
            ),
        )

        if self.is_current(generation):
            self.phase = FormPhase.EDITING

    async def reload(
        self,
        record_id: Any = None,
        initial_data: Optional[Mapping[str, Any]] = None,
    ) -> None:
        """
        Cambia el registro activo sin cerrar el formulario.

        Limpia los errores pero no vuelve a cargar las opciones; si la carga
        de open sigue pendiente, su resultado se conserva.
        """
        if not self.is_open:
            raise FormStateError("El formulario está cerrado", phase=self.phase.value)

        generation = self._next_generation()
        self.phase = FormPhase.OPENING
        self.errors = {}
        self._set_record(record_id)

        await self._materialize(generation, record_id, initial_data)

        if self.is_current(generation):
            self.phase = FormPhase.EDITING

    async def _materialize(
        self,
        generation: int,
        record_id: Any,
        initial_data: Optional[Mapping[str, Any]],
    ) -> None:
        """Calcula los valores iniciales según la precedencia de fuentes."""
        if has_record_id(record_id) and self.load_by_id is not None:
            # Mientras llega el registro el formulario queda con los valores por defecto
            self.commit_values(self.registry.defaults())
            try:
                record = await maybe_await(self.load_by_id(record_id))
            except asyncio.CancelledError:
                raise
            except Exception as exc:
                error = RecordLoadError(f"No se pudo cargar el registro: {exc}", record_id=record_id)
                logger.warning("%s", error)
                return

            if not self.is_current(generation):
                logger.debug("Descartando registro %s de una apertura anterior", record_id)
                return
            self.commit_values(dict(record or {}))

        elif initial_data is not None:
            self.commit_values(dict(initial_data))
        else:
            self.commit_values(self.registry.defaults())

    def commit_values(self, candidate: Mapping[str, Any]) -> bool:
        """
        Reemplaza los valores si difieren de los actuales.

        Returns:
            True si hubo cambio
        """
        if shallow_equal(self.values, candidate):
            return False
        self.values = dict(candidate)
        return True

    def close(self) -> None:
        """Cierra el formulario; invalida cualquier carga pendiente."""
        self._next_generation()
        self._next_lifecycle()
        self.phase = FormPhase.CLOSED
        self.errors = {}
        if self.settings.destroy_on_close:
            self.values = {}
            self.options.clear()

    def cancel(self) -> None:
        """Cierre iniciado por el usuario; notifica on_cancel."""
        was_open = self.is_open
        self.close()
        if was_open and self.on_cancel is not None:
            self.on_cancel()

    def reset(self) -> None:
        """Desmontaje completo. Idempotente y seguro con cargas pendientes."""
        self._next_generation()
        self._next_lifecycle()
        self.phase = FormPhase.CLOSED
        self.values = {}
        self.errors = {}
        self.options.clear()
        self.record_id = None
        self.submission.mode = FormMode.CREATE

    # ------------------------------------------------------------------
    # Edición y validación
    # ------------------------------------------------------------------

    def _ensure_open(self, action: str) -> None:
        if not self.is_open:
            raise FormStateError(f"No se puede {action}: el formulario está cerrado",
                                 phase=self.phase.value)

    def set_value(self, key: str, value: Any) -> Optional[str]:
        """
        Actualiza un campo y lo revalida solo a él.

        Returns:
            Mensaje de error del campo o None
        """
        self._ensure_open("editar")
        fld = self.registry.require(key)

        self.values = {**self.values, key: value}
        self.errors.pop(key, None)

        error = live_field_error(fld, value, self.values, self.settings.locale)
        if error:
            self.errors[key] = error
        return error

    def update_values(self, changes: Mapping[str, Any]) -> Dict[str, str]:
        """Aplica varios cambios, campo a campo."""
        for key, value in changes.items():
            self.set_value(key, value)
        return dict(self.errors)

    def validate(self) -> Dict[str, str]:
        """Validación completa; reemplaza el mapa de errores."""
        self.errors = validate_form(
            self.registry, self.values, self.form_validator, self.settings.locale
        )
        return dict(self.errors)

    def is_visible(self, key: str) -> bool:
        return is_visible(self.registry.require(key), self.values)

    def visible_fields(self):
        return visible_fields(self.registry, self.values)

    def snapshot(self) -> FormSnapshot:
        """Vista inmutable del estado actual para un renderer."""
        return FormSnapshot(
            title=self.title,
            phase=self.phase,
            mode=self.submission.mode,
            record_id=self.record_id,
            in_flight=self.submission.in_flight,
            submit_label=self.settings.submit_label(self.submission.mode == FormMode.UPDATE),
            fields=self.registry.fields,
            values=dict(self.values),
            errors=dict(self.errors),
            visible_keys=tuple(f.key for f in self.visible_fields()),
            options={
                f.key: resolve_options(f, self.options)
                for f in self.registry if f.is_choice
            },
            layout=self.settings.layout.value,
        )
