"""
Fachadas públicas del motor: GenericForm y AdminForm.

GenericForm se conecta a colaboradores de datos (load_by_id, create,
update) y elige crear o actualizar según haya identificador de registro.
AdminForm delega todo el despacho en un único on_submit; la pantalla
decide a qué endpoint llamar.
"""

from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Union

from adminform.config import FormSettings

from .models import FieldDescriptor, FormMode, FormPhase, FormSnapshot, FormValidator
from .registry import FieldRegistry
from .state import FormStateContainer
from .submission import FormOperations, SubmissionController, Transform


class GenericForm:
    """Formulario genérico: estado + envío detrás de una sola interfaz."""

    def __init__(
        self,
        fields: Union[FieldRegistry, Iterable[FieldDescriptor]],
        title: str = "",
        operations: Optional[FormOperations] = None,
        transform: Optional[Transform] = None,
        on_submit: Optional[Callable[[Dict[str, Any]], Any]] = None,
        on_success: Optional[Callable[[], Any]] = None,
        on_cancel: Optional[Callable[[], Any]] = None,
        form_validator: Optional[FormValidator] = None,
        record_type: Any = None,
        settings: Optional[FormSettings] = None,
    ):
        self.operations = operations or FormOperations()
        self.state = FormStateContainer(
            fields,
            title=title,
            record_type=record_type,
            settings=settings,
            load_by_id=self.operations.load_by_id,
            form_validator=form_validator,
            on_cancel=on_cancel,
        )
        self.controller = SubmissionController(
            self.state,
            create=self.operations.create,
            update=self.operations.update,
            transform=transform,
            on_submit=on_submit,
            on_success=on_success,
        )

    # Estado

    @property
    def registry(self) -> FieldRegistry:
        return self.state.registry

    @property
    def values(self) -> Dict[str, Any]:
        return dict(self.state.values)

    @property
    def errors(self) -> Dict[str, str]:
        return dict(self.state.errors)

    @property
    def phase(self) -> FormPhase:
        return self.state.phase

    @property
    def mode(self) -> FormMode:
        return self.state.mode

    @property
    def in_flight(self) -> bool:
        return self.state.in_flight

    def options_for(self, key: str):
        """Opciones resueltas de un campo de elección."""
        return self.snapshot().options.get(key, [])

    # Ciclo de vida

    async def open(self, record_id: Any = None, initial_data: Optional[Mapping[str, Any]] = None) -> None:
        await self.state.open(record_id=record_id, initial_data=initial_data)

    async def reload(self, record_id: Any = None, initial_data: Optional[Mapping[str, Any]] = None) -> None:
        await self.state.reload(record_id=record_id, initial_data=initial_data)

    def close(self) -> None:
        self.state.close()

    def cancel(self) -> None:
        self.state.cancel()

    def reset(self) -> None:
        self.state.reset()

    # Edición

    def set_value(self, key: str, value: Any) -> Optional[str]:
        return self.state.set_value(key, value)

    def update_values(self, changes: Mapping[str, Any]) -> Dict[str, str]:
        return self.state.update_values(changes)

    def validate(self) -> Dict[str, str]:
        return self.state.validate()

    async def submit(self) -> bool:
        return await self.controller.submit()

    def snapshot(self) -> FormSnapshot:
        return self.state.snapshot()


class AdminForm(GenericForm):
    """
    Formulario de administración con un único colaborador de envío.

    on_submit recibe el payload transformado en ambos modos; el modo y el
    identificador están disponibles en form.mode y form.state.record_id.
    """

    def __init__(
        self,
        fields: Union[FieldRegistry, Iterable[FieldDescriptor]],
        on_submit: Callable[[Dict[str, Any]], Any],
        title: str = "",
        transform: Optional[Transform] = None,
        on_success: Optional[Callable[[], Any]] = None,
        on_cancel: Optional[Callable[[], Any]] = None,
        form_validator: Optional[FormValidator] = None,
        load_by_id: Optional[Callable[[Any], Any]] = None,
        record_type: Any = None,
        settings: Optional[FormSettings] = None,
    ):
        super().__init__(
            fields,
            title=title,
            operations=FormOperations(load_by_id=load_by_id),
            transform=transform,
            on_submit=on_submit,
            on_success=on_success,
            on_cancel=on_cancel,
            form_validator=form_validator,
            record_type=record_type,
            settings=settings,
        )
