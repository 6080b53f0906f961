"""
Controlador de envío.

Orquesta validación -> transformación -> despacho -> éxito/fallo, con una
sola solicitud en vuelo por formulario. No reintenta ni aplica timeout: un
fallo se propaga como SubmitError y los valores del usuario se conservan.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from .errors import FormStateError, SubmitError
from .models import FormMode, FormPhase
from .state import FormStateContainer, maybe_await

logger = logging.getLogger(__name__)

Transform = Callable[[Mapping[str, Any]], Dict[str, Any]]


@dataclass
class FormOperations:
    """Colaboradores de datos inyectados (sync o async)."""
    load_by_id: Optional[Callable[[Any], Any]] = None
    create: Optional[Callable[[Dict[str, Any]], Any]] = None
    update: Optional[Callable[[Any, Dict[str, Any]], Any]] = None


class SubmissionController:
    """Envía el formulario de un FormStateContainer."""

    def __init__(
        self,
        container: FormStateContainer,
        create: Optional[Callable[[Dict[str, Any]], Any]] = None,
        update: Optional[Callable[[Any, Dict[str, Any]], Any]] = None,
        transform: Optional[Transform] = None,
        on_submit: Optional[Callable[[Dict[str, Any]], Any]] = None,
        on_success: Optional[Callable[[], Any]] = None,
    ):
        self.container = container
        self.create = create
        self.update = update
        self.transform = transform
        self.on_submit = on_submit
        self.on_success = on_success

    def build_payload(self) -> Dict[str, Any]:
        """Aplica la transformación a una copia de los valores actuales."""
        values = dict(self.container.values)
        if self.transform is None:
            return values
        return self.transform(values)

    def _dispatcher(self, mode: FormMode):
        if mode == FormMode.UPDATE:
            return self.update
        return self.create

    async def submit(self) -> bool:
        """
        Intenta enviar el formulario.

        Returns:
            True si se despachó con éxito; False si ya había un envío en
            vuelo, el formulario aún no está en edición o la validación falló

        Raises:
            SubmitError: si la transformación o el colaborador fallan
            FormStateError: si el formulario está cerrado
        """
        state = self.container
        if state.submission.in_flight:
            logger.debug("Envío ignorado: ya hay uno en vuelo")
            return False
        if not state.is_open:
            raise FormStateError("No se puede enviar un formulario cerrado",
                                 phase=state.phase.value)
        if state.phase != FormPhase.EDITING:
            logger.debug("Envío ignorado: el formulario está en fase %s", state.phase.value)
            return False

        state.phase = FormPhase.VALIDATING
        errors = state.validate()
        if errors:
            state.phase = FormPhase.EDITING
            logger.debug("Envío abortado: %d campos con error", len(errors))
            return False

        generation = state.generation
        mode = state.submission.mode
        record_id = state.record_id
        state.submission.in_flight = True
        state.phase = FormPhase.SUBMITTING

        try:
            payload = self.build_payload()

            if self.on_submit is not None:
                await maybe_await(self.on_submit(payload))

            dispatch = self._dispatcher(mode)
            if dispatch is not None:
                if mode == FormMode.UPDATE:
                    result = await maybe_await(dispatch(record_id, payload))
                else:
                    result = await maybe_await(dispatch(payload))
                # Un colaborador que retorna False explícitamente rechaza el envío
                if result is False:
                    raise SubmitError("La operación fue rechazada",
                                      mode=mode.value, record_id=record_id)
        except SubmitError:
            if state.generation == generation:
                state.phase = FormPhase.EDITING
            logger.error("Envío rechazado (%s)", mode.value)
            raise
        except Exception as exc:
            if state.generation == generation:
                state.phase = FormPhase.EDITING
            logger.error("Error al enviar (%s): %s", mode.value, exc)
            raise SubmitError(f"Error al enviar el formulario: {exc}",
                              mode=mode.value, record_id=record_id) from exc
        finally:
            state.submission.in_flight = False

        if self.on_success is not None:
            self.on_success()

        if state.generation == generation:
            if state.settings.close_on_success:
                state.close()
            else:
                state.phase = FormPhase.EDITING
        return True
