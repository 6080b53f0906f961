"""Excepciones del motor de formularios.

Los errores de validación por campo nunca se lanzan: viven en el mapa de
errores del formulario. El resto de la taxonomía hereda de AdminFormError.
"""

from typing import Any, Dict, Optional


class AdminFormError(Exception):
    """Excepción base del paquete."""

    error_code: str = "FRM000"

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        error_code: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if error_code:
            self.error_code = error_code

    def __str__(self) -> str:
        parts = [f"[{self.error_code}] {self.message}"]
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            parts.append(f"({detail_str})")
        return " ".join(parts)


class DescriptorError(AdminFormError):
    """Descriptor de campo mal formado o clave inexistente.

    Ejemplos:
        - claves duplicadas en el registro
        - options y load_options definidos a la vez
        - campo CUSTOM sin render
        - clave que no pertenece al tipo de registro
    """

    error_code = "FRM001"

    def __init__(self, message: str, key: Optional[str] = None):
        details = {"key": key} if key is not None else None
        super().__init__(message, details)
        self.key = key


class FormStateError(AdminFormError):
    """Operación no permitida en la fase actual del formulario."""

    error_code = "FRM002"

    def __init__(self, message: str, phase: Optional[str] = None):
        details = {"phase": phase} if phase is not None else None
        super().__init__(message, details)
        self.phase = phase


class OptionLoadError(AdminFormError):
    """Fallo al resolver las opciones de un campo.

    El motor lo registra en el log y deja la lista de opciones vacía;
    nunca llega al llamador.
    """

    error_code = "FRM010"

    def __init__(self, message: str, key: Optional[str] = None):
        details = {"key": key} if key is not None else None
        super().__init__(message, details)
        self.key = key


class RecordLoadError(AdminFormError):
    """Fallo al cargar el registro a editar.

    El formulario queda con los valores por defecto.
    """

    error_code = "FRM011"

    def __init__(self, message: str, record_id: Any = None):
        details = {"record_id": record_id} if record_id is not None else None
        super().__init__(message, details)
        self.record_id = record_id


class SubmitError(AdminFormError):
    """Fallo del colaborador de envío; se propaga al llamador."""

    error_code = "FRM020"

    def __init__(self, message: str, mode: Optional[str] = None, record_id: Any = None):
        details = {}
        if mode is not None:
            details["mode"] = mode
        if record_id is not None:
            details["record_id"] = record_id
        super().__init__(message, details)
        self.mode = mode
        self.record_id = record_id
