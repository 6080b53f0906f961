"""
Modelos de datos del motor de formularios.

Un FieldDescriptor describe un campo: clave, etiqueta, tipo (variante de
FieldKind con solo los datos que ese tipo necesita), restricciones y
comportamiento (validación propia, visibilidad condicional).
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import (
    Any, Awaitable, Callable, ClassVar, Dict, List, Mapping, Optional,
    Sequence, Tuple, Union, get_args,
)

from .errors import DescriptorError


class FieldType(str, Enum):
    """Etiquetas de tipo de campo."""
    TEXT = "text"
    NUMBER = "number"
    SELECT = "select"
    MULTI_SELECT = "multiSelect"
    SWITCH = "switch"
    DATE = "date"
    DATE_RANGE = "dateRange"
    RADIO = "radio"
    CUSTOM = "custom"


class FieldStatus(Enum):
    """Estado visual de un campo en un snapshot."""
    EMPTY = "empty"
    FILLED = "filled"
    INVALID = "invalid"
    OPTIONAL = "optional"


class FormMode(str, Enum):
    """Modo de envío según exista o no un identificador de registro."""
    CREATE = "create"
    UPDATE = "update"


class FormPhase(str, Enum):
    """Fases del ciclo de vida de una instancia de formulario."""
    CLOSED = "closed"
    OPENING = "opening"
    EDITING = "editing"
    VALIDATING = "validating"
    SUBMITTING = "submitting"


@dataclass(frozen=True)
class Option:
    """Opción seleccionable de un campo de elección."""
    label: str
    value: Any
    disabled: bool = False

    @classmethod
    def coerce(cls, raw: Any) -> "Option":
        """Acepta Option, dict ({label|name, value}) o tupla (label, value)."""
        if isinstance(raw, Option):
            return raw
        if isinstance(raw, Mapping):
            label = raw.get("label", raw.get("name"))
            if label is None or "value" not in raw:
                raise DescriptorError(f"Opción sin label/value: {raw!r}")
            return cls(str(label), raw["value"], bool(raw.get("disabled", False)))
        if isinstance(raw, (tuple, list)) and len(raw) == 2:
            return cls(str(raw[0]), raw[1])
        raise DescriptorError(f"Opción no reconocida: {raw!r}")


def coerce_options(raw: Optional[Sequence[Any]]) -> Tuple[Option, ...]:
    """Normaliza una secuencia de opciones a una tupla de Option."""
    if not raw:
        return ()
    return tuple(Option.coerce(item) for item in raw)


OptionsLoader = Callable[[], Union[Sequence[Any], Awaitable[Sequence[Any]]]]
FieldValidator = Callable[[Any, Mapping[str, Any]], Optional[str]]
VisibilityPredicate = Callable[[Mapping[str, Any]], bool]
FormValidator = Callable[[Mapping[str, Any]], Mapping[str, str]]
RenderCallback = Callable[[Any, Callable[[Any], None], Mapping[str, Any]], Any]


# ============================================================================
# Variantes de tipo de campo
# ============================================================================

@dataclass(frozen=True)
class TextKind:
    """Texto libre. input_type: text, textarea, email o password."""
    input_type: str = "text"
    rows: int = 4
    max_length: Optional[int] = None

    field_type: ClassVar[FieldType] = FieldType.TEXT

    def __post_init__(self):
        if self.input_type not in ("text", "textarea", "email", "password"):
            raise DescriptorError(f"input_type desconocido: {self.input_type}")


@dataclass(frozen=True)
class NumberKind:
    """Número con rango opcional."""
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    step: Optional[float] = None
    integer: bool = False

    field_type: ClassVar[FieldType] = FieldType.NUMBER


@dataclass(frozen=True)
class ChoiceKind:
    """Base de los tipos de elección: opciones estáticas o cargador."""
    options: Tuple[Option, ...] = ()
    load_options: Optional[OptionsLoader] = None

    field_type: ClassVar[FieldType] = FieldType.SELECT

    def __post_init__(self):
        normalized = coerce_options(self.options)
        object.__setattr__(self, "options", normalized)
        if normalized and self.load_options is not None:
            raise DescriptorError("options y load_options son excluyentes")


@dataclass(frozen=True)
class SelectKind(ChoiceKind):
    """Selección simple."""
    field_type: ClassVar[FieldType] = FieldType.SELECT


@dataclass(frozen=True)
class MultiSelectKind(ChoiceKind):
    """Selección múltiple; el valor es una lista."""
    field_type: ClassVar[FieldType] = FieldType.MULTI_SELECT


@dataclass(frozen=True)
class RadioKind(ChoiceKind):
    """Grupo de radio; direction: horizontal o vertical."""
    direction: str = "horizontal"

    field_type: ClassVar[FieldType] = FieldType.RADIO


@dataclass(frozen=True)
class SwitchKind:
    """Interruptor booleano."""
    field_type: ClassVar[FieldType] = FieldType.SWITCH


@dataclass(frozen=True)
class DateKind:
    """Fecha simple."""
    date_format: str = "%Y-%m-%d"

    field_type: ClassVar[FieldType] = FieldType.DATE


@dataclass(frozen=True)
class DateRangeKind:
    """Rango de fechas; el valor es un par (inicio, fin)."""
    date_format: str = "%Y-%m-%d"

    field_type: ClassVar[FieldType] = FieldType.DATE_RANGE


@dataclass(frozen=True)
class CustomKind:
    """Widget provisto por la pantalla: render(value, on_change, values)."""
    render: RenderCallback

    field_type: ClassVar[FieldType] = FieldType.CUSTOM

    def __post_init__(self):
        if not callable(self.render):
            raise DescriptorError("Campo custom requiere un render invocable")


FieldKind = Union[
    TextKind, NumberKind, SelectKind, MultiSelectKind, SwitchKind,
    DateKind, DateRangeKind, RadioKind, CustomKind,
]

FIELD_KINDS = get_args(FieldKind)
CHOICE_KINDS = (SelectKind, MultiSelectKind, RadioKind)


@dataclass(frozen=True)
class FieldDescriptor:
    """Definición de un campo del formulario."""
    key: str
    label: str
    kind: FieldKind = field(default_factory=TextKind)
    required: bool = False
    default: Any = None  # None: sin valor por defecto
    validate: Optional[FieldValidator] = None
    show: Optional[VisibilityPredicate] = None
    placeholder: str = ""
    help_text: str = ""
    unit: str = ""
    disabled: bool = False

    def __post_init__(self):
        if not self.key:
            raise DescriptorError("Descriptor sin clave")
        if not isinstance(self.kind, FIELD_KINDS):
            raise DescriptorError(
                f"Tipo de campo no soportado: {type(self.kind).__name__}", key=self.key
            )

    @property
    def field_type(self) -> FieldType:
        return self.kind.field_type

    @property
    def is_choice(self) -> bool:
        return isinstance(self.kind, CHOICE_KINDS)

    @property
    def static_options(self) -> Tuple[Option, ...]:
        """Opciones declaradas en el descriptor (vacío si no es de elección)."""
        if self.is_choice:
            return self.kind.options
        return ()

    @property
    def options_loader(self) -> Optional[OptionsLoader]:
        if self.is_choice:
            return self.kind.load_options
        return None


@dataclass
class SubmissionState:
    """Estado del envío."""
    in_flight: bool = False
    mode: FormMode = FormMode.CREATE


@dataclass(frozen=True)
class FormSnapshot:
    """Vista inmutable del formulario para un renderer externo."""
    title: str
    phase: FormPhase
    mode: FormMode
    record_id: Any
    in_flight: bool
    submit_label: str
    fields: Tuple[FieldDescriptor, ...]
    values: Dict[str, Any]
    errors: Dict[str, str]
    visible_keys: Tuple[str, ...]
    options: Dict[str, List[Option]]
    layout: str = "inline"

    def is_visible(self, key: str) -> bool:
        return key in self.visible_keys

    def visible_fields(self) -> List[FieldDescriptor]:
        return [f for f in self.fields if f.key in self.visible_keys]
