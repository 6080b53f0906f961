"""
Motor de formularios declarativo.

Las pantallas describen sus campos con FieldDescriptor y obtienen carga,
visibilidad condicional, validación y envío de AdminForm / GenericForm.
"""

from .errors import (
    AdminFormError,
    DescriptorError,
    FormStateError,
    OptionLoadError,
    RecordLoadError,
    SubmitError,
)
from .models import (
    FieldType,
    FieldStatus,
    FormMode,
    FormPhase,
    Option,
    TextKind,
    NumberKind,
    SelectKind,
    MultiSelectKind,
    SwitchKind,
    DateKind,
    DateRangeKind,
    RadioKind,
    CustomKind,
    FieldDescriptor,
    SubmissionState,
    FormSnapshot,
)
from .registry import FieldRegistry
from .visibility import is_visible, visible_fields
from .options import OptionCache, OptionLoader, resolve_options
from .validators import validate_form, format_field_value, coerce_input, is_empty_value
from .state import FormStateContainer
from .submission import FormOperations, SubmissionController
from .engine import GenericForm, AdminForm

__all__ = [
    # errores
    "AdminFormError",
    "DescriptorError",
    "FormStateError",
    "OptionLoadError",
    "RecordLoadError",
    "SubmitError",
    # modelos
    "FieldType",
    "FieldStatus",
    "FormMode",
    "FormPhase",
    "Option",
    "TextKind",
    "NumberKind",
    "SelectKind",
    "MultiSelectKind",
    "SwitchKind",
    "DateKind",
    "DateRangeKind",
    "RadioKind",
    "CustomKind",
    "FieldDescriptor",
    "SubmissionState",
    "FormSnapshot",
    # componentes
    "FieldRegistry",
    "is_visible",
    "visible_fields",
    "OptionCache",
    "OptionLoader",
    "resolve_options",
    "validate_form",
    "format_field_value",
    "coerce_input",
    "is_empty_value",
    "FormStateContainer",
    "FormOperations",
    "SubmissionController",
    "GenericForm",
    "AdminForm",
]
