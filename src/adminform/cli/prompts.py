"""
Prompts interactivos por tipo de campo.

Cada variante de tipo se pregunta con el control de questionary que le
corresponde; el texto ingresado se convierte con coerce_input.
"""

from typing import Any, Callable, Dict, Sequence

import questionary
from questionary import Style

from adminform.cli.theme import get_palette
from adminform.form.models import (
    CustomKind, DateKind, DateRangeKind, FieldDescriptor, MultiSelectKind,
    NumberKind, Option, RadioKind, SelectKind, SwitchKind, TextKind,
)
from adminform.form.validators import coerce_input, format_field_value, is_empty_value, option_labels


class PromptCancelled(Exception):
    """El usuario canceló el prompt (Ctrl+C)."""


def get_prompt_style() -> Style:
    """Estilo de questionary basado en el tema actual."""
    p = get_palette()
    return Style([
        ('qmark', f'fg:{p.accent} bold'),
        ('question', 'bold'),
        ('answer', f'fg:{p.success} bold'),
        ('pointer', f'fg:{p.accent} bold'),
        ('highlighted', f'fg:{p.primary} bold'),
        ('selected', f'fg:{p.success} bold'),
        ('instruction', f'fg:{p.muted} italic'),
        ('text', ''),
        ('disabled', f'fg:{p.muted} italic'),
        ('separator', f'fg:{p.border}'),
    ])


def _question(fld: FieldDescriptor) -> str:
    text = fld.label + (" *" if fld.required else "")
    if fld.unit:
        text += f" ({fld.unit})"
    return text + ":"


def _ask(question) -> Any:
    answer = question.ask()
    if answer is None:
        raise PromptCancelled()
    return answer


def _text_validator(fld: FieldDescriptor, options: Sequence[Option]) -> Callable[[str], Any]:
    def check(raw: str):
        try:
            coerce_input(fld, raw, options)
        except ValueError as e:
            return str(e)
        return True
    return check


def _default_text(fld: FieldDescriptor, value: Any, options: Sequence[Option]) -> str:
    if is_empty_value(value):
        return ""
    if isinstance(fld.kind, (DateKind, DateRangeKind)):
        return format_field_value(fld, value, options).replace(" → ", "..")
    if isinstance(value, (list, tuple)):
        return ",".join(str(v) for v in value)
    return str(value)


def _prompt_text(fld: FieldDescriptor, value: Any, options: Sequence[Option], style: Style) -> Any:
    if isinstance(fld.kind, TextKind) and fld.kind.input_type == "password":
        raw = _ask(questionary.password(_question(fld), style=style))
    else:
        raw = _ask(questionary.text(
            _question(fld),
            default=_default_text(fld, value, options),
            instruction=fld.help_text or None,
            validate=_text_validator(fld, options),
            style=style,
        ))
    return coerce_input(fld, raw, options)


def _prompt_select(fld: FieldDescriptor, value: Any, options: Sequence[Option], style: Style) -> Any:
    if not options:
        return _prompt_text(fld, value, options, style)
    choices = [
        questionary.Choice(opt.label, value=idx, disabled="no disponible" if opt.disabled else None)
        for idx, opt in enumerate(options)
    ]
    default = None
    for idx, opt in enumerate(options):
        if opt.value == value:
            default = choices[idx]
    idx = _ask(questionary.select(_question(fld), choices=choices, default=default, style=style))
    return options[idx].value


def _prompt_multi(fld: FieldDescriptor, value: Any, options: Sequence[Option], style: Style) -> Any:
    if not options:
        return _prompt_text(fld, value, options, style)
    current = list(value or [])
    choices = [
        questionary.Choice(opt.label, value=idx, checked=opt.value in current,
                           disabled="no disponible" if opt.disabled else None)
        for idx, opt in enumerate(options)
    ]
    selected = _ask(questionary.checkbox(_question(fld), choices=choices, style=style))
    return [options[idx].value for idx in selected]


def _prompt_switch(fld: FieldDescriptor, value: Any, options: Sequence[Option], style: Style) -> Any:
    return _ask(questionary.confirm(_question(fld), default=bool(value), style=style))


_PROMPTS: Dict[type, Callable[..., Any]] = {
    TextKind: _prompt_text,
    NumberKind: _prompt_text,
    DateKind: _prompt_text,
    DateRangeKind: _prompt_text,
    CustomKind: _prompt_text,
    SelectKind: _prompt_select,
    RadioKind: _prompt_select,
    MultiSelectKind: _prompt_multi,
    SwitchKind: _prompt_switch,
}


def prompt_field(fld: FieldDescriptor, value: Any, options: Sequence[Option] = ()) -> Any:
    """
    Pregunta el valor de un campo.

    Args:
        fld: Descriptor del campo
        value: Valor actual (se ofrece como default)
        options: Opciones resueltas si es un campo de elección

    Returns:
        Valor convertido al tipo del campo

    Raises:
        PromptCancelled: si el usuario cancela
    """
    prompt = _PROMPTS.get(type(fld.kind), _prompt_text)
    return prompt(fld, value, options, get_prompt_style())


def describe_options(options: Sequence[Option]) -> str:
    """Resumen de opciones para mensajes de ayuda."""
    return ", ".join(option_labels(options)) or "(sin opciones)"
