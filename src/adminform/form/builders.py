"""
Renderer de referencia: construye componentes Rich a partir de un snapshot.

El motor no opina sobre la presentación; este módulo es un colaborador
externo más. La celda de valor se elige según la variante de tipo de
campo, y los campos CUSTOM se dibujan con su propio render.
"""

from typing import Any, Callable, Dict, Optional

from rich import box
from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from adminform.cli.theme import get_icons, get_palette

from .models import (
    CustomKind, DateKind, DateRangeKind, FieldDescriptor, FieldStatus,
    FormPhase, FormSnapshot, MultiSelectKind, NumberKind, RadioKind,
    SelectKind, SwitchKind, TextKind,
)
from .validators import format_field_value, is_empty_value

OnChangeFactory = Callable[[str], Callable[[Any], None]]


def _noop_change(key: str) -> Callable[[Any], None]:
    def on_change(value: Any) -> None:
        return None
    return on_change


def field_status(snapshot: FormSnapshot, fld: FieldDescriptor) -> FieldStatus:
    """Estado visual de un campo."""
    if fld.key in snapshot.errors:
        return FieldStatus.INVALID
    if not is_empty_value(snapshot.values.get(fld.key)):
        return FieldStatus.FILLED
    if not fld.required:
        return FieldStatus.OPTIONAL
    return FieldStatus.EMPTY


# =============================================================================
# CELDAS DE VALOR POR TIPO
# =============================================================================

def _plain_cell(snapshot: FormSnapshot, fld: FieldDescriptor, on_change: OnChangeFactory) -> RenderableType:
    value = snapshot.values.get(fld.key)
    options = snapshot.options.get(fld.key, [])
    return Text(format_field_value(fld, value, options))


def _switch_cell(snapshot: FormSnapshot, fld: FieldDescriptor, on_change: OnChangeFactory) -> RenderableType:
    p = get_palette()
    value = bool(snapshot.values.get(fld.key))
    return Text("● Sí" if value else "○ No", style=p.success if value else p.muted)


def _radio_cell(snapshot: FormSnapshot, fld: FieldDescriptor, on_change: OnChangeFactory) -> RenderableType:
    p = get_palette()
    value = snapshot.values.get(fld.key)
    separator = "\n" if fld.kind.direction == "vertical" else "  "
    text = Text()
    for idx, opt in enumerate(snapshot.options.get(fld.key, [])):
        if idx:
            text.append(separator)
        checked = opt.value == value or str(opt.value) == str(value)
        text.append(f"{'◉' if checked else '○'} {opt.label}",
                    style=f"bold {p.accent}" if checked else p.muted)
    return text if text.plain else Text("-", style=p.muted)


def _choice_cell(snapshot: FormSnapshot, fld: FieldDescriptor, on_change: OnChangeFactory) -> RenderableType:
    p = get_palette()
    cell = _plain_cell(snapshot, fld, on_change)
    n_options = len(snapshot.options.get(fld.key, []))
    if n_options == 0 and fld.options_loader is not None:
        cell.append("  (sin opciones)", style=f"italic {p.muted}")
    return cell


def _custom_cell(snapshot: FormSnapshot, fld: FieldDescriptor, on_change: OnChangeFactory) -> RenderableType:
    rendered = fld.kind.render(snapshot.values.get(fld.key), on_change(fld.key), snapshot.values)
    if rendered is None:
        return _plain_cell(snapshot, fld, on_change)
    if isinstance(rendered, str):
        return Text(rendered)
    return rendered


_CELL_BUILDERS: Dict[type, Callable[..., RenderableType]] = {
    TextKind: _plain_cell,
    NumberKind: _plain_cell,
    DateKind: _plain_cell,
    DateRangeKind: _plain_cell,
    SelectKind: _choice_cell,
    MultiSelectKind: _choice_cell,
    RadioKind: _radio_cell,
    SwitchKind: _switch_cell,
    CustomKind: _custom_cell,
}


def build_value_cell(
    snapshot: FormSnapshot,
    fld: FieldDescriptor,
    on_change: Optional[OnChangeFactory] = None,
) -> RenderableType:
    builder = _CELL_BUILDERS.get(type(fld.kind), _plain_cell)
    return builder(snapshot, fld, on_change or _noop_change)


# =============================================================================
# COMPONENTES
# =============================================================================

def build_form_table(
    snapshot: FormSnapshot,
    show_hidden: bool = False,
    on_change: Optional[OnChangeFactory] = None,
) -> Table:
    """Construye la tabla del formulario."""
    p = get_palette()
    icons = get_icons()

    table = Table(
        title=snapshot.title or None,
        title_style=f"bold {p.primary}",
        border_style=p.border,
        header_style=f"bold {p.secondary}",
        box=box.ROUNDED,
        show_header=True,
        padding=(0, 1),
        expand=False,
    )
    vertical = snapshot.layout == "vertical"
    table.add_column("#", justify="right", width=3)
    if vertical:
        # Etiqueta sobre el valor en una sola columna
        table.add_column("Campo", justify="left", min_width=30)
    else:
        table.add_column("Campo", justify="left", min_width=18)
        table.add_column("Valor", justify="left", min_width=24)
    table.add_column("Estado", justify="left", min_width=12)

    def add_row(num: Text, label: Text, value: RenderableType, status: Text) -> None:
        if vertical:
            table.add_row(num, Group(label, value), status)
        else:
            table.add_row(num, label, value, status)

    for idx, fld in enumerate(snapshot.fields):
        visible = snapshot.is_visible(fld.key)
        if not visible and not show_hidden:
            continue

        label = fld.label + (" *" if fld.required else "")
        if fld.unit:
            label += f" ({fld.unit})"

        if not visible:
            # Oculto: se muestra atenuado, el valor se conserva
            add_row(
                Text(str(idx + 1), style=f"dim {p.muted}"),
                Text(label, style=f"dim {p.muted} strike"),
                Text(format_field_value(fld, snapshot.values.get(fld.key),
                                        snapshot.options.get(fld.key, [])),
                     style=f"dim {p.muted}"),
                Text(f"{icons.hidden} oculto", style=f"dim {p.muted}"),
            )
            continue

        status = field_status(snapshot, fld)
        if status == FieldStatus.INVALID:
            status_text = Text(f"{icons.cross} {snapshot.errors[fld.key]}", style=p.error)
        elif status == FieldStatus.FILLED:
            status_text = Text(f"{icons.check} completo", style=p.success)
        elif status == FieldStatus.OPTIONAL:
            status_text = Text(f"{icons.info} opcional", style=p.muted)
        else:
            status_text = Text(f"{icons.warning} pendiente", style=p.warning)

        add_row(
            Text(str(idx + 1), style=p.muted),
            Text(label, style="bold" if fld.required else p.muted),
            build_value_cell(snapshot, fld, on_change),
            status_text,
        )

    return table


def build_errors_panel(snapshot: FormSnapshot) -> Optional[Panel]:
    """Panel con los errores del formulario, o None si no hay."""
    if not snapshot.errors:
        return None
    p = get_palette()
    icons = get_icons()
    labels = {f.key: f.label for f in snapshot.fields}

    text = Text()
    for idx, (key, message) in enumerate(snapshot.errors.items()):
        if idx:
            text.append("\n")
        text.append(f"{icons.cross} {labels.get(key, key)}: ", style=f"bold {p.error}")
        text.append(message, style=p.error)

    return Panel(text, title="Errores", title_align="left",
                 border_style=p.error, box=box.ROUNDED, padding=(0, 1))


def build_footer(snapshot: FormSnapshot) -> Text:
    """Línea de estado: fase, modo y botón de envío."""
    p = get_palette()
    text = Text()
    text.append("  Modo: ", style=p.muted)
    text.append(snapshot.mode.value, style=f"bold {p.accent}")
    if snapshot.record_id is not None:
        text.append(f" #{snapshot.record_id}", style=p.muted)
    text.append("  │  ", style=p.muted)
    text.append(f"[ {snapshot.submit_label} ]", style=f"bold {p.primary}")
    if snapshot.in_flight or snapshot.phase == FormPhase.SUBMITTING:
        text.append("  enviando...", style=f"italic {p.warning}")
    elif snapshot.phase == FormPhase.OPENING:
        text.append("  cargando...", style=f"italic {p.muted}")
    return text


def build_display(
    snapshot: FormSnapshot,
    show_hidden: bool = False,
    on_change: Optional[OnChangeFactory] = None,
) -> Group:
    """Construye el display completo del formulario."""
    parts = [build_form_table(snapshot, show_hidden=show_hidden, on_change=on_change)]
    errors = build_errors_panel(snapshot)
    if errors is not None:
        parts.append(errors)
    parts.append(build_footer(snapshot))
    return Group(*parts)
