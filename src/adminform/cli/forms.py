"""
Comandos de formularios: screens, preview, validate y fill.

Los datos y las opciones se leen de archivos JSON; los envíos de la CLI
no persisten nada, solo muestran el payload transformado.
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

import typer
from rich import box
from rich.table import Table

from adminform.cli.prompts import PromptCancelled, describe_options, prompt_field
from adminform.cli.theme import (
    get_console, get_palette, print_error, print_header, print_info,
    print_success, print_warning,
)
from adminform.config import EngineSettings
from adminform.form.builders import build_display, build_errors_panel
from adminform.form.engine import GenericForm
from adminform.form.errors import AdminFormError
from adminform.form.models import Option
from adminform.form.submission import FormOperations
from adminform.screens import Screen, get_screen, list_screens

logger = logging.getLogger(__name__)


# =============================================================================
# ENTRADAS
# =============================================================================

def parse_record_id(raw: Optional[str]) -> Any:
    """Identificadores numéricos como int; el resto como texto."""
    if raw is None or raw == "":
        return None
    return int(raw) if raw.isdigit() else raw


def load_json_file(path: Path) -> Any:
    """Lee un archivo JSON; termina con código 1 si no se puede."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError:
        print_error(f"Archivo no encontrado: {path}")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        print_error(f"JSON inválido en {path}: {e}")
        raise typer.Exit(1)


def load_data(path: Optional[Path]) -> Optional[Dict[str, Any]]:
    if path is None:
        return None
    data = load_json_file(path)
    if not isinstance(data, dict):
        print_error(f"{path} debe contener un objeto JSON")
        raise typer.Exit(1)
    return data


def build_loaders(path: Optional[Path]) -> Dict[str, Callable[[], List[Any]]]:
    """
    Cargadores de opciones a partir de un JSON {clave: [opciones]}.

    Cada opción puede ser {"label", "value"} o un par [label, value].
    """
    if path is None:
        return {}
    raw = load_json_file(path)
    if not isinstance(raw, dict):
        print_error(f"{path} debe contener un objeto JSON")
        raise typer.Exit(1)

    def make_loader(items: List[Any]) -> Callable[[], List[Any]]:
        return lambda: list(items)

    return {key: make_loader(items) for key, items in raw.items()}


def settings_or_default(settings: Optional[EngineSettings]) -> EngineSettings:
    return settings if settings is not None else EngineSettings.from_env()


def open_screen_form(
    settings: Optional[EngineSettings],
    screen_name: str,
    data_path: Optional[Path],
    record_id: Optional[str],
    options_path: Optional[Path],
    operations: Optional[FormOperations] = None,
) -> GenericForm:
    """Construye y abre el formulario de una pantalla."""
    screen = get_screen(screen_name)
    data = load_data(data_path)
    rid = parse_record_id(record_id)
    form = screen.build_form(
        record_id=rid,
        operations=operations,
        loaders=build_loaders(options_path),
        settings=settings_or_default(settings).form_settings(),
    )
    asyncio.run(form.open(record_id=rid, initial_data=data))
    return form


# =============================================================================
# SCREENS
# =============================================================================

def build_screens_table(screens: List[Screen]) -> Table:
    p = get_palette()
    table = Table(
        title="Pantallas disponibles",
        title_style=f"bold {p.primary}",
        border_style=p.border,
        header_style=f"bold {p.secondary}",
        box=box.ROUNDED,
        show_header=True,
        padding=(0, 1),
    )
    table.add_column("Pantalla", style=f"bold {p.accent}")
    table.add_column("Descripción")
    table.add_column("Campos", style=p.muted)

    for screen in screens:
        fields = screen.build_fields()
        keys = ", ".join(f.key + ("*" if f.required else "") for f in fields)
        table.add_row(screen.name, screen.description, keys)
    return table


def show_screens() -> None:
    """Muestra la tabla de pantallas."""
    console = get_console()
    console.print()
    console.print(build_screens_table(list_screens()))
    console.print("\n  [dim]* campo requerido[/dim]\n")


# =============================================================================
# PREVIEW / VALIDATE
# =============================================================================

def run_preview(
    settings: Optional[EngineSettings],
    screen_name: str,
    data_path: Optional[Path],
    record_id: Optional[str],
    options_path: Optional[Path],
    show_hidden: bool = False,
) -> None:
    """Abre el formulario y lo dibuja."""
    try:
        form = open_screen_form(settings, screen_name, data_path, record_id, options_path)
    except AdminFormError as e:
        print_error(str(e))
        raise typer.Exit(1)

    console = get_console()
    console.print()
    console.print(build_display(form.snapshot(), show_hidden=show_hidden))
    console.print()


def run_validate(
    settings: Optional[EngineSettings],
    screen_name: str,
    data_path: Path,
    record_id: Optional[str],
    options_path: Optional[Path],
) -> None:
    """Valida los datos; código de salida 1 si hay errores."""
    try:
        form = open_screen_form(settings, screen_name, data_path, record_id, options_path)
    except AdminFormError as e:
        print_error(str(e))
        raise typer.Exit(1)

    errors = form.validate()
    if not errors:
        print_success(f"{form.state.title}: datos válidos")
        return

    console = get_console()
    panel = build_errors_panel(form.snapshot())
    if panel is not None:
        console.print(panel)
    print_error(f"{len(errors)} campo(s) con errores")
    raise typer.Exit(1)


# =============================================================================
# FILL
# =============================================================================

def prompt_visible_fields(form: GenericForm) -> None:
    """
    Pregunta los campos visibles en orden.

    La visibilidad se reevalúa tras cada respuesta; un valor rechazado por
    la validación en vivo se vuelve a preguntar.
    """
    for fld in form.registry:
        if fld.disabled or not form.state.is_visible(fld.key):
            continue
        options: List[Option] = form.options_for(fld.key)
        if fld.is_choice and not options:
            print_info(f"{fld.label}: {describe_options(options)}")
        while True:
            value = prompt_field(fld, form.values.get(fld.key), options)
            error = form.set_value(fld.key, value)
            if not error:
                break
            print_warning(f"{fld.label}: {error}")


def run_fill(
    settings: Optional[EngineSettings],
    screen_name: str,
    data_path: Optional[Path],
    record_id: Optional[str],
    options_path: Optional[Path],
) -> None:
    """Completa el formulario de forma interactiva y muestra el payload."""
    sent: List[Dict[str, Any]] = []

    def create(payload: Dict[str, Any]) -> None:
        sent.append(payload)

    def update(rid: Any, payload: Dict[str, Any]) -> None:
        sent.append(payload)

    operations = FormOperations(create=create, update=update)
    try:
        form = open_screen_form(settings, screen_name, data_path, record_id, options_path, operations)
    except AdminFormError as e:
        print_error(str(e))
        raise typer.Exit(1)

    print_header(form.state.title, "Ctrl+C para cancelar")
    try:
        prompt_visible_fields(form)
    except PromptCancelled:
        form.cancel()
        print_warning("Operación cancelada")
        raise typer.Exit(1)

    try:
        ok = asyncio.run(form.submit())
    except AdminFormError as e:
        print_error(str(e))
        raise typer.Exit(1)

    if not ok:
        panel = build_errors_panel(form.snapshot())
        if panel is not None:
            get_console().print(panel)
        print_error("El formulario tiene errores")
        raise typer.Exit(1)

    logger.info("Formulario %s enviado", screen_name)
    print_success(f"{form.state.title}: listo")
    get_console().print_json(data=sent[-1], default=str)
