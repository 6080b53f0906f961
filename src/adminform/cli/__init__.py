"""
CLI de adminform - Motor de formularios para la consola de administración.

Comandos:
- screens: Lista las pantallas disponibles y sus campos
- preview: Muestra el formulario de una pantalla
- validate: Valida datos JSON contra una pantalla
- fill: Completa un formulario de forma interactiva
"""

from pathlib import Path
from typing import Optional

import typer

from adminform.cli.theme import print_error, set_theme_by_name

# Crear aplicación principal
app = typer.Typer(
    name="adminform",
    help="Formularios declarativos de la consola de administración.",
    no_args_is_help=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Nivel de log (DEBUG, INFO, WARNING, ERROR)"
    ),
    theme: Optional[str] = typer.Option(
        None, "--theme", help="Tema de colores (default, nord, minimal)"
    ),
):
    """
    adminform - Formularios CRUD declarativos.

    Carga, visibilidad condicional, validación y envío a partir de
    descriptores de campos.
    """
    from adminform.config import EngineSettings
    from adminform.logging_setup import setup_logging

    try:
        settings = EngineSettings.from_env()
        if log_level:
            settings = EngineSettings(**{**settings.model_dump(), "log_level": log_level})
        setup_logging(settings.log_level)
    except ValueError as e:
        print_error(str(e))
        raise typer.Exit(1)

    set_theme_by_name(theme or settings.theme)
    ctx.obj = settings


@app.command()
def screens():
    """Lista las pantallas disponibles y sus campos."""
    from adminform.cli.forms import show_screens
    show_screens()


@app.command()
def preview(
    ctx: typer.Context,
    screen: str = typer.Argument(..., help="Nombre de la pantalla"),
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Archivo JSON con valores"),
    record_id: Optional[str] = typer.Option(None, "--id", help="Identificador (modo edición)"),
    options: Optional[Path] = typer.Option(None, "--options", "-o", help="Archivo JSON con opciones por campo"),
    show_hidden: bool = typer.Option(False, "--hidden", help="Mostrar campos ocultos"),
):
    """Muestra el formulario de una pantalla con datos opcionales."""
    from adminform.cli.forms import run_preview
    run_preview(ctx.obj, screen, data, record_id, options, show_hidden)


@app.command()
def validate(
    ctx: typer.Context,
    screen: str = typer.Argument(..., help="Nombre de la pantalla"),
    data: Path = typer.Option(..., "--data", "-d", help="Archivo JSON con valores"),
    record_id: Optional[str] = typer.Option(None, "--id", help="Identificador (modo edición)"),
    options: Optional[Path] = typer.Option(None, "--options", "-o", help="Archivo JSON con opciones por campo"),
):
    """Valida datos JSON; termina con código 1 si hay errores."""
    from adminform.cli.forms import run_validate
    run_validate(ctx.obj, screen, data, record_id, options)


@app.command()
def fill(
    ctx: typer.Context,
    screen: str = typer.Argument(..., help="Nombre de la pantalla"),
    data: Optional[Path] = typer.Option(None, "--data", "-d", help="Archivo JSON con valores iniciales"),
    record_id: Optional[str] = typer.Option(None, "--id", help="Identificador (modo edición)"),
    options: Optional[Path] = typer.Option(None, "--options", "-o", help="Archivo JSON con opciones por campo"),
):
    """Completa el formulario de forma interactiva y muestra el payload."""
    from adminform.cli.forms import run_fill
    run_fill(ctx.obj, screen, data, record_id, options)


if __name__ == "__main__":
    app()
