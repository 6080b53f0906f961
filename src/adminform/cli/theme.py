"""
Tema de la CLI: paleta activa, consola Rich, iconos y mensajes de estado.

El renderer de formularios y los comandos leen los colores de aquí para
que un cambio de tema (--theme) afecte a toda la salida.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Dict

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.text import Text


class ThemeName(Enum):
    """Temas disponibles."""
    DEFAULT = "default"
    NORD = "nord"
    MINIMAL = "minimal"


@dataclass(frozen=True)
class ColorPalette:
    """Colores por rol dentro del formulario."""
    primary: str      # Título y etiquetas
    secondary: str    # Encabezados de tabla
    accent: str       # Valores del usuario
    success: str      # Campo completo
    warning: str      # Requerido pendiente
    error: str        # Mensajes de validación
    muted: str        # Opcionales y ocultos
    border: str


THEMES: Dict[ThemeName, ColorPalette] = {
    ThemeName.DEFAULT: ColorPalette(
        primary="#5f87af", secondary="#87afaf", accent="#af87af",
        success="#87af87", warning="#d7af5f", error="#d75f5f",
        muted="#808080", border="#5f5f5f",
    ),
    ThemeName.NORD: ColorPalette(
        primary="#88c0d0", secondary="#81a1c1", accent="#b48ead",
        success="#a3be8c", warning="#ebcb8b", error="#bf616a",
        muted="#4c566a", border="#3b4252",
    ),
    ThemeName.MINIMAL: ColorPalette(
        primary="#ffffff", secondary="#b0b0b0", accent="#5fafff",
        success="#87d787", warning="#ffd787", error="#ff8787",
        muted="#606060", border="#404040",
    ),
}


class CLITheme:
    """Tema activo y consolas asociadas (stdout y stderr)."""

    _palette: ColorPalette = THEMES[ThemeName.DEFAULT]
    _consoles: Dict[bool, Console] = {}

    @classmethod
    def set_theme(cls, theme: ThemeName) -> None:
        cls._palette = THEMES.get(theme, THEMES[ThemeName.DEFAULT])
        cls._consoles = {}

    @classmethod
    def get_palette(cls) -> ColorPalette:
        return cls._palette

    @classmethod
    def get_console(cls, stderr: bool = False) -> Console:
        # Sin file explícito: el stream se resuelve en cada impresión
        if stderr not in cls._consoles:
            cls._consoles[stderr] = Console(stderr=stderr)
        return cls._consoles[stderr]


def get_console(stderr: bool = False) -> Console:
    return CLITheme.get_console(stderr=stderr)


def get_palette() -> ColorPalette:
    return CLITheme.get_palette()


def set_theme_by_name(name: str) -> None:
    """Activa un tema por nombre; nombres desconocidos usan el default."""
    try:
        CLITheme.set_theme(ThemeName(name.lower()))
    except ValueError:
        CLITheme.set_theme(ThemeName.DEFAULT)


@dataclass(frozen=True)
class IconSet:
    """Marcas de estado de un campo."""
    check: str
    cross: str
    warning: str
    info: str
    hidden: str


ICONS_UNICODE = IconSet(check="✓", cross="✗", warning="⚠", info="ℹ", hidden="◌")
ICONS_ASCII = IconSet(check="+", cross="x", warning="!", info="i", hidden="-")


def get_icons() -> IconSet:
    """Iconos Unicode si la codificación de stdout los admite."""
    encoding = getattr(sys.stdout, "encoding", None) or "ascii"
    try:
        "".join(vars(ICONS_UNICODE).values()).encode(encoding)
    except (UnicodeEncodeError, LookupError):
        return ICONS_ASCII
    return ICONS_UNICODE


def print_header(text: str, subtitle: str = None) -> None:
    p = get_palette()
    content = Text(text, style=f"bold {p.primary}")
    if subtitle:
        content.append(f"\n{subtitle}", style=p.muted)
    get_console().print(Panel(content, border_style=p.border, box=box.ROUNDED, padding=(0, 2)))


def _print_status(icon: str, message: str, style: str) -> None:
    get_console().print(Text(f"{icon} {message}", style=style))


def print_success(message: str) -> None:
    _print_status(get_icons().check, message, get_palette().success)


def print_warning(message: str) -> None:
    _print_status(get_icons().warning, message, get_palette().warning)


def print_error(message: str) -> None:
    _print_status(get_icons().cross, message, f"bold {get_palette().error}")


def print_info(message: str) -> None:
    _print_status(get_icons().info, message, get_palette().primary)
