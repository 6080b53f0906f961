"""
Pantallas CRUD de la consola de administración.

Cada pantalla es un Screen registrado por nombre.
"""

from typing import Dict, List

from adminform.form.errors import DescriptorError

from .base import Screen
from .config import CONFIG_SCREEN
from .dept import DEPT_SCREEN
from .dict import DICT_ITEM_SCREEN, DICT_SCREEN
from .menu import MENU_SCREEN
from .notice import NOTICE_SCREEN
from .role import ROLE_SCREEN
from .user import USER_SCREEN

SCREENS: Dict[str, Screen] = {
    screen.name: screen
    for screen in (
        CONFIG_SCREEN,
        DICT_SCREEN,
        DICT_ITEM_SCREEN,
        DEPT_SCREEN,
        MENU_SCREEN,
        NOTICE_SCREEN,
        ROLE_SCREEN,
        USER_SCREEN,
    )
}


def get_screen(name: str) -> Screen:
    """Obtiene una pantalla por nombre."""
    screen = SCREENS.get(name)
    if screen is None:
        raise DescriptorError(
            f"Pantalla desconocida: {name}. Disponibles: {', '.join(SCREENS)}",
            key=name,
        )
    return screen


def list_screens() -> List[Screen]:
    return list(SCREENS.values())


__all__ = ["Screen", "SCREENS", "get_screen", "list_screens"]
