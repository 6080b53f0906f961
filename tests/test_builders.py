"""
Tests para form/builders.py - Renderer de referencia con Rich.
"""

import asyncio
import io

from rich.console import Console

from adminform.config import FormSettings
from adminform.form import (
    CustomKind,
    FieldDescriptor,
    FieldStatus,
    GenericForm,
    RadioKind,
    SelectKind,
    SwitchKind,
    TextKind,
)
from adminform.form.builders import (
    build_display,
    build_errors_panel,
    build_footer,
    build_form_table,
    field_status,
)


def render(renderable) -> str:
    console = Console(file=io.StringIO(), width=140, color_system=None)
    console.print(renderable)
    return console.file.getvalue()


def open_form(fields, **kwargs):
    form = GenericForm(fields, title="Formulario de prueba")
    asyncio.run(form.open(**kwargs))
    return form


class TestFieldStatus:
    """Tests para field_status."""

    def test_statuses(self):
        """Test inválido, completo, opcional y pendiente."""
        fields = [
            FieldDescriptor(key="a", label="A", required=True),
            FieldDescriptor(key="b", label="B", required=True),
            FieldDescriptor(key="c", label="C"),
            FieldDescriptor(key="d", label="D", validate=lambda v, vs: "mal"),
        ]
        form = open_form(fields, initial_data={"b": "x"})
        form.set_value("d", "y")
        snap = form.snapshot()
        status = {f.key: field_status(snap, f) for f in snap.fields}
        assert status == {
            "a": FieldStatus.EMPTY,
            "b": FieldStatus.FILLED,
            "c": FieldStatus.OPTIONAL,
            "d": FieldStatus.INVALID,
        }


class TestFormTable:
    """Tests para build_form_table."""

    def test_labels_and_values(self):
        """Test etiquetas, valores formateados y requeridos."""
        fields = [
            FieldDescriptor(key="name", label="Nombre", required=True),
            FieldDescriptor(key="pwd", label="Clave", kind=TextKind(input_type="password")),
            FieldDescriptor(key="on", label="Activo", kind=SwitchKind()),
            FieldDescriptor(key="status", label="Estado",
                            kind=RadioKind(options=[("Habilitado", 1), ("Deshabilitado", 0)])),
        ]
        form = open_form(fields, initial_data={"name": "Ana", "pwd": "x", "on": True, "status": 1})
        out = render(build_form_table(form.snapshot()))

        assert "Formulario de prueba" in out
        assert "Nombre *" in out
        assert "Ana" in out
        assert "••••••" in out
        assert "● Sí" in out
        assert "◉ Habilitado" in out
        assert "○ Deshabilitado" in out

    def test_hidden_rows(self, toggle_fields):
        """Test los campos ocultos solo aparecen con show_hidden."""
        form = open_form(toggle_fields)
        snap = form.snapshot()
        assert "Detalle" not in render(build_form_table(snap))
        out = render(build_form_table(snap, show_hidden=True))
        assert "Detalle" in out
        assert "oculto" in out

    def test_vertical_layout(self):
        """Test en disposición vertical no hay columna Valor."""
        form = GenericForm([FieldDescriptor(key="name", label="Nombre")],
                           settings=FormSettings(layout="vertical"))
        asyncio.run(form.open(initial_data={"name": "Ana"}))
        snap = form.snapshot()
        assert snap.layout == "vertical"
        out = render(build_form_table(snap))
        assert "Valor" not in out
        assert "Nombre" in out
        assert "Ana" in out

    def test_loader_without_options(self):
        """Test un cargador sin resultados se indica en la celda."""
        fields = [FieldDescriptor(key="dept", label="Depto",
                                  kind=SelectKind(load_options=lambda: []))]
        out = render(build_form_table(open_form(fields).snapshot()))
        assert "(sin opciones)" in out

    def test_custom_render(self):
        """Test los campos CUSTOM usan su propio render."""
        seen = []

        def render_tree(value, on_change, values):
            seen.append((value, dict(values)))
            on_change(value)
            return f"árbol:{value}"

        changes = []

        def on_change(key):
            return lambda value: changes.append((key, value))

        fields = [FieldDescriptor(key="parent", label="Superior", kind=CustomKind(render=render_tree))]
        form = open_form(fields, initial_data={"parent": 3})
        out = render(build_form_table(form.snapshot(), on_change=on_change))

        assert "árbol:3" in out
        assert seen == [(3, {"parent": 3})]
        assert changes == [("parent", 3)]


class TestDisplay:
    """Tests para el display completo."""

    def test_errors_panel(self):
        """Test panel de errores con la etiqueta del campo."""
        form = open_form([FieldDescriptor(key="name", label="Nombre", required=True)])
        assert build_errors_panel(form.snapshot()) is None
        form.validate()
        out = render(build_errors_panel(form.snapshot()))
        assert "Errores" in out
        assert "Nombre: Ingrese Nombre" in out

    def test_footer(self):
        """Test modo, identificador y botón de envío."""
        form = open_form([FieldDescriptor(key="name", label="Nombre")], record_id=12)
        out = render(build_footer(form.snapshot()))
        assert "update" in out
        assert "#12" in out
        assert "[ Actualizar ]" in out

    def test_display_group(self):
        """Test el display incluye tabla, errores y pie."""
        form = open_form([FieldDescriptor(key="name", label="Nombre", required=True)])
        form.validate()
        out = render(build_display(form.snapshot()))
        assert "Formulario de prueba" in out
        assert "Errores" in out
        assert "[ Crear ]" in out
