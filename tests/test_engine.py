"""
Tests para form/engine.py - Fachadas AdminForm y GenericForm.
"""

import asyncio

from adminform.config import FormSettings, Locale
from adminform.form import (
    AdminForm,
    FieldDescriptor,
    FormMode,
    FormPhase,
    GenericForm,
    MultiSelectKind,
    Option,
    SelectKind,
)


class TestAdminForm:
    """Tests para AdminForm."""

    def test_on_submit_receives_payload(self, person_fields):
        """Test on_submit recibe el payload transformado."""
        received = []

        async def on_submit(payload):
            received.append(payload)

        form = AdminForm(
            person_fields,
            on_submit=on_submit,
            title="Persona",
            transform=lambda values: {"nombre": values["name"], "edad": values["age"]},
        )
        asyncio.run(form.open(initial_data={"name": "Bob", "age": 5}))
        assert asyncio.run(form.submit()) is True
        assert received == [{"nombre": "Bob", "edad": 5}]

    def test_edit_mode_with_loader(self, person_fields):
        """Test modo edición con load_by_id."""
        received = []
        form = AdminForm(
            person_fields,
            on_submit=received.append,
            load_by_id=lambda record_id: {"name": "Ana", "age": 40},
        )
        asyncio.run(form.open(record_id="u-1"))

        assert form.mode == FormMode.UPDATE
        assert form.state.record_id == "u-1"
        assert form.values == {"name": "Ana", "age": 40}
        assert asyncio.run(form.submit()) is True
        assert received == [{"name": "Ana", "age": 40}]

    def test_on_cancel(self, person_fields):
        """Test cancelar notifica a la pantalla."""
        cancelled = []
        form = AdminForm(person_fields, on_submit=lambda p: None,
                         on_cancel=lambda: cancelled.append(1))
        asyncio.run(form.open())
        form.cancel()
        assert cancelled == [1]
        assert form.phase == FormPhase.CLOSED


class TestGenericForm:
    """Tests para GenericForm."""

    def test_properties_are_copies(self, person_fields):
        """Test values y errors devuelven copias."""
        form = GenericForm(person_fields)
        asyncio.run(form.open(initial_data={"name": "Bob"}))
        form.values["name"] = "Otro"
        form.errors["x"] = "y"
        assert form.values == {"name": "Bob"}
        assert form.errors == {}

    def test_options_for(self):
        """Test opciones resueltas por campo."""

        async def load_roles():
            return [{"label": "Admin", "value": 1}]

        form = GenericForm([
            FieldDescriptor(key="roles", label="Roles", kind=MultiSelectKind(load_options=load_roles)),
            FieldDescriptor(key="level", label="Nivel", kind=SelectKind(options=[("Alta", "H")])),
        ])
        asyncio.run(form.open())
        assert form.options_for("roles") == [Option("Admin", 1)]
        assert form.options_for("level") == [Option("Alta", "H")]
        assert form.options_for("missing") == []

    def test_registry_from_fields(self, person_fields):
        """Test el registro conserva el orden de los descriptores."""
        form = GenericForm(person_fields)
        assert form.registry.keys() == ["name", "age"]

    def test_locale_messages(self, person_fields):
        """Test mensajes de requerido en inglés."""
        form = GenericForm(person_fields, settings=FormSettings(locale=Locale.EN))
        asyncio.run(form.open())
        assert form.validate()["name"] == "Please provide Nombre"
        assert form.snapshot().submit_label == "Create"

    def test_reload_changes_record(self, person_fields):
        """Test reload cambia de registro sin cerrar."""
        form = GenericForm(person_fields, operations=None)
        asyncio.run(form.open(initial_data={"name": "A", "age": 1}))
        asyncio.run(form.reload(record_id=2, initial_data={"name": "B", "age": 2}))
        assert form.values == {"name": "B", "age": 2}
        assert form.mode == FormMode.UPDATE

    def test_reset(self, person_fields):
        """Test reset descarta todo."""
        form = GenericForm(person_fields)
        asyncio.run(form.open(initial_data={"name": "A"}))
        form.reset()
        assert form.values == {}
        assert form.phase == FormPhase.CLOSED
