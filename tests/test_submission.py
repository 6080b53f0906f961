"""
Tests para form/submission.py - Controlador de envío.
"""

import asyncio

import pytest

from adminform.config import FormSettings
from adminform.form import (
    FieldDescriptor,
    FormOperations,
    FormPhase,
    FormStateError,
    GenericForm,
    SubmitError,
)


def upper_name(values):
    return {**values, "name": str(values.get("name", "")).upper()}


class TestScenario:
    """Flujo completo de creación."""

    def test_create_flow(self, person_fields, recorder):
        """Test errores, corrección y un único create con el payload transformado."""
        successes = []
        form = GenericForm(
            person_fields,
            operations=FormOperations(create=recorder),
            transform=upper_name,
            on_success=lambda: successes.append(1),
        )
        asyncio.run(form.open())

        assert asyncio.run(form.submit()) is False
        assert set(form.errors) == {"name", "age"}
        assert recorder.calls == []

        form.set_value("name", "Bob")
        form.set_value("age", 5)
        assert asyncio.run(form.submit()) is True

        assert recorder.calls == [({"name": "BOB", "age": 5},)]
        assert successes == [1]
        assert form.phase == FormPhase.CLOSED

    def test_custom_validator_blocks(self, person_fields, recorder):
        """Test el validador propio bloquea el envío."""
        form = GenericForm(person_fields, operations=FormOperations(create=recorder))
        asyncio.run(form.open(initial_data={"name": "Bob", "age": 0}))
        assert asyncio.run(form.submit()) is False
        assert form.errors == {"age": "too small"}
        assert form.phase == FormPhase.EDITING


class TestPayload:
    """Tests para la transformación."""

    def test_payload_equals_transform(self, person_fields, recorder):
        """Test el payload despachado es transform(valores actuales)."""
        form = GenericForm(person_fields, operations=FormOperations(create=recorder),
                           transform=upper_name)
        asyncio.run(form.open(initial_data={"name": "ana", "age": 3}))
        expected = upper_name(form.values)
        asyncio.run(form.submit())
        assert recorder.calls[0][0] == expected

    def test_transform_called_once(self, person_fields, recorder):
        """Test la transformación se aplica una sola vez por envío."""
        calls = []

        def transform(values):
            calls.append(dict(values))
            return dict(values)

        form = GenericForm(person_fields, operations=FormOperations(create=recorder),
                           transform=transform)
        asyncio.run(form.open(initial_data={"name": "ana", "age": 3}))
        asyncio.run(form.submit())
        assert len(calls) == 1

    def test_identity_without_transform(self, person_fields, recorder):
        """Test sin transformación se envía una copia de los valores."""
        form = GenericForm(person_fields, operations=FormOperations(create=recorder))
        asyncio.run(form.open(initial_data={"name": "ana", "age": 3}))
        asyncio.run(form.submit())
        assert recorder.calls[0][0] == {"name": "ana", "age": 3}


class TestInFlight:
    """Una sola solicitud en vuelo por formulario."""

    def test_double_submit_dispatches_once(self, person_fields):
        """Test dos envíos rápidos producen un solo despacho."""
        calls = []

        async def create(payload):
            calls.append(payload)
            await asyncio.sleep(0.01)

        form = GenericForm(person_fields, operations=FormOperations(create=create),
                           settings=FormSettings(close_on_success=False))

        async def _inner():
            await form.open(initial_data={"name": "Bob", "age": 5})
            first = asyncio.ensure_future(form.submit())
            second = asyncio.ensure_future(form.submit())
            return await asyncio.gather(first, second)

        results = asyncio.run(_inner())
        assert sorted(results) == [False, True]
        assert len(calls) == 1
        assert form.in_flight is False
        assert form.phase == FormPhase.EDITING

    def test_in_flight_visible_during_dispatch(self, person_fields):
        """Test in_flight es True mientras el colaborador trabaja."""
        seen = []
        form = None

        async def create(payload):
            seen.append(form.in_flight)
            seen.append(form.phase)

        form = GenericForm(person_fields, operations=FormOperations(create=create))

        async def _inner():
            await form.open(initial_data={"name": "Bob", "age": 5})
            await form.submit()

        asyncio.run(_inner())
        assert seen == [True, FormPhase.SUBMITTING]
        assert form.in_flight is False


class TestFailures:
    """Tests para fallos del colaborador."""

    def test_failure_raises_submit_error(self, person_fields, caplog):
        """Test el error se propaga encadenado y se conservan los valores."""
        original = ConnectionError("timeout")

        def create(payload):
            raise original

        successes = []
        form = GenericForm(person_fields, operations=FormOperations(create=create),
                           on_success=lambda: successes.append(1))
        asyncio.run(form.open(initial_data={"name": "Bob", "age": 5}))

        with caplog.at_level("ERROR", logger="adminform"):
            with pytest.raises(SubmitError) as exc_info:
                asyncio.run(form.submit())

        assert exc_info.value.__cause__ is original
        assert exc_info.value.mode == "create"
        assert form.in_flight is False
        assert form.phase == FormPhase.EDITING
        assert form.values == {"name": "Bob", "age": 5}
        assert successes == []
        assert "create" in caplog.text

    def test_false_result_rejects(self, person_fields, make_recorder):
        """Test un colaborador que retorna False rechaza el envío."""
        create = make_recorder(result=False)
        form = GenericForm(person_fields, operations=FormOperations(create=create))
        asyncio.run(form.open(initial_data={"name": "Bob", "age": 5}))
        with pytest.raises(SubmitError):
            asyncio.run(form.submit())
        assert form.phase == FormPhase.EDITING

    def test_none_result_accepted(self, person_fields, make_recorder):
        """Test None cuenta como éxito."""
        form = GenericForm(person_fields, operations=FormOperations(create=make_recorder()))
        asyncio.run(form.open(initial_data={"name": "Bob", "age": 5}))
        assert asyncio.run(form.submit()) is True

    def test_transform_failure(self, person_fields, recorder):
        """Test un fallo de la transformación también es SubmitError."""

        def transform(values):
            raise KeyError("x")

        form = GenericForm(person_fields, operations=FormOperations(create=recorder),
                           transform=transform)
        asyncio.run(form.open(initial_data={"name": "Bob", "age": 5}))
        with pytest.raises(SubmitError):
            asyncio.run(form.submit())
        assert recorder.calls == []
        assert form.in_flight is False

    def test_submit_closed_form(self, person_fields):
        """Test enviar un formulario cerrado."""
        form = GenericForm(person_fields)
        with pytest.raises(FormStateError):
            asyncio.run(form.submit())


class TestModes:
    """Tests para la elección entre create y update."""

    def test_update_with_record_id(self, person_fields, make_recorder):
        """Test con identificador se llama a update(id, payload)."""
        create = make_recorder()
        update = make_recorder()

        def load(record_id):
            return {"id": record_id, "name": "Ana", "age": 30}

        form = GenericForm(
            person_fields,
            operations=FormOperations(load_by_id=load, create=create, update=update),
        )
        asyncio.run(form.open(record_id=0))
        assert asyncio.run(form.submit()) is True

        assert create.calls == []
        assert update.calls == [(0, {"id": 0, "name": "Ana", "age": 30})]

    def test_on_submit_before_dispatch(self, person_fields, recorder):
        """Test on_submit recibe el payload antes del colaborador."""
        order = []
        form = GenericForm(
            person_fields,
            operations=FormOperations(create=lambda payload: order.append("create")),
            on_submit=lambda payload: order.append(("on_submit", payload["name"])),
        )
        asyncio.run(form.open(initial_data={"name": "Bob", "age": 5}))
        asyncio.run(form.submit())
        assert order == [("on_submit", "Bob"), "create"]

    def test_keep_open_on_success(self, person_fields, recorder):
        """Test close_on_success=False deja el formulario en edición."""
        form = GenericForm(person_fields, operations=FormOperations(create=recorder),
                           settings=FormSettings(close_on_success=False))
        asyncio.run(form.open(initial_data={"name": "Bob", "age": 5}))
        assert asyncio.run(form.submit()) is True
        assert form.phase == FormPhase.EDITING


class TestOpeningPhase:
    """Envíos mientras el formulario todavía se está abriendo."""

    def test_submit_before_record_loads(self, person_fields, recorder):
        """Test no se despacha nada hasta que llega el registro."""
        gates = {}

        async def load(record_id):
            gates["started"].set()
            await gates["release"].wait()
            return {"name": "Ana", "age": 30}

        form = GenericForm(person_fields,
                           operations=FormOperations(load_by_id=load, update=recorder))

        async def _inner():
            gates["started"] = asyncio.Event()
            gates["release"] = asyncio.Event()
            task = asyncio.ensure_future(form.open(record_id=5))
            await gates["started"].wait()
            early = await form.submit()
            phase = form.phase
            gates["release"].set()
            await task
            return early, phase

        early, phase = asyncio.run(_inner())
        assert early is False
        assert phase == FormPhase.OPENING
        assert recorder.calls == []
        assert form.phase == FormPhase.EDITING
        assert form.values == {"name": "Ana", "age": 30}

        assert asyncio.run(form.submit()) is True
        assert recorder.calls == [(5, {"name": "Ana", "age": 30})]
