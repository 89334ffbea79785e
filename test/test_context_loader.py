import dataclasses
import random

import pytest

from conftest import (
    ADMIN,
    ANC_1,
    BIRTHS,
    CHILD,
    DEFAULT_COC,
    ENROLLMENT,
    EXISTING_EVENT,
    NGELEHUN,
    NOTE,
    TEI,
)
from dataitem.tracker import DataValue, Event, ImportOptions, Note, UidGenerator, WorkContextLoader
from dataitem.tracker.models import IdScheme, ImportStrategy

MISSING = "zzzzzzzzzzz"


@pytest.fixture
def delegator():
    return object()


@pytest.fixture
def loader(connection, delegator):
    return WorkContextLoader.from_connection(
        connection, lambda: delegator, UidGenerator(random.Random(7))
    )


@pytest.fixture
def events():
    return [
        Event(
            event=EXISTING_EVENT,
            program=CHILD,
            program_stage="A03MvHHogjR",
            org_unit=NGELEHUN,
            tracked_entity_instance=TEI,
            enrollment=ENROLLMENT,
            attribute_option_combo=DEFAULT_COC,
            assigned_user=ADMIN,
            data_values=[DataValue(data_element=BIRTHS, value="3")],
            notes=[Note(note=NOTE, value="Follow up next week")],
        ),
        Event(
            program=CHILD,
            org_unit=MISSING,
            data_values=[
                DataValue(data_element=ANC_1, value="1"),
                DataValue(data_element=BIRTHS, value="2"),
            ],
        ),
    ]


def test_resolves_every_reference(loader, events, delegator):
    context = loader.load(ImportOptions(), events)

    assert context.programs[CHILD]["name"] == "Child Programme"
    assert context.organisation_units[NGELEHUN]["name"] == "Ngelehun CHC"
    assert context.tracked_entity_instances[TEI]["uid"] == TEI
    assert context.program_instances[ENROLLMENT]["status"] == "ACTIVE"
    assert context.program_stage_instances[EXISTING_EVENT]["status"] == "COMPLETED"
    assert context.category_option_combos[DEFAULT_COC]["code"] == "default"
    assert set(context.data_elements) == {BIRTHS, ANC_1}
    assert context.notes[NOTE]["commenttext"] == "Follow up next week"
    assert context.assigned_users[ADMIN]["username"] == "admin"
    assert context.service_delegator is delegator


def test_programs_carry_their_stages(loader, events):
    context = loader.load(None, events)

    stages = context.programs[CHILD]["programStages"]
    assert sorted(stage["name"] for stage in stages) == ["Baby postnatal", "Birth"]
    assert {stage["name"]: stage["repeatable"] for stage in stages}["Baby postnatal"]


def test_unresolved_references_map_to_none(loader, events):
    context = loader.load(None, events)

    assert context.organisation_units[MISSING] is None


def test_default_options(loader, events):
    context = loader.load(None, events)

    assert context.import_options == ImportOptions.default()
    assert context.import_options.import_strategy == ImportStrategy.CREATE_AND_UPDATE


def test_new_events_get_uids(loader, events):
    context = loader.load(None, events)

    new_event = context.events[1]
    assert UidGenerator.is_valid(new_event.event)
    assert context.events[0].event == EXISTING_EVENT
    # Not stored yet, so nothing to resolve.
    assert context.program_stage_instances[new_event.event] is None
    # The caller's events are left untouched.
    assert events[1].event is None


def test_org_units_by_code(loader, events):
    options = ImportOptions(org_unit_id_scheme=IdScheme.CODE)
    coded = [events[0].model_copy(update={"org_unit": "OU_559"})]

    context = loader.load(options, coded)

    assert context.organisation_units["OU_559"]["uid"] == NGELEHUN


def test_empty_batch(loader):
    context = loader.load(None, [])

    assert context.events == ()
    assert dict(context.programs) == {}
    assert dict(context.data_elements) == {}


def test_context_is_read_only(loader, events):
    context = loader.load(None, events)

    with pytest.raises(TypeError):
        context.programs["other"] = None
    with pytest.raises(dataclasses.FrozenInstanceError):
        context.events = ()


class RecordingSupplier:
    def __init__(self, name):
        self.name = name
        self.calls = []

    def get(self, import_options, events):
        self.calls.append(len(events))
        return {self.name: {"uid": self.name}}


def test_each_supplier_runs_once_per_batch(events):
    suppliers = {name: RecordingSupplier(name) for name in WorkContextLoader.SUPPLIER_NAMES}
    loader = WorkContextLoader(suppliers, lambda: None, UidGenerator())

    context = loader.load(None, events)

    assert all(supplier.calls == [2] for supplier in suppliers.values())
    assert context.notes == {"notes": {"uid": "notes"}}


def test_missing_supplier():
    suppliers = {name: RecordingSupplier(name) for name in WorkContextLoader.SUPPLIER_NAMES[1:]}

    with pytest.raises(ValueError, match="programs"):
        WorkContextLoader(suppliers, lambda: None, UidGenerator())
