import random

import pytest

from dataitem.tracker import Event, UidGenerator


def test_generated_uids_are_valid():
    generator = UidGenerator(random.Random(1))

    uids = {generator.generate() for _ in range(200)}

    assert len(uids) == 200
    assert all(UidGenerator.is_valid(uid) for uid in uids)


@pytest.mark.parametrize(
    "uid, valid",
    [
        ("fbfJHSPpUQD", True),
        ("1bfJHSPpUQD", False),
        ("fbfJHSPpUQ", False),
        ("fbfJHSPpUQD1", False),
        ("fbfJHSP-UQD", False),
        (None, False),
    ],
)
def test_is_valid(uid, valid):
    assert UidGenerator.is_valid(uid) is valid


def test_assign_uids_keeps_existing():
    events = [Event(event="ZwwuwNp6gVd"), Event()]

    assigned = UidGenerator().assign_uids(events)

    assert assigned[0] is events[0]
    assert UidGenerator.is_valid(assigned[1].event)
    assert events[1].event is None
