"""
Test configuration and fixtures for the data item queries.

A single in-memory SQLite database is created per session and seeded with
a small metadata catalog: data elements, data sets, indicators, programs
with their stages and program indicators, plus sharing grants and name
translations in French and Portuguese.
"""

import pytest
from sqlalchemy import insert

from dataitem.core.config import AppConfig, DbConfig
from dataitem.db import schema
from dataitem.db.client import DbClient

# Users and groups
ALICE = "xE7jOejl9FI"  # granted Clinical notes directly
BOB = "DXyJmlo9rge"  # member of the group granted Secret measure
NURSES = "Kk12LkEWtXp"

PUBLIC = "rw------"
PRIVATE = "--------"

# Data elements
ANC_1 = "fbfJHSPpUQD"
ANC_2 = "cYeuwXTCPkU"
BIRTHS = "Jtf34kNZhzP"
NOTES = "hfdmMSPBgLG"
SECRET = "sWoqcoByYmD"

# Programs
CHILD = "IpHINAT79UW"
INPATIENT = "eBAyeGv0exc"
PRIVATE_PROGRAM = "qDkgAbB5Jlk"

# Tracker objects
NGELEHUN = "DiszpKrYNg8"
DEFAULT_COC = "HllvX50cXC0"
TEI = "vOxUH373fy5"
ENROLLMENT = "hbnPGzwbg1j"
EXISTING_EVENT = "ZwwuwNp6gVd"
ADMIN = "M5zQapPyTZI"
NOTE = "Vuq9GRDHmqY"


def _translation(entity, owner_id, locale, value):
    return {entity.owner: owner_id, "locale": locale, "property": "NAME", "value": value}


def seed(connection):
    de = schema.dataelement
    connection.execute(
        insert(de.table),
        [
            dict(dataelementid=1, uid=ANC_1, code="DE_ANC1", name="ANC 1st visit", valuetype="NUMBER", publicaccess=PUBLIC),
            dict(dataelementid=2, uid=ANC_2, code="DE_ANC2", name="ANC 2nd visit", valuetype="INTEGER", publicaccess=PUBLIC),
            dict(dataelementid=3, uid=BIRTHS, code="DE_BIRTHS", name="Births attended", valuetype="NUMBER", publicaccess=PUBLIC),
            dict(dataelementid=4, uid=NOTES, code="DE_NOTES", name="Clinical notes", valuetype="TEXT", publicaccess=PRIVATE),
            dict(dataelementid=5, uid=SECRET, code="DE_SECRET", name="Secret measure", valuetype="NUMBER", publicaccess=PRIVATE),
        ],
    )
    connection.execute(
        insert(de.translations),
        [
            _translation(de, 1, "fr", "Premiere visite CPN"),
            _translation(de, 2, "pt", "Segunda visita"),
        ],
    )
    connection.execute(insert(de.user_accesses), [dict(dataelementid=4, userid=ALICE, access="r-------")])
    connection.execute(insert(de.group_accesses), [dict(dataelementid=5, usergroupid=NURSES, access="rw------")])
    connection.execute(insert(schema.usergroupmembers), [dict(userid=BOB, usergroupid=NURSES)])

    ds = schema.dataset
    connection.execute(
        insert(ds.table),
        [
            dict(datasetid=1, uid="lyLU2wR22tC", code="DS_ANC", name="ANC monthly summary", publicaccess=PUBLIC),
            dict(datasetid=2, uid="BfMAe6Itzgt", code="DS_CHILD", name="Child health", publicaccess=None),
        ],
    )
    connection.execute(insert(ds.translations), [_translation(ds, 1, "fr", "Resume mensuel CPN")])

    ind = schema.indicator
    connection.execute(
        insert(ind.table),
        [
            dict(indicatorid=1, uid="Uvn6LCg7dVU", code="IN_ANC1", name="ANC 1 Coverage", publicaccess=PUBLIC),
            dict(indicatorid=2, uid="OdiHJayrsKo", code="IN_ANC2", name="ANC 2 Coverage", publicaccess="--r-----"),
            dict(indicatorid=3, uid="sB79w2hiLp8", code="IN_PRIV", name="Private rate", publicaccess=PRIVATE),
        ],
    )
    connection.execute(insert(ind.translations), [_translation(ind, 1, "fr", "Couverture CPN 1")])

    pr = schema.program
    connection.execute(
        insert(pr.table),
        [
            dict(programid=1, uid=CHILD, code="PR_CHILD", name="Child Programme", publicaccess=PUBLIC),
            dict(programid=2, uid=INPATIENT, code="PR_INPAT", name="Inpatient morbidity", publicaccess=PUBLIC),
            dict(programid=3, uid=PRIVATE_PROGRAM, code="PR_PRIV", name="Private program", publicaccess=PRIVATE),
        ],
    )
    connection.execute(insert(pr.translations), [_translation(pr, 1, "fr", "Programme enfant")])

    connection.execute(
        insert(schema.programstage),
        [
            dict(programstageid=1, uid="A03MvHHogjR", name="Birth", programid=1, repeatable=False),
            dict(programstageid=2, uid="ZzYYXq4fJie", name="Baby postnatal", programid=1, repeatable=True),
            dict(programstageid=3, uid="Zj7UnCAulEk", name="Single-Event Inpatient", programid=2, repeatable=False),
            dict(programstageid=4, uid="pTo4uMt3xur", name="Private stage", programid=3, repeatable=False),
        ],
    )
    connection.execute(
        insert(schema.programstagedataelement),
        [
            # Births attended is captured in two stages of the same program.
            dict(programstagedataelementid=1, programstageid=1, dataelementid=3),
            dict(programstagedataelementid=2, programstageid=2, dataelementid=3),
            dict(programstagedataelementid=3, programstageid=2, dataelementid=2),
            dict(programstagedataelementid=4, programstageid=3, dataelementid=1),
            dict(programstagedataelementid=5, programstageid=4, dataelementid=1),
        ],
    )

    pi = schema.programindicator
    connection.execute(
        insert(pi.table),
        [
            dict(programindicatorid=1, uid="GSae40Fyppf", code="PI_AGE", name="Age at visit", programid=2, publicaccess=PUBLIC),
            dict(programindicatorid=2, uid="p2Zxg0wcPQ3", code="PI_BCG", name="BCG doses", programid=1, publicaccess=PUBLIC),
        ],
    )
    connection.execute(insert(pi.translations), [_translation(pi, 1, "fr", "Age lors de la visite")])

    # Tracker references
    connection.execute(
        insert(schema.organisationunit),
        [dict(organisationunitid=1, uid=NGELEHUN, code="OU_559", name="Ngelehun CHC", path=f"/{NGELEHUN}")],
    )
    connection.execute(
        insert(schema.categoryoptioncombo),
        [dict(categoryoptioncomboid=1, uid=DEFAULT_COC, code="default", name="default")],
    )
    connection.execute(insert(schema.userinfo), [dict(userinfoid=1, uid=ADMIN, username="admin")])
    connection.execute(
        insert(schema.trackedentityinstance),
        [dict(trackedentityinstanceid=1, uid=TEI, organisationunitid=1, deleted=False)],
    )
    connection.execute(
        insert(schema.programinstance),
        [dict(programinstanceid=1, uid=ENROLLMENT, programid=1, trackedentityinstanceid=1, status="ACTIVE", deleted=False)],
    )
    connection.execute(
        insert(schema.programstageinstance),
        [dict(programstageinstanceid=1, uid=EXISTING_EVENT, programinstanceid=1, programstageid=1, status="COMPLETED", deleted=False)],
    )
    connection.execute(
        insert(schema.trackedentitycomment),
        [dict(trackedentitycommentid=1, uid=NOTE, commenttext="Follow up next week", creator="admin")],
    )


@pytest.fixture(scope="session")
def db_client() -> DbClient:
    """In-memory database shared by every test, created and seeded once."""
    client = DbClient(DbConfig(url="sqlite://"))
    schema.metadata.create_all(client.engine)
    with client.engine.begin() as connection:
        seed(connection)
    return client


@pytest.fixture
def connection(db_client):
    with db_client.engine.connect() as connection:
        yield connection


@pytest.fixture
def config() -> AppConfig:
    return AppConfig(project_name="Data Items (test)", log_level="WARNING")
