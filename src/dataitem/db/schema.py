# src/dataitem/db/schema.py
"""
Table definitions for the metadata and tracker objects read by this package.

Every shareable metadata object gets four tables: the object itself, its
name translations, and its per-user and per-group access grants. They are
bundled into an `Entity` so the query builder can be written once and
parameterized by table.
"""

from dataclasses import dataclass

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()


@dataclass(frozen=True)
class Entity:
    table: Table
    translations: Table
    user_accesses: Table
    group_accesses: Table

    @property
    def name(self) -> str:
        return self.table.name

    @property
    def pk(self) -> Column:
        return self.table.c[f"{self.name}id"]

    @property
    def owner(self) -> str:
        """Foreign key column name used by the satellite tables."""
        return f"{self.name}id"


def _identifiable_columns(name: str):
    return [
        Column(f"{name}id", Integer, primary_key=True),
        Column("uid", String(11), nullable=False, unique=True),
        Column("code", String(50), unique=True),
        Column("name", String(230), nullable=False),
        Column("publicaccess", String(8)),
    ]


def shareable(name: str, *columns: Column) -> Entity:
    """Define an identifiable, translatable, shareable object."""
    table = Table(name, metadata, *_identifiable_columns(name), *columns)
    owner = f"{name}id"
    owner_fk = f"{name}.{owner}"

    translations = Table(
        f"{name}translations",
        metadata,
        Column(owner, Integer, ForeignKey(owner_fk), nullable=False),
        Column("locale", String(15), nullable=False),
        Column("property", String(50), nullable=False),
        Column("value", Text, nullable=False),
        UniqueConstraint(owner, "locale", "property"),
    )
    user_accesses = Table(
        f"{name}useraccesses",
        metadata,
        Column(owner, Integer, ForeignKey(owner_fk), nullable=False),
        Column("userid", String(11), nullable=False),
        Column("access", String(8), nullable=False),
    )
    group_accesses = Table(
        f"{name}usergroupaccesses",
        metadata,
        Column(owner, Integer, ForeignKey(owner_fk), nullable=False),
        Column("usergroupid", String(11), nullable=False),
        Column("access", String(8), nullable=False),
    )
    return Entity(table, translations, user_accesses, group_accesses)


usergroupmembers = Table(
    "usergroupmembers",
    metadata,
    Column("userid", String(11), nullable=False),
    Column("usergroupid", String(11), nullable=False),
)

# ===== Metadata =====

dataelement = shareable("dataelement", Column("valuetype", String(50), nullable=False))
dataset = shareable("dataset")
indicator = shareable("indicator")
program = shareable("program")
programindicator = shareable(
    "programindicator",
    Column("programid", Integer, ForeignKey("program.programid"), nullable=False),
)

programstage = Table(
    "programstage",
    metadata,
    Column("programstageid", Integer, primary_key=True),
    Column("uid", String(11), nullable=False, unique=True),
    Column("name", String(230), nullable=False),
    Column("programid", Integer, ForeignKey("program.programid"), nullable=False),
    Column("repeatable", Boolean, nullable=False, default=False),
)

programstagedataelement = Table(
    "programstagedataelement",
    metadata,
    Column("programstagedataelementid", Integer, primary_key=True),
    Column("programstageid", Integer, ForeignKey("programstage.programstageid"), nullable=False),
    Column("dataelementid", Integer, ForeignKey("dataelement.dataelementid"), nullable=False),
)

organisationunit = Table(
    "organisationunit",
    metadata,
    Column("organisationunitid", Integer, primary_key=True),
    Column("uid", String(11), nullable=False, unique=True),
    Column("code", String(50)),
    Column("name", String(230), nullable=False),
    Column("path", String(255)),
)

categoryoptioncombo = Table(
    "categoryoptioncombo",
    metadata,
    Column("categoryoptioncomboid", Integer, primary_key=True),
    Column("uid", String(11), nullable=False, unique=True),
    Column("code", String(50)),
    Column("name", String(230)),
)

userinfo = Table(
    "userinfo",
    metadata,
    Column("userinfoid", Integer, primary_key=True),
    Column("uid", String(11), nullable=False, unique=True),
    Column("username", String(255), nullable=False),
)

# ===== Tracker =====

trackedentityinstance = Table(
    "trackedentityinstance",
    metadata,
    Column("trackedentityinstanceid", Integer, primary_key=True),
    Column("uid", String(11), nullable=False, unique=True),
    Column("organisationunitid", Integer, ForeignKey("organisationunit.organisationunitid")),
    Column("deleted", Boolean, nullable=False, default=False),
)

programinstance = Table(
    "programinstance",
    metadata,
    Column("programinstanceid", Integer, primary_key=True),
    Column("uid", String(11), nullable=False, unique=True),
    Column("programid", Integer, ForeignKey("program.programid"), nullable=False),
    Column(
        "trackedentityinstanceid",
        Integer,
        ForeignKey("trackedentityinstance.trackedentityinstanceid"),
    ),
    Column("status", String(50), nullable=False, default="ACTIVE"),
    Column("deleted", Boolean, nullable=False, default=False),
)

programstageinstance = Table(
    "programstageinstance",
    metadata,
    Column("programstageinstanceid", Integer, primary_key=True),
    Column("uid", String(11), nullable=False, unique=True),
    Column("programinstanceid", Integer, ForeignKey("programinstance.programinstanceid")),
    Column("programstageid", Integer, ForeignKey("programstage.programstageid")),
    Column("status", String(50), nullable=False, default="ACTIVE"),
    Column("deleted", Boolean, nullable=False, default=False),
)

trackedentitycomment = Table(
    "trackedentitycomment",
    metadata,
    Column("trackedentitycommentid", Integer, primary_key=True),
    Column("uid", String(11), nullable=False, unique=True),
    Column("commenttext", Text),
    Column("creator", String(255)),
)
