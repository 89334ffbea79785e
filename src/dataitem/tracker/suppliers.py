# src/dataitem/tracker/suppliers.py
"""
Bulk reference lookups for a batch of events.

Each supplier collects the identifiers one kind of reference uses across
the whole batch and resolves them with a single query. References that do
not resolve map to None; rejecting them is left to validation.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Iterable, List, Optional, Protocol

from sqlalchemy import Table, select
from sqlalchemy.engine import Connection

from dataitem.core.logging import color_palette, log
from dataitem.db import schema
from dataitem.tracker.models import Event, IdScheme, ImportOptions

Record = Dict[str, Any]
References = Callable[[Event], Iterable[Optional[str]]]
SchemeOf = Callable[[ImportOptions], IdScheme]


class Supplier(Protocol):
    def get(self, import_options: ImportOptions, events: List[Event]) -> Dict[str, Optional[Record]]:
        ...


def _uid_scheme(options: ImportOptions) -> IdScheme:
    return IdScheme.UID


class TableSupplier:
    """Resolves one reference kind against one table."""

    def __init__(
        self,
        connection: Connection,
        table: Table,
        references: References,
        scheme: SchemeOf = _uid_scheme,
    ):
        self.connection = connection
        self.table = table
        self.references = references
        self.scheme = scheme

    def collect(self, events: List[Event]) -> List[str]:
        seen = {}
        for event in events:
            for reference in self.references(event):
                if reference:
                    seen.setdefault(reference, None)
        return list(seen)

    def lookup(self, column: str, keys: List[str]) -> Dict[str, Record]:
        rows = self.connection.execute(
            select(self.table).where(self.table.c[column].in_(keys))
        ).mappings()
        return {row[column]: dict(row) for row in rows}

    def get(self, import_options: ImportOptions, events: List[Event]) -> Dict[str, Optional[Record]]:
        keys = self.collect(events)
        if not keys:
            return {}
        column = "code" if self.scheme(import_options) == IdScheme.CODE else "uid"
        found = self.lookup(column, keys)
        log.debug(
            f"Resolved {color_palette['count'](len(found))}/{len(keys)} "
            f"{color_palette['table'](self.table.name)} references"
        )
        return {key: found.get(key) for key in keys}


class ProgramSupplier(TableSupplier):
    """Programs, each with its stages attached under `programStages`."""

    def __init__(self, connection: Connection):
        super().__init__(connection, schema.program.table, lambda e: [e.program])

    def lookup(self, column: str, keys: List[str]) -> Dict[str, Record]:
        programs = super().lookup(column, keys)
        if not programs:
            return programs

        by_id = {record["programid"]: record for record in programs.values()}
        stages = defaultdict(list)
        rows = self.connection.execute(
            select(schema.programstage).where(schema.programstage.c.programid.in_(list(by_id)))
        ).mappings()
        for row in rows:
            stages[row["programid"]].append(dict(row))

        for program_id, record in by_id.items():
            record["programStages"] = stages[program_id]
        return programs


def default_suppliers(connection: Connection) -> Dict[str, Supplier]:
    """One supplier per reference the work context carries."""
    return {
        "programs": ProgramSupplier(connection),
        "organisation_units": TableSupplier(
            connection,
            schema.organisationunit,
            lambda e: [e.org_unit],
            scheme=lambda options: options.org_unit_id_scheme,
        ),
        "tracked_entity_instances": TableSupplier(
            connection, schema.trackedentityinstance, lambda e: [e.tracked_entity_instance]
        ),
        "program_instances": TableSupplier(
            connection, schema.programinstance, lambda e: [e.enrollment]
        ),
        "program_stage_instances": TableSupplier(
            connection, schema.programstageinstance, lambda e: [e.event]
        ),
        "category_option_combos": TableSupplier(
            connection, schema.categoryoptioncombo, lambda e: [e.attribute_option_combo]
        ),
        "data_elements": TableSupplier(
            connection, schema.dataelement.table, lambda e: [dv.data_element for dv in e.data_values]
        ),
        "notes": TableSupplier(
            connection, schema.trackedentitycomment, lambda e: [note.note for note in e.notes]
        ),
        "assigned_users": TableSupplier(connection, schema.userinfo, lambda e: [e.assigned_user]),
    }
