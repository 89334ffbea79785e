# src/dataitem/tracker/context.py
"""Assembles everything the event import pipeline needs for one batch."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from sqlalchemy.engine import Connection

from dataitem.core.logging import log
from dataitem.tracker.models import Event, ImportOptions
from dataitem.tracker.suppliers import Record, Supplier, default_suppliers
from dataitem.tracker.uid import UidGenerator

ReferenceMap = Mapping[str, Optional[Record]]


@dataclass(frozen=True)
class WorkContext:
    """Read-only references resolved for one batch of events."""

    import_options: ImportOptions
    events: Tuple[Event, ...]
    programs: ReferenceMap
    organisation_units: ReferenceMap
    tracked_entity_instances: ReferenceMap
    program_instances: ReferenceMap
    program_stage_instances: ReferenceMap
    category_option_combos: ReferenceMap
    data_elements: ReferenceMap
    notes: ReferenceMap
    assigned_users: ReferenceMap
    service_delegator: Any = None


class WorkContextLoader:
    """
    Resolves, in bulk, the references carried by a batch of events.

    Each supplier runs once per batch. Lookups are independent reads, so
    their order does not matter. No business rule is checked here.
    """

    SUPPLIER_NAMES = (
        "programs",
        "organisation_units",
        "tracked_entity_instances",
        "program_instances",
        "program_stage_instances",
        "category_option_combos",
        "data_elements",
        "notes",
        "assigned_users",
    )

    def __init__(
        self,
        suppliers: Dict[str, Supplier],
        service_delegator_supplier: Callable[[], Any],
        uid_generator: UidGenerator,
    ):
        missing = [name for name in self.SUPPLIER_NAMES if name not in suppliers]
        if missing:
            raise ValueError(f"Missing suppliers: {', '.join(missing)}")
        self.suppliers = suppliers
        self.service_delegator_supplier = service_delegator_supplier
        self.uid_generator = uid_generator

    @classmethod
    def from_connection(
        cls,
        connection: Connection,
        service_delegator_supplier: Callable[[], Any],
        uid_generator: Optional[UidGenerator] = None,
    ) -> "WorkContextLoader":
        return cls(
            default_suppliers(connection),
            service_delegator_supplier,
            uid_generator or UidGenerator(),
        )

    def load(self, import_options: Optional[ImportOptions], events: List[Event]) -> WorkContext:
        # Import options may be omitted by the caller.
        options = import_options or ImportOptions.default()
        events = self.uid_generator.assign_uids(events)

        log.debug(f"Loading work context for {len(events)} events")
        resolved = {
            name: MappingProxyType(self.suppliers[name].get(options, events))
            for name in self.SUPPLIER_NAMES
        }

        return WorkContext(
            import_options=options,
            events=tuple(events),
            service_delegator=self.service_delegator_supplier(),
            **resolved,
        )
