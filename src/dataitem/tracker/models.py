# src/dataitem/tracker/models.py
"""Incoming tracker event payloads and import options."""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TrackerModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DataValue(TrackerModel):
    data_element: str
    value: Optional[str] = None
    provided_elsewhere: bool = False


class Note(TrackerModel):
    note: Optional[str] = None
    value: Optional[str] = None
    stored_by: Optional[str] = None


class Event(TrackerModel):
    event: Optional[str] = None
    status: str = "ACTIVE"
    program: Optional[str] = None
    program_stage: Optional[str] = None
    org_unit: Optional[str] = None
    tracked_entity_instance: Optional[str] = None
    enrollment: Optional[str] = None
    attribute_option_combo: Optional[str] = None
    occurred_at: Optional[str] = None
    scheduled_at: Optional[str] = None
    assigned_user: Optional[str] = None
    deleted: bool = False
    data_values: List[DataValue] = Field(default_factory=list)
    notes: List[Note] = Field(default_factory=list)


class IdScheme(str, Enum):
    UID = "UID"
    CODE = "CODE"


class ImportStrategy(str, Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    CREATE_AND_UPDATE = "CREATE_AND_UPDATE"
    DELETE = "DELETE"


class ImportOptions(TrackerModel):
    id_scheme: IdScheme = IdScheme.UID
    org_unit_id_scheme: IdScheme = IdScheme.UID
    event_id_scheme: IdScheme = IdScheme.UID
    import_strategy: ImportStrategy = ImportStrategy.CREATE_AND_UPDATE
    dry_run: bool = False
    skip_first: bool = False
    skip_notifications: bool = False
    skip_last_updated: bool = False
    user: Optional[str] = None

    @classmethod
    def default(cls) -> "ImportOptions":
        return cls()
