# src/dataitem/core/models/items.py
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class DimensionItemType(str, Enum):
    """Entity kinds a data item can be addressed as in analytics."""

    DATA_ELEMENT = "DATA_ELEMENT"
    REPORTING_RATE = "REPORTING_RATE"
    INDICATOR = "INDICATOR"
    PROGRAM_INDICATOR = "PROGRAM_INDICATOR"
    PROGRAM_DATA_ELEMENT = "PROGRAM_DATA_ELEMENT"


class ValueType(str, Enum):
    TEXT = "TEXT"
    LONG_TEXT = "LONG_TEXT"
    LETTER = "LETTER"
    PHONE_NUMBER = "PHONE_NUMBER"
    EMAIL = "EMAIL"
    BOOLEAN = "BOOLEAN"
    TRUE_ONLY = "TRUE_ONLY"
    DATE = "DATE"
    DATETIME = "DATETIME"
    TIME = "TIME"
    AGE = "AGE"
    NUMBER = "NUMBER"
    UNIT_INTERVAL = "UNIT_INTERVAL"
    PERCENTAGE = "PERCENTAGE"
    INTEGER = "INTEGER"
    INTEGER_POSITIVE = "INTEGER_POSITIVE"
    INTEGER_NEGATIVE = "INTEGER_NEGATIVE"
    INTEGER_ZERO_OR_POSITIVE = "INTEGER_ZERO_OR_POSITIVE"
    TRACKER_ASSOCIATE = "TRACKER_ASSOCIATE"
    USERNAME = "USERNAME"
    COORDINATE = "COORDINATE"
    ORGANISATION_UNIT = "ORGANISATION_UNIT"
    URL = "URL"
    FILE_RESOURCE = "FILE_RESOURCE"
    IMAGE = "IMAGE"

    @property
    def is_date(self) -> bool:
        return self in _DATE_TYPES

    @property
    def is_numeric(self) -> bool:
        return self in _NUMERIC_TYPES

    @property
    def is_boolean(self) -> bool:
        return self in (ValueType.BOOLEAN, ValueType.TRUE_ONLY)

    def simplified(self) -> "ValueType":
        """Collapse to one of DATE, NUMBER, BOOLEAN or TEXT."""
        if self.is_date:
            return ValueType.DATE
        if self.is_numeric:
            return ValueType.NUMBER
        if self.is_boolean:
            return ValueType.BOOLEAN
        return ValueType.TEXT


_DATE_TYPES = frozenset({ValueType.DATE, ValueType.DATETIME, ValueType.TIME, ValueType.AGE})

_NUMERIC_TYPES = frozenset(
    {
        ValueType.NUMBER,
        ValueType.UNIT_INTERVAL,
        ValueType.PERCENTAGE,
        ValueType.INTEGER,
        ValueType.INTEGER_POSITIVE,
        ValueType.INTEGER_NEGATIVE,
        ValueType.INTEGER_ZERO_OR_POSITIVE,
    }
)


class DataItem(BaseModel):
    """Read-only projection of one searchable dimension item."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    id: str
    name: Optional[str] = None
    display_name: Optional[str] = None
    code: Optional[str] = None
    value_type: Optional[ValueType] = None
    simplified_value_type: Optional[ValueType] = None
    dimension_item_type: DimensionItemType
    program_id: Optional[str] = None
