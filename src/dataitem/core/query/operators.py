# src/dataitem/core/query/operators.py
from enum import Enum
from typing import FrozenSet, Optional, Tuple


class FilterAttribute(str, Enum):
    NAME = "name"
    DISPLAY_NAME = "displayName"
    VALUE_TYPE = "valueType"
    DIMENSION_ITEM_TYPE = "dimensionItemType"
    PROGRAM_ID = "programId"
    ID = "id"

    @classmethod
    def lookup(cls, name: str) -> Optional["FilterAttribute"]:
        return next((a for a in cls if a.value == name), None)


class FilterOperator(str, Enum):
    EQ = "eq"        # Equal
    IEQ = "ieq"      # Equal, case-insensitive
    ILIKE = "ilike"  # Contains, case-insensitive
    IN = "in"        # In a list of values: [A,B,C]

    @classmethod
    def lookup(cls, abbreviation: str) -> Optional["FilterOperator"]:
        return next((o for o in cls if o.value == abbreviation), None)


class OrderAttribute(str, Enum):
    NAME = "name"
    DISPLAY_NAME = "displayName"

    @classmethod
    def lookup(cls, name: str) -> Optional["OrderAttribute"]:
        return next((a for a in cls if a.value == name), None)


class Direction(str, Enum):
    ASC = "ASC"
    DESC = "DESC"

    @classmethod
    def lookup(cls, value: str) -> Optional["Direction"]:
        return next((d for d in cls if d.value == value.upper()), None)


_TEXT_OPERATORS = (FilterOperator.EQ, FilterOperator.IEQ, FilterOperator.ILIKE)

# Every attribute:operator pair a filter may use.
COMBINATIONS: FrozenSet[Tuple[FilterAttribute, FilterOperator]] = frozenset(
    [(FilterAttribute.NAME, op) for op in _TEXT_OPERATORS]
    + [(FilterAttribute.DISPLAY_NAME, op) for op in _TEXT_OPERATORS]
    + [
        (FilterAttribute.VALUE_TYPE, FilterOperator.EQ),
        (FilterAttribute.VALUE_TYPE, FilterOperator.IN),
        (FilterAttribute.DIMENSION_ITEM_TYPE, FilterOperator.EQ),
        (FilterAttribute.DIMENSION_ITEM_TYPE, FilterOperator.IN),
        (FilterAttribute.PROGRAM_ID, FilterOperator.EQ),
        (FilterAttribute.ID, FilterOperator.EQ),
    ]
)

# Operators that expect a bracketed, comma-separated list of values.
LIST_OPERATORS = {FilterOperator.IN}
