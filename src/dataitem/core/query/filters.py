# src/dataitem/core/query/filters.py
"""
Parsing of `attribute:operator:value` filter expressions.

Filters arrive as repeated `filter` query parameters, for example
`name:ilike:anc` or `valueType:in:[NUMBER,INTEGER]`. Parsing is fail-fast:
the first invalid token raises and nothing is returned.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Set, Tuple

from dataitem.core.errors import (
    InvalidFilterSyntax,
    UnknownAttribute,
    UnknownOperator,
    UnsupportedCombination,
    ValueTooShort,
)
from dataitem.core.query.operators import (
    COMBINATIONS,
    LIST_OPERATORS,
    FilterAttribute,
    FilterOperator,
)

SEPARATOR = ":"
MIN_TEXT_SEARCH_LENGTH = 2


@dataclass(frozen=True)
class FilterExpression:
    attribute: FilterAttribute
    operator: FilterOperator
    value: str

    @property
    def values(self) -> Tuple[str, ...]:
        """Individual values; `in` lists are written as `[A,B,C]`."""
        if self.operator not in LIST_OPERATORS:
            return (self.value,)
        inner = self.value.strip().lstrip("[").rstrip("]")
        return tuple(v.strip() for v in inner.split(",") if v.strip())

    @property
    def prefix(self) -> str:
        return f"{self.attribute.value}{SEPARATOR}{self.operator.value}{SEPARATOR}"

    def __str__(self) -> str:
        return f"{self.prefix}{self.value}"


def parse_filter(token: str) -> FilterExpression:
    # Trailing empty parts are dropped, so `name:eq:` is a syntax error.
    parts = token.rstrip(SEPARATOR).split(SEPARATOR)
    if len(parts) != 3:
        raise InvalidFilterSyntax(token)

    attribute_name, abbreviation, value = (part.strip() for part in parts)

    if len(value) < MIN_TEXT_SEARCH_LENGTH:
        raise ValueTooShort(MIN_TEXT_SEARCH_LENGTH, token)

    attribute = FilterAttribute.lookup(attribute_name)
    if attribute is None:
        raise UnknownAttribute(attribute_name)

    operator = FilterOperator.lookup(abbreviation)
    if operator is None:
        raise UnknownOperator(abbreviation)

    if (attribute, operator) not in COMBINATIONS:
        raise UnsupportedCombination(f"{attribute_name}{SEPARATOR}{abbreviation}")

    return FilterExpression(attribute, operator, value)


def parse_filters(raw_filters: Optional[Iterable[str]]) -> Set[FilterExpression]:
    """Parse every raw filter token, raising on the first invalid one."""
    return {parse_filter(token) for token in raw_filters or ()}


def filter_has_prefix(raw_filter: str, prefix: str) -> bool:
    return raw_filter.strip().startswith(prefix.strip())


def contains_filter_with_prefix(raw_filters: Optional[Iterable[str]], *prefixes: str) -> bool:
    """True when any raw filter starts with any one of the given prefixes."""
    return any(
        filter_has_prefix(raw_filter, prefix)
        for raw_filter in raw_filters or ()
        for prefix in prefixes
    )
