# src/dataitem/core/query/order.py
"""Parsing of `attribute:direction` order expressions."""

from dataclasses import dataclass
from typing import Iterable, Optional, Set

from dataitem.core.errors import (
    IncompatibleOrderFilter,
    InvalidOrderSyntax,
    UnknownDirection,
    UnknownOrderAttribute,
)
from dataitem.core.query.filters import SEPARATOR, FilterExpression
from dataitem.core.query.operators import Direction, FilterAttribute, OrderAttribute


@dataclass(frozen=True)
class OrderExpression:
    attribute: OrderAttribute
    direction: Direction

    def __str__(self) -> str:
        return f"{self.attribute.value}{SEPARATOR}{self.direction.value.lower()}"


def parse_order_param(token: str) -> OrderExpression:
    # Trailing empty parts are dropped, so `name:` is a syntax error.
    parts = token.rstrip(SEPARATOR).split(SEPARATOR)
    if len(parts) != 2:
        raise InvalidOrderSyntax(token)

    attribute_name, direction_name = (part.strip() for part in parts)

    attribute = OrderAttribute.lookup(attribute_name)
    if attribute is None:
        raise UnknownOrderAttribute(attribute_name)

    direction = Direction.lookup(direction_name)
    if direction is None:
        raise UnknownDirection(direction_name)

    return OrderExpression(attribute, direction)


def parse_order(raw_order: Optional[Iterable[str]]) -> Set[OrderExpression]:
    return {parse_order_param(token) for token in raw_order or ()}


# Filtering by one of these while ordering by the other is rejected.
_INCOMPATIBLE = {
    (OrderAttribute.DISPLAY_NAME, FilterAttribute.NAME),
    (OrderAttribute.NAME, FilterAttribute.DISPLAY_NAME),
}


def check_compatibility(
    orders: Iterable[OrderExpression], filters: Iterable[FilterExpression]
) -> None:
    """
    Reject order/filter pairs that mix `name` and `displayName`.

    `order=displayName:asc` with `filter=displayName:ilike:x` is fine, as is
    `order=name:asc` with `filter=name:ilike:x`; crossing them is not.
    """
    filters = list(filters)
    for order in orders:
        for expression in filters:
            if (order.attribute, expression.attribute) in _INCOMPATIBLE:
                raise IncompatibleOrderFilter(f"{order} + {expression}")
