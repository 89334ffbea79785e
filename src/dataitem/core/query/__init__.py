"""The filter/order mini-language and the SQL fragments built from it."""

from dataitem.core.query.filters import FilterExpression, parse_filters
from dataitem.core.query.order import OrderExpression, check_compatibility, parse_order
from dataitem.core.query.params import build_params, target_kinds, validate_params

__all__ = [
    "FilterExpression",
    "OrderExpression",
    "parse_filters",
    "parse_order",
    "check_compatibility",
    "build_params",
    "target_kinds",
    "validate_params",
]
