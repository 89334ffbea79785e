# src/dataitem/core/query/params.py
"""
The parameter bag shared by all data item queries.

A plain dict keyed by the constants below. It is built once per request
from the parsed filters and orders and is only read afterwards.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from dataitem.core.errors import InvalidParameter
from dataitem.core.models.items import DimensionItemType, ValueType
from dataitem.core.query.filters import FilterExpression
from dataitem.core.query.operators import Direction, FilterAttribute, FilterOperator, OrderAttribute
from dataitem.core.query.order import OrderExpression

NAME = "name"
DISPLAY_NAME = "displayName"
LOCALE = "locale"
VALUE_TYPES = "valueTypes"
NAME_ORDER = "nameOrder"
DISPLAY_NAME_ORDER = "displayNameOrder"
MAX_LIMIT = "maxLimit"
USER_ID = "userId"
UID = "uid"
PROGRAM_ID = "programId"

STRING_PARAMS = (NAME, DISPLAY_NAME, LOCALE, USER_ID, UID, PROGRAM_ID)
ORDER_PARAMS = (NAME_ORDER, DISPLAY_NAME_ORDER)

# Escape character used for LIKE patterns built from user input.
LIKE_ESCAPE = "\\"

# Kinds are queried, and their results concatenated, in this order.
ALL_KINDS: List[DimensionItemType] = [
    DimensionItemType.DATA_ELEMENT,
    DimensionItemType.REPORTING_RATE,
    DimensionItemType.INDICATOR,
    DimensionItemType.PROGRAM_INDICATOR,
    DimensionItemType.PROGRAM_DATA_ELEMENT,
]


def validate_params(params: Optional[Mapping[str, Any]]) -> None:
    """Check the runtime type of every known entry; raise InvalidParameter."""
    if not params:
        return
    for key in STRING_PARAMS:
        if key in params:
            value = params[key]
            if not isinstance(value, str) or not value.strip():
                raise InvalidParameter(f"{key} cannot be null/blank and must be a String.")
    for key in ORDER_PARAMS:
        if key in params:
            value = params[key]
            if not isinstance(value, str) or Direction.lookup(value) is None:
                raise InvalidParameter(f"{key} must be one of ASC or DESC.")
    if VALUE_TYPES in params:
        value_types = params[VALUE_TYPES]
        if not isinstance(value_types, (set, frozenset)):
            raise InvalidParameter(f"{VALUE_TYPES} cannot be null and must be a Set.")
        if not value_types:
            raise InvalidParameter(f"{VALUE_TYPES} cannot be empty.")
        if not all(isinstance(v, str) for v in value_types):
            raise InvalidParameter(f"{VALUE_TYPES} must only contain value type names.")
    if MAX_LIMIT in params:
        limit = params[MAX_LIMIT]
        if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
            raise InvalidParameter(f"{MAX_LIMIT} must be a positive integer.")


def has_string_presence(params: Optional[Mapping[str, Any]], key: str) -> bool:
    if not params:
        return False
    value = params.get(key)
    return isinstance(value, str) and bool(value.strip())


def skip_value_type(value_type: ValueType, params: Optional[Mapping[str, Any]]) -> bool:
    """True when a value type filter is present and excludes `value_type`."""
    if not params or VALUE_TYPES not in params:
        return False
    return value_type.value not in params[VALUE_TYPES]


def escape_like(value: str) -> str:
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def _text_pattern(expression: FilterExpression) -> str:
    # eq and ieq become a wildcard-free pattern, matched with ILIKE.
    if expression.operator == FilterOperator.ILIKE:
        return f"%{escape_like(expression.value)}%"
    return escape_like(expression.value)


def _value_type_names(expression: FilterExpression) -> Set[str]:
    names = set(expression.values)
    valid = {v.value for v in ValueType}
    unknown = sorted(names - valid)
    if unknown:
        raise InvalidParameter(f"Unknown value type(s): {', '.join(unknown)}")
    return names


def _set_once(params: Dict[str, Any], key: str, value: str) -> None:
    if key in params and params[key] != value:
        raise InvalidParameter(f"Only one filter is allowed for `{key}`")
    params[key] = value


def build_params(
    filters: Iterable[FilterExpression] = (),
    orders: Iterable[OrderExpression] = (),
    *,
    user_id: Optional[str] = None,
    locale: Optional[str] = None,
    max_limit: Optional[int] = None,
) -> Dict[str, Any]:
    """Translate parsed filters and orders into a parameter bag."""
    params: Dict[str, Any] = {}

    for expression in filters:
        attribute = expression.attribute
        if attribute == FilterAttribute.NAME:
            _set_once(params, NAME, _text_pattern(expression))
        elif attribute == FilterAttribute.DISPLAY_NAME:
            _set_once(params, DISPLAY_NAME, _text_pattern(expression))
        elif attribute == FilterAttribute.VALUE_TYPE:
            params[VALUE_TYPES] = params.get(VALUE_TYPES, set()) | _value_type_names(expression)
        elif attribute == FilterAttribute.PROGRAM_ID:
            _set_once(params, PROGRAM_ID, expression.value)
        elif attribute == FilterAttribute.ID:
            _set_once(params, UID, expression.value)
        # dimensionItemType selects the queries to run, see target_kinds()

    for order in orders:
        key = NAME_ORDER if order.attribute == OrderAttribute.NAME else DISPLAY_NAME_ORDER
        _set_once(params, key, order.direction.value)

    if user_id:
        params[USER_ID] = user_id
    if locale:
        params[LOCALE] = locale
    if max_limit:
        params[MAX_LIMIT] = max_limit

    if VALUE_TYPES in params:
        params[VALUE_TYPES] = frozenset(params[VALUE_TYPES])

    return params


def target_kinds(filters: Iterable[FilterExpression]) -> List[DimensionItemType]:
    """Kinds requested by `dimensionItemType` filters; all kinds by default."""
    requested: Set[DimensionItemType] = set()
    for expression in filters:
        if expression.attribute != FilterAttribute.DIMENSION_ITEM_TYPE:
            continue
        for name in expression.values:
            try:
                requested.add(DimensionItemType(name))
            except ValueError:
                raise InvalidParameter(f"Unknown dimension item type: {name}") from None
    if not requested:
        return list(ALL_KINDS)
    return [kind for kind in ALL_KINDS if kind in requested]
