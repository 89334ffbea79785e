# src/dataitem/core/errors.py
"""Validation errors raised while parsing and querying data items."""

from enum import Enum
from typing import Any, Dict


class ErrorCode(str, Enum):
    E2014 = "E2014"  # invalid filter syntax
    E2015 = "E2015"  # invalid order syntax
    E2034 = "E2034"  # unknown filter attribute
    E2035 = "E2035"  # unknown or unsupported filter operator
    E2036 = "E2036"  # order and filter cannot be combined
    E2037 = "E2037"  # unknown order attribute or direction
    E2038 = "E2038"  # search text too short
    E2039 = "E2039"  # malformed query parameter


class DataItemError(Exception):
    """Base class for user input errors; surfaced as a rejected request."""

    error_code: ErrorCode = ErrorCode.E2039
    http_status = "Conflict"
    http_status_code = 409

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> Dict[str, Any]:
        return {
            "httpStatus": self.http_status,
            "httpStatusCode": self.http_status_code,
            "status": "ERROR",
            "errorCode": self.error_code.value,
            "message": self.message,
        }


class InvalidFilterSyntax(DataItemError):
    error_code = ErrorCode.E2014

    def __init__(self, token: str):
        super().__init__(f"Invalid filter `{token}`, expected `attribute:operator:value`")


class InvalidOrderSyntax(DataItemError):
    error_code = ErrorCode.E2015

    def __init__(self, token: str):
        super().__init__(f"Invalid order `{token}`, expected `attribute:direction`")


class UnknownAttribute(DataItemError):
    error_code = ErrorCode.E2034

    def __init__(self, attribute: str):
        super().__init__(f"Filter not supported: `{attribute}`")


class UnknownOperator(DataItemError):
    error_code = ErrorCode.E2035

    def __init__(self, operator: str):
        super().__init__(f"Operator not supported: `{operator}`")


class UnsupportedCombination(DataItemError):
    error_code = ErrorCode.E2035

    def __init__(self, combination: str):
        super().__init__(f"Operator not supported: `{combination}`")


class IncompatibleOrderFilter(DataItemError):
    error_code = ErrorCode.E2036

    def __init__(self, pair: str):
        super().__init__(f"Combination not supported: `{pair}`")


class UnknownOrderAttribute(DataItemError):
    error_code = ErrorCode.E2037

    def __init__(self, attribute: str):
        super().__init__(f"Order not supported: `{attribute}`")


class UnknownDirection(DataItemError):
    error_code = ErrorCode.E2037

    def __init__(self, direction: str):
        super().__init__(f"Order not supported: `{direction}`")


class ValueTooShort(DataItemError):
    error_code = ErrorCode.E2038

    def __init__(self, min_length: int, token: str):
        super().__init__(f"Filter value must have at least {min_length} characters: `{token}`")


class InvalidParameter(DataItemError):
    error_code = ErrorCode.E2039
