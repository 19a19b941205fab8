"""
Closed value sets accepted by the Covalent API.
"""

from enum import Enum
from typing import Tuple

from covalent_api.api.exceptions import ParameterValidationError


class QuoteCurrency(str, Enum):
    """Denomination for price-valued fields. Canonical values are upper-case."""
    USD = "USD"
    CAD = "CAD"
    EUR = "EUR"
    SGD = "SGD"
    INR = "INR"
    JPY = "JPY"
    VND = "VND"
    CNY = "CNY"
    KRW = "KRW"
    RUB = "RUB"
    TRY = "TRY"
    ETH = "ETH"


class OutputFormat(str, Enum):
    """Response serialization performed by the remote service."""
    JSON = "JSON"
    CSV = "CSV"


class SortOrder(str, Enum):
    """Ordering of time-sorted results."""
    ASCENDING = "ascending"
    DESCENDING = "descending"


def accepted_values(enum_cls) -> Tuple[str, ...]:
    return tuple(member.value for member in enum_cls)


def coerce_enum(enum_cls, value, field: str):
    """
    Returns the enum member for ``value``.

    Strings are matched exactly against the canonical values; no case folding is
    done before the check.

    :raises ParameterValidationError: If the value is not a member of the set.
    """
    if isinstance(value, enum_cls):
        return value
    if isinstance(value, str) and value in enum_cls._value2member_map_:
        return enum_cls(value)
    accepted = accepted_values(enum_cls)
    raise ParameterValidationError(
        field,
        f"Invalid {field} '{value}'; accepted values are: {', '.join(accepted)}",
        value=value,
        accepted=accepted,
    )
