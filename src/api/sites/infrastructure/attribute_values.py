"""Conversion between JSON-style values and DynamoDB attribute values.

The boto3 resource layer returns every number as ``Decimal`` and refuses
``float`` on write. Documents cross the store boundary as plain JSON
values: integral numbers as ``int``, others as ``float``.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any


def to_attribute_value(value: Any) -> Any:
    """Prepare a JSON-style value for ``put_item``."""
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    if isinstance(value, dict):
        return {key: to_attribute_value(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_attribute_value(item) for item in value]
    return value


def from_attribute_value(value: Any) -> Any:
    """Convert a value returned by boto3 back to a JSON-style value."""
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, dict):
        return {key: from_attribute_value(item) for key, item in value.items()}
    if isinstance(value, list):
        return [from_attribute_value(item) for item in value]
    if isinstance(value, (set, frozenset)):
        return sorted(from_attribute_value(item) for item in value)
    return value
