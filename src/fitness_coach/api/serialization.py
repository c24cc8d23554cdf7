"""Conversion of domain objects into camelCase JSON payloads."""

from dataclasses import fields, is_dataclass
from datetime import date
from uuid import UUID

from pydantic.alias_generators import to_camel


def to_payload(value: object) -> object:
    """Recursively convert dataclasses into JSON-ready camelCase structures."""
    if is_dataclass(value) and not isinstance(value, type):
        return {
            to_camel(item.name): to_payload(getattr(value, item.name))
            for item in fields(value)
        }
    if isinstance(value, dict):
        return {str(key): to_payload(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_payload(item) for item in value]
    if isinstance(value, UUID):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def success(data: object) -> dict[str, object]:
    """Wrap a payload in the success envelope."""
    return {"success": True, "data": to_payload(data)}
