"""
Conversion between snake_case dataclass DTOs and camelCase stored documents.
"""

from dataclasses import fields
from enum import Enum
from typing import Any, Dict, Type, TypeVar

T = TypeVar('T')


def to_camel(name: str) -> str:
    """Convert a snake_case attribute name to its stored camelCase key."""
    head, *rest = name.split('_')
    return head + ''.join(part[:1].upper() + part[1:] for part in rest)


def from_document(cls: Type[T], data: Dict[str, Any], **overrides) -> T:
    """
    Build a dataclass from a stored document.

    Keys absent from the document (or stored as null) fall back to the
    dataclass defaults. Unknown document keys are ignored.
    """
    kwargs = {}
    for field in fields(cls):
        key = to_camel(field.name)
        if field.name in overrides:
            kwargs[field.name] = overrides[field.name]
        elif data.get(key) is not None:
            kwargs[field.name] = data[key]
    return cls(**kwargs)


def to_document(obj: Any) -> Dict[str, Any]:
    """Flatten a dataclass into a camelCase document, dropping None values."""
    document = {}
    for field in fields(obj):
        value = getattr(obj, field.name)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        document[to_camel(field.name)] = value
    return document
