"""Value model: node kinds over native Python JSON values."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from .models import NodeKind


class _Missing:
    """Marker for a structurally absent slot. Distinct from JSON null."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "MISSING"

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()


class BinaryValue:
    """
    Binary node whose bytes are loaded on demand.

    ``loader`` is called on every ``read()``; an ``OSError`` it raises is
    passed through to the caller.
    """

    def __init__(self, loader: Callable[[], bytes]):
        self._loader = loader

    @classmethod
    def of(cls, data: bytes) -> BinaryValue:
        payload = bytes(data)
        return cls(lambda: payload)

    def read(self) -> bytes:
        return bytes(self._loader())

    def __repr__(self) -> str:
        return "BinaryValue(...)"


@dataclass(frozen=True)
class OpaqueValue:
    """Wraps an embedded native object that has no JSON representation."""
    value: Any

    def __str__(self) -> str:
        return str(self.value)


_BINARY_TYPES = (bytes, bytearray, memoryview, BinaryValue)


def node_kind(value: Any) -> NodeKind:
    """Classify a value into its node kind."""
    if value is MISSING:
        return NodeKind.MISSING
    if value is None:
        return NodeKind.NULL
    # bool first: bool is a subclass of int
    if isinstance(value, bool):
        return NodeKind.BOOLEAN
    if isinstance(value, (int, float)):
        return NodeKind.NUMBER
    if isinstance(value, str):
        return NodeKind.STRING
    if isinstance(value, dict):
        return NodeKind.OBJECT
    if isinstance(value, (list, tuple)):
        return NodeKind.ARRAY
    if isinstance(value, _BINARY_TYPES):
        return NodeKind.BINARY
    return NodeKind.OPAQUE


def read_binary(value: Any) -> bytes:
    """Return the bytes of a binary node. May raise OSError for lazy sources."""
    if isinstance(value, BinaryValue):
        return value.read()
    return bytes(value)


def opaque_debug_string(value: Any) -> str:
    if isinstance(value, OpaqueValue):
        return str(value.value)
    return str(value)
