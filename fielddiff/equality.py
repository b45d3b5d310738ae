"""Order-insensitive structural equality for JSON value trees."""

from __future__ import annotations

from typing import Any

from .models import NodeKind
from .values import node_kind, read_binary, opaque_debug_string


def structural_equals(a: Any, b: Any) -> bool:
    """
    Compare two value trees ignoring object field order.

    Array order is significant: elements are compared index by index.
    Numbers compare by numeric value, so ``1`` equals ``1.0``. Values of
    different kinds are never equal (``True`` is not ``1``).

    The walk keeps its own stack of pending pairs, so nesting depth is
    bounded by memory rather than by the interpreter's recursion limit.

    Args:
        a: The first value tree
        b: The second value tree

    Returns:
        True if both trees are structurally equal
    """
    pending = [(a, b)]
    while pending:
        left, right = pending.pop()
        kind = node_kind(left)
        if kind != node_kind(right):
            return False

        if kind == NodeKind.OBJECT:
            if len(left) != len(right) or set(left.keys()) != set(right.keys()):
                return False
            pending.extend((left[key], right[key]) for key in left)
        elif kind == NodeKind.ARRAY:
            if len(left) != len(right):
                return False
            pending.extend(zip(left, right))
        elif not _leaves_equal(kind, left, right):
            return False

    return True


def _leaves_equal(kind: NodeKind, a: Any, b: Any) -> bool:
    if kind == NodeKind.BINARY:
        return _binaries_equal(a, b)
    elif kind == NodeKind.OPAQUE:
        return opaque_debug_string(a) == opaque_debug_string(b)
    elif kind in (NodeKind.NULL, NodeKind.MISSING):
        return True
    return a is b or a == b


def _binaries_equal(a: Any, b: Any) -> bool:
    if a is b:
        return True
    try:
        return read_binary(a) == read_binary(b)
    except OSError:
        # Unreadable content only matches the very same node
        return False
