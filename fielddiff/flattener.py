"""Path flattening: nested JSON tree to a flat field path -> rendered value mapping."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

from .models import NodeKind, WarningEntry, WarningType
from .values import MISSING, node_kind, read_binary, opaque_debug_string
from .utils import build_field_path
from .exceptions import MaxDepthExceededError

logger = logging.getLogger(__name__)

UNREADABLE_BINARY = "[BINARY DATA: Unable to read length]"


def render_binary(value: Any) -> str:
    """Render a binary node as its byte length. May raise OSError."""
    return f"[BINARY DATA: {len(read_binary(value))} bytes]"


def render_opaque(value: Any) -> str:
    return f"[POJO: {opaque_debug_string(value)}]"


def _binary_placeholder(value: Any) -> str:
    try:
        return render_binary(value)
    except OSError:
        return UNREADABLE_BINARY


def _compact_json(root: Any) -> str:
    """
    Render a composite as compact JSON. Missing slots are dropped.

    Containers are expanded onto an explicit stack of tokens and values, so
    deeply nested documents render without recursion.
    """
    parts: list[str] = []
    # (True, token) is emitted as is, (False, value) is expanded
    stack: list[tuple[bool, Any]] = [(False, root)]
    while stack:
        is_token, item = stack.pop()
        if is_token:
            parts.append(item)
            continue

        kind = node_kind(item)
        if kind == NodeKind.OBJECT:
            expanded: list[tuple[bool, Any]] = [(True, "{")]
            children = [(key, child) for key, child in item.items() if child is not MISSING]
            for i, (key, child) in enumerate(children):
                if i:
                    expanded.append((True, ","))
                expanded.append((True, json.dumps(str(key), ensure_ascii=False) + ":"))
                expanded.append((False, child))
            expanded.append((True, "}"))
            stack.extend(reversed(expanded))
        elif kind == NodeKind.ARRAY:
            expanded = [(True, "[")]
            children = [child for child in item if child is not MISSING]
            for i, child in enumerate(children):
                if i:
                    expanded.append((True, ","))
                expanded.append((False, child))
            expanded.append((True, "]"))
            stack.extend(reversed(expanded))
        elif kind == NodeKind.BINARY:
            parts.append(json.dumps(_binary_placeholder(item), ensure_ascii=False))
        elif kind == NodeKind.OPAQUE:
            parts.append(json.dumps(render_opaque(item), ensure_ascii=False))
        else:
            parts.append(json.dumps(item, ensure_ascii=False))

    return "".join(parts)


def get_value_as_string(value: Any) -> str:
    """
    Render a node the way it appears in a flattened document.

    - null -> ``null``
    - string -> the string in double quotes, inner quotes left unescaped
    - number / boolean -> canonical text (``30``, ``2.5``, ``true``)
    - object / array -> compact JSON (``{"id":1}``)
    - binary -> ``[BINARY DATA: N bytes]`` (may raise OSError)
    - anything else -> ``[POJO: <debug string>]``
    """
    kind = node_kind(value)
    if kind == NodeKind.NULL:
        return "null"
    elif kind == NodeKind.STRING:
        return f'"{value}"'
    elif kind == NodeKind.BOOLEAN:
        return "true" if value else "false"
    elif kind == NodeKind.NUMBER:
        return str(value)
    elif kind in (NodeKind.OBJECT, NodeKind.ARRAY):
        return _compact_json(value)
    elif kind == NodeKind.BINARY:
        return render_binary(value)
    return render_opaque(value)


class Flattener:
    """
    Turns a value tree into a mapping from field path to rendered value.

    Traversal is depth-first pre-order: a container's own entry is emitted
    before its children, so intermediate objects and arrays appear in the
    output too. The root itself never gets an entry.

    Missing slots are skipped and unreadable binary nodes degrade to a
    placeholder; both are logged and recorded in ``warnings``.

    Nesting is unbounded unless ``max_depth`` is set.
    """

    def __init__(self, max_depth: Optional[int] = None, collect_warnings: bool = True):
        self.max_depth = max_depth
        self.collect_warnings = collect_warnings
        self.warnings: list[WarningEntry] = []

    def flatten(self, root: Any) -> dict[str, str]:
        """
        Flatten a document.

        Args:
            root: The parsed document root

        Returns:
            Field path -> rendered value, in traversal order
        """
        self.warnings = []
        accumulator: dict[str, str] = {}
        pending = [(root, "", 0)]
        while pending:
            node, path, depth = pending.pop()
            self._visit(node, path, depth, accumulator, pending)
        return accumulator

    def _visit(self, node: Any, path: str, depth: int, accumulator: dict[str, str], pending: list):
        if self.max_depth is not None and depth > self.max_depth:
            raise MaxDepthExceededError(self.max_depth, path)

        kind = node_kind(node)

        if kind == NodeKind.OBJECT:
            self._accumulate(node, path, accumulator)
            children = [
                (child, build_field_path(path, str(key)), depth + 1)
                for key, child in node.items()
            ]
            # reversed so the first child is visited next
            pending.extend(reversed(children))

        elif kind == NodeKind.ARRAY:
            self._accumulate(node, path, accumulator)
            children = [
                (child, build_field_path(path, i), depth + 1)
                for i, child in enumerate(node)
            ]
            pending.extend(reversed(children))

        elif kind == NodeKind.BINARY:
            if path:
                self._accumulate_binary(node, path, accumulator)
                logger.debug(f"Binary data captured in the path: {path}")

        elif kind == NodeKind.OPAQUE:
            if path:
                accumulator[path] = render_opaque(node)
                logger.debug(f"POJO captured: {path} = {opaque_debug_string(node)}")

        elif kind == NodeKind.MISSING:
            logger.warning(f"Missing node encountered in the path: {path}")
            self._add_warning(path, WarningType.MISSING_NODE, "Missing node skipped")

        else:
            self._accumulate(node, path, accumulator)
            if path and logger.isEnabledFor(logging.DEBUG):
                logger.debug(f"Leaf value captured: {path} = {accumulator[path]}")

    def _accumulate(self, node: Any, path: str, accumulator: dict[str, str]):
        if path:
            accumulator[path] = get_value_as_string(node)

    def _accumulate_binary(self, node: Any, path: str, accumulator: dict[str, str]):
        try:
            accumulator[path] = render_binary(node)
        except OSError as e:
            accumulator[path] = UNREADABLE_BINARY
            logger.warning(f"Error reading binary data in the path: {path}: {e}")
            self._add_warning(
                path,
                WarningType.UNREADABLE_BINARY,
                f"Unable to read binary length: {e}"
            )

    def _add_warning(self, path: str, warning_type: WarningType, message: str):
        if self.collect_warnings:
            self.warnings.append(WarningEntry(path=path, type=warning_type, message=message))


def flatten(root: Any, max_depth: Optional[int] = None) -> dict[str, str]:
    """Convenience function: flatten a document with default settings."""
    return Flattener(max_depth=max_depth).flatten(root)
