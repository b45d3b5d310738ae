"""Utility functions for FieldDiff."""

from __future__ import annotations

from typing import Optional


def build_field_path(parent_path: str, key: str | int) -> str:
    """
    Build a field path from a parent path and a child key.

    Integer keys are array indices and are appended as ``[i]``. String keys
    are object fields, appended as ``.key`` or used bare at the root.
    """
    if isinstance(key, int) and not isinstance(key, bool):
        return f"{parent_path}[{key}]"
    if not parent_path:
        return str(key)
    return f"{parent_path}.{key}"


def extract_file_name(file_path: Optional[str]) -> str:
    """Extract the file name from a path, handling both / and \\ separators."""
    if file_path is None:
        return ""
    file_path = str(file_path)
    last_slash = max(file_path.rfind('/'), file_path.rfind('\\'))
    return file_path[last_slash + 1:] if last_slash >= 0 else file_path


def truncate(value: Optional[str], max_length: int, truncate_length: int) -> Optional[str]:
    """Cut ``value`` to ``truncate_length`` chars plus '...' when longer than ``max_length``."""
    if value is None:
        return None
    if len(value) > max_length:
        return value[:truncate_length] + "..."
    return value
