"""Loading and parsing of JSON documents into value trees."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from .concurrency import run_pair
from .exceptions import DocumentParseError, DocumentReadError

logger = logging.getLogger(__name__)


def _reject_constant(name: str):
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_document(raw: str | bytes | bytearray, source: str = "<string>") -> Any:
    """
    Parse raw JSON text into a value tree.

    Strict JSON only: ``NaN`` and ``Infinity`` are rejected.

    Args:
        raw: JSON text or UTF-8 encoded bytes
        source: Label used in error messages (usually the file path)

    Returns:
        The parsed document (dict, list or scalar)

    Raises:
        DocumentParseError: If the input is not well-formed JSON
    """
    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = bytes(raw).decode('utf-8-sig')
        except UnicodeDecodeError as e:
            raise DocumentParseError(source, f"Invalid UTF-8: {e}") from e

    try:
        return json.loads(raw, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise DocumentParseError(source, e.msg, line=e.lineno, column=e.colno) from e
    except ValueError as e:
        raise DocumentParseError(source, str(e)) from e
    except RecursionError as e:
        raise DocumentParseError(source, "Document nesting is too deep") from e


def load_document(path: str | Path) -> Any:
    """
    Read and parse a JSON file.

    Raises:
        DocumentReadError: If the file cannot be read
        DocumentParseError: If the content is not well-formed JSON
    """
    file_path = Path(path)
    logger.debug(f"Loading JSON document: {file_path}")
    try:
        with open(file_path, 'rb') as f:
            content = f.read()
    except OSError as e:
        raise DocumentReadError(str(file_path), e.strerror or str(e)) from e

    return parse_document(content, source=str(file_path))


def load_documents(
    first_path: str | Path,
    second_path: str | Path,
    concurrent: bool = False
) -> tuple[Any, Any]:
    """Load two documents, optionally in parallel. Both must load or neither is returned."""
    if concurrent:
        return run_pair(
            lambda: load_document(first_path),
            lambda: load_document(second_path)
        )
    return load_document(first_path), load_document(second_path)
