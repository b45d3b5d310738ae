"""Main comparison engine for FieldDiff."""

from __future__ import annotations

import time
import logging
from dataclasses import replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

from .exceptions import FieldDiffError, InterruptedComparisonError
from .models import EngineConfig, DiffReport, ExecutionInfo, ComparisonResult
from .parser import parse_document, load_documents
from .equality import structural_equals
from .flattener import Flattener
from .classifier import classify
from .concurrency import run_pair

logger = logging.getLogger(__name__)


class FieldDiffEngine:
    """
    Orchestrates a two-document comparison:

    1. Parsing: both documents into value trees
    2. Verdict: order-insensitive structural equality
    3. Flattening: each tree into field path -> rendered value
    4. Classification: per-path diff report

    Steps 1 and 3 each work on the two documents independently and run in
    parallel when ``config.concurrent`` is set.

    The verdict and the report use different notions of equality and may
    disagree: ``{"a": 1}`` and ``{"a": 1.0}`` are structurally equal, yet
    their rendered values differ.
    """

    VERSION = "1.0.0"

    def __init__(self, config: Optional[EngineConfig] = None):
        """
        Initialize the engine.

        Args:
            config: Engine configuration (uses defaults if not provided)
        """
        self.config = config or EngineConfig()

    def compare(self, doc1: str | bytes, doc2: str | bytes) -> bool:
        """Parse two raw JSON documents and compare them structurally."""
        value1, value2 = self._pair(
            lambda: parse_document(doc1, source="document 1"),
            lambda: parse_document(doc2, source="document 2")
        )
        return structural_equals(value1, value2)

    def compare_values(self, value1: Any, value2: Any) -> bool:
        """Compare two already parsed value trees."""
        return structural_equals(value1, value2)

    def compare_files(self, path1: str | Path, path2: str | Path) -> bool:
        """Load two JSON files and compare them structurally."""
        value1, value2 = load_documents(path1, path2, concurrent=self.config.concurrent)
        return structural_equals(value1, value2)

    def explain(
        self,
        value1: Any,
        value2: Any,
        first_name: str = "File 1",
        second_name: str = "File 2"
    ) -> DiffReport:
        """
        Build the per-path diff report for two value trees.

        Args:
            value1: The first parsed document
            value2: The second parsed document
            first_name: Label (or path) of the first document
            second_name: Label (or path) of the second document

        Returns:
            DiffReport listing every field path, with the flattener warnings
        """
        flattener1 = self._new_flattener()
        flattener2 = self._new_flattener()

        fields1, fields2 = self._pair(
            lambda: flattener1.flatten(value1),
            lambda: flattener2.flatten(value2)
        )
        report = classify(fields1, fields2, first_name, second_name)
        return replace(report, warnings=tuple(flattener1.warnings + flattener2.warnings))

    def run(self, path1: str | Path, path2: str | Path) -> ComparisonResult:
        """
        Compare two JSON files end to end.

        Args:
            path1: Path to the first JSON file
            path2: Path to the second JSON file

        Returns:
            ComparisonResult with the structural verdict and the detailed report
        """
        start_time = time.time()
        logger.info(f"Comparing JSON structures: {path1} vs {path2}")

        value1, value2 = load_documents(path1, path2, concurrent=self.config.concurrent)
        is_match = structural_equals(value1, value2)
        report = self._report_for(is_match, value1, value2, str(path1), str(path2))

        if is_match:
            logger.info("✓ JSON structures are identical")
        else:
            logger.info("✗ JSON structures are different")

        duration_ms = int((time.time() - start_time) * 1000)
        logger.debug(f"Comparison took {duration_ms} ms")

        return ComparisonResult(
            is_match=is_match,
            report=report,
            execution=ExecutionInfo(
                duration_ms=duration_ms,
                timestamp=datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
                engine_version=self.VERSION
            ),
            warnings=list(report.warnings) if report is not None else []
        )

    def _report_for(self, is_match: bool, value1: Any, value2: Any, first_name: str, second_name: str):
        # A report failure must not overturn a positive verdict
        try:
            return self.explain(value1, value2, first_name, second_name)
        except InterruptedComparisonError:
            raise
        except FieldDiffError as e:
            if not is_match:
                raise
            logger.warning(f"Field report unavailable for matching documents: {e}")
            return None

    def _new_flattener(self) -> Flattener:
        return Flattener(
            max_depth=self.config.max_depth,
            collect_warnings=self.config.collect_warnings
        )

    def _pair(self, first, second):
        if self.config.concurrent:
            return run_pair(first, second)
        return first(), second()


def compare(doc1: str | bytes, doc2: str | bytes, config: Optional[EngineConfig] = None) -> bool:
    """
    Convenience function: structural comparison of two raw JSON documents.

    Args:
        doc1: First JSON document (text or bytes)
        doc2: Second JSON document (text or bytes)
        config: Optional engine configuration

    Returns:
        True if the documents are equal ignoring object field order
    """
    return FieldDiffEngine(config).compare(doc1, doc2)


def compare_files(path1: str | Path, path2: str | Path, config: Optional[EngineConfig] = None) -> bool:
    """Convenience function: structural comparison of two JSON files."""
    return FieldDiffEngine(config).compare_files(path1, path2)


def explain(
    value1: Any,
    value2: Any,
    first_name: str = "File 1",
    second_name: str = "File 2",
    config: Optional[EngineConfig] = None
) -> DiffReport:
    """Convenience function: per-path diff report for two parsed documents."""
    return FieldDiffEngine(config).explain(value1, value2, first_name, second_name)
