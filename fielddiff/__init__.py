"""
FieldDiff - Order-insensitive JSON comparison

Compares two JSON documents ignoring object field order (array order still
matters) and explains any difference field path by field path.
"""

from .engine import FieldDiffEngine, compare, compare_files, explain
from .models import (
    EngineConfig,
    ComparisonResult,
    DiffReport,
    FieldComparison,
    FieldState,
    NodeKind,
    WarningEntry,
)
from .values import MISSING, BinaryValue, OpaqueValue, node_kind
from .parser import parse_document, load_document, load_documents
from .equality import structural_equals
from .flattener import Flattener, flatten, get_value_as_string
from .classifier import classify, rendered_equals
from .exceptions import (
    FieldDiffError,
    DocumentParseError,
    DocumentReadError,
    InterruptedComparisonError,
    MaxDepthExceededError,
    ReportExportError,
    ConfigError,
)
from .runner import BatchRunner, BatchReport, PairResult, run_manifest

__version__ = "1.0.0"
__all__ = [
    # Engine
    "FieldDiffEngine",
    "EngineConfig",
    "compare",
    "compare_files",
    "explain",
    # Value model
    "NodeKind",
    "node_kind",
    "MISSING",
    "BinaryValue",
    "OpaqueValue",
    # Parsing
    "parse_document",
    "load_document",
    "load_documents",
    # Core algorithms
    "structural_equals",
    "rendered_equals",
    "Flattener",
    "flatten",
    "get_value_as_string",
    "classify",
    # Reports
    "ComparisonResult",
    "DiffReport",
    "FieldComparison",
    "FieldState",
    "WarningEntry",
    # Errors
    "FieldDiffError",
    "DocumentParseError",
    "DocumentReadError",
    "InterruptedComparisonError",
    "MaxDepthExceededError",
    "ReportExportError",
    "ConfigError",
    # Batch runner
    "BatchRunner",
    "BatchReport",
    "PairResult",
    "run_manifest",
]
