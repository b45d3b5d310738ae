"""Batch runner that compares the document pairs listed in a YAML manifest."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

import yaml

from .engine import FieldDiffEngine
from .models import EngineConfig, DiffReport
from .exceptions import ConfigError, FieldDiffError

logger = logging.getLogger(__name__)


@dataclass
class PairSpec:
    """One entry of the manifest."""
    name: str
    first: Path
    second: Path
    expected_match: bool = True


@dataclass
class PairResult:
    """Result of comparing a single pair."""
    name: str
    first: str
    second: str
    passed: bool
    is_match: Optional[bool] = None
    expected_match: bool = True
    report: Optional[DiffReport] = None
    error: Optional[str] = None

    def to_dict(self) -> dict:
        result = {
            "name": self.name,
            "first": self.first,
            "second": self.second,
            "passed": self.passed,
            "is_match": self.is_match,
            "expected_match": self.expected_match,
        }
        if self.report:
            result["summary"] = self.report.to_dict()["summary"]
        if self.error:
            result["error"] = self.error
        return result


@dataclass
class BatchReport:
    """Report across all pairs of a manifest."""
    total: int = 0
    passed: int = 0
    failed: int = 0
    errors: int = 0
    pairs: list[PairResult] = field(default_factory=list)
    timestamp: str = ""

    def __post_init__(self):
        if not self.timestamp:
            self.timestamp = datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')

    @property
    def pass_rate(self) -> str:
        return f"{(self.passed / self.total * 100):.1f}%" if self.total > 0 else "0.0%"

    def to_dict(self) -> dict:
        return {
            "timestamp": self.timestamp,
            "summary": {
                "total_pairs": self.total,
                "passed": self.passed,
                "failed": self.failed,
                "errors": self.errors,
                "pass_rate": self.pass_rate
            },
            "pairs": [p.to_dict() for p in self.pairs]
        }

    def print_summary(self):
        print(f"\nComparison Results: {self.passed}/{self.total} passed ({self.pass_rate})")
        if self.failed > 0:
            print(f"  Failed: {self.failed}")
        if self.errors > 0:
            print(f"  Errors: {self.errors}")


class BatchRunner:
    """
    Compares every document pair listed in a manifest.

    Manifest format:
        config:
          concurrent: true
        pairs:
          - name: users
            first: old/users.json
            second: new/users.json
            expected_match: true

    Relative paths are resolved against the manifest's folder.

    Usage:
        report = BatchRunner("manifest.yaml").run()
    """

    def __init__(self, manifest_path: str | Path, engine_config: Optional[EngineConfig] = None):
        self.manifest_path = Path(manifest_path)
        self._engine_config = engine_config
        self._manifest: Optional[dict] = None

    @property
    def manifest(self) -> dict:
        """Load and cache the manifest from file."""
        if self._manifest is None:
            self._manifest = self._load_manifest()
        return self._manifest

    @property
    def engine_config(self) -> EngineConfig:
        if self._engine_config is None:
            self._engine_config = EngineConfig.from_dict(self.manifest.get('config'))
        return self._engine_config

    def _load_manifest(self) -> dict:
        if not self.manifest_path.exists():
            raise ConfigError(f"Manifest file not found: {self.manifest_path}")

        with open(self.manifest_path, 'r', encoding='utf-8') as f:
            content = f.read()

        try:
            manifest = yaml.safe_load(content)
        except yaml.YAMLError as e:
            raise ConfigError(f"Failed to parse manifest file: {e}")

        if not isinstance(manifest, dict) or not isinstance(manifest.get('pairs'), list):
            raise ConfigError("Manifest must be a mapping with a 'pairs' list")
        return manifest

    def pair_specs(self) -> list[PairSpec]:
        base_dir = self.manifest_path.parent
        specs = []
        for i, entry in enumerate(self.manifest['pairs']):
            if not isinstance(entry, dict) or 'first' not in entry or 'second' not in entry:
                raise ConfigError(
                    f"Pair #{i} must define 'first' and 'second'",
                    {"index": i}
                )
            expected = entry.get('expected_match', True)
            if not isinstance(expected, bool):
                raise ConfigError(f"Pair #{i}: 'expected_match' must be a boolean", {"index": i})
            specs.append(PairSpec(
                name=str(entry.get('name', f"pair-{i}")),
                first=base_dir / entry['first'],
                second=base_dir / entry['second'],
                expected_match=expected
            ))
        return specs

    def run_pair(self, engine: FieldDiffEngine, spec: PairSpec) -> PairResult:
        """Compare one pair. Comparison errors are recorded, not raised."""
        try:
            result = engine.run(spec.first, spec.second)
        except FieldDiffError as e:
            logger.error(f"Comparison '{spec.name}' failed: {e}")
            return PairResult(
                name=spec.name,
                first=str(spec.first),
                second=str(spec.second),
                passed=False,
                expected_match=spec.expected_match,
                error=str(e)
            )

        return PairResult(
            name=spec.name,
            first=str(spec.first),
            second=str(spec.second),
            passed=result.is_match == spec.expected_match,
            is_match=result.is_match,
            expected_match=spec.expected_match,
            report=result.report
        )

    def run(self, print_report: bool = True) -> BatchReport:
        """
        Run all pairs in the manifest.

        Args:
            print_report: Whether to print per-pair status and the summary

        Returns:
            BatchReport with all results
        """
        engine = FieldDiffEngine(self.engine_config)
        report = BatchReport()

        for spec in self.pair_specs():
            result = self.run_pair(engine, spec)
            report.pairs.append(result)
            report.total += 1

            if result.passed:
                report.passed += 1
            else:
                report.failed += 1
                if result.error:
                    report.errors += 1

            if print_report:
                print(f"{'PASS' if result.passed else 'FAIL'}: {spec.name}")

        if print_report:
            report.print_summary()

        return report


def run_manifest(manifest_path: str | Path, print_report: bool = True) -> BatchReport:
    """
    Run every pair of a manifest in one call:

        from fielddiff.runner import run_manifest
        report = run_manifest("pairs.yaml")
    """
    return BatchRunner(manifest_path).run(print_report=print_report)
