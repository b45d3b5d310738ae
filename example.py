"""Example usage of the FieldDiff comparison engine."""

import json
from fielddiff import FieldDiffEngine, EngineConfig, FieldState, parse_document

# Legacy export: fields in the old service's order
old_document = """
{
    "id": "INV-001",
    "customer": {"name": "John", "email": "john@example.com"},
    "total": 100,
    "lineItems": [
        {"sku": "WIDGET-001", "quantity": 5},
        {"sku": "GADGET-002", "quantity": 2}
    ]
}
"""

# New export: same data, fields reordered
new_document = """
{
    "lineItems": [
        {"quantity": 5, "sku": "WIDGET-001"},
        {"quantity": 2, "sku": "GADGET-002"}
    ],
    "total": 100,
    "customer": {"email": "john@example.com", "name": "John"},
    "id": "INV-001"
}
"""


def main():
    print("=" * 60)
    print("FieldDiff Comparison Engine - Example")
    print("=" * 60)

    engine = FieldDiffEngine()

    is_match = engine.compare(old_document, new_document)
    print(f"\nMatch: {is_match}")


def example_with_mismatch():
    """Example that demonstrates a mismatch."""
    print("\n" + "=" * 60)
    print("Example with Mismatch")
    print("=" * 60)

    mismatched_new = {
        "id": "INV-001",
        "customer": {"name": "John"},  # email dropped
        "total": 100.0,  # structurally equal to 100, rendered differently
        "lineItems": [
            {"sku": "GADGET-002", "quantity": 2},  # items swapped
            {"sku": "WIDGET-001", "quantity": 5}
        ],
        "currency": "EUR"  # new field
    }

    engine = FieldDiffEngine()
    old_value = parse_document(old_document)
    print(f"\nMatch: {engine.compare_values(old_value, mismatched_new)}")

    report = engine.explain(old_value, mismatched_new, "old.json", "new.json")
    print(f"Common fields: {report.common_fields}")
    print(f"Different values: {report.different_values}")
    print(f"Only in old: {report.only_in_first}")
    print(f"Only in new: {report.only_in_second}")

    print(f"\nDifferences:")
    for entry in report.entries:
        if entry.state == FieldState.COMMON_SAME:
            continue
        print(f"  - [{entry.status}] {entry.path}")
        print(f"    Old: {entry.value_first}")
        print(f"    New: {entry.value_second}")

    print("\n" + "-" * 60)
    print("Full JSON Report:")
    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))


def example_concurrent():
    """Example with parsing and flattening run in parallel."""
    print("\n" + "=" * 60)
    print("Example with Concurrent Pipeline")
    print("=" * 60)

    engine = FieldDiffEngine(EngineConfig(concurrent=True))
    print(f"\nMatch: {engine.compare(old_document, new_document)}")


if __name__ == "__main__":
    main()
    example_with_mismatch()
    example_concurrent()
