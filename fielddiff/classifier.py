"""Field diff classification of two flattened documents."""

from __future__ import annotations

from typing import Optional

from .models import DiffReport, FieldComparison, FieldState
from .utils import extract_file_name


# state -> (status label, difference description)
STATUS_LABELS: dict[FieldState, tuple[str, str]] = {
    FieldState.COMMON_SAME: ("✓ Common", "Same value"),
    FieldState.COMMON_DIFFERENT: ("⚠ Different Values", "Values differ"),
    FieldState.ONLY_IN_FIRST: ("⚠ Only in File 1", "Missing in File 2"),
    FieldState.ONLY_IN_SECOND: ("⚠ Only in File 2", "Missing in File 1"),
}


def rendered_equals(first: Optional[str], second: Optional[str]) -> bool:
    """
    Plain string equality of two rendered values.

    This is deliberately not structural equality: ``1`` and ``1.0`` render
    differently and are reported as different here even though
    ``structural_equals`` treats them as equal.
    """
    return first == second


def determine_field_state(in_first: bool, in_second: bool, values_equal: bool) -> FieldState:
    if in_first and in_second:
        return FieldState.COMMON_SAME if values_equal else FieldState.COMMON_DIFFERENT
    elif in_first:
        return FieldState.ONLY_IN_FIRST
    return FieldState.ONLY_IN_SECOND


def classify(
    first: dict[str, str],
    second: dict[str, str],
    first_name: str = "File 1",
    second_name: str = "File 2"
) -> DiffReport:
    """
    Classify every field path of two flattened documents.

    Paths are processed in sorted order so identical inputs always produce
    identical reports.

    Args:
        first: Flattened first document
        second: Flattened second document
        first_name: Label (or path) of the first document
        second_name: Label (or path) of the second document

    Returns:
        DiffReport with one entry per path and aggregate counts
    """
    counts = {state: 0 for state in FieldState}
    entries = []

    for path in sorted(set(first) | set(second)):
        in_first = path in first
        in_second = path in second
        value_first = first.get(path)
        value_second = second.get(path)

        state = determine_field_state(
            in_first, in_second, rendered_equals(value_first, value_second)
        )
        counts[state] += 1
        status, difference = STATUS_LABELS[state]

        entries.append(FieldComparison(
            path=path,
            in_first=in_first,
            in_second=in_second,
            value_first=value_first,
            value_second=value_second,
            state=state,
            status=status,
            difference=difference
        ))

    return DiffReport(
        entries=tuple(entries),
        first_name=extract_file_name(first_name),
        second_name=extract_file_name(second_name),
        common_fields=counts[FieldState.COMMON_SAME],
        only_in_first=counts[FieldState.ONLY_IN_FIRST],
        only_in_second=counts[FieldState.ONLY_IN_SECOND],
        different_values=counts[FieldState.COMMON_DIFFERENT]
    )
