"""Heuristic header matching for the contact name and phone columns."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional, Sequence

ColumnPredicate = Callable[[str], bool]

NAME_LABELS = ("contactname", "contact name", "contact_name")
PHONE_LABELS = ("phone2", "phone 2", "phone_2")


def _normalise_label(column: str) -> str:
    return str(column).strip().lower()


def _exact_label(labels: Sequence[str]) -> ColumnPredicate:
    return lambda column: _normalise_label(column) in labels


def _contains(fragment: str) -> ColumnPredicate:
    return lambda column: fragment in str(column).lower()


# Predicates are tried in order; each one scans every column before the next.
NAME_RULES: Sequence[ColumnPredicate] = (
    _exact_label(NAME_LABELS),
    _contains("contact"),
)
PHONE_RULES: Sequence[ColumnPredicate] = (
    _exact_label(PHONE_LABELS),
)


@dataclass(frozen=True, slots=True)
class ResolvedColumns:
    """Column names picked for the lead name and phone number."""

    name_column: Optional[str] = None
    phone_column: Optional[str] = None


def find_column(columns: Iterable[str], rules: Sequence[ColumnPredicate]) -> Optional[str]:
    """Return the first column matched by the highest priority rule."""

    candidates = list(columns)
    for rule in rules:
        for column in candidates:
            if rule(column):
                return column
    return None


def resolve_columns(columns: Iterable[str]) -> ResolvedColumns:
    candidates = list(columns)
    return ResolvedColumns(
        name_column=find_column(candidates, NAME_RULES),
        phone_column=find_column(candidates, PHONE_RULES),
    )


__all__ = [
    "NAME_LABELS",
    "NAME_RULES",
    "PHONE_LABELS",
    "PHONE_RULES",
    "ResolvedColumns",
    "find_column",
    "resolve_columns",
]
