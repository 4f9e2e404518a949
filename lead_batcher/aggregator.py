"""Row classification, deduplication, and batching of contact leads."""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping

from .columns import resolve_columns
from .models import (
    Accepted,
    AggregationResult,
    Batch,
    Lead,
    NormalizedPhone,
    Rejected,
    Rejection,
    RejectionReason,
    RowOutcome,
    RunStatistics,
)
from .phone import first_valid_phone

LOGGER = logging.getLogger(__name__)

# Spreadsheet row numbers start at 1 and the header occupies the first row.
HEADER_ROW_OFFSET = 2

DEFAULT_BATCH_SIZE = 1000
MIN_BATCH_SIZE = 1
MAX_BATCH_SIZE = 100_000

UNKNOWN_NAME = "Unknown"


def clamp_batch_size(batch_size: int) -> int:
    return max(MIN_BATCH_SIZE, min(int(batch_size), MAX_BATCH_SIZE))


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and math.isnan(value):
        return ""
    return str(value)


def classify_row(row: Mapping[str, Any], row_number: int) -> RowOutcome:
    """Decide whether ``row`` yields a lead or a rejection."""

    columns = tuple(str(column) for column in row.keys())
    resolved = resolve_columns(columns)
    raw_name = _cell_text(row.get(resolved.name_column)) if resolved.name_column else ""
    raw_phone = _cell_text(row.get(resolved.phone_column)) if resolved.phone_column else ""

    if not raw_name and not raw_phone:
        return Rejected(
            Rejection(
                row=row_number,
                reason=RejectionReason.MISSING_NAME_AND_MOBILE,
                available_columns=columns,
                data=dict(row),
            )
        )

    if not raw_phone:
        return Rejected(
            Rejection(
                row=row_number,
                reason=RejectionReason.MOBILE_COLUMN_EMPTY,
                original_value=raw_phone,
                available_columns=columns,
                data=dict(row),
            )
        )

    outcome = first_valid_phone(raw_phone)
    if isinstance(outcome, NormalizedPhone):
        return Accepted(Lead(name=raw_name.strip() or UNKNOWN_NAME, phone=outcome.canonical))

    return Rejected(
        Rejection(
            row=row_number,
            reason=outcome.reason,
            original_value=raw_phone,
            available_columns=columns,
            data=dict(row),
        )
    )


class LeadAggregator:
    """Per-run context holding the dedup map and the rejection list.

    Rows must be fed in source order: the first row that produces a given
    canonical phone owns it for the rest of the run.
    """

    def __init__(self) -> None:
        self._leads: Dict[str, Lead] = {}
        self._rejections: List[Rejection] = []
        self._total_rows = 0

    @property
    def total_rows(self) -> int:
        return self._total_rows

    @property
    def leads(self) -> List[Lead]:
        return list(self._leads.values())

    @property
    def rejections(self) -> List[Rejection]:
        return list(self._rejections)

    def add_row(self, row: Mapping[str, Any]) -> RowOutcome:
        row_number = self._total_rows + HEADER_ROW_OFFSET
        self._total_rows += 1

        outcome = classify_row(row, row_number)
        if isinstance(outcome, Accepted):
            lead = outcome.lead
            if lead.phone in self._leads:
                LOGGER.debug("Row %s duplicates phone %s", row_number, lead.phone)
            else:
                self._leads[lead.phone] = lead
        else:
            rejection = outcome.rejection
            LOGGER.debug("Row %s rejected: %s", row_number, rejection.reason.value)
            self._rejections.append(rejection)
        return outcome

    def add_rows(self, rows: Iterable[Mapping[str, Any]]) -> None:
        for row in rows:
            self.add_row(row)

    def batches(self, batch_size: int = DEFAULT_BATCH_SIZE) -> List[Batch]:
        size = clamp_batch_size(batch_size)
        leads = self.leads
        return [
            Batch(number=index // size + 1, leads=tuple(leads[index : index + size]))
            for index in range(0, len(leads), size)
        ]

    def finish(self, batch_size: int = DEFAULT_BATCH_SIZE) -> AggregationResult:
        batches = self.batches(batch_size)
        stats = RunStatistics(
            total_rows=self._total_rows,
            valid_lead_count=len(self._leads),
            rejected_count=len(self._rejections),
            batch_count=len(batches),
        )
        LOGGER.info(
            "Aggregated %s rows into %s leads (%s rejected, %s batches)",
            stats.total_rows,
            stats.valid_lead_count,
            stats.rejected_count,
            stats.batch_count,
        )
        return AggregationResult(batches=batches, rejections=self.rejections, stats=stats)


def aggregate(rows: Iterable[Mapping[str, Any]], batch_size: int = DEFAULT_BATCH_SIZE) -> AggregationResult:
    """Classify, deduplicate, and batch ``rows`` in a fresh aggregation context."""

    aggregator = LeadAggregator()
    aggregator.add_rows(rows)
    return aggregator.finish(batch_size)


__all__ = [
    "DEFAULT_BATCH_SIZE",
    "HEADER_ROW_OFFSET",
    "LeadAggregator",
    "MAX_BATCH_SIZE",
    "MIN_BATCH_SIZE",
    "UNKNOWN_NAME",
    "aggregate",
    "clamp_batch_size",
    "classify_row",
]
