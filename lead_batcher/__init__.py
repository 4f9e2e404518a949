"""Top-level package for the contact lead batching toolkit."""

from . import models  # noqa: F401
from .aggregator import LeadAggregator, aggregate, classify_row
from .columns import ResolvedColumns, resolve_columns
from .models import (
    Accepted,
    AggregationResult,
    Batch,
    Lead,
    Rejected,
    Rejection,
    RejectionReason,
    RunStatistics,
)
from .phone import normalize_phone, split_candidates

__all__ = [
    "Accepted",
    "AggregationResult",
    "Batch",
    "Lead",
    "LeadAggregator",
    "Rejected",
    "Rejection",
    "RejectionReason",
    "ResolvedColumns",
    "RunStatistics",
    "aggregate",
    "classify_row",
    "normalize_phone",
    "resolve_columns",
    "split_candidates",
    "ingestion",
    "orchestrator",
]
