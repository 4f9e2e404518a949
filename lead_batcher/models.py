"""Data models shared by the normaliser, aggregator, and packaging helpers."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union


# --- Classification reasons ---

class RejectionReason(str, Enum):
    """Why an input row produced no lead."""

    EMPTY_VALUE = "Empty value"
    INVALID_LENGTH_OR_FORMAT = "Invalid length or format"
    INVALID_PATTERN = "Invalid Indian mobile pattern"
    MISSING_NAME_AND_MOBILE = "Missing Name and Mobile column data"
    MOBILE_COLUMN_EMPTY = "Mobile column empty"


# --- Phone normalisation outcomes ---

@dataclass(frozen=True, slots=True)
class NormalizedPhone:
    """A phone number that passed validation."""

    canonical: str
    valid: bool = field(default=True, init=False)


@dataclass(frozen=True, slots=True)
class PhoneRejection:
    """A phone value that could not be normalised."""

    reason: RejectionReason
    original: Any = None
    valid: bool = field(default=False, init=False)


PhoneOutcome = Union[NormalizedPhone, PhoneRejection]


# --- Lead & rejection records ---

@dataclass(frozen=True, slots=True)
class Lead:
    """Deduplicated contact keyed by its canonical phone number."""

    name: str
    phone: str

    def as_row(self) -> Dict[str, str]:
        return {"Name": self.name, "Mobile": self.phone}


@dataclass(frozen=True, slots=True)
class Rejection:
    """Diagnostic record for a row that yielded no lead."""

    row: int
    reason: RejectionReason
    original_value: Optional[str] = None
    available_columns: Tuple[str, ...] = ()
    data: Mapping[str, Any] = field(default_factory=dict)

    def as_dict(self) -> Dict[str, Any]:
        """Return a JSON serialisable representation of the rejection."""
        return {
            "row": self.row,
            "reason": self.reason.value,
            "original_value": self.original_value,
            "available_columns": list(self.available_columns),
            "data": dict(self.data),
        }


# --- Row classification outcomes ---

@dataclass(frozen=True, slots=True)
class Accepted:
    lead: Lead


@dataclass(frozen=True, slots=True)
class Rejected:
    rejection: Rejection


RowOutcome = Union[Accepted, Rejected]


# --- Aggregation output ---

@dataclass(frozen=True, slots=True)
class Batch:
    """Contiguous slice of the deduplicated lead sequence."""

    number: int
    leads: Tuple[Lead, ...] = ()

    @property
    def name(self) -> str:
        return f"output_{self.number}"

    def __len__(self) -> int:
        return len(self.leads)


@dataclass(frozen=True, slots=True)
class RunStatistics:
    """Counters describing a single aggregation run."""

    total_rows: int
    valid_lead_count: int
    rejected_count: int
    batch_count: int

    def as_dict(self) -> Dict[str, int]:
        return {
            "total_rows": self.total_rows,
            "valid": self.valid_lead_count,
            "rejected": self.rejected_count,
            "chunks": self.batch_count,
        }


@dataclass(frozen=True, slots=True)
class AggregationResult:
    """Batches, rejections, and statistics produced by one run."""

    batches: List[Batch] = field(default_factory=list)
    rejections: List[Rejection] = field(default_factory=list)
    stats: RunStatistics = field(default_factory=lambda: RunStatistics(0, 0, 0, 0))

    @property
    def leads(self) -> List[Lead]:
        return [lead for batch in self.batches for lead in batch.leads]


__all__ = [
    "Accepted",
    "AggregationResult",
    "Batch",
    "Lead",
    "NormalizedPhone",
    "PhoneOutcome",
    "PhoneRejection",
    "Rejected",
    "Rejection",
    "RejectionReason",
    "RowOutcome",
    "RunStatistics",
]
