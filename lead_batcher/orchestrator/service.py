"""Job runner that coordinates loading, aggregation, and packaging."""
from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping, Tuple, Union

from ..aggregator import DEFAULT_BATCH_SIZE, aggregate
from ..config import coerce_batch_size
from ..ingestion.exporters import PackagingError, build_archive
from ..ingestion.loaders import load_rows
from ..models import AggregationResult, RunStatistics

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]

ARCHIVE_PREFIX = "processed_leads_"
_JOB_ID_PATTERN = re.compile(r"[A-Za-z0-9-]+")


class InvalidJobIdError(ValueError):
    """Raised when a job identifier could escape the output directory."""


@dataclass(frozen=True, slots=True)
class JobResult:
    """Outcome of a completed batching job."""

    job_id: str
    archive_path: Path
    stats: RunStatistics

    @property
    def archive_name(self) -> str:
        return self.archive_path.name

    @property
    def has_leads(self) -> bool:
        return self.stats.valid_lead_count > 0

    def as_dict(self) -> dict:
        return {
            "job_id": self.job_id,
            "archive": str(self.archive_path),
            "stats": self.stats.as_dict(),
        }


def archive_name_for(job_id: str) -> str:
    return f"{ARCHIVE_PREFIX}{job_id}.zip"


def process_rows(
    rows: Iterable[Mapping[str, Any]],
    *,
    batch_size: Any = DEFAULT_BATCH_SIZE,
    sheet_format: str = "xlsx",
) -> Tuple[bytes, AggregationResult]:
    """Aggregate ``rows`` and return the packaged archive with the run result."""

    result = aggregate(rows, coerce_batch_size(batch_size))
    archive = build_archive(result.batches, result.rejections, sheet_format=sheet_format)
    return archive, result


def process_file(
    path: PathLike,
    *,
    batch_size: Any = None,
    output_dir: PathLike = "outputs",
    sheet_format: str = "xlsx",
    sheet_name: Union[str, int] = 0,
) -> JobResult:
    """Run a full job over the spreadsheet at ``path``.

    The archive is written to ``output_dir`` as ``processed_leads_<job_id>.zip``.
    Input and packaging failures propagate to the caller and leave no archive
    behind.
    """

    rows = load_rows(path, sheet_name=sheet_name)
    LOGGER.info("Loaded %s rows from %s", len(rows), path)

    archive, result = process_rows(rows, batch_size=batch_size, sheet_format=sheet_format)
    if not result.stats.valid_lead_count:
        LOGGER.warning("No valid leads found in %s", path)

    job_id = str(uuid.uuid4())
    destination = Path(output_dir)
    archive_path = destination / archive_name_for(job_id)
    try:
        destination.mkdir(parents=True, exist_ok=True)
        archive_path.write_bytes(archive)
    except OSError as exc:
        archive_path.unlink(missing_ok=True)
        raise PackagingError(f"Could not write archive to '{archive_path}': {exc}") from exc
    LOGGER.info("Job %s written to %s", job_id, archive_path)

    return JobResult(job_id=job_id, archive_path=archive_path, stats=result.stats)


def locate_archive(output_dir: PathLike, job_id: str) -> Path:
    """Return the archive produced by ``job_id``."""

    if not job_id or not _JOB_ID_PATTERN.fullmatch(job_id):
        raise InvalidJobIdError(f"Invalid job id: {job_id!r}")

    archive_path = Path(output_dir) / archive_name_for(job_id)
    if not archive_path.is_file():
        raise FileNotFoundError(f"Archive for job {job_id} not found or expired")
    return archive_path


__all__ = [
    "InvalidJobIdError",
    "JobResult",
    "archive_name_for",
    "locate_archive",
    "process_file",
    "process_rows",
]
