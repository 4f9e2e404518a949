"""Workflow orchestration for coordinating ingestion, batching, and export."""

from .service import InvalidJobIdError, JobResult, locate_archive, process_file, process_rows

__all__ = ["InvalidJobIdError", "JobResult", "locate_archive", "process_file", "process_rows"]
