"""Export utilities for batched leads and rejection reports."""
from __future__ import annotations

import io
import json
import logging
import zipfile
from typing import Any, Iterable, List, MutableMapping, Optional, Sequence

import pandas as pd
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.utils.exceptions import IllegalCharacterError

from ..models import Batch, Rejection

LOGGER = logging.getLogger(__name__)

LEAD_COLUMNS = ["Name", "Mobile"]
SHEET_NAME = "Leads"
REJECTED_FILENAME = "rejected.json"


class PackagingError(RuntimeError):
    """Raised when the output archive cannot be produced."""


def batch_to_dataframe(batch: Batch) -> pd.DataFrame:
    """Convert a batch into a :class:`pandas.DataFrame` with one row per lead."""

    return pd.DataFrame([lead.as_row() for lead in batch.leads], columns=LEAD_COLUMNS)


def write_sheet(
    batch: Batch,
    sheet_format: str = "xlsx",
    *,
    exporter_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> bytes:
    """Serialise ``batch`` as a single spreadsheet and return its bytes."""

    dataframe = batch_to_dataframe(batch)
    exporter_kwargs = dict(exporter_kwargs or {})

    if sheet_format == "csv":
        return dataframe.to_csv(index=False, **exporter_kwargs).encode("utf-8")

    if sheet_format == "xlsx":
        # Worksheet XML cannot hold most C0 control characters.
        for column in LEAD_COLUMNS:
            dataframe[column] = dataframe[column].map(_strip_illegal_characters)
        engine = exporter_kwargs.pop("engine", None) or "openpyxl"
        buffer = io.BytesIO()
        dataframe.to_excel(buffer, index=False, sheet_name=SHEET_NAME, engine=engine, **exporter_kwargs)
        return buffer.getvalue()

    raise ValueError(f"Unsupported sheet format: {sheet_format}")


def _strip_illegal_characters(value: Any) -> Any:
    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def rejections_to_json(rejections: Iterable[Rejection]) -> str:
    return json.dumps([rejection.as_dict() for rejection in rejections], indent=2, ensure_ascii=False, default=str)


def archive_members(batches: Sequence[Batch], rejections: Sequence[Rejection], sheet_format: str) -> List[str]:
    """Return the file names :func:`build_archive` will produce, in order."""

    names = [f"{batch.name}.{sheet_format}" for batch in batches]
    if rejections:
        names.append(REJECTED_FILENAME)
    return names


def build_archive(
    batches: Sequence[Batch],
    rejections: Sequence[Rejection] = (),
    *,
    sheet_format: str = "xlsx",
) -> bytes:
    """Package every batch plus the rejection report into one ZIP archive."""

    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED, compresslevel=9) as archive:
            filenames = archive_members(batches, rejections, sheet_format)
            for batch, filename in zip(batches, filenames):
                archive.writestr(filename, write_sheet(batch, sheet_format))
                LOGGER.debug("Added %s with %s leads", filename, len(batch))
            if rejections:
                archive.writestr(REJECTED_FILENAME, rejections_to_json(rejections))
    except (OSError, ValueError, TypeError, IllegalCharacterError) as exc:
        raise PackagingError(f"Could not build output archive: {exc}") from exc
    return buffer.getvalue()


__all__ = [
    "LEAD_COLUMNS",
    "PackagingError",
    "REJECTED_FILENAME",
    "archive_members",
    "batch_to_dataframe",
    "build_archive",
    "rejections_to_json",
    "write_sheet",
]
