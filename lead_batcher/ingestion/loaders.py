"""Utilities for loading contact rows from spreadsheets."""
from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Any, Dict, List, MutableMapping, Optional, Union

import pandas as pd

LOGGER = logging.getLogger(__name__)

PathLike = Union[str, Path]
Row = Dict[str, str]

_CSV_SUFFIXES = {".csv", ".tsv"}
_EXCEL_SUFFIXES = {".xlsx", ".xlsm"}


class UnsupportedFileTypeError(ValueError):
    """Raised when an unsupported file format is passed to the loader."""


class RowSourceError(RuntimeError):
    """Raised when an input file cannot be read at all."""


def load_rows(
    path: PathLike,
    *,
    sheet_name: Union[str, int] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> List[Row]:
    """Load every data row of a spreadsheet as a mapping of header to text.

    Parameters
    ----------
    path:
        Path to the CSV/XLSX file to be loaded.
    sheet_name:
        Sheet selector passed to :func:`pandas.read_excel` when loading an Excel
        file. Ignored for CSV files.
    loader_kwargs:
        Extra keyword arguments forwarded to :func:`pandas.read_csv` or
        :func:`pandas.read_excel`.

    Every cell is returned as a string and empty cells as ``""`` so that each
    row carries every header column, in source order.
    """

    dataframe = _read_dataframe(path, sheet_name=sheet_name, loader_kwargs=loader_kwargs)
    return dataframe_to_rows(dataframe)


def dataframe_to_rows(dataframe: pd.DataFrame) -> List[Row]:
    columns = [str(column) for column in dataframe.columns]
    frame = dataframe.fillna("")
    rows: List[Row] = []
    for values in frame.itertuples(index=False, name=None):
        rows.append({column: _cell_text(value) for column, value in zip(columns, values)})
    return rows


def _read_dataframe(
    path: PathLike,
    *,
    sheet_name: Union[str, int] = 0,
    loader_kwargs: Optional[MutableMapping[str, Any]] = None,
) -> pd.DataFrame:
    loader_kwargs = dict(loader_kwargs or {})
    loader_kwargs.setdefault("dtype", str)
    loader_kwargs.setdefault("keep_default_na", False)
    path_obj = Path(path)
    suffix = path_obj.suffix.lower()

    if suffix not in _CSV_SUFFIXES | _EXCEL_SUFFIXES:
        raise UnsupportedFileTypeError(f"Unsupported file extension: {path_obj.suffix}")

    try:
        if suffix in _CSV_SUFFIXES:
            if suffix == ".tsv":
                loader_kwargs.setdefault("sep", "\t")
            loader_kwargs.setdefault("encoding", "utf-8-sig")
            return pd.read_csv(path_obj, **loader_kwargs)

        engine = loader_kwargs.pop("engine", None) or "openpyxl"
        return pd.read_excel(path_obj, sheet_name=sheet_name, engine=engine, **loader_kwargs)
    except pd.errors.EmptyDataError:
        LOGGER.warning("Input file %s contains no data", path_obj)
        return pd.DataFrame()
    except (OSError, ValueError, zipfile.BadZipFile, pd.errors.ParserError) as exc:
        raise RowSourceError(f"Could not read rows from '{path_obj}': {exc}") from exc


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


__all__ = ["RowSourceError", "UnsupportedFileTypeError", "dataframe_to_rows", "load_rows"]
