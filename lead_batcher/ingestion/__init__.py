"""Reading contact spreadsheets and packaging batched leads."""

from .exporters import PackagingError, build_archive, write_sheet
from .loaders import RowSourceError, UnsupportedFileTypeError, load_rows

__all__ = [
    "PackagingError",
    "RowSourceError",
    "UnsupportedFileTypeError",
    "build_archive",
    "load_rows",
    "write_sheet",
]
