"""Spreadsheet codecs: read files into cell grids and write grids to files.

Each format module provides read_grid(path) and write_grid(rows, path, sheet_title).
"""

from pathlib import Path

import ingestion.delimited as delimited
import ingestion.xlsx as xlsx

_FORMAT_MODULES = {
    "xlsx": xlsx,
    "csv": delimited,
}


def get_format_module(format_name: str):
    """Get a format module by name (file extension without the dot)."""
    if format_name not in _FORMAT_MODULES:
        raise ValueError(f"Unsupported file format: {format_name}")
    return _FORMAT_MODULES[format_name]


def get_available_formats():
    """Get list of supported file formats."""
    return list(_FORMAT_MODULES.keys())


def format_for_path(path: Path):
    """Get the format module matching a file's extension."""
    return get_format_module(Path(path).suffix.lower().lstrip("."))


def read_grid(path: Path):
    """Read the first sheet of a spreadsheet file as rows of cell values."""
    return format_for_path(path).read_grid(Path(path))


def write_grid(rows, path: Path, sheet_title: str = "Sheet1") -> Path:
    """Write rows of cell values as a single-sheet spreadsheet file."""
    return format_for_path(path).write_grid(rows, Path(path), sheet_title=sheet_title)
