import logging
from pathlib import Path
from typing import Any, List
from zipfile import BadZipFile

from openpyxl import Workbook, load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from errors import UnreadableFile

logger = logging.getLogger(__name__)


def read_grid(path: Path) -> List[List[Any]]:
    """
    Read the first worksheet of an Excel workbook.

    Cells are returned as stored values (formulas are not evaluated here;
    the cached result is used). Rows keep their full width so short rows
    show up as trailing None cells.
    """
    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException, KeyError, OSError) as e:
        logger.error(f"Could not open workbook {path.name}: {e}")
        raise UnreadableFile(path, str(e) or type(e).__name__) from e

    try:
        worksheet = workbook.worksheets[0]
        logger.info(f"Reading sheet '{worksheet.title}' from {path.name}")
        rows = [list(row) for row in worksheet.iter_rows(values_only=True)]
    finally:
        workbook.close()

    # Short rows come back padded with None; trim so row width reflects content
    return [_trim_row(row) for row in rows]


def write_grid(rows: List[List[Any]], path: Path, sheet_title: str = "Sheet1") -> Path:
    """Write rows to a new single-sheet workbook at `path`."""
    workbook = Workbook()
    worksheet = workbook.active
    worksheet.title = sheet_title

    for row in rows:
        worksheet.append(list(row))

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    logger.info(f"Wrote {len(rows)} row(s) to {path}")
    return path


def _trim_row(row: List[Any]) -> List[Any]:
    end = len(row)
    while end > 0 and row[end - 1] is None:
        end -= 1
    return row[:end]
