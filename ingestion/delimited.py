import csv
import logging
from pathlib import Path
from typing import Any, List

from errors import UnreadableFile

logger = logging.getLogger(__name__)


def read_grid(path: Path) -> List[List[str]]:
    """
    Read a CSV file as rows of text cells.

    Expected format:
    - UTF-8 (a leading BOM, as written by spreadsheet apps, is ignored)
    - Comma or semicolon delimited; the delimiter is sniffed from the header
    """
    try:
        with open(path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(4096)
            f.seek(0)
            try:
                dialect = csv.Sniffer().sniff(sample, delimiters=",;")
            except csv.Error:
                logger.debug(f"Could not sniff delimiter for {path.name}, using comma")
                dialect = csv.excel
            rows = [row for row in csv.reader(f, dialect)]
    except UnicodeDecodeError as e:
        logger.error(f"{path.name} is not UTF-8 text: {e}")
        raise UnreadableFile(path, "file is not UTF-8 text") from e
    except (csv.Error, OSError) as e:
        logger.error(f"Could not read {path.name}: {e}")
        raise UnreadableFile(path, str(e)) from e

    logger.info(f"Read {len(rows)} row(s) from {path.name}")
    return rows


def write_grid(rows: List[List[Any]], path: Path, sheet_title: str = "Sheet1") -> Path:
    """Write rows to CSV at `path`. CSV has no sheets, so the title is unused."""
    path.parent.mkdir(parents=True, exist_ok=True)

    # Use newline='' for csv on Windows
    with open(path, "w", newline="", encoding="utf-8") as fh:
        writer = csv.writer(fh, quoting=csv.QUOTE_MINIMAL)
        for row in rows:
            writer.writerow(["" if cell is None else cell for cell in row])

    logger.info(f"Wrote {len(rows)} row(s) to {path}")
    return path
