"""Earthquake Catalog Loader - Imperative Shell.

This module reads the historical earthquake CSV from disk.
All I/O is contained here; casting rows into events is in the core module.
"""

import logging
from pathlib import Path
from typing import Any

import pandas as pd

from src.core.earthquake import REQUIRED_COLUMNS


logger = logging.getLogger(__name__)


class CatalogLoadError(Exception):
    """Raised when the catalog file can't be read at all."""


def read_catalog_rows(path: str | Path) -> list[dict[str, Any]]:
    """Read every row of a catalog CSV as raw strings.

    This method performs file I/O. Cells are not cast here; empty cells
    come back as "".

    Args:
        path: Path to a CSV file with a header row

    Returns:
        List of {column: value} dicts in file order

    Raises:
        CatalogLoadError: If the file is missing, unreadable, malformed,
            or lacks a required column
    """
    path = Path(path)

    try:
        df = pd.read_csv(
            path,
            dtype=str,
            keep_default_na=False,
            skip_blank_lines=True,
            skipinitialspace=True,
        )
    except FileNotFoundError as e:
        raise CatalogLoadError(f"Catalog file not found: {path}") from e
    except pd.errors.EmptyDataError as e:
        raise CatalogLoadError(f"Catalog file is empty: {path}") from e
    except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
        raise CatalogLoadError(f"Failed to parse catalog {path}: {e}") from e

    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise CatalogLoadError(
            f"Missing required columns in {path}: {', '.join(missing)}"
        )

    logger.info("Read %d rows from %s", len(df), path)

    return df.to_dict(orient="records")
