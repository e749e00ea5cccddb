"""Reading raw records from JSON and CSV source files."""

import json
from pathlib import Path

import pandas as pd

from ..exceptions import UnsupportedFormatError

SUPPORTED_SUFFIXES = [".json", ".csv"]


def read_records(path: Path, key: str | None = None) -> list[dict]:
    """Read a list of raw records from a JSON or CSV file.

    JSON files may hold a list of records or an object with the list under
    `key` (e.g. {"students": [...]}). CSV files are read with pandas; empty
    cells come back as NaN and are treated as missing by normalisation.

    Args:
        path: Source file
        key: Key holding the record list in a JSON object

    Returns:
        List of raw record dictionaries

    Raises:
        UnsupportedFormatError: If the file is neither JSON nor CSV
    """
    suffix = path.suffix.lower()
    if suffix == ".json":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
        if isinstance(data, dict):
            data = data.get(key, []) if key else []
        return list(data)
    if suffix == ".csv":
        df = pd.read_csv(path, dtype=str, keep_default_na=True)
        return df.to_dict(orient="records")
    raise UnsupportedFormatError(suffix or path.name, SUPPORTED_SUFFIXES)
