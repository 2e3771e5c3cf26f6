"""
Sample loaders.

Observations arrive either inline or from a delimited text file addressed by a
local path or URL. The conjugate models only ever see the resulting 1-d array.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import numpy as np
import pandas as pd

from conjugax.core.errors import InvalidInput

logger = logging.getLogger(__name__)


def load_sample(source: Union[str, Path], column: Optional[str] = None, **read_csv_kwargs) -> np.ndarray:
    """
    Read one column of a CSV file as a sample.

    Args:
        source: Local path or URL understood by pandas.read_csv
        column: Column to use; defaults to the first column
        **read_csv_kwargs: Passed through to pandas.read_csv (sep, header, ...)

    Returns:
        np.ndarray: The column values with missing entries dropped
    """
    df = pd.read_csv(source, **read_csv_kwargs)
    if df.shape[1] == 0:
        raise InvalidInput(f"{source} has no columns")

    if column is None:
        column = df.columns[0]
    elif column not in df.columns:
        raise InvalidInput(f"column {column!r} not found in {source}; available: {list(df.columns)}")

    series = pd.to_numeric(df[column], errors="coerce")
    missing = int(series.isna().sum())
    if missing:
        logger.warning("Dropping %d missing/non-numeric values from %s[%s]", missing, source, column)
    values = series.dropna().to_numpy()
    logger.info("Loaded %d observations from %s[%s]", values.size, source, column)
    return values


def sample_from_config(entry: Dict[str, Any], base_dir: Optional[Path] = None) -> np.ndarray:
    """
    Build a sample from a config entry: either {"data": [...]} or
    {"csv": {"path": ..., "column": ...}}. Relative paths resolve against base_dir.
    """
    if "data" in entry:
        return np.asarray(entry["data"], dtype=float)

    if "csv" in entry:
        csv_cfg = entry["csv"]
        if isinstance(csv_cfg, str):
            csv_cfg = {"path": csv_cfg}
        source = csv_cfg["path"]
        if base_dir is not None and "://" not in str(source) and not Path(source).is_absolute():
            source = base_dir / source
        kwargs = {k: v for k, v in csv_cfg.items() if k not in ("path", "column")}
        return load_sample(source, column=csv_cfg.get("column"), **kwargs)

    raise InvalidInput("sample entry needs either 'data' or 'csv'")
