"""Load and write tables from CSV, TSV and Excel files"""
import logging
import os
from typing import Dict, Optional, Union

import pandas as pd

logger = logging.getLogger(__name__)

TSV_EXTENSIONS = ('.tsv', '.tab')
EXCEL_EXTENSIONS = ('.xlsx', '.xls')


def read_table(
    file_path: str, sheet_name: Optional[Union[str, int]] = None,
    dtype: Optional[Dict[str, type]] = None
) -> pd.DataFrame:
    """
    Load a CSV, TSV or Excel file.

    Column headers are always strings, so numeric-looking headers ("2019")
    still match string metadata keys.
    """
    ext = os.path.splitext(file_path)[1].lower()

    if ext == '.csv':
        df = pd.read_csv(file_path, dtype=dtype)
    elif ext in TSV_EXTENSIONS:
        df = pd.read_csv(file_path, sep='\t', dtype=dtype)
    elif ext in EXCEL_EXTENSIONS:
        df = pd.read_excel(file_path, sheet_name=sheet_name or 0, dtype=dtype)
    else:
        raise ValueError(f"Unsupported file type: {ext}")

    df.columns = [str(c) for c in df.columns]
    logger.debug(f"Read {len(df)} rows x {len(df.columns)} columns from {os.path.basename(file_path)}")
    return df


def write_table(df: pd.DataFrame, file_path: str) -> None:
    """Write a table, choosing the format from the file extension."""
    ext = os.path.splitext(file_path)[1].lower()

    if ext == '.csv':
        df.to_csv(file_path, index=False)
    elif ext in TSV_EXTENSIONS:
        df.to_csv(file_path, sep='\t', index=False)
    elif ext == '.xlsx':
        df.to_excel(file_path, index=False)
    else:
        raise ValueError(f"Unsupported file type: {ext}")

    logger.debug(f"Wrote {len(df)} rows to {os.path.basename(file_path)}")
