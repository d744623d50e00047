import os
import math
import datetime as dt

import numpy as np
import pandas as pd


CSV_ENCODINGS = ['utf-8', 'utf-8-sig', 'latin-1', 'cp1252']
EXCEL_EXTENSIONS = ('.xlsx', '.xls')


class DecodeError(Exception):
    """The selected file could not be turned into records."""


def decode_file(path, progress_callback=None):
    """
    Read a spreadsheet into an ordered list of flat records.

    Args:
        path: Path to a .xlsx, .xls or .csv file.
        progress_callback: Optional callable(current, total, label) for the progress dialog.

    Returns:
        list of dicts (column name -> str/int/float, "" for empty cells),
        in sheet row order.

    Raises:
        DecodeError: Unsupported extension, unreadable file, or no rows.
    """
    filename = os.path.basename(path)
    ext = os.path.splitext(filename)[1].lower()

    if progress_callback:
        progress_callback(0, 2, filename)

    try:
        if ext == '.csv':
            df = _read_csv(path, filename)
        elif ext in EXCEL_EXTENSIONS:
            df = pd.read_excel(path)
        else:
            raise DecodeError(f"Unsupported file type: {ext or '[no extension]'}")
    except DecodeError:
        raise
    except Exception as e:
        raise DecodeError(
            f"Could not read {filename}. Make sure it is a valid Excel or CSV file (.xlsx, .xls, .csv).\n\n{e}"
        ) from e

    print(f"[DECODE] {filename}: {len(df)} rows x {len(df.columns)} columns")

    if progress_callback:
        progress_callback(1, 2, filename)

    records = frame_to_records(df)
    if not records:
        raise DecodeError(f"The file {filename} appears to be empty.")

    if progress_callback:
        progress_callback(2, 2, filename)
    return records


def _read_csv(path, filename):
    # Try multiple encodings to handle international characters
    for enc in CSV_ENCODINGS:
        try:
            df = pd.read_csv(path, encoding=enc)
            print(f"[DECODE] {filename} loaded with encoding: {enc}")
            return df
        except (UnicodeDecodeError, LookupError):
            continue
    raise DecodeError(f"Could not load {filename} with any supported encoding")


def frame_to_records(df):
    """Convert a DataFrame to records of plain Python primitives."""
    df = df.dropna(how='all')
    columns = [str(c) for c in df.columns]
    records = []
    for row in df.itertuples(index=False, name=None):
        records.append({col: to_primitive(value) for col, value in zip(columns, row)})
    return records


def to_primitive(value):
    """
    Normalise one cell value.

    NaN/NaT/None become "", numpy scalars become Python scalars, whole floats
    become ints (Excel stores every number as float), timestamps become ISO dates.
    """
    if value is None:
        return ''
    if isinstance(value, (pd.Timestamp, dt.datetime)):
        if pd.isna(value):
            return ''
        if (value.hour, value.minute, value.second) == (0, 0, 0):
            return value.strftime('%Y-%m-%d')
        return value.strftime('%Y-%m-%d %H:%M:%S')
    if isinstance(value, dt.date):
        return value.isoformat()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float):
        if math.isnan(value):
            return ''
        if value.is_integer():
            return int(value)
        return value
    if isinstance(value, bool):
        return str(value).upper()
    if isinstance(value, (int, str)):
        return value
    if pd.isna(value):
        return ''
    return str(value)
