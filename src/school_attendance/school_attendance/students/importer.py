"""Spreadsheet parsing for bulk student upload.

Accepts the first sheet of an .xlsx workbook or a .csv file and returns
one plain dict per data row, keyed by the header cells. Validation happens in
``StudentService``; this module only turns bytes into rows.
"""
from __future__ import annotations

import io
from typing import BinaryIO

import pandas as pd

from ..core.exceptions import ValidationError

# Friendly headers seen in school spreadsheets, mapped to the API field names.
HEADER_ALIASES = {
    "admission no": "admissionNo",
    "admission_no": "admissionNo",
    "name": "name",
    "class": "className",
    "class_name": "className",
    "section": "section",
    "roll no": "rollNo",
    "roll_no": "rollNo",
    "email": "email",
    "contact no": "contactNo",
    "contact_no": "contactNo",
    "parent contact": "parentContact",
    "parent_contact": "parentContact",
}


def _normalise_header(header) -> str:
    text = str(header).strip()
    return HEADER_ALIASES.get(text.lower(), text)


def read_student_rows(stream: BinaryIO, filename: str) -> list[dict]:
    raw = stream.read()
    if not raw:
        raise ValidationError("Uploaded file is empty")

    name = filename.lower()
    if name.endswith(".xls"):
        raise ValidationError("Legacy .xls workbooks are not supported; save the file as .xlsx or .csv")

    buf = io.BytesIO(raw)
    try:
        if name.endswith(".csv"):
            df = pd.read_csv(buf, dtype=str, keep_default_na=False)
        else:
            df = pd.read_excel(buf, sheet_name=0, dtype=str, engine="openpyxl")
    except Exception as e:
        raise ValidationError(f"Could not read spreadsheet: {e}") from e

    df = df.rename(columns=_normalise_header)
    df = df.fillna("")
    return [{k: (v.strip() if isinstance(v, str) else v) for k, v in row.items()} for row in df.to_dict(orient="records")]
