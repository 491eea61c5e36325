"""
csv_export.py
- Purpose: Flatten one role's self-assessment into a downloadable CSV.
"""

import csv
import io
import re
from collections.abc import Mapping
from datetime import date

from idp.reference import ReferenceData
from idp.schemas.response import ResponseData

CSV_HEADER = ["Role", "Core Competency", "Competency", "Assessment", "Notes"]

_NEWLINES = re.compile(r"\r?\n")


def build_csv_rows(reference: ReferenceData, role_id: int, responses: Mapping[int, ResponseData]) -> list[list[str]]:
    rows: list[list[str]] = []
    for c in reference.competencies_for_role(role_id):
        r = responses.get(c.competency_id) or ResponseData()
        a = reference.assessment(r.assessment_level) if r.assessment_level else None
        rows.append(
            [
                c.role_description or "",
                c.core_competency_description or "",
                c.competency_description or "",
                a.label if a else "",
                _NEWLINES.sub(" ", r.notes or "").strip(),
            ]
        )
    return rows


def to_csv(rows: list[list[str]]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerows([["" if cell is None else str(cell) for cell in row] for row in rows])
    return buf.getvalue().rstrip("\n")


def csv_filename(email: str, today: date | None = None) -> str:
    d = today or date.today()
    return f"{d.strftime('%m-%d-%Y')}_idp_{email}.csv"
