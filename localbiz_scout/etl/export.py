"""CSV export of search results split by website presence."""

import csv
import io
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from localbiz_scout.models import BusinessRecord

CSV_HEADERS = [
    "Business Name",
    "Category",
    "Phone",
    "Address",
    "Website",
    "Status",
    "Social Links",
    "Verification Notes",
]
SOCIALS_SEPARATOR = "; "


def split_by_website(records: Iterable[BusinessRecord]) -> Tuple[List[BusinessRecord], List[BusinessRecord]]:
    with_website: List[BusinessRecord] = []
    without_website: List[BusinessRecord] = []
    for record in records:
        if record.website is not None:
            with_website.append(record)
        else:
            without_website.append(record)
    return with_website, without_website


def to_csv(with_website: Sequence[BusinessRecord], without_website: Sequence[BusinessRecord]) -> str:
    """Render both buckets as CSV, website rows first.

    Fields are quoted only when they contain a comma, quote or newline, with
    embedded quotes doubled.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADERS)

    for record in with_website:
        writer.writerow(
            [
                record.name,
                record.category,
                record.phone,
                record.address,
                record.website or "",
                "Has Website",
                SOCIALS_SEPARATOR.join(record.socials),
                record.verification_notes,
            ]
        )

    for record in without_website:
        writer.writerow(
            [
                record.name,
                record.category,
                record.phone,
                record.address,
                "",
                "No Website",
                "",
                record.verification_notes,
            ]
        )

    return buffer.getvalue().rstrip("\n")


def export_filename(today: Optional[date] = None) -> str:
    today = today or date.today()
    return f"local_biz_scout_export_{today.isoformat()}.csv"
