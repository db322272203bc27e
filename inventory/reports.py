"""
Export derivations and PDF rendering for count reports.
"""

import logging
import time
from dataclasses import dataclass
from datetime import datetime
from io import BytesIO
from typing import Any, List, Optional, Sequence

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from inventory.rows import DataRow

logger = logging.getLogger(__name__)

MISMATCH_REPORT = "Mismatch_Report"
MISSING_COUNTS_REPORT = "Missing_Counts"


@dataclass
class Report:
    kind: str
    title: str
    header: List[str]
    body: List[List[Any]]

    @property
    def row_count(self) -> int:
        return len(self.body)


def mismatch_report(rows: Sequence[DataRow]) -> Report:
    """Rows that were counted and whose count differs from On Hand."""
    body = [
        [row.sku, row.on_hand, row.physical_count]
        for row in rows
        if row.physical_count is not None and row.physical_count != row.on_hand
    ]
    return Report(
        kind=MISMATCH_REPORT,
        title="Mismatched Count Report",
        header=["SKU", "On Hand", "Count"],
        body=body,
    )


def missing_counts_report(rows: Sequence[DataRow]) -> Report:
    """Rows that have no physical count yet."""
    body = [
        [row.sku, row.description]
        for row in rows
        if row.physical_count is None
    ]
    return Report(
        kind=MISSING_COUNTS_REPORT,
        title="Items Missing Physical Count",
        header=["SKU", "Description"],
        body=body,
    )


def report_filename(kind: str, now_ms: Optional[int] = None) -> str:
    """``<kind>_<epochMillis>.pdf``"""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{kind}_{now_ms}.pdf"


def _cell_text(value: Any) -> str:
    return "" if value is None else str(value)


def render_pdf(report: Report) -> bytes:
    """Render a report as a single-table PDF document."""
    buffer = BytesIO()
    doc = SimpleDocTemplate(
        buffer,
        pagesize=A4,
        rightMargin=30,
        leftMargin=30,
        topMargin=30,
        bottomMargin=30,
        title=report.title,
    )
    styles = getSampleStyleSheet()

    elements = [
        Paragraph(f"<b>{report.title}</b>", styles["Heading1"]),
        Paragraph(f"Generated: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}", styles["Normal"]),
        Spacer(1, 0.2 * inch),
    ]

    if report.body:
        data = [report.header] + [[_cell_text(c) for c in row] for row in report.body]
        table = Table(data, repeatRows=1)
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#3b82f6")),
            ("TEXTCOLOR", (0, 0), (-1, 0), colors.whitesmoke),
            ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
            ("FONTNAME", (0, 1), (-1, -1), "Helvetica"),
            ("FONTSIZE", (0, 0), (-1, -1), 9),
            ("GRID", (0, 0), (-1, -1), 0.5, colors.grey),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
            ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f1f5f9")]),
        ]))
        elements.append(table)
    else:
        elements.append(Paragraph("No matching items.", styles["Normal"]))

    doc.build(elements)
    logger.info(f"📄 Rendered {report.kind} with {report.row_count} rows")
    return buffer.getvalue()
