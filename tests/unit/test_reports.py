from __future__ import annotations

import re

from inventory.reports import (
    MISMATCH_REPORT,
    MISSING_COUNTS_REPORT,
    Report,
    missing_counts_report,
    mismatch_report,
    render_pdf,
    report_filename,
)
from inventory.rows import data_rows


def test_mismatch_report(sample_rows):
    sample_rows[1][2] = 85
    report = mismatch_report(data_rows(sample_rows))
    assert report.kind == MISMATCH_REPORT
    assert report.header == ["SKU", "On Hand", "Count"]
    assert report.body == [["A1", 100, 85], ["abc-9", 5, 2]]


def test_missing_counts_report(sample_rows):
    report = missing_counts_report(data_rows(sample_rows))
    assert report.kind == MISSING_COUNTS_REPORT
    assert report.header == ["SKU", "Description"]
    assert report.body == [["A1", "Widget"], ["C3", None], ["D4", "Nut"]]


def test_reports_are_disjoint(sample_rows):
    rows = data_rows(sample_rows)
    mismatched = {r[0] for r in mismatch_report(rows).body}
    missing = {r[0] for r in missing_counts_report(rows).body}
    matched = {r.sku for r in rows if r.physical_count is not None and r.physical_count == r.on_hand}

    assert not mismatched & missing
    editable = {r.sku for r in rows if r.editable}
    assert editable == (mismatched | missing | matched) & editable


def test_report_filename():
    assert report_filename(MISMATCH_REPORT, now_ms=1700000000123) == "Mismatch_Report_1700000000123.pdf"
    assert re.fullmatch(r"Missing_Counts_\d{13}\.pdf", report_filename(MISSING_COUNTS_REPORT))


def test_render_pdf_produces_a_pdf(sample_rows):
    pdf = render_pdf(missing_counts_report(data_rows(sample_rows)))
    assert pdf.startswith(b"%PDF")


def test_render_empty_report():
    pdf = render_pdf(Report(kind=MISMATCH_REPORT, title="Mismatched Count Report",
                            header=["SKU", "On Hand", "Count"], body=[]))
    assert pdf.startswith(b"%PDF")
