from __future__ import annotations

from auth.session import VIEW_KEY, current_session, login, logout
from inventory.discrepancy import DiscrepancyClass
from inventory.reports import render_pdf
from inventory.view import ReconciliationView, ViewState

FOUR_COLUMN_SHEET = [
    ["SKU", "On Hand", "Physical Count", "Description"],
    ["A1", 100, None, "Widget"],
    ["B2", 40, None, "Gadget"],
    ["C3", 7, None, None],
]


def test_admin_upload_pads_header(users_collection, files_collection, store, workbook_factory):
    state = {}
    session = login("alice", "secret", state=state, users_col=users_collection)
    view = ReconciliationView(session, store, save_delay=0)

    record = view.upload(workbook_factory(FOUR_COLUMN_SHEET))

    stored = store.fetch_by_id(record.id)
    assert stored.uploaded_by == "alice"
    assert len(stored.rows) == 4
    assert len(stored.rows[0]) == 5
    assert stored.rows[0][-1] == "Entered By"
    assert view.state is ViewState.RECORD_LOADED
    assert [s.id for s in view.summaries()] == [record.id]


def test_admin_edit_shows_medium_and_reaches_mismatch_report(users_collection, store, workbook_factory):
    session = login("alice", "secret", state={}, users_col=users_collection)
    view = ReconciliationView(session, store, save_delay=0)
    view.upload(workbook_factory(FOUR_COLUMN_SHEET))

    a1 = next(r for r in view.data_rows() if r.sku == "A1")
    view.edit_cell(a1.key, "115")

    assert view.classify(a1.key) is DiscrepancyClass.MEDIUM
    report = view.export_mismatches()
    assert ["A1", 100, 115] in report.body
    assert render_pdf(report).startswith(b"%PDF")

    missing = view.export_missing_counts()
    assert [r[0] for r in missing.body] == ["B2", "C3"]


def test_user_counts_are_visible_to_admin(users_collection, store, workbook_factory):
    admin = login("alice", "secret", state={}, users_col=users_collection)
    ReconciliationView(admin, store, save_delay=0).upload(workbook_factory(FOUR_COLUMN_SHEET))

    state = {}
    user = login("bob", "hunter2", state=state, users_col=users_collection)
    user_view = ReconciliationView(user, store, save_delay=60)
    state[VIEW_KEY] = user_view
    assert user_view.auto_load_latest()

    matches = user_view.visible_rows("b")
    assert [r.sku for r in matches] == ["B2"]
    user_view.edit_cell(matches[0].key, "40")

    # Logging out writes the pending edit
    logout(state)
    assert current_session(state) is None

    admin_view = ReconciliationView(admin, store, save_delay=0)
    admin_view.select_record(user_view.record_id)
    b2 = admin_view.row(matches[0].key)
    assert b2.physical_count == 40
    assert b2.entered_by == "bob"
    assert admin_view.classify(b2.key) is DiscrepancyClass.NONE
