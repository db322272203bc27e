"""
Streamlit rendering of the reconciliation view.
"""

import html
import logging
from typing import Dict, List

import streamlit as st

from auth.session import VIEW_KEY, Session
from common.layout import render_legend
from common.mongo import get_files_collection
from common.ui_utils import apply_professional_style, download_pdf_report, install_enter_navigation, render_header
from inventory.errors import PersistError, SpreadsheetImportError
from inventory.records import RecordStore
from inventory.rows import DataRow
from inventory.view import ReconciliationView, ViewState
from inventory.workbook import ACCEPTED_EXTENSIONS

logger = logging.getLogger(__name__)

WARNING_KEY = "count_warning"
LAST_UPLOAD_KEY = "last_upload"


def get_view(session: Session) -> ReconciliationView:
    """The view for this browser session, created on first use."""
    view = st.session_state.get(VIEW_KEY)
    if view is None or view.session != session:
        collection = get_files_collection()
        if collection is None:
            st.error("❌ Record store is unavailable. Check MONGO_URI and try again.")
            st.stop()
        view = ReconciliationView(session, RecordStore(collection))
        st.session_state[VIEW_KEY] = view
    return view


def _count_widget_key(view: ReconciliationView, key: int) -> str:
    return f"count_{view.record_id}_{key}"


def _count_label(row: DataRow) -> str:
    return f"Physical count, row {row.key}"


def _on_count_change(view: ReconciliationView, key: int):
    widget_key = _count_widget_key(view, key)
    raw = st.session_state.get(widget_key, "")
    row = view.edit_cell(key, raw)
    if raw.strip() and row.physical_count is None:
        st.session_state[WARNING_KEY] = f"'{raw}' is not a valid count for {row.sku}; the count was cleared."
        st.session_state[widget_key] = ""


def advance_targets(view: ReconciliationView, rows: List[DataRow]) -> Dict[str, str]:
    """
    Where Enter moves focus from each rendered count input.

    The target is the next editable row in sheet order. Rows hidden by the
    search filter have no input, so a source whose next editable row is
    hidden gets no target.
    """
    labels = {row.key: _count_label(row) for row in rows if row.editable}
    targets = {}
    for key, label in labels.items():
        next_key = view.next_editable(key)
        if next_key in labels:
            targets[label] = labels[next_key]
    return targets


def _render_upload(view: ReconciliationView):
    uploaded = st.file_uploader("Upload count sheet", type=ACCEPTED_EXTENSIONS, key="sheet_upload")
    if uploaded is None:
        return

    upload_id = getattr(uploaded, "file_id", None) or f"{uploaded.name}:{uploaded.size}"
    if st.session_state.get(LAST_UPLOAD_KEY) == upload_id:
        return
    st.session_state[LAST_UPLOAD_KEY] = upload_id

    try:
        record = view.upload(uploaded)
    except (SpreadsheetImportError, PersistError) as e:
        logger.error(f"Upload of {uploaded.name} failed: {e}")
        st.error("❌ Upload failed. Check the file and try again.")
        return
    st.success(f"✅ Uploaded {uploaded.name} ({len(record.rows) - 1} rows)")


def _render_record_selector(view: ReconciliationView):
    summaries = view.summaries()
    if not summaries:
        st.caption("No count sheets uploaded yet.")
        return

    labels = {s.id: s.label for s in summaries}
    options = [None] + [s.id for s in summaries]
    current = view.record_id if view.record_id in labels else None

    choice = st.selectbox(
        "Select Report",
        options,
        index=options.index(current),
        format_func=lambda record_id: "-- Choose a report --" if record_id is None else labels[record_id],
    )
    if choice is not None and choice != view.record_id:
        view.select_record(choice)


def _render_rows(view: ReconciliationView, query):
    caps = view.capabilities
    titles = ["SKU"]
    widths = [2]
    if caps.can_see_on_hand:
        titles.append("On Hand")
        widths.append(1)
    titles += ["Physical Count", "", "Description"]
    widths += [2, 0.5, 3]
    if caps.can_see_entered_by:
        titles.append("Entered By")
        widths.append(2)

    for col, title in zip(st.columns(widths), titles):
        col.markdown(f"**{title}**")

    rows = view.visible_rows(query)
    if not rows:
        st.info("No items match your search.")

    for row in rows:
        cols = iter(st.columns(widths))
        next(cols).markdown(f'<div class="sku-cell">{html.escape(row.sku)}</div>', unsafe_allow_html=True)
        if caps.can_see_on_hand:
            next(cols).markdown("" if row.on_hand is None else str(row.on_hand))

        count_col, marker_col = next(cols), next(cols)
        if row.editable:
            widget_key = _count_widget_key(view, row.key)
            if widget_key not in st.session_state:
                st.session_state[widget_key] = "" if row.physical_count is None else str(row.physical_count)
            count_col.text_input(
                _count_label(row),
                key=widget_key,
                label_visibility="collapsed",
                on_change=_on_count_change,
                args=(view, row.key),
            )
            marker_col.markdown(view.classify(row.key).marker)
        else:
            count_col.markdown('<div class="na-cell">N/A</div>', unsafe_allow_html=True)
            marker_col.markdown("")

        next(cols).markdown(row.description or "")
        if caps.can_see_entered_by:
            next(cols).markdown(row.entered_by or "")

    return rows


def _render_actions(view: ReconciliationView):
    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("💾 Submit Counts", use_container_width=True):
            if view.submit():
                st.toast("✅ Counts saved", icon="💾")
            else:
                st.error("❌ Could not save counts. Try again.")
    with col2:
        if view.capabilities.can_export_mismatches:
            download_pdf_report(view.export_mismatches(), "📄 Generate Mismatch Report",
                                key="dl_mismatch", record_id=view.record_id)
    with col3:
        download_pdf_report(view.export_missing_counts(), "📥 Download Missing Counts PDF",
                            key="dl_missing", record_id=view.record_id)


def render_reconciliation_page(session: Session):
    view = get_view(session)
    caps = view.capabilities

    apply_professional_style()
    render_header("Inventory Report System", f"Logged in as: {session.username} ({session.role})")

    view.auto_load_latest()

    if caps.can_upload:
        _render_upload(view)
    if caps.can_select_record:
        _render_record_selector(view)

    if view.state is ViewState.NO_RECORD_LOADED:
        st.info("No count sheet loaded yet.")
        return

    warning = st.session_state.pop(WARNING_KEY, None)
    if warning:
        st.warning(warning)
    if view.last_save_error is not None:
        st.warning("⚠️ Your latest changes could not be saved. Use Submit Counts to retry.")

    query = st.text_input("🔍 Search SKU", key="sku_search") if caps.can_search else None

    render_legend()
    rows = _render_rows(view, query)
    _render_actions(view)

    install_enter_navigation(advance_targets(view, rows))
