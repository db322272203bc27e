"""
Centralized UI Utilities for the Inventory Count application.
Provides consistent styling and PDF report downloads with MongoDB logging.
"""

import hashlib
import html
import json
import logging
from typing import Dict, MutableMapping, Optional

import streamlit as st
import streamlit.components.v1 as components

from auth.session import SESSION_KEY
from common.mongo import log_report_download
from inventory.reports import Report, render_pdf, report_filename

logger = logging.getLogger(__name__)

PDF_CACHE_KEY = "report_pdfs"


def apply_professional_style():
    """Applies professional CSS styling."""
    st.markdown("""
        <style>
        .report-header {
            text-align: center;
            padding: 1rem 0;
            margin-bottom: 1.5rem;
        }
        .report-title {
            font-size: 1.5rem;
            font-weight: 600;
        }
        .sku-cell {
            font-weight: 700;
            padding-top: 0.5rem;
        }
        .na-cell {
            color: #94a3b8;
            font-style: italic;
            padding-top: 0.5rem;
        }
        </style>
    """, unsafe_allow_html=True)


def render_header(title: str, subtitle: Optional[str] = None):
    """Renders a styled header section."""
    subtitle_html = f'<p style="color: #94a3b8;">{html.escape(subtitle)}</p>' if subtitle else ''
    st.markdown(f"""
        <div class="report-header">
            <h2 class="report-title">{html.escape(title)}</h2>
            {subtitle_html}
        </div>
    """, unsafe_allow_html=True)


def report_pdf_bytes(report: Report, cache: Optional[MutableMapping] = None) -> bytes:
    """
    PDF for a report, rebuilt only when its contents change.

    The cache keeps the latest document per report kind, keyed by a digest
    of title, header and body.
    """
    if cache is None:
        cache = st.session_state.setdefault(PDF_CACHE_KEY, {})
    digest = hashlib.sha256(repr((report.title, report.header, report.body)).encode()).hexdigest()

    cached = cache.get(report.kind)
    if cached is not None and cached[0] == digest:
        return cached[1]

    pdf_bytes = render_pdf(report)
    cache[report.kind] = (digest, pdf_bytes)
    return pdf_bytes


def download_pdf_report(report: Report, button_label: str, key: str,
                        record_id: Optional[str] = None) -> bool:
    """
    Offer a report as a PDF download, logging the download.

    Returns:
        True if the download button was clicked.
    """
    filename = report_filename(report.kind)

    downloaded = st.download_button(
        label=button_label,
        data=report_pdf_bytes(report),
        file_name=filename,
        mime="application/pdf",
        key=key,
        use_container_width=True,
    )

    if downloaded:
        session = st.session_state.get(SESSION_KEY)
        user = session.username if session is not None else "anonymous"
        if log_report_download(user, report.title, filename, record_id=record_id,
                               row_count=report.row_count):
            st.toast(f"✅ {report.title} logged", icon="📥")

    return downloaded


def script_literal(value) -> str:
    """JSON literal that is safe to place inside a <script> element."""
    return json.dumps(value).replace("</", "<\\/")


def enter_navigation_script(targets: Dict[str, str]) -> str:
    """
    Script that moves focus on Enter between text inputs, by aria-label.

    ``targets`` maps the label of an input to the label of the input Enter
    should move to. Inputs without an entry keep focus.
    """
    return f"""
<script>
(function() {{
  const host = window.parent;
  const targets = {script_literal(targets)};
  if (host.__countAdvanceHandler) {{
    host.document.removeEventListener('keydown', host.__countAdvanceHandler);
  }}
  host.__countAdvanceHandler = function(event) {{
    if (event.key !== 'Enter' || event.isComposing) return;
    const source = event.target;
    if (!source || source.tagName !== 'INPUT') return;
    const next = targets[source.getAttribute('aria-label')];
    if (!next) return;
    host.setTimeout(function() {{
      const target = Array.from(host.document.querySelectorAll('input'))
        .find((el) => el.getAttribute('aria-label') === next);
      if (target) {{
        target.focus();
        target.select();
      }}
    }}, 0);
  }};
  host.document.addEventListener('keydown', host.__countAdvanceHandler);
}})();
</script>
"""


def install_enter_navigation(targets: Dict[str, str]):
    components.html(enter_navigation_script(targets), height=0, width=0)
