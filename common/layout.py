"""
Layout Utilities for the Inventory Count application.
Provides the sidebar and the discrepancy legend.
"""

import html

import streamlit as st

from auth.session import Session, logout
from inventory.discrepancy import DISCREPANCY_LEGEND


def sidebar(session: Session):
    """
    Render the sidebar with user info and the logout button.

    Args:
        session: The logged-in user's session
    """
    with st.sidebar:
        st.markdown("""
            <div style="text-align: center; padding: 1rem 0; border-bottom: 1px solid rgba(148,163,184,0.3); margin-bottom: 1rem;">
                <h2 style="margin: 0;">📦 Inventory Count</h2>
                <p style="color: #94a3b8; font-size: 0.8rem; margin: 0.5rem 0 0 0;">Stock Reconciliation</p>
            </div>
        """, unsafe_allow_html=True)

        st.markdown(f"""
            <div style="background: rgba(99, 102, 241, 0.1); border-radius: 8px; padding: 0.75rem; margin-bottom: 1rem; border: 1px solid rgba(99, 102, 241, 0.2);">
                <div style="display: flex; align-items: center; gap: 0.5rem;">
                    <span style="font-size: 1.2rem;">👤</span>
                    <div>
                        <div style="font-size: 0.85rem; font-weight: 500;">{html.escape(session.username)}</div>
                        <div style="color: #94a3b8; font-size: 0.7rem;">Logged in as {html.escape(session.role)}</div>
                    </div>
                </div>
            </div>
        """, unsafe_allow_html=True)

        if st.button("🚪 Logout", use_container_width=True):
            logout()
            st.rerun()


def render_legend():
    """Colour key for the physical count markers."""
    items = "".join(
        f'<li><span style="color: {cls.color}; font-weight: 600;">{cls.marker} {cls.value.title()}</span>: {text}</li>'
        for cls, text in DISCREPANCY_LEGEND
    )
    st.markdown(f"""
        <div style="font-size: 0.85rem; color: #64748b;">
            <strong>Legend:</strong>
            <ul style="margin-top: 0.25rem;">{items}</ul>
        </div>
    """, unsafe_allow_html=True)
