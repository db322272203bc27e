"""
Login session and the capabilities each role gets.

The session lives in the Streamlit session state under ``SESSION_KEY``.
``login`` and ``logout`` are the only transitions; logout clears all
per-session app state without reloading the page.
"""

import logging
from dataclasses import dataclass
from typing import MutableMapping, Optional

import streamlit as st

from auth.auth_utils import authenticate_user
from inventory.errors import AuthenticationError

logger = logging.getLogger(__name__)

SESSION_KEY = "session"
VIEW_KEY = "reconciliation_view"


@dataclass(frozen=True)
class Capabilities:
    can_upload: bool
    can_see_on_hand: bool
    can_see_entered_by: bool
    can_select_record: bool
    can_search: bool
    auto_load_latest: bool
    can_export_mismatches: bool


ADMIN_CAPABILITIES = Capabilities(
    can_upload=True,
    can_see_on_hand=True,
    can_see_entered_by=True,
    can_select_record=True,
    can_search=False,
    auto_load_latest=False,
    can_export_mismatches=True,
)

USER_CAPABILITIES = Capabilities(
    can_upload=False,
    can_see_on_hand=False,
    can_see_entered_by=False,
    can_select_record=False,
    can_search=True,
    auto_load_latest=True,
    can_export_mismatches=False,
)


@dataclass(frozen=True)
class Session:
    username: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    @property
    def capabilities(self) -> Capabilities:
        return ADMIN_CAPABILITIES if self.is_admin else USER_CAPABILITIES


def login(username: str, password: str, state: Optional[MutableMapping] = None, users_col=None) -> Session:
    """
    Verify credentials and start a session.

    Raises:
        AuthenticationError: the credentials were rejected.
    """
    state = state if state is not None else st.session_state
    user = authenticate_user(username, password, users_col=users_col)
    if not user:
        logger.info(f"Login rejected for {username!r}")
        raise AuthenticationError("Invalid credentials")

    session = Session(username=user["username"], role=user.get("role", "user"))
    state[SESSION_KEY] = session
    logger.info(f"🔐 {session.username} logged in ({session.role})")
    return session


def current_session(state: Optional[MutableMapping] = None) -> Optional[Session]:
    state = state if state is not None else st.session_state
    return state.get(SESSION_KEY)


def logout(state: Optional[MutableMapping] = None):
    """End the session and drop everything held for it."""
    state = state if state is not None else st.session_state
    session = state.get(SESSION_KEY)
    view = state.get(VIEW_KEY)
    if view is not None:
        # Write out any edit still waiting on the debounce timer
        view.close()
    for key in list(state.keys()):
        del state[key]
    if session is not None:
        logger.info(f"{session.username} logged out")
