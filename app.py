import sys
import os

sys.path.append(os.path.dirname(os.path.abspath(__file__)))

import streamlit as st

from auth.login import login
from auth.session import current_session
from common.config import configure_logging
from common.layout import sidebar
from inventory.page import render_reconciliation_page

# Page configuration - must be first Streamlit command
st.set_page_config(
    page_title="Inventory Count",
    page_icon="📦",
    layout="wide",
    initial_sidebar_state="expanded"
)

configure_logging()

# Authentication check
session = current_session()
if session is None:
    login()
    st.stop()

sidebar(session)
render_reconciliation_page(session)
