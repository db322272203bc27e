import streamlit as st

from auth.session import login as start_session
from inventory.errors import AuthenticationError


def login():
    """Login page for counting staff and admins."""

    st.markdown("""
        <style>
        #MainMenu {visibility: hidden;}
        footer {visibility: hidden;}
        header {visibility: hidden;}

        .stApp {
            background: linear-gradient(135deg, #f8fafc 0%, #e2e8f0 100%);
        }

        .login-logo {
            text-align: center;
            margin: 3rem 0 2rem 0;
        }

        .login-logo-icon {
            width: 64px;
            height: 64px;
            background: linear-gradient(135deg, #3b82f6 0%, #2563eb 100%);
            border-radius: 14px;
            display: inline-flex;
            align-items: center;
            justify-content: center;
            font-size: 1.8rem;
            margin-bottom: 1rem;
        }

        .login-title {
            font-size: 1.5rem;
            font-weight: 700;
            color: #1e293b;
            margin: 0;
        }

        .login-subtitle {
            color: #64748b;
            font-size: 0.9rem;
            margin-top: 0.5rem;
        }

        .login-footer {
            text-align: center;
            margin-top: 1.5rem;
            padding-top: 1.25rem;
            border-top: 1px solid #e2e8f0;
            color: #94a3b8;
            font-size: 0.8rem;
        }
        </style>
    """, unsafe_allow_html=True)

    col1, col2, col3 = st.columns([1, 1.2, 1])

    with col2:
        st.markdown('''
            <div class="login-logo">
                <div class="login-logo-icon">📦</div>
                <h1 class="login-title">Inventory Count</h1>
                <p class="login-subtitle">Sign in to enter physical counts</p>
            </div>
        ''', unsafe_allow_html=True)

        with st.form("login_form"):
            username = st.text_input("Username", placeholder="Enter your username", key="login_username")
            password = st.text_input("Password", type="password", placeholder="Enter your password",
                                     key="login_password")
            submitted = st.form_submit_button("Log In", use_container_width=True)

        if submitted:
            if not username or not password:
                st.error("⚠️ Please enter both username and password")
            else:
                with st.spinner("Authenticating..."):
                    try:
                        start_session(username, password)
                    except AuthenticationError:
                        st.error("❌ Invalid credentials")
                    else:
                        st.rerun()

        st.markdown('''
            <div class="login-footer">
                🔐 Secure Login
            </div>
        ''', unsafe_allow_html=True)
