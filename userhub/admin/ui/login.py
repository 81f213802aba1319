# userhub/admin/ui/login.py

import streamlit as st
from userhub.admin.services.api import login_user, signup_user, logout_user, is_error


def login_page():
    st.title("🔐 UserHub Admin")

    login_tab, signup_tab = st.tabs(["Login", "Sign up"])
    with login_tab:
        show_login_form()
    with signup_tab:
        show_signup_form()


def _start_session(result):
    st.session_state["access_token"] = result["token"]
    st.session_state["user"] = result["user"]


def show_login_form():
    with st.form("login_form"):
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Login")

    if submitted:
        with st.spinner("Logging in..."):
            result = login_user(email, password)
        if is_error(result):
            st.error(f"❌ {result['error']}")
        else:
            _start_session(result)
            st.rerun()


def show_signup_form():
    with st.form("signup_form"):
        name = st.text_input("Name")
        email = st.text_input("Email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign up")

    if submitted:
        with st.spinner("Creating account..."):
            result = signup_user(name, email, password)
        if is_error(result):
            st.error(f"❌ {result['error']}")
            for field, messages in result.get("errors", {}).items():
                for message in messages:
                    st.caption(f"{field}: {message}")
        else:
            _start_session(result)
            st.rerun()


def logout():
    token = st.session_state.get("access_token")
    if token:
        # the token is dropped locally even if the server call fails
        result = logout_user(token)
        if is_error(result):
            st.toast(f"Logout failed on the server: {result['error']}")
    st.session_state.clear()
