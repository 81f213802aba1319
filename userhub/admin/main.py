# userhub/admin/main.py
# streamlit run userhub/admin/main.py

import streamlit as st
from userhub.admin.ui.login import login_page, logout
from userhub.admin.ui.users import users_page


st.set_page_config(page_title="UserHub Admin", layout="wide")


def main_page():
    user = st.session_state.get("user") or {}
    st.sidebar.markdown(f"## 👤 {user.get('name', '')}")
    st.sidebar.caption(user.get("email", ""))

    if st.sidebar.button("🔓 Logout"):
        logout()
        st.rerun()

    users_page()


if "access_token" not in st.session_state:
    login_page()
else:
    main_page()
