# userhub/admin/ui/users.py

import streamlit as st
from userhub.admin.services.api import list_users, update_user, delete_user, is_error
from userhub.admin.state import UsersTableState
from userhub.config.config import get_admin_settings

admin_settings = get_admin_settings()

STATE_KEY = "users_table"
COLUMN_WIDTHS = [0.6, 2, 3, 2, 0.9, 0.9]


def get_table_state() -> UsersTableState:
    if STATE_KEY not in st.session_state:
        st.session_state[STATE_KEY] = UsersTableState(per_page=admin_settings.DEFAULT_PER_PAGE)
    return st.session_state[STATE_KEY]


def users_page():
    st.title("Users")

    state = get_table_state()
    token = st.session_state["access_token"]

    render_toolbar(state)
    table_slot = st.empty()
    fetch_users(state, token, table_slot)
    show_notification(state)

    with table_slot.container():
        if state.error:
            st.error(f"Could not load users: {state.error}")
        render_table(state, token)
    render_pager(state)


def show_notification(state: UsersTableState):
    text = state.pop_notification()
    if text:
        st.toast(text)


def render_loading(state: UsersTableState, slot):
    # placeholder in place of the table while the page is loading
    if state.loading:
        slot.info(f"Loading page {state.page}...")


def fetch_users(state: UsersTableState, token, slot):
    if not state.needs_fetch():
        return

    page, per_page = state.begin_fetch()
    render_loading(state, slot)
    result = list_users(token, page, per_page)

    if is_error(result):
        if result.get("status_code") == 401:
            st.session_state.clear()
            st.rerun()
        state.apply_list_error(result["error"])
    else:
        state.apply_list_response(result)


def render_toolbar(state: UsersTableState):
    options = admin_settings.PER_PAGE_OPTIONS
    col_per_page, _, col_search = st.columns([1, 1, 2])
    with col_per_page:
        per_page = st.selectbox(
            "Rows per page",
            options=options,
            index=options.index(state.per_page) if state.per_page in options else 0,
            key="users_per_page",
        )
        state.change_per_page(per_page)
    with col_search:
        # only narrows the rows of the page already loaded
        state.filter_text = st.text_input("Search", placeholder="Search...", key="users_filter")


def render_table(state: UsersTableState, token):
    rows = state.filtered_users()
    if not rows:
        st.info("No users to show.")
        return

    header = st.columns(COLUMN_WIDTHS)
    for col, title in zip(header, ["#", "Name", "Email", "Created Date", "", ""]):
        col.markdown(f"**{title}**")

    for index, user in enumerate(rows):
        cols = st.columns(COLUMN_WIDTHS)
        cols[0].write(state.row_number(index))
        cols[1].write(user.get("name", ""))
        cols[2].write(user.get("email", ""))
        cols[3].write(user.get("created_at", ""))
        if cols[4].button("Edit", key=f"edit-{user['id']}"):
            state.open_edit(user)
            edit_user_dialog(state, token)
        if cols[5].button("Delete", key=f"delete-{user['id']}"):
            state.request_delete(user)
            confirm_delete_dialog(state, token)


def render_pager(state: UsersTableState):
    meta = state.meta
    if meta.get("from"):
        st.caption(f"Showing {meta['from']}–{meta['to']} of {state.total}")

    pager = state.pager()
    cols = st.columns(len(pager) + 2)

    if cols[0].button("Previous", key="page-prev", disabled=not state.has_previous):
        state.previous_page()
        st.rerun()

    for col, page in zip(cols[1:-1], pager):
        if page is None:
            col.write("…")
            continue
        kind = "primary" if page == state.page else "secondary"
        if col.button(str(page), key=f"page-{page}", type=kind):
            state.change_page(page)
            st.rerun()

    if cols[-1].button("Next", key="page-next", disabled=not state.has_next):
        state.next_page()
        st.rerun()


@st.dialog("Edit User")
def edit_user_dialog(state: UsersTableState, token):
    user = state.editing
    if user is None:
        return

    with st.form("edit_user_form"):
        name = st.text_input("Name", value=user.get("name", ""))
        email = st.text_input("Email", value=user.get("email", ""))
        password = st.text_input("New password", type="password", help="Leave empty to keep the current password")
        submitted = st.form_submit_button("Submit")

    if st.button("Cancel", key="edit-cancel"):
        state.close_edit()
        st.rerun()

    if submitted:
        result = update_user(token, user["id"], {"name": name, "email": email, "password": password})
        if is_error(result):
            st.error(result["error"])
            return
        state.close_edit()
        state.notify("User was successfully updated")
        state.mark_stale()
        st.rerun()


@st.dialog("Delete User")
def confirm_delete_dialog(state: UsersTableState, token):
    user = state.deleting
    if user is None:
        return

    st.write("Are you sure you want to delete this user?")
    st.caption(f"{user.get('name', '')} <{user.get('email', '')}>")

    col_confirm, col_cancel = st.columns(2)
    if col_confirm.button("Delete", type="primary", key="delete-confirm"):
        result = delete_user(token, user["id"])
        state.cancel_delete()
        if is_error(result):
            state.notify(f"Failed to delete user: {result['error']}")
        else:
            state.notify("User was successfully deleted")
        state.mark_stale()
        st.rerun()
    if col_cancel.button("Cancel", key="delete-cancel"):
        state.cancel_delete()
        st.rerun()
