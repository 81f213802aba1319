import pytest

from userhub.admin.state import UsersTableState, page_window


def list_payload(users, current_page=1, last_page=1, total=None, per_page=10):
    return {
        "data": users,
        "meta": {
            "current_page": current_page,
            "last_page": last_page,
            "per_page": per_page,
            "total": len(users) if total is None else total,
        },
    }


USERS = [
    {"id": 3, "name": "Ann Lee", "email": "ann@x.com", "created_at": "2024-01-03 10:00:00"},
    {"id": 2, "name": "Bob", "email": "bob@example.com", "created_at": "2024-01-02 10:00:00"},
    {"id": 1, "name": "Carol", "email": "carol@x.com", "created_at": "2024-01-01 10:00:00"},
]


# ============================================================================
# Tests for page_window
# ============================================================================

@pytest.mark.parametrize("current, last, expected", [
    (1, 1, [1]),
    (1, 3, [1, 2, 3]),
    (2, 5, [1, 2, 3, 4, 5]),
    (5, 10, [1, None, 4, 5, 6, None, 10]),
    (1, 10, [1, 2, None, 10]),
    (10, 10, [1, None, 9, 10]),
    (4, 10, [1, 2, 3, 4, 5, None, 10]),
])
def test_page_window(current, last, expected):
    assert page_window(current, last) == expected


def test_page_window_wider_neighbourhood():
    assert page_window(10, 20, neighbours=2) == [1, None, 8, 9, 10, 11, 12, None, 20]


def test_page_window_clamps_current():
    assert page_window(50, 3) == [1, 2, 3]


# ============================================================================
# Tests for fetching
# ============================================================================

def test_needs_fetch_on_first_render():
    state = UsersTableState()
    assert state.needs_fetch()


def test_fetch_cycle():
    """Загрузка: флаг loading, затем данные и номер страницы от сервера"""
    state = UsersTableState(per_page=2)

    assert state.begin_fetch() == (1, 2)
    assert state.loading

    state.apply_list_response(list_payload(USERS[:2], current_page=1, last_page=2, total=3, per_page=2))

    assert not state.loading
    assert state.users == USERS[:2]
    assert state.last_page == 2
    assert state.total == 3
    assert not state.needs_fetch()


def test_page_change_triggers_fetch():
    state = UsersTableState(per_page=2)
    state.apply_list_response(list_payload(USERS[:2], current_page=1, last_page=2, total=3, per_page=2))

    state.next_page()

    assert state.page == 2
    assert state.needs_fetch()


def test_filter_change_does_not_fetch():
    state = UsersTableState()
    state.apply_list_response(list_payload(USERS))

    state.filter_text = "bob"

    assert not state.needs_fetch()


def test_page_synced_to_server_after_page_size_change():
    """После смены размера страницы сервер может вернуть другую текущую страницу"""
    state = UsersTableState(page=5, per_page=2)
    state.meta = {"last_page": 5}

    state.change_per_page(50)
    assert state.page == 1

    state.page = 3
    state.apply_list_response(list_payload(USERS, current_page=1, last_page=1, per_page=50))

    assert state.page == 1
    assert not state.needs_fetch()


def test_list_error_is_explicit():
    """Ошибка загрузки не глотается: пустой список, текст ошибки, уведомление"""
    state = UsersTableState()
    state.apply_list_response(list_payload(USERS))
    state.begin_fetch()

    state.apply_list_error("Request failed with status 500")

    assert state.users == []
    assert not state.loading
    assert state.error == "Request failed with status 500"
    assert "Request failed with status 500" in state.pop_notification()
    assert state.pop_notification() is None


def test_successful_fetch_clears_error():
    state = UsersTableState()
    state.apply_list_error("boom")

    state.mark_stale()
    state.apply_list_response(list_payload(USERS))

    assert state.error is None


def test_mark_stale_forces_refetch_of_same_page():
    state = UsersTableState()
    state.apply_list_response(list_payload(USERS))

    state.mark_stale()

    assert state.needs_fetch()
    assert state.begin_fetch() == (1, 10)


# ============================================================================
# Tests for pagination controls
# ============================================================================

def test_previous_and_next_bounds():
    state = UsersTableState(per_page=1)
    state.apply_list_response(list_payload(USERS[:1], current_page=1, last_page=3, total=3, per_page=1))

    assert not state.has_previous
    assert state.has_next
    state.previous_page()
    assert state.page == 1

    state.change_page(3)
    assert not state.has_next
    state.next_page()
    assert state.page == 3


def test_change_page_clamped():
    state = UsersTableState()
    state.apply_list_response(list_payload(USERS, last_page=4))

    state.change_page(99)
    assert state.page == 4
    state.change_page(0)
    assert state.page == 1


def test_same_per_page_keeps_page():
    state = UsersTableState(page=2, per_page=10)
    state.change_per_page(10)
    assert state.page == 2


# ============================================================================
# Tests for the table
# ============================================================================

def test_filter_matches_name_or_email_case_insensitive():
    state = UsersTableState()
    state.apply_list_response(list_payload(USERS))

    state.filter_text = "ANN"
    assert [u["id"] for u in state.filtered_users()] == [3]

    state.filter_text = "example.COM"
    assert [u["id"] for u in state.filtered_users()] == [2]

    state.filter_text = "x.com"
    assert [u["id"] for u in state.filtered_users()] == [3, 1]

    state.filter_text = ""
    assert len(state.filtered_users()) == 3


def test_filter_only_narrows_current_page():
    """Фильтр работает только по уже загруженной странице"""
    state = UsersTableState(per_page=2)
    state.apply_list_response(list_payload(USERS[:2], current_page=1, last_page=2, total=3, per_page=2))

    state.filter_text = "carol"

    assert state.filtered_users() == []


def test_row_number():
    state = UsersTableState(page=3, per_page=10)
    assert state.row_number(0) == 21
    assert state.row_number(4) == 25


def test_edit_and_delete_flags():
    state = UsersTableState()

    state.open_edit(USERS[0])
    assert state.editing == USERS[0]
    assert state.editing is not USERS[0]
    state.close_edit()
    assert state.editing is None

    state.request_delete(USERS[1])
    assert state.deleting["id"] == 2
    state.cancel_delete()
    assert state.deleting is None
