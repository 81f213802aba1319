# userhub/admin/state.py

from dataclasses import dataclass, field


# -------------------------------
# Pager
# -------------------------------

def page_window(current: int, last: int, neighbours: int = 1) -> list[int | None]:
    """
    Returns page numbers to render as buttons.
    Always keeps the first and last page plus `neighbours` pages around the
    current one; a gap is marked with None (rendered as an ellipsis).
    """
    last = max(last, 1)
    current = min(max(current, 1), last)

    pages = {1, last}
    pages.update(range(max(current - neighbours, 1), min(current + neighbours, last) + 1))

    window = []
    previous = 0
    for page in sorted(pages):
        if page - previous == 2:
            window.append(page - 1)
        elif page - previous > 2:
            window.append(None)
        window.append(page)
        previous = page
    return window


# -------------------------------
# Users table state
# -------------------------------

@dataclass
class UsersTableState:
    """
    Client-side state of the users table.
    Records and pagination metadata come from the server one page at a time;
    the search filter only narrows the page already fetched.
    """
    page: int = 1
    per_page: int = 10
    loading: bool = False
    filter_text: str = ""
    users: list[dict] = field(default_factory=list)
    meta: dict = field(default_factory=dict)
    error: str | None = None
    editing: dict | None = None
    deleting: dict | None = None
    notification: str | None = None
    fetched_key: tuple[int, int] | None = None
    stale: bool = True

    @property
    def last_page(self) -> int:
        return self.meta.get("last_page") or 1

    @property
    def total(self) -> int:
        return self.meta.get("total") or 0

    # ---- fetching ----

    def needs_fetch(self) -> bool:
        return self.stale or self.fetched_key != (self.page, self.per_page)

    def begin_fetch(self) -> tuple[int, int]:
        self.loading = True
        return self.page, self.per_page

    def apply_list_response(self, payload: dict):
        self.loading = False
        self.error = None
        self.users = payload.get("data", [])
        self.meta = payload.get("meta", {})
        # The server clamps pages past the end, follow its current page
        self.page = self.meta.get("current_page", self.page)
        self.fetched_key = (self.page, self.per_page)
        self.stale = False

    def apply_list_error(self, message: str):
        self.loading = False
        self.users = []
        self.error = message
        self.fetched_key = (self.page, self.per_page)
        self.stale = False
        self.notify(f"Failed to load users: {message}")

    def mark_stale(self):
        self.stale = True

    # ---- pagination ----

    def change_page(self, page: int):
        self.page = min(max(page, 1), self.last_page)

    def previous_page(self):
        self.change_page(self.page - 1)

    def next_page(self):
        self.change_page(self.page + 1)

    def change_per_page(self, per_page: int):
        if per_page != self.per_page:
            self.per_page = per_page
            self.page = 1

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.last_page

    def pager(self, neighbours: int = 1) -> list[int | None]:
        return page_window(self.page, self.last_page, neighbours)

    # ---- table ----

    def filtered_users(self) -> list[dict]:
        needle = self.filter_text.strip().lower()
        if not needle:
            return list(self.users)
        return [
            user for user in self.users
            if needle in (user.get("name") or "").lower()
            or needle in (user.get("email") or "").lower()
        ]

    def row_number(self, index: int) -> int:
        return (self.page - 1) * self.per_page + index + 1

    # ---- edit / delete ----

    def open_edit(self, user: dict):
        self.editing = dict(user)

    def close_edit(self):
        self.editing = None

    def request_delete(self, user: dict):
        self.deleting = dict(user)

    def cancel_delete(self):
        self.deleting = None

    # ---- notifications ----

    def notify(self, text: str):
        self.notification = text

    def pop_notification(self) -> str | None:
        text, self.notification = self.notification, None
        return text
