# userhub/admin/services/api.py

import requests

from userhub.config.config import get_admin_settings

admin_settings = get_admin_settings()


def _auth_headers(access_token):
    return {"Authorization": f"Bearer {access_token}", "Accept": "application/json"}


def _error_from_response(res):
    """
    Turns an error response into {"error": message, "errors": {...}}.
    """
    try:
        data = res.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}
    return {
        "error": data.get("message") or f"Request failed with status {res.status_code}",
        "errors": data.get("errors", {}),
        "status_code": res.status_code,
    }


def _request(method, path, access_token=None, **kwargs):
    """
    Sends a request to the API.
    Returns the decoded JSON body ({} for empty bodies) on success,
    or an error dict on HTTP or transport failure.
    """
    headers = _auth_headers(access_token) if access_token else {"Accept": "application/json"}
    try:
        res = requests.request(
            method,
            f"{admin_settings.API_URL}{path}",
            headers=headers,
            timeout=admin_settings.API_TIMEOUT,
            **kwargs,
        )
    except requests.RequestException as e:
        return {"error": str(e), "errors": {}, "status_code": None}

    if not res.ok:
        return _error_from_response(res)
    if res.status_code == 204 or not res.content:
        return {}
    return res.json()


def is_error(result):
    return isinstance(result, dict) and bool(result.get("error"))


# -------------------------------
# Authentication
# -------------------------------

def signup_user(name, email, password):
    """
    Registers a new account. Returns {"user", "token"} on success.
    """
    return _request("POST", "/signup", json={"name": name, "email": email, "password": password})


def login_user(email, password):
    """
    Logs in and returns {"user", "token"} on success.
    """
    return _request("POST", "/login", json={"email": email, "password": password})


def logout_user(access_token):
    return _request("POST", "/logout", access_token=access_token)


# -------------------------------
# Users
# -------------------------------

def list_users(access_token, page, per_page):
    """
    Fetches one page of users: {"data": [...], "meta": {...}}.
    """
    return _request(
        "GET",
        "/users",
        access_token=access_token,
        params={"page": page, "per_page": per_page},
    )


def update_user(access_token, user_id, data):
    # an empty password means "keep the current one"
    payload = {k: v for k, v in data.items() if k in ("name", "email", "password") and v not in (None, "")}
    return _request("PUT", f"/users/{user_id}", access_token=access_token, json=payload)


def delete_user(access_token, user_id):
    return _request("DELETE", f"/users/{user_id}", access_token=access_token)
