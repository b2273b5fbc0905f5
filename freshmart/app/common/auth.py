"""Page guards based on the client-side session record.

The record is a convenience, not a security boundary: the backend checks its
own session cookie on every admin endpoint.
"""

from functools import wraps
from typing import Any, Callable, TypeVar

from flask import flash, redirect, url_for

from freshmart.app.common.client_context import session_store

F = TypeVar("F", bound=Callable[..., Any])


def is_admin(user: Any) -> bool:
    return isinstance(user, dict) and str(user.get("userType") or "").upper() == "ADMIN"


def admin_required(fn: F) -> F:
    @wraps(fn)
    async def wrapper(*args, **kwargs):
        if not is_admin(session_store().load()):
            flash("Please log in as an administrator.", "info")
            return redirect(url_for("auth.login_page"))
        return await fn(*args, **kwargs)

    return wrapper  # type: ignore


def nav_state() -> dict:
    user = session_store().load()
    return {"nav_user": user, "is_logged_in": user is not None, "is_admin": is_admin(user)}
