from __future__ import annotations

import logging
from typing import Dict, Optional

from freshmart.app.common.errors import DomainError, FormError, TransportError, user_message
from freshmart.app.common.navigation import Navigator
from freshmart.app.common.session_store import SessionStore
from freshmart.app.common.validation import require_fields
from freshmart.app.gateway.client import ApiClient

logger = logging.getLogger(__name__)

LOGIN_FIELDS = ("email", "password", "userType")
REGISTER_FIELDS = ("fullName", "email", "password", "address", "contactNumber")
ADMIN_USER_TYPE = "admin"


class LoginController:
    """Login form workflow. One submit at a time; the session is only written on success."""

    def __init__(self, api: ApiClient, session_store: SessionStore, navigator: Navigator, admin_url: str = "/admin/") -> None:
        self.api = api
        self.session_store = session_store
        self.navigator = navigator
        self.admin_url = admin_url
        self.form: Dict[str, str] = {"email": "", "password": "", "userType": "customer"}
        self.is_loading = False
        self.error_message = ""
        self.success_message = ""

    async def submit(self, form: Optional[Dict[str, str]] = None) -> bool:
        if self.is_loading:
            return False
        if form is not None:
            self.form.update(form)

        self.error_message = ""
        self.success_message = ""
        try:
            require_fields(self.form, {"email": "email", "password": "password"})
        except FormError as err:
            self.error_message = err.message
            return False

        self.is_loading = True
        try:
            envelope = await self.api.login(self.form["email"], self.form["password"], self.form["userType"])
        except DomainError as err:
            self.error_message = user_message(err, "Login failed")
            return False
        except TransportError as err:
            logger.warning("Login error: %s", err)
            self.error_message = user_message(err, "Please Enter Correct UserName and Password")
            return False
        finally:
            self.is_loading = False

        self.success_message = "Login successful!"
        self.session_store.save(envelope.data)

        if self.form["userType"] == ADMIN_USER_TYPE:
            self.navigator.navigate(self.admin_url)
        else:
            self.navigator.navigate("/products")
        return True


class RegisterController:
    def __init__(self, api: ApiClient, navigator: Navigator, redirect_delay: float = 2.0) -> None:
        self.api = api
        self.navigator = navigator
        self.redirect_delay = redirect_delay
        self.form: Dict[str, str] = {name: "" for name in REGISTER_FIELDS}
        self.is_loading = False
        self.error_message = ""
        self.success_message = ""

    async def submit(self, form: Optional[Dict[str, str]] = None) -> bool:
        if self.is_loading:
            return False
        if form is not None:
            self.form.update(form)

        self.error_message = ""
        self.success_message = ""
        try:
            require_fields(self.form, {"fullName": "full name", "email": "email", "password": "password"})
        except FormError as err:
            self.error_message = err.message
            return False

        self.is_loading = True
        try:
            await self.api.register_customer(dict(self.form))
        except DomainError as err:
            self.error_message = user_message(err, "Registration failed")
            return False
        except TransportError as err:
            logger.warning("Registration error: %s", err)
            self.error_message = user_message(err, "Registration failed. Please try again.")
            return False
        finally:
            self.is_loading = False

        self.success_message = "Registration successful! Redirecting to login..."
        self.navigator.navigate("/login", delay=self.redirect_delay)
        return True


def logout(session_store: SessionStore, navigator: Navigator) -> None:
    session_store.clear()
    navigator.navigate("/")
