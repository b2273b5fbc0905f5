from __future__ import annotations

from flask import Blueprint, current_app, flash, redirect, render_template, request

from freshmart.app.common.client_context import client_context, forget_backend_session, respond, session_store
from freshmart.app.common.navigation import ResponseNavigator
from freshmart.app.common.validation import form_fields
from freshmart.modules.auth.controller import (
    LOGIN_FIELDS,
    REGISTER_FIELDS,
    LoginController,
    RegisterController,
    logout,
)

bp = Blueprint("auth", __name__)


@bp.get("/login")
def login_page():
    return render_template("login.html", form={"email": "", "userType": "customer"}, controller=None)


@bp.post("/login")
async def login_submit():
    """POST /login - sign in against the backend and keep the session record."""
    form = form_fields(request.form, LOGIN_FIELDS, defaults={"userType": "customer"})

    async with client_context() as ctx:
        controller = LoginController(
            ctx.api, ctx.session_store, ctx.navigator, admin_url=current_app.config["ADMIN_URL"]
        )
        await controller.submit(form)

    if controller.success_message:
        flash(controller.success_message, "success")
    form.pop("password", None)
    return respond(ctx, "login.html", form=form, controller=controller)


@bp.get("/register")
def register_page():
    return render_template("register.html", form={}, controller=None)


@bp.post("/register")
async def register_submit():
    """POST /register - create a customer account, then head to the login page."""
    form = form_fields(request.form, REGISTER_FIELDS)

    async with client_context() as ctx:
        controller = RegisterController(
            ctx.api, ctx.navigator, redirect_delay=current_app.config["REGISTER_REDIRECT_SECONDS"]
        )
        await controller.submit(form)

    form.pop("password", None)
    return respond(ctx, "register.html", form=form, controller=controller)


@bp.post("/logout")
def logout_submit():
    navigator = ResponseNavigator()
    logout(session_store(), navigator)
    forget_backend_session()
    flash("Logged out.", "success")
    return redirect(navigator.target or "/")
