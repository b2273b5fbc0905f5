"""Per-request wiring between Flask and the framework-free controllers.

A request stands in for one user action: it gets a fresh gateway client
(carrying the backend cookies saved in the Flask session), the session store,
a deferred scheduler, a navigator and a page surface.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Iterable

from flask import current_app, redirect, render_template, session

from freshmart.app.common.navigation import ResponseNavigator
from freshmart.app.common.request_context import current_request_id
from freshmart.app.common.session_store import FlaskSessionStorage, SessionStore
from freshmart.app.common.timers import DeferredScheduler
from freshmart.app.gateway.client import ApiClient
from freshmart.app.views.page import Page

API_COOKIES_KEY = "apiCookies"


@dataclass
class ClientContext:
    api: ApiClient
    session_store: SessionStore
    scheduler: DeferredScheduler
    navigator: ResponseNavigator
    page: Page


def session_store() -> SessionStore:
    return SessionStore(FlaskSessionStorage())


@asynccontextmanager
async def client_context(views: Iterable[str] = ()) -> AsyncIterator[ClientContext]:
    config = current_app.config
    scheduler = DeferredScheduler()
    async with ApiClient(
        config["API_BASE_URL"],
        timeout=config["API_TIMEOUT"],
        cookies=session.get(API_COOKIES_KEY),
        request_id=current_request_id(),
        transport=config.get("API_TRANSPORT"),
    ) as api:
        ctx = ClientContext(
            api=api,
            session_store=session_store(),
            scheduler=scheduler,
            navigator=ResponseNavigator(),
            page=Page(scheduler, views, alert_dismiss_after=config["ALERT_DISMISS_SECONDS"]),
        )
        try:
            yield ctx
        finally:
            cookies = api.cookies
            if cookies != session.get(API_COOKIES_KEY):
                session[API_COOKIES_KEY] = cookies


def respond(ctx: ClientContext, template: str, **context):
    """Follow an immediate navigation, otherwise render (with a Refresh header for delayed ones)."""
    if ctx.navigator.is_immediate:
        return redirect(ctx.navigator.target)
    return render_template(template, page=ctx.page, **context), 200, ctx.navigator.refresh_headers()


def forget_backend_session() -> None:
    """Drop the backend cookies kept for this browser (on logout)."""
    session.pop(API_COOKIES_KEY, None)
