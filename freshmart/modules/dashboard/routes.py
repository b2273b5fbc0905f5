from __future__ import annotations

from datetime import datetime

from flask import Blueprint, abort, current_app, flash, redirect, render_template, request, url_for

from freshmart.app.common.auth import admin_required
from freshmart.app.common.client_context import client_context, respond
from freshmart.app.common.errors import UnknownSectionError
from freshmart.modules.dashboard.controller import SECTIONS, AdminConsole

bp = Blueprint("dashboard", __name__)

SECTION_VIEWS = [f"{name}-section" for name in SECTIONS]


def _console(ctx) -> AdminConsole:
    config = current_app.config
    return AdminConsole(
        ctx.api,
        ctx.page,
        low_stock_threshold=config["LOW_STOCK_THRESHOLD"],
        recent_orders_limit=config["RECENT_ORDERS_LIMIT"],
    )


@bp.get("/")
@admin_required
async def index():
    return await _show("dashboard")


@bp.get("/<section>")
@admin_required
async def section(section: str):
    """GET /admin/<section> - `q` searches customers/products, `status` filters orders."""
    return await _show(section)


async def _show(name: str):
    term = (request.args.get("q") or "").strip()
    status = (request.args.get("status") or "").strip()

    async with client_context(SECTION_VIEWS) as ctx:
        console = _console(ctx)
        searching = bool(term) and name in ("customers", "products")
        try:
            # a search fetches its own results instead of the full list
            await console.sections.show_section(name, load=not searching)
        except UnknownSectionError:
            abort(404)

        if name == "customers" and term:
            await console.customers.search(term)
        elif name == "products" and term:
            await console.inventory.search(term)
        elif name == "orders" and status:
            console.orders.filter_by_status(status)

    return respond(
        ctx,
        "admin/dashboard.html",
        sections=SECTIONS,
        current_section=console.sections.current_section,
        search_term=term,
        status_filter=status,
        current_time=datetime.now(),
    )


@bp.get("/customers/<customer_id>/delete")
@admin_required
async def confirm_delete_customer(customer_id: str):
    return render_template("admin/confirm_delete.html", customer_id=customer_id)


@bp.post("/customers/<customer_id>/delete")
@admin_required
async def delete_customer(customer_id: str):
    """POST /admin/customers/<id>/delete - only acts when the form carries confirm=yes."""
    confirmed = request.form.get("confirm") == "yes"

    async with client_context(SECTION_VIEWS) as ctx:
        console = _console(ctx)
        await console.customers.delete(customer_id, confirm=lambda message: confirmed)

    for alert in reversed(ctx.page.alerts.alerts):
        flash(alert.message, alert.level)
    return redirect(url_for("dashboard.section", section="customers"))
