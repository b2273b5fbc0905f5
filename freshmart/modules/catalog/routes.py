from __future__ import annotations

from flask import Blueprint, current_app, flash, redirect, render_template, request, url_for

from freshmart.app.common.client_context import client_context, respond
from freshmart.app.views.render import render_catalog
from freshmart.modules.catalog.controller import ProductsController

bp = Blueprint("catalog", __name__)

FEATURED_PRODUCTS = [
    {"id": 1, "name": "Fresh Apples", "price": "3.99", "description": "Crisp and sweet red apples"},
    {"id": 2, "name": "Organic Bananas", "price": "2.49", "description": "Fresh organic bananas"},
    {"id": 3, "name": "Fresh Milk", "price": "4.99", "description": "Farm fresh whole milk"},
]


def _products_controller(ctx) -> ProductsController:
    config = current_app.config
    return ProductsController(
        ctx.api,
        ctx.session_store,
        ctx.scheduler,
        commit_delay=config["CART_COMMIT_SECONDS"],
        message_delay=config["CART_MESSAGE_SECONDS"],
    )


@bp.get("/")
def home():
    return render_template("home.html", featured=FEATURED_PRODUCTS)


@bp.get("/products")
async def products_page():
    """GET /products - full listing, or a name search with ?q=."""
    term = request.args.get("q") or ""

    async with client_context() as ctx:
        controller = _products_controller(ctx)
        await controller.search(term)

    return respond(ctx, "products.html", controller=controller, catalog_markup=render_catalog(controller.products))


@bp.post("/products/<int:product_id>/cart")
async def add_to_cart(product_id: int):
    try:
        quantity = int(request.form.get("quantity") or 1)
    except ValueError:
        quantity = 1

    async with client_context() as ctx:
        controller = _products_controller(ctx)
        await controller.add_product_to_cart(product_id, quantity)

    if controller.success_message:
        flash(controller.success_message, "success")
    else:
        flash(controller.error_message, "error")
    return redirect(url_for("catalog.products_page"))
