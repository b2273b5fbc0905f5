"""Pure record -> markup functions.

Every function takes plain records and returns `Markup`; nothing here reads
application state. Empty collections always produce a placeholder paragraph.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from freshmart.app.gateway.records import Customer, Order, OrderStatus, Product, Statistics

TEMPLATE_DIR = Path(__file__).resolve().parents[2] / "templates"

STATUS_BADGES = {
    OrderStatus.PENDING: "warning",
    OrderStatus.CONFIRMED: "info",
    OrderStatus.SHIPPED: "primary",
    OrderStatus.DELIVERED: "success",
    OrderStatus.CANCELLED: "danger",
}
DEFAULT_BADGE = "secondary"


def status_badge(status: Union[OrderStatus, str, None]) -> str:
    return STATUS_BADGES.get(OrderStatus.parse(status), DEFAULT_BADGE)


def format_money(value: Union[Decimal, int, float, None]) -> str:
    return f"${value if value is not None else 0}"


def format_date(value: Optional[datetime]) -> str:
    return value.date().isoformat() if value else ""


def low_stock(products: Iterable[Product], threshold: int) -> List[Product]:
    return [p for p in products if p.available_quantity <= threshold]


_env = Environment(
    loader=FileSystemLoader(str(TEMPLATE_DIR)),
    autoescape=select_autoescape(["html"]),
    trim_blocks=True,
    lstrip_blocks=True,
)
_env.filters["money"] = format_money
_env.filters["date"] = format_date
_env.globals["status_badge"] = status_badge


def _fragment(name: str, **context) -> Markup:
    return Markup(_env.get_template(f"fragments/{name}.html").render(**context))


def render_statistics(stats: Statistics) -> Markup:
    return _fragment("statistics", stats=stats)


def render_recent_orders(orders: Sequence[Order]) -> Markup:
    return _fragment("recent_orders", orders=orders)


def render_low_stock(products: Sequence[Product]) -> Markup:
    return _fragment("low_stock", products=products)


def render_customers(customers: Sequence[Customer]) -> Markup:
    return _fragment("customers", customers=customers)


def render_inventory(products: Sequence[Product]) -> Markup:
    return _fragment("inventory", products=products)


def render_orders(orders: Sequence[Order]) -> Markup:
    return _fragment("orders", orders=orders)


def render_report(stats: Statistics) -> Markup:
    rows = [
        ("Pending", OrderStatus.PENDING, stats.pending_orders),
        ("Confirmed", OrderStatus.CONFIRMED, stats.confirmed_orders),
        ("Shipped", OrderStatus.SHIPPED, stats.shipped_orders),
        ("Delivered", OrderStatus.DELIVERED, stats.delivered_orders),
        ("Cancelled", OrderStatus.CANCELLED, stats.cancelled_orders),
    ]
    return _fragment("report", stats=stats, rows=rows)


def render_catalog(items: Sequence) -> Markup:
    """Storefront product cards; `items` are catalog items (product + selected quantity)."""
    return _fragment("catalog", items=items)


def render_alert(message: str, level: str = "info") -> Markup:
    return _fragment("alert", message=message, level=level)
