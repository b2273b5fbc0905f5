from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Mapping, Optional

from freshmart.app.common.errors import GatewayError, UnknownSectionError
from freshmart.app.gateway.client import ApiClient
from freshmart.app.gateway.records import Statistics
from freshmart.app.views.page import Page
from freshmart.app.views.render import low_stock, render_low_stock, render_recent_orders, render_statistics
from freshmart.modules.catalog.controller import InventoryController
from freshmart.modules.customers.controller import CustomersController
from freshmart.modules.orders.controller import OrdersController, ReportsController

logger = logging.getLogger(__name__)

SECTIONS = ("dashboard", "customers", "products", "orders", "reports")

Loader = Callable[[], Awaitable[None]]


class DashboardController:
    """Overview section: three independent loads, each owning its own region."""

    def __init__(self, api: ApiClient, page: Page, low_stock_threshold: int = 10, recent_orders_limit: int = 5) -> None:
        self.api = api
        self.page = page
        self.low_stock_threshold = low_stock_threshold
        self.recent_orders_limit = recent_orders_limit

    async def load(self) -> None:
        await asyncio.gather(
            self._guarded(self.load_statistics),
            self._guarded(self.load_recent_orders),
            self._guarded(self.load_low_stock),
        )

    async def _guarded(self, loader: Loader) -> None:
        try:
            await loader()
        except GatewayError:
            logger.exception("Error loading dashboard data")
            self.page.alerts.show("Error loading dashboard data", "danger")

    async def load_statistics(self) -> None:
        envelope = await self.api.order_statistics()
        self.page.replace("statsContainer", render_statistics(envelope.data or Statistics()))

    async def load_recent_orders(self) -> None:
        envelope = await self.api.list_orders()
        orders = list(envelope.data or [])[: self.recent_orders_limit]
        self.page.replace("recentOrders", render_recent_orders(orders))

    async def load_low_stock(self) -> None:
        envelope = await self.api.list_products()
        products = low_stock(envelope.data or [], self.low_stock_threshold)
        self.page.replace("lowStockProducts", render_low_stock(products))


class SectionController:
    """Which dashboard section is visible, and loading its data when shown."""

    def __init__(self, page: Page, loaders: Mapping[str, Loader]) -> None:
        self.page = page
        self.loaders = loaders
        self.current_section = "dashboard"

    async def show_section(self, name: str, nav_control: Optional[str] = None, load: bool = True) -> None:
        """Switch the visible section; `load=False` leaves fetching to the caller."""
        if name not in SECTIONS:
            raise UnknownSectionError(name)

        for section in SECTIONS:
            self.page.hide(f"{section}-section")
        self.page.show(f"{name}-section")
        self.page.activate_nav(nav_control or f"nav-{name}")
        self.current_section = name

        loader = self.loaders.get(name)
        if load and loader is not None:
            await loader()


class AdminConsole:
    """All dashboard controllers wired to one page."""

    def __init__(self, api: ApiClient, page: Page, *, low_stock_threshold: int = 10, recent_orders_limit: int = 5) -> None:
        self.page = page
        self.dashboard = DashboardController(api, page, low_stock_threshold, recent_orders_limit)
        self.customers = CustomersController(api, page)
        self.inventory = InventoryController(api, page)
        self.orders = OrdersController(api, page)
        self.reports = ReportsController(api, page)
        self.sections = SectionController(
            page,
            {
                "dashboard": self.dashboard.load,
                "customers": self.customers.load,
                "products": self.inventory.load,
                "orders": self.orders.load,
                "reports": self.reports.load,
            },
        )
