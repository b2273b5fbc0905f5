from __future__ import annotations

import logging
from typing import List, Optional

from freshmart.app.common.errors import DomainError, TransportError, user_message
from freshmart.app.gateway.client import ApiClient
from freshmart.app.gateway.records import Order, Statistics
from freshmart.app.views.page import Page
from freshmart.app.views.render import render_orders, render_report

logger = logging.getLogger(__name__)


class OrdersController:
    """Dashboard orders section. Status filtering narrows the cached list locally."""

    region = "ordersTable"

    def __init__(self, api: ApiClient, page: Page) -> None:
        self.api = api
        self.page = page
        self.all_orders: List[Order] = []
        self.status_filter = ""

    async def load(self) -> None:
        try:
            envelope = await self.api.list_orders()
        except DomainError as err:
            self.page.alerts.show(user_message(err, "Failed to load orders"), "danger")
            return
        except TransportError as err:
            if err.status_code is not None:
                self.page.alerts.show(user_message(err, "Failed to load orders"), "danger")
                return
            logger.exception("Error loading orders")
            self.page.alerts.show("Error loading orders", "danger")
            return
        self.all_orders = list(envelope.data or [])
        self.display(self.filtered())

    def filtered(self) -> List[Order]:
        status = self.status_filter.strip()
        if not status:
            return list(self.all_orders)
        return [o for o in self.all_orders if o.status == status]

    def display(self, orders: List[Order]) -> None:
        self.page.replace(self.region, render_orders(orders))

    def filter_by_status(self, status: Optional[str]) -> None:
        self.status_filter = status or ""
        self.display(self.filtered())

    async def refresh(self) -> None:
        self.status_filter = ""
        await self.load()


class ReportsController:
    region = "reportsContainer"

    def __init__(self, api: ApiClient, page: Page) -> None:
        self.api = api
        self.page = page

    async def load(self) -> None:
        try:
            envelope = await self.api.order_statistics()
        except DomainError as err:
            self.page.alerts.show(user_message(err, "Failed to load reports"), "danger")
            return
        except TransportError:
            logger.exception("Error loading reports")
            self.page.alerts.show("Error loading reports", "danger")
            return
        self.page.replace(self.region, render_report(envelope.data or Statistics()))
