from __future__ import annotations

import logging
from typing import Callable, List, Optional

from freshmart.app.common.errors import DomainError, TransportError, user_message
from freshmart.app.gateway.client import ApiClient
from freshmart.app.gateway.records import Customer
from freshmart.app.views.page import Page
from freshmart.app.views.render import render_customers

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]


class CustomersController:
    """Dashboard customers section: list, search, refresh and delete."""

    region = "customersTable"

    def __init__(self, api: ApiClient, page: Page) -> None:
        self.api = api
        self.page = page
        self.all_customers: List[Customer] = []
        self.search_term = ""

    async def load(self) -> None:
        try:
            envelope = await self.api.list_customers()
        except DomainError as err:
            self.page.alerts.show(user_message(err, "Failed to load customers"), "danger")
            return
        except TransportError as err:
            if err.status_code is not None:
                self.page.alerts.show(user_message(err, "Failed to load customers"), "danger")
                return
            logger.exception("Error loading customers")
            self.page.alerts.show("Error loading customers", "danger")
            return
        self.all_customers = list(envelope.data or [])
        self.display(self.all_customers)

    def display(self, customers: List[Customer]) -> None:
        self.page.replace(self.region, render_customers(customers))

    async def search(self, term: Optional[str] = None) -> None:
        if term is not None:
            self.search_term = term
        if not self.search_term.strip():
            await self.load()
            return
        try:
            envelope = await self.api.search_customers(self.search_term.strip())
        except DomainError as err:
            self.display([])
            self.page.alerts.show(user_message(err, "Search failed"), "warning")
            return
        except TransportError as err:
            if err.status_code is not None:
                # backend answers 404 with a message when nobody matches
                self.display([])
                self.page.alerts.show(user_message(err, "Search failed"), "warning")
                return
            logger.exception("Error searching customers")
            self.page.alerts.show("Error searching customers", "danger")
            return
        self.display(list(envelope.data or []))

    async def refresh(self) -> None:
        self.search_term = ""
        await self.load()

    async def delete(self, customer_id: str, confirm: Confirm) -> bool:
        """Delete after `confirm` agrees; a declined confirmation sends nothing."""
        if not confirm("Are you sure you want to delete this customer?"):
            return False
        try:
            envelope = await self.api.delete_customer(customer_id)
        except DomainError as err:
            self.page.alerts.show(user_message(err, "Failed to delete customer"), "danger")
            return False
        except TransportError as err:
            logger.warning("Error deleting customer %s: %s", customer_id, err)
            self.page.alerts.show(user_message(err, "Error deleting customer"), "danger")
            return False

        self.page.alerts.show(envelope.message or "Customer deleted successfully", "success")
        await self.load()
        return True
