from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Awaitable, Callable, List, Optional

from freshmart.app.common.errors import DomainError, TransportError, user_message
from freshmart.app.common.session_store import SessionStore
from freshmart.app.common.timers import Scheduler
from freshmart.app.gateway.client import ApiClient
from freshmart.app.gateway.records import Product
from freshmart.app.views.page import Page
from freshmart.app.views.render import render_inventory

logger = logging.getLogger(__name__)


@dataclass
class CatalogItem:
    product: Product
    selected_quantity: int = 1


@dataclass
class CartLine:
    product_id: int
    product_name: str
    quantity: int


class ProductsController:
    """Storefront product listing, search and cart intent.

    `all_products` is the last full listing; searches only replace `products`
    (what is displayed).
    """

    def __init__(
        self,
        api: ApiClient,
        session_store: SessionStore,
        scheduler: Scheduler,
        *,
        commit_delay: float = 1.0,
        message_delay: float = 3.0,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        self.api = api
        self.session_store = session_store
        self.scheduler = scheduler
        self.commit_delay = commit_delay
        self.message_delay = message_delay
        self._sleep = sleep

        self.all_products: List[CatalogItem] = []
        self.products: List[CatalogItem] = []
        self.cart: List[CartLine] = []
        self.search_term = ""
        self.is_loading = False
        self.is_adding_to_cart = False
        self.error_message = ""
        self.success_message = ""

    async def mount(self) -> None:
        await self.load()

    async def load(self) -> None:
        self.is_loading = True
        self.error_message = ""
        try:
            envelope = await self.api.list_products()
        except DomainError as err:
            self.error_message = user_message(err, "Failed to load products")
            return
        except TransportError as err:
            logger.warning("Error loading products: %s", err)
            self.error_message = "Failed to load products. Please try again."
            return
        finally:
            self.is_loading = False

        self.all_products = [CatalogItem(p) for p in envelope.data or []]
        self.products = list(self.all_products)

    async def search(self, term: Optional[str] = None) -> None:
        if term is not None:
            self.search_term = term
        if not self.search_term.strip():
            await self.load()
            return

        self.is_loading = True
        self.error_message = ""
        try:
            envelope = await self.api.search_products(self.search_term.strip())
        except DomainError as err:
            self.products = []
            self.error_message = user_message(err, "No products found")
            return
        except TransportError as err:
            self.products = []
            if err.status_code is not None:
                # backend answers 404 with a message when nothing matches
                self.error_message = user_message(err, "No products found")
                return
            logger.warning("Error searching products: %s", err)
            self.error_message = "Search failed. Please try again."
            return
        finally:
            self.is_loading = False

        self.products = [CatalogItem(p) for p in envelope.data or []]
        if not self.products:
            self.error_message = "No products found"

    async def clear_search(self) -> None:
        self.search_term = ""
        await self.load()

    def find(self, product_id: int) -> Optional[CatalogItem]:
        for item in self.products + self.all_products:
            if item.product.id == product_id:
                return item
        return None

    async def add_product_to_cart(self, product_id: int, quantity: int = 1) -> bool:
        """Cart intent for a product known only by id (the listing is fetched if needed)."""
        if not self.session_store.is_logged_in():
            self.error_message = "Please login to add items to cart"
            return False
        if self.find(product_id) is None:
            await self.load()
        item = self.find(product_id)
        if item is None:
            self.error_message = self.error_message or "Product not found"
            return False
        item.selected_quantity = max(quantity, 1)
        return await self.add_to_cart(item)

    async def add_to_cart(self, item: CatalogItem) -> bool:
        if not self.session_store.is_logged_in():
            self.error_message = "Please login to add items to cart"
            return False
        if self.is_adding_to_cart:
            return False

        self.is_adding_to_cart = True
        self.error_message = ""
        self.success_message = ""
        quantity = item.selected_quantity or 1
        try:
            # no cart endpoint on the backend yet; the intent is kept locally
            await self._sleep(self.commit_delay)
            self.cart.append(CartLine(item.product.id, item.product.product_name, quantity))
        finally:
            self.is_adding_to_cart = False

        self.success_message = f"Added {quantity} {item.product.product_name}(s) to cart!"
        self.scheduler.call_later(self.message_delay, self._clear_success, self.success_message)
        return True

    def _clear_success(self, message: str) -> None:
        # a newer confirmation keeps its own timer
        if self.success_message == message:
            self.success_message = ""


class InventoryController:
    """Dashboard products section."""

    region = "productsTable"

    def __init__(self, api: ApiClient, page: Page) -> None:
        self.api = api
        self.page = page
        self.all_products: List[Product] = []
        self.search_term = ""

    async def load(self) -> None:
        try:
            envelope = await self.api.list_products()
        except DomainError as err:
            self.page.alerts.show(user_message(err, "Failed to load products"), "danger")
            return
        except TransportError as err:
            if err.status_code is not None:
                self.page.alerts.show(user_message(err, "Failed to load products"), "danger")
                return
            logger.exception("Error loading products")
            self.page.alerts.show("Error loading products", "danger")
            return
        self.all_products = list(envelope.data or [])
        self.display(self.all_products)

    def display(self, products: List[Product]) -> None:
        self.page.replace(self.region, render_inventory(products))

    async def search(self, term: Optional[str] = None) -> None:
        if term is not None:
            self.search_term = term
        if not self.search_term.strip():
            await self.load()
            return
        try:
            envelope = await self.api.search_products(self.search_term.strip())
        except DomainError as err:
            self.display([])
            self.page.alerts.show(user_message(err, "Search failed"), "warning")
            return
        except TransportError as err:
            if err.status_code is not None:
                self.display([])
                self.page.alerts.show(user_message(err, "Search failed"), "warning")
                return
            logger.exception("Error searching products")
            self.page.alerts.show("Error searching products", "danger")
            return
        self.display(list(envelope.data or []))

    async def refresh(self) -> None:
        self.search_term = ""
        await self.load()
