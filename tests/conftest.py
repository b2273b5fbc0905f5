import asyncio
import json
import os
import sys

import httpx
import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from freshmart.app.common.session_store import MemoryStorage, SessionStore
from freshmart.app.common.timers import DeferredScheduler
from freshmart.app.config import Config
from freshmart.app.factory import create_app
from freshmart.app.gateway.client import ApiClient
from freshmart.app.views.page import Page

BACKEND_URL = "http://backend.test"


def envelope(data=None, message="Operation successful", success=True):
    return {"success": success, "message": message, "data": data}


class ScheduledNavigator:
    """Navigator that tracks a location; delayed moves wait for the scheduler."""

    def __init__(self, scheduler, location="/"):
        self.scheduler = scheduler
        self.location = location
        self.history = []

    def navigate(self, url, delay=0.0):
        if delay > 0:
            self.scheduler.call_later(delay, self._go, url)
        else:
            self._go(url)

    def _go(self, url):
        self.history.append(url)
        self.location = url


class FakeBackend:
    """Canned answers per (method, path); remembers every request it saw."""

    def __init__(self):
        self.routes = {}
        self.calls = []
        self.gate = None

    def on(self, method, path, payload=None, status=200, raises=None, headers=None):
        self.routes[(method, path)] = (status, payload, raises, headers or {})

    async def handle(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        if self.gate is not None:
            await self.gate.wait()
        key = (request.method, request.url.path)
        if key not in self.routes:
            return httpx.Response(404, json=envelope(message="Not found", success=False))
        status, payload, raises, headers = self.routes[key]
        if raises is not None:
            raise raises
        if isinstance(payload, (bytes, str)):
            return httpx.Response(status, content=payload, headers=headers)
        return httpx.Response(status, json=payload, headers=headers)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def paths(self):
        return [(r.method, r.url.path) for r in self.calls]


PRODUCTS = [
    {"productId": 1, "productName": "Fresh Apples", "price": 3.99, "availableQuantity": 5},
    {"productId": 2, "productName": "Organic Bananas", "price": 2.49, "availableQuantity": 20},
    {"productId": 3, "productName": "Fresh Milk", "price": 4.5, "availableQuantity": 10},
]

CUSTOMERS = [
    {
        "customerId": "CUST001",
        "fullName": "Ada Lovelace",
        "email": "ada@example.com",
        "contactNumber": "5550100",
        "address": "1 Analytical Way",
        "createdAt": "2024-03-01T10:00:00",
    },
    {
        "customerId": "CUST002",
        "fullName": "Grace Hopper",
        "email": "grace@example.com",
        "contactNumber": "5550101",
        "address": "2 Compiler Road",
        "createdAt": "2024-03-02T11:30:00",
    },
]

ORDERS = [
    {"orderId": 10, "customerId": "CUST001", "status": "PENDING", "orderAmount": 12.5},
    {"orderId": 11, "customerId": "CUST002", "status": "DELIVERED", "orderAmount": 30},
    {"orderId": 12, "customerId": "CUST001", "status": "SHIPPED", "orderAmount": 7.25},
]

STATISTICS = {"totalOrders": 12, "pendingOrders": 3, "deliveredOrders": 7, "totalRevenue": 450}


@pytest.fixture()
def backend():
    fake = FakeBackend()
    fake.on("GET", "/api/products", envelope(PRODUCTS, "All products retrieved"))
    fake.on("GET", "/api/customers", envelope(CUSTOMERS, "All customers retrieved"))
    fake.on("GET", "/api/orders", envelope(ORDERS, "All orders retrieved"))
    fake.on("GET", "/api/orders/statistics", envelope(STATISTICS, "Order statistics retrieved"))
    return fake


@pytest.fixture()
def api(backend):
    return ApiClient(BACKEND_URL, transport=backend.transport, request_id="test-request")


@pytest.fixture()
def storage():
    return MemoryStorage()


@pytest.fixture()
def session_store(storage):
    return SessionStore(storage)


@pytest.fixture()
def scheduler():
    return DeferredScheduler()


@pytest.fixture()
def page(scheduler):
    return Page(scheduler, views=[f"{s}-section" for s in ("dashboard", "customers", "products", "orders", "reports")])


@pytest.fixture()
def run():
    return asyncio.run


@pytest.fixture()
def app(backend):
    class TestConfig(Config):
        TESTING = True
        SECRET_KEY = "test-secret"
        API_BASE_URL = BACKEND_URL
        API_TRANSPORT = backend.transport
        CART_COMMIT_SECONDS = 0

    return create_app(TestConfig)


@pytest.fixture()
def client(app):
    with app.test_client() as client:
        yield client


def login_as(client, user_type="CUSTOMER"):
    with client.session_transaction() as sess:
        sess["userSession"] = json.dumps({"userType": user_type, "userData": {"username": "someone"}})
