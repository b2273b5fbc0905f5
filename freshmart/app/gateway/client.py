"""Async client for the grocery REST backend.

Every endpoint answers with the same `{success, data, message}` envelope.
`ApiClient.request` decodes it into a typed `Envelope` and turns both kinds of
failure into exceptions:

- `TransportError`: connection problems, timeouts, non-2xx answers and bodies
  that do not decode into the expected envelope.
- `DomainError`: a well formed envelope with `success: false`.

The cookie jar travels with every call so session-based endpoints see the
login made through `login()`.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from freshmart.app.common.errors import DomainError, TransportError
from freshmart.app.common.request_context import REQUEST_ID_HEADER
from freshmart.app.gateway.envelope import Envelope
from freshmart.app.gateway.records import Customer, Order, Product, Statistics

logger = logging.getLogger(__name__)


class ApiClient:
    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        cookies: Optional[Dict[str, str]] = None,
        request_id: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        headers = {"Accept": "application/json"}
        if request_id:
            headers[REQUEST_ID_HEADER] = request_id
        self.request_id = request_id
        self._http = httpx.AsyncClient(
            base_url=base_url,
            timeout=timeout,
            cookies=cookies,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._http.aclose()

    @property
    def cookies(self) -> Dict[str, str]:
        """Current cookie jar as a plain dict (for persisting between requests)."""
        return {cookie.name: cookie.value for cookie in self._http.cookies.jar}

    async def request(
        self,
        method: str,
        path: str,
        *,
        data_type: Any = Any,
        params: Optional[Dict[str, Any]] = None,
        body: Optional[Dict[str, Any]] = None,
    ) -> Envelope:
        try:
            response = await self._http.request(method, path, params=params, json=body)
        except httpx.RequestError as exc:
            logger.warning("%s %s failed [%s]: %r", method, path, self.request_id, exc)
            raise TransportError(f"Could not reach the server: {exc.__class__.__name__}") from exc

        logger.info("%s %s -> %s [%s]", method, path, response.status_code, self.request_id)

        if not response.is_success:
            raise TransportError(
                f"Server answered HTTP {response.status_code}",
                status_code=response.status_code,
                server_message=_error_message(response),
            )

        try:
            envelope = Envelope[data_type].model_validate_json(response.content)
        except ValidationError as exc:
            logger.warning("%s %s returned a malformed envelope: %s", method, path, exc)
            raise TransportError("Malformed response from server", status_code=response.status_code) from exc

        if not envelope.success:
            raise DomainError(envelope.message or "", status_code=response.status_code)
        return envelope

    # --- Orders ---
    async def order_statistics(self) -> Envelope:
        return await self.request("GET", "/api/orders/statistics", data_type=Statistics)

    async def list_orders(self) -> Envelope:
        return await self.request("GET", "/api/orders", data_type=List[Order])

    # --- Products ---
    async def list_products(self) -> Envelope:
        return await self.request("GET", "/api/products", data_type=List[Product])

    async def search_products(self, name: str) -> Envelope:
        return await self.request("GET", "/api/products/search", data_type=List[Product], params={"name": name})

    # --- Customers ---
    async def list_customers(self) -> Envelope:
        return await self.request("GET", "/api/customers", data_type=List[Customer])

    async def search_customers(self, name: str) -> Envelope:
        return await self.request("GET", "/api/customers/search", data_type=List[Customer], params={"name": name})

    async def register_customer(self, form: Dict[str, str]) -> Envelope:
        return await self.request("POST", "/api/customers/register", body=form)

    async def delete_customer(self, customer_id: str) -> Envelope:
        return await self.request("DELETE", f"/api/customers/{quote(customer_id, safe='')}")

    # --- Auth ---
    async def login(self, username: str, password: str, user_type: str) -> Envelope:
        return await self.request(
            "POST",
            "/api/auth/login",
            body={"username": username, "password": password, "userType": user_type},
        )


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return None
