from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Record(BaseModel):
    """Backend record: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True, extra="ignore"
    )


class OrderStatus(str, Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"

    @classmethod
    def parse(cls, raw: Any) -> Optional["OrderStatus"]:
        """Exact-match lookup; anything else is None."""
        try:
            return cls(raw)
        except (TypeError, ValueError):
            return None


class Customer(Record):
    customer_id: str
    full_name: Optional[str] = None
    email: Optional[str] = None
    contact_number: Optional[str] = None
    address: Optional[str] = None
    created_at: Optional[datetime] = None


class Product(Record):
    id: int = Field(validation_alias=AliasChoices("id", "productId"))
    product_name: str
    price: Decimal
    available_quantity: int = Field(default=0, ge=0)


class Order(Record):
    id: int = Field(validation_alias=AliasChoices("id", "orderId"))
    customer_id: str
    # raw string so that statuses we don't know about still decode
    status: str
    order_amount: Decimal
    customer_name: Optional[str] = None
    product_name: Optional[str] = None
    quantity_ordered: Optional[int] = None
    order_date: Optional[datetime] = None


class Statistics(Record):
    total_orders: int = 0
    pending_orders: int = 0
    confirmed_orders: int = 0
    shipped_orders: int = 0
    delivered_orders: int = 0
    cancelled_orders: int = 0
    total_revenue: Decimal = Decimal("0")

    @field_validator("*", mode="before")
    @classmethod
    def _null_counter_is_zero(cls, value):
        return 0 if value is None else value
