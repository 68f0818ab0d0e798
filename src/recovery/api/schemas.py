"""Pydantic request/response schemas for the Recovery API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field


class CartLineSchema(BaseModel):
    product_id: str
    variant_id: str | None = None
    title: str
    variant_title: str | None = None
    price: float = Field(ge=0)
    quantity: int = Field(ge=1)
    image_url: str | None = None


class SaveCartRequest(BaseModel):
    store_id: str
    customer_id: str | None = None
    email: str | None = None
    phone: str | None = None
    items: list[CartLineSchema]

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "store_id": "store-001",
                    "email": "asha@example.com",
                    "items": [
                        {"product_id": "prod-001", "title": "Block Print Kurta", "price": 1299, "quantity": 1}
                    ],
                }
            ]
        }
    }


class ProcessCartsRequest(BaseModel):
    as_of: datetime | None = None


class CartIdResponse(BaseModel):
    cart_id: str


class RecoveredCartResponse(BaseModel):
    cart_id: str
    store_id: str
    items: list[CartLineSchema]
    subtotal: float
    item_count: int


class SweepResponse(BaseModel):
    processed: int
    emails_sent: int
    errors: list[str]


class StatusResponse(BaseModel):
    status: str = "ok"
