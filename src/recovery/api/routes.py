"""FastAPI endpoints for the Recovery domain."""

import json

from fastapi import APIRouter, HTTPException
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain

from recovery.api.schemas import (
    CartIdResponse,
    ProcessCartsRequest,
    RecoveredCartResponse,
    SaveCartRequest,
    StatusResponse,
    SweepResponse,
)
from recovery.cart.management import SaveCart, UnsubscribeCart, get_cart_by_token
from recovery.sweep.scheduler import ProcessAbandonedCarts

router = APIRouter(prefix="/recovery", tags=["recovery"])


@router.post("/carts", status_code=201, response_model=CartIdResponse)
async def save_cart(body: SaveCartRequest) -> CartIdResponse:
    command = SaveCart(
        store_id=body.store_id,
        customer_id=body.customer_id,
        email=body.email,
        phone=body.phone,
        items=json.dumps([line.model_dump(exclude_none=True) for line in body.items]),
    )
    try:
        cart_id = current_domain.process(command, asynchronous=False)
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.messages) from exc
    return CartIdResponse(cart_id=cart_id)


@router.get("/carts/{token}", response_model=RecoveredCartResponse)
async def recover_cart(token: str) -> RecoveredCartResponse:
    cart = get_cart_by_token(token)
    if cart is None:
        raise HTTPException(status_code=404, detail="Cart not found or no longer recoverable")
    return RecoveredCartResponse(
        cart_id=str(cart.id),
        store_id=str(cart.store_id),
        items=cart.line_items(),
        subtotal=cart.subtotal or 0,
        item_count=cart.item_count or 0,
    )


@router.post("/process", response_model=SweepResponse)
async def process_abandoned_carts(body: ProcessCartsRequest | None = None) -> SweepResponse:
    as_of = body.as_of if body else None
    result = current_domain.process(ProcessAbandonedCarts(as_of=as_of), asynchronous=False)
    return SweepResponse(**result.to_dict())


@router.post("/unsubscribe/{token}", response_model=StatusResponse)
async def unsubscribe(token: str) -> StatusResponse:
    try:
        current_domain.process(UnsubscribeCart(token=token), asynchronous=False)
    except ObjectNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Cart not found") from exc
    except ValidationError as exc:
        raise HTTPException(status_code=400, detail=exc.messages) from exc
    return StatusResponse()
