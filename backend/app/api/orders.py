import logging
from typing import List

from fastapi import APIRouter, HTTPException

from app.data.geo import get_district, get_thana
from app.db.session import get_session
from app.models.order import ORDER_STATUSES, Order, OrderRequest, OrderStatusUpdate
from app.services.orders import (
    OrderPersistenceError,
    OrderSubmitter,
    SubmissionInProgressError,
    assemble_order,
)
from app.services.pricing import PriceEngine
from app.services.storage import (
    get_delivery_settings,
    get_main_product,
    get_order as fetch_order,
    list_orders as fetch_orders,
    validate_promo_code,
)
from app.services.validation import OrderFormValidator

logger = logging.getLogger(__name__)
router = APIRouter()

submitter = OrderSubmitter()


@router.post("", status_code=201, response_model=Order)
async def submit_order(req: OrderRequest):
    validation = OrderFormValidator().validate(req.model_dump())
    if not validation["valid"]:
        logger.info("Rejected order form issues=%s", validation["issues"])
        raise HTTPException(status_code=422, detail={"issues": validation["issues"]})

    session = get_session()
    try:
        product = get_main_product(session)
        settings = get_delivery_settings(session)
        engine = PriceEngine(lambda code: validate_promo_code(session, code), settings)
        quote = engine.quote(product.price, req.quantity, req.district, req.promo_code)
        product_title = product.title
        courier_enabled = settings.steadfast_enabled
    finally:
        session.close()

    customer = {
        "name": req.name,
        "mobile": req.mobile,
        "district": get_district(req.district).name,
        "thana": get_thana(req.district, req.thana).name,
        "address": req.address,
    }
    order = assemble_order(customer, quote, product_title, req.landing_page, req.draft_id)

    try:
        return await submitter.submit(order, courier_enabled=courier_enabled)
    except SubmissionInProgressError:
        raise HTTPException(status_code=409, detail="Order is already being submitted")
    except OrderPersistenceError:
        raise HTTPException(status_code=500, detail="Order submission failed")


@router.get("", response_model=List[Order])
def list_orders():
    session = get_session()
    try:
        return fetch_orders(session)
    finally:
        session.close()


@router.get("/{order_id}", response_model=Order)
def get_order(order_id: str):
    session = get_session()
    try:
        order = fetch_order(session, order_id)
    finally:
        session.close()
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.patch("/{order_id}/status", response_model=Order)
def update_order_status(order_id: str, update: OrderStatusUpdate):
    if update.status not in ORDER_STATUSES:
        raise HTTPException(status_code=422, detail=f"Unknown status: {update.status}")
    session = get_session()
    try:
        order = fetch_order(session, order_id)
        if order is None:
            raise HTTPException(status_code=404, detail="Order not found")
        order.status = update.status
        session.add(order)
        session.commit()
        session.refresh(order)
        logger.info("Order status updated order_id=%s status=%s", order_id, update.status)
        return order
    finally:
        session.close()
