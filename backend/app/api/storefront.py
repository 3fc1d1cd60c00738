import logging
from typing import List, Optional

from fastapi import APIRouter, HTTPException, Query
from pydantic import BaseModel, Field

from app.db.session import get_session
from app.models.store import (
    PROMO_KINDS,
    DeliverySettings,
    DeliverySettingsUpdate,
    Product,
    PromoCode,
    PromoCodeCreate,
)
from app.services.pricing import PriceEngine, PriceQuote
from app.services.storage import (
    calculate_discount,
    get_delivery_settings,
    get_main_product,
    get_products,
    list_promo_codes,
    save_promo_code,
    update_delivery_settings,
    validate_promo_code,
)

logger = logging.getLogger(__name__)
router = APIRouter()


class QuoteRequest(BaseModel):
    quantity: int = Field(default=1, ge=1)
    district: str = ""
    promo_code: Optional[str] = None


class PromoCheck(BaseModel):
    code: str
    valid: bool
    kind: Optional[str] = None
    value: Optional[float] = None
    discount: float = 0.0


@router.get("/products", response_model=List[Product])
def products():
    session = get_session()
    try:
        return get_products(session)
    finally:
        session.close()


@router.get("/delivery-settings", response_model=DeliverySettings)
def delivery_settings():
    session = get_session()
    try:
        return get_delivery_settings(session)
    finally:
        session.close()


@router.put("/delivery-settings", response_model=DeliverySettings)
def put_delivery_settings(update: DeliverySettingsUpdate):
    session = get_session()
    try:
        return update_delivery_settings(session, update.model_dump(exclude_unset=True))
    finally:
        session.close()


@router.post("/quote", response_model=PriceQuote)
def quote(req: QuoteRequest):
    session = get_session()
    try:
        product = get_main_product(session)
        engine = PriceEngine(lambda code: validate_promo_code(session, code), get_delivery_settings(session))
        return engine.quote(product.price, req.quantity, req.district, req.promo_code)
    finally:
        session.close()


@router.get("/promo-codes", response_model=List[PromoCode])
def promo_codes():
    session = get_session()
    try:
        return list_promo_codes(session)
    finally:
        session.close()


@router.post("/promo-codes", status_code=201, response_model=PromoCode)
def create_promo_code(body: PromoCodeCreate):
    if body.kind not in PROMO_KINDS:
        raise HTTPException(status_code=422, detail=f"Unknown promo kind: {body.kind}")
    if not body.code.strip():
        raise HTTPException(status_code=422, detail="Promo code is empty")
    session = get_session()
    try:
        promo = save_promo_code(session, PromoCode(**body.model_dump()))
        logger.info("Promo code saved code=%s kind=%s value=%s", promo.code, promo.kind, promo.value)
        return promo
    finally:
        session.close()


@router.get("/promo-codes/{code}/validate", response_model=PromoCheck)
def check_promo_code(code: str, subtotal: Optional[float] = Query(default=None, ge=0)):
    session = get_session()
    try:
        promo = validate_promo_code(session, code)
        if promo is None:
            return PromoCheck(code=code.upper(), valid=False)
        discount = 0.0
        if subtotal is not None:
            discount = min(calculate_discount(subtotal, promo), subtotal)
        return PromoCheck(code=promo.code, valid=True, kind=promo.kind, value=promo.value, discount=discount)
    finally:
        session.close()
