import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional
from uuid import uuid4

from sqlmodel import Session, select

from app.db.session import get_session
from app.models.order import Order
from app.models.store import (
    DEFAULT_PRODUCT_PRICE,
    DEFAULT_PRODUCT_TITLE,
    DeliverySettings,
    Product,
    PromoCode,
)

logger = logging.getLogger(__name__)

DELIVERY_SETTINGS_ID = 1


def generate_id() -> str:
    return str(uuid4())


def seed_defaults(session: Session) -> None:
    """Insert the storefront product and delivery settings on a fresh database."""
    if session.exec(select(Product)).first() is None:
        session.add(Product(title=DEFAULT_PRODUCT_TITLE, price=DEFAULT_PRODUCT_PRICE))
        logger.info("Seeded default product title=%s price=%s", DEFAULT_PRODUCT_TITLE, DEFAULT_PRODUCT_PRICE)
    if session.get(DeliverySettings, DELIVERY_SETTINGS_ID) is None:
        session.add(DeliverySettings(id=DELIVERY_SETTINGS_ID))
        logger.info("Seeded default delivery settings")
    session.commit()


def get_products(session: Session) -> List[Product]:
    return list(session.exec(select(Product).where(Product.is_active == True).order_by(Product.id)).all())  # noqa: E712


def get_main_product(session: Session) -> Product:
    """The landing page sells the first active product; fall back to the stock box."""
    products = get_products(session)
    if products:
        return products[0]
    return Product(title=DEFAULT_PRODUCT_TITLE, price=DEFAULT_PRODUCT_PRICE)


def get_delivery_settings(session: Session) -> DeliverySettings:
    settings = session.get(DeliverySettings, DELIVERY_SETTINGS_ID)
    if settings is None:
        return DeliverySettings(id=DELIVERY_SETTINGS_ID)
    return settings


def update_delivery_settings(session: Session, changes: dict) -> DeliverySettings:
    settings = session.get(DeliverySettings, DELIVERY_SETTINGS_ID)
    if settings is None:
        settings = DeliverySettings(id=DELIVERY_SETTINGS_ID)
    for key, value in changes.items():
        setattr(settings, key, value)
    session.add(settings)
    session.commit()
    session.refresh(settings)
    logger.info("Delivery settings updated fields=%s", sorted(changes))
    return settings


def calculate_delivery_charge(
    district: str, subtotal: float, is_dhaka: bool, settings: DeliverySettings
) -> float:
    if not district:
        return 0.0
    if settings.free_delivery_enabled and subtotal >= (settings.free_delivery_min_amount or 0):
        return 0.0
    charge = settings.dhaka_charge if is_dhaka else settings.outside_dhaka_charge
    return max(0.0, float(charge))


def _as_aware(value: datetime) -> datetime:
    # SQLite hands datetimes back without tzinfo
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def validate_promo_code(session: Session, code: str) -> Optional[PromoCode]:
    """Return the active, unexpired rule for `code`, or None."""
    normalized = (code or "").strip().upper()
    if not normalized:
        return None
    promo = session.get(PromoCode, normalized)
    if promo is None or not promo.is_active:
        return None
    if promo.expires_at is not None and _as_aware(promo.expires_at) <= datetime.now(timezone.utc):
        logger.debug("Promo code expired code=%s", normalized)
        return None
    return promo


def calculate_discount(subtotal: float, promo: PromoCode) -> float:
    if promo.min_order_amount is not None and subtotal < promo.min_order_amount:
        return 0.0
    if promo.kind == "percentage":
        amount = subtotal * promo.value / 100
    else:
        amount = promo.value
    return round(max(0.0, amount), 2)


def list_promo_codes(session: Session) -> List[PromoCode]:
    return list(session.exec(select(PromoCode).order_by(PromoCode.code)).all())


def save_promo_code(session: Session, promo: PromoCode) -> PromoCode:
    promo.code = promo.code.strip().upper()
    merged = session.merge(promo)
    session.commit()
    session.refresh(merged)
    return merged


def save_order(session: Session, order: Order) -> None:
    """Upsert by id: a second save of the same id overwrites the first."""
    session.merge(order)
    session.commit()


def set_tracking(session: Session, order_id: str, tracking_code: str, consignment_id: str) -> Optional[Order]:
    """Write only the courier fields onto the stored row; status and prices stay as stored."""
    order = session.get(Order, order_id)
    if order is None:
        return None
    order.tracking_code = tracking_code
    order.consignment_id = consignment_id
    session.add(order)
    session.commit()
    session.refresh(order)
    return order


def get_order(session: Session, order_id: str) -> Optional[Order]:
    return session.get(Order, order_id)


def list_orders(session: Session) -> List[Order]:
    return list(session.exec(select(Order).order_by(Order.created_at)).all())


class OrderStore:
    """Session-per-call wrapper around the order table, safe to call from worker threads."""

    def __init__(self, session_factory: Callable[[], Session] = get_session):
        self.session_factory = session_factory

    def save(self, order: Order) -> None:
        session = self.session_factory()
        try:
            save_order(session, order)
        finally:
            session.close()

    def set_tracking(self, order_id: str, tracking_code: str, consignment_id: str) -> Optional[Order]:
        session = self.session_factory()
        try:
            return set_tracking(session, order_id, tracking_code, consignment_id)
        finally:
            session.close()

    def get(self, order_id: str) -> Optional[Order]:
        session = self.session_factory()
        try:
            return get_order(session, order_id)
        finally:
            session.close()

    def find_by_draft(self, draft_id: str) -> Optional[Order]:
        session = self.session_factory()
        try:
            return session.exec(select(Order).where(Order.draft_id == draft_id)).first()
        finally:
            session.close()
