import asyncio
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Set

from app.models.order import Order
from app.services.courier import CourierResult, SteadfastClient, build_steadfast_payload
from app.services.pricing import PriceQuote
from app.services.storage import OrderStore, generate_id

logger = logging.getLogger(__name__)


class OrderPersistenceError(Exception):
    """The local save failed; nothing was confirmed to the customer."""


class SubmissionInProgressError(Exception):
    """Another submission with the same draft id has not finished yet."""


def assemble_order(
    customer: Dict[str, Any],
    quote: PriceQuote,
    product_title: str,
    landing_page: str = "main",
    draft_id: Optional[str] = None,
) -> Order:
    """Build a new pending order from already-validated customer fields and a quote.

    `customer` carries name, mobile, district, thana and address; district and
    thana are display names at this point.
    """
    return Order(
        id=generate_id(),
        name=customer["name"],
        mobile=customer["mobile"],
        district=customer["district"],
        thana=customer["thana"],
        address=customer["address"],
        product=product_title,
        quantity=quote.quantity,
        price=quote.unit_price,
        delivery_charge=quote.delivery_charge,
        discount=quote.discount,
        total=quote.total,
        promo_code=quote.promo_code if quote.promo_valid else None,
        status="pending",
        created_at=datetime.now(timezone.utc),
        landing_page=landing_page,
        draft_id=draft_id,
    )


class OrderSubmitter:
    """Saves an order locally, then registers it with the courier on a best-effort basis.

    The local save must succeed; the courier step never fails the submission.
    """

    def __init__(self, store: OrderStore = None, courier: SteadfastClient = None):
        self.store = store or OrderStore()
        self.courier = courier or SteadfastClient()
        self._lock = threading.Lock()
        self._inflight: Set[str] = set()

    def _claim(self, draft_id: str) -> None:
        with self._lock:
            if draft_id in self._inflight:
                raise SubmissionInProgressError(draft_id)
            self._inflight.add(draft_id)

    def _release(self, draft_id: str) -> None:
        with self._lock:
            self._inflight.discard(draft_id)

    async def submit(self, order: Order, courier_enabled: bool = False) -> Order:
        draft_id = order.draft_id
        if not draft_id:
            return await self._submit(order, courier_enabled)

        self._claim(draft_id)
        try:
            existing = await asyncio.to_thread(self.store.find_by_draft, draft_id)
            if existing is not None:
                logger.info("Draft already submitted draft_id=%s order_id=%s", draft_id, existing.id)
                return existing
            return await self._submit(order, courier_enabled)
        finally:
            self._release(draft_id)

    async def _submit(self, order: Order, courier_enabled: bool) -> Order:
        try:
            await asyncio.to_thread(self.store.save, order)
        except Exception as e:
            logger.exception("Failed to save order id=%s: %s", order.id, e)
            raise OrderPersistenceError(str(e)) from e
        logger.info("Order saved id=%s total=%s landing_page=%s", order.id, order.total, order.landing_page)

        if not courier_enabled:
            return order

        result = await self.register_with_courier(order)
        if not result.ok:
            logger.warning("Courier sync failed for order id=%s, keeping local order: %s", order.id, result.error)
            return order

        try:
            tracked = await asyncio.to_thread(
                self.store.set_tracking, order.id, result.tracking_code, result.consignment_id
            )
        except Exception as e:
            # the order itself is already stored; only the tracking fields are lost
            logger.exception("Failed to store tracking info for order id=%s: %s", order.id, e)
            return order
        if tracked is None:
            logger.warning("Order id=%s vanished before tracking could be stored", order.id)
            return order
        return tracked

    async def register_with_courier(self, order: Order) -> CourierResult:
        payload = build_steadfast_payload(order)
        try:
            return await asyncio.to_thread(self.courier.create_order, payload)
        except Exception as e:
            logger.exception("Courier client raised for order id=%s: %s", order.id, e)
            return CourierResult.failure(str(e))
