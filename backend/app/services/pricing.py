from typing import Callable, Optional, Tuple

from pydantic import BaseModel

from app.data.geo import is_dhaka_district
from app.models.store import DeliverySettings, PromoCode
from app.services.storage import calculate_delivery_charge, calculate_discount

PromoLookup = Callable[[str], Optional[PromoCode]]


class PriceQuote(BaseModel):
    unit_price: float
    quantity: int
    subtotal: float
    delivery_charge: float
    discount: float
    total: float
    promo_code: Optional[str] = None
    promo_valid: bool = False


class PriceEngine:
    """Checkout pricing for the landing page.

    Every call re-derives the whole quote from the current form values, so a
    quantity change after a promo was applied never leaves a stale discount.
    """

    def __init__(self, promo_lookup: PromoLookup, delivery_settings: DeliverySettings):
        self.promo_lookup = promo_lookup
        self.delivery_settings = delivery_settings

    def _discount(self, subtotal: float, promo_code: str) -> Tuple[float, bool]:
        if not promo_code:
            return 0.0, False
        promo = self.promo_lookup(promo_code)
        if promo is None:
            return 0.0, False
        # a misconfigured fixed rule must not push the total below delivery
        return min(calculate_discount(subtotal, promo), subtotal), True

    def quote(self, unit_price: float, quantity: int, district: str = "", promo_code: Optional[str] = None) -> PriceQuote:
        code = (promo_code or "").strip().upper()
        subtotal = unit_price * quantity

        if district:
            delivery = calculate_delivery_charge(
                district, subtotal, is_dhaka_district(district), self.delivery_settings
            )
        else:
            delivery = 0.0

        discount, promo_valid = self._discount(subtotal, code)
        total = subtotal + delivery - discount

        return PriceQuote(
            unit_price=unit_price,
            quantity=quantity,
            subtotal=subtotal,
            delivery_charge=delivery,
            discount=discount,
            total=round(total, 2),
            promo_code=code if promo_valid else None,
            promo_valid=promo_valid,
        )
