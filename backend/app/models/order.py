from datetime import datetime, timezone
from typing import Optional
from sqlmodel import SQLModel, Field

ORDER_STATUSES = ("pending", "confirmed", "processing", "shipped", "delivered", "cancelled")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Order(SQLModel, table=True):
    id: str = Field(primary_key=True)
    name: str
    mobile: str
    # display names, captured as shown to the customer
    district: str
    thana: str
    address: str
    product: str
    quantity: int
    price: float
    delivery_charge: float = 0.0
    discount: float = 0.0
    total: float
    promo_code: Optional[str] = None
    status: str = "pending"
    tracking_code: Optional[str] = None
    consignment_id: Optional[str] = None
    created_at: datetime = Field(default_factory=_utcnow)
    landing_page: str = "main"
    draft_id: Optional[str] = Field(default=None, index=True)


class OrderRequest(SQLModel):
    """Checkout form as posted by the landing page.

    `district` and `thana` are reference ids; the stored order keeps their names.
    """

    name: str = ""
    mobile: str = ""
    district: str = ""
    thana: str = ""
    address: str = ""
    quantity: int = 1
    promo_code: Optional[str] = None
    landing_page: str = "main"
    draft_id: Optional[str] = None


class OrderStatusUpdate(SQLModel):
    status: str
