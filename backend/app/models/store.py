from datetime import datetime
from typing import Optional
from sqlmodel import SQLModel, Field

DEFAULT_PRODUCT_TITLE = "Smart Money Saving Box"
DEFAULT_PRODUCT_PRICE = 1200.0

PROMO_KINDS = ("percentage", "fixed")


class Product(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    title: str
    price: float
    description: Optional[str] = None
    is_active: bool = True


class PromoCode(SQLModel, table=True):
    code: str = Field(primary_key=True)
    kind: str = "percentage"
    value: float
    min_order_amount: Optional[float] = None
    expires_at: Optional[datetime] = None
    is_active: bool = True


class PromoCodeCreate(SQLModel):
    code: str
    kind: str = "percentage"
    value: float = Field(gt=0)
    min_order_amount: Optional[float] = Field(default=None, ge=0)
    expires_at: Optional[datetime] = None
    is_active: bool = True


class DeliverySettings(SQLModel, table=True):
    id: Optional[int] = Field(default=1, primary_key=True)
    dhaka_charge: float = 60.0
    outside_dhaka_charge: float = 120.0
    free_delivery_enabled: bool = False
    free_delivery_min_amount: Optional[float] = None
    steadfast_enabled: bool = False


class DeliverySettingsUpdate(SQLModel):
    dhaka_charge: Optional[float] = Field(default=None, ge=0)
    outside_dhaka_charge: Optional[float] = Field(default=None, ge=0)
    free_delivery_enabled: Optional[bool] = None
    free_delivery_min_amount: Optional[float] = Field(default=None, ge=0)
    steadfast_enabled: Optional[bool] = None
