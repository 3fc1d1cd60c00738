from datetime import datetime, timedelta, timezone

from sqlmodel import select

from app.models.order import Order
from app.models.store import DeliverySettings, PromoCode
from app.services.storage import (
    OrderStore,
    calculate_delivery_charge,
    calculate_discount,
    generate_id,
    get_delivery_settings,
    get_main_product,
    save_order,
    save_promo_code,
    validate_promo_code,
)


def _order(order_id="o-1", **overrides):
    fields = dict(
        id=order_id, name="Karim", mobile="01800000000", district="ঢাকা", thana="মিরপুর",
        address="Road 1", product="Smart Money Saving Box", quantity=1, price=1200,
        delivery_charge=60, discount=0, total=1260,
    )
    fields.update(overrides)
    return Order(**fields)


def test_defaults_are_seeded(session):
    product = get_main_product(session)
    assert product.title == "Smart Money Saving Box"
    assert product.price == 1200
    settings = get_delivery_settings(session)
    assert settings.dhaka_charge == 60
    assert settings.steadfast_enabled is False


def test_promo_lookup_is_case_insensitive(session, promo_save10):
    assert validate_promo_code(session, "Save10").code == "SAVE10"
    assert validate_promo_code(session, "") is None
    assert validate_promo_code(session, "NOPE") is None


def test_expired_and_inactive_promos_are_invalid(session):
    save_promo_code(session, PromoCode(code="OLD", value=5,
                                       expires_at=datetime.now(timezone.utc) - timedelta(days=1)))
    save_promo_code(session, PromoCode(code="OFF", value=5, is_active=False))
    save_promo_code(session, PromoCode(code="LATER", value=5,
                                       expires_at=datetime.now(timezone.utc) + timedelta(days=1)))
    assert validate_promo_code(session, "OLD") is None
    assert validate_promo_code(session, "OFF") is None
    assert validate_promo_code(session, "LATER") is not None


def test_calculate_discount_kinds():
    assert calculate_discount(1200, PromoCode(code="P", kind="percentage", value=15)) == 180
    assert calculate_discount(1200, PromoCode(code="F", kind="fixed", value=100)) == 100
    assert calculate_discount(500, PromoCode(code="M", kind="fixed", value=100, min_order_amount=1000)) == 0


def test_delivery_charge_needs_a_district():
    assert calculate_delivery_charge("", 5000, False, DeliverySettings()) == 0


def test_generate_id_is_unique():
    assert len({generate_id() for _ in range(100)}) == 100


def test_save_order_is_an_upsert(session):
    save_order(session, _order())
    save_order(session, _order(tracking_code="TRK1", consignment_id="77"))
    rows = session.exec(select(Order)).all()
    assert len(rows) == 1
    assert rows[0].tracking_code == "TRK1"
    assert rows[0].consignment_id == "77"
    assert rows[0].total == 1260


def test_order_store_roundtrip():
    store = OrderStore()
    store.save(_order("o-2", draft_id="draft-a"))
    assert store.get("o-2").name == "Karim"
    assert store.find_by_draft("draft-a").id == "o-2"
    assert store.find_by_draft("draft-b") is None
    assert store.get("missing") is None


def test_set_tracking_only_touches_courier_fields(session):
    save_order(session, _order("o-3", status="confirmed"))

    tracked = OrderStore().set_tracking("o-3", "TRK7", "88")

    assert tracked.tracking_code == "TRK7"
    assert tracked.consignment_id == "88"
    assert tracked.status == "confirmed"
    assert tracked.total == 1260
    assert OrderStore().set_tracking("missing", "TRK7", "88") is None
