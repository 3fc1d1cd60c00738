"""
Shared fixtures: a throwaway SQLite database, seeded defaults, and a fake courier.
"""

import os
import tempfile

_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite:///{os.path.join(_DB_DIR, 'test.db')}"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlmodel import SQLModel  # noqa: E402

from app.db.session import get_engine, get_session  # noqa: E402
from app.main import app as fastapi_app  # noqa: E402
from app.models.store import PromoCode  # noqa: E402
from app.services.courier import CourierResult  # noqa: E402
from app.services.storage import save_promo_code, seed_defaults, update_delivery_settings  # noqa: E402


class FakeCourier:
    def __init__(self, result=None, exc=None):
        self.result = result or CourierResult.success("TRK123", "9001")
        self.exc = exc
        self.calls = []

    def create_order(self, payload):
        self.calls.append(payload)
        if self.exc is not None:
            raise self.exc
        return self.result


@pytest.fixture(autouse=True)
def fresh_db():
    engine = get_engine()
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)
    session = get_session()
    try:
        seed_defaults(session)
    finally:
        session.close()
    yield


@pytest.fixture
def session():
    s = get_session()
    yield s
    s.close()


@pytest.fixture
def client():
    with TestClient(fastapi_app) as c:
        yield c


@pytest.fixture
def promo_save10(session):
    return save_promo_code(session, PromoCode(code="save10", kind="percentage", value=10))


@pytest.fixture
def courier_on(session):
    return update_delivery_settings(session, {"steadfast_enabled": True})


@pytest.fixture
def order_form():
    return {
        "name": "Rahim Uddin",
        "mobile": "01711000000",
        "district": "dhaka",
        "thana": "dhaka-mirpur",
        "address": "House 12, Road 3",
        "quantity": 2,
    }
