import requests
import logging
import os
from dataclasses import dataclass
from typing import Dict, Any, Optional

from app.models.order import Order

logger = logging.getLogger(__name__)

DEFAULT_STEADFAST_URL = os.getenv("STEADFAST_BASE_URL", "https://portal.packzy.com/api/v1")
STEADFAST_API_KEY = os.getenv("STEADFAST_API_KEY", "")
STEADFAST_SECRET_KEY = os.getenv("STEADFAST_SECRET_KEY", "")
STEADFAST_TIMEOUT = float(os.getenv("STEADFAST_TIMEOUT", "5"))


@dataclass(frozen=True)
class CourierResult:
    ok: bool
    tracking_code: Optional[str] = None
    consignment_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def success(cls, tracking_code: str, consignment_id: str) -> "CourierResult":
        return cls(ok=True, tracking_code=tracking_code, consignment_id=consignment_id)

    @classmethod
    def failure(cls, error: str) -> "CourierResult":
        return cls(ok=False, error=error)


def build_steadfast_payload(order: Order) -> Dict[str, Any]:
    """Translate a local order into Steadfast's create_order body (cash on delivery)."""
    return {
        "invoice": order.id,
        "recipient_name": order.name,
        "recipient_phone": order.mobile,
        "recipient_address": f"{order.address}, {order.thana}, {order.district}",
        "cod_amount": order.total,
        "note": f"{order.product} x {order.quantity}",
    }


def parse_create_order_response(body: Any) -> CourierResult:
    if not isinstance(body, dict):
        return CourierResult.failure("unexpected response body")
    if body.get("status") != 200:
        return CourierResult.failure(f"courier status={body.get('status')} message={body.get('message')}")
    consignment = body.get("consignment")
    if not isinstance(consignment, dict):
        return CourierResult.failure("response missing consignment")
    tracking_code = consignment.get("tracking_code")
    consignment_id = consignment.get("consignment_id")
    if not tracking_code or consignment_id is None:
        return CourierResult.failure("consignment missing tracking_code or consignment_id")
    return CourierResult.success(str(tracking_code), str(consignment_id))


class SteadfastClient:
    def __init__(
        self,
        base_url: str = None,
        api_key: str = None,
        secret_key: str = None,
        timeout: float = None,
    ):
        self.base_url = (base_url or DEFAULT_STEADFAST_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else STEADFAST_API_KEY
        self.secret_key = secret_key if secret_key is not None else STEADFAST_SECRET_KEY
        self.timeout = timeout or STEADFAST_TIMEOUT
        logger.debug("SteadfastClient initialized with base_url=%s timeout=%s", self.base_url, self.timeout)

    def create_order(self, payload: Dict[str, Any]) -> CourierResult:
        """Single attempt, no retries. Every failure comes back as CourierResult.failure."""
        headers = {
            "Api-Key": self.api_key,
            "Secret-Key": self.secret_key,
            "Content-Type": "application/json",
        }
        url = f"{self.base_url}/create_order"
        try:
            resp = requests.post(url, json=payload, timeout=self.timeout, headers=headers)
            resp.raise_for_status()
            body = resp.json()
        except requests.Timeout:
            logger.warning("Steadfast create_order timed out after %ss invoice=%s", self.timeout, payload.get("invoice"))
            return CourierResult.failure("timeout")
        except (requests.RequestException, ValueError) as e:
            logger.warning("Steadfast create_order failed invoice=%s: %s", payload.get("invoice"), e)
            return CourierResult.failure(str(e))

        result = parse_create_order_response(body)
        if result.ok:
            logger.info(
                "Steadfast consignment created invoice=%s consignment_id=%s tracking_code=%s",
                payload.get("invoice"), result.consignment_id, result.tracking_code,
            )
        else:
            logger.warning("Steadfast rejected invoice=%s: %s", payload.get("invoice"), result.error)
        return result
