from unittest.mock import MagicMock, patch

import requests

from app.models.order import Order
from app.services.courier import SteadfastClient, build_steadfast_payload, parse_create_order_response


def _order():
    return Order(
        id="inv-1", name="Rahim", mobile="01711000000", district="ঢাকা", thana="মিরপুর",
        address="House 12", product="Smart Money Saving Box", quantity=2, price=1200,
        delivery_charge=60, discount=0, total=2460,
    )


def _response(body):
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = body
    return resp


def test_payload_translation():
    payload = build_steadfast_payload(_order())
    assert payload["invoice"] == "inv-1"
    assert payload["recipient_name"] == "Rahim"
    assert payload["recipient_phone"] == "01711000000"
    assert payload["recipient_address"] == "House 12, মিরপুর, ঢাকা"
    assert payload["cod_amount"] == 2460


def test_create_order_success():
    body = {"status": 200, "message": "Consignment has been created successfully.",
            "consignment": {"consignment_id": 1424107, "invoice": "inv-1", "tracking_code": "15BAEB8A"}}
    client = SteadfastClient(base_url="https://courier.test/api/v1/", api_key="k", secret_key="s", timeout=2)
    with patch("app.services.courier.requests.post", return_value=_response(body)) as post:
        result = client.create_order({"invoice": "inv-1"})

    assert result.ok
    assert result.tracking_code == "15BAEB8A"
    assert result.consignment_id == "1424107"
    args, kwargs = post.call_args
    assert args[0] == "https://courier.test/api/v1/create_order"
    assert kwargs["timeout"] == 2
    assert kwargs["headers"]["Api-Key"] == "k"
    assert kwargs["headers"]["Secret-Key"] == "s"


def test_non_success_status_is_a_failure():
    client = SteadfastClient(api_key="k", secret_key="s")
    with patch("app.services.courier.requests.post", return_value=_response({"status": 400, "message": "invalid"})):
        result = client.create_order({"invoice": "inv-1"})
    assert not result.ok
    assert "400" in result.error


def test_timeout_is_a_failure():
    client = SteadfastClient(api_key="k", secret_key="s")
    with patch("app.services.courier.requests.post", side_effect=requests.Timeout("slow")):
        result = client.create_order({"invoice": "inv-1"})
    assert not result.ok
    assert result.error == "timeout"


def test_http_error_and_bad_json_are_failures():
    client = SteadfastClient(api_key="k", secret_key="s")
    bad_status = MagicMock()
    bad_status.raise_for_status.side_effect = requests.HTTPError("401 Unauthorized")
    with patch("app.services.courier.requests.post", return_value=bad_status):
        assert not client.create_order({"invoice": "inv-1"}).ok

    bad_json = MagicMock()
    bad_json.raise_for_status.return_value = None
    bad_json.json.side_effect = ValueError("not json")
    with patch("app.services.courier.requests.post", return_value=bad_json):
        assert not client.create_order({"invoice": "inv-1"}).ok


def test_malformed_consignment_payloads():
    assert not parse_create_order_response(None).ok
    assert not parse_create_order_response({"status": 200}).ok
    assert not parse_create_order_response({"status": 200, "consignment": {"tracking_code": "X"}}).ok
    assert not parse_create_order_response({"status": 200, "consignment": {"consignment_id": 5}}).ok
