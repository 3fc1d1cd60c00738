import json
from unittest.mock import MagicMock, patch

from app.models.landing_page import LandingPage, LandingPageSection, SectionType
from app.services.landing_pages import LandingPageClient, is_valid_slug, parse_sections, serialize_sections

SECTIONS = [
    {"id": "s3", "type": "cta", "title": "Order now", "content": "", "order": 3},
    {"id": "s1", "type": "hero", "title": "Save money", "content": "Every day", "order": 1},
    {"id": "s2a", "type": "features", "title": "Why", "content": "Sturdy", "order": 2},
    {"id": "s2b", "type": "testimonials", "title": "Reviews", "content": "", "order": 2, "is_active": False},
]


def _payload(slug="eid-offer", sections=SECTIONS, **extra):
    body = {"title": "Eid Offer", "slug": slug, "sections": json.dumps(sections)}
    body.update(extra)
    return body


def test_parse_sections_orders_by_order_then_insertion():
    result = parse_sections(json.dumps(SECTIONS))
    assert result.ok
    assert [s.id for s in result.sections] == ["s1", "s2a", "s2b", "s3"]
    assert result.sections[0].type is SectionType.HERO


def test_parse_sections_accepts_decoded_lists():
    assert [s.id for s in parse_sections(SECTIONS).sections][0] == "s1"
    assert parse_sections(None).sections == []
    assert parse_sections("").ok


def test_malformed_sections_fall_back_to_empty():
    for raw in ("{not json", '{"id": "x"}', json.dumps([{"id": "x", "type": "carousel"}])):
        result = parse_sections(raw)
        assert result.sections == []
        assert not result.ok


def test_serialize_sections_produces_a_json_string():
    sections = [LandingPageSection(id="a", type="text", title="T", order=1)]
    decoded = json.loads(serialize_sections(sections))
    assert decoded[0]["type"] == "text"
    assert decoded[0]["image_url"] is None


def test_slug_rules():
    assert is_valid_slug("eid-offer-2024")
    assert not is_valid_slug("Eid Offer")
    assert not is_valid_slug("trailing-")
    assert not is_valid_slug("")


def test_create_read_and_public_page(client):
    created = client.post("/api/landing-pages", json=_payload(headline="Save more"))
    assert created.status_code == 201
    page_id = created.json()["id"]

    raw = client.get(f"/api/landing-pages/{page_id}").json()
    assert isinstance(raw["sections"], str)
    assert [s["id"] for s in json.loads(raw["sections"])] == ["s1", "s2a", "s2b", "s3"]

    public = client.get("/api/landing-pages/slug/eid-offer").json()
    assert public["headline"] == "Save more"
    assert [s["id"] for s in public["sections"]] == ["s1", "s2a", "s3"]


def test_put_replaces_the_page(client):
    page_id = client.post("/api/landing-pages", json=_payload()).json()["id"]
    resp = client.put(f"/api/landing-pages/{page_id}",
                      json=_payload(slug="eid-offer-v2", sections=SECTIONS[:1], cta_text="Buy"))
    assert resp.status_code == 200
    body = resp.json()
    assert body["slug"] == "eid-offer-v2"
    assert body["cta_text"] == "Buy"
    assert len(json.loads(body["sections"])) == 1
    assert client.get("/api/landing-pages/slug/eid-offer").status_code == 404


def test_invalid_payloads_are_rejected(client):
    assert client.post("/api/landing-pages", json=_payload(slug="Bad Slug")).status_code == 422
    bad_sections = {"title": "X", "slug": "x", "sections": "{oops"}
    assert client.post("/api/landing-pages", json=bad_sections).status_code == 422
    client.post("/api/landing-pages", json=_payload())
    assert client.post("/api/landing-pages", json=_payload()).status_code == 409


def test_delete_and_inactive_pages(client):
    page_id = client.post("/api/landing-pages", json=_payload(is_active=False)).json()["id"]
    assert client.get("/api/landing-pages/slug/eid-offer").status_code == 404
    assert client.delete(f"/api/landing-pages/{page_id}").status_code == 204
    assert client.get(f"/api/landing-pages/{page_id}").status_code == 404
    assert client.delete(f"/api/landing-pages/{page_id}").status_code == 404


def test_stored_garbage_sections_render_empty(client, session):
    session.add(LandingPage(slug="broken", title="Broken", sections="[{"))
    session.commit()
    resp = client.get("/api/landing-pages/slug/broken")
    assert resp.status_code == 200
    assert resp.json()["sections"] == []


def test_client_load_parses_sections():
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = {"id": 4, "title": "Eid", "slug": "eid", "sections": json.dumps(SECTIONS)}
    with patch("app.services.landing_pages.requests.get", return_value=resp) as get:
        page = LandingPageClient(base_url="http://pages.test/api").load(4)
    assert get.call_args[0][0] == "http://pages.test/api/landing-pages/4"
    assert [s.id for s in page.sections] == ["s1", "s2a", "s2b", "s3"]


def test_client_load_tolerates_malformed_sections():
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = {"id": 4, "title": "Eid", "slug": "eid", "sections": "not-json"}
    with patch("app.services.landing_pages.requests.get", return_value=resp):
        page = LandingPageClient(base_url="http://pages.test/api").load(4)
    assert page.sections == []


def test_client_save_sends_sections_as_string():
    resp = MagicMock()
    resp.raise_for_status.return_value = None
    resp.json.return_value = {"id": 9}
    sections = [LandingPageSection(id="a", type="hero", order=1)]
    api = LandingPageClient(base_url="http://pages.test/api")
    with patch("app.services.landing_pages.requests.post", return_value=resp) as post:
        api.create("Eid", "eid", sections)
    with patch("app.services.landing_pages.requests.put", return_value=resp) as put:
        api.update(9, "Eid", "eid", sections)

    sent = post.call_args.kwargs["json"]
    assert sent["title"] == "Eid"
    assert isinstance(sent["sections"], str)
    assert json.loads(sent["sections"])[0]["id"] == "a"
    assert put.call_args[0][0] == "http://pages.test/api/landing-pages/9"
