import json
import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError
from sqlmodel import Session, select

from app.models.landing_page import LandingPage, LandingPageRead, LandingPageSection, LandingPageWrite

logger = logging.getLogger(__name__)

LANDING_PAGE_API_URL = os.getenv("LANDING_PAGE_API_URL", "http://localhost:8000/api")
LANDING_PAGE_API_TIMEOUT = float(os.getenv("LANDING_PAGE_API_TIMEOUT", "5"))

SLUG_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


class SlugConflictError(Exception):
    pass


@dataclass
class SectionsParseResult:
    sections: List[LandingPageSection] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def is_valid_slug(slug: str) -> bool:
    return bool(SLUG_RE.match(slug or ""))


def sort_sections(sections: List[LandingPageSection]) -> List[LandingPageSection]:
    # sorted() is stable, so equal `order` values keep insertion order
    return sorted(sections, key=lambda s: s.order)


def parse_sections(raw: Any) -> SectionsParseResult:
    """Decode sections from the wire.

    Accepts the JSON string stored on a page or an already-decoded list.
    Anything malformed yields an empty list plus the reason, never an exception.
    """
    if raw is None or raw == "":
        return SectionsParseResult()
    data = raw
    if isinstance(raw, str):
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            return SectionsParseResult(error=f"invalid JSON: {e.msg}")
    if not isinstance(data, list):
        return SectionsParseResult(error="sections must be a JSON array")
    try:
        sections = [LandingPageSection.model_validate(item) for item in data]
    except ValidationError as e:
        return SectionsParseResult(error=f"invalid section: {e.error_count()} error(s)")
    return SectionsParseResult(sections=sort_sections(sections))


def serialize_sections(sections: List[LandingPageSection]) -> str:
    return json.dumps([s.model_dump(mode="json") for s in sections], ensure_ascii=False)


def to_read_model(page: LandingPage, active_only: bool = False) -> LandingPageRead:
    result = parse_sections(page.sections)
    if not result.ok:
        logger.warning("Landing page id=%s has unreadable sections: %s", page.id, result.error)
    sections = result.sections
    if active_only:
        sections = [s for s in sections if s.is_active]
    return LandingPageRead(
        id=page.id,
        slug=page.slug,
        title=page.title,
        headline=page.headline,
        subheadline=page.subheadline,
        cta_text=page.cta_text,
        header_code=page.header_code,
        is_active=page.is_active,
        sections=sections,
    )


def list_landing_pages(session: Session) -> List[LandingPage]:
    return list(session.exec(select(LandingPage).order_by(LandingPage.id)).all())


def get_landing_page_by_slug(session: Session, slug: str) -> Optional[LandingPage]:
    return session.exec(select(LandingPage).where(LandingPage.slug == slug)).first()


def _ensure_slug_free(session: Session, slug: str, page_id: Optional[int] = None) -> None:
    other = get_landing_page_by_slug(session, slug)
    if other is not None and other.id != page_id:
        raise SlugConflictError(slug)


def create_landing_page(session: Session, data: LandingPageWrite) -> LandingPage:
    _ensure_slug_free(session, data.slug)
    page = LandingPage(**data.model_dump())
    session.add(page)
    session.commit()
    session.refresh(page)
    logger.info("Created landing page id=%s slug=%s", page.id, page.slug)
    return page


def replace_landing_page(session: Session, page: LandingPage, data: LandingPageWrite) -> LandingPage:
    """Overwrite every editable field; there is no history."""
    _ensure_slug_free(session, data.slug, page.id)
    for key, value in data.model_dump().items():
        setattr(page, key, value)
    page.updated_at = datetime.now(timezone.utc)
    session.add(page)
    session.commit()
    session.refresh(page)
    logger.info("Updated landing page id=%s slug=%s", page.id, page.slug)
    return page


class LandingPageClient:
    """HTTP client for the landing-page CRUD API, as used by the admin builder."""

    def __init__(self, base_url: str = None, timeout: float = None):
        self.base_url = (base_url or LANDING_PAGE_API_URL).rstrip("/")
        self.timeout = timeout or LANDING_PAGE_API_TIMEOUT

    def _url(self, page_id: Optional[int] = None) -> str:
        if page_id is None:
            return f"{self.base_url}/landing-pages"
        return f"{self.base_url}/landing-pages/{page_id}"

    @staticmethod
    def build_payload(title: str, slug: str, sections: List[LandingPageSection], **extra: Any) -> Dict[str, Any]:
        payload = {"title": title, "slug": slug, "sections": serialize_sections(sections)}
        payload.update(extra)
        return payload

    def load(self, page_id: int) -> LandingPageRead:
        resp = requests.get(self._url(page_id), timeout=self.timeout)
        resp.raise_for_status()
        data = resp.json()
        result = parse_sections(data.get("sections"))
        if not result.ok:
            logger.warning("Landing page id=%s returned unreadable sections: %s", page_id, result.error)
        data["sections"] = result.sections
        return LandingPageRead.model_validate(data)

    def create(self, title: str, slug: str, sections: List[LandingPageSection], **extra: Any) -> Dict[str, Any]:
        payload = self.build_payload(title, slug, sections, **extra)
        resp = requests.post(self._url(), json=payload, timeout=self.timeout)
        resp.raise_for_status()
        logger.info("Landing page created slug=%s", slug)
        return resp.json()

    def update(self, page_id: int, title: str, slug: str, sections: List[LandingPageSection], **extra: Any) -> Dict[str, Any]:
        payload = self.build_payload(title, slug, sections, **extra)
        resp = requests.put(self._url(page_id), json=payload, timeout=self.timeout)
        resp.raise_for_status()
        logger.info("Landing page updated id=%s slug=%s", page_id, slug)
        return resp.json()
