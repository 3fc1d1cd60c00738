import logging
from typing import List

from fastapi import APIRouter, HTTPException

from app.db.session import get_session
from app.models.landing_page import LandingPage, LandingPageRead, LandingPageWrite
from app.services.landing_pages import (
    SlugConflictError,
    create_landing_page,
    get_landing_page_by_slug,
    is_valid_slug,
    list_landing_pages,
    parse_sections,
    replace_landing_page,
    serialize_sections,
    to_read_model,
)

logger = logging.getLogger(__name__)
router = APIRouter()


def _check_payload(data: LandingPageWrite) -> LandingPageWrite:
    if not is_valid_slug(data.slug):
        raise HTTPException(status_code=422, detail=f"Slug is not URL safe: {data.slug}")
    result = parse_sections(data.sections)
    if not result.ok:
        raise HTTPException(status_code=422, detail=f"Invalid sections: {result.error}")
    # store the normalized, ordered form
    return data.model_copy(update={"sections": serialize_sections(result.sections)})


@router.get("", response_model=List[LandingPage])
def index():
    session = get_session()
    try:
        return list_landing_pages(session)
    finally:
        session.close()


@router.post("", status_code=201, response_model=LandingPage)
def create(data: LandingPageWrite):
    data = _check_payload(data)
    session = get_session()
    try:
        return create_landing_page(session, data)
    except SlugConflictError:
        raise HTTPException(status_code=409, detail=f"Slug already in use: {data.slug}")
    finally:
        session.close()


@router.get("/slug/{slug}", response_model=LandingPageRead)
def public_page(slug: str):
    session = get_session()
    try:
        page = get_landing_page_by_slug(session, slug)
    finally:
        session.close()
    if page is None or not page.is_active:
        raise HTTPException(status_code=404, detail="Landing page not found")
    return to_read_model(page, active_only=True)


@router.get("/{page_id}", response_model=LandingPage)
def read(page_id: int):
    session = get_session()
    try:
        page = session.get(LandingPage, page_id)
    finally:
        session.close()
    if page is None:
        raise HTTPException(status_code=404, detail="Landing page not found")
    return page


@router.put("/{page_id}", response_model=LandingPage)
def replace(page_id: int, data: LandingPageWrite):
    data = _check_payload(data)
    session = get_session()
    try:
        page = session.get(LandingPage, page_id)
        if page is None:
            raise HTTPException(status_code=404, detail="Landing page not found")
        return replace_landing_page(session, page, data)
    except SlugConflictError:
        raise HTTPException(status_code=409, detail=f"Slug already in use: {data.slug}")
    finally:
        session.close()


@router.delete("/{page_id}", status_code=204)
def delete(page_id: int):
    session = get_session()
    try:
        page = session.get(LandingPage, page_id)
        if page is None:
            raise HTTPException(status_code=404, detail="Landing page not found")
        slug = page.slug
        session.delete(page)
        session.commit()
        logger.info("Deleted landing page id=%s slug=%s", page_id, slug)
    finally:
        session.close()
