from datetime import datetime, timezone
from enum import Enum
from typing import List, Optional
from pydantic import BaseModel
from sqlmodel import SQLModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SectionType(str, Enum):
    TEXT = "text"
    IMAGE = "image"
    HERO = "hero"
    FEATURES = "features"
    TESTIMONIALS = "testimonials"
    CTA = "cta"


class LandingPageSection(BaseModel):
    id: str
    type: SectionType
    title: str = ""
    content: str = ""
    image_url: Optional[str] = None
    order: int = 0
    is_active: bool = True


class LandingPage(SQLModel, table=True):
    __tablename__ = "landing_page"

    id: Optional[int] = Field(default=None, primary_key=True)
    slug: str = Field(index=True, unique=True)
    title: str
    headline: str = ""
    subheadline: str = ""
    cta_text: str = ""
    header_code: Optional[str] = None
    is_active: bool = True
    # JSON-encoded list of sections, as sent on the wire
    sections: str = "[]"
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)


class LandingPageWrite(SQLModel):
    title: str
    slug: str
    headline: str = ""
    subheadline: str = ""
    cta_text: str = ""
    header_code: Optional[str] = None
    is_active: bool = True
    sections: str = "[]"


class LandingPageRead(BaseModel):
    id: Optional[int] = None
    slug: str
    title: str
    headline: str = ""
    subheadline: str = ""
    cta_text: str = ""
    header_code: Optional[str] = None
    is_active: bool = True
    sections: List[LandingPageSection] = []
