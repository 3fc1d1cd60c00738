import logging
import os

from fastapi import FastAPI
from sqlmodel import SQLModel
from fastapi.middleware.cors import CORSMiddleware

from app.api import dashboard, geo, landing_pages, orders, storefront
from app.db.session import get_engine, get_session
from app.services.storage import seed_defaults

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

ALLOWED_ORIGINS = [
    o.strip() for o in os.getenv("ALLOWED_ORIGINS", "http://localhost:3000,http://localhost:5173").split(",") if o.strip()
]

app = FastAPI(title="Money Saving Box Storefront")

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(storefront.router, prefix="/api", tags=["storefront"])
app.include_router(geo.router, prefix="/api/geo", tags=["geo"])
app.include_router(orders.router, prefix="/api/orders", tags=["orders"])
app.include_router(landing_pages.router, prefix="/api/landing-pages", tags=["landing-pages"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])


@app.on_event("startup")
def on_startup():
    engine = get_engine()
    SQLModel.metadata.create_all(engine)
    session = get_session()
    try:
        seed_defaults(session)
    finally:
        session.close()
    logger.info("Storefront started origins=%s", ALLOWED_ORIGINS)


@app.get("/")
async def root():
    return {"status": "ok", "service": "money-saving-box-storefront"}
