from sqlmodel import create_engine, Session
import os

DATABASE_URL = os.getenv("DATABASE_URL", "postgresql+psycopg2://postgres:postgres@db:5432/storefront")
SQL_ECHO = os.getenv("SQL_ECHO", "false").lower() in ("1", "true", "yes")

_engine = None


def get_engine():
    global _engine
    if _engine is None:
        connect_args = {}
        if DATABASE_URL.startswith("sqlite"):
            # orders are saved from worker threads (asyncio.to_thread)
            connect_args["check_same_thread"] = False
        _engine = create_engine(DATABASE_URL, echo=SQL_ECHO, connect_args=connect_args)
    return _engine


def get_session() -> Session:
    engine = get_engine()
    return Session(engine)
