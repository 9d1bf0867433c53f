from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base

# Base class for models
Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    if not database_url:
        raise RuntimeError("DATABASE_URL must be set in environment")

    connect_args = {}
    if database_url.startswith("sqlite"):
        # FastAPI serves sync routes from a thread pool
        connect_args["check_same_thread"] = False

    return create_engine(
        database_url,
        pool_pre_ping=True,
        future=True,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )


def init_db(engine: Engine) -> None:
    # registers StoredRecord on Base.metadata
    from agriswarm.models import record  # noqa: F401

    Base.metadata.create_all(bind=engine)
