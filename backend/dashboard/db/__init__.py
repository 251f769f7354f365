import importlib

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from dashboard.config import settings
from dashboard.utils.log import get_logger

log = get_logger("db")

DATABASE_URL = settings.DATABASE_URL
engine = create_engine(DATABASE_URL, future=True, echo=False)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


if engine.dialect.name == "sqlite":
    # sqlite leaves foreign keys unchecked unless asked per connection
    @event.listens_for(engine, "connect")
    def _enable_sqlite_foreign_keys(dbapi_conn, _record):
        cur = dbapi_conn.cursor()
        cur.execute("PRAGMA foreign_keys = ON")
        cur.close()


# modules whose tables must be registered on Base.metadata before create_all
MODEL_MODULES = [
    "dashboard.models.customer",
    "dashboard.models.invoice",
]


def init_db(reset: bool = False):
    """
    Initialize DB schema.

    Behavior:
      - If `reset` is true (or RESET_DB is set), drop & recreate tables.
      - Otherwise, leave existing tables in place and only create missing ones.

    All model modules are imported first so metadata is populated.
    """
    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    if reset or settings.RESET_DB:
        log.info("Resetting database (drop & recreate tables)...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database initialized.")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
