import os
import sys
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from catalog.config import settings

DATABASE_URL = settings.DATABASE_URL
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, future=True, echo=False, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()

# List of model modules that must be imported before create_all (add new modules here)
MODEL_MODULES = [
    "catalog.models.discount",
    "catalog.models.category",
    "catalog.models.manufacturer",
    "catalog.models.image",
    "catalog.models.product",
    "catalog.models.rating",
    "catalog.models.supplier",
]


def _running_pytest() -> bool:
    if any("pytest" in os.path.basename(a).lower() for a in sys.argv):
        return True
    return any(k.upper().startswith("PYTEST") for k in os.environ.keys())


def init_db(reset: bool = False):
    """
    Initialize DB schema and the discount reference rows.

    Behavior:
      - If reset is True or RESET_DB env var is set to 1/true/yes, drop & recreate tables.
      - If we detect pytest running, drop & recreate tables so tests run against a clean DB.
      - Otherwise, leave existing tables in place.

    Discount rows "0" .. MAX_DISCOUNT are created if missing. "0" is the
    no-discount sentinel and must always exist.
    """
    import importlib
    from catalog.utils.logs import get_logger

    log = get_logger("catalog.db")

    for mod in MODEL_MODULES:
        importlib.import_module(mod)

    env_reset = os.environ.get("RESET_DB", "false").lower() in ("1", "true", "yes")
    if reset or env_reset or _running_pytest():
        log.info("Resetting database (reset requested or pytest detected)...")
        Base.metadata.drop_all(bind=engine)

    Base.metadata.create_all(bind=engine)
    log.info("Database tables created.")

    from catalog.models.discount import Discount

    s = SessionLocal()
    try:
        existing = {d.value for d in s.query(Discount).all()}
        created = 0
        for pct in range(0, settings.MAX_DISCOUNT + 1):
            if str(pct) not in existing:
                s.add(Discount(value=str(pct)))
                created += 1
        if created:
            s.commit()
            log.info(f"Seeded {created} discount rows.")
    except Exception:
        s.rollback()
        raise
    finally:
        s.close()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
