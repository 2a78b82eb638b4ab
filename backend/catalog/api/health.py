from catalog.db import SessionLocal, engine
from catalog.models.discount import NO_DISCOUNT
from catalog.repositories.reference_repo import ReferenceRepository
from fastapi import APIRouter
from sqlalchemy import text

router = APIRouter()


@router.get("/health", tags=["health"])
def health():
    db_ok = False
    discounts_ok = False
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
            db_ok = True
    except Exception:
        db_ok = False
    db = SessionLocal()
    try:
        # the no-discount row must always be resolvable
        discounts_ok = ReferenceRepository(db).get_discount(NO_DISCOUNT) is not None
    except Exception:
        discounts_ok = False
    finally:
        db.close()

    return {
        "status": "ok" if db_ok and discounts_ok else "degraded",
        "db": db_ok,
        "discounts": discounts_ok,
    }
