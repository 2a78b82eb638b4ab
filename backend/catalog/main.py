from contextlib import asynccontextmanager

from apscheduler.schedulers.background import BackgroundScheduler
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalog.api.health import router as health_router
from catalog.api.routes_catalogue import router as catalogue_router
from catalog.config import settings
from catalog.db import SessionLocal, init_db
from catalog.services.rating_service import RatingService
from catalog.utils.logs import get_logger

log = get_logger("catalog.app")


def resync_ratings_job():
    db = SessionLocal()
    try:
        changed = RatingService(db).resync_all()
        if changed:
            log.info(f"average ratings resynced for {changed} products")
    except Exception:
        log.exception("average rating resync failed")
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # startup; RESET_DB=1 drops and recreates the schema
    init_db()

    # the rating filter reads the stored average, keep it fresh for products nobody viewed
    scheduler = BackgroundScheduler()
    if settings.RATING_RESYNC_SECONDS > 0:
        scheduler.add_job(
            resync_ratings_job,
            "interval",
            seconds=settings.RATING_RESYNC_SECONDS,
            id="resync_ratings",
        )
    scheduler.start()

    try:
        yield
    finally:
        scheduler.shutdown(wait=False)


app = FastAPI(title="Catalog Pricing - Backend", version="0.1.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.FRONTEND_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health_router, prefix="/api", tags=["health"])

app.include_router(catalogue_router, prefix="/api/products", tags=["catalogue"])
