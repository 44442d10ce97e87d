import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from . import errors
from .config import settings
from .database import SessionLocal, engine, get_db
from .middleware.audit import audit_middleware, remember_error
from .models import Base
from .redis_client import redis_client
from .routers import (
    activities,
    bookings,
    catalog,
    closures,
    publication,
    settings as settings_router,
    slots,
    sync,
    working_hours,
)
from .services.schedule.config import ensure_defaults

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Alembic owns the schema in deployments; create_all covers fresh dev databases
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_defaults(db)
        db.commit()
    finally:
        db.close()
    logger.info(f"SportSlot API started (db={engine.url.render_as_string(hide_password=True)})")
    yield


app = FastAPI(title="SportSlot API", lifespan=lifespan)

# ===== Middleware =====
app.middleware("http")(audit_middleware)
if settings.cors_origin_list:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["*"],
        allow_headers=["*"],
    )


# ===== Error rendering =====
@app.exception_handler(errors.SportSlotError)
async def sportslot_error_handler(request: Request, exc: errors.SportSlotError):
    remember_error(request, exc.code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_payload())


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    err = errors.ValidationError(
        "Invalid request",
        details=[
            {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
            for e in exc.errors()
        ],
    )
    remember_error(request, err.code)
    return JSONResponse(status_code=err.status_code, content=err.to_payload())


@app.exception_handler(SQLAlchemyError)
async def sqlalchemy_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Storage error on {request.method} {request.url.path}", exc_info=exc)
    err = errors.PersistenceError("Storage unavailable, please retry")
    remember_error(request, err.code)
    return JSONResponse(status_code=err.status_code, content=err.to_payload())


# ===== Routers =====
app.include_router(activities.router)
app.include_router(settings_router.router)
app.include_router(working_hours.router)
app.include_router(closures.router)
app.include_router(slots.router)
app.include_router(publication.router)
app.include_router(bookings.router)
app.include_router(catalog.router)
app.include_router(sync.router)


@app.get("/health")
def health(db: Session = Depends(get_db)):
    try:
        db.execute(text("SELECT 1"))
        database_ok = True
    except SQLAlchemyError as e:
        logger.error(f"Health check: database unreachable: {e}")
        database_ok = False

    redis_ok = None
    if redis_client is not None:
        try:
            redis_ok = bool(redis_client.ping())
        except Exception as e:
            logger.error(f"Health check: redis unreachable: {e}")
            redis_ok = False

    body = {"database": database_ok, "redis": redis_ok}
    code = status.HTTP_200_OK if database_ok else status.HTTP_503_SERVICE_UNAVAILABLE
    return JSONResponse(status_code=code, content=body)
