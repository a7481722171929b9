"""Punto de entrada FastAPI: middleware, rutas, manejo de errores y tareas de fondo."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import Base, SessionLocal, engine
import app.models  # noqa: F401 - registra los modelos en metadata
from app.routers import audit_logs, auth, documents, incidents, notifications, versions
from app.services.expiration_scheduler import ExpirationScheduler
from app.utils.schema_sync import ensure_schema

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    added = ensure_schema(engine, Base.metadata)
    if added:
        logger.info("[schema] Agregados: %s", ", ".join(added))

    scheduler = None
    if settings.EXPIRATION_CHECK_ENABLED:
        scheduler = ExpirationScheduler(
            SessionLocal,
            interval_seconds=settings.EXPIRATION_CHECK_INTERVAL_HOURS * 3600,
        )
        scheduler.start()
    app.state.expiration_scheduler = scheduler
    yield

    if scheduler is not None:
        await scheduler.stop()


app = FastAPI(
    title="Gestión documental de centros",
    description="Versionado, aprobación y vencimientos de documentos por centro y departamento",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(documents.router)
app.include_router(versions.router)
app.include_router(incidents.router)
app.include_router(notifications.router)
app.include_router(audit_logs.router)


@app.exception_handler(StarletteHTTPException)
def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg"), "type": err.get("type")}
        for err in exc.errors()
    ]
    return JSONResponse(status_code=400, content={"error": errors})


@app.exception_handler(SQLAlchemyError)
def store_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("[store] Falló %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Error de almacenamiento"})


@app.get("/api/health")
def health_check():
    return {"status": "ok", "service": "gestion-documental-centros"}
