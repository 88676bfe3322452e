import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import models  # noqa: F401 - registers tables on Base.metadata
from .config import ALLOWED_ORIGINS
from .database import Base, engine, session_scope
from .domain.clients.router import router as clients_router
from .domain.collaborators.router import router as collaborators_router
from .domain.errors import SettlementError
from .domain.lifecycle.router import router as services_router
from .domain.payments.router import router as payments_router
from .domain.payouts.repository import SettingsRepository
from .domain.payouts.router import router as settings_router
from .domain.settlement.router import router as settlement_router
from .domain.transactions.router import router as transactions_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("CleanBook API starting...")
    try:
        Base.metadata.create_all(bind=engine, checkfirst=True)
    except Exception as e:
        # Another worker may have created the tables between check and create
        if "already exists" not in str(e):
            logger.error(f"❌ Could not create database tables: {e}")
            raise
    logger.info("✅ Database schema ready")

    with session_scope() as db:
        SettingsRepository.ensure_defaults(db)
    logger.info("✅ Payout rate table ready")

    yield
    logger.info("CleanBook API stopped")


app = FastAPI(title="CleanBook API", version="1.0.0", lifespan=lifespan)


@app.exception_handler(SettlementError)
async def settlement_error_handler(request: Request, exc: SettlementError):
    """Domain errors that reach the app keep the {"code", "message"} detail shape"""
    logger.warning(f"⚠️ {exc.code} on {request.method} {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": {"code": exc.code, "message": exc.message}},
    )


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(f"❌ {request.method} {request.url.path} failed: {e}")
        raise
    elapsed_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} → {response.status_code} ({elapsed_ms:.0f}ms)")
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(clients_router)
app.include_router(collaborators_router)
app.include_router(services_router)
app.include_router(payments_router)
app.include_router(settlement_router)
app.include_router(settings_router)
app.include_router(transactions_router)


@app.get("/")
def root():
    return {"message": "CleanBook API is running"}


@app.get("/health")
def health():
    return {"status": "healthy"}
