"""
Zona Flash API: nearby map search, hunt submissions and hunter wallets.

Run with: uvicorn zonaflash.main:app
"""
import logging
import sys
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI

# Load environment variables from .env before settings are read
load_dotenv()

from .core.config import settings  # noqa: E402
from .core.env import is_local_env, get_env_name  # noqa: E402
from .cors_config import configure_cors  # noqa: E402
from .exception_handlers import register_exception_handlers  # noqa: E402
from .middleware.logging import LoggingMiddleware  # noqa: E402
from .middleware.request_id import RequestIDMiddleware  # noqa: E402
from .routers import hunter, offers, wallet  # noqa: E402

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logger = logging.getLogger("zonaflash")


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Zona Flash backend (env={get_env_name()})")
    if settings.RUN_MIGRATIONS_ON_STARTUP:
        from .run_migrations import run_migrations
        run_migrations()
    yield
    logger.info("Zona Flash backend stopped")


app = FastAPI(title="Zona Flash API", lifespan=lifespan)

register_exception_handlers(app)

# Added last runs first: request id is set before the access log line
app.add_middleware(LoggingMiddleware)
app.add_middleware(RequestIDMiddleware)
configure_cors(app, settings, is_local_env())

app.include_router(offers.router)
app.include_router(hunter.router)
app.include_router(wallet.router)


@app.get("/")
async def root():
    return {"status": "online"}


@app.get("/healthz")
async def healthz():
    return {"status": "online"}
