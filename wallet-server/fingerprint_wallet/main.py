import asyncio
import logging
from contextlib import asynccontextmanager, suppress
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from fingerprint_wallet import __version__
from fingerprint_wallet.api import create_api_router
from fingerprint_wallet.core.config import get_settings
from fingerprint_wallet.core.container import get_container
from fingerprint_wallet.core.logging_config import setup_logging
from fingerprint_wallet.infrastructure.database import dispose_engine, init_db
from fingerprint_wallet.interfaces.http.errors import register_error_handlers
from fingerprint_wallet.modules.ceremony.challenges import ChallengeStore

logger = logging.getLogger(__name__)

settings = get_settings()
BASE_DIR = Path(__file__).resolve().parent
PROJECT_ROOT = BASE_DIR.parent


def _resolve_path(path: Path) -> Path:
    if path.is_absolute():
        return path
    return (PROJECT_ROOT / path).resolve()


STATIC_DIR = _resolve_path(settings.static_dir)


async def _sweep_challenges(store: ChallengeStore, interval: float) -> None:
    while True:
        await asyncio.sleep(interval)
        removed = await store.purge_expired()
        if removed:
            logger.info("Dropped %d abandoned challenge(s)", removed)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging(settings.log_level, settings.log_format)
    await init_db()
    container = get_container()

    sweeper = None
    ttl = container.challenges.ttl_seconds
    if ttl > 0:
        sweeper = asyncio.create_task(_sweep_challenges(container.challenges, max(ttl / 2, 1)))
    logger.info("%s %s started", settings.project_name, __version__)
    try:
        yield
    finally:
        if sweeper is not None:
            sweeper.cancel()
            with suppress(asyncio.CancelledError):
                await sweeper
        await dispose_engine()
        logger.info("%s shutting down", settings.project_name)


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.project_name,
        description="Passkey (WebAuthn platform authenticator) login with a demo wallet ledger",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(create_api_router(settings.api_prefix))

    # after the API so /api/* takes precedence; html=True serves index.html
    if STATIC_DIR.exists():
        app.mount("/", StaticFiles(directory=str(STATIC_DIR), html=True), name="frontend")

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run(
        "fingerprint_wallet.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )
