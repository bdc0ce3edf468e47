"""
RPSLS Game Service - FastAPI Application
Rock-Paper-Scissors-Lizard-Spock against a computer whose moves come from an
external random-number endpoint.
"""
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from prometheus_fastapi_instrumentator import Instrumentator  # type: ignore[import-not-found]

from rpsls import __version__
from rpsls.config import get_log_level, get_port, get_random_number_api_url
from rpsls.metrics import initialize_all_metrics
from rpsls.random_source import get_random_source, reset_random_source
from rpsls.routes.game import router as game_router
from rpsls.routes.health import router as health_router

# ---- Logging
logging.basicConfig(
    level=get_log_level(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# ---- FastAPI App Initialization
app = FastAPI(
    title="RPSLS Game Service",
    description="Rock-Paper-Scissors-Lizard-Spock with a resilient external random source",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc"
)

# ---- Middleware Configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# ---- Prometheus Instrumentation
Instrumentator(
    excluded_handlers=["/metrics"],
).instrument(app).expose(app, include_in_schema=False, should_gzip=True)

# ---- Router Registration
app.include_router(health_router, tags=["Health"])

# Unversioned and v1 routes share the same handlers
app.include_router(game_router, prefix="/game", tags=["Game"])
app.include_router(game_router, prefix="/api/v1/game", tags=["Game v1"])


# ---- Startup / Shutdown
@app.on_event("startup")
async def startup_event():
    """Initialize metrics so every label combination exports"""
    try:
        initialize_all_metrics()
    except Exception as e:
        # Don't fail startup if metrics init fails
        logger.warning("Failed to initialize metrics: %s", e)
    # built before the first request arrives
    get_random_source()
    logger.info("Random numbers will be fetched from %s", get_random_number_api_url())


@app.on_event("shutdown")
async def shutdown_event():
    try:
        reset_random_source()
    except Exception as exc:  # noqa: BLE001
        logger.warning("Failed to close random source cleanly: %s", exc)


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=get_port())
