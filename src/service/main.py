"""ENTITY-EMULATOR -- simulated air, maritime and land emitters over HTTP.

Main FastAPI application.
"""

import time
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from emulator import __version__
from emulator.simulation import EmulatorEngine, load_scenarios
from service.config import Settings, settings
from service.routers import entities_router, scenarios_router, stats_router


def _load_extra_scenarios(cfg: Settings) -> dict:
    """Read cfg.scenarios_file.  A bad file is logged and ignored."""
    if not cfg.scenarios_file:
        return {}
    path = Path(cfg.scenarios_file)
    if not path.exists():
        logger.warning(f"Scenario file not found: {path}")
        return {}
    try:
        extra = load_scenarios(path)
    except (OSError, ValueError, KeyError, TypeError) as e:
        logger.warning(f"Failed to load scenarios from {path}: {e}")
        return {}
    logger.info(f"Loaded {len(extra)} scenarios from {path}")
    return extra


def _create_engine(cfg: Settings) -> EmulatorEngine:
    """Create the engine and build the initial population if enabled."""
    engine = EmulatorEngine(
        interval_ms=cfg.update_interval_ms,
        scenarios=_load_extra_scenarios(cfg),
        seed=cfg.random_seed,
    )
    if cfg.simulation_enabled:
        engine.build_scenario(cfg.scenario)
    else:
        logger.info("Simulation disabled, starting with an empty population")
    return engine


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info("=" * 60)
    logger.info(f"  {settings.app_name} v{__version__} - INITIALIZING")
    logger.info("=" * 60)

    app.state.started_at = time.monotonic()
    engine = _create_engine(settings)
    app.state.engine = engine
    if settings.simulation_enabled:
        engine.start()

    logger.info(f"  {settings.app_name} ONLINE ({engine.entity_count()} entities)")

    yield

    logger.info("Stopping emulator engine...")
    engine.stop()
    logger.info(f"{settings.app_name} shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    description="Geospatially constrained entity emulator",
    version=__version__,
    lifespan=lifespan,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(entities_router)
app.include_router(scenarios_router)
app.include_router(stats_router)


@app.get("/health")
async def health(request: Request):
    """Health check endpoint."""
    engine = getattr(request.app.state, "engine", None)
    started_at = getattr(request.app.state, "started_at", None)
    return {
        "status": "healthy",
        "scenario": engine.scenario_key if engine is not None else None,
        "entity_count": engine.entity_count() if engine is not None else 0,
        "uptime": time.monotonic() - started_at if started_at is not None else 0.0,
    }
