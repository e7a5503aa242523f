"""Application factory and context for the Fish Fight API.

This module provides a factory for creating the FastAPI app without
import-time side effects. All runtime state lives in an AppContext.

Design Decision:
----------------
The drawing registry, the simulation engine, the client connections, the
broadcaster and the simulation runner are held by one AppContext dataclass
instead of module-level globals. This:
1. Gives each test a fresh world
2. Makes every dependency explicit and injectable
3. Keeps the one owned world state shared by routers and the runner

Usage:
------
    # For production (settings from environment)
    app = create_app()

    # For testing (no background ticking, deterministic seed)
    app = create_app(context=AppContext(run_simulation=False, seed=7))
"""

import logging
import os
import socket
import time
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.broadcast import Broadcaster
from backend.connection_manager import ConnectionManager
from backend.drawing_registry import DrawingRegistry
from backend.logging_config import configure_logging
from backend.simulation_runner import SimulationRunner
from backend.world_state import WorldState
from core.config.server import (
    DEFAULT_API_PORT,
    DEFAULT_DUPLICATE_ID_POLICY,
    DEFAULT_MAX_BODY_BYTES,
)
from core.config.simulation_config import SimulationConfig
from core.exceptions import ConfigurationError
from core.simulation import SimulationEngine


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from e


def _env_seed() -> Optional[int]:
    if not os.getenv("FISHFIGHT_SEED"):
        return None
    return _env_int("FISHFIGHT_SEED", 0)


@dataclass
class AppContext:
    """Runtime context holding all application state.

    Services are wired in ``__post_init__`` from the configuration fields, so
    overriding a field at construction changes the services built from it.
    """

    # Configuration
    simulation_config: SimulationConfig = field(default_factory=SimulationConfig.from_env)
    seed: Optional[int] = field(default_factory=_env_seed)
    api_port: int = field(default_factory=lambda: _env_int("PORT", DEFAULT_API_PORT))
    duplicate_policy: str = field(
        default_factory=lambda: os.getenv("FISHFIGHT_DUPLICATE_IDS", DEFAULT_DUPLICATE_ID_POLICY)
    )
    max_body_bytes: int = field(
        default_factory=lambda: _env_int("FISHFIGHT_MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)
    )
    allowed_origins: List[str] = field(
        default_factory=lambda: os.getenv("FISHFIGHT_ALLOWED_ORIGINS", "*").split(",")
    )
    run_simulation: bool = True

    # Services (built in __post_init__)
    registry: DrawingRegistry = field(init=False)
    engine: SimulationEngine = field(init=False)
    world_state: WorldState = field(init=False)
    connection_manager: ConnectionManager = field(init=False)
    broadcaster: Broadcaster = field(init=False)
    runner: SimulationRunner = field(init=False)

    # Timing
    server_start_time: float = field(default_factory=time.time)

    # Logging
    logger: logging.Logger = field(default_factory=lambda: logging.getLogger("backend"))

    def __post_init__(self) -> None:
        self.registry = DrawingRegistry(duplicate_policy=self.duplicate_policy)
        self.engine = SimulationEngine(self.simulation_config, seed=self.seed)
        self.world_state = WorldState(self.registry, self.engine)
        self.connection_manager = ConnectionManager()
        self.broadcaster = Broadcaster(
            self.world_state,
            self.connection_manager,
            broadcast_interval=self.simulation_config.broadcast_interval,
        )
        self.runner = SimulationRunner(self.world_state, self.broadcaster, self.simulation_config)


def get_network_addresses() -> List[str]:
    """Best-effort list of this machine's non-loopback IPv4 addresses."""
    addresses = set()
    try:
        for info in socket.getaddrinfo(socket.gethostname(), None, socket.AF_INET):
            address = info[4][0]
            if not address.startswith("127."):
                addresses.add(address)
    except OSError:
        pass
    try:
        s = socket.socket(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            s.connect(("8.8.8.8", 80))
            addresses.add(s.getsockname()[0])
        finally:
            s.close()
    except OSError:
        pass
    return sorted(addresses)


def create_app(*, context: Optional[AppContext] = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        context: Pre-configured AppContext (for testing). If None, one is
            built from the environment.

    Returns:
        Configured FastAPI application with context attached as app.state.context
    """
    logger = configure_logging(extra_loggers=("backend", "core"))

    if context is None:
        context = AppContext()
    context.logger = logger

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup and shutdown."""
        ctx = app.state.context
        try:
            ctx.world_state.spawn_missing()
            if ctx.run_simulation:
                ctx.runner.start()
            ctx.logger.info(
                "LIFESPAN: Startup complete (world %gx%g, %d drawings)",
                ctx.simulation_config.world_width,
                ctx.simulation_config.world_height,
                len(ctx.registry),
            )
            yield
            ctx.logger.info("LIFESPAN: Received shutdown signal")
        except Exception as e:
            ctx.logger.error(f"Exception in lifespan startup: {e}", exc_info=True)
            raise
        finally:
            await ctx.runner.stop()
            await ctx.connection_manager.close()

    app = FastAPI(title="Fish Fight Simulation API", lifespan=lifespan)
    app.state.context = context

    app.add_middleware(
        CORSMiddleware,
        allow_origins=context.allowed_origins,
        allow_credentials="*" not in context.allowed_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    _setup_routers(app, context)
    return app


def _setup_routers(app: FastAPI, ctx: AppContext) -> None:
    """Setup and include all API routers."""
    from backend.routers import drawings, health, websocket

    app.include_router(
        drawings.setup_router(ctx.world_state, ctx.broadcaster, ctx.max_body_bytes)
    )
    app.include_router(websocket.setup_router(ctx.connection_manager, ctx.broadcaster))
    app.include_router(
        health.setup_router(ctx.world_state, ctx.connection_manager, ctx.server_start_time)
    )
    ctx.logger.info("All API routers configured successfully")
