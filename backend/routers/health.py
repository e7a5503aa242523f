"""Liveness endpoint."""

import time
from typing import Callable

from fastapi import APIRouter

from backend.connection_manager import ConnectionManager
from backend.models import HealthData
from backend.world_state import WorldState


def setup_router(
    world_state: WorldState,
    connections: ConnectionManager,
    start_time: float,
    clock: Callable[[], float] = time.time,
) -> APIRouter:
    router = APIRouter(tags=["health"])

    @router.get("/health", response_model=HealthData)
    async def health() -> HealthData:
        return HealthData(
            status="ok",
            actors=world_state.engine.actor_count,
            drawings=len(world_state.registry),
            clients=connections.client_count,
            tick_count=world_state.engine.tick_count,
            uptime_seconds=clock() - start_time,
        )

    return router
