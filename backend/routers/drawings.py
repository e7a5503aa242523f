"""Drawing submission and listing endpoints."""

import logging

import orjson
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from backend.broadcast import Broadcaster
from backend.models import SubmitResponse
from backend.world_state import WorldState
from core.exceptions import DuplicateDrawing, InvalidPayload

logger = logging.getLogger(__name__)


def setup_router(
    world_state: WorldState,
    broadcaster: Broadcaster,
    max_body_bytes: int,
) -> APIRouter:
    """Create the drawings router.

    Endpoints:
        GET /api/drawings - All stored drawings in submission order
        POST /api/drawings - Submit a drawing and spawn its actor
        GET /api/state - Current world snapshot
    """
    router = APIRouter(prefix="/api", tags=["drawings"])

    @router.get("/drawings")
    async def list_drawings():
        return JSONResponse(world_state.registry.to_list())

    @router.post("/drawings")
    async def submit_drawing(request: Request):
        body = await request.body()
        if len(body) > max_body_bytes:
            return JSONResponse(
                {"error": f"Payload too large: limit is {max_body_bytes} bytes"},
                status_code=413,
            )

        try:
            payload = orjson.loads(body) if body else None
        except orjson.JSONDecodeError:
            return JSONResponse({"error": "Invalid JSON body"}, status_code=400)

        try:
            drawing, _ = world_state.submit_drawing(payload)
        except DuplicateDrawing as e:
            logger.info("Rejected duplicate drawing: %s", e)
            return JSONResponse({"error": str(e)}, status_code=409)
        except InvalidPayload as e:
            logger.info("Rejected drawing submission: %s", e)
            return JSONResponse({"error": str(e)}, status_code=400)

        broadcaster.publish_new_drawing(drawing)
        return JSONResponse(SubmitResponse(id=drawing.id).model_dump())

    @router.get("/state")
    async def get_state():
        return JSONResponse(world_state.snapshot().to_dict())

    return router
