import logging
from typing import List

from fastapi import APIRouter, HTTPException

from brickworld.scene import describe_brick, summarize_world

from backend.models import BrickModel, BrickDetail, WorldSummary
from backend.world_store import world_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/world", tags=["world"])


@router.get("", response_model=List[BrickModel])
def get_world():
    """Return every brick of the scene in generation order.

    The index of a brick in this list is its identity for hover and
    selection on the client.  Uses ``def`` so the first (generating) call
    runs in the threadpool.
    """
    return [BrickModel(**b.to_dict()) for b in world_store.get()]


@router.get("/summary", response_model=WorldSummary)
def get_summary():
    """Brick counts per kind and the extents of the scene."""
    return WorldSummary(**summarize_world(world_store.get()))


@router.get("/bricks/{index}", response_model=BrickDetail)
def get_brick(index: int):
    """Inspector details for the brick at ``index``."""
    bricks = world_store.get()
    if not 0 <= index < len(bricks):
        raise HTTPException(status_code=404, detail="Brick not found")

    brick = bricks[index]
    return BrickDetail(index=index, inspector=describe_brick(brick), **brick.to_dict())
