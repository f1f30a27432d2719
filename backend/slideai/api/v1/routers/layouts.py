from fastapi import APIRouter

from slideai.controllers import deck_controller
from slideai.schemas.generation import LayoutInfo

router = APIRouter(prefix="/layouts", tags=["layouts"])


@router.get("/", response_model=list[LayoutInfo])
async def list_layouts():
    """All layout names with their item caps and the payload fields they read."""
    return deck_controller.list_layouts()
