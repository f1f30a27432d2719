"""Version 1 API router: decks and layout catalog."""

from fastapi import APIRouter

from slideai.api.v1.routers import decks, layouts

router = APIRouter()
router.include_router(decks.router)
router.include_router(layouts.router)
