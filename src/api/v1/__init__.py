"""API v1 router configuration."""

from fastapi import APIRouter

from api.v1.routes.feed import router as feed_router
from api.v1.routes.matches import router as matches_router
from api.v1.routes.messages import router as messages_router
from api.v1.routes.profiles import router as profiles_router
from api.v1.routes.swipes import router as swipes_router

router = APIRouter()
router.include_router(profiles_router)
router.include_router(feed_router)
router.include_router(swipes_router)
router.include_router(matches_router)
router.include_router(messages_router)
