from fastapi import APIRouter
from .endpoints import auth, tasks, quotes

router = APIRouter()

# Include all API endpoints
router.include_router(auth.router, prefix="/auth", tags=["authentication"])
router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
router.include_router(quotes.router, prefix="/quotes", tags=["quotes"])
