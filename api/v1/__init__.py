# api/v1/__init__.py
from fastapi import APIRouter
from .teams import router as teams_router

router = APIRouter(prefix="/v1")
router.include_router(teams_router)
