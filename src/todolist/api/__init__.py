"""API route aggregation.

All routers registered here get mounted in main.py.

Learn: Health and auth (register/login) are open. List and task routes
declare get_current_user_id per handler, because the handlers need the
resolved user id, not just the auth gate.
"""

from fastapi import APIRouter

from todolist.api.auth import router as auth_router
from todolist.api.health import router as health_router
from todolist.api.lists import router as lists_router
from todolist.api.tasks import router as tasks_router

api_router = APIRouter()

api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(lists_router, tags=["lists"])
api_router.include_router(tasks_router, tags=["tasks"])
