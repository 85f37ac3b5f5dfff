"""API v1 router aggregator."""

from fastapi import APIRouter

from forum.api.v1.endpoints import admin, auth, categories, comments, posts, search, users

api_router = APIRouter(prefix="/api/v1")

api_router.include_router(auth.router)
api_router.include_router(categories.router)
api_router.include_router(posts.router)
api_router.include_router(comments.router)
api_router.include_router(search.router)
api_router.include_router(users.router)
api_router.include_router(admin.router)

__all__ = ["api_router"]
