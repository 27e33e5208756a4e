"""Main API router aggregation."""

from fastapi import APIRouter

from wordmaster.api.routes import feed, health, reviews, scheduler, words

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(feed.router, tags=["feed"])
api_router.include_router(reviews.router, tags=["reviews"])
api_router.include_router(words.router, tags=["words"])
api_router.include_router(scheduler.router, tags=["scheduler"])
