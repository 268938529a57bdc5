from fastapi import APIRouter
from talentmatch.api import matches, search

api_router = APIRouter()
api_router.include_router(matches.router, prefix="/match-jobs", tags=["matching"])
api_router.include_router(search.router, prefix="/search-candidates", tags=["search"])
