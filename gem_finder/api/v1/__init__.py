from fastapi import APIRouter

from gem_finder.api.v1.routers.auth_router import auth_router
from gem_finder.api.v1.routers.place_router import place_router
from gem_finder.api.v1.routers.profile_router import profile_router

api_router = APIRouter()

api_router.include_router(auth_router)
api_router.include_router(profile_router)
api_router.include_router(place_router)
