from fastapi import APIRouter, Depends

from gem_finder.api.v1.dependencies import get_current_user, get_uow
from gem_finder.domain.unit_of_work import UnitOfWork
from gem_finder.models.user_model import User
from gem_finder.schemas.profile_schema import ProfileResponse
from gem_finder.services.profile_service import ProfileService
from gem_finder.utils.logger import get_logger


logger = get_logger("profile_router")


class ProfileRouter:
    def __init__(self):
        self.router = APIRouter(prefix="/profile", tags=["Profile"])
        self.register_routes()

    def register_routes(self):
        self.router.add_api_route(
            "/my-profile",
            self.get_my_profile,
            methods=["GET"],
            response_model=ProfileResponse,
        )

    async def get_my_profile(
        self,
        uow: UnitOfWork = Depends(get_uow),
        current_user: User = Depends(get_current_user),
    ) -> ProfileResponse:
        """Identity, posting stats and the caller's own places."""
        logger.info(f"Getting profile for user {current_user.id}")
        return ProfileService(uow).get_profile(current_user)


profile_router = ProfileRouter().router
