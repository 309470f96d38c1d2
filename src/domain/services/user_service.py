"""User service: mirrors identity-provider users into the local store."""

from collections.abc import Callable
from uuid import UUID

import structlog

from core.exceptions import AuthenticationError, ConflictError, ErrorCode
from domain.entities.user import User
from domain.repositories.unit_of_work import IUnitOfWork
from domain.services.mutation import MutationCoordinator

logger = structlog.get_logger()


class UserService:
    """Service layer for User records.

    Users are owned by the identity provider. The first authenticated
    request of a user creates the local row that memberships, tasks and
    comments reference.
    """

    def __init__(
        self,
        uow_factory: Callable[[], IUnitOfWork],
        coordinator: MutationCoordinator | None = None,
    ) -> None:
        self._uow_factory = uow_factory
        self._coordinator = coordinator or MutationCoordinator()

    async def sync(self, user_id: UUID, email: str, display_name: str | None = None) -> User:
        """Return the local user for a verified identity, creating it if missing.

        Raises:
            AuthenticationError: The email already belongs to another local user.
        """
        async with self._uow_factory() as uow:
            existing = await uow.users.get(user_id)
            if existing:
                return existing

            user = User(id=user_id, email=email.lower(), display_name=display_name)

            async def create(uow: IUnitOfWork) -> User:
                return await uow.users.create(user)

            try:
                created = await self._coordinator.execute(uow, create, operation="user.sync")
            except ConflictError:
                return await self._resolve_sync_conflict(user_id)
            logger.info("user_synced", user_id=str(user_id))
            return created

    async def _resolve_sync_conflict(self, user_id: UUID) -> User:
        # A concurrent first request may have inserted the same id meanwhile.
        async with self._uow_factory() as uow:
            winner = await uow.users.get(user_id)
        if winner:
            logger.debug("user_sync_raced", user_id=str(user_id))
            return winner

        logger.warning("user_identity_conflict", user_id=str(user_id))
        raise AuthenticationError(
            message="Email is already linked to another account",
            error_code=ErrorCode.IDENTITY_CONFLICT,
        )

    async def get_many(self, user_ids: list[UUID]) -> dict[UUID, User]:
        async with self._uow_factory() as uow:
            users = await uow.users.get_many(list(dict.fromkeys(user_ids)))
            return {user.id: user for user in users}
