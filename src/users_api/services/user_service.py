from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Tuple
from uuid import UUID

from fastapi import HTTPException, status

from users_api.adapters.base import IUserRepository
from users_api.domain.user import UserEntity
from users_api.entrypoints.links import LinkGenerator
from users_api.entrypoints.schemas.user import (
    CreateUserRequest,
    PaginationMetadata,
    UpsertUserRequest,
    UserDto,
)
from users_api.services import mapping
from users_api.services.config import settings
from users_api.services.pagination import build_metadata, normalize_page_request
from users_api.services.patch import apply_patch
from users_api.services.validation import (
    CREATE_RULES,
    PATCHED_USER_RULES,
    UPSERT_RULES,
    ModelErrors,
    evaluate,
)

logger = logging.getLogger(__name__)

USER_ROUTE = "get_user_by_id"
USERS_ROUTE = "get_users"


def _parse_identifier(raw: str) -> Optional[UUID]:
    try:
        return UUID(str(raw).strip())
    except ValueError:
        return None


class UserService:
    def __init__(self, repository: IUserRepository, links: LinkGenerator) -> None:
        self._repository = repository
        self._links = links

    def get_user(self, raw_user_id: str) -> UserDto:
        user_id = _parse_identifier(raw_user_id)
        if user_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
        user = self._repository.get(user_id)
        if user is None:
            logger.info("user %s not found", user_id)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return mapping.to_dto(user)

    def create_user(self, request: Optional[CreateUserRequest]) -> Tuple[UUID, str]:
        logger.info("start create_user")
        if request is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)

        evaluate(request, CREATE_RULES).raise_if_invalid()

        user = self._repository.add(mapping.from_create_request(request))
        logger.info("finish create_user, id=%s", user.id)
        return user.id, self._user_link(user.id)

    def upsert_user(self, raw_user_id: str, request: Optional[UpsertUserRequest]) -> Tuple[bool, UUID, str]:
        """Replace the user stored under the path identifier, creating it when absent.

        Returns whether a new record was inserted, the identifier, and a link
        to the resource.
        """
        logger.info("start upsert_user")
        user_id = _parse_identifier(raw_user_id)
        if request is None or user_id is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)

        evaluate(request, UPSERT_RULES).raise_if_invalid()

        entity = mapping.apply_upsert_request(request, UserEntity(id=user_id))
        inserted = self._repository.update_or_insert(entity)
        logger.info("finish upsert_user, id=%s, inserted=%s", user_id, inserted)
        return inserted, user_id, self._user_link(user_id)

    def patch_user(self, raw_user_id: str, operations: Optional[Sequence[Any]]) -> None:
        logger.info("start patch_user")
        if operations is None:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST)
        # a malformed identifier cannot address any stored user
        user_id = _parse_identifier(raw_user_id)
        if user_id is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        user = self._repository.get(user_id)
        if user is None:
            logger.info("user %s not found", user_id)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)

        projection = mapping.to_upsert_request(user)
        errors = ModelErrors()
        patched = apply_patch(operations, projection.model_dump(by_alias=True), errors)
        projection = UpsertUserRequest(**patched)
        evaluate(projection, UPSERT_RULES, errors)
        evaluate(projection, PATCHED_USER_RULES, errors)
        if not errors.is_valid:
            logger.info("patch for user %s rejected: %s", user_id, ", ".join(errors.as_dict()))
        errors.raise_if_invalid()

        if not self._repository.update(mapping.apply_upsert_request(projection, user)):
            logger.info("user %s removed before patch was stored", user_id)
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        logger.info("finish patch_user, id=%s", user_id)

    def delete_user(self, raw_user_id: str) -> None:
        logger.info("start delete_user")
        user_id = _parse_identifier(raw_user_id)
        if user_id is None or self._repository.get(user_id) is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        self._repository.delete(user_id)
        logger.info("finish delete_user, id=%s", user_id)

    def list_users(
        self,
        page_number: Optional[int] = None,
        page_size: Optional[int] = None,
    ) -> Tuple[List[UserDto], PaginationMetadata]:
        number, size = normalize_page_request(
            page_number,
            page_size,
            default_size=settings.USERS_API_DEFAULT_PAGE_SIZE,
            max_size=settings.USERS_API_MAX_PAGE_SIZE,
        )
        page = self._repository.fetch_page(page=number, size=size)
        metadata = build_metadata(
            page,
            lambda target: self._links(USERS_ROUTE, query_params={"pageNumber": target, "pageSize": size}),
        )
        return [mapping.to_dto(user) for user in page.items], metadata

    def _user_link(self, user_id: UUID) -> str:
        return self._links(USER_ROUTE, path_params={"user_id": user_id})
