from __future__ import annotations

from users_api.domain.user import UserEntity
from users_api.entrypoints.schemas.user import CreateUserRequest, UpsertUserRequest, UserDto


def to_dto(entity: UserEntity) -> UserDto:
    return UserDto(
        id=entity.id,
        login=entity.login,
        first_name=entity.first_name,
        last_name=entity.last_name,
        full_name=f"{entity.last_name or ''} {entity.first_name or ''}",
    )


def from_create_request(request: CreateUserRequest) -> UserEntity:
    return UserEntity(
        login=request.login,
        first_name=request.first_name,
        last_name=request.last_name,
    )


def apply_upsert_request(request: UpsertUserRequest, entity: UserEntity) -> UserEntity:
    entity.login = request.login
    entity.first_name = request.first_name
    entity.last_name = request.last_name
    return entity


def to_upsert_request(entity: UserEntity) -> UpsertUserRequest:
    return UpsertUserRequest(
        login=entity.login,
        first_name=entity.first_name,
        last_name=entity.last_name,
    )
