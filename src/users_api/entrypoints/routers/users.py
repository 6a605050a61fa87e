from __future__ import annotations

import json
from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends, Query, Request, status
from fastapi.responses import Response

from users_api.adapters.base import IUserRepository
from users_api.adapters.repository import InMemoryUserRepository
from users_api.entrypoints.links import request_link_generator
from users_api.entrypoints.negotiation import render
from users_api.entrypoints.schemas.user import (
    CreateUserRequest,
    UpsertUserRequest,
    UserDto,
)
from users_api.services.pagination import parse_page_value
from users_api.services.user_service import UserService


router = APIRouter(prefix="/users", tags=["users"])

_repository = InMemoryUserRepository()


def get_repository() -> IUserRepository:
    return _repository


def get_service(request: Request, repository: IUserRepository = Depends(get_repository)) -> UserService:
    return UserService(repository, request_link_generator(request))


@router.api_route("/{user_id}", methods=["GET", "HEAD"], name="get_user_by_id", response_model=UserDto)
async def get_user_by_id(
    user_id: str,
    request: Request,
    service: UserService = Depends(get_service),
) -> Response:
    user = service.get_user(user_id)
    if request.method == "HEAD":
        return Response(
            status_code=status.HTTP_200_OK,
            headers={"Content-Type": "application/json; charset=utf-8"},
        )
    return render(request, user.model_dump(mode="json", by_alias=True), root="UserDto")


@router.post("", name="create_user", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: Request,
    payload: Optional[CreateUserRequest] = Body(default=None),
    service: UserService = Depends(get_service),
) -> Response:
    user_id, location = service.create_user(payload)
    return render(
        request,
        str(user_id),
        root="guid",
        status_code=status.HTTP_201_CREATED,
        headers={"Location": location},
    )


@router.put("/{user_id}", name="upsert_user")
async def upsert_user(
    user_id: str,
    request: Request,
    payload: Optional[UpsertUserRequest] = Body(default=None),
    service: UserService = Depends(get_service),
) -> Response:
    inserted, identifier, location = service.upsert_user(user_id, payload)
    if not inserted:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return render(
        request,
        str(identifier),
        root="guid",
        status_code=status.HTTP_201_CREATED,
        headers={"Location": location},
    )


@router.patch("/{user_id}", name="partially_update_user", status_code=status.HTTP_204_NO_CONTENT)
async def partially_update_user(
    user_id: str,
    operations: Optional[List[Any]] = Body(default=None),
    service: UserService = Depends(get_service),
) -> Response:
    service.patch_user(user_id, operations)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", name="delete_user", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(
    user_id: str,
    service: UserService = Depends(get_service),
) -> Response:
    service.delete_user(user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("", name="get_users", response_model=List[UserDto])
async def get_users(
    request: Request,
    page_number: Optional[str] = Query(default=None, alias="pageNumber"),
    page_size: Optional[str] = Query(default=None, alias="pageSize"),
    service: UserService = Depends(get_service),
) -> Response:
    users, metadata = service.list_users(parse_page_value(page_number), parse_page_value(page_size))
    pagination = json.dumps(metadata.model_dump(by_alias=True), separators=(",", ":"))
    return render(
        request,
        [user.model_dump(mode="json", by_alias=True) for user in users],
        root="UserDto",
        headers={"X-Pagination": pagination},
    )


@router.options("", name="options_users")
async def options_users() -> Response:
    return Response(status_code=status.HTTP_200_OK, headers={"Allow": "GET, POST, OPTIONS"})
