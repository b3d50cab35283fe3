from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse

from app.routers.dependencies import get_directory
from app.routers.error_handlers import error_response
from app.schemas import general_schema
from app.services.user_directory import UserDirectory

user_Router = APIRouter(prefix="/users")

ERROR_RESPONSES: Dict[int | str, Dict[str, Any]] = {
    status.HTTP_400_BAD_REQUEST: {"model": general_schema.ErrorResponse},
    status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": general_schema.ErrorResponse},
}


@user_Router.get("", response_model=general_schema.UserListResponse, tags=["users"])
def get_all_users(directory: UserDirectory = Depends(get_directory)):
    return {"data": directory.get_all_users()}


@user_Router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    response_model=general_schema.UserResponse,
    responses={**ERROR_RESPONSES, status.HTTP_409_CONFLICT: {"model": general_schema.ErrorResponse}},
    tags=["users"],
)
def register_user(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    directory: UserDirectory = Depends(get_directory),
):
    return {"data": directory.register(payload)}


@user_Router.post(
    "/signin",
    response_model=general_schema.UserResponse,
    responses={**ERROR_RESPONSES, status.HTTP_401_UNAUTHORIZED: {"model": general_schema.ErrorResponse}},
    tags=["users"],
)
def sign_in(
    payload: Optional[Dict[str, Any]] = Body(default=None),
    directory: UserDirectory = Depends(get_directory),
):
    result = directory.authenticate(payload)
    if not result.success:
        return error_response(status.HTTP_401_UNAUTHORIZED, "Invalid username or password")
    return {"data": result.user}


@user_Router.get(
    "/by-name",
    response_model=general_schema.UserListResponse,
    responses=ERROR_RESPONSES,
    tags=["users"],
)
def get_users_by_name(
    first: Optional[str] = Query(None, description="Substring of the first name"),
    last: Optional[str] = Query(None, description="Substring of the last name"),
    directory: UserDirectory = Depends(get_directory),
):
    return {"data": directory.get_users_by_name(first, last)}


@user_Router.get(
    "/by-username/{username}",
    response_model=general_schema.UserResponse,
    responses={**ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": general_schema.ErrorResponse}},
    tags=["users"],
)
def get_user_by_username(username: str, directory: UserDirectory = Depends(get_directory)):
    user = directory.get_user_by_username(username)
    if user is None:
        return error_response(status.HTTP_404_NOT_FOUND, "User not found")
    return {"data": user}


@user_Router.get(
    "/by-salary",
    response_model=general_schema.UserListResponse,
    responses=ERROR_RESPONSES,
    tags=["users"],
)
def get_users_by_salary(
    min_salary: Optional[str] = Query(None, alias="min"),
    max_salary: Optional[str] = Query(None, alias="max"),
    directory: UserDirectory = Depends(get_directory),
):
    return {"data": directory.get_users_by_salary_range(min_salary, max_salary)}


@user_Router.get(
    "/by-age",
    response_model=general_schema.UserListResponse,
    responses=ERROR_RESPONSES,
    tags=["users"],
)
def get_users_by_age(
    min_age: Optional[str] = Query(None, alias="min"),
    max_age: Optional[str] = Query(None, alias="max"),
    directory: UserDirectory = Depends(get_directory),
):
    return {"data": directory.get_users_by_age_range(min_age, max_age)}


@user_Router.get(
    "/registered-after/{username}",
    response_model=general_schema.UserListResponse,
    responses={**ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": general_schema.ErrorResponse}},
    tags=["users"],
)
def get_users_registered_after(username: str, directory: UserDirectory = Depends(get_directory)):
    return {"data": directory.get_users_registered_after(username)}


@user_Router.get(
    "/never-signed-in",
    response_model=general_schema.UserListResponse,
    tags=["users"],
)
def get_users_never_signed_in(directory: UserDirectory = Depends(get_directory)):
    return {"data": directory.get_users_never_signed_in()}


@user_Router.get(
    "/registered-same-day/{username}",
    response_model=general_schema.UserListResponse,
    responses={**ERROR_RESPONSES, status.HTTP_404_NOT_FOUND: {"model": general_schema.ErrorResponse}},
    tags=["users"],
)
def get_users_registered_same_day(username: str, directory: UserDirectory = Depends(get_directory)):
    return {"data": directory.get_users_registered_same_day(username)}


@user_Router.get(
    "/registered-today",
    response_model=general_schema.UserListResponse,
    tags=["users"],
)
def get_users_registered_today(directory: UserDirectory = Depends(get_directory)):
    return {"data": directory.get_users_registered_today()}
