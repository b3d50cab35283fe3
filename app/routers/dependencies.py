from fastapi import Request

from app.services.user_directory import UserDirectory


def get_directory(request: Request) -> UserDirectory:
    return request.app.state.directory
