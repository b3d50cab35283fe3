"""
Coercion of untyped request values into the typed inputs the directory works with.

Each ``coerce_*`` function validates with the matching pydantic schema and turns
any pydantic failure into the directory's own ``ValidationError`` with a fixed
public message.
"""

from typing import Any, Mapping, Type, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from app.schemas.user_schema import (
    FIXED_MESSAGE_TYPES,
    AgeRange,
    NameQuery,
    SalaryRange,
    UserCreate,
    UsernameRef,
    UserSignIn,
)
from app.services.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)

NOT_AN_OBJECT = "Request body must be a JSON object."


def _public_message(model: Type[BaseModel], exc: PydanticValidationError) -> str:
    # report the first failing field, in declaration order
    error = exc.errors()[0]
    if error["type"] in ("model_type", "model_attributes_type", "dict_type"):
        return NOT_AN_OBJECT
    if not error["loc"] or error["type"] in FIXED_MESSAGE_TYPES:
        return error["msg"]
    field = str(error["loc"][0])
    if error["type"] == "string_too_long":
        return f"{field} must be at most {error['ctx']['max_length']} characters."
    messages = getattr(model, "messages", {})
    return messages.get(field, f"{field} is invalid.")


def _validate(model: Type[ModelT], data: Any) -> ModelT:
    if data is None:
        data = {}
    if not isinstance(data, Mapping):
        raise ValidationError(NOT_AN_OBJECT)
    try:
        return model.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError(_public_message(model, e), detail=str(e)) from e


def coerce_registration(payload: Any) -> UserCreate:
    return _validate(UserCreate, payload)


def coerce_sign_in(payload: Any) -> UserSignIn:
    return _validate(UserSignIn, payload)


def coerce_username(value: Any) -> str:
    return _validate(UsernameRef, {"username": value}).username


def coerce_name_query(firstname: Any = None, lastname: Any = None) -> NameQuery:
    return _validate(NameQuery, {"firstname": firstname, "lastname": lastname})


def coerce_salary_range(minimum: Any = None, maximum: Any = None) -> SalaryRange:
    return _validate(SalaryRange, {"minimum": minimum, "maximum": maximum})


def coerce_age_range(minimum: Any = None, maximum: Any = None) -> AgeRange:
    return _validate(AgeRange, {"minimum": minimum, "maximum": maximum})
