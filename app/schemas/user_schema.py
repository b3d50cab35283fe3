from datetime import datetime
from typing import Annotated, Any, ClassVar, Dict, Optional

from pydantic import BaseModel, Field, FiniteFloat, StringConstraints, field_validator, model_validator
from pydantic_core import PydanticCustomError

TrimmedText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)]

# matches the INTEGER column the age is stored in
Int32 = Annotated[int, Field(ge=-(2**31), le=2**31 - 1)]

# error types whose own message is the public one
FIXED_MESSAGE_TYPES = {"password_nul"}


def _reject_bool(value: Any) -> Any:
    # JSON true/false are not numbers, even though pydantic would coerce them
    if isinstance(value, bool):
        raise PydanticCustomError("not_a_number", "booleans are not numbers")
    return value


class UserCreate(BaseModel):
    username: TrimmedText
    # passwords are hashed verbatim, never trimmed
    password: Annotated[str, StringConstraints(min_length=1)]
    firstname: TrimmedText
    lastname: TrimmedText
    salary: FiniteFloat
    age: Int32

    messages: ClassVar[Dict[str, str]] = {
        "username": "username, password, firstname, and lastname are required fields.",
        "password": "username, password, firstname, and lastname are required fields.",
        "firstname": "username, password, firstname, and lastname are required fields.",
        "lastname": "username, password, firstname, and lastname are required fields.",
        "salary": "salary must be a valid number.",
        "age": "age must be a valid integer.",
    }

    @field_validator("password")
    @classmethod
    def no_nul_bytes(cls, value: str) -> str:
        if "\x00" in value:
            raise PydanticCustomError("password_nul", "password must not contain NUL characters.")
        return value

    @field_validator("salary", "age", mode="before")
    @classmethod
    def numbers_only(cls, value: Any) -> Any:
        return _reject_bool(value)


class UserSignIn(BaseModel):
    username: TrimmedText
    password: Annotated[str, StringConstraints(min_length=1)]

    messages: ClassVar[Dict[str, str]] = {
        "username": "username and password are required.",
        "password": "username and password are required.",
    }


class UsernameRef(BaseModel):
    username: TrimmedText

    messages: ClassVar[Dict[str, str]] = {"username": "username is required."}


def _blank_as_missing(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class NameQuery(BaseModel):
    firstname: Optional[str] = None
    lastname: Optional[str] = None

    messages: ClassVar[Dict[str, str]] = {}

    @field_validator("firstname", "lastname", mode="before")
    @classmethod
    def strip_blank(cls, value: Any) -> Any:
        value = _blank_as_missing(value)
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def require_one_name(self) -> "NameQuery":
        if self.firstname is None and self.lastname is None:
            raise PydanticCustomError(
                "name_missing", "Provide at least a first or last name to search."
            )
        return self


class _BoundedRange(BaseModel):
    """Inclusive range where either end may be open.

    Subclasses pick the bound type and the label used in error messages.
    A bound that is present must parse, even when blank. An inverted range
    is swapped rather than rejected.
    """

    label: ClassVar[str] = "value"

    minimum: Optional[float] = None
    maximum: Optional[float] = None

    @field_validator("minimum", "maximum", mode="before")
    @classmethod
    def numbers_only(cls, value: Any) -> Any:
        return _reject_bool(value)

    @model_validator(mode="after")
    def normalise(self) -> "_BoundedRange":
        if self.minimum is None and self.maximum is None:
            raise PydanticCustomError(
                "range_unbounded",
                "Provide at least a minimum or maximum {label}.",
                {"label": self.label},
            )
        if self.minimum is not None and self.maximum is not None and self.minimum > self.maximum:
            self.minimum, self.maximum = self.maximum, self.minimum
        return self


class SalaryRange(_BoundedRange):
    label: ClassVar[str] = "salary"

    minimum: Optional[FiniteFloat] = None
    maximum: Optional[FiniteFloat] = None

    messages: ClassVar[Dict[str, str]] = {
        "minimum": "min salary must be a valid number.",
        "maximum": "max salary must be a valid number.",
    }


class AgeRange(_BoundedRange):
    label: ClassVar[str] = "age"

    minimum: Optional[Int32] = None
    maximum: Optional[Int32] = None

    messages: ClassVar[Dict[str, str]] = {
        "minimum": "min age must be a valid integer.",
        "maximum": "max age must be a valid integer.",
    }


class User(BaseModel):
    username: str
    firstname: str
    lastname: str
    salary: float
    age: int
    registerday: datetime
    signintime: Optional[datetime] = None

    class Config:
        from_attributes = True


class SignInResult(BaseModel):
    success: bool
    user: Optional[User] = None
