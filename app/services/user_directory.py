"""
User directory service: registration, stateless sign-in and filtered lookups.
"""

import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Iterator, List, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.repositories import user_crud
from app.schemas.user_schema import SignInResult, User
from app.security.user_security import dummy_verify, hash_password, verify_password
from app.services.errors import ConflictError, NotFoundError, UnexpectedStoreError
from app.services.user_inputs import (
    coerce_age_range,
    coerce_name_query,
    coerce_registration,
    coerce_salary_range,
    coerce_sign_in,
    coerce_username,
)

logger = logging.getLogger(__name__)

# SQLSTATE for unique_violation (PostgreSQL) and the MySQL duplicate-key errno
UNIQUE_VIOLATION_CODES = {"23505", 1062}


def is_unique_violation(exc: IntegrityError) -> bool:
    orig = exc.orig
    code = getattr(orig, "pgcode", None) or getattr(orig, "sqlstate", None)
    if code is None and getattr(orig, "args", None):
        code = orig.args[0]
    if code in UNIQUE_VIOLATION_CODES:
        return True
    return "unique" in str(orig).lower()


def _to_users(rows) -> List[User]:
    return [User.model_validate(row) for row in rows]


class UserDirectory:
    """Owns every read and write against the users table.

    Each call opens its own short-lived session from ``session_factory``, so a
    single instance can be shared by all requests. ``clock`` supplies the
    timestamps stamped on registration and sign-in.
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.session_factory = session_factory
        self.clock = clock

    @contextmanager
    def _store(self, operation: str) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        except SQLAlchemyError as e:
            db.rollback()
            logger.exception(f"Store failure during {operation}")
            raise UnexpectedStoreError(detail=str(e)) from e
        finally:
            db.close()

    def _reference_registerday(self, db: Session, username: str) -> datetime:
        registerday = user_crud.get_registerday(db=db, username=username)
        if registerday is None:
            raise NotFoundError("Reference user not found.")
        return registerday

    def register(self, payload: Any) -> User:
        user = coerce_registration(payload)
        password_hash = hash_password(user.password)
        registerday = self.clock()

        with self._store("register") as db:
            try:
                user_crud.create_user(
                    db=db,
                    username=user.username,
                    password_hash=password_hash,
                    firstname=user.firstname,
                    lastname=user.lastname,
                    salary=user.salary,
                    age=user.age,
                    registerday=registerday,
                )
            except IntegrityError as e:
                db.rollback()
                if not is_unique_violation(e):
                    raise
                logger.warning(f"Registration rejected, username {user.username!r} already exists")
                raise ConflictError("username is already registered.", detail=str(e)) from e

            created = user_crud.get_user_by_username(db=db, username=user.username)
            logger.info(f"Registered user {user.username!r}")
            return User.model_validate(created)

    def authenticate(self, payload: Any) -> SignInResult:
        credentials = coerce_sign_in(payload)

        with self._store("authenticate") as db:
            db_user = user_crud.get_user_by_username(db=db, username=credentials.username)
            if db_user is None:
                dummy_verify()
                return SignInResult(success=False)
            if not verify_password(credentials.password, db_user.password_hash):
                return SignInResult(success=False)

            # never stamp a sign-in earlier than the registration
            signintime = max(self.clock(), db_user.registerday)
            user_crud.update_signin_time(db=db, username=db_user.username, signintime=signintime)
            user = User.model_validate(db_user).model_copy(update={"signintime": signintime})

        logger.info(f"User {credentials.username!r} signed in")
        return SignInResult(success=True, user=user)

    def get_all_users(self) -> List[User]:
        with self._store("get_all_users") as db:
            return _to_users(user_crud.get_all_users(db=db))

    def get_user_by_username(self, username: Any) -> Optional[User]:
        username = coerce_username(username)
        with self._store("get_user_by_username") as db:
            db_user = user_crud.get_user_by_username(db=db, username=username)
            if db_user is None:
                return None
            return User.model_validate(db_user)

    def get_users_by_name(self, firstname: Any = None, lastname: Any = None) -> List[User]:
        query = coerce_name_query(firstname, lastname)
        with self._store("get_users_by_name") as db:
            return _to_users(
                user_crud.search_users_by_name(
                    db=db, firstname=query.firstname, lastname=query.lastname
                )
            )

    def get_users_by_salary_range(self, minimum: Any = None, maximum: Any = None) -> List[User]:
        salary = coerce_salary_range(minimum, maximum)
        with self._store("get_users_by_salary_range") as db:
            return _to_users(
                user_crud.get_users_by_salary_range(db=db, low=salary.minimum, high=salary.maximum)
            )

    def get_users_by_age_range(self, minimum: Any = None, maximum: Any = None) -> List[User]:
        age = coerce_age_range(minimum, maximum)
        with self._store("get_users_by_age_range") as db:
            return _to_users(
                user_crud.get_users_by_age_range(db=db, low=age.minimum, high=age.maximum)
            )

    def get_users_registered_after(self, username: Any) -> List[User]:
        username = coerce_username(username)
        with self._store("get_users_registered_after") as db:
            registerday = self._reference_registerday(db, username)
            return _to_users(user_crud.get_users_registered_after(db=db, moment=registerday))

    def get_users_registered_same_day(self, username: Any) -> List[User]:
        username = coerce_username(username)
        with self._store("get_users_registered_same_day") as db:
            registerday = self._reference_registerday(db, username)
            return _to_users(
                user_crud.get_users_registered_same_day(db=db, day=registerday.date())
            )

    def get_users_never_signed_in(self) -> List[User]:
        with self._store("get_users_never_signed_in") as db:
            return _to_users(user_crud.get_users_never_signed_in(db=db))

    def get_users_registered_today(self) -> List[User]:
        today = self.clock().date()
        with self._store("get_users_registered_today") as db:
            return _to_users(user_crud.get_users_registered_on(db=db, day=today))
