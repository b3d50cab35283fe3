from passlib.context import CryptContext

from app.repositories.settings import settings

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(password, hashed_password)
    except ValueError:
        # passlib refuses some secrets outright (e.g. NUL bytes); that is still a mismatch
        return False


def dummy_verify() -> None:
    """Spend the same time as a real check when there is no stored hash to compare."""
    pwd_context.dummy_verify()
