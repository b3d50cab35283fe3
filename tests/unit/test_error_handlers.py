"""
Unit tests for the error taxonomy and its HTTP status table.
"""
import pytest

from app.routers.error_handlers import STATUS_BY_KIND
from app.services.errors import (
    ConflictError,
    ErrorKind,
    NotFoundError,
    UnexpectedStoreError,
    UserDirectoryError,
    ValidationError,
)


class TestErrorKinds:
    @pytest.mark.parametrize(
        "error_cls, kind, status_code",
        [
            (ValidationError, ErrorKind.VALIDATION, 400),
            (ConflictError, ErrorKind.CONFLICT, 409),
            (NotFoundError, ErrorKind.NOT_FOUND, 404),
            (UnexpectedStoreError, ErrorKind.UNEXPECTED, 500),
        ],
    )
    def test_kind_and_status(self, error_cls, kind, status_code):
        error = error_cls("message")
        assert isinstance(error, UserDirectoryError)
        assert error.kind is kind
        assert STATUS_BY_KIND[error.kind] == status_code

    def test_every_kind_has_a_status(self):
        assert set(STATUS_BY_KIND) == set(ErrorKind)

    def test_detail_stays_out_of_public_message(self):
        error = UnexpectedStoreError(detail="SELECT * FROM users -- boom")
        assert error.public_message == "Unexpected server error"
        assert "SELECT" not in error.public_message
        assert error.detail == "SELECT * FROM users -- boom"
