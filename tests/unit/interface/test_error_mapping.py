"""Unit tests for the domain error to HTTP status mapping."""

import pytest

from discuss.domain.error import (
    AlreadyDeletedError,
    CommentNotFoundError,
    ContentValidationError,
    DomainError,
    EmptyContentError,
    InvalidCursorError,
    InvalidParentError,
    InvalidTransitionError,
    MaxDepthExceededError,
    NotAuthorizedError,
    ParentNotFoundError,
    TargetNotFoundError,
)
from discuss.interface.error import status_for


@pytest.mark.parametrize(
    "error,status_code",
    [
        (ContentValidationError("too long"), 422),
        (EmptyContentError(), 422),
        (MaxDepthExceededError(33, 32), 422),
        (InvalidCursorError(), 400),
        (TargetNotFoundError("post", 1), 404),
        (ParentNotFoundError(1), 404),
        (InvalidParentError(1), 404),
        (CommentNotFoundError(1), 404),
        (NotAuthorizedError("delete", 1, 2), 403),
        (AlreadyDeletedError(1), 409),
        (InvalidTransitionError(1, "blocked", "published"), 409),
        (DomainError("something else"), 400),
    ],
)
def test_status_for(error, status_code):
    assert status_for(error) == status_code


def test_invalid_parent_reports_parent_not_found():
    assert InvalidParentError(1).code == "PARENT_NOT_FOUND"
