"""
Test configuration and fixtures
"""

from datetime import datetime, timedelta, timezone

import pytest

from app.infrastructure.memory_image_storage import InMemoryImageStorage
from app.repositories.memory_repository import (
    InMemoryCommentRepository,
    InMemoryPublicationRepository,
)
from app.services.comment_service import CommentService
from app.services.publication_service import PublicationService
from app.validators import MinLengthValidator

START = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


class StepClock:
    """Deterministic clock that advances one second on every call."""

    def __init__(self, start: datetime = START, step: timedelta = timedelta(seconds=1)):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        value = self.current
        self.current += self.step
        return value


@pytest.fixture
def start():
    return START


@pytest.fixture
def clock(start):
    return StepClock(start)


@pytest.fixture
def publication_repo():
    return InMemoryPublicationRepository()


@pytest.fixture
def comment_repo():
    return InMemoryCommentRepository()


@pytest.fixture
def image_storage():
    return InMemoryImageStorage()


@pytest.fixture
def comment_service(comment_repo, publication_repo, clock):
    """Comment service over in-memory stores."""
    return CommentService(
        validator=MinLengthValidator(5),
        comment_repo=comment_repo,
        publication_repo=publication_repo,
        clock=clock,
    )


@pytest.fixture
def publication_service(publication_repo, comment_service, image_storage, clock):
    """Publication service over in-memory stores."""
    return PublicationService(
        validator=MinLengthValidator(5),
        publication_repo=publication_repo,
        comment_service=comment_service,
        image_storage=image_storage,
        clock=clock,
    )
