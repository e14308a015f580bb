"""
Tests for configuration and service wiring.
"""

import pytest
from pydantic import ValidationError

from app.app import create_image_storage, create_repositories, create_services
from app.config import Settings
from app.infrastructure.memory_image_storage import InMemoryImageStorage
from app.repositories.memory_repository import InMemoryPublicationRepository
from app.repositories.sql_repository import SqlCommentRepository, SqlPublicationRepository
from app.validators import CompositeValidator, MinLengthValidator


def _settings(**overrides) -> Settings:
    return Settings(_env_file=None, **overrides)


class TestSettings:
    """Test settings defaults and validation."""

    def test_defaults(self):
        config = _settings()

        assert config.PUBLICATION_MIN_LENGTH == 5
        assert config.COMMENT_MIN_LENGTH == 5
        assert config.CONTENT_MAX_LENGTH is None
        assert config.DEFAULT_PAGE_SIZE == 10
        assert config.MAX_PAGE_SIZE == 100
        assert config.FEATURED_COMMENTS_LIMIT == 3
        assert config.STORAGE_BACKEND == "memory"
        assert config.IMAGE_STORAGE_BACKEND == "memory"

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("COMMENT_MIN_LENGTH", "1")
        monkeypatch.setenv("STORAGE_BACKEND", "sql")

        config = _settings()

        assert config.COMMENT_MIN_LENGTH == 1
        assert config.STORAGE_BACKEND == "sql"

    def test_negative_minimum_rejected(self):
        with pytest.raises(ValidationError):
            _settings(PUBLICATION_MIN_LENGTH=-1)

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValidationError):
            _settings(STORAGE_BACKEND="mongo")

    def test_cors_origins_list(self):
        config = _settings(CORS_ORIGINS="http://a.test, http://b.test,")

        assert config.cors_origins_list == ["http://a.test", "http://b.test"]


class TestServiceWiring:
    """Test construction of services from settings."""

    def test_memory_backends(self):
        publication_service, comment_service = create_services(_settings())

        assert isinstance(publication_service.publication_repo, InMemoryPublicationRepository)
        assert isinstance(publication_service.image_storage, InMemoryImageStorage)
        assert publication_service.comment_service is comment_service
        assert comment_service.publication_repo is publication_service.publication_repo

    def test_sql_backend(self):
        publication_repo, comment_repo = create_repositories(
            _settings(STORAGE_BACKEND="sql", DATABASE_URL="sqlite:///:memory:")
        )

        assert isinstance(publication_repo, SqlPublicationRepository)
        assert isinstance(comment_repo, SqlCommentRepository)
        assert publication_repo.session_factory is comment_repo.session_factory

    def test_validators_from_limits(self):
        publication_service, comment_service = create_services(
            _settings(PUBLICATION_MIN_LENGTH=10, COMMENT_MIN_LENGTH=2, CONTENT_MAX_LENGTH=50)
        )

        assert isinstance(publication_service.validator, CompositeValidator)
        assert publication_service.validator.validate("short").error.code == "content_too_short"
        assert comment_service.validator.validate("ok").successed
        assert comment_service.validator.validate("x" * 51).error.code == "content_too_long"

    def test_featured_limit(self):
        _, comment_service = create_services(_settings(FEATURED_COMMENTS_LIMIT=5))

        assert comment_service.featured_limit == 5

    def test_supabase_requires_credentials(self):
        with pytest.raises(ValueError):
            create_image_storage(_settings(IMAGE_STORAGE_BACKEND="supabase"))

    def test_injected_collaborators_used(self, publication_repo, comment_repo, image_storage):
        publication_service, comment_service = create_services(
            _settings(),
            publication_repo=publication_repo,
            comment_repo=comment_repo,
            image_storage=image_storage,
        )

        assert publication_service.publication_repo is publication_repo
        assert comment_service.comment_repo is comment_repo
        assert publication_service.image_storage is image_storage
        assert isinstance(comment_service.validator, MinLengthValidator)
