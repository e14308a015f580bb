"""
Tests for content validators.
"""

import pytest

from app.domain.result import ErrorKind
from app.validators import (
    CompositeValidator,
    MaxLengthValidator,
    MinLengthValidator,
    build_validator,
)


class TestMinLengthValidator:
    """Test minimum length rule."""

    @pytest.mark.parametrize("content", ["", "a", "abcd"])
    def test_shorter_content_fails(self, content):
        result = MinLengthValidator(5).validate(content)

        assert not result.successed
        assert result.error.kind == ErrorKind.VALIDATION
        assert result.error.code == "content_too_short"
        assert result.error.details == {"min_length": 5}

    @pytest.mark.parametrize("content", ["abcde", "abcdef", "x" * 1000])
    def test_long_enough_content_succeeds(self, content):
        result = MinLengthValidator(5).validate(content)

        assert result.successed
        assert result.error is None

    def test_message_names_minimum(self):
        result = MinLengthValidator(3).validate("ab")

        assert result.error.message == "Content length is less than 3 characters"

    def test_zero_minimum_accepts_empty(self):
        assert MinLengthValidator(0).validate("").successed

    def test_negative_minimum_rejected(self):
        with pytest.raises(ValueError):
            MinLengthValidator(-1)


class TestMaxLengthValidator:
    """Test maximum length rule."""

    def test_longer_content_fails(self):
        result = MaxLengthValidator(3).validate("abcd")

        assert result.error.code == "content_too_long"
        assert result.error.details == {"max_length": 3}

    def test_boundary_succeeds(self):
        assert MaxLengthValidator(3).validate("abc").successed

    def test_invalid_maximum_rejected(self):
        with pytest.raises(ValueError):
            MaxLengthValidator(0)


class TestCompositeValidator:
    """Test validator composition."""

    def test_first_failure_wins(self):
        validator = CompositeValidator([MaxLengthValidator(2), MinLengthValidator(5)])

        result = validator.validate("abc")

        assert result.error.code == "content_too_long"

    def test_all_rules_pass(self):
        validator = CompositeValidator([MinLengthValidator(2), MaxLengthValidator(5)])

        assert validator.validate("abc").successed

    def test_empty_composite_accepts_anything(self):
        assert CompositeValidator([]).validate("").successed


class TestBuildValidator:
    """Test validator construction from settings."""

    def test_min_only(self):
        validator = build_validator(5)

        assert isinstance(validator, MinLengthValidator)

    def test_min_and_max(self):
        validator = build_validator(2, 4)

        assert isinstance(validator, CompositeValidator)
        assert validator.validate("a").error.code == "content_too_short"
        assert validator.validate("abcde").error.code == "content_too_long"
        assert validator.validate("abc").successed
