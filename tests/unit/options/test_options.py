"""Unit tests for parser and renderer option classes."""

from dataclasses import FrozenInstanceError, fields

import pytest

from scrapbox2review.logging_utils import CollectingDiagnostics
from scrapbox2review.options import ReviewRendererOptions, ScrapboxParserOptions


@pytest.mark.unit
class TestScrapboxParserOptions:
    """Tests for ScrapboxParserOptions."""

    def test_defaults(self) -> None:
        """Test default values."""
        assert ScrapboxParserOptions().has_title is True

    def test_frozen(self) -> None:
        """Test that options cannot be mutated."""
        options = ScrapboxParserOptions()
        with pytest.raises(FrozenInstanceError):
            options.has_title = False  # type: ignore[misc]

    def test_create_updated(self) -> None:
        """Test that create_updated returns a new instance."""
        options = ScrapboxParserOptions()
        updated = options.create_updated(has_title=False)

        assert updated.has_title is False
        assert options.has_title is True
        assert isinstance(updated, ScrapboxParserOptions)


@pytest.mark.unit
class TestReviewRendererOptions:
    """Tests for ReviewRendererOptions."""

    def test_defaults(self) -> None:
        """Test default values."""
        options = ReviewRendererOptions()
        assert options.base_heading_level == 3
        assert options.logger is None
        assert options.link_base_url == "https://scrapbox.io"

    @pytest.mark.parametrize("level", [0, -1])
    def test_heading_level_below_one_rejected(self, level) -> None:
        """Test that base_heading_level must be at least 1."""
        with pytest.raises(ValueError, match="at least 1"):
            ReviewRendererOptions(base_heading_level=level)

    def test_create_updated_validates(self) -> None:
        """Test that create_updated runs validation again."""
        with pytest.raises(ValueError):
            ReviewRendererOptions().create_updated(base_heading_level=0)

    def test_logger_excluded_from_equality(self) -> None:
        """Test that the diagnostics sink does not affect equality."""
        assert ReviewRendererOptions(logger=CollectingDiagnostics()) == ReviewRendererOptions()

    def test_fields_have_help(self) -> None:
        """Test that every field documents itself for the CLI."""
        for option_field in fields(ReviewRendererOptions):
            assert option_field.metadata.get("help")
        for option_field in fields(ScrapboxParserOptions):
            assert option_field.metadata.get("help")
