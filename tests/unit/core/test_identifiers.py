"""Tests for identifier normalization."""

from __future__ import annotations

import pytest

from pubdate.core.exceptions import ValidationError
from pubdate.core.identifiers import normalize_identifier, try_normalize_identifier


class TestNormalizeIdentifier:
    """Tests for normalize_identifier."""

    def test_hyphens_removed(self):
        """Hyphenated ISBN should collapse to digits."""
        assert normalize_identifier("978-0-00-000000-1") == "9780000000001"

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("  9780134093413  ", "9780134093413"),
            ("978 0 13 409341 3", "9780134093413"),
            ("\t978-0134093413\n", "9780134093413"),
            ("0-13-409341-X", "013409341X"),
        ],
    )
    def test_whitespace_and_separators(self, raw: str, expected: str):
        """Surrounding and inner whitespace should be stripped."""
        assert normalize_identifier(raw) == expected

    def test_no_checksum_validation(self):
        """Placeholder ISBNs with a wrong check digit are kept."""
        assert normalize_identifier("9780000000002") == "9780000000002"

    @pytest.mark.parametrize("raw", ["", "   ", "---", " - - ", None])
    def test_empty_after_normalization_raises(self, raw):
        """Nothing left after normalization is a validation error."""
        with pytest.raises(ValidationError):
            normalize_identifier(raw)

    def test_try_normalize_returns_none(self):
        """try_normalize_identifier should swallow the validation error."""
        assert try_normalize_identifier("--") is None
        assert try_normalize_identifier("978-1") == "9781"
