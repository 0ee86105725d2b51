import pytest

from linktrackr.exceptions import InvalidAliasError, InvalidURLError
from linktrackr.models.link import Link
from linktrackr.validators import normalize_alias, normalize_original_url, validate_original_url


class TestNormalizeOriginalUrl:

    @pytest.mark.parametrize("raw, expected", [
        ("example.com", "https://example.com"),
        ("example.com/page", "https://example.com/page"),
        ("www.example.co.uk/a/b.html", "https://www.example.co.uk/a/b.html"),
        ("httpbin.org/get", "https://httpbin.org/get"),
        ("https://example.com", "https://example.com"),
        ("http://example.com/", "http://example.com/"),
        ("  example.com  ", "https://example.com"),
    ])
    def test_scheme_prepended_once(self, raw, expected):
        assert normalize_original_url(raw) == expected

    def test_normalizing_twice_is_stable(self):
        once = normalize_original_url("example.com/page")
        assert normalize_original_url(once) == once

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_required(self, raw):
        with pytest.raises(InvalidURLError, match="Original URL is required"):
            validate_original_url(raw)

    @pytest.mark.parametrize("raw", [
        "not a url",
        "localhost",
        "ftp://example.com",
        "example.com/?q=1",
        "EXAMPLE.COM",
    ])
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidURLError, match="Invalid URL format"):
            normalize_original_url(raw)


class TestNormalizeAlias:

    def test_absent(self):
        assert normalize_alias(None) is None
        assert normalize_alias("  ") is None

    def test_trimmed(self):
        assert normalize_alias("  my-link_1 ") == "my-link_1"

    @pytest.mark.parametrize("raw", ["has space", "a/b", "ünïcode", "x" * 65])
    def test_rejects(self, raw):
        with pytest.raises(InvalidAliasError):
            normalize_alias(raw)

    @pytest.mark.parametrize("raw", ["health", "docs", "redoc", "api"])
    def test_rejects_reserved_route_names(self, raw):
        with pytest.raises(InvalidAliasError, match="Custom alias is reserved"):
            normalize_alias(raw)


class TestModelValidation:
    """The ORM model runs the same URL check as the request path"""

    def test_model_rejects_invalid_url(self):
        with pytest.raises(InvalidURLError):
            Link(short_id="abc", original_url="nope", owner_id="owner")

    def test_model_accepts_valid_url(self):
        link = Link(short_id="abc", original_url="https://example.com", owner_id="owner")
        assert link.original_url == "https://example.com"
