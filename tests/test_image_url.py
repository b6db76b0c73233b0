"""Tests for image_url module."""

from CineMedia.image_url import normalize_image_url, strip_raw_suffix


class TestNormalizeImageUrl:
    def test_absolute_unchanged(self):
        url = "https://cdn.example.com/a.png"
        assert normalize_image_url(url, 1) == url

    def test_absolute_case_insensitive_scheme(self):
        assert normalize_image_url("HTTP://cdn/a.png") == "HTTP://cdn/a.png"

    def test_root_relative_uses_origin(self):
        result = normalize_image_url(
            "/api/v1/images/5", 5, image_endpoint="http://localhost:17002/base/"
        )
        assert result == "http://localhost:17002/api/v1/images/5"

    def test_relative_joined_to_endpoint(self):
        result = normalize_image_url("images/5", image_endpoint="http://img.test/")
        assert result == "http://img.test/images/5"

    def test_fallback_by_id(self):
        result = normalize_image_url(None, 7, image_endpoint="http://host:1/api/v1")
        assert result == "http://host:1/api/v1/images/7/raw"

    def test_blank_url_falls_back(self):
        result = normalize_image_url("   ", 7, image_endpoint="http://host:1")
        assert result == "http://host:1/api/v1/images/7/raw"

    def test_nothing_to_go_on(self):
        assert normalize_image_url(None) is None
        assert normalize_image_url("") is None


class TestStripRawSuffix:
    def test_strips(self):
        assert strip_raw_suffix("http://a/images/5/raw") == "http://a/images/5"

    def test_leaves_other_urls(self):
        assert strip_raw_suffix("http://a/raw/5") == "http://a/raw/5"
