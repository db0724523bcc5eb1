"""
Unit tests for the conversion helpers.
"""
import pytest

from gallery_api.config import settings
from gallery_api.proxy import resolve_allowed_origin
from gallery_api.routes.content import build_upsert, unwrap_content
from gallery_api.utils.auth import parse_admin_emails
from gallery_api.utils.errors import error_body
from gallery_api.utils.serialization import decode_content, decode_tags, encode_tags, parse_limit
from gallery_api.utils.youtube import extract_video_id, thumbnail_url


@pytest.mark.parametrize("raw, expected", [
    (None, 100),
    ("", 100),
    ("25", 25),
    (" 7", 7),
    ("25abc", 25),
    ("+3", 3),
    ("abc", 100),
    ("0", 100),
    ("-5", 100),
])
def test_parse_limit(raw, expected):
    assert parse_limit(raw, 100) == expected


@pytest.mark.parametrize("raw, expected", [
    ('["a", "b"]', ["a", "b"]),
    ("[]", []),
    ("", []),
    (None, []),
    ("travel, night ,", ["travel", "night"]),
    ('"x, y"', ["x", "y"]),
    ('{"a": 1}', []),
    (["already", "a", "list"], ["already", "a", "list"]),
])
def test_decode_tags(raw, expected):
    assert decode_tags(raw) == expected


def test_encode_tags():
    assert encode_tags(["a", "b"]) == '["a", "b"]'
    assert encode_tags(None) == "[]"


def test_decode_content_empty_is_object():
    assert decode_content("") == {}
    assert decode_content('{"title": "Hi"}') == {"title": "Hi"}


@pytest.mark.parametrize("url", [
    "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
    "https://youtu.be/dQw4w9WgXcQ",
    "https://www.youtube.com/embed/dQw4w9WgXcQ?autoplay=1",
    "https://www.youtube.com/watch?feature=share&v=dQw4w9WgXcQ",
])
def test_extract_video_id(url):
    assert extract_video_id(url) == "dQw4w9WgXcQ"


@pytest.mark.parametrize("url", [None, "", "https://vimeo.com/123", "https://youtu.be/short"])
def test_extract_video_id_rejects(url):
    assert extract_video_id(url) is None


def test_thumbnail_url():
    assert thumbnail_url("dQw4w9WgXcQ") == "https://img.youtube.com/vi/dQw4w9WgXcQ/maxresdefault.jpg"
    assert thumbnail_url("dQw4w9WgXcQ", "hqdefault").endswith("/hqdefault.jpg")


def test_parse_admin_emails():
    assert parse_admin_emails(" A@Example.com, ,b@example.com ") == ["a@example.com", "b@example.com"]
    assert parse_admin_emails("") == []


@pytest.mark.parametrize("body, expected", [
    ({"content": {"title": "Hi"}}, {"title": "Hi"}),
    ({"title": "Hi"}, {"title": "Hi"}),
    ({"content": ""}, {"content": ""}),
    ({"content": None}, {"content": None}),
    ({"content": {}}, {}),
    ({"content": []}, []),
    ({"content": 0}, {"content": 0}),
    ([1, 2], [1, 2]),
])
def test_unwrap_content(body, expected):
    assert unwrap_content(body) == expected


def test_build_upsert_rejects_unknown_dialect():
    with pytest.raises(ValueError):
        build_upsert("mysql", "home", "{}")


def test_error_body():
    assert error_body("Name is required") == {"error": "Name is required", "detail": "Name is required"}
    assert error_body({"error": "Forbidden"}) == {"error": "Forbidden"}


class TestResolveAllowedOrigin:

    def test_allow_listed_origin_is_echoed(self):
        assert resolve_allowed_origin("https://photo-wisarut.firebaseapp.com") == "https://photo-wisarut.firebaseapp.com"

    def test_any_localhost_is_echoed(self):
        assert resolve_allowed_origin("http://localhost:8080") == "http://localhost:8080"

    @pytest.mark.parametrize("origin", [None, "", "https://evil.example"])
    def test_fallback_to_first_entry(self, origin):
        assert resolve_allowed_origin(origin) == settings.UPLOAD_ALLOWED_ORIGINS[0]
