# File: tests/test_utils.py
import pytest

from favicon_scout.utils import absolutize, ensure_scheme, extract_domain, site_origin


@pytest.mark.parametrize(
    "raw",
    [
        "example.com",
        "example.com/path?q=1",
        "sub.Example.org:8080/x",
        "GitHub.com/user/repo",
        "localhost",
    ],
)
def test_scheme_less_input_matches_https_form(raw):
    assert extract_domain(raw) == extract_domain("https://" + raw)
    assert extract_domain(raw) is not None


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("HTTPS://Example.COM/x", "example.com"),
        ("http://www.Example.com:8080/a/b", "www.example.com"),
        ("https://user:pw@host.example.net/", "host.example.net"),
        ("github.com", "github.com"),
        ("http://127.0.0.1:5000", "127.0.0.1"),
    ],
)
def test_extract_domain_lowercases_hostname(raw, expected):
    assert extract_domain(raw) == expected


@pytest.mark.parametrize(
    "raw", ["", "   ", "https://", "http://[::1", None, 42, "example.com:abc", "https://host:99999"]
)
def test_extract_domain_invalid_returns_none(raw):
    assert extract_domain(raw) is None


def test_ensure_scheme():
    assert ensure_scheme("example.com") == "https://example.com"
    assert ensure_scheme("http://example.com") == "http://example.com"
    assert ensure_scheme("HTTPS://example.com") == "HTTPS://example.com"


def test_site_origin_keeps_port_and_drops_path():
    assert site_origin("example.com/some/page") == "https://example.com"
    assert site_origin("http://Example.com:8080/x?y=1") == "http://example.com:8080"
    with pytest.raises(ValueError):
        site_origin("https://")


@pytest.mark.parametrize(
    "href,expected",
    [
        ("//cdn.example.net/i.png", "https://cdn.example.net/i.png"),
        ("/favicon.ico", "https://example.com/favicon.ico"),
        ("http://other.org/icon.png", "http://other.org/icon.png"),
        ("img/icon.png", "https://example.com/img/icon.png"),
        ("  /padded.png ", "https://example.com/padded.png"),
    ],
)
def test_absolutize(href, expected):
    assert absolutize(href, "https://example.com") == expected
