# File: tests/test_request.py
import pytest

from discover.errors import RequestBuildError
from discover.request import build_path, build_request


def test_prefix_and_extension(make_config):
    cfg = make_config(target="http://x/", prefix="api/", extension="json")
    req = build_request(cfg, "users")
    assert req.path == "api/users.json"
    assert req.url == "http://x/api/users.json"


@pytest.mark.parametrize(
    "word,prefix,extension,expected",
    [
        ("admin", "", "", "admin"),
        ("admin", "", "php", "admin.php"),
        ("admin", "old_", "", "old_admin"),
        (".git", "", "", ".git"),
    ],
)
def test_build_path(word, prefix, extension, expected):
    assert build_path(word, prefix, extension) == expected


def test_target_without_trailing_slash(make_config):
    req = build_request(make_config(target="http://x"), "admin")
    assert req.url == "http://x/admin"


def test_default_headers_only_user_agent(make_config):
    req = build_request(make_config(), "admin")
    assert dict(req.headers) == {"User-Agent": "TestAgent/1.0"}
    assert req.server_hostname is None


def test_all_headers(make_config):
    cfg = make_config(
        host="internal.example",
        header_key="X-Forwarded-For",
        header_value="127.0.0.1",
        cookie="session=abc",
    )
    req = build_request(cfg, "admin")
    assert dict(req.headers) == {
        "Host": "internal.example",
        "X-Forwarded-For": "127.0.0.1",
        "Cookie": "session=abc",
        "User-Agent": "TestAgent/1.0",
    }
    assert list(req.headers) == ["Host", "X-Forwarded-For", "Cookie", "User-Agent"]


def test_host_override_does_not_touch_url(make_config):
    req = build_request(make_config(target="http://10.0.0.1:8080", host="vhost.example"), "a")
    assert req.url == "http://10.0.0.1:8080/a"
    assert req.headers["Host"] == "vhost.example"
    # plain http has no TLS server name
    assert req.server_hostname is None


def test_host_override_sets_tls_server_name(make_config):
    req = build_request(make_config(target="https://10.0.0.1", host="vhost.example:8443"), "a")
    assert req.server_hostname == "vhost.example"


def test_custom_header_needs_key_and_value(make_config):
    req = build_request(make_config(header_key="X-Test"), "admin")
    assert "X-Test" not in req.headers


def test_request_is_immutable(make_config):
    req = build_request(make_config(), "admin")
    with pytest.raises(TypeError):
        req.headers["X-New"] = "1"
    with pytest.raises(AttributeError):
        req.url = "http://other/"


@pytest.mark.parametrize("word", ["bad\x00word", "line\nbreak", "tab\there", "del\x7f"])
def test_control_characters_are_build_errors(make_config, word):
    with pytest.raises(RequestBuildError) as exc_info:
        build_request(make_config(), word)
    assert exc_info.value.word == word


def test_header_injection_is_build_error(make_config):
    cfg = make_config(cookie="a=1\r\nX-Evil: 1")
    with pytest.raises(RequestBuildError):
        build_request(cfg, "admin")


@pytest.mark.parametrize("word", ["a/../admin", "./admin", "%2e%2e/admin", "..;/admin"])
def test_path_is_not_normalised(make_config, word):
    req = build_request(make_config(target="http://x/dir/"), word)
    assert req.url == f"http://x/dir/{word}"
    assert req.target.raw_path == f"/dir/{word}"


def test_spaces_are_percent_encoded(make_config):
    req = build_request(make_config(target="http://x/"), "foo bar")
    assert req.path == "foo bar"
    assert req.url == "http://x/foo%20bar"
    assert req.target.raw_path == "/foo%20bar"


def test_non_ascii_is_percent_encoded(make_config):
    req = build_request(make_config(target="http://x/"), "café")
    assert req.url == "http://x/caf%C3%A9"
