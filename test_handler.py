"""
Tests for the redirect handler: construction from data files and request dispatch.
"""

import json
import sqlite3
import logging
import pytest
from fastapi.testclient import TestClient
from starlette.responses import PlainTextResponse

import config
import handler as handler_module
from api import app as fallback_app
from errors import FormatError, SourceIOError, UnsupportedFormatError
from handler import RedirectHandler, make_handler, map_handler

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("test_handler")


class RecordingFallback:
    """ASGI app remembering every scope it is asked to handle"""

    def __init__(self):
        self.scopes = []

    async def __call__(self, scope, receive, send):
        self.scopes.append(scope)
        response = PlainTextResponse("fallback", status_code=404)
        await response(scope, receive, send)


def client_for(app):
    return TestClient(app, follow_redirects=False)


def test_map_handler_redirects_known_path():
    """Test a known path gets a temporary redirect to its URL"""
    client = client_for(map_handler({"/dogs": "https://www.somesite.com/a-story-about-dogs"}, fallback_app))

    response = client.get("/dogs")

    assert response.status_code == 302
    assert response.headers["location"] == "https://www.somesite.com/a-story-about-dogs"


def test_map_handler_passes_unknown_path_to_fallback():
    """Test an unknown path reaches the fallback with the request untouched"""
    fallback = RecordingFallback()
    client = client_for(map_handler({"/dogs": "https://example.com/dogs"}, fallback))

    response = client.get("/cats?color=black", headers={"X-Test": "yes"})

    assert response.status_code == 404
    assert response.text == "fallback"
    assert len(fallback.scopes) == 1
    scope = fallback.scopes[0]
    assert scope["path"] == "/cats"
    assert scope["query_string"] == b"color=black"
    assert (b"x-test", b"yes") in scope["headers"]


def test_map_handler_exact_match_only():
    """Paths are matched as exact strings"""
    fallback = RecordingFallback()
    client = client_for(map_handler({"/dogs": "https://example.com/dogs"}, fallback))

    for path in ["/dogs/", "/Dogs", "/dogs/puppies"]:
        assert client.get(path).status_code == 404

    assert [scope["path"] for scope in fallback.scopes] == ["/dogs/", "/Dogs", "/dogs/puppies"]


def test_map_handler_copies_mapping():
    """Changes to the source mapping do not reach the handler"""
    paths_to_urls = {"/a": "https://example.com/a"}
    redirect_handler = map_handler(paths_to_urls, fallback_app)

    paths_to_urls["/b"] = "https://example.com/b"

    assert dict(redirect_handler.routes) == {"/a": "https://example.com/a"}
    with pytest.raises(TypeError):
        redirect_handler.routes["/c"] = "https://example.com/c"


def test_redirect_status_follows_config(monkeypatch):
    """The redirect status comes from config.REDIRECT_TYPE"""
    monkeypatch.setattr(config, "REDIRECT_TYPE", 307)
    client = client_for(map_handler({"/a": "https://example.com/a"}, fallback_app))

    assert client.get("/a").status_code == 307


def test_redirect_for_other_methods():
    """Every HTTP method on a known path is redirected"""
    client = client_for(map_handler({"/a": "https://example.com/a"}, fallback_app))

    response = client.post("/a")

    assert response.status_code == 302
    assert response.headers["location"] == "https://example.com/a"


def test_make_handler_yaml(tmp_path):
    """Test the YAML end-to-end scenario"""
    data_file = tmp_path / "data.yaml"
    data_file.write_text("- path: /go\n  url: https://golang.org\n")
    client = client_for(make_handler(str(data_file), fallback_app))

    response = client.get("/go")
    assert response.status_code == 302
    assert response.headers["location"] == "https://golang.org"

    response = client.get("/missing")
    assert response.status_code == 200
    assert response.text == "Hello, world!\n"


def test_make_handler_json(tmp_path):
    """Test the JSON end-to-end scenario"""
    data_file = tmp_path / "DATA.JSON"
    data_file.write_text(json.dumps([{"path": "/yt", "url": "https://youtube.com"}]))
    client = client_for(make_handler(str(data_file), fallback_app))

    response = client.get("/yt")

    assert response.status_code == 302
    assert response.headers["location"] == "https://youtube.com"


def test_make_handler_database(tmp_path):
    """Test the database end-to-end scenario"""
    data_file = str(tmp_path / "paths.db")
    conn = sqlite3.connect(data_file)
    try:
        conn.execute("CREATE TABLE pathsurls (ID INTEGER PRIMARY KEY, Path TEXT, URL TEXT NOT NULL)")
        conn.execute("INSERT INTO pathsurls (Path, URL) VALUES (?, ?)", ("/gh", "https://github.com"))
        conn.commit()
    finally:
        conn.close()

    client = client_for(make_handler(data_file, fallback_app))

    response = client.get("/gh")
    assert response.status_code == 302
    assert response.headers["location"] == "https://github.com"

    assert client.get("/").text == "Hello, world!\n"


def test_make_handler_duplicates_last_wins(tmp_path):
    """Test the later of two duplicate paths wins"""
    data_file = tmp_path / "data.yaml"
    data_file.write_text(
        "- path: /a\n  url: https://example.com/url1\n"
        "- path: /a\n  url: https://example.com/url2\n"
    )
    redirect_handler = make_handler(str(data_file), fallback_app)

    assert dict(redirect_handler.routes) == {"/a": "https://example.com/url2"}
    assert client_for(redirect_handler).get("/a").headers["location"] == "https://example.com/url2"


def test_make_handler_unique_paths(tmp_path):
    """Test N unique paths give a table of N entries"""
    records = [{"path": f"/p{i}", "url": f"https://example.com/{i}"} for i in range(25)]
    data_file = tmp_path / "data.json"
    data_file.write_text(json.dumps(records))

    redirect_handler = make_handler(str(data_file), fallback_app)

    assert isinstance(redirect_handler, RedirectHandler)
    assert len(redirect_handler.routes) == 25
    for record in records:
        assert redirect_handler.routes[record["path"]] == record["url"]


def test_make_handler_unsupported_format(tmp_path, monkeypatch):
    """Test an unknown extension fails before any parser runs"""
    called = []
    monkeypatch.setattr(handler_module, "PARSERS", {
        kind: (lambda path, kind=kind: called.append(kind))
        for kind in handler_module.PARSERS
    })

    with pytest.raises(UnsupportedFormatError) as exc_info:
        make_handler(str(tmp_path / "routes.txt"), fallback_app)

    assert called == []
    assert "routes.txt" in str(exc_info.value)


def test_make_handler_malformed_file(tmp_path):
    """Test a malformed file raises FormatError"""
    data_file = tmp_path / "data.json"
    data_file.write_text('[{"path": "/a",')

    with pytest.raises(FormatError) as exc_info:
        make_handler(str(data_file), fallback_app)

    assert exc_info.value.file_path == str(data_file)


def test_make_handler_missing_file(tmp_path):
    """Test an unreadable file raises SourceIOError"""
    with pytest.raises(SourceIOError):
        make_handler(str(tmp_path / "nope.yaml"), fallback_app)
