"""Integration tests for the example server over HTTP."""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from http.server import HTTPServer
from typing import Iterator

import httpx
import pytest

from examples.server import RequestHandler, Server, ServerConfig

NOW = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


class FixedTimestamper:
    """Timestamper that always reports the same instant."""

    def now(self) -> datetime:
        return NOW


@pytest.fixture(scope="module")
def client() -> Iterator[httpx.Client]:
    """Run the example server on a free port for the duration of the module."""
    config = ServerConfig(host="127.0.0.1", port=0, base_url="https://example.com/t/")
    RequestHandler.server_instance = Server(config, FixedTimestamper())

    httpd = HTTPServer((config.host, config.port), RequestHandler)
    thread = threading.Thread(target=httpd.serve_forever, daemon=True)
    thread.start()

    with httpx.Client(base_url=f"http://{config.host}:{httpd.server_address[1]}") as http_client:
        yield http_client

    httpd.shutdown()
    httpd.server_close()
    thread.join()


def test_show_state(client: httpx.Client) -> None:
    response = client.get("/AAAAAAAAUSAmerica.New_York~GBEurope.London")

    assert response.status_code == 200
    assert response.json() == {
        "timestamp": 0,
        "time": "1970-01-01T00:00:00Z",
        "entries": [
            {"flag": "US", "timeZone": "America/New_York"},
            {"flag": "GB", "timeZone": "Europe/London"},
        ],
    }


def test_show_state_with_percent_encoded_separator(client: httpx.Client) -> None:
    response = client.get("/AAAAAAAAUSAmerica.New_York%7EGBEurope.London")

    assert response.status_code == 200
    assert response.json()["entries"] == [
        {"flag": "US", "timeZone": "America/New_York"},
        {"flag": "GB", "timeZone": "Europe/London"},
    ]


def test_show_state_outside_datetime_range(client: httpx.Client) -> None:
    response = client.get("/A_____38")

    assert response.status_code == 200
    assert response.json() == {"timestamp": 2**39 - 1, "time": None, "entries": []}


@pytest.mark.parametrize("path", ["/BAAAAAAA", "/AAAA", "/AAAA=AAA"])
def test_show_rejects_bad_tokens(client: httpx.Client, path: str) -> None:
    response = client.get(path)

    assert response.status_code == 400
    assert "error" in response.json()


@pytest.mark.parametrize("path", ["/", "/t/AAAAAAAA"])
def test_unknown_get_routes(client: httpx.Client, path: str) -> None:
    assert client.get(path).status_code == 404


def test_create_link(client: httpx.Client) -> None:
    response = client.post(
        "/link",
        json={"timestamp": 1, "entries": [{"flag": "GB", "timeZone": "Europe/London"}]},
    )

    assert response.status_code == 200
    assert response.json() == {
        "token": "AAQAAAAAGBEurope.London",
        "link": "https://example.com/t/AAQAAAAAGBEurope.London",
    }


def test_create_link_defaults_to_now(client: httpx.Client) -> None:
    response = client.post("/link", json={"entries": []})
    assert response.status_code == 200

    shown = client.get(f"/{response.json()['token']}").json()
    assert shown["time"] == "2025-01-01T12:00:00Z"
    assert shown["entries"] == []


@pytest.mark.parametrize(
    "body",
    [
        {"timestamp": 0, "entries": [{"flag": "USA", "timeZone": "America/New_York"}]},
        {"timestamp": 0, "entries": [{"flag": "US", "timeZone": "America/New York"}]},
        {"timestamp": 0, "entries": [{"flag": "U~", "timeZone": "UTC"}]},
        {"timestamp": "soon", "entries": []},
        {"timestamp": 0},
    ],
)
def test_create_link_rejects_invalid_states(client: httpx.Client, body: dict) -> None:
    response = client.post("/link", json=body)

    assert response.status_code == 400
    assert "error" in response.json()


def test_create_link_rejects_malformed_json(client: httpx.Client) -> None:
    response = client.post("/link", content=b"{not json")
    assert response.status_code == 400


def test_unknown_post_route(client: httpx.Client) -> None:
    assert client.post("/nope", json={}).status_code == 404
