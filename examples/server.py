"""Example server implementation for timelink.

This server exposes the token codec over HTTP: ``GET /<token>`` returns the
decoded state as JSON and ``POST /link`` turns a JSON state into a token and a
shareable link. It stands in for the page that would render the state.
"""

import json
import sys
from dataclasses import dataclass
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Any, Callable, Dict, Optional, TypedDict
from urllib.parse import unquote, urlsplit

from timelink import Entry, LinkConfig, State, StateLinker, TimelinkError, decode_state
from timelink.encoding import Utc, seconds_from_datetime
from timelink.interfaces import ITimestamper


class EntryPayload(TypedDict):
    """Entry as it appears in request and response bodies."""

    flag: str
    timeZone: str


@dataclass
class ServerConfig:
    """Configuration for the example server.

    Attributes:
        host: Interface to bind.
        port: Port to bind, 0 picks a free one.
        base_url: Base URL that created links point at.
    """

    host: str = "localhost"
    port: int = 8080
    base_url: str = "http://localhost:8080/"


def state_to_dict(state: State) -> Dict[str, Any]:
    """Convert a state to its JSON representation."""
    try:
        time: Optional[str] = state.when.isoformat().replace("+00:00", "Z")
    except OverflowError:
        time = None

    return {
        "timestamp": state.timestamp,
        "time": time,
        "entries": [EntryPayload(flag=entry.flag, timeZone=entry.time_zone) for entry in state.entries],
    }


class Server:
    """Timelink example server."""

    def __init__(self, config: Optional[ServerConfig] = None, timestamper: Optional[ITimestamper] = None) -> None:
        self.config = config or ServerConfig()
        self.timestamper = timestamper or Utc()
        self.linker = StateLinker(LinkConfig(base_url=self.config.base_url), self.timestamper)

    def _wrap_response(self, logic: Callable[[], Dict[str, Any]]) -> tuple[int, str]:
        """Wrap a request handler with error handling.

        Args:
            logic: The handler function.

        Returns:
            A tuple of (status_code, response_body).
        """
        try:
            return (200, json.dumps(logic()))
        except TimelinkError as e:
            print(f"error: {e}", file=sys.stderr)
            return (400, json.dumps({"error": str(e)}))
        except (ValueError, KeyError, TypeError, OverflowError) as e:
            print(f"error: {e}", file=sys.stderr)
            return (400, json.dumps({"error": "malformed request"}))

    def show(self, path: str) -> tuple[int, str]:
        """Handle token lookups.

        The path arrives percent-encoded, so the token segment is unquoted
        before decoding.
        """
        token = unquote(self.linker.token(path))
        return self._wrap_response(lambda: state_to_dict(decode_state(token)))

    def create(self, body: bytes) -> tuple[int, str]:
        """Handle link creation requests."""

        def handler() -> Dict[str, Any]:
            request = json.loads(body.decode("utf-8"))
            entries = [Entry(flag=entry["flag"], time_zone=entry["timeZone"]) for entry in request["entries"]]

            timestamp = request.get("timestamp")
            if timestamp is None:
                timestamp = seconds_from_datetime(self.timestamper.now())
            if not isinstance(timestamp, (int, float)) or isinstance(timestamp, bool):
                raise TypeError("timestamp must be a number")

            state = State(timestamp=timestamp, entries=entries)
            link = self.linker.link(state)
            return {"token": self.linker.token(link), "link": link}

        return self._wrap_response(handler)


class RequestHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the timelink server."""

    server_instance: Server

    def _send(self, status_code: int, response: str) -> None:
        self.send_response(status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Access-Control-Allow-Origin", "*")
        self.end_headers()
        self.wfile.write(response.encode("utf-8"))

    def do_GET(self) -> None:
        """Handle GET requests."""
        path = urlsplit(self.path).path

        # Only a single non-empty path segment names a token.
        if len(path) > 1 and "/" not in path[1:]:
            self._send(*self.server_instance.show(path))
        else:
            self.send_response(404)
            self.end_headers()

    def do_POST(self) -> None:
        """Handle POST requests."""
        content_length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(content_length)

        if urlsplit(self.path).path == "/link":
            self._send(*self.server_instance.create(body))
        else:
            self.send_response(404)
            self.end_headers()

    def do_OPTIONS(self) -> None:
        """Handle OPTIONS requests for CORS."""
        self.send_response(200)
        self.send_header("Access-Control-Allow-Origin", "*")
        self.send_header("Access-Control-Allow-Methods", "GET, POST, OPTIONS")
        self.send_header("Access-Control-Allow-Headers", "Content-Type")
        self.end_headers()

    def log_message(self, format: str, *args: Any) -> None:
        """Log HTTP requests to stderr."""
        sys.stderr.write(f"{self.address_string()} - {format % args}\n")


def main() -> None:
    """Start the server."""
    config = ServerConfig()
    RequestHandler.server_instance = Server(config)

    httpd = HTTPServer((config.host, config.port), RequestHandler)
    print(f"Server running on http://{config.host}:{config.port}")
    try:
        httpd.serve_forever()
    except KeyboardInterrupt:
        print("\nShutting down server...")
        httpd.shutdown()


if __name__ == "__main__":
    main()
