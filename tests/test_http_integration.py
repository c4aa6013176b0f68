"""Tests against a local HTTP collector using a real requests.Session."""

import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests

from logglysend import EncodingError, LogglyClient, ServerError
from logglysend.request import TAG_HEADER


class _CollectorHandler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", 0))
        body = self.rfile.read(length)
        self.server.received.append({
            "path": self.path,
            "headers": dict(self.headers),
            "body": body,
        })
        status = self.server.status
        payload = b'{"response": "ok"}' if status < 300 else b"rejected"
        self.send_response(status)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def log_message(self, format, *args):
        pass


@pytest.fixture
def collector():
    server = ThreadingHTTPServer(("127.0.0.1", 0), _CollectorHandler)
    server.received = []
    server.status = 200
    t = threading.Thread(target=server.serve_forever, daemon=True)
    t.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def client(collector):
    session = requests.Session()
    # Keep proxy settings from the environment out of loopback traffic
    session.trust_env = False
    host, port = collector.server_address
    client = LogglyClient(
        token="VALID", endpoint=f"http://{host}:{port}", timeout=5.0, session=session
    )
    yield client
    client.close()
    session.close()


class TestLocalCollector:
    def test_message_and_tags_delivered(self, collector, client):
        results = []
        result = client.log_message(
            "hello", tags=["a", "b"], on_complete=results.append
        ).result(timeout=5)

        assert result.ok
        assert result.value == {"response": "ok"}
        assert results == [result]
        [received] = collector.received
        assert received["path"] == "/inputs/VALID/"
        assert json.loads(received["body"]) == {"message": "hello"}
        assert sorted(received["headers"][TAG_HEADER].split(",")) == ["a", "b"]

    def test_non_ascii_message_body(self, collector, client):
        text = "héllo ✓ 日本\u0007"
        assert client.log_message(text).result(timeout=5).ok
        assert json.loads(collector.received[0]["body"].decode("utf-8")) == {"message": text}

    def test_latin1_tag_reaches_collector(self, collector, client):
        assert client.log_message("x", tags=["café"]).result(timeout=5).ok
        assert collector.received[0]["headers"][TAG_HEADER] == "café"

    @pytest.mark.parametrize("tag", ["café-✓", "bad\r\nX-Injected: 1"])
    def test_unsendable_tag_completes_once(self, collector, client, tag):
        results = []
        future = client.log_message("x", tags=[tag], on_complete=results.append)
        result = future.result(timeout=5)

        assert future.exception() is None
        assert isinstance(result.error, EncodingError)
        assert results == [result]
        assert collector.received == []

    def test_server_rejection(self, collector, client):
        collector.status = 500
        result = client.log_record({"event": "x"}).result(timeout=5)
        assert isinstance(result.error, ServerError)
        assert result.error.status_code == 500
        assert result.error.body == "rejected"
