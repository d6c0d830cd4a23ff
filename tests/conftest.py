import json
import socketserver
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest


class MockEmailApi(ThreadingHTTPServer):
    """Local stand-in for the email provider, recording every request."""

    daemon_threads = True

    def __init__(self):
        super().__init__(("127.0.0.1", 0), Handler)
        self.requests = []
        self.status = 200
        self.delay = 0.0
        self.release = threading.Event()

    @property
    def uri(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


class Handler(BaseHTTPRequestHandler):
    def do_POST(self):
        length = int(self.headers.get("Content-Length", "0"))
        payload = self.rfile.read(length).decode("utf-8")
        try:
            body = json.loads(payload)
        except ValueError:
            body = {"raw": payload}

        self.server.requests.append(
            {"method": "POST", "path": self.path, "headers": dict(self.headers), "body": body}
        )

        if self.server.delay:
            # Released early on teardown so the test run does not hang
            self.server.release.wait(self.server.delay)

        self.send_response(self.server.status)
        self.send_header("Content-Length", "0")
        self.end_headers()

    def log_message(self, format, *args):
        pass


@pytest.fixture()
def email_api():
    server = MockEmailApi()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.release.set()
        server.shutdown()
        server.server_close()


class RawEmailApi(socketserver.ThreadingTCPServer):
    """Email API stand-in that writes raw bytes, for broken or slow responses."""

    daemon_threads = True
    allow_reuse_address = True

    def __init__(self):
        super().__init__(("127.0.0.1", 0), RawHandler)
        self.reply = b""
        self.byte_interval = 0.0
        self.stop = threading.Event()

    @property
    def uri(self) -> str:
        host, port = self.server_address[:2]
        return f"http://{host}:{port}"


class RawHandler(socketserver.BaseRequestHandler):
    def handle(self):
        self.request.recv(65536)

        if not self.server.byte_interval:
            self.request.sendall(self.server.reply)
            return

        for byte in self.server.reply:
            if self.server.stop.wait(self.server.byte_interval):
                return
            try:
                self.request.sendall(bytes([byte]))
            except OSError:
                # Client gave up and closed the connection
                return


@pytest.fixture()
def raw_email_api():
    server = RawEmailApi()
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.stop.set()
        server.shutdown()
        server.server_close()
