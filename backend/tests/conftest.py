import os
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest

# tests always run against the in-memory database
os.environ["DATABASE_URL"] = "sqlite://"


class _OkHandler(BaseHTTPRequestHandler):
    def do_GET(self):
        body = b"ok"
        self.send_response(200)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, *_args):
        pass


@pytest.fixture
def http_server():
    """A local HTTP server answering 200 to every GET; yields its base URL."""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _OkHandler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    try:
        yield f"http://127.0.0.1:{server.server_address[1]}"
    finally:
        server.shutdown()
        server.server_close()


class FakeProcess:
    """Stand-in for `subprocess.Popen` that exits with `exit_code` when waited on."""

    def __init__(self, exit_code=0):
        self.returncode = None
        self.exit_code = exit_code
        self.terminated = False

    def poll(self):
        return self.returncode

    def terminate(self):
        self.terminated = True
        self.returncode = -15

    def kill(self):
        self.returncode = -9

    def wait(self, timeout=None):
        if self.returncode is None:
            self.returncode = self.exit_code
        return self.returncode


@pytest.fixture
def fake_process():
    return FakeProcess()
