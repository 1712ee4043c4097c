import threading
import time
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace

import pytest

from adncli.feeds import FeedPipeline

SAMPLE_RSS = """
<rss>
  <channel>
    <title>Test Feed</title>
    <description>Sample Description</description>
    <link>https://example.com/</link>
    <item>
      <title>Item 1</title>
      <link>https://example.com/1</link>
      <description><![CDATA[<p>Hello <b>world</b></p>]]></description>
      <pubDate>Mon, 01 Jan 2024 00:00:00 +0000</pubDate>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def sample_rss():
    return SAMPLE_RSS


@pytest.fixture
def feed_server(monkeypatch):
    """Serve canned responses from a local HTTP server.

    ``feed_server.add(path, body, status=200, delay=0.0)`` registers a route
    and returns its absolute URL.
    """
    monkeypatch.setenv("NO_PROXY", "127.0.0.1,localhost")
    monkeypatch.setenv("no_proxy", "127.0.0.1,localhost")

    routes = {}
    requests_seen = []

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self):
            requests_seen.append(
                SimpleNamespace(path=self.path, headers=dict(self.headers))
            )
            status, body, delay = routes.get(self.path, (404, b"not found", 0.0))
            if delay:
                time.sleep(delay)
            self.send_response(status)
            self.send_header("Content-Type", "application/rss+xml; charset=utf-8")
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            self.wfile.write(body)

        def log_message(self, *args):
            pass

    server = ThreadingHTTPServer(("127.0.0.1", 0), Handler)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    base_url = f"http://127.0.0.1:{server.server_address[1]}"

    def add(path, body, status=200, delay=0.0):
        if isinstance(body, str):
            body = body.encode("utf-8")
        routes[path] = (status, body, delay)
        return base_url + path

    try:
        yield SimpleNamespace(add=add, url=base_url, requests=requests_seen)
    finally:
        server.shutdown()
        server.server_close()


@pytest.fixture
def pipeline():
    with FeedPipeline(timeout=5.0) as reader:
        yield reader
