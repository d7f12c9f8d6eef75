"""
Shared fixtures: an in-memory HTTP session and a ZIP builder.
"""

import io
import json
import zipfile

import pytest
import requests


class FakeResponse:
    def __init__(self, url, content=b"", status_code=200):
        self.url = url
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error for url: {self.url}", response=self)

    def json(self):
        return json.loads(self.content.decode("utf-8"))

    def iter_content(self, chunk_size=1):
        for start in range(0, len(self.content), chunk_size):
            yield self.content[start:start + chunk_size]

    def close(self):
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


class FakeSession:
    """
    Serves registered URLs from memory; anything else raises ConnectionError.
    """

    def __init__(self):
        self.headers = {}
        self.routes = {}
        self.requests = []
        self.closed = False

    def add(self, url, content=b"", status_code=200):
        self.routes[url] = (content, status_code)

    def add_json(self, url, payload):
        self.add(url, json.dumps(payload).encode("utf-8"))

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs))
        if url not in self.routes:
            raise requests.ConnectionError(f"unreachable: {url}")
        content, status_code = self.routes[url]
        return FakeResponse(url, content, status_code)

    def close(self):
        self.closed = True


def build_zip(members):
    """
    Build ZIP bytes from (name, content) pairs; content None marks a directory.

    A third tuple element, when present, is the unix mode of the member.
    """
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
        for member in members:
            name, content = member[0], member[1]
            info = zipfile.ZipInfo(name)
            if content is None:
                info.external_attr = (0o40755 << 16) | 0x10
                archive.writestr(info, b"")
                continue
            mode = member[2] if len(member) > 2 else 0o644
            info.external_attr = (0o100000 | mode) << 16
            info.compress_type = zipfile.ZIP_DEFLATED
            archive.writestr(info, content)
    return buffer.getvalue()


@pytest.fixture
def session():
    return FakeSession()
