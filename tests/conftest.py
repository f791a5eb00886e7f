import json

import pytest
import requests


def make_response(status=200, body=b"", content_type=None, headers=None):
    """Builds a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status
    if isinstance(body, (dict, list)):
        body = json.dumps(body)
    if isinstance(body, str):
        body = body.encode("utf-8")
    response._content = body
    response.encoding = "utf-8"
    if content_type is not None:
        response.headers["Content-Type"] = content_type
    for key, value in (headers or {}).items():
        response.headers[key] = value
    response.url = "http://backend.test/"
    return response


class BrokenBodyResponse(requests.Response):
    """A response whose body stream dies while being read."""

    @property
    def content(self):
        raise requests.exceptions.ChunkedEncodingError("connection broken mid-body")


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def broken_response():
    response = BrokenBodyResponse()
    response.status_code = 200
    response.headers["Content-Type"] = "application/json"
    return response
