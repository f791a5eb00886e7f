"""
Tests for TransportClient: headers, body encoding, single call, and
routing of failures through the classifier.
"""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests

from study_frontend.misc.schemas import BinaryForm, ErrorKind, FormFile, JsonBody, Request, TextBody
from study_frontend.services.errors import StudyAPIError
from study_frontend.services.transport import TransportClient

BASE = "http://backend.test"


@pytest.fixture
def session():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def client(session):
    return TransportClient(base_url=BASE + "/", session=session)


class TestHeaders:
    def test_json_request_with_token(self, client, session, response_factory):
        session.request.return_value = response_factory(body={"ok": True}, content_type="application/json")

        client.send(Request(method="POST", path="/explain", body={"topic": "osmosis"}, token="abc"))

        _, kwargs = session.request.call_args
        assert kwargs["headers"] == {
            "Content-Type": "application/json",
            "Authorization": "Bearer abc",
        }
        assert json.loads(kwargs["data"]) == {"topic": "osmosis"}

    def test_no_token_means_no_authorization_header(self, client, session, response_factory):
        session.request.return_value = response_factory(body={"token": "t"})

        result = client.send(Request(method="POST", path="/auth/login", body={"email": "a@b.c", "password": "pw"}))

        _, kwargs = session.request.call_args
        assert "Authorization" not in kwargs["headers"]
        assert result.ok

    def test_multipart_form_leaves_content_type_to_requests(self, client, session, response_factory):
        session.request.return_value = response_factory(body={"summary": "s"})
        form = BinaryForm(files=[FormFile(filename="doc.pdf", content=b"%PDF-1.4", content_type="application/pdf")])

        client.send(Request(method="POST", path="/summarize", body=form, token="abc"))

        _, kwargs = session.request.call_args
        assert kwargs["headers"] == {"Authorization": "Bearer abc"}
        assert kwargs["files"] == [("file", ("doc.pdf", b"%PDF-1.4", "application/pdf"))]
        assert "json" not in kwargs

    def test_get_without_body_sends_no_data(self, client, session, response_factory):
        session.request.return_value = response_factory(body=[])

        client.get("/notes", "abc")

        args, kwargs = session.request.call_args
        assert args == ("GET", BASE + "/notes")
        assert "data" not in kwargs
        assert kwargs["headers"]["Content-Type"] == "application/json"


class TestSend:
    def test_success_returns_normalized_body(self, client, session, response_factory):
        session.request.return_value = response_factory(body={"answer": "42"}, content_type="application/json")

        result = client.post("/qna", {"question": "?"}, "abc")

        assert result.ok
        assert result.status == 200
        assert result.body == JsonBody(value={"answer": "42"})

    def test_exactly_one_call_even_on_server_error(self, client, session, response_factory):
        session.request.return_value = response_factory(status=503, body="busy")

        result = client.post("/make-mcq", {"text": "cells"}, "abc")

        assert session.request.call_count == 1
        assert not result.ok

    def test_unauthorized_json_error_end_to_end(self, client, session, response_factory):
        session.request.return_value = response_factory(
            status=401, body={"message": "invalid token"}, content_type="application/json"
        )

        result = client.get("/auth/me", "stale")

        assert result.error.kind == ErrorKind.HTTP_STATUS
        assert result.error.status == 401
        assert result.error.message == "invalid token"

    def test_mislabelled_json_error_body_still_yields_message(self, client, session, response_factory):
        session.request.return_value = response_factory(status=400, body={"error": "missing topic"}, content_type="text/html")

        result = client.post("/explain", {}, "abc")

        assert result.error.message == "missing topic"

    def test_text_success_body(self, client, session, response_factory):
        session.request.return_value = response_factory(body="1. Q?\nA) a", content_type="text/plain")

        result = client.post("/make-mcq", {"text": "t"})

        assert result.body == TextBody(text="1. Q?\nA) a")

    @pytest.mark.parametrize(
        "exc",
        [
            requests.exceptions.ConnectionError("connection refused"),
            requests.exceptions.Timeout("read timed out"),
        ],
    )
    def test_transport_failure_is_network_error(self, client, session, exc):
        session.request.side_effect = exc

        result = client.delete("/auth/me", "abc")

        assert result.error.kind == ErrorKind.NETWORK
        assert result.error.status is None
        assert str(exc) in result.error.message
        assert session.request.call_count == 1

    def test_unwrap_raises_study_api_error(self, client, session, response_factory):
        session.request.return_value = response_factory(status=500, body={})

        with pytest.raises(StudyAPIError) as excinfo:
            client.get("/notes", "abc").unwrap()

        assert str(excinfo.value) == "Error 500"


class TestDefaultSession:
    def test_uses_requests_module_without_a_session(self, response_factory):
        client = TransportClient(base_url=BASE)
        with patch("study_frontend.services.transport.requests.request") as request:
            request.return_value = response_factory(body={"message": "bye"})

            result = client.delete("/auth/me", "abc")

        request.assert_called_once()
        assert request.call_args[0] == ("DELETE", BASE + "/auth/me")
        assert result.body == JsonBody(value={"message": "bye"})
