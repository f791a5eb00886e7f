import json
import logging
from typing import Any, Dict, Optional

import requests

from study_frontend import config
from study_frontend.misc.schemas import (
    BinaryForm,
    ErrorInfo,
    ParsedBody,
    Request,
)
from study_frontend.services.errors import ErrorClassifier, StudyAPIError
from study_frontend.services.normalizer import ResponseNormalizer

logger = logging.getLogger(__name__)


class TransportResult:
    """
    Outcome of one send(): either a normalized body or an ErrorInfo.
    """

    __slots__ = ("body", "error", "status")

    def __init__(
        self,
        body: Optional[ParsedBody] = None,
        error: Optional[ErrorInfo] = None,
        status: Optional[int] = None,
    ):
        self.body = body
        self.error = error
        self.status = status

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> ParsedBody:
        if self.error is not None:
            raise StudyAPIError(self.error)
        return self.body

    def __repr__(self):
        if self.ok:
            return f"TransportResult(status={self.status}, body={self.body!r})"
        return f"TransportResult(error={self.error!r})"


class TransportClient:
    """
    Issues a single HTTP request per send() and normalizes the answer.

    There is no retry: the POST endpoints generate content and store
    notes, so repeating one can duplicate side effects. No timeout is set
    either, requests' default applies.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
        normalizer: Optional[ResponseNormalizer] = None,
        classifier: Optional[ErrorClassifier] = None,
    ):
        self.base_url = (base_url or config.API_BASE_URL).rstrip("/")
        self.session = session
        self.normalizer = normalizer or ResponseNormalizer()
        self.classifier = classifier or ErrorClassifier()

    def build_headers(self, request: Request) -> Dict[str, str]:
        headers = {}
        # requests writes the multipart boundary itself
        if not request.is_form:
            headers["Content-Type"] = "application/json"
        if request.token:
            headers["Authorization"] = f"Bearer {request.token}"
        return headers

    def build_body(self, request: Request) -> Dict[str, Any]:
        if request.is_form:
            form: BinaryForm = request.body
            files_payload = [
                (f.field, (f.filename, f.content, f.content_type)) for f in form.files
            ]
            return {"files": files_payload, "data": dict(form.fields) or None}
        if request.body is None:
            return {}
        return {"data": json.dumps(request.body)}

    def send(self, request: Request) -> TransportResult:
        url = f"{self.base_url}{request.path}"
        logger.debug(f"REQUEST {request.method} {request.path}")

        http = self.session or requests
        try:
            response = http.request(
                request.method,
                url,
                headers=self.build_headers(request),
                **self.build_body(request),
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"{request.method} {request.path} failed: {e}")
            return TransportResult(error=self.classifier.network(e))

        # Error bodies often carry the only useful diagnostic, so the body
        # is normalized before the status is looked at.
        body = self.normalizer.normalize(response)
        status = response.status_code

        if not 200 <= status < 300:
            error = self.classifier.classify(body, status)
            logger.warning(f"{request.method} {request.path} -> {status}: {error.message}")
            return TransportResult(error=error, status=status)

        logger.debug(f"RESPONSE {request.method} {request.path} -> {status} ({body.kind})")
        return TransportResult(body=body, status=status)

    # Shorthands matching the verbs the endpoint wrappers use

    def get(self, path: str, token: Optional[str] = None) -> TransportResult:
        return self.send(Request(method="GET", path=path, token=token))

    def post(self, path: str, body: Any = None, token: Optional[str] = None) -> TransportResult:
        return self.send(Request(method="POST", path=path, body=body, token=token))

    def put(self, path: str, body: Any = None, token: Optional[str] = None) -> TransportResult:
        return self.send(Request(method="PUT", path=path, body=body, token=token))

    def delete(self, path: str, token: Optional[str] = None) -> TransportResult:
        return self.send(Request(method="DELETE", path=path, token=token))
